"""
Stage 1: Page Extractor.

Reads the three fixed sections of a reference page and returns a PageInfo:

  Synopsis     → signature name, auxiliary structure/functor names, and the
                 description paragraphs that follow up to the first <hr>
  Interface    → the flat list of declarations, one per line
  Description  → dt/dd documentation entries

Pipeline position: Stage 1 of 3 (Extractor → Reconciler → Emitter).
Input:  Page (name + raw HTML)
Output: PageInfo with warnings for every recoverable oddity

A missing section is a warning. A section whose markup breaks the expected
shape raises StructureError, which fails this page only.
"""

from typing import Optional

from .document import HtmlDocument, Node, NodeKind
from .exceptions import StructureError
from .schemas import DocEntry, Page, PageInfo, PageWarning, WarningKind
from .tokenizer import leading_word, tokenize_declarations
from .logger import get_module_logger

logger = get_module_logger("extractor")

SYNOPSIS = "Synopsis"
INTERFACE = "Interface"
DESCRIPTION = "Description"

SIGNATURE_KEYWORD = "signature"


class Extractor:
    """Extracts signature declarations and documentation from one page."""

    def __init__(self, header_tag: str = 'h4'):
        self.header_tag = header_tag

    def extract(self, page: Page) -> PageInfo:
        """
        Extract a PageInfo from a page.

        Raises:
            StructureError: if a section is present but malformed
        """
        logger.debug(f"{page.name}: extracting")
        document = HtmlDocument.parse(page.text, self.header_tag)
        info = PageInfo(name=page.name)

        self._extract_synopsis(document, info)
        self._extract_interface(document, info)
        self._extract_description(document, info)

        logger.debug(
            f"{page.name}: {len(info.declarations)} declarations, "
            f"{len(info.doc_entries)} doc entries, {len(info.warnings)} warnings"
        )
        return info

    # --- Synopsis ---

    def _extract_synopsis(self, document: HtmlDocument, info: PageInfo) -> None:
        header = document.find_header(SYNOPSIS)
        if header is None:
            self._warn(info, WarningKind.MISSING_SYNOPSIS, "missing synopsis")
            return

        container = self._expect_sibling(info, header, NodeKind.CONTAINER)
        synopsis = tokenize_declarations(container.text)
        first = synopsis.pop(0)
        if not first:
            raise StructureError("empty synopsis", page=info.name)

        if leading_word(first) == SIGNATURE_KEYWORD:
            info.signature_name = first
        else:
            self._warn(info, WarningKind.MISSING_SIGNATURE,
                       "missing signature in synopsis", {"first_line": first})
        info.auxiliary_names = synopsis

        # Paragraphs between the synopsis block and the <hr> describe the page
        current = container
        while True:
            current = current.next_sibling()
            if current is None:
                raise StructureError("synopsis not terminated by a divider",
                                     page=info.name, offending_text=container.text)
            if current.kind is NodeKind.PARAGRAPH:
                if current.text:
                    info.description_paragraphs.append(current.text)
            elif current.kind is NodeKind.DIVIDER:
                break
            else:
                self._warn(info, WarningKind.UNEXPECTED_MARKUP,
                           f"non-p non-hr <{current.tag}> in synopsis, ignoring",
                           {"section": SYNOPSIS, "tag": current.tag})

    # --- Interface ---

    def _extract_interface(self, document: HtmlDocument, info: PageInfo) -> None:
        header = document.find_header(INTERFACE)
        if header is None:
            self._warn(info, WarningKind.MISSING_INTERFACE, "missing interface")
            return

        container = self._expect_sibling(info, header, NodeKind.CONTAINER)
        # An empty blockquote tokenizes to [""], which is no declaration at all
        info.declarations = [line for line in tokenize_declarations(container.text) if line]

    # --- Description ---

    def _extract_description(self, document: HtmlDocument, info: PageInfo) -> None:
        header = document.find_header(DESCRIPTION)
        if header is None:
            self._warn(info, WarningKind.MISSING_DESCRIPTION, "missing description")
            return

        definitions = self._expect_sibling(info, header, NodeKind.DEFINITION_LIST)
        pending: list[str] = []
        for child in definitions.children():
            if child.kind is NodeKind.TERM:
                term = child.text
                if term:
                    pending.append(term)
            elif child.kind is NodeKind.DESCRIPTION:
                if not pending:
                    raise StructureError("description with no preceding term",
                                         page=info.name, offending_text=child.text)
                info.doc_entries.append(DocEntry(names=pending, prose=child.text or None))
                pending = []
            else:
                self._warn(info, WarningKind.UNEXPECTED_MARKUP,
                           f"non-dt non-dd <{child.tag}> in description, ignoring",
                           {"section": DESCRIPTION, "tag": child.tag})

        if pending:
            raise StructureError("trailing term with no description",
                                 page=info.name, offending_text=" | ".join(pending))

    # --- Helpers ---

    def _expect_sibling(self, info: PageInfo, header: Node, kind: NodeKind) -> Node:
        """The node right after a section header, which must be of the given kind."""
        sibling = header.next_sibling()
        if sibling is None or sibling.kind is not kind:
            found = "nothing" if sibling is None else f"<{sibling.tag}>"
            raise StructureError(
                f"expected a {kind.value} after '{header.text}' header, found {found}",
                page=info.name,
                offending_text=sibling.text if sibling is not None else header.text,
            )
        return sibling

    def _warn(self, info: PageInfo, kind: WarningKind, message: str,
              data: Optional[dict] = None) -> None:
        warning = PageWarning(page=info.name, kind=kind, message=message, data=data or {})
        logger.warning(str(warning))
        info.warnings.append(warning)


def extract(page: Page, header_tag: str = 'h4') -> PageInfo:
    """Convenience function to extract one page."""
    return Extractor(header_tag=header_tag).extract(page)
