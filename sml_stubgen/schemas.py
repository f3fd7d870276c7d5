"""
Pydantic schemas defining the contracts between pipeline stages.

Data flow for one page:
  Page → Extractor → PageInfo
  PageInfo.declarations + PageInfo.doc_entries → Reconciler → Reconciliation
  PageInfo + Reconciliation → StubFile → Emitter → StubResult

Every model here is page-scoped: nothing references another page.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# --- Selector support ---
# Index pages are scanned for links with CSS selectors (BeautifulSoup) or
# XPath expressions (lxml); some layouts are only reachable with one of them.

class SelectorList(BaseModel):
    """List of selectors supporting both CSS and XPath."""
    css: list[str] = Field(default_factory=list)
    xpath: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.css and not self.xpath


# --- Diagnostics ---

class WarningKind(str, Enum):
    """Kinds of non-fatal data-quality issues found on a page."""
    MISSING_SYNOPSIS = "missing-synopsis"
    MISSING_SIGNATURE = "missing-signature"
    MISSING_INTERFACE = "missing-interface"
    MISSING_DESCRIPTION = "missing-description"
    UNEXPECTED_MARKUP = "unexpected-markup"
    DECLARATIONS_WITHOUT_SIGNATURE = "declarations-without-signature"
    UNBALANCED_NESTING = "unbalanced-nesting"
    UNUSED_DOC = "unused-doc"
    DUPLICATE_DOC = "duplicate-doc"
    MULTIPLY_USED_DOC = "multiply-used-doc"


class PageWarning(BaseModel):
    """A recoverable issue, keyed by the page it was found on."""
    page: str
    kind: WarningKind
    message: str
    data: dict = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.page}: {self.message}"


# --- Input boundary ---

class Page(BaseModel):
    """One fetched reference-manual page."""
    name: str     # Unique within a run, used as the output key
    text: str     # Raw HTML


# --- Extractor output ---

class DocEntry(BaseModel):
    """
    One dt/dd group from a Description section.

    Several consecutive <dt> terms may share a single <dd>; the first term is
    the one the prose really describes, the others point back to it.
    """
    names: list[str] = Field(min_length=1)
    prose: Optional[str] = None    # Empty <dd> text is stored as None


class PageInfo(BaseModel):
    """Everything the Extractor pulled out of one page."""
    name: str
    signature_name: Optional[str] = None    # Whole synopsis line, e.g. "signature LIST"
    auxiliary_names: list[str] = Field(default_factory=list)
    description_paragraphs: list[str] = Field(default_factory=list)
    declarations: list[str] = Field(default_factory=list)   # Emission order
    doc_entries: list[DocEntry] = Field(default_factory=list)
    warnings: list[PageWarning] = Field(default_factory=list)


# --- Reconciler output ---

class AnnotatedDeclaration(BaseModel):
    """A declaration line paired with the prose documenting it, if any."""
    declaration: str
    prose: Optional[str] = None


class ReconciliationDiagnostics(BaseModel):
    """Mismatches between the Interface and Description sections."""
    unused: dict[str, Optional[str]] = Field(default_factory=dict)     # Documented, never declared
    duplicate: dict[str, Optional[str]] = Field(default_factory=dict)  # Shadowed earlier prose
    used_multiple: set[str] = Field(default_factory=set)               # Declared more than once

    def is_empty(self) -> bool:
        return not self.unused and not self.duplicate and not self.used_multiple


class Reconciliation(BaseModel):
    declarations: list[AnnotatedDeclaration] = Field(default_factory=list)
    diagnostics: ReconciliationDiagnostics = Field(default_factory=ReconciliationDiagnostics)


# --- Emitter input/output ---

class StubFile(BaseModel):
    """The reconciled content of one page, ready to be serialized."""
    name: str
    description_paragraphs: list[str] = Field(default_factory=list)
    signature_name: Optional[str] = None
    declarations: list[AnnotatedDeclaration] = Field(default_factory=list)
    auxiliary_names: list[str] = Field(default_factory=list)
    diagnostics: ReconciliationDiagnostics = Field(default_factory=ReconciliationDiagnostics)


class StubResult(BaseModel):
    """Serialized stub text plus every warning raised while producing it."""
    name: str
    text: str
    warnings: list[PageWarning] = Field(default_factory=list)
    diagnostics: ReconciliationDiagnostics = Field(default_factory=ReconciliationDiagnostics)


class BatchResult(BaseModel):
    """Output of a batch run: successful stubs and per-page failures."""
    stubs: list[StubResult] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)   # page name → error message
