"""
Stage 2: Reconciler.

Merges the Interface declarations with the Description entries of a page.
Both lists are written by hand and drift apart: entries can document several
names at once, name things that were never declared, or appear twice. The
result keeps every declaration in its original order and records each
mismatch in ReconciliationDiagnostics instead of failing.

Pipeline position: Stage 2 of 3 (Extractor → Reconciler → Emitter).
Input:  PageInfo.declarations + PageInfo.doc_entries
Output: Reconciliation (annotated declarations + diagnostics)
"""

from typing import Iterable, Optional

from .schemas import AnnotatedDeclaration, DocEntry, Reconciliation, ReconciliationDiagnostics
from .tokenizer import STARTER_KEYWORDS, canonical_name, leading_word
from .logger import get_module_logger

logger = get_module_logger("reconciler")


class Reconciler:
    """Pairs declarations with documentation prose by canonical name."""

    def __init__(self, keywords: Iterable[str] = STARTER_KEYWORDS):
        self.keywords = frozenset(keywords)

    def build_doc_map(
        self, doc_entries: Iterable[DocEntry]
    ) -> tuple[dict[str, Optional[str]], dict[str, Optional[str]]]:
        """
        Fold documentation entries into a name → prose map.

        Returns:
            (doc_map, duplicate) where duplicate holds the prose each repeated
            name had before a later entry replaced it.
        """
        doc_map: dict[str, Optional[str]] = {}
        duplicate: dict[str, Optional[str]] = {}

        for entry in doc_entries:
            first = entry.names[0]
            first_name = canonical_name(first, self.keywords)
            if first_name in doc_map:
                duplicate[first_name] = doc_map[first_name]

            if len(entry.names) == 1:
                if leading_word(first) in self.keywords:
                    doc_map[first_name] = entry.prose
                else:
                    # A term like "f (x, y)" is a usage example; keep it with the prose
                    doc_map[first_name] = first if entry.prose is None else f"{first} {entry.prose}"
            else:
                doc_map[first_name] = entry.prose
                for other in entry.names[1:]:
                    doc_map[canonical_name(other, self.keywords)] = f"See {first_name}."

        return doc_map, duplicate

    def reconcile(self, declarations: Iterable[str],
                  doc_entries: Iterable[DocEntry]) -> Reconciliation:
        """
        Annotate each declaration with its documentation.

        Raises:
            NameExtractionError: if a declaration or term has no usable name
        """
        doc_map, duplicate = self.build_doc_map(doc_entries)
        used: set[str] = set()
        used_multiple: set[str] = set()
        annotated = []

        for declaration in declarations:
            name = canonical_name(declaration, self.keywords)
            if name in used:
                used_multiple.add(name)
            used.add(name)
            annotated.append(AnnotatedDeclaration(declaration=declaration,
                                                  prose=doc_map.get(name)))

        unused = {name: prose for name, prose in doc_map.items() if name not in used}

        diagnostics = ReconciliationDiagnostics(
            unused=unused,
            duplicate=duplicate,
            used_multiple=used_multiple,
        )
        logger.debug(
            f"Reconciled {len(annotated)} declarations: {len(unused)} unused, "
            f"{len(duplicate)} duplicate, {len(used_multiple)} used multiple times"
        )
        return Reconciliation(declarations=annotated, diagnostics=diagnostics)


def reconcile(declarations: Iterable[str], doc_entries: Iterable[DocEntry]) -> Reconciliation:
    """Convenience function to reconcile with the default keyword set."""
    return Reconciler().reconcile(declarations, doc_entries)
