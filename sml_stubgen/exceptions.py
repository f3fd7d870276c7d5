"""
Custom exceptions for the stub generator.

Error philosophy:
  - StructureError → FAIL PAGE: the page's markup breaks an assumption the
    merge step relies on, so that page produces no stub.
  - NameExtractionError → FAIL PAGE: a declaration or documented name has no
    identifier left once keywords and type variables are skipped.
  - PageProcessingError → FAIL RUN: only raised by the batch driver in strict mode.

Data-quality problems (missing sections, stray markup, documentation that does
not line up with the interface) are not exceptions at all; they travel as
PageWarning records on the result objects.
"""

from typing import Optional


class StubgenError(Exception):
    """Base exception for all stub generator errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL PAGE: the batch driver records it and moves on ---

class StructureError(StubgenError):
    """
    Raised when a page's markup violates a structural invariant.

    Examples: a section header whose next sibling is not the expected
    container, a definition term with no description after it, an empty
    synopsis block.
    """

    def __init__(
        self,
        message: str,
        page: Optional[str] = None,
        offending_text: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.page = page
        # Normalized text of the node that broke the invariant, for diagnosis
        self.offending_text = offending_text

    def __str__(self) -> str:
        prefix = f"{self.page}: " if self.page else ""
        suffix = f" (at: {self.offending_text!r})" if self.offending_text else ""
        return f"{prefix}{self.message}{suffix}"


class NameExtractionError(StructureError):
    """Raised when no canonical name can be found in a declaration string."""


# --- FAIL RUN: strict mode only ---

class PageProcessingError(StubgenError):
    """Raised by the batch driver in strict mode when a page fails."""

    def __init__(
        self,
        message: str,
        page: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.page = page
