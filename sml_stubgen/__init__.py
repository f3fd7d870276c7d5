"""
SML Stub Generator

Turns HTML reference-manual pages into interface stub files, each declaration
annotated with the prose that documents it.
- Extractor: reads the Synopsis, Interface and Description sections
- Reconciler: pairs declarations with documentation entries
- Emitter: writes nested, word-wrapped stub text

Public API surface:
  Pipeline classes: Extractor, Reconciler, Emitter, StubGenerator
  Data models: Page, PageInfo, DocEntry, StubFile, StubResult, PageWarning
  Error types: StructureError (page fails), PageProcessingError (strict run fails)
  I/O: PageStore
"""

# --- Pipeline stage classes ---
from .extractor import Extractor
from .reconciler import Reconciler
from .emitter import Emitter
from .main import StubGenerator, generate_stub

# --- Text helpers shared by the stages ---
from .tokenizer import normalize_text, tokenize_declarations, canonical_name

# --- Data models (passed between stages and returned to callers) ---
from .schemas import (
    Page,
    PageInfo,
    DocEntry,
    AnnotatedDeclaration,
    ReconciliationDiagnostics,
    StubFile,
    StubResult,
    BatchResult,
    PageWarning,
    WarningKind,
)

# --- Configuration ---
from .config import StubgenConfig, load_config

# --- Exceptions ---
from .exceptions import StubgenError, StructureError, NameExtractionError, PageProcessingError

# --- Cached pages in, stub files out ---
from .page_store import PageStore

__version__ = "0.1.0"
__all__ = [
    "Extractor",
    "Reconciler",
    "Emitter",
    "StubGenerator",
    "generate_stub",
    "normalize_text",
    "tokenize_declarations",
    "canonical_name",
    "Page",
    "PageInfo",
    "DocEntry",
    "AnnotatedDeclaration",
    "ReconciliationDiagnostics",
    "StubFile",
    "StubResult",
    "BatchResult",
    "PageWarning",
    "WarningKind",
    "StubgenConfig",
    "load_config",
    "StubgenError",
    "StructureError",
    "NameExtractionError",
    "PageProcessingError",
    "PageStore",
]
