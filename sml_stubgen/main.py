"""
Batch driver for the stub generator.

Runs the three-stage pipeline (Extractor → Reconciler → Emitter) for each
page. Pages share no state, so one page failing never affects another: the
failure is logged and recorded, and the batch carries on unless strict mode
is on.
"""

import re
from typing import Iterable, Optional

from .config import StubgenConfig, load_config
from .emitter import Emitter
from .exceptions import PageProcessingError, StructureError, StubgenError
from .extractor import Extractor
from .reconciler import Reconciler
from .schemas import BatchResult, Page, StubFile, StubResult
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")

# Page names come straight from URLs or file names
HTML_SUFFIX_PATTERN = re.compile(r'\.html?$')


def output_name(page_name: str) -> str:
    """Output key for a page: its name without the .html/.htm suffix."""
    return HTML_SUFFIX_PATTERN.sub('', page_name)


class StubGenerator:
    """
    Main orchestrator for stub generation.

    Coordinates the three-stage pipeline:
    1. Extractor: reads Synopsis, Interface and Description sections
    2. Reconciler: pairs declarations with documentation prose
    3. Emitter: formats the result as stub text
    """

    def __init__(
        self,
        config: Optional[StubgenConfig] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.config = config or load_config()
        self.extractor = Extractor(header_tag=self.config.header_tag)
        self.reconciler = Reconciler()
        self.emitter = Emitter(self.config)

    def process_page(self, page: Page) -> StubResult:
        """
        Generate the stub for one page.

        Raises:
            StructureError: if the page's markup is malformed
        """
        name = output_name(page.name)
        try:
            info = self.extractor.extract(Page(name=name, text=page.text))
            reconciliation = self.reconciler.reconcile(info.declarations, info.doc_entries)
        except StructureError as e:
            # Name extraction has no page context of its own
            if e.page is None:
                e.page = name
            raise

        stub = StubFile(
            name=name,
            description_paragraphs=info.description_paragraphs,
            signature_name=info.signature_name,
            declarations=reconciliation.declarations,
            auxiliary_names=info.auxiliary_names,
            diagnostics=reconciliation.diagnostics,
        )
        result = self.emitter.emit(stub)

        # Extraction warnings come first so they read in pipeline order
        result.warnings[:0] = info.warnings
        return result

    def process_pages(self, pages: Iterable[Page]) -> BatchResult:
        """
        Generate stubs for every page.

        Raises:
            StubgenError: if two pages map to the same output name
            PageProcessingError: in strict mode, for the first failing page
        """
        batch = BatchResult()
        seen: set[str] = set()

        for page in pages:
            name = output_name(page.name)
            if name in seen:
                raise StubgenError(f"duplicate page name: {name}", details={"page": page.name})
            seen.add(name)

            try:
                batch.stubs.append(self.process_page(page))
            except StubgenError as e:
                logger.error(f"Failed to process {name}: {e}")
                if self.config.strict:
                    raise PageProcessingError(str(e), page=name) from e
                batch.failures[name] = str(e)

        logger.info(f"Complete: {len(batch.stubs)} stubs, {len(batch.failures)} failures")
        return batch


def generate_stub(html: str, name: str = "page",
                  config: Optional[StubgenConfig] = None) -> StubResult:
    """Convenience function to generate a stub from an HTML string."""
    return StubGenerator(config=config or StubgenConfig()).process_page(Page(name=name, text=html))
