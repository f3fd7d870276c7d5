"""
File-based page store: reads cached reference pages and writes stub files.

Fetching pages over the network is not done here; the cache directory is
expected to hold one HTML file per manual page, e.g. as saved by a crawler.
"""

import re
from pathlib import Path
from typing import Iterable, Optional, Union

from .document import index_links
from .exceptions import StubgenError
from .schemas import Page, SelectorList, StubResult
from .logger import get_module_logger

logger = get_module_logger("page_store")

HTML_GLOBS = ("*.html", "*.htm")

# WHATWG encoding spec: browsers decode these labels with a superset charset.
# https://encoding.spec.whatwg.org/#names-and-labels
WHATWG_CHARSET_MAP = {
    'iso-8859-1': 'windows-1252',
    'iso8859-1': 'windows-1252',
    'latin-1': 'windows-1252',
    'latin1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
}


def detect_charset(raw_bytes: bytes) -> str:
    """
    Charset declared by a <meta> tag in the first 2KB, or 'utf-8'.

    Older manual pages declare ISO-8859-1 and use &nbsp;-style bytes, so
    decoding them as UTF-8 would garble the prose.
    """
    head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

    # <meta charset="..."> or <meta http-equiv="Content-Type" content="...; charset=...">
    m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
    if not m:
        return 'utf-8'
    charset = m.group(1).strip().lower()
    return WHATWG_CHARSET_MAP.get(charset, charset)


def read_html(path: Path) -> str:
    raw_bytes = path.read_bytes()
    charset = detect_charset(raw_bytes)
    try:
        return raw_bytes.decode(charset, errors='replace')
    except LookupError:
        logger.warning(f"{path.name}: unknown charset '{charset}', decoding as utf-8")
        return raw_bytes.decode('utf-8', errors='replace')


class PageStore:
    """
    Directory of cached HTML pages.

    Page names are file names relative to the cache directory, so they match
    the relative links found on the library's index page.
    """

    def __init__(self, cache_dir: Union[str, Path], output_suffix: str = ".sml"):
        self.cache_dir = Path(cache_dir)
        self.output_suffix = output_suffix
        if not self.cache_dir.is_dir():
            raise StubgenError(f"Page cache directory not found: {self.cache_dir}",
                               details={"cache_dir": str(self.cache_dir)})

    def page_names(self) -> list[str]:
        """All cached page names, sorted."""
        names = set()
        for pattern in HTML_GLOBS:
            for path in self.cache_dir.rglob(pattern):
                names.add(path.relative_to(self.cache_dir).as_posix())
        return sorted(names)

    def linked_names(self, index_name: str, selectors: SelectorList) -> list[str]:
        """Page names linked from an index page in the cache, in link order."""
        html = read_html(self.cache_dir / index_name)
        links = index_links(html, selectors)
        logger.info(f"{index_name}: {len(links)} linked pages")
        return links

    def read_pages(
        self,
        index_name: Optional[str] = None,
        selectors: Optional[SelectorList] = None
    ) -> list[Page]:
        """
        Load cached pages.

        With an index page and selectors, only pages linked from the index are
        loaded (the index itself is never a page); links with no cached file
        are logged and skipped.
        """
        if index_name is not None and selectors is not None and not selectors.is_empty():
            names = [n for n in self.linked_names(index_name, selectors) if n != index_name]
        else:
            names = [n for n in self.page_names() if n != index_name]

        pages = []
        for name in names:
            path = self.cache_dir / name
            if not path.is_file():
                logger.warning(f"{name}: linked from index but not cached, skipping")
                continue
            pages.append(Page(name=name, text=read_html(path)))

        logger.info(f"Loaded {len(pages)} pages from {self.cache_dir}")
        return pages

    def write_stubs(self, results: Iterable[StubResult], out_dir: Union[str, Path]) -> list[Path]:
        """Write each stub to <out_dir>/<name><suffix>. Returns the written paths."""
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for result in results:
            out_file = out_dir / f"{result.name}{self.output_suffix}"
            out_file.parent.mkdir(parents=True, exist_ok=True)
            out_file.write_text(result.text, encoding='utf-8')
            written.append(out_file)

        logger.info(f"Wrote {len(written)} stub files to {out_dir}")
        return written
