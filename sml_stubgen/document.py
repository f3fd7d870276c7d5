"""
HTML adapter: the only module that handles BeautifulSoup/lxml objects.

Reference pages are parsed once and exposed as Node objects tagged with a
small NodeKind set. The Extractor walks Nodes and never looks at raw markup.
"""

from enum import Enum
from typing import Optional
from bs4 import BeautifulSoup, Tag
from lxml import etree
from soupsieve import SelectorSyntaxError

from .schemas import SelectorList
from .tokenizer import normalize_text
from .logger import get_module_logger

logger = get_module_logger("document")


class NodeKind(Enum):
    """Element kinds the Extractor cares about; everything else is OTHER."""
    HEADER = "header"
    CONTAINER = "container"               # <blockquote> holding inline declarations
    DEFINITION_LIST = "definition_list"   # <dl> holding dt/dd documentation
    PARAGRAPH = "paragraph"
    DIVIDER = "divider"
    TERM = "term"
    DESCRIPTION = "description"
    OTHER = "other"


_KIND_BY_TAG = {
    'h1': NodeKind.HEADER,
    'h2': NodeKind.HEADER,
    'h3': NodeKind.HEADER,
    'h4': NodeKind.HEADER,
    'h5': NodeKind.HEADER,
    'h6': NodeKind.HEADER,
    'blockquote': NodeKind.CONTAINER,
    'dl': NodeKind.DEFINITION_LIST,
    'p': NodeKind.PARAGRAPH,
    'hr': NodeKind.DIVIDER,
    'dt': NodeKind.TERM,
    'dd': NodeKind.DESCRIPTION,
}


class Node:
    """A parsed HTML element seen through its NodeKind."""

    def __init__(self, element: Tag):
        self._element = element

    @property
    def tag(self) -> str:
        return self._element.name

    @property
    def kind(self) -> NodeKind:
        return _KIND_BY_TAG.get(self.tag, NodeKind.OTHER)

    @property
    def text(self) -> str:
        """Full text of the element and its descendants, whitespace-normalized."""
        return normalize_text(self._element.get_text())

    def next_sibling(self) -> Optional["Node"]:
        """Next element sibling, skipping text and comments."""
        for sibling in self._element.next_siblings:
            if isinstance(sibling, Tag):
                return Node(sibling)
        return None

    def children(self) -> list["Node"]:
        """Element children in document order."""
        return [Node(child) for child in self._element.children if isinstance(child, Tag)]

    def __repr__(self) -> str:
        return f"Node({self.tag!r}, {self.kind.name})"


class HtmlDocument:
    """A parsed reference page."""

    def __init__(self, soup: BeautifulSoup, header_tag: str = 'h4'):
        self._soup = soup
        self.header_tag = header_tag

    @classmethod
    def parse(cls, html: str, header_tag: str = 'h4') -> "HtmlDocument":
        # html5lib repairs markup the way a browser does, which matters for
        # hand-written pages with unclosed <dt>/<dd>/<p> tags
        return cls(BeautifulSoup(html, 'html5lib'), header_tag)

    def headers(self) -> list[Node]:
        return [Node(elem) for elem in self._soup.find_all(self.header_tag)]

    def find_header(self, title: str) -> Optional[Node]:
        """First section header whose normalized text equals title."""
        for header in self.headers():
            if header.text == title:
                return header
        return None


def index_links(html: str, selectors: SelectorList) -> list[str]:
    """
    Collect link targets from an index page.

    CSS selectors run on BeautifulSoup, XPath expressions on lxml. XPath may
    select elements (their href is used) or attribute values directly.
    Fragments are stripped, empty targets skipped, and duplicates dropped
    while keeping first-seen order.
    """
    hrefs: list[str] = []
    if not html.strip():
        return hrefs

    if selectors.css:
        soup = BeautifulSoup(html, 'html5lib')
        for css in selectors.css:
            try:
                elems = soup.select(css)
            except SelectorSyntaxError as e:
                logger.warning(f"Invalid CSS '{css}': {e}")
                continue
            for elem in elems:
                hrefs.append(elem.get('href', ''))

    if selectors.xpath:
        tree = etree.HTML(html)
        for xpath in selectors.xpath:
            if tree is None:
                break
            try:
                matches = tree.xpath(xpath)
            except etree.XPathError as e:
                logger.warning(f"Invalid XPath '{xpath}': {e}")
                continue
            # Numeric and boolean expressions such as count(//a) select nothing
            if not isinstance(matches, list):
                logger.warning(f"XPath '{xpath}' did not select nodes, ignoring")
                continue
            for match in matches:
                if isinstance(match, str):
                    hrefs.append(str(match))
                elif hasattr(match, 'get'):
                    hrefs.append(match.get('href', ''))

    links = []
    seen = set()
    for href in hrefs:
        target = href.split('#', 1)[0].strip()
        if target and target not in seen:
            seen.add(target)
            links.append(target)
    return links
