"""
Text normalization and the keyword-driven declaration splitter.

The reference pages render a whole interface as one inline run of text, so
declarations are separated only by spaces. tokenize_declarations() restores
one declaration per line by starting a new line at each declaration keyword.

This is a lexical heuristic, not a parser: it is only correct as long as no
keyword below is ever used as an ordinary identifier.
"""

import re
from typing import Iterable, Optional

from .exceptions import NameExtractionError

# Matches any run of Unicode whitespace, including &nbsp; and newlines
WHITESPACE_PATTERN = re.compile(r'\s+')

# Words that begin a new declaration
STARTER_KEYWORDS = frozenset([
    "type",
    "eqtype",
    "datatype",
    "exception",
    "val",
    "structure",
    "signature",
    "functor",
    "include",
])

# "where type", "and type" and "sharing type" continue the previous declaration
PRECEDES_TYPE = frozenset(["where", "and", "sharing"])

# Closes an embedded sig ... end block; always gets a line of its own
END_KEYWORD = "end"

TYPE_VARIABLE_MARKER = "'"


def normalize_text(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def _starts_declaration(token: str, prev: Optional[str]) -> bool:
    if token == END_KEYWORD:
        return True
    if token not in STARTER_KEYWORDS:
        return False
    return token != "type" or prev not in PRECEDES_TYPE


def tokenize_declarations(text: str) -> list[str]:
    """
    Split a normalized run of declarations into one declaration per line.

    Always returns at least one line; an empty input gives [""].
    """
    lines = []
    current: list[str] = []
    prev = None
    for token in text.split(" "):
        if _starts_declaration(token, prev):
            if current:
                lines.append(" ".join(current))
            current = [token]
        else:
            current.append(token)
        prev = token
    lines.append(" ".join(current))
    return lines


def canonical_name(text: str, keywords: Iterable[str] = STARTER_KEYWORDS) -> str:
    """
    Return the identifier a declaration or documented term is about.

    That is the first word which is neither a keyword nor a type variable:
    "val map : ('a -> 'b) -> ..." gives "map", "type 'a t" gives "t".

    Raises:
        NameExtractionError: if every word is a keyword or type variable.
    """
    keywords = frozenset(keywords)
    for word in text.split(" "):
        if word and word not in keywords and not word.startswith(TYPE_VARIABLE_MARKER):
            return word
    raise NameExtractionError("couldn't get name", offending_text=text)


def leading_word(text: str) -> str:
    return text.split(" ")[0]
