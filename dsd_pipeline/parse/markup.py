"""
Markup helpers for DSD document trees.

DSD markup uses upper-case tag and attribute names. Depending on the
BeautifulSoup builder in use those names may arrive lower-cased, so every
lookup here compares names case-insensitively.
"""

import re
from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup, Tag

# Custom line-break entity used inside DSD text content
CR_MARKER = "&cr;"

_CR_PATTERN = re.compile(re.escape(CR_MARKER))


def normalize_line_breaks(text: str) -> str:
    """Replace the literal ``&cr;`` marker with a real newline."""
    return _CR_PATTERN.sub("\n", text)


def tag_name(node) -> str:
    """Upper-cased tag name, or empty string for non-element nodes."""
    if isinstance(node, Tag) and node.name:
        return node.name.upper()
    return ""


def is_tag(node, *names: str) -> bool:
    """Check whether node is an element with one of the given tag names."""
    return tag_name(node) in names


def element_children(node: Optional[Tag]) -> list[Tag]:
    """Direct element children of node, in document order."""
    if node is None:
        return []
    return [child for child in node.children if isinstance(child, Tag)]


def find_child(node: Optional[Tag], name: str) -> Optional[Tag]:
    """First direct child with the given tag name."""
    for child in element_children(node):
        if tag_name(child) == name:
            return child
    return None


def find_children(node: Optional[Tag], name: str) -> list[Tag]:
    """All direct children with the given tag name."""
    return [child for child in element_children(node) if tag_name(child) == name]


def children_excluding(node: Optional[Tag], names: Iterable[str]) -> list[Tag]:
    """Direct element children whose tag name is not in names."""
    excluded = set(names)
    return [child for child in element_children(node) if tag_name(child) not in excluded]


def get_attr(node: Optional[Tag], name: str, default: str = "") -> str:
    """Attribute value looked up case-insensitively."""
    if node is None:
        return default
    wanted = name.lower()
    for key, value in node.attrs.items():
        if key.lower() == wanted:
            # Multi-valued attributes (e.g. class) come back as lists
            if isinstance(value, list):
                return " ".join(value)
            return value
    return default


def get_int_attr(node: Optional[Tag], name: str, default: int) -> int:
    """Integer attribute value, falling back to default when absent or non-numeric."""
    raw = get_attr(node, name, "").strip()
    match = re.match(r"[+-]?\d+", raw)
    if not match:
        return default
    return int(match.group(0))


def get_text(node: Union[Tag, BeautifulSoup, None]) -> str:
    """
    Concatenated text of node and all descendants.

    Any ``&cr;`` marker that survived parsing is turned into a newline.
    """
    if node is None:
        return ""
    return normalize_line_breaks(node.get_text())
