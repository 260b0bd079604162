"""
Cell value classification.

Decides whether cell text is a number under Korean financial-statement
conventions: comma thousands grouping, parenthesized negatives and a lone
dash for zero. Anything that does not match cleanly stays literal text.
"""

import re
from typing import Union

FULL_WIDTH_SPACE = "　"
ZERO_DASH = "-"

CellValue = Union[int, float, str]

_PAREN_NEGATIVE = re.compile(r"^\(([0-9,]+)\)$")
_INTEGER = re.compile(r"^-?[0-9,]+$")
_DECIMAL = re.compile(r"^(-?[0-9,]+)\.[0-9]+$")
_GROUP_HEAD = re.compile(r"^\d{1,3}$")
_GROUP_TAIL = re.compile(r"^\d{3}$")


def is_valid_grouping(text: str) -> bool:
    """
    Check comma thousands grouping.

    Valid: ``1,234`` and ``12,345,678``. Invalid: ``6,25,29`` and ``1,23``.
    A string without commas is always valid.
    """
    if "," not in text:
        return True
    if text.startswith("-"):
        text = text[1:]
    head, *tail = text.split(",")
    if not _GROUP_HEAD.match(head):
        return False
    return all(_GROUP_TAIL.match(group) for group in tail)


def classify_cell_text(text: str) -> tuple[CellValue, bool]:
    """
    Classify cell text as numeric or literal.

    Args:
        text: Raw cell text

    Returns:
        Tuple of (value, is_numeric). Literal values are returned trimmed.
    """
    if not text:
        return text, False
    cleaned = text.strip()
    if not cleaned or cleaned == FULL_WIDTH_SPACE:
        return cleaned, False

    if cleaned == ZERO_DASH:
        return 0, True

    # (1,234,567)
    match = _PAREN_NEGATIVE.match(cleaned)
    if match:
        inner = match.group(1)
        digits = inner.replace(",", "")
        if not digits or not is_valid_grouping(inner):
            return cleaned, False
        return -int(digits), True

    # 1,234,567 / -1,234,567
    if _INTEGER.match(cleaned):
        digits = cleaned.replace(",", "")
        if digits in ("", "-") or not is_valid_grouping(cleaned):
            return cleaned, False
        return int(digits), True

    # 1,234.56
    match = _DECIMAL.match(cleaned)
    if match:
        int_part = match.group(1).lstrip("-")
        if not is_valid_grouping(int_part):
            return cleaned, False
        return float(cleaned.replace(",", "")), True

    return cleaned, False
