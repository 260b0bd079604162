"""
USERMARK style decoder.

A USERMARK is a whitespace-delimited list of compact style tokens, e.g.
``"B F-10 0xFF0000"``. Tokens are order-independent and the last token
wins for each field. Unknown tokens are ignored.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

BOLD_ON = "B"
BOLD_OFF = "!B"
FONT_SIZE_PREFIX = "F-"
FONT_SIZE_SUFFIX = "BT"
RESERVED_FONT_TOKEN = "F-GL"   # Font family marker, not a size

_POINT_SIZE_PATTERN = re.compile(r"^P(\d+)$")
_LEADING_INT_PATTERN = re.compile(r"^[+-]?\d+")
_HEX_COLOR_PATTERN = re.compile(r"^0[xX]([0-9A-Fa-f]{6})$")


@dataclass(frozen=True)
class StyleMark:
    """Typographic attributes decoded from a USERMARK."""
    bold: Optional[bool] = None
    size: Optional[int] = None
    color: Optional[str] = None    # RRGGBB

    def as_dict(self) -> dict:
        """Only the fields that were set by the mark."""
        result = {}
        if self.bold is not None:
            result["bold"] = self.bold
        if self.size is not None:
            result["size"] = self.size
        if self.color is not None:
            result["color"] = self.color
        return result


def _parse_font_size(token: str) -> Optional[int]:
    size_text = token[len(FONT_SIZE_PREFIX):].replace(FONT_SIZE_SUFFIX, "")
    match = _LEADING_INT_PATTERN.match(size_text)
    if not match:
        return None
    return int(match.group(0))


def decode_style_mark(mark: Optional[str]) -> StyleMark:
    """
    Decode a USERMARK string.

    Args:
        mark: Raw USERMARK attribute value (may be empty or None)

    Returns:
        StyleMark with bold/size/color set where the mark specifies them
    """
    if not mark or not mark.strip():
        return StyleMark()

    bold = None
    size = None
    color = None

    for token in mark.split():
        if token == BOLD_ON:
            bold = True
        elif token == BOLD_OFF:
            bold = False
        elif token.startswith(FONT_SIZE_PREFIX) and token != RESERVED_FONT_TOKEN:
            parsed = _parse_font_size(token)
            if parsed is not None:
                size = parsed
        elif _POINT_SIZE_PATTERN.match(token):
            size = int(_POINT_SIZE_PATTERN.match(token).group(1))
        elif token[:2] in ("0x", "0X"):
            color_match = _HEX_COLOR_PATTERN.match(token)
            if color_match:
                color = color_match.group(1).upper()
        else:
            logger.debug(f"Ignoring unknown style token: {token!r}")

    return StyleMark(bold=bold, size=size, color=color)
