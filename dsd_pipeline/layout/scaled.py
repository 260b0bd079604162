"""
Thousand-won sheet variant.

Copies a statement sheet, dividing numeric amounts by 1,000 and rewriting
the unit label from 원 (won) to 천원 (thousand won).
"""

import logging
import math

from .workbook import CellValue, Sheet

logger = logging.getLogger(__name__)

DEFAULT_DIVIDER = 1000

# "(단위 : 원)" -> "(단위 : 천원)"
UNIT_LABEL_REWRITES = (
    ("단위 : 원", "단위 : 천원"),
    ("단위: 원", "단위: 천원"),
)


def scale_value(value: CellValue, divider: int = DEFAULT_DIVIDER) -> CellValue:
    """
    Scale a nonzero number, keeping the original when it would round to zero.

    Rounding is half-up, e.g. 1,500 -> 2 and -1,500 -> -1.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value == 0:
        return value
    scaled = math.floor(value / divider + 0.5)
    return scaled if scaled != 0 else value


def rewrite_unit_label(text: str) -> str:
    """Rewrite a won unit label to thousand won."""
    if "단위" not in text or "원" not in text:
        return text
    for old, new in UNIT_LABEL_REWRITES:
        text = text.replace(old, new, 1)
    return text


def scale_sheet(source: Sheet, target: Sheet, divider: int = DEFAULT_DIVIDER) -> Sheet:
    """
    Fill target with a scaled copy of source.

    Styles, merged ranges and column formats are copied unchanged. The
    target must be empty; its shape then matches the source exactly, so
    copying the merges cannot conflict.

    Args:
        source: Sheet to copy
        target: Empty sheet to fill
        divider: Divider for numeric values

    Returns:
        The filled target sheet
    """
    scaled_count = 0
    for row, col, cell in source.iter_cells():
        if cell.is_numeric:
            value = scale_value(cell.value, divider)
        elif isinstance(cell.value, str):
            value = rewrite_unit_label(cell.value)
        else:
            value = cell.value
        if value != cell.value:
            scaled_count += 1
        target.set_cell(row, col, cell.copy(value=value))

    for merged in source.merges:
        target.merge(merged.start_row, merged.start_col, merged.end_row, merged.end_col)

    for col, fmt in source.columns.items():
        if fmt.width is not None:
            target.column(col).width = fmt.width
        if fmt.hidden:
            target.column(col).hidden = True

    logger.debug(f"Scaled {source.name!r} -> {target.name!r}: {scaled_count} cells changed")
    return target
