"""
Table model builder.

Translates a DSD TABLE element into a ParsedTable: column widths from
COLGROUP, header rows from THEAD and body rows from TBODY.
"""

import logging
from typing import Optional

from bs4 import Tag

from .markup import element_children, find_child, find_children, get_attr, get_int_attr, get_text, tag_name
from .models import CellTag, ParsedTable, TableCell

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_WIDTH = 100
DEFAULT_CELL_WIDTH = 0

_CELL_TAGS = {cell_tag.value: cell_tag for cell_tag in CellTag}


def _span(node: Tag, name: str) -> int:
    span = get_int_attr(node, name, 1)
    return span if span >= 1 else 1


def parse_cell(cell_elem: Tag, in_head: bool) -> Optional[TableCell]:
    """
    Parse one cell element.

    Returns None for tags that are not table cells.
    """
    cell_tag = _CELL_TAGS.get(tag_name(cell_elem))
    if cell_tag is None:
        return None

    return TableCell(
        tag=cell_tag,
        text=get_text(cell_elem).strip(),
        col_span=_span(cell_elem, "COLSPAN"),
        row_span=_span(cell_elem, "ROWSPAN"),
        horizontal_align=get_attr(cell_elem, "ALIGN").upper(),
        vertical_align=get_attr(cell_elem, "VALIGN").upper(),
        style_mark=get_attr(cell_elem, "USERMARK"),
        pixel_width=get_int_attr(cell_elem, "WIDTH", DEFAULT_CELL_WIDTH),
        is_header=cell_tag == CellTag.HEADER or in_head,
    )


def parse_row(row_elem: Tag, in_head: bool) -> list[TableCell]:
    """Parse a TR element into its recognized cells."""
    cells = []
    for child in element_children(row_elem):
        cell = parse_cell(child, in_head)
        if cell is None:
            logger.debug(f"Skipping non-cell tag in row: {tag_name(child)}")
            continue
        cells.append(cell)
    return cells


def parse_table(table_elem: Tag) -> ParsedTable:
    """
    Parse a TABLE element.

    Args:
        table_elem: DSD TABLE element

    Returns:
        ParsedTable with widths, header rows and body rows
    """
    table = ParsedTable(has_border=get_attr(table_elem, "BORDER", "0") == "1")

    colgroup = find_child(table_elem, "COLGROUP")
    if colgroup is not None:
        table.column_widths = [
            get_int_attr(col, "WIDTH", DEFAULT_COLUMN_WIDTH)
            for col in find_children(colgroup, "COL")
        ]

    thead = find_child(table_elem, "THEAD")
    if thead is not None:
        table.header_rows = [parse_row(tr, True) for tr in find_children(thead, "TR")]

    tbody = find_child(table_elem, "TBODY")
    if tbody is not None:
        table.body_rows = [parse_row(tr, False) for tr in find_children(tbody, "TR")]

    return table
