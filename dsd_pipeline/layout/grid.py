"""
Grid Layout Engine.

Places ParsedTable cells onto a sheet grid. Row and column spans become
merged ranges; positions covered by a span are recorded in a sparse
occupancy map so cells of later rows skip over them. Spans that would
leave the table or cross a claimed position are shrunk to fit.

Layout happens in two steps:
1. layout_table() computes a GridPlacement (pure, no sheet involved)
2. GridWriter.write_table() applies values, styles, merges and widths
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import LayoutConfig
from ..parse.models import ParsedTable, TableCell
from ..parse.style import decode_style_mark
from ..parse.values import classify_cell_text
from .workbook import Alignment, Font, MergeConflictError, MergedRange, Sheet, SheetCell, THIN_BORDER

logger = logging.getLogger(__name__)

# DSD alignment values that have a different spreadsheet name
HORIZONTAL_ALIASES = {"justify": "left"}
VERTICAL_ALIASES = {"middle": "center"}


@dataclass
class PlacedCell:
    """A source cell anchored on the grid, with the span it was given room for."""
    cell: TableCell
    row: int
    col: int
    is_header: bool
    row_span: int = 1
    col_span: int = 1

    @property
    def end_row(self) -> int:
        return self.row + self.row_span - 1

    @property
    def end_col(self) -> int:
        return self.col + self.col_span - 1

    @property
    def is_merged(self) -> bool:
        return self.col_span > 1 or self.row_span > 1

    def positions(self) -> list[tuple[int, int]]:
        """Grid positions claimed by this cell, anchor first."""
        return [
            (row, col)
            for row in range(self.row, self.end_row + 1)
            for col in range(self.col, self.end_col + 1)
        ]


@dataclass
class GridPlacement:
    """Anchored cells of one table plus the row following it."""
    start_row: int
    start_col: int
    next_row: int
    cells: list[PlacedCell] = field(default_factory=list)

    @property
    def merges(self) -> list[MergedRange]:
        return [
            MergedRange(placed.row, placed.col, placed.end_row, placed.end_col)
            for placed in self.cells
            if placed.is_merged
        ]


def _fit_span(
    occupied: set[tuple[int, int]],
    row_offset: int,
    col_offset: int,
    row_span: int,
    col_span: int,
    rows_left: int,
) -> tuple[int, int]:
    """
    Shrink a span to the free rectangle at (row_offset, col_offset).

    Columns are cut at the first position in the anchor row claimed by an
    earlier row span, rows at the table end or at the first row where any
    of the remaining columns is claimed.
    """
    for dc in range(1, col_span):
        if (row_offset, col_offset + dc) in occupied:
            col_span = dc
            break

    row_span = min(row_span, rows_left)
    for dr in range(1, row_span):
        if any((row_offset + dr, col_offset + dc) in occupied for dc in range(col_span)):
            row_span = dr
            break

    return row_span, col_span


def layout_table(table: ParsedTable, start_row: int, start_col: int) -> GridPlacement:
    """
    Compute anchor positions for every cell of a table.

    Rows are processed top to bottom and cells left to right. The cursor
    column skips positions already claimed by a row span from an earlier
    row. Spans that would reach past the last table row or into a claimed
    position are shrunk to the free area, so no two source cells ever
    share a grid position and no merge leaves the table.

    Args:
        table: Parsed table
        start_row: Grid row of the first table row (1-based)
        start_col: Grid column of the first table column (1-based)

    Returns:
        GridPlacement; next_row equals start_row when the table has no rows
    """
    rows = table.rows
    header_count = len(table.header_rows)
    placement = GridPlacement(start_row=start_row, start_col=start_col, next_row=start_row)

    # Positions claimed so far, keyed by (row offset, col offset)
    occupied: set[tuple[int, int]] = set()

    for row_offset, row_cells in enumerate(rows):
        col_offset = 0
        for cell in row_cells:
            while (row_offset, col_offset) in occupied:
                col_offset += 1

            row_span, col_span = _fit_span(
                occupied, row_offset, col_offset,
                cell.row_span, cell.col_span, len(rows) - row_offset,
            )
            if (row_span, col_span) != (cell.row_span, cell.col_span):
                logger.debug(
                    f"Shrunk span of {cell.text[:20]!r} from {cell.row_span}x{cell.col_span} "
                    f"to {row_span}x{col_span} at table row {row_offset}"
                )

            placed = PlacedCell(
                cell=cell,
                row=start_row + row_offset,
                col=start_col + col_offset,
                is_header=cell.is_header or row_offset < header_count,
                row_span=row_span,
                col_span=col_span,
            )
            placement.cells.append(placed)

            for dr in range(row_span):
                for dc in range(col_span):
                    occupied.add((row_offset + dr, col_offset + dc))

            col_offset += col_span

    placement.next_row = start_row + len(rows)
    return placement


class GridWriter:
    """Writes parsed tables onto sheets."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        """
        Initialize writer.

        Args:
            config: Layout settings (fonts, number format, width scale)
        """
        self.config = config or LayoutConfig()

    def px_to_width(self, px: float) -> float:
        """Convert a pixel width to spreadsheet column width units."""
        return max(px / self.config.px_per_width_unit, self.config.min_column_width)

    def font(self, style_mark: str, default_bold: bool = False, size: Optional[int] = None) -> Font:
        """Build a cell font from a USERMARK, falling back to defaults."""
        mark = decode_style_mark(style_mark)
        return Font(
            name=self.config.font_name,
            size=mark.size or size or self.config.font_size,
            bold=mark.bold if mark.bold is not None else default_bold,
            color=f"FF{mark.color}" if mark.color else None,
        )

    @staticmethod
    def alignment(cell: TableCell, is_header: bool) -> Alignment:
        horizontal = cell.horizontal_align.lower() or None
        vertical = cell.vertical_align.lower() or None
        horizontal = HORIZONTAL_ALIASES.get(horizontal, horizontal)
        vertical = VERTICAL_ALIASES.get(vertical, vertical)
        if is_header and not horizontal:
            horizontal = "center"
        return Alignment(horizontal=horizontal, vertical=vertical, wrap_text=True)

    def build_cell(self, placed: PlacedCell, has_border: bool) -> SheetCell:
        """Classify the cell text and derive its style."""
        value, is_numeric = classify_cell_text(placed.cell.text)
        return SheetCell(
            value=value,
            number_format=self.config.number_format if is_numeric else None,
            font=self.font(placed.cell.style_mark, default_bold=placed.is_header),
            alignment=self.alignment(placed.cell, placed.is_header),
            border=THIN_BORDER if has_border else None,
        )

    def apply_column_widths(self, sheet: Sheet, table: ParsedTable, start_col: int) -> None:
        for offset, px in enumerate(table.column_widths):
            sheet.widen_column(start_col + offset, self.px_to_width(px))

    def write_table(self, sheet: Sheet, table: ParsedTable, start_row: int, start_col: int) -> int:
        """
        Write a parsed table onto a sheet.

        Args:
            sheet: Target sheet
            table: Parsed table
            start_row: Row of the first table row
            start_col: Column of the first table column

        Returns:
            Row number immediately after the table
        """
        if not table.rows:
            return start_row

        self.apply_column_widths(sheet, table, start_col)

        placement = layout_table(table, start_row, start_col)
        for placed in placement.cells:
            sheet.set_cell(placed.row, placed.col, self.build_cell(placed, table.has_border))

            if placed.is_merged:
                try:
                    merged = sheet.merge(placed.row, placed.col, placed.end_row, placed.end_col)
                except MergeConflictError as e:
                    logger.warning(f"Skipping merge: {e}")
                    continue
                if table.has_border:
                    for row, col in merged.positions():
                        sheet.cell(row, col).border = THIN_BORDER

        logger.debug(
            f"Placed {len(placement.cells)} cells on {sheet.name!r} rows "
            f"{start_row}-{placement.next_row - 1} ({len(placement.merges)} merges)"
        )
        return placement.next_row
