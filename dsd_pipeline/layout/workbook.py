"""
Abstract workbook model.

A Workbook is an ordered list of named sheets. Each Sheet holds a sparse
cell grid keyed by 1-based (row, column), merged ranges and per-column
formatting. Binary serialization happens outside this package.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Optional, Union

CellValue = Union[int, float, str, None]


class MergeConflictError(ValueError):
    """A merged range overlaps an existing merged range."""


def column_letter(index: int) -> str:
    """Convert a 1-based column index to letters (1 -> 'A', 4 -> 'D')."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def column_index(letters: str) -> int:
    """Convert column letters to a 1-based index ('A' -> 1, 'AA' -> 27)."""
    index = 0
    for char in letters.upper():
        if not "A" <= char <= "Z":
            raise ValueError(f"Invalid column letters: {letters!r}")
        index = index * 26 + (ord(char) - 64)
    return index


# =============================================================================
# Styles
# =============================================================================

@dataclass(frozen=True)
class Font:
    """Cell font."""
    name: str
    size: int
    bold: bool = False
    color: Optional[str] = None   # ARGB, e.g. "FFFF0000"

    def to_dict(self) -> dict:
        return {"name": self.name, "size": self.size, "bold": self.bold, "color": self.color}


@dataclass(frozen=True)
class Alignment:
    """Cell alignment."""
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    wrap_text: bool = False

    def to_dict(self) -> dict:
        return {"horizontal": self.horizontal, "vertical": self.vertical, "wrap_text": self.wrap_text}


@dataclass(frozen=True)
class Border:
    """Border style per edge (None = no border)."""
    top: Optional[str] = None
    left: Optional[str] = None
    bottom: Optional[str] = None
    right: Optional[str] = None

    def to_dict(self) -> dict:
        return {"top": self.top, "left": self.left, "bottom": self.bottom, "right": self.right}


THIN_BORDER = Border(top="thin", left="thin", bottom="thin", right="thin")


@dataclass
class SheetCell:
    """A single cell value with its formatting."""
    value: CellValue = None
    number_format: Optional[str] = None
    font: Optional[Font] = None
    alignment: Optional[Alignment] = None
    border: Optional[Border] = None

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)

    def copy(self, **changes: Any) -> "SheetCell":
        """Copy of this cell, optionally with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "number_format": self.number_format,
            "font": self.font.to_dict() if self.font else None,
            "alignment": self.alignment.to_dict() if self.alignment else None,
            "border": self.border.to_dict() if self.border else None,
        }


@dataclass(frozen=True)
class MergedRange:
    """Inclusive rectangle of merged cells, anchored at its top-left."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def ref(self) -> str:
        """A1-style reference, e.g. 'D6:E6'."""
        return (
            f"{column_letter(self.start_col)}{self.start_row}:"
            f"{column_letter(self.end_col)}{self.end_row}"
        )

    def positions(self) -> Iterator[tuple[int, int]]:
        """All (row, column) positions covered by the range."""
        for row in range(self.start_row, self.end_row + 1):
            for col in range(self.start_col, self.end_col + 1):
                yield row, col

    def overlaps(self, other: "MergedRange") -> bool:
        return not (
            other.end_row < self.start_row
            or other.start_row > self.end_row
            or other.end_col < self.start_col
            or other.start_col > self.end_col
        )


@dataclass
class ColumnFormat:
    """Per-column width and visibility."""
    width: Optional[float] = None
    hidden: bool = False


# =============================================================================
# Sheet / Workbook
# =============================================================================

class Sheet:
    """Sparse cell grid with merged ranges and column formats."""

    def __init__(self, name: str):
        self.name = name
        self.cells: dict[tuple[int, int], SheetCell] = {}
        self.merges: list[MergedRange] = []
        self.columns: dict[int, ColumnFormat] = {}

    def __repr__(self) -> str:
        return f"Sheet({self.name!r}, cells={len(self.cells)}, merges={len(self.merges)})"

    def cell(self, row: int, col: int) -> SheetCell:
        """Get the cell at (row, col), creating an empty one if needed."""
        if row < 1 or col < 1:
            raise ValueError(f"Cell coordinates are 1-based, got ({row}, {col})")
        key = (row, col)
        if key not in self.cells:
            self.cells[key] = SheetCell()
        return self.cells[key]

    def set_cell(self, row: int, col: int, cell: SheetCell) -> SheetCell:
        """Replace the cell at (row, col)."""
        if row < 1 or col < 1:
            raise ValueError(f"Cell coordinates are 1-based, got ({row}, {col})")
        self.cells[(row, col)] = cell
        return cell

    def get(self, row: int, col: int) -> Optional[SheetCell]:
        """Get the cell at (row, col) without creating it."""
        return self.cells.get((row, col))

    def value(self, row: int, col: int) -> CellValue:
        existing = self.cells.get((row, col))
        return existing.value if existing else None

    def merge(self, start_row: int, start_col: int, end_row: int, end_col: int) -> MergedRange:
        """
        Register a merged range.

        Raises:
            MergeConflictError: If the range overlaps an existing one
        """
        merged = MergedRange(start_row, start_col, end_row, end_col)
        for existing in self.merges:
            if existing.overlaps(merged):
                raise MergeConflictError(f"{merged.ref} overlaps merged range {existing.ref} on sheet {self.name!r}")
        self.merges.append(merged)
        return merged

    def column(self, col: int) -> ColumnFormat:
        """Get the column format, creating a default one if needed."""
        if col not in self.columns:
            self.columns[col] = ColumnFormat()
        return self.columns[col]

    def set_column_width(self, col: Union[int, str], width: float, hidden: bool = False) -> None:
        """Set a column width outright (column given as index or letters)."""
        index = column_index(col) if isinstance(col, str) else col
        column = self.column(index)
        column.width = width
        column.hidden = hidden

    def widen_column(self, col: int, width: float) -> None:
        """Increase a column width; never decreases it."""
        column = self.column(col)
        if column.width is None or width > column.width:
            column.width = width

    @property
    def max_row(self) -> int:
        return max((row for row, _ in self.cells), default=0)

    @property
    def max_column(self) -> int:
        return max((col for _, col in self.cells), default=0)

    def iter_cells(self) -> Iterator[tuple[int, int, SheetCell]]:
        """Cells in row-major order."""
        for (row, col) in sorted(self.cells):
            yield row, col, self.cells[(row, col)]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "cells": [
                {"ref": f"{column_letter(col)}{row}", **cell.to_dict()}
                for row, col, cell in self.iter_cells()
            ],
            "merges": [merged.ref for merged in self.merges],
            "columns": {
                column_letter(col): {"width": fmt.width, "hidden": fmt.hidden}
                for col, fmt in sorted(self.columns.items())
            },
        }


@dataclass
class Workbook:
    """Ordered collection of named sheets."""
    sheets: list[Sheet] = field(default_factory=list)

    def add_sheet(self, name: str) -> Sheet:
        """Append a new empty sheet."""
        if self.get_sheet(name) is not None:
            raise ValueError(f"Sheet already exists: {name!r}")
        sheet = Sheet(name)
        self.sheets.append(sheet)
        return sheet

    def unique_sheet_name(self, name: str) -> str:
        """Name not yet used in the workbook, suffixed " (2)", " (3)" ... if needed."""
        candidate = name
        suffix = 2
        while self.get_sheet(candidate) is not None:
            candidate = f"{name} ({suffix})"
            suffix += 1
        return candidate

    def get_sheet(self, name: str) -> Optional[Sheet]:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None

    def __getitem__(self, name: str) -> Sheet:
        sheet = self.get_sheet(name)
        if sheet is None:
            raise KeyError(name)
        return sheet

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"sheets": [sheet.to_dict() for sheet in self.sheets]}
