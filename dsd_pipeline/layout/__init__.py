"""
Sheet layout package.

Provides the abstract workbook model, the grid layout engine that places
parsed tables onto sheets, the sheet writers and the thousand-won
scaled sheet variant.
"""

from .workbook import (
    Alignment,
    Border,
    ColumnFormat,
    Font,
    MergeConflictError,
    MergedRange,
    Sheet,
    SheetCell,
    THIN_BORDER,
    Workbook,
    column_index,
    column_letter,
)
from .grid import GridPlacement, GridWriter, PlacedCell, layout_table
from .scaled import rewrite_unit_label, scale_sheet, scale_value
from .sheets import SheetWriter

__all__ = [
    # Workbook model
    "Alignment",
    "Border",
    "ColumnFormat",
    "Font",
    "MergeConflictError",
    "MergedRange",
    "Sheet",
    "SheetCell",
    "THIN_BORDER",
    "Workbook",
    "column_index",
    "column_letter",
    # Grid layout
    "GridPlacement",
    "GridWriter",
    "PlacedCell",
    "layout_table",
    # Scaled sheets
    "rewrite_unit_label",
    "scale_sheet",
    "scale_value",
    # Sheet writers
    "SheetWriter",
]
