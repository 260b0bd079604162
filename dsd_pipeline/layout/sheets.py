"""
Sheet writers.

Materializes the segmented document into an abstract Workbook: one sheet
per front-matter section, one per financial statement plus its thousand
won variant, one per note, and the audit conduct section.
"""

import logging
from typing import Optional

from bs4 import Tag

from ..config import LayoutConfig
from ..parse.markup import element_children, find_children, get_attr, get_text, tag_name
from ..parse.models import CoverInfo, NoteUnit, StatementBundle, StatementType, TocEntry, TocEntryKind
from ..parse.style import decode_style_mark
from ..parse.table import parse_table
from .grid import GridWriter
from .scaled import scale_sheet
from .workbook import Alignment, Font, Sheet, Workbook

logger = logging.getLogger(__name__)

TITLE_FONT_SIZE = 12
COVER_TITLE_FONT_SIZE = 18
SUBSECTION_FONT_SIZE = 10

# (sheet name, scaled sheet name, statement type), in workbook order
STATEMENT_SHEETS = (
    ("BS", "BS2", StatementType.BALANCE_SHEET),
    ("IS", "IS2", StatementType.INCOME_STATEMENT),
    ("CF", "CF2", StatementType.CASH_FLOW),
    ("CE", "CE2", StatementType.EQUITY_STATEMENT),
)

STATEMENT_COLUMN_WIDTHS = {"A": 9, "C": 3, "D": 31, "E": 21, "F": 20, "G": 20, "H": 20, "I": 20, "J": 5}

CENTER = Alignment(horizontal="center", vertical="center")
WRAP = Alignment(wrap_text=True)


class SheetWriter:
    """
    Writes document sections onto sheets.

    Each write_* method adds one sheet to the workbook and returns it.
    """

    def __init__(self, workbook: Workbook, config: Optional[LayoutConfig] = None):
        """
        Initialize writer.

        Args:
            workbook: Workbook to add sheets to
            config: Layout settings
        """
        self.workbook = workbook
        self.config = config or LayoutConfig()
        self.grid = GridWriter(self.config)

    @property
    def col(self) -> int:
        return self.config.data_col_start

    def _font(self, size: Optional[int] = None, bold: bool = False) -> Font:
        return Font(name=self.config.font_name, size=size or self.config.font_size, bold=bold)

    # =========================================================================
    # Element helpers
    # =========================================================================

    def write_text(
        self,
        sheet: Sheet,
        row: int,
        text: str,
        font: Font,
        alignment: Optional[Alignment] = None,
    ) -> None:
        cell = sheet.cell(row, self.col)
        cell.value = text
        cell.font = font
        if alignment is not None:
            cell.alignment = alignment

    def write_lines(
        self,
        sheet: Sheet,
        row: int,
        text: str,
        font: Font,
        alignment: Optional[Alignment] = None,
    ) -> int:
        """Write text one line per row; blank lines still take a row."""
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if line:
                self.write_text(sheet, row, line, font, alignment)
            row += 1
        return row

    def write_paragraph(
        self,
        sheet: Sheet,
        elem: Tag,
        row: int,
        alignment: Optional[Alignment] = None,
        use_style_mark: bool = True,
        split_lines: bool = True,
    ) -> int:
        """
        Write a P element.

        Returns:
            Next free row; an empty paragraph takes one row
        """
        text = get_text(elem).strip()
        if not text:
            return row + 1

        font = self._font()
        if use_style_mark:
            mark = decode_style_mark(get_attr(elem, "USERMARK"))
            font = self._font(size=mark.size, bold=bool(mark.bold))

        if not split_lines:
            self.write_text(sheet, row, text, font, alignment)
            return row + 1
        return self.write_lines(sheet, row, text, font, alignment)

    def write_tables(self, sheet: Sheet, elem: Tag, row: int) -> int:
        """Write a TABLE, or every TABLE of a TABLE-GROUP."""
        tag = tag_name(elem)
        if tag == "TABLE":
            return self.grid.write_table(sheet, parse_table(elem), row, self.col)
        if tag == "TABLE-GROUP":
            for table in find_children(elem, "TABLE"):
                row = self.grid.write_table(sheet, parse_table(table), row, self.col)
        return row

    def write_title(self, sheet: Sheet, elem: Tag, row: int, size: int = TITLE_FONT_SIZE) -> int:
        self.write_text(sheet, row, get_text(elem).strip(), self._font(size=size, bold=True))
        return row + 1

    def write_elements(
        self,
        sheet: Sheet,
        elements: list[Tag],
        row: int = 1,
        alignment: Optional[Alignment] = None,
        use_style_mark: bool = True,
        split_lines: bool = True,
    ) -> int:
        """Write paragraphs and tables in order, ignoring other elements."""
        for elem in elements:
            tag = tag_name(elem)
            if tag == "P":
                row = self.write_paragraph(sheet, elem, row, alignment, use_style_mark, split_lines)
            elif tag in ("TABLE", "TABLE-GROUP"):
                row = self.write_tables(sheet, elem, row)
        return row

    # =========================================================================
    # Front matter
    # =========================================================================

    def write_cover(self, cover: CoverInfo) -> Sheet:
        sheet = self.workbook.add_sheet("Cover")
        title_font = self._font(size=COVER_TITLE_FONT_SIZE)
        normal_font = self._font()

        lines = [
            (1, cover.company_name, title_font),
            (3, cover.report_subtitle, title_font),
            (5, cover.report_title, title_font),
            (6, cover.period_line, normal_font),
            (7, f"{cover.period_from} 부터" if cover.period_from else "", normal_font),
            (8, f"{cover.period_to} 까지" if cover.period_to else "", normal_font),
            (10, cover.auditor_name, title_font),
        ]
        for row, text, font in lines:
            if text:
                self.write_text(sheet, row, text, font, CENTER)

        if cover.period_line:
            sheet.merge(6, self.col, 6, self.col + 1)

        sheet.set_column_width("D", 40)
        sheet.set_column_width("E", 20)
        return sheet

    def write_toc(self, entries: list[TocEntry]) -> Sheet:
        sheet = self.workbook.add_sheet("ToC")
        for row, entry in enumerate(entries, start=1):
            if entry.kind == TocEntryKind.TITLE:
                self.write_text(
                    sheet, row, entry.text,
                    self._font(size=TITLE_FONT_SIZE, bold=True),
                    Alignment(horizontal="center"),
                )
            else:
                self.write_text(sheet, row, entry.text, self._font())
        sheet.set_column_width("D", 60)
        return sheet

    def write_opinion(self, section: Optional[Tag]) -> Sheet:
        sheet = self.workbook.add_sheet("Opinion")
        if section is None:
            return sheet

        row = 1
        for child in element_children(section):
            tag = tag_name(child)
            if tag == "TITLE":
                row = self.write_title(sheet, child, row)
            elif tag == "P":
                row = self.write_paragraph(sheet, child, row, alignment=WRAP)
            elif tag == "TABLE":
                row = self.write_tables(sheet, child, row)

        sheet.set_column_width("D", 80)
        return sheet

    # =========================================================================
    # Financial statements
    # =========================================================================

    def write_statement_header(self, elements: list[Tag]) -> Sheet:
        sheet = self.workbook.add_sheet("FS")
        self.write_elements(sheet, elements, split_lines=False)
        sheet.set_column_width("D", 40)
        sheet.set_column_width("E", 20)
        sheet.set_column_width("F", 20)
        return sheet

    def write_statement(self, name: str, elements: list[Tag]) -> Sheet:
        sheet = self.workbook.add_sheet(name)
        self.write_elements(sheet, elements, alignment=Alignment(horizontal="center"))

        for letter, width in STATEMENT_COLUMN_WIDTHS.items():
            sheet.set_column_width(letter, width)
        sheet.column(1).hidden = True
        return sheet

    def write_scaled_statement(self, source: Sheet, name: str) -> Sheet:
        sheet = self.workbook.add_sheet(name)
        return scale_sheet(source, sheet, self.config.scale_divider)

    def write_statements(self, bundle: StatementBundle) -> list[Sheet]:
        """Write the FS header sheet and every statement with its scaled copy."""
        sheets = [self.write_statement_header(bundle.common_header)]
        for name, scaled_name, statement_type in STATEMENT_SHEETS:
            sheet = self.write_statement(name, bundle.bucket(statement_type))
            sheets.append(sheet)
            sheets.append(self.write_scaled_statement(sheet, scaled_name))
        return sheets

    # =========================================================================
    # Notes
    # =========================================================================

    def write_notes_cover(self, cover: CoverInfo) -> Sheet:
        sheet = self.workbook.add_sheet("FN")
        self.write_text(sheet, 1, "주석", self._font(size=TITLE_FONT_SIZE, bold=True))

        if cover.period_from and cover.period_to:
            self.write_text(sheet, 2, f"당기 {cover.period_from} 부터 {cover.period_to} 까지", self._font())
            self.write_text(sheet, 3, "전기", self._font())

        self.write_text(sheet, 5, cover.company_name, self._font())
        sheet.set_column_width("D", 60)
        return sheet

    def write_note(self, note: NoteUnit) -> Sheet:
        sheet = self.workbook.add_sheet(self.workbook.unique_sheet_name(str(note.number)))
        self.write_elements(sheet, note.elements, alignment=WRAP)

        sheet.set_column_width("D", 35)
        for col in range(5, 15):
            sheet.set_column_width(col, 18)
        return sheet

    # =========================================================================
    # Audit conduct
    # =========================================================================

    def write_conduct(self, section: Optional[Tag]) -> Sheet:
        sheet = self.workbook.add_sheet("Conduct")
        if section is None:
            return sheet

        row = 1
        for child in element_children(section):
            tag = tag_name(child)
            if tag == "TITLE":
                row = self.write_title(sheet, child, row)
            elif tag == "SECTION-2":
                for sub_child in element_children(child):
                    if tag_name(sub_child) == "TITLE":
                        row = self.write_title(sheet, sub_child, row, size=SUBSECTION_FONT_SIZE)
                    else:
                        row = self.write_elements(sheet, [sub_child], row, use_style_mark=False)
            else:
                row = self.write_elements(sheet, [child], row, use_style_mark=False)

        sheet.set_column_width("D", 20)
        for col in range(5, 20):
            sheet.set_column_width(col, 12)
        return sheet
