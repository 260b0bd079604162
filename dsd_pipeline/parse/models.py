"""
Data models for DSD document parsing.

These are read-only projections derived from one document tree. Fields
typed as ``Tag`` are references into that tree, never copies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from bs4 import Tag


class CellTag(str, Enum):
    """Recognized table cell kinds."""
    HEADER = "TH"
    DATA = "TD"
    EMPHASIS = "TE"
    UNIT = "TU"


class StatementType(str, Enum):
    """Financial statement kind, classified from the statement title."""
    BALANCE_SHEET = "balance_sheet"
    INCOME_STATEMENT = "income_statement"
    EQUITY_STATEMENT = "equity_statement"
    CASH_FLOW = "cash_flow"
    NONE = "none"


class TocEntryKind(str, Enum):
    """Kind of table-of-contents line."""
    TITLE = "title"
    ENTRY = "entry"


# =============================================================================
# Document Structure Models
# =============================================================================

@dataclass
class DocumentHeader:
    """Identification read from DOCUMENT-HEADER."""
    doc_name: str = ""
    company_id: str = ""


@dataclass
class SectionMap:
    """Handles to the recognized structural regions of a disclosure."""
    header: DocumentHeader = field(default_factory=DocumentHeader)
    cover: Optional[Tag] = None
    toc: Optional[Tag] = None
    opinion: Optional[Tag] = None
    financial_statements: Optional[Tag] = None
    notes: Optional[Tag] = None
    conduct: Optional[Tag] = None

    def found_sections(self) -> list[str]:
        """Names of the section handles that are present."""
        names = ["cover", "toc", "opinion", "financial_statements", "notes", "conduct"]
        return [name for name in names if getattr(self, name) is not None]


@dataclass
class StatementBundle:
    """The four classified statement blocks plus shared header content."""
    balance_sheet: list[Tag] = field(default_factory=list)
    income_statement: list[Tag] = field(default_factory=list)
    equity_statement: list[Tag] = field(default_factory=list)
    cash_flow: list[Tag] = field(default_factory=list)
    common_header: list[Tag] = field(default_factory=list)

    def bucket(self, statement_type: StatementType) -> list[Tag]:
        """Element list for a statement type."""
        if statement_type == StatementType.NONE:
            raise ValueError("StatementType.NONE has no bucket")
        return getattr(self, statement_type.value)


@dataclass
class StatementBlock:
    """Index range of one statement inside the financial-statement section."""
    statement_type: StatementType
    start: int    # Title table index (inclusive)
    end: int      # Data or footnote table index (inclusive)


@dataclass
class NoteUnit:
    """One numbered footnote and its content."""
    number: int
    elements: list[Tag] = field(default_factory=list)


# =============================================================================
# Table Models
# =============================================================================

@dataclass
class TableCell:
    """A single cell of a parsed table."""
    tag: CellTag
    text: str
    col_span: int = 1
    row_span: int = 1
    horizontal_align: str = ""
    vertical_align: str = ""
    style_mark: str = ""
    pixel_width: int = 0
    is_header: bool = False


@dataclass
class ParsedTable:
    """Table node translated into rows of typed cells."""
    has_border: bool = False
    column_widths: list[int] = field(default_factory=list)
    header_rows: list[list[TableCell]] = field(default_factory=list)
    body_rows: list[list[TableCell]] = field(default_factory=list)

    @property
    def rows(self) -> list[list[TableCell]]:
        """Header rows followed by body rows."""
        return self.header_rows + self.body_rows


# =============================================================================
# Front Matter Models
# =============================================================================

@dataclass
class CoverInfo:
    """Cover page fields."""
    company_name: str = ""
    report_subtitle: str = ""
    report_title: str = ""
    period_line: str = ""
    period_from: str = ""
    period_to: str = ""
    auditor_name: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "company_name": self.company_name,
            "report_subtitle": self.report_subtitle,
            "report_title": self.report_title,
            "period_line": self.period_line,
            "period_from": self.period_from,
            "period_to": self.period_to,
            "auditor_name": self.auditor_name,
        }


@dataclass
class TocEntry:
    """One line of the table of contents."""
    kind: TocEntryKind
    left: str
    right: str = ""

    @property
    def text(self) -> str:
        if self.right:
            return f"{self.left}  {self.right}"
        return self.left
