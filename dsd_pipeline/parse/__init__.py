"""
Document parsing package.

This package provides tools for reading DSD files, segmenting the
document into sections, splitting statements and notes, and parsing
tables into typed cells.
"""

from .models import (
    # Enums
    CellTag,
    StatementType,
    TocEntryKind,
    # Document models
    DocumentHeader,
    SectionMap,
    StatementBlock,
    StatementBundle,
    NoteUnit,
    # Table models
    TableCell,
    ParsedTable,
    # Front matter models
    CoverInfo,
    TocEntry,
)

from .reader import DsdDocument, parse_markup, read_dsd
from .style import StyleMark, decode_style_mark
from .values import classify_cell_text, is_valid_grouping
from .table import parse_table
from .segmenter import StructureSegmenter, segment_document
from .statements import StatementSplitter, classify_statement_title, split_statements
from .notes import NoteSplitter, split_notes
from .front_matter import extract_cover_info, extract_toc_entries

__all__ = [
    # Enums
    "CellTag",
    "StatementType",
    "TocEntryKind",
    # Document models
    "DocumentHeader",
    "SectionMap",
    "StatementBlock",
    "StatementBundle",
    "NoteUnit",
    # Table models
    "TableCell",
    "ParsedTable",
    # Front matter models
    "CoverInfo",
    "TocEntry",
    # Reader
    "DsdDocument",
    "parse_markup",
    "read_dsd",
    # Cell decoding
    "StyleMark",
    "decode_style_mark",
    "classify_cell_text",
    "is_valid_grouping",
    "parse_table",
    # Segmentation
    "StructureSegmenter",
    "segment_document",
    "StatementSplitter",
    "classify_statement_title",
    "split_statements",
    "NoteSplitter",
    "split_notes",
    "extract_cover_info",
    "extract_toc_entries",
]
