"""
Conversion runner.

Orchestrates the full pipeline for one DSD document:
1. Read the container and parse the markup
2. Segment the document into sections
3. Split statements and notes
4. Write every sheet of the workbook
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from bs4 import Tag

from ..config import ConverterConfig
from ..layout.sheets import SheetWriter
from ..layout.workbook import Workbook
from ..parse.front_matter import extract_cover_info, extract_toc_entries
from ..parse.models import CoverInfo, NoteUnit, SectionMap, StatementBundle
from ..parse.notes import NoteSplitter
from ..parse.reader import read_dsd
from ..parse.segmenter import StructureSegmenter
from ..parse.statements import StatementSplitter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def _no_progress(message: str) -> None:
    pass


@dataclass
class ConversionResult:
    """Workbook and intermediate results of one conversion run."""
    workbook: Workbook
    sections: SectionMap
    statements: StatementBundle
    notes: list[NoteUnit] = field(default_factory=list)
    cover_info: CoverInfo = field(default_factory=CoverInfo)
    source: str = ""
    duration_seconds: float = 0.0

    def summarize(self) -> dict:
        """Summary statistics for reporting."""
        return {
            "source": self.source,
            "doc_name": self.sections.header.doc_name,
            "company_id": self.sections.header.company_id,
            "company_name": self.cover_info.company_name,
            "sections": self.sections.found_sections(),
            "sheets": self.workbook.sheet_names,
            "note_count": len(self.notes),
            "duration_seconds": round(self.duration_seconds, 3),
        }


class DocumentConverter:
    """
    Converts parsed DSD documents into workbooks.

    Each call to convert() builds fresh section handles, statement blocks,
    notes and workbook, so one converter can be reused across documents.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        """
        Initialize converter.

        Args:
            config: Conversion settings (defaults if None)
        """
        self.config = config or ConverterConfig()
        self.segmenter = StructureSegmenter()
        self.statement_splitter = StatementSplitter()
        self.note_splitter = NoteSplitter(max_note_number=self.config.notes.max_note_number)

    def convert(
        self,
        root: Tag,
        on_progress: Optional[ProgressCallback] = None,
        source: str = "",
    ) -> ConversionResult:
        """
        Convert a parsed document into a workbook.

        Args:
            root: Document root element
            on_progress: Called with a short message between stages
            source: Label for the document in logs and summaries

        Returns:
            ConversionResult

        Raises:
            MissingBodyError: If the document has no BODY element
        """
        progress = on_progress or _no_progress
        start_time = datetime.now()

        progress("Analyzing document structure...")
        sections = self.segmenter.segment(root)
        cover_info = extract_cover_info(sections.cover)
        toc_entries = extract_toc_entries(sections.toc)
        statements = self.statement_splitter.split(sections.financial_statements)
        notes = self.note_splitter.split(sections.notes)

        progress("Building workbook...")
        workbook = Workbook()
        writer = SheetWriter(workbook, self.config.layout)

        progress("Writing Cover sheet...")
        writer.write_cover(cover_info)
        progress("Writing ToC sheet...")
        writer.write_toc(toc_entries)
        progress("Writing Opinion sheet...")
        writer.write_opinion(sections.opinion)
        progress("Writing financial statement sheets...")
        writer.write_statements(statements)
        progress("Writing FN sheet...")
        writer.write_notes_cover(cover_info)
        for note in notes:
            progress(f"Writing note {note.number} sheet...")
            writer.write_note(note)
        workbook.add_sheet("Sox")
        progress("Writing Conduct sheet...")
        writer.write_conduct(sections.conduct)

        duration = (datetime.now() - start_time).total_seconds()
        logger.info(f"Converted {source or 'document'}: {len(workbook.sheets)} sheets in {duration:.2f}s")

        return ConversionResult(
            workbook=workbook,
            sections=sections,
            statements=statements,
            notes=notes,
            cover_info=cover_info,
            source=source,
            duration_seconds=duration,
        )

    def convert_file(
        self,
        source: Union[str, Path, bytes],
        on_progress: Optional[ProgressCallback] = None,
    ) -> ConversionResult:
        """
        Read a DSD file and convert it.

        Args:
            source: Path to the .dsd file or its raw bytes
            on_progress: Called with a short message between stages

        Returns:
            ConversionResult

        Raises:
            ContainerError: If the archive is unreadable
            ParseError: If the markup cannot be parsed
            MissingBodyError: If the document has no BODY element
        """
        progress = on_progress or _no_progress
        progress("Unpacking archive and parsing markup...")
        document = read_dsd(source, features=self.config.parser.features)
        return self.convert(document.contents, on_progress=progress, source=document.source)


def convert_document(
    root: Tag,
    config: Optional[ConverterConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> ConversionResult:
    """
    Convenience function to convert a parsed document.

    Args:
        root: Document root element
        config: Conversion settings
        on_progress: Progress callback

    Returns:
        ConversionResult
    """
    return DocumentConverter(config).convert(root, on_progress=on_progress)


def convert_file(
    source: Union[str, Path, bytes],
    config: Optional[ConverterConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> ConversionResult:
    """
    Convenience function to read and convert a DSD file.

    Args:
        source: Path to the .dsd file or its raw bytes
        config: Conversion settings
        on_progress: Progress callback

    Returns:
        ConversionResult
    """
    return DocumentConverter(config).convert_file(source, on_progress=on_progress)


def print_conversion_summary(result: ConversionResult) -> None:
    """Print a summary of a conversion run."""
    summary = result.summarize()

    print("\n" + "=" * 60)
    print(f"CONVERSION SUMMARY: {summary['source'] or summary['doc_name']}")
    print("=" * 60)

    if summary["company_name"]:
        print(f"\nCompany: {summary['company_name']} ({summary['company_id'] or 'no id'})")
    print(f"Sections found: {', '.join(summary['sections']) or 'none'}")
    print(f"Notes: {summary['note_count']}")
    print(f"\n--- Sheets ({len(summary['sheets'])} total) ---")
    for sheet in result.workbook.sheets:
        print(f"  {sheet.name:10} {len(sheet.cells):>6} cells {len(sheet.merges):>4} merges")

    print(f"\nDuration: {summary['duration_seconds']:.2f}s")
    print("=" * 60)
