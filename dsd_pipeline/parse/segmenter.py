"""
Structure Segmenter for DSD audit reports.

Locates the structural regions of the disclosure (cover, table of
contents, audit opinion, financial statements, notes and audit conduct)
by walking the BODY children once. The markup carries no role markers,
so regions are recognized from tag identity plus keywords in titles.
"""

import logging
from typing import Optional

from bs4 import Tag

from ..errors import MissingBodyError
from .markup import element_children, find_child, find_children, get_attr, get_text, tag_name
from .models import DocumentHeader, SectionMap

logger = logging.getLogger(__name__)


class StructureSegmenter:
    """
    Classifies top-level BODY children into named sections.

    Keyword sets are class attributes so variants of the report layout can
    override them in a subclass.
    """

    # INSERTION frequency flag marking the embedded audit report library
    OPINION_FREQUENCY = "1"

    # 감사 (audit) + 보고서 (report)
    OPINION_KEYWORDS = ("감사", "보고서")

    # 재무제표 (financial statements), matched as separate characters
    FINANCIAL_STATEMENT_KEYWORDS = ("재", "무", "표")

    # 주석 (notes)
    NOTES_KEYWORDS = ("주석",)

    # 외부감사 (external audit)
    CONDUCT_KEYWORDS = ("외부감사",)

    @staticmethod
    def _title_text(section: Optional[Tag]) -> str:
        return get_text(find_child(section, "TITLE"))

    @staticmethod
    def _contains_all(text: str, keywords: tuple[str, ...]) -> bool:
        return all(keyword in text for keyword in keywords)

    def read_header(self, root: Tag) -> DocumentHeader:
        """Read document name and company id from DOCUMENT-HEADER."""
        header = DocumentHeader()
        doc_header = find_child(root, "DOCUMENT-HEADER")
        if doc_header is None:
            return header

        doc_name = find_child(doc_header, "DOCUMENT-NAME")
        company = find_child(doc_header, "COMPANY-NAME")
        header.doc_name = get_text(doc_name).strip() if doc_name is not None else ""
        header.company_id = get_attr(company, "AREGCIK")
        return header

    def _match_opinion(self, insertion: Tag) -> Optional[Tag]:
        """Return the audit report SECTION-1 inside an INSERTION, if any."""
        if get_attr(insertion, "AFREQUENCY") != self.OPINION_FREQUENCY:
            return None
        library = find_child(insertion, "LIBRARY")
        section = find_child(library, "SECTION-1")
        if section is None:
            return None
        if self._contains_all(self._title_text(section), self.OPINION_KEYWORDS):
            return section
        return None

    def _find_notes(self, fs_section: Tag) -> Optional[Tag]:
        """Scan SECTION-2 children of the statements section for the notes."""
        notes = None
        for sub_section in find_children(fs_section, "SECTION-2"):
            if self._contains_all(self._title_text(sub_section), self.NOTES_KEYWORDS):
                notes = sub_section
        return notes

    def segment(self, root: Tag) -> SectionMap:
        """
        Segment a parsed DSD document.

        Args:
            root: Document root element

        Returns:
            SectionMap with handles to every recognized section

        Raises:
            MissingBodyError: If the document has no BODY element
        """
        sections = SectionMap(header=self.read_header(root))

        body = find_child(root, "BODY")
        if body is None:
            raise MissingBodyError("BODY element not found in document")

        for child in element_children(body):
            tag = tag_name(child)

            if tag == "COVER":
                sections.cover = child
            elif tag == "TOC":
                sections.toc = child
            elif tag == "INSERTION":
                if sections.opinion is not None:
                    continue
                opinion = self._match_opinion(child)
                if opinion is not None:
                    sections.opinion = opinion
            elif tag == "SECTION-1":
                title = self._title_text(child)
                if self._contains_all(title, self.FINANCIAL_STATEMENT_KEYWORDS):
                    sections.financial_statements = child
                    sections.notes = self._find_notes(child)
                elif self._contains_all(title, self.CONDUCT_KEYWORDS):
                    sections.conduct = child
                else:
                    logger.debug(f"Ignoring SECTION-1 with title {title.strip()!r}")

        logger.info(f"Segmented document: {', '.join(sections.found_sections()) or 'no sections'}")
        if sections.financial_statements is None:
            logger.warning("No financial statements section found")

        return sections


def segment_document(root: Tag) -> SectionMap:
    """
    Convenience function to segment a document.

    Args:
        root: Document root element

    Returns:
        SectionMap
    """
    return StructureSegmenter().segment(root)
