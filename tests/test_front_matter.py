"""
Tests for cover page and table-of-contents extraction.
"""

from conftest import parse_fragment

from dsd_pipeline.parse.front_matter import extract_cover_info, extract_toc_entries
from dsd_pipeline.parse.models import CoverInfo, TocEntryKind
from dsd_pipeline.parse.segmenter import segment_document


class TestExtractCoverInfo:
    """Tests for extract_cover_info()."""

    def test_sample_cover(self, sample_root):
        cover = extract_cover_info(segment_document(sample_root).cover)
        assert cover.company_name == "주식회사 예시"
        assert cover.report_subtitle == "재무제표에 대한"
        assert cover.report_title == "감 사 보 고 서"
        assert cover.period_line == "제 46 기 (당기)"
        assert cover.period_from == "2024년 01월 01일"
        assert cover.period_to == "2024년 12월 31일"
        assert cover.auditor_name == "한결회계법인"

    def test_missing_cover(self):
        assert extract_cover_info(None) == CoverInfo()

    def test_empty_tables_skipped(self):
        cover = parse_fragment(
            "<COVER>"
            '<TABLE BORDER="0"><TBODY><TR><TD> </TD></TR></TBODY></TABLE>'
            '<TABLE BORDER="0"><TBODY><TR><TD>회사</TD></TR></TBODY></TABLE>'
            "</COVER>"
        )
        info = extract_cover_info(cover)
        assert info.company_name == "회사"
        assert info.report_subtitle == ""
        assert info.auditor_name == ""

    def test_to_dict(self):
        info = CoverInfo(company_name="회사", period_from="2024년 01월 01일")
        data = info.to_dict()
        assert data["company_name"] == "회사"
        assert data["period_from"] == "2024년 01월 01일"
        assert data["auditor_name"] == ""


class TestExtractTocEntries:
    """Tests for extract_toc_entries()."""

    def test_sample_toc(self, sample_root):
        entries = extract_toc_entries(segment_document(sample_root).toc)
        assert [entry.kind for entry in entries] == [
            TocEntryKind.TITLE, TocEntryKind.ENTRY, TocEntryKind.ENTRY, TocEntryKind.ENTRY,
        ]
        assert [entry.text for entry in entries] == [
            "목 차", "독립된 감사인의 감사보고서  1", "재무제표  3", "주석",
        ]

    def test_missing_toc(self):
        assert extract_toc_entries(None) == []

    def test_toc_without_title(self):
        toc = parse_fragment(
            '<TOC><TABLE BORDER="0"><TBODY><TR><TD>감사보고서</TD><TD>1</TD></TR></TBODY></TABLE></TOC>'
        )
        entries = extract_toc_entries(toc)
        assert len(entries) == 1
        assert entries[0].left == "감사보고서"
        assert entries[0].right == "1"
