"""
Tests for the statement splitter.
"""

import pytest

from conftest import parse_fragment

from dsd_pipeline.parse.markup import element_children, get_text, tag_name
from dsd_pipeline.parse.models import StatementType
from dsd_pipeline.parse.segmenter import segment_document
from dsd_pipeline.parse.statements import (
    DECORATION_TAGS,
    StatementSplitter,
    classify_statement_title,
    find_title_index,
    split_statements,
)


# ─── Test Data ───

def title_table(text: str) -> str:
    return f'<TABLE BORDER="0"><TBODY><TR><TD>{text}</TD></TR></TBODY></TABLE>'


def data_table(label: str = "현금") -> str:
    return (
        '<TABLE BORDER="1"><THEAD><TR><TH>과목</TH><TH>당기</TH></TR></THEAD>'
        f"<TBODY><TR><TD>{label}</TD><TE>1,000</TE></TR></TBODY></TABLE>"
    )


def section(*children: str) -> str:
    return "<SECTION-1><TITLE>재 무 제 표</TITLE>" + "".join(children) + "</SECTION-1>"


class TestClassifyStatementTitle:
    """Tests for keyword classification of statement titles."""

    @pytest.mark.parametrize("title,expected", [
        ("재 무 상 태 표", StatementType.BALANCE_SHEET),
        ("포 괄 손 익 계 산 서", StatementType.INCOME_STATEMENT),
        ("자본변동표", StatementType.EQUITY_STATEMENT),
        ("현  금  흐  름  표\n제 46 기", StatementType.CASH_FLOW),
        ("주석", StatementType.NONE),
        ("", StatementType.NONE),
    ])
    def test_classification(self, title, expected):
        assert classify_statement_title(title) == expected


class TestFindTitleIndex:
    """Tests for the backward title scan."""

    def test_skips_decoration(self):
        root = parse_fragment(section(title_table("재무상태표"), "<P>a</P><WARNING>b</WARNING><INSERTION></INSERTION>", data_table()))
        children = element_children(root)
        assert tag_name(children[find_title_index(children, 5)]) == "TABLE"
        assert find_title_index(children, 5) == 1

    def test_decoration_set(self):
        assert DECORATION_TAGS == {"P", "WARNING", "INSERTION"}

    def test_no_preceding_node(self):
        root = parse_fragment(section())
        children = element_children(root)
        assert find_title_index(children, 0) == -1


class TestSplitStatements:
    """Tests for split_statements()."""

    def test_balance_sheet_with_footnote(self):
        """Test title + data + notes footnote table form one three-node block."""
        root = parse_fragment(section(
            title_table("재 무 상 태 표"),
            data_table(),
            title_table("첨부된 주석은 본 재무제표의 일부입니다."),
        ))
        bundle = split_statements(root)
        children = element_children(root)
        assert bundle.balance_sheet == children[1:4]
        assert len(bundle.balance_sheet) == 3
        assert bundle.income_statement == []
        assert bundle.equity_statement == []
        assert bundle.cash_flow == []

    def test_following_table_without_marker_not_included(self):
        root = parse_fragment(section(title_table("재무상태표"), data_table(), title_table("기타")))
        bundle = split_statements(root)
        assert len(bundle.balance_sheet) == 2

    def test_appendix_marker(self):
        root = parse_fragment(section(title_table("현금흐름표"), data_table(), title_table("별첨 참조")))
        assert len(split_statements(root).cash_flow) == 3

    def test_unrecognized_title_discarded(self):
        root = parse_fragment(section(title_table("부속명세서"), data_table()))
        bundle = split_statements(root)
        assert bundle.balance_sheet == bundle.income_statement == bundle.equity_statement == bundle.cash_flow == []

    def test_title_must_be_a_table(self):
        root = parse_fragment(section("<SPAN>재무상태표</SPAN>", data_table()))
        assert split_statements(root).balance_sheet == []

    def test_unbordered_or_headless_tables_are_not_candidates(self):
        headless = '<TABLE BORDER="1"><TBODY><TR><TD>1</TD></TR></TBODY></TABLE>'
        root = parse_fragment(section(title_table("재무상태표"), headless, title_table("손익계산서"), title_table("x")))
        bundle = split_statements(root)
        assert bundle.balance_sheet == []
        assert bundle.income_statement == []

    def test_zero_candidates_common_header_is_whole_section(self):
        root = parse_fragment(section("<P>머리말</P>", title_table("기타"), "<PGBRK/>"))
        bundle = split_statements(root)
        assert [tag_name(node) for node in bundle.common_header] == ["P", "TABLE"]

    def test_common_header_before_first_statement(self):
        root = parse_fragment(section(
            "<P>재무제표</P>", "<WARNING>w</WARNING>", "<PGBRK/>",
            title_table("재무상태표"), data_table(),
        ))
        bundle = split_statements(root)
        assert [tag_name(node) for node in bundle.common_header] == ["P"]

    def test_sub_sections_excluded(self):
        root = parse_fragment(section(
            title_table("재무상태표"), data_table(),
            "<SECTION-2><TITLE>주석</TITLE>" + title_table("손익계산서") + data_table() + "</SECTION-2>",
        ))
        bundle = split_statements(root)
        assert len(bundle.balance_sheet) == 2
        assert bundle.income_statement == []

    def test_blocks_do_not_overlap(self):
        """Test a footnote table that doubles as the next title stays with the first block."""
        root = parse_fragment(section(
            title_table("재무상태표"), data_table(),
            title_table("손익계산서 (주석 참조)"), data_table("매출"),
        ))
        bundle = split_statements(root)
        assert len(bundle.balance_sheet) == 3
        assert len(bundle.income_statement) == 1
        assert "매출" in get_text(bundle.income_statement[0])

    def test_missing_section(self):
        bundle = split_statements(None)
        assert bundle.common_header == []
        assert bundle.balance_sheet == []

    def test_sample_document(self, sample_root):
        sections = segment_document(sample_root)
        bundle = split_statements(sections.financial_statements)
        assert [tag_name(node) for node in bundle.balance_sheet] == ["TABLE", "P", "TABLE", "TABLE"]
        assert [tag_name(node) for node in bundle.income_statement] == ["TABLE", "TABLE"]
        assert [get_text(node) for node in bundle.common_header] == ["재무제표"]

    def test_idempotent(self, sample_root):
        sections = segment_document(sample_root)
        splitter = StatementSplitter()
        assert splitter.split(sections.financial_statements) == splitter.split(sections.financial_statements)

    def test_bucket_for_none_type_raises(self):
        with pytest.raises(ValueError):
            split_statements(None).bucket(StatementType.NONE)
