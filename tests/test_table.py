"""
Tests for the table model builder.
"""

from conftest import parse_fragment

from dsd_pipeline.parse.models import CellTag
from dsd_pipeline.parse.table import parse_table


TABLE_MARKUP = """
<TABLE BORDER="1" WIDTH="640" ACLASS="EXTRACTION">
  <COLGROUP><COL WIDTH="210"/><COL/><COL WIDTH="abc"/></COLGROUP>
  <THEAD>
    <TR><TD ROWSPAN="2">과 목</TD><TH COLSPAN="2" ALIGN="justify">금 액</TH></TR>
    <TR><TH>당 기</TH><TH>전 기</TH></TR>
  </THEAD>
  <TBODY>
    <TR><TD VALIGN="middle" USERMARK="B">현금</TD><TE WIDTH="140">1,000</TE><TU AUNIT="X">원</TU><SPAN>무시</SPAN></TR>
    <TR><TD COLSPAN="x">합계</TD></TR>
  </TBODY>
</TABLE>
"""


class TestParseTable:
    """Tests for parse_table()."""

    def test_border_flag(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        assert table.has_border is True

    def test_column_width_defaults(self):
        """Test that missing or non-numeric COL widths default to 100."""
        table = parse_table(parse_fragment(TABLE_MARKUP))
        assert table.column_widths == [210, 100, 100]

    def test_header_and_body_rows(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        assert len(table.header_rows) == 2
        assert len(table.body_rows) == 2
        assert len(table.rows) == 4

    def test_head_rows_are_header_styled(self):
        """Test that every cell in THEAD is a header, whatever its tag."""
        table = parse_table(parse_fragment(TABLE_MARKUP))
        first = table.header_rows[0][0]
        assert first.tag == CellTag.DATA
        assert first.is_header is True

    def test_spans(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        assert table.header_rows[0][0].row_span == 2
        assert table.header_rows[0][0].col_span == 1
        assert table.header_rows[0][1].col_span == 2

    def test_invalid_span_defaults_to_one(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        assert table.body_rows[1][0].col_span == 1

    def test_unknown_cell_tags_ignored(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        row = table.body_rows[0]
        assert [cell.tag for cell in row] == [CellTag.DATA, CellTag.EMPHASIS, CellTag.UNIT]

    def test_cell_attributes(self):
        table = parse_table(parse_fragment(TABLE_MARKUP))
        cash, amount, unit = table.body_rows[0]
        assert cash.vertical_align == "MIDDLE"
        assert cash.style_mark == "B"
        assert cash.pixel_width == 0
        assert cash.is_header is False
        assert amount.pixel_width == 140
        assert amount.text == "1,000"
        assert table.header_rows[0][1].horizontal_align == "JUSTIFY"

    def test_borderless_table_without_blocks(self):
        table = parse_table(parse_fragment('<TABLE><TR><TD>x</TD></TR></TABLE>'))
        assert table.has_border is False
        assert table.column_widths == []
        assert table.rows == []

    def test_line_break_marker_in_cell_text(self):
        table = parse_table(parse_fragment(
            '<TABLE><TBODY><TR><TD>첫째&cr;둘째</TD></TR></TBODY></TABLE>'
        ))
        assert table.body_rows[0][0].text == "첫째\n둘째"
