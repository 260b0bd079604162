"""
Shared fixtures for DSD pipeline tests.

Documents are built from small markup strings that follow the layout of
real audit-report DSD files.
"""

import io
import zipfile

import pytest

from dsd_pipeline.parse.reader import parse_markup


SAMPLE_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<DOCUMENT>
<DOCUMENT-HEADER>
  <DOCUMENT-NAME ACODE="00760">감사보고서</DOCUMENT-NAME>
  <COMPANY-NAME AREGCIK="00123456">주식회사 예시</COMPANY-NAME>
</DOCUMENT-HEADER>
<BODY>
<COVER>
  <TABLE BORDER="0"><TBODY><TR><TD>주식회사 예시</TD></TR></TBODY></TABLE>
  <TABLE BORDER="0"><TBODY><TR><TD>재무제표에 대한</TD></TR></TBODY></TABLE>
  <COVER-TITLE>감 사 보 고 서</COVER-TITLE>
  <TABLE-GROUP>
    <TABLE BORDER="0"><TBODY>
      <TR><TD>제 46 기 (당기)</TD><TU AUNIT="PERIODFROM">2024년 01월 01일</TU><TD>부터</TD><TU AUNIT="PERIODTO">2024년 12월 31일</TU></TR>
    </TBODY></TABLE>
  </TABLE-GROUP>
  <TABLE BORDER="0"><TBODY><TR><TD>한결회계법인</TD></TR></TBODY></TABLE>
</COVER>
<TOC>
  <TITLE>목 차</TITLE>
  <TABLE BORDER="0"><TBODY>
    <TR><TD>독립된 감사인의 감사보고서</TD><TD>1</TD></TR>
    <TR><TD>재무제표</TD><TD>3</TD></TR>
    <TR><TD>주석</TD></TR>
    <TR><TD></TD><TD>9</TD></TR>
  </TBODY></TABLE>
</TOC>
<INSERTION AFREQUENCY="1">
  <LIBRARY>
    <SECTION-1>
      <TITLE>독립된 감사인의 감사보고서</TITLE>
      <P USERMARK="B">감사의견</P>
      <P>우리는 재무제표를 감사하였습니다.&cr;두번째 줄</P>
      <P></P>
      <TABLE BORDER="0"><TBODY><TR><TD>2025년 3월 10일</TD></TR></TBODY></TABLE>
    </SECTION-1>
  </LIBRARY>
</INSERTION>
<SECTION-1>
  <TITLE>(첨부)재 무 제 표</TITLE>
  <P USERMARK="F-14 B">재무제표</P>
  <WARNING>무시</WARNING>
  <TABLE BORDER="0"><TBODY><TR><TD>재 무 상 태 표</TD></TR></TBODY></TABLE>
  <P>(단위 : 원)</P>
  <TABLE BORDER="1">
    <COLGROUP><COL WIDTH="210"/><COL WIDTH="140"/><COL WIDTH="140"/></COLGROUP>
    <THEAD><TR><TH>과 목</TH><TH>당 기</TH><TH>전 기</TH></TR></THEAD>
    <TBODY>
      <TR><TD>현금</TD><TE>1,234,567</TE><TE>(2,000)</TE></TR>
      <TR><TD>합계</TD><TE>-</TE><TE>400</TE></TR>
    </TBODY>
  </TABLE>
  <TABLE BORDER="0"><TBODY><TR><TD>첨부된 주석은 본 재무제표의 일부입니다.</TD></TR></TBODY></TABLE>
  <PGBRK/>
  <TABLE BORDER="0"><TBODY><TR><TD>손 익 계 산 서</TD></TR></TBODY></TABLE>
  <TABLE BORDER="1">
    <COLGROUP><COL WIDTH="210"/><COL WIDTH="140"/></COLGROUP>
    <THEAD><TR><TH>과 목</TH><TH>당 기</TH></TR></THEAD>
    <TBODY><TR><TD>매출액</TD><TE>5,000,000</TE></TR></TBODY>
  </TABLE>
  <SECTION-2>
    <TITLE>주석</TITLE>
    <P>1. 회사의 개요</P>
    <P>회사는 1990년에 설립되었습니다.</P>
    <PGBRK/>
    <P>2. 중요한 회계정책</P>
    <TABLE BORDER="1">
      <THEAD><TR><TH>구분</TH><TH>내용</TH></TR></THEAD>
      <TBODY><TR><TD>기준</TD><TD>K-IFRS</TD></TR></TBODY>
    </TABLE>
  </SECTION-2>
</SECTION-1>
<SECTION-1>
  <TITLE>외부감사 실시내용</TITLE>
  <P>외부감사 참여인원</P>
  <SECTION-2>
    <TITLE>1. 감사대상업무</TITLE>
    <P>감사대상 회사명</P>
    <TABLE BORDER="1"><TBODY><TR><TD>회사명</TD><TD>주식회사 예시</TD></TR></TBODY></TABLE>
  </SECTION-2>
</SECTION-1>
</BODY>
</DOCUMENT>
"""


def parse_fragment(markup: str):
    """Parse a markup fragment and return its first element."""
    return parse_markup(markup)


def make_dsd_bytes(contents: str = None, meta: str = None) -> bytes:
    """Build an in-memory DSD archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if contents is not None:
            archive.writestr("contents.xml", contents.encode("utf-8"))
        if meta is not None:
            archive.writestr("meta.xml", meta.encode("utf-8"))
    return buffer.getvalue()


@pytest.fixture
def sample_root():
    """Root element of the sample document."""
    return parse_markup(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_dsd_bytes():
    """Sample document packed as a DSD archive."""
    return make_dsd_bytes(SAMPLE_DOCUMENT, "<META><DOCUMENT-NAME>감사보고서</DOCUMENT-NAME></META>")


@pytest.fixture
def sample_dsd_path(tmp_path, sample_dsd_bytes):
    """Sample document written to a .dsd file."""
    path = tmp_path / "sample.dsd"
    path.write_bytes(sample_dsd_bytes)
    return path
