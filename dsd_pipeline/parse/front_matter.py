"""
Cover page and table-of-contents extraction.
"""

import logging
from typing import Optional

from bs4 import Tag

from .markup import element_children, find_child, find_children, get_attr, get_text, tag_name
from .models import CoverInfo, TocEntry, TocEntryKind

logger = logging.getLogger(__name__)

PERIOD_FROM_UNIT = "PERIODFROM"
PERIOD_TO_UNIT = "PERIODTO"


def _is_period_line(text: str) -> bool:
    # e.g. "제 46 기 (당기)" / "제 45 기 (전기)"
    return "기" in text and ("당" in text or "전" in text)


def extract_cover_info(cover: Optional[Tag]) -> CoverInfo:
    """
    Extract cover page fields.

    The first three non-empty top-level tables hold the company name, the
    report subtitle and the auditor name. Reporting period bounds come from
    TU cells tagged with AUNIT inside TABLE-GROUP tables.

    Args:
        cover: COVER element (may be None)

    Returns:
        CoverInfo, empty when the cover is missing
    """
    info = CoverInfo()
    if cover is None:
        return info

    table_texts = [text for text in (get_text(t).strip() for t in find_children(cover, "TABLE")) if text]
    if len(table_texts) >= 1:
        info.company_name = table_texts[0]
    if len(table_texts) >= 2:
        info.report_subtitle = table_texts[1]
    if len(table_texts) >= 3:
        info.auditor_name = table_texts[2]

    cover_title = find_child(cover, "COVER-TITLE")
    if cover_title is not None:
        info.report_title = get_text(cover_title).strip()

    for group in find_children(cover, "TABLE-GROUP"):
        for table in find_children(group, "TABLE"):
            tbody = find_child(table, "TBODY")
            for row in find_children(tbody, "TR"):
                for cell in element_children(row):
                    text = get_text(cell).strip()
                    if tag_name(cell) == "TU":
                        unit = get_attr(cell, "AUNIT")
                        if unit == PERIOD_FROM_UNIT:
                            info.period_from = text
                        elif unit == PERIOD_TO_UNIT:
                            info.period_to = text
                    elif tag_name(cell) == "TD" and _is_period_line(text):
                        info.period_line = text

    logger.debug(f"Cover info: {info.to_dict()}")
    return info


def extract_toc_entries(toc: Optional[Tag]) -> list[TocEntry]:
    """
    Extract table-of-contents lines.

    Args:
        toc: TOC element (may be None)

    Returns:
        Title entry (if any) followed by one entry per non-empty row
    """
    entries = []
    if toc is None:
        return entries

    title = find_child(toc, "TITLE")
    if title is not None:
        entries.append(TocEntry(kind=TocEntryKind.TITLE, left=get_text(title).strip()))

    for table in find_children(toc, "TABLE"):
        tbody = find_child(table, "TBODY")
        for row in find_children(tbody, "TR"):
            cells = find_children(row, "TD")
            if not cells:
                continue
            left = get_text(cells[0]).strip()
            right = get_text(cells[1]).strip() if len(cells) >= 2 else ""
            if left:
                entries.append(TocEntry(kind=TocEntryKind.ENTRY, left=left, right=right))

    return entries
