"""
Statement Splitter for the financial-statements section.

Each statement follows the same layout inside the section:

    TABLE (BORDER=0)   title, e.g. "재 무 상 태 표"
    TABLE (BORDER=1)   data, with a THEAD
    TABLE              optional footnote referencing 주석 / 별첨

Paragraphs, warnings and insertions may sit between the title and data
tables. Titles are classified by keyword, see classify_statement_title().
"""

import logging
import re
from typing import Optional

from bs4 import Tag

from .markup import children_excluding, find_child, get_attr, get_text, is_tag, tag_name
from .models import StatementBlock, StatementBundle, StatementType

logger = logging.getLogger(__name__)

# Nodes skipped when walking back from a data table to its title table
DECORATION_TAGS = frozenset({"P", "WARNING", "INSERTION"})

# Nodes left out of the common header before the first statement
HEADER_SKIP_TAGS = frozenset({"INSERTION", "WARNING", "PGBRK", "TITLE"})

# Checked in order, first match wins
STATEMENT_TITLE_KEYWORDS = (
    ("재무상태표", StatementType.BALANCE_SHEET),
    ("손익계산서", StatementType.INCOME_STATEMENT),
    ("자본변동표", StatementType.EQUITY_STATEMENT),
    ("현금흐름표", StatementType.CASH_FLOW),
)

# 주석 (notes) / 별첨 (appendix)
FOOTNOTE_MARKERS = ("주석", "별첨")

_WHITESPACE = re.compile(r"\s")


def classify_statement_title(title_text: str) -> StatementType:
    """
    Classify a statement title by keyword containment.

    Whitespace is removed first since titles are usually letter-spaced
    ("재 무 상 태 표").
    """
    compact = _WHITESPACE.sub("", title_text)
    for keyword, statement_type in STATEMENT_TITLE_KEYWORDS:
        if keyword in compact:
            return statement_type
    return StatementType.NONE


def is_statement_data_table(node: Tag) -> bool:
    """Bordered TABLE with a THEAD block."""
    return (
        is_tag(node, "TABLE")
        and get_attr(node, "BORDER") == "1"
        and find_child(node, "THEAD") is not None
    )


def find_title_index(children: list[Tag], data_index: int) -> int:
    """
    Walk back from a data table past decoration nodes.

    Returns:
        Index of the nearest preceding non-decoration node, or -1
    """
    index = data_index - 1
    while index >= 0 and tag_name(children[index]) in DECORATION_TAGS:
        index -= 1
    return index


def is_footnote_table(node: Optional[Tag]) -> bool:
    """TABLE whose text references the notes or an appendix."""
    if node is None or not is_tag(node, "TABLE"):
        return False
    text = get_text(node).strip()
    return any(marker in text for marker in FOOTNOTE_MARKERS)


class StatementSplitter:
    """Partitions the financial-statements section into statement blocks."""

    def find_blocks(self, children: list[Tag]) -> list[StatementBlock]:
        """
        Locate statement blocks among the section children.

        Args:
            children: Section children with SECTION-2 removed

        Returns:
            Statement blocks in document order
        """
        blocks = []
        for data_index, node in enumerate(children):
            if not is_statement_data_table(node):
                continue

            title_index = find_title_index(children, data_index)
            title_text = ""
            if title_index >= 0 and is_tag(children[title_index], "TABLE"):
                title_text = get_text(children[title_index]).strip()

            statement_type = classify_statement_title(title_text)
            if statement_type == StatementType.NONE:
                logger.debug(f"Discarding data table at index {data_index}: unrecognized title {title_text[:40]!r}")
                continue

            end = data_index
            footnote_index = data_index + 1
            if footnote_index < len(children) and is_footnote_table(children[footnote_index]):
                end = footnote_index

            start = title_index
            if blocks and start <= blocks[-1].end:
                # Blocks never overlap; a shared table stays with the earlier block
                start = blocks[-1].end + 1
            blocks.append(StatementBlock(statement_type=statement_type, start=start, end=end))

        return blocks

    def split(self, section: Optional[Tag]) -> StatementBundle:
        """
        Split the financial-statements section.

        Args:
            section: SECTION-1 handle for the financial statements (may be None)

        Returns:
            StatementBundle with one bucket per statement type
        """
        bundle = StatementBundle()
        if section is None:
            return bundle

        children = children_excluding(section, ("SECTION-2",))
        blocks = self.find_blocks(children)

        first_start = blocks[0].start if blocks else len(children)
        bundle.common_header = [
            child for child in children[:first_start]
            if tag_name(child) not in HEADER_SKIP_TAGS
        ]

        for block in blocks:
            bundle.bucket(block.statement_type).extend(children[block.start:block.end + 1])

        counts = ", ".join(
            f"{statement_type.value}={len(bundle.bucket(statement_type))}"
            for _, statement_type in STATEMENT_TITLE_KEYWORDS
        )
        logger.info(f"Split {len(blocks)} statement blocks ({counts})")

        return bundle


def split_statements(section: Optional[Tag]) -> StatementBundle:
    """
    Convenience function to split a financial-statements section.

    Args:
        section: Financial statements SECTION-1 handle

    Returns:
        StatementBundle
    """
    return StatementSplitter().split(section)
