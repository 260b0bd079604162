"""
Note Splitter for the footnotes section.

Notes start with a paragraph of the form "N. Title". Each note runs until
the next start paragraph. Notes numbered above a configurable maximum are
folded into the last accepted note so the workbook keeps a bounded number
of note sheets.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import Tag

from .markup import children_excluding, get_text, is_tag
from .models import NoteUnit

logger = logging.getLogger(__name__)

DEFAULT_MAX_NOTE_NUMBER = 33

NOTE_NUMBER_PATTERN = re.compile(r"^(\d+)\.\s")


@dataclass
class NoteStart:
    """Position of a note-start paragraph among the section children."""
    index: int
    number: int


@dataclass
class _MergeState:
    accepted: list[NoteUnit] = field(default_factory=list)
    current: Optional[NoteUnit] = None


def find_note_starts(children: list[Tag]) -> list[NoteStart]:
    """Find paragraphs whose text starts with a note number."""
    starts = []
    for index, child in enumerate(children):
        if not is_tag(child, "P"):
            continue
        match = NOTE_NUMBER_PATTERN.match(get_text(child).strip())
        if match:
            starts.append(NoteStart(index=index, number=int(match.group(1))))
    return starts


def _merge_step(state: _MergeState, unit: NoteUnit, max_note_number: int) -> _MergeState:
    if unit.number <= max_note_number or state.current is None:
        state.accepted.append(unit)
        state.current = unit
    else:
        state.current.elements.extend(unit.elements)
    return state


def merge_overflow_notes(units: list[NoteUnit], max_note_number: int) -> list[NoteUnit]:
    """
    Fold notes numbered above max_note_number into the last accepted note.

    When the very first note already overflows it is accepted as-is, so no
    content is dropped.
    """
    state = _MergeState()
    for unit in units:
        state = _merge_step(state, unit, max_note_number)
    return state.accepted


class NoteSplitter:
    """Partitions the notes section into numbered units."""

    def __init__(self, max_note_number: int = DEFAULT_MAX_NOTE_NUMBER):
        """
        Initialize splitter.

        Args:
            max_note_number: Highest note number that gets its own unit
        """
        self.max_note_number = max_note_number

    def split(self, section: Optional[Tag]) -> list[NoteUnit]:
        """
        Split a notes section into note units.

        Args:
            section: SECTION-2 handle for the notes (may be None)

        Returns:
            Note units in source order
        """
        if section is None:
            return []

        children = children_excluding(section, ("TITLE",))
        starts = find_note_starts(children)

        if not starts:
            logger.info("No numbered notes found, keeping notes section as a single unit")
            return [NoteUnit(number=1, elements=children)] if children else []

        units = []
        for position, start in enumerate(starts):
            end = starts[position + 1].index if position + 1 < len(starts) else len(children)
            elements = [child for child in children[start.index:end] if not is_tag(child, "PGBRK")]
            if elements:
                units.append(NoteUnit(number=start.number, elements=elements))

        notes = merge_overflow_notes(units, self.max_note_number)
        logger.info(f"Split {len(notes)} notes ({len(units) - len(notes)} merged past note {self.max_note_number})")
        return notes


def split_notes(section: Optional[Tag], max_note_number: int = DEFAULT_MAX_NOTE_NUMBER) -> list[NoteUnit]:
    """
    Convenience function to split a notes section.

    Args:
        section: Notes SECTION-2 handle
        max_note_number: Highest note number that gets its own unit

    Returns:
        List of NoteUnit
    """
    return NoteSplitter(max_note_number=max_note_number).split(section)
