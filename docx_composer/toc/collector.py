"""
Heading and bookmark collection with estimated page numbers.

The collector replays the element stream through a ``PageFlowTracker`` and
records every heading paragraph together with the page it is expected to
land on and the bookmark a TOC entry should link to.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..layout.height_estimator import ContentHeightEstimator
from ..layout.page_flow import PageFlowTracker
from ..models.bookmark import BookmarkEnd, BookmarkStart
from ..models.paragraph import Paragraph
from ..models.section import SectionProperties
from ..models.table import Table
from .entry import TOCEntry

FALLBACK_BOOKMARK_PREFIX = "_Toc_"


def fallback_bookmark_id(text: str) -> str:
    """Anchor used for a heading that is not wrapped in a bookmark."""
    return FALLBACK_BOOKMARK_PREFIX + text.replace(" ", "_")


def text_hash_id(text: str) -> int:
    """Stable number in 10000-99999 derived from the heading text."""
    value = 0
    for char in text:
        value = value * 31 + ord(char)
    return abs(value) % 90000 + 10000


def generated_bookmark_name(text: str) -> str:
    return f"_Toc{text_hash_id(text)}"


def section_records(elements: Sequence) -> List[SectionProperties]:
    records: List[SectionProperties] = []
    for element in elements:
        if isinstance(element, Paragraph) and element.section is not None:
            records.append(element.section)
        elif isinstance(element, SectionProperties):
            records.append(element)
    return records


class HeadingCollector:
    """
    Collects TOC entries from an ordered element stream.

    Args:
        heading_level: Maps a paragraph style id to a heading level, 0 for
            body text (usually ``StyleManager.heading_level``)
        estimator: Height estimator shared with the page flow tracker
        logger: Diagnostics sink handed to the tracker
    """

    def __init__(self, heading_level: Callable[[Optional[str]], int],
                 estimator: Optional[ContentHeightEstimator] = None,
                 logger: Optional[logging.Logger] = None):
        self.heading_level = heading_level
        self.estimator = estimator or ContentHeightEstimator()
        self.log = logger if logger is not None else logging.getLogger(__name__)

    def collect(self, elements: Sequence, max_level: int, skip_index: int = -1,
                page_offset: int = 0) -> List[TOCEntry]:
        """
        Walk ``elements`` and return the headings up to ``max_level``.

        Args:
            elements: Body elements in document order
            max_level: Deepest heading level to include
            skip_index: Index of an element to ignore (an existing TOC), -1 for none
            page_offset: Front-matter pages excluded from the numbering

        Returns:
            Entries in document order
        """
        tracker = PageFlowTracker(section_records(elements), page_offset=page_offset,
                                  estimator=self.estimator, logger=self.log)
        entries: List[TOCEntry] = []
        pending_bookmark: Optional[str] = None

        for index, element in enumerate(elements):
            if index == skip_index:
                continue

            if isinstance(element, BookmarkStart):
                pending_bookmark = element.name
            elif isinstance(element, BookmarkEnd):
                pending_bookmark = None
            elif isinstance(element, Paragraph):
                page = tracker.advance_paragraph(element)
                level = self.heading_level(element.style_id)
                text = element.text
                if 0 < level <= max_level and text:
                    bookmark_id = pending_bookmark or fallback_bookmark_id(text)
                    pending_bookmark = None
                    entries.append(TOCEntry(text=text, level=level, page_number=page,
                                            bookmark_id=bookmark_id))
                    self.log.debug(f"Heading L{level} {text!r} -> page {page} ({bookmark_id})")
            elif isinstance(element, Table):
                tracker.advance_table(element)

        self.log.info(f"Collected {len(entries)} headings up to level {max_level}")
        return entries
