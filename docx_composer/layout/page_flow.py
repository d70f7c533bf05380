"""
Page flow tracking across an ordered element stream.

The tracker keeps a ``PageCursor`` with the physical page count, the page
number a reader would see, and the vertical space used on the current page.
It advances on hard page breaks, on content that overflows the page and on
section transitions, honouring per-section page number restarts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..models.paragraph import Paragraph
from ..models.section import SectionProperties
from ..models.table import Table
from ..utils.units import parse_int
from .geometry import PageGeometry, resolve_geometry
from .height_estimator import ContentHeightEstimator


@dataclass(slots=True)
class PageCursor:
    section_index: int = 0
    physical_page: int = 1
    display_page: int = 1
    offset: float = 0.0
    suppress_next_break: bool = False
    geometry: PageGeometry = field(default_factory=PageGeometry)


class PageFlowTracker:
    """
    Walks paragraphs and tables in document order and estimates their pages.

    Args:
        sections: Section records in stream order; empty means one default section
        page_offset: Pages to subtract from the initial display number
            (front matter outside the numbered page range)
        estimator: Height estimator, a default one when omitted
        logger: Sink for diagnostics, the module logger when omitted
    """

    def __init__(self, sections: Sequence[SectionProperties], page_offset: int = 0,
                 estimator: Optional[ContentHeightEstimator] = None,
                 logger: Optional[logging.Logger] = None):
        self.sections: List[SectionProperties] = list(sections) or [SectionProperties.empty()]
        self.estimator = estimator or ContentHeightEstimator()
        self.log = logger if logger is not None else logging.getLogger(__name__)

        first = self.sections[0]
        display_page = 1 - page_offset if page_offset > 0 else 1
        start = parse_int(first.page_number_start)
        if start is not None:
            display_page = start
        self.cursor = PageCursor(display_page=display_page, geometry=resolve_geometry(first))

    # ------------------------------------------------------------------
    @property
    def display_page(self) -> int:
        return self.cursor.display_page

    @property
    def physical_page(self) -> int:
        return self.cursor.physical_page

    @property
    def current_section(self) -> SectionProperties:
        return self.sections[self.cursor.section_index]

    def explicit_break(self) -> None:
        """Hard page break before the current element."""
        cursor = self.cursor
        cursor.physical_page += 1
        cursor.offset = 0.0
        if cursor.suppress_next_break:
            cursor.suppress_next_break = False
            self.log.debug(f"Page break right after section restart ignored, page stays {cursor.display_page}")
        else:
            cursor.display_page += 1
            self.log.debug(f"Page break, page -> {cursor.display_page}")

    def no_break(self) -> None:
        # a restart only absorbs a break on the very next paragraph
        self.cursor.suppress_next_break = False

    def place(self, height: float) -> int:
        """Consume ``height`` points, starting a new page when it does not fit."""
        cursor = self.cursor
        if cursor.offset + height > cursor.geometry.content_height:
            cursor.physical_page += 1
            cursor.display_page += 1
            cursor.offset = height
            self.log.debug(f"Content overflow, page -> {cursor.display_page}")
        else:
            cursor.offset += height
        return cursor.display_page

    def end_section(self) -> None:
        """Move to the next section record, if any; the new section starts a page."""
        cursor = self.cursor
        next_index = cursor.section_index + 1
        if next_index >= len(self.sections):
            return

        section = self.sections[next_index]
        cursor.section_index = next_index
        cursor.geometry = resolve_geometry(section)
        cursor.physical_page += 1
        cursor.offset = 0.0

        start = parse_int(section.page_number_start)
        if start is not None:
            self.log.debug(f"Section {next_index} restarts numbering: {cursor.display_page} -> {start}")
            cursor.display_page = start
            cursor.suppress_next_break = True
        else:
            cursor.display_page += 1
            self.log.debug(f"Section {next_index} continues numbering, page -> {cursor.display_page}")

    # ------------------------------------------------------------------
    def advance_paragraph(self, paragraph: Paragraph) -> int:
        """
        Place a paragraph and return the display page it lands on.

        A paragraph carrying a section record is the last paragraph of the
        outgoing section, so its page is captured before the transition.
        """
        if paragraph.has_page_break():
            self.explicit_break()
        else:
            self.no_break()

        height = self.estimator.estimate_paragraph(paragraph, self.cursor.geometry.content_width)
        page = self.place(height)
        self.log.debug(
            f"Paragraph {paragraph.text[:30]!r}: height {height:.2f}, "
            f"offset {self.cursor.offset:.2f}/{self.cursor.geometry.content_height:.2f}, page {page}"
        )
        if paragraph.section is not None:
            self.end_section()
        return page

    def advance_table(self, table: Table) -> int:
        """Place a table row by row and return the page of its last row."""
        width = self.cursor.geometry.content_width
        page = self.cursor.display_page
        for row in table.rows:
            page = self.place(self.estimator.estimate_row(row, width))
        return page
