"""
Document API - high-level API for composing WordprocessingML documents.

Builds a body of paragraphs, tables, bookmarks and section breaks and
generates a table of contents whose page numbers are estimated from the
content, so the document shows plausible numbers before Word updates its
fields.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union
from pathlib import Path
import logging

from .exceptions import DocxComposerError, LayoutError, NoHeadingsError, StyleError, TOCNotFoundError
from .export.xml_exporter import XMLExporter
from .models.body import Body, BodyElement
from .models.bookmark import BookmarkEnd, BookmarkStart
from .models.paragraph import Paragraph
from .models.run import Run
from .models.sdt import StructuredDocumentTag
from .models.section import HeaderFooterReference, Orientation, SectionProperties
from .models.table import Table
from .styles.style_manager import MAX_HEADING_LEVEL, StyleManager, heading_style_id, toc_style_id
from .toc.builder import TOCBuilder
from .toc.collector import HeadingCollector, generated_bookmark_name
from .toc.config import TOCConfig
from .toc.entry import TOCEntry
from .utils.units import mm_to_twips, parse_int


@dataclass
class PageSettings:
    """
    Page setup applied to new sections, in millimetres.

    Defaults to A4 portrait with one-inch margins and half-inch
    header/footer distances.
    """
    page_width_mm: float = 210.0
    page_height_mm: float = 297.0
    orientation: Orientation = Orientation.PORTRAIT
    margin_top_mm: float = 25.4
    margin_bottom_mm: float = 25.4
    margin_left_mm: float = 25.4
    margin_right_mm: float = 25.4
    header_distance_mm: float = 12.7
    footer_distance_mm: float = 12.7

    def apply_margins(self, section: SectionProperties) -> None:
        section.set_margins(
            top=mm_to_twips(self.margin_top_mm),
            bottom=mm_to_twips(self.margin_bottom_mm),
            left=mm_to_twips(self.margin_left_mm),
            right=mm_to_twips(self.margin_right_mm),
            header=mm_to_twips(self.header_distance_mm),
            footer=mm_to_twips(self.footer_distance_mm),
        )

    def apply(self, section: SectionProperties) -> None:
        """Write size, orientation and margins into a section record."""
        width = mm_to_twips(self.page_width_mm)
        height = mm_to_twips(self.page_height_mm)
        if self.orientation == Orientation.LANDSCAPE and width < height:
            width, height = height, width
        section.page_width = width
        section.page_height = height
        section.orientation = self.orientation
        self.apply_margins(section)


class Document:
    """
    High-level API for composing a document.

    The body always ends with a standalone ``SectionProperties`` record
    describing the last section; section breaks attach a copy of the
    outgoing record to the paragraph that ends the section.

    Args:
        page_settings: Page setup for the first and later sections
        style_manager: Style registry; a default one when omitted
        logger: Diagnostics sink for TOC estimation
    """

    def __init__(self, page_settings: Optional[PageSettings] = None,
                 style_manager: Optional[StyleManager] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self.log = logger or logging.getLogger(__name__)
        self.style_manager = style_manager or StyleManager()
        self._page_settings = page_settings or PageSettings()
        self._body = Body()
        self._toc_config: Optional[TOCConfig] = None

        trailing = SectionProperties()
        self._page_settings.apply(trailing)
        self._body.append(trailing)

    @property
    def body(self) -> Body:
        return self._body

    @property
    def elements(self) -> List[BodyElement]:
        return self._body.elements

    @property
    def trailing_section(self) -> SectionProperties:
        """Record of the last section, kept at the end of the body."""
        last = self._body[-1] if len(self._body) else None
        if not isinstance(last, SectionProperties):
            last = SectionProperties()
            self._page_settings.apply(last)
            self._body.append(last)
        return last

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def add_element(self, element: BodyElement) -> BodyElement:
        """
        Append a body element before the trailing section record.

        A ``SectionProperties`` element replaces the trailing record.
        """
        trailing = self.trailing_section
        if isinstance(element, SectionProperties):
            self._body.replace(self._body.index(trailing), [element])
            return element
        self._body.insert(self._body.index(trailing), element)
        return element

    def add_paragraph(self, text: str = "", style: Optional[str] = None) -> Paragraph:
        """
        Add a paragraph to the document.

        Args:
            text: Paragraph text
            style: Style id (e.g. "Heading1", "Normal")

        Returns:
            Paragraph: The created paragraph
        """
        paragraph = Paragraph(text, style_id=style)
        self.add_element(paragraph)
        return paragraph

    def add_run(self, paragraph: Paragraph, text: str, **formatting: Any) -> Run:
        """
        Add a formatted run to a paragraph.

        Args:
            paragraph: Target paragraph
            text: Run text
            **formatting: ``Run`` keywords (bold, italic, font_size, color, ...)

        Returns:
            Run: The created run
        """
        return paragraph.add_text(text, **formatting)

    def add_heading(self, text: str, level: int) -> Paragraph:
        """Add a heading paragraph styled ``Heading<level>``."""
        if not isinstance(level, int) or not 1 <= level <= MAX_HEADING_LEVEL:
            raise LayoutError(f"Heading level must be between 1 and {MAX_HEADING_LEVEL}", str(level))
        return self.add_paragraph(text, style=heading_style_id(level))

    def add_heading_with_bookmark(self, text: str, level: int,
                                  bookmark_name: Optional[str] = None) -> Paragraph:
        """
        Add a heading wrapped in a bookmark so TOC entries can link to it.

        Args:
            text: Heading text
            level: Heading level 1-9
            bookmark_name: Bookmark name; ``_Toc<n>`` when omitted

        Returns:
            Paragraph: The heading paragraph
        """
        if not isinstance(level, int) or not 1 <= level <= MAX_HEADING_LEVEL:
            raise LayoutError(f"Heading level must be between 1 and {MAX_HEADING_LEVEL}", str(level))
        names = self._bookmark_names()
        if not bookmark_name:
            counter = len(names) + 1
            while f"_Toc{counter}" in names:
                counter += 1
            bookmark_name = f"_Toc{counter}"
        bookmark_id = str(self._next_bookmark_id())

        self.add_element(BookmarkStart(bookmark_name, bookmark_id))
        paragraph = self.add_heading(text, level)
        self.add_element(BookmarkEnd(bookmark_id))
        self.log.debug(f"Heading {text!r} bookmarked as {bookmark_name}")
        return paragraph

    def add_page_break(self) -> Paragraph:
        """Add a paragraph holding a hard page break."""
        paragraph = Paragraph()
        paragraph.add_page_break()
        self.add_element(paragraph)
        return paragraph

    def add_table(self, rows: int, cols: int, data: Optional[List[List[str]]] = None,
                  style: Optional[str] = None) -> Table:
        """
        Add a table with ``rows`` x ``cols`` cells, filled row-wise from ``data``.
        """
        if rows < 1 or cols < 1:
            raise LayoutError("Table needs at least one row and one column", f"{rows}x{cols}")
        table = Table.create(rows, cols, data=data, style=style)
        self.add_element(table)
        return table

    def add_section_break(self, orientation: Orientation = Orientation.PORTRAIT,
                          start_page: int = 0, inherit_header_footer: bool = True,
                          paragraph: Optional[Paragraph] = None) -> Paragraph:
        """
        End the current section and start a new one.

        The paragraph ending the section takes a copy of the current section
        record; the trailing record then describes the new section.

        Args:
            orientation: Orientation of the new section
            start_page: Restart page numbering at this value when > 0
            inherit_header_footer: Keep the header/footer references
            paragraph: Paragraph that ends the section; an empty one is
                added when omitted

        Returns:
            Paragraph: The paragraph carrying the outgoing section record
        """
        trailing = self.trailing_section
        if paragraph is None:
            paragraph = self.add_paragraph()
        elif paragraph.parent is not self._body:
            self.add_element(paragraph)
        paragraph.section = trailing.copy()

        trailing.set_orientation(orientation)
        self._page_settings.apply_margins(trailing)
        start = parse_int(start_page)
        trailing.page_number_start = start if start is not None and start > 0 else None
        if not inherit_header_footer:
            trailing.header_references = []
            trailing.footer_references = []
            trailing.title_page = False

        self.log.debug(
            f"Section break: {orientation.value}, "
            f"start page {trailing.page_number_start or 'continued'}"
        )
        return paragraph

    def add_header_reference(self, rel_id: str, kind: str = "default") -> HeaderFooterReference:
        """Attach a header part to the current section, replacing one of the same kind."""
        return self._set_reference(self.trailing_section.header_references, rel_id, kind)

    def add_footer_reference(self, rel_id: str, kind: str = "default") -> HeaderFooterReference:
        """Attach a footer part to the current section, replacing one of the same kind."""
        return self._set_reference(self.trailing_section.footer_references, rel_id, kind)

    def _set_reference(self, references: List[HeaderFooterReference], rel_id: str,
                       kind: str) -> HeaderFooterReference:
        if kind not in ("default", "first", "even"):
            raise ValueError(f"Unsupported header/footer type: {kind}")
        reference = HeaderFooterReference(kind=kind, rel_id=rel_id)
        references[:] = [ref for ref in references if ref.kind != kind]
        references.append(reference)
        if kind == "first":
            self.trailing_section.title_page = True
        return reference

    # ------------------------------------------------------------------
    # Page settings
    # ------------------------------------------------------------------
    @property
    def page_settings(self) -> PageSettings:
        return self._page_settings

    def set_page_settings(self, settings: PageSettings) -> None:
        """Replace the page setup and apply it to the current section."""
        self._page_settings = settings
        settings.apply(self.trailing_section)

    # ------------------------------------------------------------------
    # Table of contents
    # ------------------------------------------------------------------
    def collect_headings(self, max_level: int = MAX_HEADING_LEVEL, skip_index: int = -1,
                         page_offset: int = 0) -> List[TOCEntry]:
        """
        Collect headings with estimated page numbers and bookmark anchors.

        Args:
            max_level: Deepest heading level to include
            skip_index: Body index to ignore (e.g. a TOC placeholder)
            page_offset: Front-matter pages excluded from numbering

        Returns:
            Entries in document order
        """
        collector = HeadingCollector(self.style_manager.heading_level, logger=self.log)
        return collector.collect(self._body.elements, max_level, skip_index=skip_index,
                                 page_offset=page_offset)

    def find_toc_index(self) -> int:
        """Body index of the generated TOC, -1 when there is none."""
        for index, element in enumerate(self._body):
            if isinstance(element, StructuredDocumentTag) and element.is_toc:
                return index
        return -1

    def insert_toc(self, entries: Sequence[TOCEntry], index: int,
                   config: Optional[TOCConfig] = None) -> StructuredDocumentTag:
        """
        Build a TOC from ``entries`` and place it at ``index``.

        A plain paragraph at ``index`` is replaced. A paragraph that ends a
        section and any other element are kept, with the TOC inserted
        before them. An index outside the body appends the TOC after the
        last element.
        """
        config = config or TOCConfig.default()
        sdt = TOCBuilder(config).build(entries)
        trailing_index = self._body.index(self.trailing_section)
        if 0 <= index < trailing_index:
            target = self._body[index]
            if isinstance(target, Paragraph) and not target.ends_section:
                self._body.replace(index, [sdt])
            else:
                self.log.debug(f"Keeping {type(target).__name__} at index {index} below the TOC")
                self._body.insert(index, sdt)
        else:
            self.add_element(sdt)
        self._toc_config = config
        return sdt

    def generate_toc_at_position(self, config: Optional[TOCConfig], insert_index: int,
                                 skip_index: int) -> StructuredDocumentTag:
        """
        Generate a TOC replacing the element at ``insert_index``.

        ``skip_index`` is left out of the page estimation, typically the
        placeholder paragraph the TOC replaces.
        """
        config = config or TOCConfig.default()
        entries = self.collect_headings(config.max_level, skip_index, config.page_offset)
        if not entries:
            raise NoHeadingsError(config.max_level)
        self.log.info(f"Generating TOC with {len(entries)} entries at index {insert_index}")
        return self.insert_toc(entries, insert_index, config)

    def generate_toc(self, config: Optional[TOCConfig] = None) -> StructuredDocumentTag:
        """Generate a TOC and append it at the end of the document."""
        config = config or TOCConfig.default()
        entries = self.collect_headings(config.max_level, page_offset=config.page_offset)
        if not entries:
            raise NoHeadingsError(config.max_level)
        return self.insert_toc(entries, len(self._body), config)

    def auto_generate_toc(self, config: Optional[TOCConfig] = None) -> StructuredDocumentTag:
        """
        Bookmark every heading and (re)build the TOC.

        An existing TOC is replaced in place; otherwise the TOC is inserted
        at the start of the document. Headings without a bookmark get one
        named ``_Toc<number>`` derived from their text.
        """
        config = config or TOCConfig.default()
        toc_index = self.find_toc_index()
        if not self.collect_headings(config.max_level, toc_index, config.page_offset):
            raise NoHeadingsError(config.max_level)

        anchor = None
        if toc_index != -1:
            self._body.pop(toc_index)
            if toc_index > 0:
                anchor = self._body[toc_index - 1]
        added = self._bookmark_headings(config.max_level)
        self.log.info(f"Added {added} heading bookmarks")

        insert_index = 0
        if anchor is not None:
            # step past the bookmark end wrapped around a heading just before the TOC
            insert_index = self._body.index(anchor) + 1
            if isinstance(self._body[insert_index], BookmarkEnd):
                insert_index += 1

        # the TOC is not in the body yet, so it is left out of the estimate
        entries = self.collect_headings(config.max_level, page_offset=config.page_offset)
        sdt = TOCBuilder(config).build(entries)
        self._body.insert(insert_index, sdt)
        self._toc_config = config
        return sdt

    def update_toc(self) -> StructuredDocumentTag:
        """Rebuild the entries of the existing TOC in place."""
        toc_index = self.find_toc_index()
        if toc_index == -1:
            raise TOCNotFoundError("No table of contents in document")
        config = self._toc_config or TOCConfig.default()
        entries = self.collect_headings(config.max_level, toc_index, config.page_offset)
        if not entries:
            raise NoHeadingsError(config.max_level)
        sdt = TOCBuilder(config).build(entries)
        self._body.replace(toc_index, [sdt])
        return sdt

    def list_headings(self) -> List[TOCEntry]:
        return self.collect_headings(MAX_HEADING_LEVEL)

    def get_heading_count(self) -> Dict[int, int]:
        """Number of heading paragraphs per level."""
        counts: Counter = Counter()
        for paragraph in self._body.paragraphs():
            level = self.style_manager.heading_level(paragraph.style_id)
            if level > 0:
                counts[level] += 1
        return dict(counts)

    def set_toc_style(self, level: int, font_name: Optional[str] = None,
                      font_size: Optional[float] = None, bold: Optional[bool] = None,
                      color: Optional[str] = None) -> Dict[str, Any]:
        """Update the ``TOC<level>`` paragraph style."""
        if not isinstance(level, int) or not 1 <= level <= MAX_HEADING_LEVEL:
            raise StyleError(f"TOC level must be between 1 and {MAX_HEADING_LEVEL}", str(level))
        return self.style_manager.update_style(toc_style_id(level), font_name=font_name,
                                               font_size=font_size, bold=bold, color=color)

    # ------------------------------------------------------------------
    def _bookmark_names(self) -> set:
        return {element.name for element in self._body if isinstance(element, BookmarkStart)}

    def _next_bookmark_id(self) -> int:
        ids = [parse_int(element.bookmark_id) for element in self._body
               if isinstance(element, (BookmarkStart, BookmarkEnd))]
        return max((value for value in ids if value is not None), default=-1) + 1

    def _bookmark_headings(self, max_level: int) -> int:
        """Wrap unbookmarked headings up to ``max_level`` in bookmarks."""
        names = self._bookmark_names()
        next_id = self._next_bookmark_id()
        elements: List[BodyElement] = []
        pending = False
        added = 0

        for element in self._body.elements:
            if isinstance(element, BookmarkStart):
                pending = True
            elif isinstance(element, BookmarkEnd):
                pending = False
            elif isinstance(element, Paragraph):
                level = self.style_manager.heading_level(element.style_id)
                if 0 < level <= max_level and element.text:
                    if pending:
                        pending = False
                    else:
                        name = generated_bookmark_name(element.text)
                        suffix = 1
                        while name in names:
                            suffix += 1
                            name = f"{generated_bookmark_name(element.text)}_{suffix}"
                        names.add(name)
                        elements.append(BookmarkStart(name, str(next_id)))
                        elements.append(element)
                        elements.append(BookmarkEnd(str(next_id)))
                        next_id += 1
                        added += 1
                        continue
            elements.append(element)

        self._body.set_elements(elements)
        return added

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def to_xml(self) -> str:
        """WordprocessingML ``document.xml`` content."""
        return XMLExporter(self).regenerate_wordml()

    def save_xml(self, file_path: Union[str, Path]) -> None:
        """
        Write ``document.xml`` content to a file.

        Examples:
            >>> doc.save_xml("document.xml")
        """
        if not XMLExporter(self).export(file_path):
            raise DocxComposerError("Failed to save document", str(file_path))

    def styles_xml(self) -> str:
        """WordprocessingML ``styles.xml`` content."""
        return self.style_manager.to_xml()

    def get_text(self) -> str:
        return self._body.get_text()
