"""
Tests for Document API (high-level API).

Tests for:
- Building paragraphs, headings, tables and breaks
- Section break semantics
- TOC generation, regeneration and update
- Export
"""

import xml.etree.ElementTree as ET

import pytest

from docx_composer import Document, PageSettings
from docx_composer.exceptions import LayoutError, NoHeadingsError, StyleError, TOCNotFoundError
from docx_composer.models import (
    BookmarkEnd,
    BookmarkStart,
    Orientation,
    Paragraph,
    SectionProperties,
    StructuredDocumentTag,
)
from docx_composer.toc import TOCConfig, generated_bookmark_name

W_NS = {'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'}


def tocs(document):
    return [e for e in document.elements if isinstance(e, StructuredDocumentTag) and e.is_toc]


class TestBuilding:
    """Test cases for building documents."""

    def test_new_document_has_trailing_section(self, doc):
        assert len(doc.elements) == 1
        trailing = doc.trailing_section
        assert isinstance(trailing, SectionProperties)
        assert (trailing.page_width, trailing.page_height) == (11906, 16838)
        assert trailing.margin_left == 1440
        assert trailing.header_distance == 720

    def test_elements_stay_before_trailing_section(self, doc):
        paragraph = doc.add_paragraph("Hello", style="Normal")
        table = doc.add_table(2, 2, data=[["a", "b"], ["c", "d"]])
        assert doc.elements[:2] == [paragraph, table]
        assert doc.elements[-1] is doc.trailing_section
        assert paragraph.style_id == "Normal"

    def test_add_run(self, doc):
        paragraph = doc.add_paragraph("Plain ")
        run = doc.add_run(paragraph, "bold", bold=True, font_size=14)
        assert run.bold and run.font_size == 14
        assert paragraph.text == "Plain bold"

    def test_add_heading(self, doc):
        heading = doc.add_heading("Title", 2)
        assert heading.style_id == "Heading2"
        with pytest.raises(LayoutError):
            doc.add_heading("Bad", 10)
        with pytest.raises(LayoutError):
            doc.add_heading("Bad", 0)

    def test_add_table_invalid(self, doc):
        with pytest.raises(LayoutError):
            doc.add_table(0, 3)

    def test_add_page_break(self, doc):
        paragraph = doc.add_page_break()
        assert paragraph.has_page_break()
        assert paragraph.text == ""

    def test_add_heading_with_bookmark(self, doc):
        heading = doc.add_heading_with_bookmark("Intro", 1)
        start, paragraph, end = doc.elements[:3]
        assert paragraph is heading
        assert isinstance(start, BookmarkStart) and isinstance(end, BookmarkEnd)
        assert start.name == "_Toc1"
        assert start.bookmark_id == end.bookmark_id == "0"

        doc.add_heading_with_bookmark("Named", 1, bookmark_name="_TocNamed")
        doc.add_heading_with_bookmark("Third", 1)
        starts = [e for e in doc.elements if isinstance(e, BookmarkStart)]
        assert [s.name for s in starts] == ["_Toc1", "_TocNamed", "_Toc3"]
        assert [s.bookmark_id for s in starts] == ["0", "1", "2"]

    def test_add_element_replaces_trailing_section(self, doc):
        record = SectionProperties(page_number_start=4)
        doc.add_element(record)
        assert doc.trailing_section is record
        assert len(doc.elements) == 1


class TestSectionBreaks:
    """Test section break semantics."""

    def test_break_paragraph_keeps_outgoing_record(self, doc):
        doc.add_paragraph("portrait")
        ending = doc.add_section_break(Orientation.LANDSCAPE, start_page=3)

        assert ending.section.orientation == Orientation.PORTRAIT
        assert ending.section.page_width == 11906
        assert ending.section.page_number_start is None

        trailing = doc.trailing_section
        assert trailing.orientation == Orientation.LANDSCAPE
        assert (trailing.page_width, trailing.page_height) == (16838, 11906)
        assert trailing.page_number_start == 3
        assert trailing.margin_top == 1440

    def test_continue_numbering(self, doc):
        doc.add_section_break(start_page=2)
        doc.add_section_break()
        assert doc.trailing_section.page_number_start is None
        assert doc.body.section_records()[1].page_number_start == 2

    def test_existing_paragraph_ends_section(self, doc):
        paragraph = doc.add_paragraph("last of section one")
        assert doc.add_section_break(paragraph=paragraph) is paragraph
        assert paragraph.ends_section
        assert len(doc.elements) == 2

    def test_header_footer_inherited(self, doc):
        doc.add_header_reference("rId7")
        doc.add_footer_reference("rId8", kind="first")
        doc.add_section_break()
        trailing = doc.trailing_section
        assert [ref.rel_id for ref in trailing.header_references] == ["rId7"]
        assert trailing.title_page

    def test_header_footer_cleared(self, doc):
        doc.add_header_reference("rId7")
        ending = doc.add_section_break(inherit_header_footer=False)
        assert doc.trailing_section.header_references == []
        assert [ref.rel_id for ref in ending.section.header_references] == ["rId7"]

    def test_reference_of_same_kind_replaced(self, doc):
        doc.add_header_reference("rId1")
        doc.add_header_reference("rId2")
        assert [ref.rel_id for ref in doc.trailing_section.header_references] == ["rId2"]
        with pytest.raises(ValueError):
            doc.add_header_reference("rId3", kind="odd")

    def test_page_settings(self, doc):
        settings = PageSettings(margin_left_mm=12.7, orientation=Orientation.LANDSCAPE)
        doc.set_page_settings(settings)
        assert doc.page_settings is settings
        trailing = doc.trailing_section
        assert trailing.margin_left == 720
        assert trailing.page_width == 16838


class TestTOC:
    """Test TOC generation through the document."""

    def build(self, document):
        document.add_paragraph("封面")
        document.add_section_break(start_page=1)
        document.add_heading_with_bookmark("第一章", 1)
        document.add_paragraph("第1页内容")
        document.add_heading_with_bookmark("1.1 范围", 2)
        document.add_page_break()
        document.add_heading_with_bookmark("第二章", 1)
        return document

    def test_collect_headings(self, doc):
        entries = self.build(doc).collect_headings()
        assert [(e.text, e.level, e.page_number, e.bookmark_id) for e in entries] == [
            ("第一章", 1, 1, "_Toc1"),
            ("1.1 范围", 2, 1, "_Toc2"),
            ("第二章", 1, 2, "_Toc3"),
        ]

    def test_generate_toc_appends(self, doc):
        sdt = self.build(doc).generate_toc(TOCConfig(max_level=1))
        assert doc.elements[-2] is sdt
        assert len(sdt.paragraphs()) == 2 + 2 + 1

    def test_generate_toc_without_headings(self, doc):
        doc.add_paragraph("no headings")
        with pytest.raises(NoHeadingsError) as excinfo:
            doc.generate_toc()
        assert excinfo.value.max_level == 3

    def test_generate_toc_at_position(self, doc):
        placeholder = doc.add_paragraph("[TOC]")
        doc.add_page_break()
        self.build(doc)
        index = doc.body.index(placeholder)
        sdt = doc.generate_toc_at_position(TOCConfig(), index, index)

        assert doc.elements[0] is sdt
        assert placeholder not in doc.elements
        assert placeholder.parent is None

    def test_insert_toc_keeps_section_ending_paragraph(self, doc):
        entries = self.build(doc).collect_headings()
        ending = doc.elements[1]
        assert ending.ends_section

        sdt = doc.insert_toc(entries, 1)
        assert doc.elements[1] is sdt
        assert doc.elements[2] is ending
        assert len(doc.body.section_records()) == 2

    def test_insert_toc_keeps_bookmark(self, doc):
        entries = self.build(doc).collect_headings()
        start = doc.elements[2]
        assert isinstance(start, BookmarkStart)

        sdt = doc.insert_toc(entries, 2)
        assert doc.elements[2] is sdt
        assert doc.elements[3] is start
        assert [e.bookmark_id for e in doc.collect_headings()] == ["_Toc1", "_Toc2", "_Toc3"]

    def test_auto_generate_toc_stays_below_earlier_heading(self, doc):
        preface = doc.add_heading("Preface", 1)
        placeholder = doc.add_paragraph("[TOC]")
        doc.add_heading("Body", 1)
        index = doc.body.index(placeholder)
        doc.generate_toc_at_position(TOCConfig(), index, index)

        sdt = doc.auto_generate_toc()
        position = doc.body.index(sdt)
        assert doc.elements[position - 2] is preface
        assert isinstance(doc.elements[position - 1], BookmarkEnd)
        assert isinstance(doc.elements[position + 1], BookmarkStart)

    def test_insert_toc_out_of_range_appends(self, doc):
        entries = self.build(doc).collect_headings()
        sdt = doc.insert_toc(entries, 999)
        assert doc.elements[-2] is sdt

    def test_auto_generate_toc(self, doc):
        doc.add_heading("Overview", 1)
        doc.add_heading_with_bookmark("Kept", 2, bookmark_name="_TocKept")
        sdt = doc.auto_generate_toc()

        assert doc.elements[0] is sdt
        starts = [e for e in doc.elements if isinstance(e, BookmarkStart)]
        assert sorted(s.name for s in starts) == sorted([generated_bookmark_name("Overview"), "_TocKept"])
        assert len({s.bookmark_id for s in starts}) == 2

    def test_auto_generate_toc_replaces_existing(self, doc):
        self.build(doc)
        doc.auto_generate_toc()
        doc.add_heading("第三章", 1)
        doc.auto_generate_toc(TOCConfig(max_level=2))

        assert len(tocs(doc)) == 1
        assert doc.find_toc_index() == 0
        headings = [e for e in doc.elements if isinstance(e, Paragraph) and e.style_id == "Heading1"]
        starts = [e for e in doc.elements if isinstance(e, BookmarkStart)]
        assert len(starts) == len(headings) + 1

    def test_auto_generate_toc_without_headings(self, doc):
        doc.add_paragraph("text")
        with pytest.raises(NoHeadingsError):
            doc.auto_generate_toc()
        assert len(doc.elements) == 2

    def test_update_toc(self, doc):
        self.build(doc).generate_toc()
        doc.add_heading_with_bookmark("第三章", 1)
        index = doc.find_toc_index()
        sdt = doc.update_toc()

        assert doc.find_toc_index() == index
        assert len(tocs(doc)) == 1
        assert len(sdt.paragraphs()) == 2 + 4 + 1

    def test_update_toc_without_toc(self, doc):
        doc.add_heading("H", 1)
        with pytest.raises(TOCNotFoundError):
            doc.update_toc()

    def test_list_headings_and_counts(self, doc):
        self.build(doc)
        doc.add_heading("", 3)
        assert len(doc.list_headings()) == 3
        assert doc.get_heading_count() == {1: 2, 2: 1, 3: 1}

    def test_set_toc_style(self, doc):
        doc.set_toc_style(2, font_name="SimSun", font_size=12, bold=True)
        style = doc.style_manager.get_style("TOC2")
        assert (style["font_name"], style["font_size"], style["bold"]) == ("SimSun", 12, True)
        with pytest.raises(StyleError):
            doc.set_toc_style(0)


class TestExport:
    """Test XML export through the document."""

    def test_to_xml(self, doc):
        doc.add_heading_with_bookmark("Intro", 1)
        doc.generate_toc()
        root = ET.fromstring(doc.to_xml())
        body = root.find('w:body', W_NS)
        assert body is not None
        assert body.find('w:sdt', W_NS) is not None
        assert body[-1].tag.endswith('sectPr')

    def test_save_xml(self, doc, tmp_path):
        doc.add_paragraph("content")
        path = tmp_path / "out" / "document.xml"
        doc.save_xml(path)
        assert path.read_text(encoding="utf-8").startswith("<?xml")

    def test_styles_xml(self, doc):
        assert 'w:styleId="TOC1"' in doc.styles_xml()
