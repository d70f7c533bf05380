"""
Tests for the document models.
"""

import pytest

from docx_composer.models import (
    Body,
    BookmarkEnd,
    BookmarkStart,
    HeaderFooterReference,
    Orientation,
    Paragraph,
    Run,
    SectionProperties,
    StructuredDocumentTag,
    Table,
    TableCell,
    TableRow,
)


class TestRun:
    """Test cases for Run."""

    def test_defaults(self):
        run = Run("text")
        assert run.get_text() == "text"
        assert not run.is_page_break
        assert not run.is_field_code
        assert not run.has_formatting()

    def test_page_break(self):
        assert Run(break_type="page").is_page_break
        assert not Run(break_type="line").is_page_break

    def test_field_code(self):
        assert Run(field_char="begin").is_field_code
        assert Run(instr_text=" PAGEREF x ").is_field_code

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            Run(break_type="section")
        with pytest.raises(ValueError):
            Run(field_char="middle")

    def test_formatting(self):
        assert Run("a", bold=True).has_formatting()
        assert Run("a", font_size=12).has_formatting()


class TestParagraph:
    """Test cases for Paragraph."""

    def test_text_from_runs(self):
        paragraph = Paragraph("Hello")
        paragraph.add_text(" world", bold=True)
        assert paragraph.text == "Hello world"
        assert paragraph.runs[1].bold

    def test_field_instructions_not_in_text(self):
        paragraph = Paragraph()
        paragraph.add_run(Run(field_char="begin"))
        paragraph.add_run(Run(instr_text=" PAGEREF _Toc1 \\h "))
        paragraph.add_run(Run(field_char="separate"))
        paragraph.add_text("3")
        paragraph.add_run(Run(field_char="end"))
        assert paragraph.text == "3"

    def test_page_break_detection(self):
        paragraph = Paragraph("x")
        assert not paragraph.has_page_break()
        paragraph.page_break_before = True
        assert paragraph.has_page_break()

        other = Paragraph()
        other.add_page_break()
        assert other.has_page_break()

    def test_add_run_type_check(self):
        with pytest.raises(TypeError):
            Paragraph().add_run("text")

    def test_set_text_replaces_runs(self):
        paragraph = Paragraph("a")
        paragraph.add_text("b")
        paragraph.set_text("c")
        assert len(paragraph.runs) == 1
        assert paragraph.text == "c"
        assert paragraph.children == paragraph.runs

    def test_spacing_and_indentation(self):
        paragraph = Paragraph()
        assert not paragraph.has_spacing()
        paragraph.set_spacing(before=240, after=120)
        assert paragraph.has_spacing()
        assert not paragraph.has_indentation()
        paragraph.left_indent = 420
        assert paragraph.has_indentation()

    def test_section_marker(self):
        paragraph = Paragraph()
        assert not paragraph.ends_section
        paragraph.section = SectionProperties()
        assert paragraph.ends_section
        assert paragraph.to_dict()['ends_section'] is True


class TestSectionProperties:
    """Test cases for section records."""

    def test_a4_defaults(self):
        section = SectionProperties()
        assert (section.page_width, section.page_height) == (11906, 16838)
        assert section.margin_top == 1440
        assert not section.restarts_numbering

    def test_empty_record(self):
        section = SectionProperties.empty()
        assert section.page_width is None
        assert section.margin_left is None

    def test_orientation_sets_size(self):
        section = SectionProperties()
        section.set_orientation(Orientation.LANDSCAPE)
        assert (section.page_width, section.page_height) == (16838, 11906)
        section.set_orientation(Orientation.PORTRAIT)
        assert (section.page_width, section.page_height) == (11906, 16838)

    def test_restart(self):
        assert SectionProperties(page_number_start=1).restarts_numbering
        assert SectionProperties(page_number_start="5").restarts_numbering

    def test_copy_is_detached(self):
        section = SectionProperties(page_number_start=3)
        section.header_references.append(HeaderFooterReference("default", "rId1"))
        clone = section.copy()

        assert clone.id != section.id
        assert clone.page_number_start == 3
        clone.header_references.clear()
        assert len(section.header_references) == 1


class TestTable:
    """Test cases for tables."""

    def test_create(self):
        table = Table.create(2, 3, data=[["a", "b", "c"], ["d"]])
        assert table.get_dimensions() == (2, 3)
        assert table.get_cell(0, 1).get_text() == "b"
        assert table.get_cell(1, 2).paragraphs == []
        assert table.get_cell(5, 0) is None

    def test_create_invalid_shape(self):
        with pytest.raises(ValueError):
            Table.create(0, 2)

    def test_merge_cells(self):
        table = Table.create(1, 3, data=[["a", "b", "c"]])
        merged = table.merge_cells(0, 0, 1)

        assert merged.grid_span == 2
        assert merged.get_text() == "a\nb"
        assert len(table.rows[0].cells) == 2

    def test_merge_cells_invalid_range(self):
        table = Table.create(1, 2)
        with pytest.raises(IndexError):
            table.merge_cells(0, 1, 1)
        with pytest.raises(IndexError):
            table.merge_cells(3, 0, 1)

    def test_column_widths(self):
        table = Table.create(2, 2)
        table.set_column_widths([2000, 3000])
        assert table.grid == [2000, 3000]
        assert table.get_cell(1, 1).width == 3000

    def test_vertical_merge(self):
        cell = TableCell()
        cell.set_vertical_merge(True)
        assert cell.vertical_merge == "restart"
        with pytest.raises(ValueError):
            cell.set_vertical_merge("sideways")

    def test_row_type_checks(self):
        with pytest.raises(TypeError):
            TableRow().add_cell(Paragraph())
        with pytest.raises(TypeError):
            Table().add_row(TableCell())


class TestBookmarksAndSDT:
    """Test bookmark markers and structured document tags."""

    def test_bookmark_requires_name(self):
        with pytest.raises(ValueError):
            BookmarkStart("")

    def test_bookmark_ids_are_strings(self):
        assert BookmarkStart("_Toc1", 4).bookmark_id == "4"
        assert BookmarkEnd(4).bookmark_id == "4"

    def test_sdt_content(self):
        sdt = StructuredDocumentTag(gallery="Table of Contents")
        sdt.add(Paragraph("Title"))
        sdt.add(BookmarkStart("_Toc1"))
        assert sdt.is_toc
        assert sdt.unique
        assert len(sdt.paragraphs()) == 1
        assert sdt.get_text() == "Title"

    def test_sdt_rejects_tables(self):
        with pytest.raises(TypeError):
            StructuredDocumentTag().add(Table())


class TestBody:
    """Test the body element sequence."""

    def test_closed_element_set(self):
        body = Body()
        with pytest.raises(TypeError):
            body.append(Run("x"))

    def test_replace_and_index(self):
        body = Body()
        first, second = Paragraph("a"), Paragraph("b")
        body.extend([first, second])
        replacement = [Paragraph("c"), Paragraph("d")]
        body.replace(0, replacement)

        assert [p.text for p in body.paragraphs()] == ["c", "d", "b"]
        assert first.parent is None
        assert body.index(second) == 2
        with pytest.raises(ValueError):
            body.index(first)

    def test_section_records_order(self):
        body = Body()
        ending = Paragraph("end of first")
        ending.section = SectionProperties(page_number_start=1)
        trailing = SectionProperties()
        body.extend([Paragraph("x"), ending, Paragraph("y"), trailing])

        assert body.section_records() == [ending.section, trailing]

    def test_text(self):
        body = Body()
        body.extend([Paragraph("a"), BookmarkStart("b"), Table.create(1, 1, [["c"]])])
        assert body.get_text() == "a\nc"
