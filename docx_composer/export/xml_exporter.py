"""
XML exporter for composed documents.

Regenerates the WordprocessingML ``document.xml`` part from the body model.
"""

import math
import xml.etree.ElementTree as ET
from typing import Any, Iterable, Optional, Union
from pathlib import Path
import logging

from ..models.body import Body
from ..models.bookmark import BookmarkEnd, BookmarkStart
from ..models.paragraph import Paragraph
from ..models.run import Run
from ..models.sdt import StructuredDocumentTag
from ..models.section import Orientation, SectionProperties
from ..models.table import Table, TableCell, TableRow
from ..utils.units import parse_float, points_to_half_points

logger = logging.getLogger(__name__)

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
    'w15': 'http://schemas.microsoft.com/office/word/2012/wordml',
}

W = f"{{{NAMESPACES['w']}}}"
R = f"{{{NAMESPACES['r']}}}"


class XMLExporter:
    """
    Re-generates WordML for a document.

    Accepts a ``Document`` (anything with a ``body`` attribute) or a ``Body``.
    """

    def __init__(self, document: Any, encoding: str = 'utf-8'):
        if document is None:
            raise ValueError("Document cannot be None")
        self.document = document
        self.encoding = encoding
        for prefix, uri in NAMESPACES.items():
            ET.register_namespace(prefix, uri)
        logger.debug("XML exporter initialized")

    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_attr_value(value: Any) -> Optional[str]:
        """Convert attribute value to a string for XML serialization."""
        if value is None:
            return None
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                return None
            if value.is_integer():
                return str(int(value))
            return format(value, ".10g")
        text = str(value)
        return text if text else None

    def _set_attr(self, element: ET.Element, key: str, value: Any) -> None:
        coerced = self._coerce_attr_value(value)
        if coerced is not None:
            element.set(key, coerced)

    def _body(self) -> Body:
        if isinstance(self.document, Body):
            return self.document
        return self.document.body

    # ------------------------------------------------------------------
    def export(self, output_path: Union[str, Path]) -> bool:
        """
        Export document to an XML file.

        Args:
            output_path: Output file path

        Returns:
            True if export successful, False otherwise
        """
        try:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(self.regenerate_wordml(), encoding=self.encoding)
            logger.info(f"Document exported to XML: {output_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to export document to XML: {e}")
            return False

    def regenerate_wordml(self) -> str:
        """
        Regenerate WordML from the document model.

        Returns:
            ``document.xml`` content with an XML declaration
        """
        root = ET.Element(f'{W}document')
        body = ET.SubElement(root, f'{W}body')
        for element in self._body():
            body.append(self.export_element(element))
        xml = ET.tostring(root, encoding='unicode')
        encoding = 'UTF-8' if self.encoding.lower() == 'utf-8' else self.encoding
        return f'<?xml version="1.0" encoding="{encoding}" standalone="yes"?>\n{xml}'

    def export_element(self, element: Any) -> ET.Element:
        """Serialize one body element."""
        if isinstance(element, Paragraph):
            return self._export_paragraph(element)
        if isinstance(element, Table):
            return self._export_table(element)
        if isinstance(element, SectionProperties):
            return self._export_sect_pr(element)
        if isinstance(element, BookmarkStart):
            start = ET.Element(f'{W}bookmarkStart')
            start.set(f'{W}id', element.bookmark_id)
            start.set(f'{W}name', element.name)
            return start
        if isinstance(element, BookmarkEnd):
            end = ET.Element(f'{W}bookmarkEnd')
            end.set(f'{W}id', element.bookmark_id)
            return end
        if isinstance(element, StructuredDocumentTag):
            return self._export_sdt(element)
        raise TypeError(f"Cannot export {type(element).__name__}")

    def export_element_string(self, element: Any) -> str:
        return ET.tostring(self.export_element(element), encoding='unicode')

    # ------------------------------------------------------------------
    def _export_paragraph(self, paragraph: Paragraph) -> ET.Element:
        p = ET.Element(f'{W}p')
        p_pr = ET.SubElement(p, f'{W}pPr')
        if paragraph.style_id:
            ET.SubElement(p_pr, f'{W}pStyle', {f'{W}val': paragraph.style_id})
        if paragraph.page_break_before:
            ET.SubElement(p_pr, f'{W}pageBreakBefore')
        if paragraph.tabs:
            tabs = ET.SubElement(p_pr, f'{W}tabs')
            for tab in paragraph.tabs:
                tab_el = ET.SubElement(tabs, f'{W}tab')
                self._set_attr(tab_el, f'{W}val', tab.alignment)
                self._set_attr(tab_el, f'{W}leader', tab.leader)
                self._set_attr(tab_el, f'{W}pos', tab.position)
        if paragraph.has_spacing():
            spacing = ET.SubElement(p_pr, f'{W}spacing')
            self._set_attr(spacing, f'{W}before', paragraph.spacing_before)
            self._set_attr(spacing, f'{W}after', paragraph.spacing_after)
            if paragraph.line_spacing is not None:
                self._set_attr(spacing, f'{W}line', paragraph.line_spacing)
                spacing.set(f'{W}lineRule', 'auto')
        if paragraph.has_indentation():
            ind = ET.SubElement(p_pr, f'{W}ind')
            self._set_attr(ind, f'{W}left', paragraph.left_indent)
            self._set_attr(ind, f'{W}right', paragraph.right_indent)
            self._set_attr(ind, f'{W}firstLine', paragraph.first_line_indent)
        if paragraph.alignment:
            ET.SubElement(p_pr, f'{W}jc', {f'{W}val': paragraph.alignment})
        if paragraph.section is not None:
            p_pr.append(self._export_sect_pr(paragraph.section))
        if not len(p_pr):
            p.remove(p_pr)

        for run in paragraph.runs:
            p.append(self._export_run(run))
        return p

    def _export_run(self, run: Run) -> ET.Element:
        r = ET.Element(f'{W}r')
        r_pr = ET.SubElement(r, f'{W}rPr')
        self._add_run_properties(r_pr, run.font_name, run.east_asia_font, run.font_size,
                                 run.bold, run.italic, run.underline, run.color)
        if not len(r_pr):
            r.remove(r_pr)

        if run.field_char:
            ET.SubElement(r, f'{W}fldChar', {f'{W}fldCharType': run.field_char})
        if run.instr_text is not None:
            instr = ET.SubElement(r, f'{W}instrText')
            instr.set('{http://www.w3.org/XML/1998/namespace}space', 'preserve')
            instr.text = run.instr_text
        if run.break_type:
            br = ET.SubElement(r, f'{W}br')
            if run.break_type != 'textWrapping':
                br.set(f'{W}type', run.break_type)
        for index, chunk in enumerate(run.text.split('\t')):
            if index:
                ET.SubElement(r, f'{W}tab')
            if chunk:
                t = ET.SubElement(r, f'{W}t')
                if chunk != chunk.strip():
                    t.set('{http://www.w3.org/XML/1998/namespace}space', 'preserve')
                t.text = chunk
        return r

    def _add_run_properties(self, r_pr: ET.Element, font_name: Optional[str],
                            east_asia_font: Optional[str], font_size: Any, bold: bool = False,
                            italic: bool = False, underline: bool = False,
                            color: Optional[str] = None) -> None:
        if font_name or east_asia_font:
            fonts = ET.SubElement(r_pr, f'{W}rFonts')
            self._set_attr(fonts, f'{W}ascii', font_name)
            self._set_attr(fonts, f'{W}hAnsi', font_name)
            self._set_attr(fonts, f'{W}eastAsia', east_asia_font or font_name)
        if bold:
            ET.SubElement(r_pr, f'{W}b')
        if italic:
            ET.SubElement(r_pr, f'{W}i')
        # CT_RPr is a sequence: color, sz and szCs precede u
        if color:
            ET.SubElement(r_pr, f'{W}color', {f'{W}val': color})
        size = parse_float(font_size)
        if size is not None:
            half_points = str(points_to_half_points(size))
            ET.SubElement(r_pr, f'{W}sz', {f'{W}val': half_points})
            ET.SubElement(r_pr, f'{W}szCs', {f'{W}val': half_points})
        if underline:
            ET.SubElement(r_pr, f'{W}u', {f'{W}val': 'single'})

    # ------------------------------------------------------------------
    def _export_table(self, table: Table) -> ET.Element:
        tbl = ET.Element(f'{W}tbl')
        tbl_pr = ET.SubElement(tbl, f'{W}tblPr')
        if table.style:
            ET.SubElement(tbl_pr, f'{W}tblStyle', {f'{W}val': table.style})
        width = ET.SubElement(tbl_pr, f'{W}tblW')
        if table.width is not None:
            self._set_attr(width, f'{W}w', table.width)
            width.set(f'{W}type', 'dxa')
        else:
            width.set(f'{W}w', '0')
            width.set(f'{W}type', 'auto')
        if table.alignment:
            ET.SubElement(tbl_pr, f'{W}jc', {f'{W}val': table.alignment})
        if table.borders:
            borders = ET.SubElement(tbl_pr, f'{W}tblBorders')
            for side in ('top', 'left', 'bottom', 'right', 'insideH', 'insideV'):
                ET.SubElement(borders, f'{W}{side}', {f'{W}val': 'single', f'{W}sz': '4',
                                                      f'{W}space': '0', f'{W}color': 'auto'})

        grid = ET.SubElement(tbl, f'{W}tblGrid')
        for column_width in table.grid:
            col = ET.SubElement(grid, f'{W}gridCol')
            self._set_attr(col, f'{W}w', column_width)
        for row in table.rows:
            tbl.append(self._export_row(row))
        return tbl

    def _export_row(self, row: TableRow) -> ET.Element:
        tr = ET.Element(f'{W}tr')
        tr_pr = ET.SubElement(tr, f'{W}trPr')
        if row.height is not None:
            height = ET.SubElement(tr_pr, f'{W}trHeight')
            self._set_attr(height, f'{W}val', row.height)
        if row.is_header:
            ET.SubElement(tr_pr, f'{W}tblHeader')
        if row.cant_split:
            ET.SubElement(tr_pr, f'{W}cantSplit')
        if not len(tr_pr):
            tr.remove(tr_pr)
        for cell in row.cells:
            tr.append(self._export_cell(cell))
        return tr

    def _export_cell(self, cell: TableCell) -> ET.Element:
        tc = ET.Element(f'{W}tc')
        tc_pr = ET.SubElement(tc, f'{W}tcPr')
        if cell.width is not None:
            width = ET.SubElement(tc_pr, f'{W}tcW')
            self._set_attr(width, f'{W}w', cell.width)
            width.set(f'{W}type', 'dxa')
        if cell.grid_span and cell.grid_span > 1:
            ET.SubElement(tc_pr, f'{W}gridSpan', {f'{W}val': str(cell.grid_span)})
        if cell.vertical_merge:
            merge = ET.SubElement(tc_pr, f'{W}vMerge')
            if cell.vertical_merge == 'restart':
                merge.set(f'{W}val', 'restart')
        if cell.shading:
            ET.SubElement(tc_pr, f'{W}shd', {f'{W}val': 'clear', f'{W}color': 'auto',
                                            f'{W}fill': cell.shading})
        if cell.vertical_align:
            ET.SubElement(tc_pr, f'{W}vAlign', {f'{W}val': cell.vertical_align})
        if not len(tc_pr):
            tc.remove(tc_pr)
        # a cell must hold at least one paragraph
        paragraphs = cell.paragraphs or [Paragraph()]
        for paragraph in paragraphs:
            tc.append(self._export_paragraph(paragraph))
        return tc

    # ------------------------------------------------------------------
    def _export_sdt(self, sdt: StructuredDocumentTag) -> ET.Element:
        element = ET.Element(f'{W}sdt')
        sdt_pr = ET.SubElement(element, f'{W}sdtPr')
        if sdt.font_name or sdt.font_size is not None:
            r_pr = ET.SubElement(sdt_pr, f'{W}rPr')
            self._add_run_properties(r_pr, sdt.font_name, None, sdt.font_size)
        ET.SubElement(sdt_pr, f'{W}id', {f'{W}val': sdt.sdt_id})
        if sdt.color:
            ET.SubElement(sdt_pr, f"{{{NAMESPACES['w15']}}}color", {f'{W}val': sdt.color})
        if sdt.gallery:
            doc_part = ET.SubElement(sdt_pr, f'{W}docPartObj')
            ET.SubElement(doc_part, f'{W}docPartGallery', {f'{W}val': sdt.gallery})
            if sdt.unique:
                ET.SubElement(doc_part, f'{W}docPartUnique')
        content = ET.SubElement(element, f'{W}sdtContent')
        for child in sdt.content:
            content.append(self.export_element(child))
        return element

    def _export_sect_pr(self, section: SectionProperties) -> ET.Element:
        """Serialize a section record (``w:sectPr``)."""
        sect_pr = ET.Element(f'{W}sectPr')
        self._add_references(sect_pr, 'headerReference', section.header_references)
        self._add_references(sect_pr, 'footerReference', section.footer_references)

        pg_sz = ET.SubElement(sect_pr, f'{W}pgSz')
        self._set_attr(pg_sz, f'{W}w', section.page_width)
        self._set_attr(pg_sz, f'{W}h', section.page_height)
        if section.orientation == Orientation.LANDSCAPE:
            pg_sz.set(f'{W}orient', 'landscape')
        if not pg_sz.attrib:
            sect_pr.remove(pg_sz)

        pg_mar = ET.SubElement(sect_pr, f'{W}pgMar')
        for key, value in (('top', section.margin_top), ('right', section.margin_right),
                           ('bottom', section.margin_bottom), ('left', section.margin_left),
                           ('header', section.header_distance),
                           ('footer', section.footer_distance)):
            self._set_attr(pg_mar, f'{W}{key}', value)
        if pg_mar.attrib:
            pg_mar.set(f'{W}gutter', '0')
        else:
            sect_pr.remove(pg_mar)

        if section.restarts_numbering or section.page_number_format != 'decimal':
            pg_num = ET.SubElement(sect_pr, f'{W}pgNumType')
            if section.page_number_format:
                pg_num.set(f'{W}fmt', section.page_number_format)
            if section.restarts_numbering:
                self._set_attr(pg_num, f'{W}start', section.page_number_start)
        if section.title_page:
            ET.SubElement(sect_pr, f'{W}titlePg')
        return sect_pr

    @staticmethod
    def _add_references(sect_pr: ET.Element, tag: str, references: Iterable) -> None:
        for reference in references:
            ET.SubElement(sect_pr, f'{W}{tag}', {f'{W}type': reference.kind,
                                                 f'{R}id': reference.rel_id})
