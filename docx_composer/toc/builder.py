"""
Table of contents materialization.

Builds the ``w:sdt`` block Word uses for a field based TOC: a title, the
opening ``TOC`` field, one hyperlinked entry per heading with a ``PAGEREF``
field whose cached result is the estimated page number, and the paragraph
closing the field.
"""

from typing import Iterable, Optional
import logging

from ..models.paragraph import Paragraph
from ..models.run import Run
from ..models.sdt import TOC_GALLERY, StructuredDocumentTag
from ..styles.style_manager import toc_style_id
from .config import TOCConfig
from .entry import TOCEntry

logger = logging.getLogger(__name__)

TOC_SDT_ID = "147458718"
TOC_SDT_COLOR = "DBDBDB"
TOC_FONT = "宋体"
TOC_FONT_SIZE = 10.5
FIELD_COLOR = "2F5496"
FIELD_FONT_SIZE = 16
ENTRY_TAB_POSITION = 8640


def toc_instruction(config: TOCConfig) -> str:
    """Instruction text of the outer ``TOC`` field."""
    instruction = f'TOC \\o "1-{config.max_level}"'
    if config.use_hyperlinks:
        instruction += " \\h"
    instruction += " \\u"
    if not config.show_page_numbers:
        instruction += " \\n"
    return instruction


class TOCBuilder:
    """Turns collected entries into a TOC structured document tag."""

    def __init__(self, config: Optional[TOCConfig] = None):
        self.config = config or TOCConfig.default()

    def build(self, entries: Iterable[TOCEntry]) -> StructuredDocumentTag:
        """
        Build the TOC block.

        Args:
            entries: Headings in document order

        Returns:
            Structured document tag ready to be placed in the body
        """
        sdt = StructuredDocumentTag(sdt_id=TOC_SDT_ID, gallery=TOC_GALLERY, color=TOC_SDT_COLOR)
        sdt.font_name = TOC_FONT
        sdt.font_size = TOC_FONT_SIZE

        sdt.add(self._title_paragraph())
        sdt.add(self._field_paragraph())
        count = 0
        for entry in entries:
            sdt.add(self.entry_paragraph(entry))
            count += 1
        sdt.add(self._end_paragraph())
        logger.debug(f"TOC built with {count} entries")
        return sdt

    # ------------------------------------------------------------------
    def _title_paragraph(self) -> Paragraph:
        paragraph = Paragraph()
        paragraph.alignment = "center"
        paragraph.set_spacing(before=0, after=0, line=240)
        paragraph.left_indent = paragraph.right_indent = paragraph.first_line_indent = 0
        paragraph.add_text(self.config.title, font_name=TOC_FONT, font_size=TOC_FONT_SIZE)
        return paragraph

    def _add_entry_tab(self, paragraph: Paragraph) -> None:
        paragraph.add_tab_stop(ENTRY_TAB_POSITION,
                               alignment="right" if self.config.right_align else "left",
                               leader="dot" if self.config.dot_leader else None)

    def _field_paragraph(self) -> Paragraph:
        paragraph = Paragraph(style_id=toc_style_id(1))
        self._add_entry_tab(paragraph)
        style = {'bold': True, 'color': FIELD_COLOR, 'font_size': FIELD_FONT_SIZE}
        paragraph.add_run(Run(field_char="begin", **style))
        paragraph.add_run(Run(instr_text=toc_instruction(self.config), **style))
        paragraph.add_run(Run(field_char="separate", **style))
        return paragraph

    def entry_paragraph(self, entry: TOCEntry) -> Paragraph:
        """One TOC line: optional HYPERLINK field around text, tab and PAGEREF."""
        paragraph = Paragraph(style_id=toc_style_id(entry.level))
        self._add_entry_tab(paragraph)
        anchor = entry.bookmark_id
        hyperlink = self.config.use_hyperlinks

        if hyperlink:
            paragraph.add_run(Run(field_char="begin", color=FIELD_COLOR))
            paragraph.add_run(Run(instr_text=f' HYPERLINK \\l "{anchor}" '))
            paragraph.add_run(Run(field_char="separate"))
        paragraph.add_text(entry.text)

        if self.config.show_page_numbers:
            paragraph.add_text("\t")
            paragraph.add_run(Run(field_char="begin"))
            paragraph.add_run(Run(instr_text=f" PAGEREF {anchor} \\h "))
            paragraph.add_run(Run(field_char="separate"))
            paragraph.add_text(str(entry.page_number))
            paragraph.add_run(Run(field_char="end"))

        if hyperlink:
            paragraph.add_run(Run(field_char="end", color=FIELD_COLOR))
        return paragraph

    def _end_paragraph(self) -> Paragraph:
        paragraph = Paragraph()
        paragraph.set_spacing(before=240, after=0)
        paragraph.add_run(Run(field_char="end", color=FIELD_COLOR))
        return paragraph
