"""
Content height estimation for paragraphs and table rows.

This is a deliberately coarse model used to guess page numbers before Word
lays the document out: every character is assumed to be one em wide (the
common case for CJK text), lines are ``1.3 x`` the dominant font size and
table columns share the row width evenly.
"""

from __future__ import annotations

import math
from typing import List, Optional

from ..models.paragraph import Paragraph
from ..models.table import Table, TableRow
from ..utils.units import parse_float, twips_to_points

DEFAULT_FONT_SIZE_PT = 10.5
EMPTY_PARAGRAPH_HEIGHT_PT = 12.0
EMPTY_ROW_HEIGHT_PT = 12.0
LINE_HEIGHT_FACTOR = 1.3
BLANK_LINE_FACTOR = 1.2
SINGLE_LINE_SPACING = 240.0
CELL_PADDING_PT = 4.0


class ContentHeightEstimator:
    """Estimates the vertical extent of paragraphs and table rows in points."""

    def __init__(self, default_font_size: float = DEFAULT_FONT_SIZE_PT):
        self.default_font_size = default_font_size

    def dominant_font_size(self, paragraph: Paragraph) -> float:
        """Largest parsable run font size, never below the default size."""
        size = self.default_font_size
        for run in paragraph.runs:
            run_size = parse_float(run.font_size)
            if run_size is not None and run_size > size:
                size = run_size
        return size

    @staticmethod
    def count_characters(paragraph: Paragraph) -> int:
        # str length counts code points, so CJK text counts one per character
        return sum(len(run.text) for run in paragraph.runs if run.instr_text is None)

    def estimate_lines(self, total_chars: int, font_size: float, content_width: float) -> int:
        chars_per_line = max(1, int(content_width / font_size)) if font_size > 0 else 1
        return max(1, math.ceil(total_chars / chars_per_line))

    def line_height(self, paragraph: Paragraph, font_size: float) -> float:
        line_height = font_size * LINE_HEIGHT_FACTOR
        line_spacing = parse_float(paragraph.line_spacing)
        if line_spacing is not None:
            line_height = line_spacing / SINGLE_LINE_SPACING * line_height
        return line_height

    def estimate_paragraph(self, paragraph: Optional[Paragraph], content_width: float) -> float:
        """
        Estimate paragraph height.

        Args:
            paragraph: Paragraph to measure (None counts as empty)
            content_width: Available line width in points

        Returns:
            Height in points including before/after spacing
        """
        if paragraph is None or not paragraph.runs:
            return EMPTY_PARAGRAPH_HEIGHT_PT

        font_size = self.dominant_font_size(paragraph)
        total_chars = self.count_characters(paragraph)
        if total_chars == 0:
            return font_size * BLANK_LINE_FACTOR

        lines = self.estimate_lines(total_chars, font_size, content_width)
        height = lines * self.line_height(paragraph, font_size)
        height += twips_to_points(paragraph.spacing_before, 0.0)
        height += twips_to_points(paragraph.spacing_after, 0.0)
        return height

    def estimate_row(self, row: TableRow, content_width: float) -> float:
        """Fixed row height when declared, else the tallest cell plus padding."""
        fixed = twips_to_points(row.height)
        if fixed is not None:
            return fixed
        if not row.cells:
            return EMPTY_ROW_HEIGHT_PT

        # declared column widths are not consulted
        cell_width = content_width / len(row.cells)
        tallest = 0.0
        for cell in row.cells:
            cell_height = sum(self.estimate_paragraph(p, cell_width) for p in cell.paragraphs)
            tallest = max(tallest, cell_height + CELL_PADDING_PT)
        return tallest or EMPTY_ROW_HEIGHT_PT

    def estimate_table(self, table: Table, content_width: float) -> List[float]:
        return [self.estimate_row(row, content_width) for row in table.rows]
