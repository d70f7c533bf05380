"""
Table model for WordprocessingML documents.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from .base import Models
from .paragraph import Paragraph

logger = logging.getLogger(__name__)


class TableCell(Models):
    """Represents a table cell holding paragraphs."""

    def __init__(self, text: str = ""):
        """Initialize cell, optionally with one paragraph of text."""
        super().__init__()
        self.paragraphs: List[Paragraph] = []
        self.width: Any = None
        self.grid_span: int = 1
        self.vertical_merge: Optional[str] = None
        self.vertical_align: Optional[str] = None
        self.shading: Optional[str] = None
        if text:
            self.add_paragraph(Paragraph(text))

    def add_paragraph(self, paragraph: Paragraph) -> Paragraph:
        if not isinstance(paragraph, Paragraph):
            raise TypeError(f"TableCell can only contain Paragraph instances, got {type(paragraph)!r}")
        self.paragraphs.append(paragraph)
        self.add_child(paragraph)
        return paragraph

    def set_width(self, width: Any):
        """Set preferred cell width in twips."""
        self.width = width

    def set_vertical_merge(self, merge: Union[bool, str]):
        """Set vertical merge: ``"restart"`` starts a merge, ``"continue"`` extends it."""
        if merge is True:
            merge = "restart"
        elif merge is False:
            merge = None
        if merge not in (None, "restart", "continue"):
            raise ValueError(f"Invalid vertical merge value: {merge}")
        self.vertical_merge = merge

    def get_text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs)

    def set_text(self, text: str):
        for paragraph in list(self.paragraphs):
            self.remove_child(paragraph)
        self.paragraphs.clear()
        self.add_paragraph(Paragraph(text))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'TableCell',
            'width': self.width,
            'grid_span': self.grid_span,
            'vertical_merge': self.vertical_merge,
            'paragraphs': [paragraph.to_dict() for paragraph in self.paragraphs],
        }


class TableRow(Models):
    """Represents a table row; ``height`` is an exact row height in twips."""

    def __init__(self):
        super().__init__()
        self.cells: List[TableCell] = []
        self.height: Any = None
        self.is_header: bool = False
        self.cant_split: bool = False

    def add_cell(self, cell: TableCell) -> TableCell:
        if not isinstance(cell, TableCell):
            raise TypeError(f"TableRow can only contain TableCell instances, got {type(cell)!r}")
        self.cells.append(cell)
        self.add_child(cell)
        return cell

    def set_height(self, height: Any):
        self.height = height

    def set_header_row(self, is_header: bool):
        self.is_header = is_header

    def get_text(self) -> str:
        return "\t".join(cell.get_text() for cell in self.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'TableRow',
            'height': self.height,
            'is_header': self.is_header,
            'cells': [cell.to_dict() for cell in self.cells],
        }


class Table(Models):
    """
    Represents a table with rows and cells.

    ``grid`` holds the declared column widths in twips.
    """

    def __init__(self, style: Optional[str] = None):
        super().__init__()
        self.rows: List[TableRow] = []
        self.grid: List[Any] = []
        self.style: Optional[str] = style
        self.width: Any = None
        self.alignment: Optional[str] = None
        self.borders: bool = True

    @classmethod
    def create(cls, rows: int, cols: int, data: Optional[List[List[str]]] = None,
               style: Optional[str] = None) -> 'Table':
        """
        Build a ``rows`` x ``cols`` table, filling cells from ``data`` row-wise.
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Table needs at least one row and column, got {rows}x{cols}")
        table = cls(style=style)
        for row_index in range(rows):
            row = TableRow()
            for col_index in range(cols):
                text = ""
                if data and row_index < len(data) and col_index < len(data[row_index]):
                    text = str(data[row_index][col_index])
                row.add_cell(TableCell(text))
            table.add_row(row)
        logger.debug(f"Created {rows}x{cols} table")
        return table

    def add_row(self, row: TableRow) -> TableRow:
        if not isinstance(row, TableRow):
            raise TypeError(f"Table can only contain TableRow instances, got {type(row)!r}")
        self.rows.append(row)
        self.add_child(row)
        return row

    def set_column_widths(self, widths: List[Any]):
        """Declare column widths (twips) and apply them to cells without a span."""
        self.grid = list(widths)
        for row in self.rows:
            for index, cell in enumerate(row.cells):
                if index < len(widths) and cell.grid_span == 1:
                    cell.set_width(widths[index])

    def get_cell(self, row_index: int, col_index: int) -> Optional[TableCell]:
        if 0 <= row_index < len(self.rows):
            row = self.rows[row_index]
            if 0 <= col_index < len(row.cells):
                return row.cells[col_index]
        return None

    def merge_cells(self, row_index: int, start_col: int, end_col: int) -> TableCell:
        """
        Merge cells ``start_col..end_col`` (inclusive) of one row horizontally.

        The first cell absorbs the paragraphs of the others and spans their grid
        columns; the absorbed cells are removed from the row.
        """
        if not 0 <= row_index < len(self.rows):
            raise IndexError(f"Row index out of range: {row_index}")
        row = self.rows[row_index]
        if not 0 <= start_col < end_col < len(row.cells):
            raise IndexError(f"Invalid merge range {start_col}..{end_col} in row {row_index}")

        target = row.cells[start_col]
        absorbed = row.cells[start_col + 1:end_col + 1]
        for cell in absorbed:
            target.grid_span += cell.grid_span
            for paragraph in cell.paragraphs:
                if paragraph.text:
                    target.add_paragraph(paragraph)
            row.remove_child(cell)
        del row.cells[start_col + 1:end_col + 1]
        target.width = None
        logger.debug(f"Merged cells {start_col}..{end_col} in row {row_index}")
        return target

    def get_dimensions(self):
        """Return (row count, max cell count)."""
        return len(self.rows), max((len(row.cells) for row in self.rows), default=0)

    def get_text(self) -> str:
        return "\n".join(row.get_text() for row in self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'Table',
            'style': self.style,
            'grid': self.grid,
            'rows': [row.to_dict() for row in self.rows],
        }
