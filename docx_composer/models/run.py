"""Run model for WordprocessingML documents."""

from typing import Any, Dict, Optional

from .base import Models

BREAK_TYPES = ("page", "line", "column", "textWrapping")
FIELD_CHAR_TYPES = ("begin", "separate", "end")


class Run(Models):
    """Represents a run of text with consistent formatting."""

    def __init__(
        self,
        text: str = "",
        font_size: Any = None,
        font_name: Optional[str] = None,
        bold: bool = False,
        italic: bool = False,
        underline: bool = False,
        color: Optional[str] = None,
        break_type: Optional[str] = None,
        field_char: Optional[str] = None,
        instr_text: Optional[str] = None,
    ):
        """
        Initialize run.

        Args:
            text: Run text (``"\\t"`` is written as a tab element)
            font_size: Font size in points; unparsable values count as unset
            font_name: ASCII/hAnsi font family
            bold: Bold formatting
            italic: Italic formatting
            underline: Single underline
            color: Hex RGB color, e.g. ``"2F5496"``
            break_type: ``page``, ``line``, ``column`` or ``textWrapping``
            field_char: Complex field marker (``begin``, ``separate``, ``end``)
            instr_text: Field instruction, e.g. ``PAGEREF _Toc1 \\h``
        """
        super().__init__()
        if break_type is not None and break_type not in BREAK_TYPES:
            raise ValueError(f"Unsupported break type: {break_type}")
        if field_char is not None and field_char not in FIELD_CHAR_TYPES:
            raise ValueError(f"Unsupported field char type: {field_char}")
        self.text: str = text
        self.font_size = font_size
        self.font_name: Optional[str] = font_name
        self.east_asia_font: Optional[str] = None
        self.bold: bool = bold
        self.italic: bool = italic
        self.underline: bool = underline
        self.color: Optional[str] = color
        self.break_type: Optional[str] = break_type
        self.field_char: Optional[str] = field_char
        self.instr_text: Optional[str] = instr_text

    @property
    def is_page_break(self) -> bool:
        return self.break_type == "page"

    @property
    def is_field_code(self) -> bool:
        """True for runs that only carry field markup."""
        return self.field_char is not None or self.instr_text is not None

    def add_text(self, text: str):
        """Add text to run."""
        self.text += text

    def get_text(self) -> str:
        return self.text

    def has_formatting(self) -> bool:
        return bool(
            self.font_size is not None or self.font_name or self.east_asia_font
            or self.bold or self.italic or self.underline or self.color
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'Run',
            'text': self.text,
            'font_size': self.font_size,
            'font_name': self.font_name,
            'bold': self.bold,
            'italic': self.italic,
            'underline': self.underline,
            'color': self.color,
            'break_type': self.break_type,
            'field_char': self.field_char,
            'instr_text': self.instr_text,
        }
