"""Paragraph model for WordprocessingML documents."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .base import Models
from .run import Run

if TYPE_CHECKING:
    from .section import SectionProperties


@dataclass
class TabStop:
    """A custom tab stop (``w:tab`` inside ``w:tabs``); position in twips."""
    position: int
    alignment: str = "left"
    leader: Optional[str] = None


class Paragraph(Models):
    """
    Represents a paragraph with runs and formatting data.

    Spacing and indentation keep their OOXML units: ``spacing_before``,
    ``spacing_after`` and indents in twips, ``line_spacing`` in 240ths of a
    line (240 = single). A paragraph carrying ``section`` is the last
    paragraph of the section that record describes.
    """

    def __init__(self, text: str = "", style_id: Optional[str] = None):
        """
        Initialize paragraph.

        Args:
            text: Optional text for an initial run
            style_id: Paragraph style identifier (e.g. ``"Heading1"``)
        """
        super().__init__()
        self.runs: List[Run] = []
        self.style_id: Optional[str] = style_id
        self.alignment: Optional[str] = None
        self.spacing_before: Any = None
        self.spacing_after: Any = None
        self.line_spacing: Any = None
        self.left_indent: Any = None
        self.right_indent: Any = None
        self.first_line_indent: Any = None
        self.tabs: List[TabStop] = []
        self.page_break_before: bool = False
        self.section: Optional['SectionProperties'] = None
        if text:
            self.add_run(Run(text=text))

    def add_run(self, run: Run) -> Run:
        """Add run to paragraph."""
        if not isinstance(run, Run):
            raise TypeError(f"Paragraph can only contain Run instances, got {type(run)!r}")
        self.runs.append(run)
        self.add_child(run)
        return run

    def add_text(self, text: str, **formatting) -> Run:
        """Append a new run with ``text`` and the given Run formatting keywords."""
        return self.add_run(Run(text=text, **formatting))

    def add_page_break(self) -> Run:
        """Append a hard page break run."""
        return self.add_run(Run(break_type="page"))

    def add_tab_stop(self, position: int, alignment: str = "left",
                     leader: Optional[str] = None) -> TabStop:
        tab = TabStop(position=position, alignment=alignment, leader=leader)
        self.tabs.append(tab)
        return tab

    def set_spacing(self, before: Any = None, after: Any = None, line: Any = None):
        """Set paragraph spacing (before/after in twips, line in 240ths)."""
        self.spacing_before = before
        self.spacing_after = after
        self.line_spacing = line

    def has_spacing(self) -> bool:
        return any(value is not None for value in
                   (self.spacing_before, self.spacing_after, self.line_spacing))

    def has_indentation(self) -> bool:
        return any(value is not None for value in
                   (self.left_indent, self.right_indent, self.first_line_indent))

    def has_page_break(self) -> bool:
        """True when the paragraph forces a new page before its content."""
        return self.page_break_before or any(run.is_page_break for run in self.runs)

    @property
    def ends_section(self) -> bool:
        return self.section is not None

    def get_text(self) -> str:
        """Get plain text of all runs, field instructions excluded."""
        return "".join(run.get_text() for run in self.runs if run.instr_text is None)

    @property
    def text(self) -> str:
        return self.get_text()

    def set_text(self, text: str):
        """Replace all runs with a single run holding ``text``."""
        for run in list(self.runs):
            self.remove_child(run)
        self.runs.clear()
        if text:
            self.add_run(Run(text=text))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'Paragraph',
            'style_id': self.style_id,
            'text': self.text,
            'page_break_before': self.page_break_before,
            'ends_section': self.ends_section,
            'runs': [run.to_dict() for run in self.runs],
        }
