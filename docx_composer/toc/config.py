"""Table of contents configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import TOCError
from ..styles.style_manager import MAX_HEADING_LEVEL


@dataclass
class TOCConfig:
    """
    Options for generated tables of contents.

    Attributes:
        title: Title paragraph shown above the entries
        max_level: Deepest heading level listed (1-9)
        show_page_numbers: Emit PAGEREF page numbers after each entry
        right_align: Right-align page numbers on a tab stop
        use_hyperlinks: Wrap entries in HYPERLINK fields to their bookmarks
        dot_leader: Fill the tab before the page number with dots
        page_offset: Front-matter pages excluded from the estimated numbering
    """
    title: str = "目录"
    max_level: int = 3
    show_page_numbers: bool = True
    right_align: bool = True
    use_hyperlinks: bool = True
    dot_leader: bool = True
    page_offset: int = 0

    def __post_init__(self):
        if not 1 <= self.max_level <= MAX_HEADING_LEVEL:
            raise TOCError(f"TOC max level must be between 1 and {MAX_HEADING_LEVEL}",
                           str(self.max_level))
        if self.page_offset < 0:
            raise TOCError("TOC page offset cannot be negative", str(self.page_offset))

    @classmethod
    def default(cls) -> "TOCConfig":
        return cls()
