"""TOC entry value type."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TOCEntry:
    """One heading as listed in a table of contents."""
    text: str
    level: int
    page_number: int
    bookmark_id: str

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'level': self.level,
            'page_number': self.page_number,
            'bookmark_id': self.bookmark_id,
        }
