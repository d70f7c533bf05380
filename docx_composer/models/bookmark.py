"""
Bookmark markers for WordprocessingML documents.

Bookmarks are written as a ``w:bookmarkStart`` / ``w:bookmarkEnd`` pair
sharing an id; the name is the anchor used by HYPERLINK and PAGEREF fields.
"""

from typing import Any, Dict
import logging

from .base import Models

logger = logging.getLogger(__name__)


class BookmarkStart(Models):
    """Opening marker of a named bookmark."""

    def __init__(self, name: str, bookmark_id: str = "0"):
        super().__init__()
        if not name or not isinstance(name, str):
            raise ValueError("Bookmark name must be a non-empty string")
        self.name = name
        self.bookmark_id = str(bookmark_id)
        logger.debug(f"Bookmark start created: {name} ({self.bookmark_id})")

    def get_text(self) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'BookmarkStart', 'name': self.name, 'bookmark_id': self.bookmark_id}


class BookmarkEnd(Models):
    """Closing marker of a bookmark, matched to its start by id."""

    def __init__(self, bookmark_id: str = "0"):
        super().__init__()
        self.bookmark_id = str(bookmark_id)

    def get_text(self) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'BookmarkEnd', 'bookmark_id': self.bookmark_id}
