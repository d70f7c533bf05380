"""
Structured document tag (``w:sdt``) model.

Used as the container of a generated table of contents: Word recognises a
block-level SDT whose doc part gallery is "Table of Contents".
"""

from typing import Any, Dict, List, Optional, Union
import logging

from .base import Models
from .bookmark import BookmarkEnd, BookmarkStart
from .paragraph import Paragraph

logger = logging.getLogger(__name__)

TOC_GALLERY = "Table of Contents"

SDTContent = Union[Paragraph, BookmarkStart, BookmarkEnd]


class StructuredDocumentTag(Models):
    """Block-level content control with ordered paragraph/bookmark content."""

    def __init__(self, sdt_id: str = "147458718", gallery: Optional[str] = None,
                 color: Optional[str] = None):
        super().__init__()
        self.sdt_id = str(sdt_id)
        self.gallery = gallery
        self.color = color
        self.unique = gallery is not None
        self.font_name: Optional[str] = None
        self.font_size: Any = None
        self.content: List[SDTContent] = []

    @property
    def is_toc(self) -> bool:
        return self.gallery == TOC_GALLERY

    def add(self, element: SDTContent) -> SDTContent:
        if not isinstance(element, (Paragraph, BookmarkStart, BookmarkEnd)):
            raise TypeError(f"Unsupported SDT content: {type(element).__name__}")
        self.content.append(element)
        self.add_child(element)
        return element

    def paragraphs(self) -> List[Paragraph]:
        return [element for element in self.content if isinstance(element, Paragraph)]

    def get_text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'StructuredDocumentTag',
            'sdt_id': self.sdt_id,
            'gallery': self.gallery,
            'content': [element.to_dict() for element in self.content],
        }
