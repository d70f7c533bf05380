"""
Section properties model (``w:sectPr``).

Values are stored the way WordprocessingML stores them: page size, margins
and header/footer distances in twips, either as numbers or strings.
Consumers parse them leniently (see ``layout.geometry``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import copy
import uuid
import logging

from .base import Models

logger = logging.getLogger(__name__)

A4_WIDTH_TWIPS = 11906
A4_HEIGHT_TWIPS = 16838
ONE_INCH_TWIPS = 1440
HALF_INCH_TWIPS = 720


class Orientation(Enum):
    """Page orientation options."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass
class HeaderFooterReference:
    """Reference from a section to a header or footer part."""
    kind: str
    rel_id: str


class SectionProperties(Models):
    """
    Page geometry and numbering for one section.

    ``page_number_start`` of None means the section continues the page
    numbering of the previous one.
    """

    def __init__(
        self,
        page_width: Any = A4_WIDTH_TWIPS,
        page_height: Any = A4_HEIGHT_TWIPS,
        orientation: Orientation = Orientation.PORTRAIT,
        margin_top: Any = ONE_INCH_TWIPS,
        margin_bottom: Any = ONE_INCH_TWIPS,
        margin_left: Any = ONE_INCH_TWIPS,
        margin_right: Any = ONE_INCH_TWIPS,
        header_distance: Any = HALF_INCH_TWIPS,
        footer_distance: Any = HALF_INCH_TWIPS,
        page_number_start: Any = None,
        page_number_format: str = "decimal",
    ):
        super().__init__()
        self.page_width = page_width
        self.page_height = page_height
        self.orientation = orientation
        self.margin_top = margin_top
        self.margin_bottom = margin_bottom
        self.margin_left = margin_left
        self.margin_right = margin_right
        self.header_distance = header_distance
        self.footer_distance = footer_distance
        self.page_number_start = page_number_start
        self.page_number_format = page_number_format
        self.title_page: bool = False
        self.header_references: List[HeaderFooterReference] = []
        self.footer_references: List[HeaderFooterReference] = []

    @classmethod
    def empty(cls) -> 'SectionProperties':
        """A record with no geometry set; resolvers fall back to defaults."""
        return cls(page_width=None, page_height=None, margin_top=None, margin_bottom=None,
                   margin_left=None, margin_right=None, header_distance=None,
                   footer_distance=None)

    @property
    def restarts_numbering(self) -> bool:
        return self.page_number_start not in (None, "")

    def set_orientation(self, orientation: Orientation):
        """Set orientation together with the matching A4 page size."""
        self.orientation = orientation
        if orientation == Orientation.LANDSCAPE:
            self.page_width, self.page_height = A4_HEIGHT_TWIPS, A4_WIDTH_TWIPS
        else:
            self.page_width, self.page_height = A4_WIDTH_TWIPS, A4_HEIGHT_TWIPS
        logger.debug(f"Section orientation set to {orientation.value}")

    def set_margins(self, top: Any, bottom: Any, left: Any, right: Any,
                    header: Any = None, footer: Any = None):
        """Set page margins in twips."""
        self.margin_top = top
        self.margin_bottom = bottom
        self.margin_left = left
        self.margin_right = right
        if header is not None:
            self.header_distance = header
        if footer is not None:
            self.footer_distance = footer

    def copy(self) -> 'SectionProperties':
        """Detached copy with its own reference lists."""
        clone = copy.copy(self)
        clone.id = str(uuid.uuid4())
        clone.parent = None
        clone.children = []
        clone.header_references = [copy.copy(ref) for ref in self.header_references]
        clone.footer_references = [copy.copy(ref) for ref in self.footer_references]
        return clone

    def get_text(self) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'SectionProperties',
            'page_width': self.page_width,
            'page_height': self.page_height,
            'orientation': self.orientation.value,
            'margins': {
                'top': self.margin_top,
                'bottom': self.margin_bottom,
                'left': self.margin_left,
                'right': self.margin_right,
                'header': self.header_distance,
                'footer': self.footer_distance,
            },
            'page_number_start': self.page_number_start,
            'page_number_format': self.page_number_format,
        }
