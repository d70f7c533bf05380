"""Page geometry of a section, in points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models.section import SectionProperties
from ..utils.units import twips_to_points

A4_WIDTH_PT = 595.3
A4_HEIGHT_PT = 841.9
DEFAULT_MARGIN_PT = 72.0


@dataclass(slots=True)
class PageGeometry:
    page_height: float = A4_HEIGHT_PT
    page_width: float = A4_WIDTH_PT
    margin_top: float = DEFAULT_MARGIN_PT
    margin_bottom: float = DEFAULT_MARGIN_PT
    side_margins: float = DEFAULT_MARGIN_PT * 2

    @property
    def content_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_width(self) -> float:
        return self.page_width - self.side_margins


def resolve_geometry(section: Optional[SectionProperties]) -> PageGeometry:
    """
    Resolve the page geometry of a section record.

    Every field falls back to A4 portrait with one-inch margins on its own
    when it is missing or unparsable. Width and height are taken as stored;
    a landscape record is expected to carry swapped dimensions already.
    """
    if section is None:
        return PageGeometry()

    margin_left = twips_to_points(section.margin_left, DEFAULT_MARGIN_PT)
    margin_right = twips_to_points(section.margin_right, DEFAULT_MARGIN_PT)
    return PageGeometry(
        page_height=twips_to_points(section.page_height, A4_HEIGHT_PT),
        page_width=twips_to_points(section.page_width, A4_WIDTH_PT),
        margin_top=twips_to_points(section.margin_top, DEFAULT_MARGIN_PT),
        margin_bottom=twips_to_points(section.margin_bottom, DEFAULT_MARGIN_PT),
        side_margins=margin_left + margin_right,
    )
