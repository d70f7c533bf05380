"""
Layout module: page geometry, content height estimation and page flow.

Provides the estimates used to put page numbers into a generated table of
contents before Word repaginates the document.
"""

from .geometry import PageGeometry, resolve_geometry
from .height_estimator import ContentHeightEstimator
from .page_flow import PageCursor, PageFlowTracker

__all__ = [
    "PageGeometry",
    "resolve_geometry",
    "ContentHeightEstimator",
    "PageCursor",
    "PageFlowTracker",
]
