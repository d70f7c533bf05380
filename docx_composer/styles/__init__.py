"""
Styles module: paragraph style registry and heading-level mapping.
"""

from .style_manager import StyleManager, heading_style_id, toc_style_id, MAX_HEADING_LEVEL

__all__ = [
    "StyleManager",
    "heading_style_id",
    "toc_style_id",
    "MAX_HEADING_LEVEL",
]
