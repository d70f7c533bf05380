"""
Models module for the document object model.

This module contains the block-level and inline element classes that make
up a document body.
"""

from .base import Models
from .run import Run
from .paragraph import Paragraph, TabStop
from .table import Table, TableRow, TableCell
from .bookmark import BookmarkStart, BookmarkEnd
from .section import SectionProperties, HeaderFooterReference, Orientation
from .sdt import StructuredDocumentTag, TOC_GALLERY
from .body import Body, BodyElement

__all__ = [
    "Models",
    "Run",
    "Paragraph",
    "TabStop",
    "Table",
    "TableRow",
    "TableCell",
    "BookmarkStart",
    "BookmarkEnd",
    "SectionProperties",
    "HeaderFooterReference",
    "Orientation",
    "StructuredDocumentTag",
    "TOC_GALLERY",
    "Body",
    "BodyElement",
]
