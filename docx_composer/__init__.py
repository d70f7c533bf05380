"""
docx_composer - WordprocessingML document builder with estimated TOC pages.

The package composes documents from paragraphs, tables, bookmarks and
section breaks and generates a Word field based table of contents. Page
numbers in the TOC are estimated by replaying the body through a simple
layout model, so the document shows plausible numbers before Word updates
its fields.

Main Components:
- Document: High-level building and TOC API
- Models: Block-level and inline document models
- Layout: Page geometry, content height estimation and page flow
- TOC: Heading collection and TOC materialization
- Styles: Paragraph style registry
- Export: WordprocessingML serialization
"""

from .document_api import Document, PageSettings
from .exceptions import (
    DocxComposerError,
    StyleError,
    LayoutError,
    TOCError,
    NoHeadingsError,
    TOCNotFoundError,
)
from .models import (
    Run,
    Paragraph,
    Table,
    TableRow,
    TableCell,
    BookmarkStart,
    BookmarkEnd,
    SectionProperties,
    Orientation,
    StructuredDocumentTag,
    Body,
)
from .layout import PageGeometry, ContentHeightEstimator, PageFlowTracker, resolve_geometry
from .styles import StyleManager
from .toc import TOCConfig, TOCEntry, TOCBuilder, HeadingCollector
from .export import XMLExporter
from .version import __version__

__all__ = [
    "Document",
    "PageSettings",
    "DocxComposerError",
    "StyleError",
    "LayoutError",
    "TOCError",
    "NoHeadingsError",
    "TOCNotFoundError",
    "Run",
    "Paragraph",
    "Table",
    "TableRow",
    "TableCell",
    "BookmarkStart",
    "BookmarkEnd",
    "SectionProperties",
    "Orientation",
    "StructuredDocumentTag",
    "Body",
    "PageGeometry",
    "ContentHeightEstimator",
    "PageFlowTracker",
    "resolve_geometry",
    "StyleManager",
    "TOCConfig",
    "TOCEntry",
    "TOCBuilder",
    "HeadingCollector",
    "XMLExporter",
    "__version__",
]
