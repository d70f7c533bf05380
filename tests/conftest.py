"""
Pytest configuration for docx_composer
"""

import pytest
import logging
import sys

from docx_composer import Document
from docx_composer.models import Paragraph, Run, SectionProperties


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leftover handlers."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    logging.getLogger("docx_composer").handlers.clear()


@pytest.fixture
def doc():
    """Empty A4 document."""
    return Document()


@pytest.fixture
def a4_section():
    """A4 portrait section with one-inch margins."""
    return SectionProperties()


@pytest.fixture
def make_paragraph():
    """Factory for paragraphs with a single run."""
    def _make(text="", font_size=None, style_id=None, page_break=False):
        paragraph = Paragraph(style_id=style_id)
        if page_break:
            paragraph.add_page_break()
        if text or font_size is not None:
            paragraph.add_run(Run(text=text, font_size=font_size))
        return paragraph
    return _make


@pytest.fixture
def chaptered_doc():
    """Document with a cover section and a restarted numbered section."""
    document = Document()
    document.add_paragraph("封面")
    document.add_section_break(start_page=1)
    document.add_heading("第一章", 1)
    document.add_paragraph("第1页内容")
    document.add_heading("1.1 背景", 2)
    document.add_page_break()
    document.add_heading("第二章", 1)
    document.add_paragraph("第2页内容")
    return document
