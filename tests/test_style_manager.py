"""
Tests for the style manager.
"""

import xml.etree.ElementTree as ET

import pytest

from docx_composer.exceptions import StyleError
from docx_composer.styles import StyleManager, heading_style_id, toc_style_id

W = 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'
NS = {'w': W}


@pytest.fixture
def styles():
    return StyleManager()


class TestDefaults:
    """Test the default style set."""

    def test_default_styles(self, styles):
        for level in range(1, 10):
            assert styles.has_style(heading_style_id(level))
            assert styles.has_style(toc_style_id(level))
        assert styles.get_style("Heading3")["name"] == "heading 3"
        assert styles.get_style("TOC3")["indent_left"] == 840
        assert styles.has_style("Normal")
        assert styles.has_style("TOCHeading")

    def test_resolve_style_follows_based_on(self, styles):
        resolved = styles.resolve_style("Heading2")
        assert resolved["font_size"] == 15
        assert resolved["default"] is True
        assert resolved["name"] == "heading 2"


class TestHeadingLevel:
    """Test style id to heading level mapping."""

    @pytest.mark.parametrize("style_id, level", [
        ("Heading1", 1),
        ("Heading9", 9),
        ("heading 3", 3),
        ("HEADING4", 4),
        ("Title2", 2),
        ("TOC1", 0),
        ("TOCHeading", 0),
        ("Normal", 0),
        ("2", 0),
        ("Heading10", 0),
        ("", 0),
        (None, 0),
    ])
    def test_mapping(self, styles, style_id, level):
        assert styles.heading_level(style_id) == level

    def test_custom_outline_level(self, styles):
        styles.add_style("ChapterTitle", outline_level=0)
        styles.add_style("2", name="heading 2", outline_level=1)
        assert styles.heading_level("ChapterTitle") == 1
        assert styles.heading_level("2") == 2


class TestStyleRegistry:
    """Test adding and updating styles."""

    def test_add_style(self, styles):
        style = styles.add_style("Quote", style_type="character", italic=True)
        assert style == {"name": "Quote", "type": "character", "italic": True}

    def test_add_style_from_definition(self):
        manager = StyleManager({"Code": {"name": "Code", "type": "character", "font_name": "Consolas"}})
        assert manager.get_style("Code")["type"] == "character"

    def test_invalid_styles(self, styles):
        with pytest.raises(StyleError):
            styles.add_style("")
        with pytest.raises(StyleError):
            styles.add_style("X", style_type="numbering")
        with pytest.raises(StyleError):
            styles.add_style("X", outline_level=9)

    def test_update_style(self, styles):
        styles.update_style("TOC1", font_size=12, bold=None)
        assert styles.get_style("TOC1")["font_size"] == 12
        assert "bold" not in styles.get_style("TOC1")
        with pytest.raises(StyleError):
            styles.update_style("Missing", bold=True)


class TestStylesXML:
    """Test styles.xml serialization."""

    def test_to_xml(self, styles):
        styles.update_style("TOC1", font_name="SimSun", color="2F5496")
        root = ET.fromstring(styles.to_xml())
        by_id = {el.get(f'{{{W}}}styleId'): el for el in root.findall('w:style', NS)}

        heading = by_id["Heading1"]
        assert heading.find('w:pPr/w:outlineLvl', NS).get(f'{{{W}}}val') == "0"
        assert heading.find('w:rPr/w:sz', NS).get(f'{{{W}}}val') == "32"
        assert heading.find('w:rPr/w:b', NS) is not None

        toc = by_id["TOC1"]
        assert toc.find('w:rPr/w:rFonts', NS).get(f'{{{W}}}eastAsia') == "SimSun"
        assert by_id["Normal"].get(f'{{{W}}}default') == "1"
