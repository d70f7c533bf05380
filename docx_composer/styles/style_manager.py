"""
Style manager for generated documents.

Holds the paragraph styles a composed document references (Normal, the nine
heading levels and the TOC levels) and maps style ids to heading levels.
"""

from typing import Any, Dict, List, Optional
import copy
import logging
import re
import xml.etree.ElementTree as ET

from ..exceptions import StyleError
from ..utils.units import points_to_half_points

logger = logging.getLogger(__name__)

W_NS = 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'
MAX_HEADING_LEVEL = 9

_HEADING_ID_RE = re.compile(r'^(?:heading|title)\s*([1-9])$', re.IGNORECASE)

HEADING_FONT_SIZES = {1: 16, 2: 15, 3: 14, 4: 13, 5: 12, 6: 12, 7: 11, 8: 11, 9: 11}


def heading_style_id(level: int) -> str:
    return f"Heading{level}"


def toc_style_id(level: int) -> str:
    return f"TOC{level}"


def _default_styles() -> Dict[str, Dict[str, Any]]:
    styles: Dict[str, Dict[str, Any]] = {
        'Normal': {
            'name': 'Normal',
            'type': 'paragraph',
            'default': True,
            'font_size': 10.5,
        },
        'TOCHeading': {
            'name': 'TOC Heading',
            'type': 'paragraph',
            'based_on': 'Heading1',
            'alignment': 'center',
        },
    }
    for level in range(1, MAX_HEADING_LEVEL + 1):
        styles[heading_style_id(level)] = {
            'name': f'heading {level}',
            'type': 'paragraph',
            'based_on': 'Normal',
            'next': 'Normal',
            'outline_level': level - 1,
            'font_size': HEADING_FONT_SIZES[level],
            'bold': True,
            'spacing_before': 240 if level == 1 else 120,
            'spacing_after': 120,
        }
        styles[toc_style_id(level)] = {
            'name': f'toc {level}',
            'type': 'paragraph',
            'based_on': 'Normal',
            'next': 'Normal',
            'indent_left': (level - 1) * 420,
        }
    return styles


class StyleManager:
    """
    Registry of paragraph styles keyed by style id.

    Style definitions are plain dictionaries (``name``, ``type``,
    ``based_on``, ``outline_level``, ``font_size`` in points, ``bold``,
    ``font_name``, ``color``, spacing and indents in twips).
    """

    def __init__(self, styles: Optional[Dict[str, Dict[str, Any]]] = None):
        self.styles: Dict[str, Dict[str, Any]] = _default_styles()
        if styles:
            for style_id, definition in styles.items():
                self.add_style(style_id, **definition)
        logger.debug(f"Style manager initialized with {len(self.styles)} styles")

    def add_style(self, style_id: str, name: Optional[str] = None,
                  style_type: str = "paragraph", **properties: Any) -> Dict[str, Any]:
        """
        Register or replace a style.

        Args:
            style_id: Style identifier referenced by paragraphs
            name: Display name (defaults to the id)
            style_type: ``paragraph``, ``character`` or ``table``
            **properties: Style properties

        Returns:
            The stored style definition
        """
        if not style_id or not isinstance(style_id, str):
            raise StyleError("Style id must be a non-empty string")
        style_type = properties.pop('type', style_type)
        if style_type not in ("paragraph", "character", "table"):
            raise StyleError(f"Unsupported style type: {style_type}")
        outline_level = properties.get('outline_level')
        if outline_level is not None and not 0 <= int(outline_level) < MAX_HEADING_LEVEL:
            raise StyleError(f"Outline level must be 0-8, got {outline_level}", style_id)

        definition = {'name': name or style_id, 'type': style_type, **properties}
        self.styles[style_id] = definition
        logger.debug(f"Style registered: {style_id}")
        return definition

    def update_style(self, style_id: str, **properties: Any) -> Dict[str, Any]:
        """Update properties of an existing style; None values are skipped."""
        style = self.styles.get(style_id)
        if style is None:
            raise StyleError("Unknown style", style_id)
        style.update({key: value for key, value in properties.items() if value is not None})
        return style

    def get_style(self, style_id: str) -> Optional[Dict[str, Any]]:
        return self.styles.get(style_id)

    def has_style(self, style_id: str) -> bool:
        return style_id in self.styles

    def resolve_style(self, style_id: str) -> Dict[str, Any]:
        """Merge a style with its ``based_on`` chain (nearest definition wins)."""
        chain: List[Dict[str, Any]] = []
        seen = set()
        current = style_id
        while current and current in self.styles and current not in seen:
            seen.add(current)
            chain.append(self.styles[current])
            current = self.styles[current].get('based_on')
        resolved: Dict[str, Any] = {}
        for style in reversed(chain):
            resolved.update(copy.deepcopy(style))
        return resolved

    def heading_level(self, style_id: Optional[str]) -> int:
        """
        Heading level (1-9) for a paragraph style id, 0 for body text.

        Registered styles map through their outline level; unregistered ids
        such as ``Heading2`` or ``heading 2`` map by name.
        """
        if not style_id:
            return 0
        style = self.styles.get(style_id)
        if style is not None:
            outline_level = style.get('outline_level')
            if outline_level is not None:
                return int(outline_level) + 1
            if style_id.startswith('TOC'):
                return 0
        match = _HEADING_ID_RE.match(style_id.strip())
        if match:
            return int(match.group(1))
        return 0

    # ------------------------------------------------------------------
    def to_xml(self) -> str:
        """Serialize the registry as a ``styles.xml`` part."""
        ET.register_namespace('w', W_NS)
        root = ET.Element(f'{{{W_NS}}}styles')
        for style_id, style in self.styles.items():
            root.append(self._style_element(style_id, style))
        return ET.tostring(root, encoding='unicode', xml_declaration=True)

    def _style_element(self, style_id: str, style: Dict[str, Any]) -> ET.Element:
        w = f'{{{W_NS}}}'
        element = ET.Element(f'{w}style', {f'{w}type': style.get('type', 'paragraph'),
                                           f'{w}styleId': style_id})
        if style.get('default'):
            element.set(f'{w}default', '1')
        ET.SubElement(element, f'{w}name', {f'{w}val': style.get('name', style_id)})
        if style.get('based_on'):
            ET.SubElement(element, f'{w}basedOn', {f'{w}val': style['based_on']})
        if style.get('next'):
            ET.SubElement(element, f'{w}next', {f'{w}val': style['next']})
        ET.SubElement(element, f'{w}qFormat')

        ppr = ET.SubElement(element, f'{w}pPr')
        if 'spacing_before' in style or 'spacing_after' in style:
            spacing = ET.SubElement(ppr, f'{w}spacing')
            if 'spacing_before' in style:
                spacing.set(f'{w}before', str(style['spacing_before']))
            if 'spacing_after' in style:
                spacing.set(f'{w}after', str(style['spacing_after']))
        if style.get('indent_left'):
            ET.SubElement(ppr, f'{w}ind', {f'{w}left': str(style['indent_left'])})
        if style.get('alignment'):
            ET.SubElement(ppr, f'{w}jc', {f'{w}val': style['alignment']})
        if style.get('outline_level') is not None:
            ET.SubElement(ppr, f'{w}outlineLvl', {f'{w}val': str(style['outline_level'])})
        if not len(ppr):
            element.remove(ppr)

        rpr = ET.SubElement(element, f'{w}rPr')
        if style.get('font_name'):
            ET.SubElement(rpr, f'{w}rFonts', {f'{w}ascii': style['font_name'],
                                              f'{w}hAnsi': style['font_name'],
                                              f'{w}eastAsia': style['font_name']})
        if style.get('bold'):
            ET.SubElement(rpr, f'{w}b')
        if style.get('color'):
            ET.SubElement(rpr, f'{w}color', {f'{w}val': style['color']})
        if style.get('font_size') is not None:
            ET.SubElement(rpr, f'{w}sz', {f'{w}val': str(points_to_half_points(style['font_size']))})
        if not len(rpr):
            element.remove(rpr)
        return element
