"""
Command-line interface for docx_composer.

Usage:
    docx-composer estimate outline.json
    docx-composer build outline.json --output document.xml
    docx-composer version

An outline is a JSON object with an optional ``page_settings`` mapping
(millimetres) and a ``blocks`` list, or just the list itself. Blocks:

    {"type": "heading", "text": "Intro", "level": 1, "bookmark": "_TocIntro"}
    {"type": "paragraph", "text": "...", "style": "Normal", "font_size": 12}
    {"type": "page_break"}
    {"type": "section_break", "orientation": "landscape", "start_page": 1}
    {"type": "table", "rows": 2, "cols": 3, "data": [["a", "b", "c"]]}
    {"type": "toc"}
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table as RichTable

from .document_api import Document, PageSettings
from .exceptions import DocxComposerError
from .models.section import Orientation
from .toc.config import TOCConfig
from .toc.entry import TOCEntry
from .utils.logger import setup_logging

console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docx-composer",
        description="docx-composer - WordprocessingML builder with estimated TOC page numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docx-composer estimate outline.json --max-level 2
  docx-composer build outline.json -o document.xml --styles styles.xml
  docx-composer version
        """,
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Log level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    toc_options = argparse.ArgumentParser(add_help=False)
    toc_options.add_argument("outline", help="JSON outline file")
    toc_options.add_argument("--max-level", type=int, default=3,
                             help="Deepest heading level in the TOC (default: 3)")
    toc_options.add_argument("--page-offset", type=int, default=0,
                             help="Front-matter pages excluded from numbering")
    toc_options.add_argument("--title", default=None, help="TOC title")

    subparsers.add_parser("estimate", parents=[toc_options],
                          help="Print headings with estimated page numbers")

    build_parser = subparsers.add_parser("build", parents=[toc_options],
                                         help="Generate the TOC and write document.xml")
    build_parser.add_argument("-o", "--output", help="Output document.xml path "
                                                     "(default: outline name with .xml)")
    build_parser.add_argument("--styles", help="Also write styles.xml to this path")
    build_parser.add_argument("--no-page-numbers", action="store_true",
                              help="Omit page numbers from TOC entries")
    build_parser.add_argument("--no-hyperlinks", action="store_true",
                              help="Do not link TOC entries to their headings")

    subparsers.add_parser("version", help="Show version information")
    return parser


# ----------------------------------------------------------------------
def load_outline(path: Path) -> Dict[str, Any]:
    """Read an outline file; a bare block list is wrapped in a mapping."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DocxComposerError("Invalid outline JSON", f"{path}: {e}") from e
    if isinstance(data, list):
        data = {"blocks": data}
    if not isinstance(data, dict) or not isinstance(data.get("blocks", []), list):
        raise DocxComposerError("Outline must be a list of blocks or an object with 'blocks'",
                                str(path))
    return data


def _page_settings(data: Optional[Dict[str, Any]]) -> Optional[PageSettings]:
    if not data:
        return None
    try:
        values = dict(data)
        if "orientation" in values:
            values["orientation"] = Orientation(values["orientation"])
        return PageSettings(**values)
    except (TypeError, ValueError) as e:
        raise DocxComposerError("Invalid page settings", str(e)) from e


def build_document(outline: Dict[str, Any]) -> Tuple[Document, int]:
    """
    Build a document from an outline.

    Returns:
        The document and the body index of the TOC placeholder (-1 if none)
    """
    doc = Document(page_settings=_page_settings(outline.get("page_settings")))
    toc_index = -1

    for number, block in enumerate(outline.get("blocks", []), start=1):
        kind = block.get("type") if isinstance(block, dict) else None
        try:
            if kind == "heading":
                if block.get("bookmark"):
                    bookmark = block["bookmark"] if isinstance(block["bookmark"], str) else None
                    doc.add_heading_with_bookmark(block["text"], int(block.get("level", 1)), bookmark)
                else:
                    doc.add_heading(block["text"], int(block.get("level", 1)))
            elif kind == "paragraph":
                paragraph = doc.add_paragraph(style=block.get("style"))
                if block.get("text"):
                    doc.add_run(paragraph, block["text"], font_size=block.get("font_size"),
                                bold=bool(block.get("bold", False)))
                if block.get("page_break_before"):
                    paragraph.page_break_before = True
            elif kind == "page_break":
                doc.add_page_break()
            elif kind == "section_break":
                doc.add_section_break(
                    orientation=Orientation(block.get("orientation", "portrait")),
                    start_page=int(block.get("start_page", 0)),
                    inherit_header_footer=bool(block.get("inherit_header_footer", True)),
                )
            elif kind == "table":
                doc.add_table(int(block["rows"]), int(block["cols"]), data=block.get("data"),
                              style=block.get("style"))
            elif kind == "toc":
                placeholder = doc.add_paragraph(block.get("text", ""))
                toc_index = doc.body.index(placeholder)
            else:
                raise DocxComposerError("Unknown block type", f"block {number}: {kind!r}")
        except (KeyError, ValueError, TypeError) as e:
            raise DocxComposerError("Invalid outline block", f"block {number}: {e}") from e
    return doc, toc_index


def _toc_config(args) -> TOCConfig:
    config = TOCConfig(max_level=args.max_level, page_offset=args.page_offset)
    if args.title is not None:
        config.title = args.title
    if getattr(args, "no_page_numbers", False):
        config.show_page_numbers = False
    if getattr(args, "no_hyperlinks", False):
        config.use_hyperlinks = False
    return config


def render_entries(entries: List[TOCEntry], title: str = "Estimated TOC") -> RichTable:
    table = RichTable(title=title)
    table.add_column("Level", justify="right")
    table.add_column("Heading")
    table.add_column("Page", justify="right")
    table.add_column("Bookmark", style="dim")
    for entry in entries:
        table.add_row(str(entry.level), "  " * (entry.level - 1) + entry.text,
                      str(entry.page_number), entry.bookmark_id)
    return table


# ----------------------------------------------------------------------
def cmd_estimate(args) -> int:
    """Handle estimate command."""
    config = _toc_config(args)
    doc, toc_index = build_document(load_outline(Path(args.outline)))
    entries = doc.collect_headings(config.max_level, toc_index, config.page_offset)
    if not entries:
        error_console.print(f"No headings found up to level {config.max_level}")
        return 1
    console.print(render_entries(entries))
    return 0


def cmd_build(args) -> int:
    """Handle build command."""
    config = _toc_config(args)
    outline_path = Path(args.outline)
    doc, toc_index = build_document(load_outline(outline_path))
    if toc_index >= 0:
        doc.generate_toc_at_position(config, toc_index, toc_index)
    else:
        doc.auto_generate_toc(config)

    output_path = Path(args.output) if args.output else outline_path.with_suffix(".xml")
    doc.save_xml(output_path)
    console.print(f"Saved: {output_path}")
    if args.styles:
        styles_path = Path(args.styles)
        styles_path.parent.mkdir(parents=True, exist_ok=True)
        styles_path.write_text(doc.styles_xml(), encoding="utf-8")
        console.print(f"Saved: {styles_path}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    console.print(f"docx-composer v{__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, console=error_console)

    commands = {"estimate": cmd_estimate, "build": cmd_build, "version": cmd_version}
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    if args.command != "version" and not Path(args.outline).exists():
        error_console.print(f"Error: File not found: {args.outline}")
        return 1
    try:
        return handler(args)
    except DocxComposerError as e:
        error_console.print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
