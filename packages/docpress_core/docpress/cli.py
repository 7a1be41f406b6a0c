"""
Command-line interface for docpress.

Usage:
    docpress convert notes.txt --output notes.pdf
    docpress convert page.html --page-format A4 --paginate
    docpress info notes.pdf --json
    docpress version
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .engine.geometry import PAGE_FORMATS
from .exceptions import DocPressError

console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docpress",
        description="docpress - plain text and HTML to PDF without a rendering engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docpress convert notes.txt -o notes.pdf
  docpress convert page.html --page-format A4 --title "Report"
  docpress info notes.pdf
  docpress version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser("convert", help="Convert text or HTML to PDF")
    convert_parser.add_argument("input", help="Input text or HTML file")
    convert_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf extension)"
    )
    convert_parser.add_argument(
        "--input-format",
        choices=["auto", "text", "html"],
        default="auto",
        help="How to read the input (default: auto)"
    )
    convert_parser.add_argument(
        "--page-format",
        type=str.upper,
        choices=sorted(PAGE_FORMATS),
        help="Page format (default: LETTER)"
    )
    convert_parser.add_argument("--title", help="Document title written to the PDF metadata")
    convert_parser.add_argument(
        "--paginate",
        action="store_true",
        help="Flow HTML over several pages instead of truncating on one"
    )
    convert_parser.add_argument(
        "--format-numbers",
        action="store_true",
        help="Insert thousands separators into long numbers"
    )
    convert_parser.add_argument("--config", help="JSON file with generator options")
    convert_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    info_parser = subparsers.add_parser("info", help="Show PDF information")
    info_parser.add_argument("input", help="Input PDF file")
    info_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("version", help="Show version information")

    return parser


def cmd_convert(args) -> int:
    """Handle convert command."""
    from .api import PdfGenerator
    from .config import GeneratorOptions
    from .utils.rich_logger import set_debug, setup_logging

    setup_logging("DEBUG" if args.verbose else "WARNING", console=error_console)

    input_path = Path(args.input)
    if not input_path.exists():
        error_console.print(f"Error: File not found: {input_path}")
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")
    options = GeneratorOptions.from_file(args.config) if args.config else GeneratorOptions()
    if options.debug:
        set_debug(True)
    generator = PdfGenerator(
        options,
        page_format=args.page_format,
        title=args.title or (None if args.config else input_path.stem),
        format_numbers=args.format_numbers or None,
    )

    content = input_path.read_text(encoding="utf-8")
    if args.input_format == "text":
        result = generator.generate_from_text(content)
    elif args.input_format == "html":
        result = generator.generate_from_html(content, paginate=args.paginate)
    else:
        result = generator.generate(content, paginate=args.paginate)

    generator.save_pdf(result, output_path)
    for warning in result.warnings:
        error_console.print(f"[yellow]Warning:[/yellow] {warning}")
    console.print(
        f"Saved: {output_path} ({result.page_count} page(s), {result.size:,} bytes, {result.mode.value})"
    )
    return 0


def cmd_info(args) -> int:
    """Handle info command."""
    from .engine.pdfcompiler import get_pdf_info
    from .utils.rich_logger import render_table

    input_path = Path(args.input)
    if not input_path.exists():
        error_console.print(f"Error: File not found: {input_path}")
        return 1

    info = get_pdf_info(input_path.read_bytes())
    data = {
        "file": str(input_path),
        "size": info.size,
        "size_formatted": info.size_formatted,
        "version": info.version,
        "pages": info.page_count,
        "is_valid": info.is_valid,
    }

    if args.json:
        print(json.dumps(data, indent=2))
    else:
        render_table(f"PDF: {input_path.name}", data, console=console)
    return 0 if info.is_valid else 1


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    console.print(f"docpress v{__version__}")
    console.print("Plain text and HTML to PDF, no rendering engine required")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    commands = {
        "convert": cmd_convert,
        "info": cmd_info,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except DocPressError as e:
        error_console.print(f"Error: {e}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        error_console.print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
