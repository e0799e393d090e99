"""Command line entry point.

Reads markdown from a file or stdin, stacks the tables that are too wide
for the terminal, and writes the result to stdout.

    responsive-tables notes.md --width 60
    cat answer.md | python -m responsive_tables --render
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .console_encoding import configure_utf8_output
from .plugins.responsive_table_formatter import create_plugin
from .terminal_width import DEFAULT_MARGIN


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="responsive-tables",
        description="Reflow markdown tables wider than the terminal into stacked cards.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Markdown file to read (default: stdin)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Terminal width in columns (default: detect; 0 = unknown, never stack)",
    )
    parser.add_argument(
        "--margin",
        type=int,
        default=None,
        help=f"Columns kept free on the right (default: {DEFAULT_MARGIN})",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render the result as markdown in the terminal instead of printing it raw",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _render(text: str, width: Optional[int]) -> None:
    from rich.console import Console
    from rich.markdown import Markdown

    console = Console(width=width or None)
    console.print(Markdown(text))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width is not None and args.width < 0:
        parser.error("--width must be 0 or positive")

    try:
        text = _read_input(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    plugin = create_plugin()
    config = {"console_width": args.width}
    if args.margin is not None:
        config["width_margin"] = args.margin
    plugin.initialize(config)
    result = plugin.format_text(text)

    configure_utf8_output()
    if args.render:
        _render(result, args.width)
    else:
        sys.stdout.write(result)
    return 0


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
