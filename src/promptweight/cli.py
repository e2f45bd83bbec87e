"""Command-line preview for weighted prompts.

Reads prompt text from a file (or stdin) and writes the highlighted HTML,
or a JSON summary of the prompt's weighting structure, to stdout.

Usage
-----
CLI (installed entry point)::

    promptweight prompt.txt --standalone > preview.html
    echo "{{castle}}, [fog:0.6]" | promptweight --summary

Defaults come from :class:`~promptweight.core.config.HighlightSettings`, so
``PROMPTWEIGHT_*`` environment variables apply here as well.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from promptweight import __version__
from promptweight.core.analysis import summarize
from promptweight.core.config import HighlightSettings, WeightHighlightConfig
from promptweight.core.markup import (
    BRACKET_CLASS,
    MIX_SEPARATOR_CLASS,
    RANDOM_CLASS,
    RANDOM_SEPARATOR_CLASS,
    SNIPPET_CLASS,
    WEIGHT_CLOSE_CLASS,
    render,
)

logger = logging.getLogger(__name__)


def _read_prompt(path: str) -> str:
    """Load prompt text from a file path, or stdin for ``-``."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def build_stylesheet(config: WeightHighlightConfig) -> str:
    """CSS rules for the structural markup classes."""
    return "\n".join(
        [
            f".{BRACKET_CLASS}, .{WEIGHT_CLOSE_CLASS}, .{MIX_SEPARATOR_CLASS} "
            f"{{ color: {config.neutral_color}; }}",
            f".{RANDOM_CLASS}, .{RANDOM_SEPARATOR_CLASS} "
            f"{{ color: {config.colon_color}; font-weight: 600; }}",
            f".{SNIPPET_CLASS} {{ font-style: italic; text-decoration: underline dotted; }}",
        ]
    )


def wrap_document(fragment: str, config: WeightHighlightConfig) -> str:
    """Wrap a rendered fragment in a minimal standalone HTML document."""
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8"><title>Prompt preview</title>\n'
        f"<style>\n{build_stylesheet(config)}\n"
        "body { font-family: monospace; white-space: pre-wrap; }\n</style>\n"
        f"</head><body>{fragment}</body></html>\n"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptweight",
        description="Render weighted prompt text as highlighted HTML.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Prompt file, or - for stdin")
    parser.add_argument("--boost", type=float, help="Override parenthesis_boost")
    parser.add_argument("--max-delta", type=float, help="Override max_delta_for_intensity")
    parser.add_argument(
        "--standalone", action="store_true", help="Emit a full HTML document with a stylesheet"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Print a JSON weighting summary instead of HTML"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``promptweight`` console script.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {}
    if args.boost is not None:
        overrides["parenthesis_boost"] = args.boost
    if args.max_delta is not None:
        overrides["max_delta_for_intensity"] = args.max_delta
    try:
        config = HighlightSettings(**overrides).to_highlight_config()
    except ValidationError as e:
        parser.error(f"invalid highlight settings: {e}")

    try:
        text = _read_prompt(args.input)
    except OSError as e:
        parser.error(f"cannot read {args.input}: {e}")

    if args.summary:
        sys.stdout.write(summarize(text, config).model_dump_json(indent=2) + "\n")
        return 0

    fragment = render(text, config)
    logger.debug(f"Rendered {len(text)} characters into {len(fragment)} characters of markup")
    sys.stdout.write(wrap_document(fragment, config) if args.standalone else fragment + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
