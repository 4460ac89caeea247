"""CLI for converting transcripts between platoHtml, platoText and CMJ (JSON).

Usage:
    plato-transcript --from text --to html --input dialogue.txt --output dialogue.html
    plato-transcript --from html --to cmj --input dialogue.html --settings machine.json
    cat dialogue.txt | plato-transcript --from text --to cmj
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from plato_transcript.convert import convert, messages_from_json, messages_to_json
from plato_transcript.defaults import FORMATS
from plato_transcript.errors import InvalidInput
from plato_transcript.settings import resolve_settings, set_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plato-transcript",
        description="Convert a dialogue transcript between platoHtml, platoText and CMJ",
    )
    parser.add_argument("--from", dest="source", choices=FORMATS, required=True, help="input format")
    parser.add_argument("--to", dest="target", choices=FORMATS, required=True, help="output format")
    parser.add_argument("--input", type=str, default=None, help="input path (default: stdin)")
    parser.add_argument("--output", type=str, default=None, help="output path (default: stdout)")
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="JSON overrides for settings, e.g. {\"machine\": {\"name\": \"...\"}}",
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def _read_input(path: str | None) -> str:
    if path is None:
        return sys.stdin.read()
    input_file = Path(path)
    if not input_file.exists():
        raise FileNotFoundError(f"input file not found: {path}")
    return input_file.read_text(encoding="utf-8")


def run(args: argparse.Namespace) -> int:
    if args.settings is not None:
        set_settings(resolve_settings(args.settings))

    raw = _read_input(args.input)
    payload = messages_from_json(raw) if args.source == "cmj" else raw

    result = convert(payload, source=args.source, target=args.target)
    output = messages_to_json(result) + "\n" if args.target == "cmj" else result

    if args.output is None:
        sys.stdout.write(output)
        return 0

    output_file = Path(args.output)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(output, encoding="utf-8")
    print(f"✓ converted {args.source} → {args.target}")
    print(f"  output: {args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except (InvalidInput, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
