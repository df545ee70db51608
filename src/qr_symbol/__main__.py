"""Command line interface for encoding QR symbols."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import render
from .encoder import EncodeOptions, encode
from .errors import EncodeError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encode text as a QR Code symbol")
    data_group = parser.add_mutually_exclusive_group(required=True)
    data_group.add_argument("--text", help="Literal text to encode (e.g. a gift-card code)")
    data_group.add_argument("--file", type=Path, help="Read the payload bytes from a file")

    parser.add_argument("-o", "--output", type=Path, help="Output file path (stdout for txt/svg when omitted)")
    parser.add_argument("--format", choices=["png", "svg", "txt"], default=None, help="Output format")
    parser.add_argument("--ecc", default="M", help="Minimum error correction level (L/M/Q/H or low/medium/quartile/high)")
    parser.add_argument("--version", dest="symbol_version", type=int, help="Force a symbol version (1-40)")
    parser.add_argument("--mask", type=int, help="Force a mask pattern (0-7)")
    parser.add_argument("--no-boost", action="store_true", help="Keep the requested error correction level")
    parser.add_argument("--encoding", default="utf-8", help="Character encoding for --text")
    parser.add_argument("--border", type=int, default=4, help="Quiet-zone width in modules")
    parser.add_argument("--scale", type=int, default=10, help="Pixels (png) or units (svg) per module")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log encoder decisions")
    return parser


def resolve_format(args: argparse.Namespace) -> str:
    if args.format:
        return args.format
    if args.output is not None and args.output.suffix.lower() in (".png", ".svg", ".txt"):
        return args.output.suffix.lower()[1:]
    return "txt"


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    payload = args.text if args.text is not None else args.file.read_bytes()
    try:
        options = EncodeOptions(
            min_error_correction_level=args.ecc,
            forced_version=args.symbol_version,
            mask=args.mask,
            boost_error=not args.no_boost,
            encoding=args.encoding,
        )
        symbol = encode(payload, options)
    except EncodeError as exc:
        parser.exit(2, f"error: {exc}\n")

    output_format = resolve_format(args)
    if output_format == "png":
        if args.output is None:
            parser.exit(2, "error: --output is required for png\n")
        render.render_png(symbol, border=args.border, box_size=args.scale).save(args.output, format="PNG")
    else:
        if output_format == "svg":
            text = render.render_svg(symbol, border=args.border, module_size=args.scale)
        else:
            text = render.render_text(symbol, border=args.border)
        if args.output is None:
            sys.stdout.write(text)
            return
        args.output.write_text(text, encoding="utf-8")
    parser.exit(
        0,
        f"Saved version {symbol.version} ({symbol.module_count}x{symbol.module_count}, "
        f"level {symbol.error_correction_level.value}, mask {symbol.mask}) to {args.output}\n",
    )


if __name__ == "__main__":
    main()
