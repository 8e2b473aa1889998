# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""webtrim CLI: digest, extract and truncate commands.

Usage:
    python -m webtrim.cli digest [PATH|-] [--url URL] [--format markdown|text] [--mode MODE] [--max-length N]
    python -m webtrim.cli extract [PATH|-]
    python -m webtrim.cli truncate [PATH|-] [--format markdown|text] [--mode MODE] [--max-length N]

Input is read from PATH, or stdin when PATH is "-" or omitted. Fetching is
left to the caller (curl, a crawler); this tool never touches the network.

Environment defaults:
    WEBTRIM_MODE             compact | standard | full (default: standard)
    WEBTRIM_MAX_INPUT_BYTES  input size cap (default: 20 MiB)
    WEBTRIM_LOG_LEVEL        root log level (default: WARNING)
    WEBTRIM_LOG_JSON         1/true for JSON log lines on stderr
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from webtrim.config import ContentFormat, TruncationMode, TruncationOptions
from webtrim.errors import InputTooLargeError, WebTrimError

DEFAULT_MAX_INPUT_BYTES = 20 * 1024 * 1024

# Bounds for --max-length, matching the fetch tool schema agents are given
MAX_LENGTH_MIN = 1000
MAX_LENGTH_MAX = 100_000


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _max_length(value: str) -> int:
    """argparse type for --max-length."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if not MAX_LENGTH_MIN <= n <= MAX_LENGTH_MAX:
        raise argparse.ArgumentTypeError(f"must be between {MAX_LENGTH_MIN} and {MAX_LENGTH_MAX}, got {n}")
    return n


def read_input(path: str | None, max_bytes: int) -> bytes:
    """Read PATH (or stdin for "-" / None), enforcing the size cap.

    Raises:
        InputTooLargeError: input exceeds ``max_bytes``.
        FileNotFoundError: PATH does not exist.
    """
    if path in (None, "-"):
        data = sys.stdin.buffer.read(max_bytes + 1)
    else:
        p = Path(path)
        size = p.stat().st_size
        if size > max_bytes:
            raise InputTooLargeError(
                f"Input too large: {size} bytes (limit {max_bytes})",
                size=size,
                limit=max_bytes,
            )
        data = p.read_bytes()
    if len(data) > max_bytes:
        raise InputTooLargeError(
            f"Input too large: more than {max_bytes} bytes",
            size=len(data),
            limit=max_bytes,
        )
    return data


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _options(args: argparse.Namespace) -> TruncationOptions:
    return TruncationOptions(mode=args.mode, max_length=args.max_length)


def _emit(payload: dict, content: str, args: argparse.Namespace) -> None:
    if args.output == "content":
        sys.stdout.write(content)
        if content and not content.endswith("\n"):
            sys.stdout.write("\n")
    else:
        json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")


def cmd_digest(args: argparse.Namespace) -> None:
    """Extract, convert and truncate an HTML page."""
    from webtrim.digest import digest_html

    html = read_input(args.input, args.max_input_bytes)
    digest = digest_html(html, url=args.url or "", format=args.format, options=_options(args))
    for warning in digest.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    _emit(digest.to_dict(), digest.content, args)


def cmd_extract(args: argparse.Namespace) -> None:
    """Run the content scorer only and print the extraction."""
    from webtrim.extraction.scorer import extract

    html = read_input(args.input, args.max_input_bytes)
    result = extract(html)
    if result is None:
        print("Error: could not parse the document.", file=sys.stderr)
        sys.exit(1)
    _emit(result.to_dict(), result.text_content, args)


def cmd_truncate(args: argparse.Namespace) -> None:
    """Truncate markdown or plain text read from PATH/stdin."""
    from webtrim.truncation.pipeline import apply_smart_truncation

    content = _decode(read_input(args.input, args.max_input_bytes))
    result = apply_smart_truncation(content, args.format, _options(args))
    _emit(result.to_dict(), result.content, args)


def _add_common(p: argparse.ArgumentParser, *, budget: bool = True) -> None:
    p.add_argument("input", nargs="?", default="-", metavar="PATH", help='Input file, or "-" for stdin (default)')
    p.add_argument(
        "--output",
        choices=["json", "content"],
        default="json",
        help="json: full result object (default); content: bounded text only",
    )
    p.add_argument(
        "--max-input-bytes",
        type=int,
        default=_env_int("WEBTRIM_MAX_INPUT_BYTES", DEFAULT_MAX_INPUT_BYTES),
        metavar="N",
        help="Refuse inputs larger than N bytes (default: $WEBTRIM_MAX_INPUT_BYTES or 20 MiB)",
    )
    if budget:
        p.add_argument(
            "--mode",
            choices=[m.value for m in TruncationMode],
            default=os.environ.get("WEBTRIM_MODE", "").strip().lower() or TruncationMode.STANDARD.value,
            help="Budget preset: compact ~3000, standard ~8000, full = no truncation",
        )
        p.add_argument(
            "--max-length",
            type=_max_length,
            metavar="N",
            help=f"Explicit character budget ({MAX_LENGTH_MIN}-{MAX_LENGTH_MAX}); overrides --mode",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract readable content from HTML and fit it to a character budget",
        prog="python -m webtrim.cli",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=_env_flag("WEBTRIM_LOG_JSON"),
        help="JSON log lines on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_digest = subparsers.add_parser(
        "digest",
        help="HTML page → bounded markdown/text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  curl -s https://example.com | %(prog)s                       Markdown digest as JSON
  %(prog)s page.html --mode compact --output content           Bounded markdown only
  %(prog)s page.html --format text --max-length 5000           Plain text, 5000 chars""",
    )
    _add_common(p_digest)
    p_digest.add_argument("--url", type=str, metavar="URL", help="Source URL (reported only, never fetched)")
    p_digest.add_argument(
        "--format",
        choices=[f.value for f in ContentFormat],
        default=ContentFormat.MARKDOWN.value,
        help="Output format (default: markdown)",
    )
    p_digest.set_defaults(func=cmd_digest)

    p_extract = subparsers.add_parser("extract", help="HTML page → main content (no truncation)")
    _add_common(p_extract, budget=False)
    p_extract.set_defaults(func=cmd_extract)

    p_truncate = subparsers.add_parser("truncate", help="Markdown/text → bounded markdown/text")
    _add_common(p_truncate)
    p_truncate.add_argument(
        "--format",
        choices=[f.value for f in ContentFormat],
        default=ContentFormat.TEXT.value,
        help="How to segment the input (default: text)",
    )
    p_truncate.set_defaults(func=cmd_truncate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    from webtrim.logging_config import configure

    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else os.environ.get("WEBTRIM_LOG_LEVEL", "WARNING")
    configure(json_output=args.log_json, level=level, context={"command": args.command})

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except SystemExit:
        raise
    except (WebTrimError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
