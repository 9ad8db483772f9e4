"""pm2openapi command line: one-shot conversion, sample export and the studio."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import configure_logging, resolve_output_format
from .live import LiveTransformBridge, TextBuffer, TextSink
from .samples import sample_collection
from .transpiler import transpile

LOGGER = logging.getLogger(__name__)


def _read_collection(path: Path | None) -> str:
    if path is None or str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        raise ValueError(f"Collection '{path}' not found.")
    return path.read_text(encoding="utf-8")


def _write_text(text: str, out: Path | None) -> None:
    if out is None or str(out) == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"Wrote {out}", file=sys.stderr)


def command_convert(args: argparse.Namespace) -> None:
    fmt = resolve_output_format(args.format)
    if args.sample:
        if args.collection is not None:
            raise ValueError("Use either --collection or --sample, not both.")
        source = sample_collection()
    else:
        source = _read_collection(args.collection)
    # Static variant of the studio: initialize once, display once.
    sink = TextSink()
    bridge = LiveTransformBridge(TextBuffer(), sink, transform=transpile, output_format=fmt, live=False)
    update = bridge.initialize(source)
    if not update.ok:
        raise ValueError(update.error)
    LOGGER.debug("convert format=%s chars=%d", fmt.value, len(update.output))
    _write_text(sink.text, args.out)


def command_sample(args: argparse.Namespace) -> None:
    _write_text(json.dumps(sample_collection(), indent=2), args.out)


def command_studio(args: argparse.Namespace) -> None:
    if args.collection is not None and not args.collection.exists():
        raise ValueError(f"Collection '{args.collection}' not found.")
    try:
        from .studio.app import main as run_studio
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise SystemExit(
            "PySide6 is required for the studio. Install it via 'pip install pm2openapi[gui]'."
        ) from exc
    fmt = resolve_output_format(args.format)
    run_studio(
        output_format=fmt.value,
        collection=args.collection,
        live=False if args.static else None,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pm2openapi",
        description="Convert Postman collections to OpenAPI 3 documents.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: PM2OPENAPI_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_cmd = subparsers.add_parser("convert", help="Convert a collection once and print the result.")
    convert_cmd.add_argument(
        "--collection",
        type=Path,
        help="Postman collection JSON (use '-' or omit for stdin).",
    )
    convert_cmd.add_argument("--sample", action="store_true", help="Convert the built-in sample collection.")
    convert_cmd.add_argument(
        "--format",
        choices=("yaml", "json"),
        help="Output format (default: PM2OPENAPI_FORMAT or yaml).",
    )
    convert_cmd.add_argument("--out", type=Path, help="Output path (default: stdout).")
    convert_cmd.set_defaults(func=command_convert)

    sample_cmd = subparsers.add_parser("sample", help="Print the built-in sample collection.")
    sample_cmd.add_argument("--out", type=Path, help="Output path (default: stdout).")
    sample_cmd.set_defaults(func=command_sample)

    studio_cmd = subparsers.add_parser("studio", help="Launch the PySide6 live editor.")
    studio_cmd.add_argument("--collection", type=Path, help="Collection to open instead of the sample.")
    studio_cmd.add_argument(
        "--format",
        choices=("yaml", "json"),
        help="Output format (default: PM2OPENAPI_FORMAT or yaml).",
    )
    studio_cmd.add_argument(
        "--static",
        action="store_true",
        help="Render once at startup; do not follow edits (Ctrl+R re-runs).",
    )
    studio_cmd.set_defaults(func=command_studio)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        configure_logging(args.log_level)
        args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
