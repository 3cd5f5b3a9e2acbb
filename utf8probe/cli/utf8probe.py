"""utf8probe CLI entrypoint."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from utf8probe.core import (
    ConfigError,
    LineScanner,
    ScanConfig,
    ScanLog,
    SequenceValidator,
    load_config,
    render_lines,
    summary_payload,
)

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> ScanConfig:
    config = load_config(Path(args.config)) if args.config else ScanConfig()
    return config.with_overrides(
        buffer_size=args.buffer_size,
        reject_nul=False if args.allow_nul else None,
        cumulative=False if args.independent else None,
        stop_on_failure=True if args.quiet else None,
    )


def check_file(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
    except (ConfigError, OSError) as exc:
        print(f"invalid config: {exc}", file=sys.stderr)
        return 1

    scan_log = ScanLog(Path(args.scan_log) if args.scan_log else None)
    scanner = LineScanner(config, scan_log=scan_log)
    try:
        handle = open(args.path, "rb")
    except OSError as exc:
        logger.debug("open failed: %s", exc)
        print(f"can't open file {args.path} for reading.", file=sys.stderr)
        return 1

    with handle:
        try:
            summary = scanner.scan_stream(handle, source=args.path)
        except OSError as exc:
            print(f"scan of {args.path} failed: {exc}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps(summary_payload(summary), indent=2))
    elif args.quiet:
        print("ok" if summary.ok else "nok")
    elif summary.verdicts:
        print(render_lines(summary.verdicts))

    if args.fail_on_invalid and not summary.ok:
        return 1
    return 0


def parse_hex(values: List[str]) -> bytes:
    return bytes.fromhex("".join(values))


def check_bytes(args: argparse.Namespace) -> int:
    try:
        buffer = parse_hex(args.hex)
    except ValueError as exc:
        print(f"invalid hex input: {exc}", file=sys.stderr)
        return 1
    validator = SequenceValidator(reject_nul=not args.allow_nul)
    ok = validator.validate(buffer, len(buffer))
    print("ok" if ok else "nok")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check files for well-formed UTF-8, line by line")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Report per-line validity of a file")
    check_parser.add_argument("path", help="File to check")
    check_parser.add_argument("--config", default="", help="JSON file with scan settings")
    check_parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help="Validate long lines in buffers of this size (minus one byte), as a fixed line reader would",
    )
    check_parser.add_argument(
        "--allow-nul", action="store_true", help="Accept embedded NUL bytes"
    )
    check_parser.add_argument(
        "--independent",
        action="store_true",
        help="Report each line on its own instead of the running verdict",
    )
    check_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Stop at the first invalid line and print only the overall verdict",
    )
    check_parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    check_parser.add_argument("--scan-log", default="", help="Append scan checkpoints to this file")
    check_parser.add_argument(
        "--fail-on-invalid", action="store_true", help="Exit with status 1 if any line is invalid"
    )
    check_parser.set_defaults(func=check_file)

    bytes_parser = subparsers.add_parser("bytes", help="Validate a single buffer given as hex")
    bytes_parser.add_argument("hex", nargs="+", help="Hex bytes, e.g. 'c3 a9' or c3a9")
    bytes_parser.add_argument(
        "--allow-nul", action="store_true", help="Accept embedded NUL bytes"
    )
    bytes_parser.set_defaults(func=check_bytes)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    code = args.func(args)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
