"""Argparse CLI wiring for ``radlibs``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO

from radlibs import defaults as _d
from radlibs.channel import StreamChannel
from radlibs.console import Console
from radlibs.errors import (
    ArgumentMissing,
    DecodeFailure,
    ReadFailure,
    SourceUnavailable,
    UnknownIdentifier,
)
from radlibs.pipeline import PassEvent, fill


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radlibs",
        description=(
            "Fill a mad-libs template: prompt for a word per {placeholder}, "
            "then print the filled document."
        ),
    )
    # Optional at the argparse level so a missing path gets our one-line
    # diagnostic instead of argparse's usage block.
    parser.add_argument("path", nargs="?", default=None, help="Path to the template file")
    parser.add_argument(
        "--encoding", default=_d.DEFAULT_ENCODING,
        help=f"Text encoding of the template (default: {_d.DEFAULT_ENCODING})",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", action="store_true", default=False,
        help="Print per-pass summaries and debug logging to stderr",
    )
    verbosity.add_argument(
        "--quiet", action="store_true", default=False,
        help="Suppress all diagnostics except errors",
    )
    parser.add_argument(
        "--no-color", action="store_true", default=False,
        help="Disable colored diagnostics",
    )
    return parser


def _verbosity(args: argparse.Namespace) -> str:
    if getattr(args, "quiet", False):
        return "quiet"
    if getattr(args, "verbose", False):
        return "verbose"
    return "normal"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def open_source(path: str | None) -> BinaryIO:
    """Open the template for binary reading, mapping failures to the error taxonomy."""
    if path is None:
        raise ArgumentMissing()
    try:
        return open(path, "rb")
    except OSError as exc:
        raise SourceUnavailable(path, exc) from exc


class _PassPrinter:
    """Prints a summary line per pass in verbose mode."""

    def __init__(self, con: Console) -> None:
        self._con = con

    def handle(self, event: PassEvent) -> None:
        if event.kind == "start":
            self._con.header(f"radlibs {event.pass_name}")
        elif event.kind == "done":
            if event.pass_name == "collect":
                self._con.kv("Answers", str(event.placeholders))
            else:
                self._con.kv("Substituted", str(event.placeholders))
            self._con.kv("Identifiers", str(event.identifiers))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    color = False if args.no_color else None
    con = Console(verbosity=_verbosity(args), color=color)
    _configure_logging(con.verbose)

    try:
        b"".decode(args.encoding)
    except LookupError:
        con.error(f"unknown encoding: {args.encoding}")
        return _d.EXIT_USAGE

    try:
        source = open_source(args.path)
    except (ArgumentMissing, SourceUnavailable) as exc:
        con.error(str(exc))
        return _d.EXIT_USAGE

    con.header("radlibs")
    con.kv("Template", args.path)
    con.kv("Encoding", args.encoding)

    printer = _PassPrinter(con)
    with source:
        try:
            fill(
                source,
                StreamChannel(),
                sys.stdout,
                encoding=args.encoding,
                on_event=printer.handle,
            )
        except UnknownIdentifier as exc:
            sys.stdout.flush()
            con.error(str(exc))
            return _d.EXIT_UNKNOWN_IDENTIFIER
        except (ReadFailure, DecodeFailure) as exc:
            sys.stdout.flush()
            con.error(str(exc))
            return _d.EXIT_IO
        except KeyboardInterrupt:
            con.warning("interrupted")
            return _d.EXIT_INTERRUPTED

    con.done(args.path)
    return _d.EXIT_OK
