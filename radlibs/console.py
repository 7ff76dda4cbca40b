"""Console output for the radlibs CLI.

Diagnostics and status lines go to stderr so that stdout carries only the
operator prompts and the rendered document.

Verbosity levels:
  quiet:   errors only
  normal:  errors and warnings
  verbose: everything in normal + per-pass summaries

Color:
  Auto-detected (TTY check on the error stream). Override with
  color=True/False or the --no-color CLI flag.
"""

from __future__ import annotations

import enum
import os
import sys
from typing import TextIO


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

# SGR parameters, applied as ESC[<n>m ... ESC[0m
_STYLES = {
    "bold": "1",
    "dim": "2",
    "red": "31",
    "green": "32",
    "yellow": "33",
}


def _color_enabled(stream: TextIO) -> bool:
    """Decide whether to color *stream*: NO_COLOR wins, then FORCE_COLOR, then isatty."""
    if os.environ.get("NO_COLOR"):  # https://no-color.org/
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


class Verbosity(enum.IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2

    @classmethod
    def from_name(cls, name: str) -> "Verbosity":
        try:
            return cls[name.upper()]
        except KeyError:
            return cls.NORMAL


_RULE_CHAR = "\u2500"
_RULE_WIDTH = 72
_KEY_WIDTH = 14


class Console:
    """Structured stderr output with optional color and verbosity control."""

    def __init__(
        self,
        verbosity: str = "normal",
        color: bool | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._err = err or sys.stderr
        self._level = Verbosity.from_name(verbosity)
        self._color = color if color is not None else _color_enabled(self._err)

    @property
    def verbose(self) -> bool:
        return self._level >= Verbosity.VERBOSE

    # --- Internal helpers ------------------------------------------------

    def _style(self, style: str, text: str) -> str:
        if not self._color:
            return text
        return f"\033[{_STYLES[style]}m{text}\033[0m"

    def _write(self, msg: str) -> None:
        self._err.write(msg + "\n")
        self._err.flush()

    # --- Structure (verbose only) -----------------------------------------

    def header(self, title: str) -> None:
        """Print a section header: ── title ──────────────"""
        if not self.verbose:
            return
        rule_len = max(0, _RULE_WIDTH - len(title) - 4)
        self._write(self._style("bold", f"{_RULE_CHAR * 2} {title} {_RULE_CHAR * rule_len}"))

    def kv(self, key: str, value: str) -> None:
        """Print an aligned key: value pair."""
        if not self.verbose:
            return
        k = self._style("dim", f"  {key + ':':<{_KEY_WIDTH}}")
        self._write(f"{k} {value}")

    def done(self, msg: str) -> None:
        if not self.verbose:
            return
        self._write(f"  {self._style('green', 'done')}  {msg}")

    # --- Diagnostics -------------------------------------------------------

    def warning(self, msg: str) -> None:
        """Print a warning (suppressed in quiet mode)."""
        if self._level < Verbosity.NORMAL:
            return
        self._write(f"{self._style('yellow', 'WARNING')}: {msg}")

    def error(self, msg: str) -> None:
        """Print a one-line error; always shown."""
        self._write(f"{self._style('red', 'ERROR')}: {msg}")
