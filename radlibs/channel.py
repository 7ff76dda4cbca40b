"""Operator channel: where prompts go and answers come from."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

from radlibs.defaults import PROMPT_FORMAT
from radlibs.errors import OperatorInputClosed, ReadFailure


class OperatorChannel(Protocol):
    def ask(self, prompt: str) -> str:
        """Show *prompt* to the operator and return one line of response."""
        ...


def _strip_line_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class StreamChannel:
    """Line-oriented channel over a pair of text streams (stdin/stdout by default)."""

    def __init__(self, inp: TextIO | None = None, out: TextIO | None = None) -> None:
        self._in = inp or sys.stdin
        self._out = out or sys.stdout

    def ask(self, prompt: str) -> str:
        self._out.write(PROMPT_FORMAT.format(prompt=prompt))
        self._out.flush()
        try:
            line = self._in.readline()
        except OSError as exc:
            raise ReadFailure(f"error while reading input: {exc}") from exc
        if not line:
            raise OperatorInputClosed(prompt)
        return _strip_line_terminator(line)

