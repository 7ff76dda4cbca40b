"""Shared fixtures for the radlibs test suite."""

from __future__ import annotations

import io
from typing import Iterable

import pytest

from radlibs.errors import OperatorInputClosed


# ---------------------------------------------------------------------------
# Template helpers
# ---------------------------------------------------------------------------


def source_of(text: str | bytes) -> io.BytesIO:
    """Wrap template *text* in a seekable binary stream."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return io.BytesIO(text)


@pytest.fixture
def write_template(tmp_path):
    """Return a helper that writes a template file and returns its path."""

    def _write(content: str | bytes, name: str = "template.txt") -> str:
        p = tmp_path / name
        if isinstance(content, str):
            p.write_text(content, encoding="utf-8")
        else:
            p.write_bytes(content)
        return str(p)

    return _write


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    """Keep console output free of ANSI codes regardless of the caller's env."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)


# ---------------------------------------------------------------------------
# Operator helpers
# ---------------------------------------------------------------------------


class ScriptedChannel:
    """Operator channel that replays a fixed list of answers and records the prompts."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if len(self.prompts) > len(self._answers):
            raise OperatorInputClosed(prompt)
        return self._answers[len(self.prompts) - 1]
