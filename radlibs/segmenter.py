"""Escape-aware delimiter scanner.

Splits a binary stream into alternating literal and placeholder segments.
The scanner has two modes: PRECEDING (literal text, looking for ``{``) and
CONTAINING (placeholder text, looking for ``}``). A delimiter immediately
preceded by the escape byte is kept as data and the escape byte is dropped;
the mode does not change. The escape byte has no other meaning.

At end of input a trailing literal segment is emitted as-is, while a
trailing placeholder with no closing delimiter is dropped.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from radlibs.defaults import (
    DEFAULT_ENCODING,
    ESCAPE_CHAR,
    PROMPT_END,
    PROMPT_START,
    READ_CHUNK_SIZE,
)
from radlibs.errors import DecodeFailure, ReadFailure

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    """Scanner mode; the value is the delimiter that ends the current segment."""

    PRECEDING = PROMPT_START
    CONTAINING = PROMPT_END

    @property
    def delimiter(self) -> bytes:
        return self.value

    def toggled(self) -> "Mode":
        if self is Mode.PRECEDING:
            return Mode.CONTAINING
        return Mode.PRECEDING


@dataclass(frozen=True)
class Segment:
    """One scanned span of the source, tagged with the mode it was read in."""

    mode: Mode
    data: bytes

    @property
    def is_placeholder(self) -> bool:
        return self.mode is Mode.CONTAINING

    def text(self, encoding: str = DEFAULT_ENCODING) -> str:
        """Decode ``data`` strictly; raise DecodeFailure on invalid bytes."""
        try:
            return self.data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeFailure(self.data, encoding, exc) from exc


# ---------------------------------------------------------------------------
# Buffered read-until
# ---------------------------------------------------------------------------


class _DelimitedReader:
    """Reads a binary stream up to and including a given delimiter byte."""

    def __init__(self, stream: BinaryIO, chunk_size: int = READ_CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._pending = b""
        self._eof = False

    def read_until(self, delimiter: bytes) -> bytes:
        """Return bytes through *delimiter*, or whatever remains at end of input.

        An empty result means the stream is exhausted.
        """
        while True:
            idx = self._pending.find(delimiter)
            if idx != -1:
                chunk = self._pending[: idx + 1]
                self._pending = self._pending[idx + 1 :]
                return chunk
            if self._eof:
                chunk, self._pending = self._pending, b""
                return chunk
            try:
                data = self._stream.read(self._chunk_size)
            except OSError as exc:
                raise ReadFailure(f"error while reading: {exc}") from exc
            if not data:
                self._eof = True
            else:
                self._pending += data


def _rewind(source: BinaryIO) -> None:
    try:
        source.seek(0)
    except OSError as exc:
        raise ReadFailure(f"cannot rewind source: {exc}") from exc


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def iter_segments(
    source: BinaryIO,
    *,
    rewind: bool = True,
    chunk_size: int = READ_CHUNK_SIZE,
) -> Iterator[Segment]:
    """Yield the tagged segments of *source*, starting in PRECEDING mode.

    The stream is rewound to its start first (unless *rewind* is False), so
    calling this twice on the same seekable source scans it twice.
    """
    if rewind:
        _rewind(source)
    reader = _DelimitedReader(source, chunk_size)
    mode = Mode.PRECEDING
    buf = bytearray()

    while True:
        chunk = reader.read_until(mode.delimiter)
        if not chunk:
            break
        buf += chunk
        if not chunk.endswith(mode.delimiter):
            # end of input without a delimiter; the next read returns nothing
            continue
        if len(buf) >= 2 and buf[-2:-1] == ESCAPE_CHAR:
            del buf[-2]
            continue
        del buf[-1]
        logger.debug(f"segment {mode.name.lower()}: {len(buf)} bytes")
        yield Segment(mode, bytes(buf))
        buf.clear()
        mode = mode.toggled()

    if buf:
        if mode is Mode.PRECEDING:
            yield Segment(mode, bytes(buf))
        else:
            logger.debug(f"dropping unterminated placeholder: {bytes(buf)!r}")
