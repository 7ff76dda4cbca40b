"""Two-pass orchestration: collect words, then render the filled document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, TextIO

from radlibs.channel import OperatorChannel
from radlibs.defaults import DEFAULT_ENCODING
from radlibs.grammar import parse_placeholder, resolve_identifier
from radlibs.segmenter import iter_segments
from radlibs.word_bank import WordBank

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pass lifecycle callback (for CLI output)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PassEvent:
    """Structured event emitted at the start and end of each pass."""
    kind: str               # "start", "done"
    pass_name: str          # "collect", "render"
    placeholders: int = 0   # only populated on "done"
    identifiers: int = 0    # bank size after the pass; only on "done"


PassCallback = Optional[Callable[[PassEvent], None]]


def _emit(on_event: PassCallback, event: PassEvent) -> None:
    if on_event is not None:
        on_event(event)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------

def collect_words(
    source: BinaryIO,
    channel: OperatorChannel,
    bank: WordBank | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
    on_event: PassCallback = None,
) -> WordBank:
    """Collection pass: ask the operator once per placeholder occurrence."""
    if bank is None:
        bank = WordBank()
    _emit(on_event, PassEvent("start", "collect"))
    asked = 0
    for segment in iter_segments(source):
        if not segment.is_placeholder:
            continue
        spec = parse_placeholder(segment.text(encoding))
        if spec is None:
            logger.debug(f"skipping placeholder without prompt: {segment.data!r}")
            continue
        word = channel.ask(spec.prompt)
        bank.add_word(spec.identifier, word, spec.persistent)
        asked += 1
    logger.info(f"collected {asked} answers for {len(bank)} identifiers")
    _emit(on_event, PassEvent("done", "collect", placeholders=asked, identifiers=len(bank)))
    return bank


def render(
    source: BinaryIO,
    bank: WordBank,
    out: TextIO,
    *,
    encoding: str = DEFAULT_ENCODING,
    on_event: PassCallback = None,
) -> None:
    """Rendering pass: write literal text verbatim and substitute placeholders.

    Raises UnknownIdentifier as soon as a placeholder has no word left; text
    written before that point stays written.
    """
    _emit(on_event, PassEvent("start", "render"))
    substituted = 0
    for segment in iter_segments(source):
        text = segment.text(encoding)
        if segment.is_placeholder:
            out.write(bank.take_word(resolve_identifier(text)))
            substituted += 1
        else:
            out.write(text)
        out.flush()
    logger.info(f"substituted {substituted} placeholders")
    _emit(on_event, PassEvent("done", "render", placeholders=substituted, identifiers=len(bank)))


def fill(
    source: BinaryIO,
    channel: OperatorChannel,
    out: TextIO,
    *,
    encoding: str = DEFAULT_ENCODING,
    on_event: PassCallback = None,
) -> WordBank:
    """Run both passes over *source* and finish the document with a newline.

    Returns the word bank as it stands after rendering.
    """
    bank = collect_words(source, channel, encoding=encoding, on_event=on_event)
    render(source, bank, out, encoding=encoding, on_event=on_event)
    out.write("\n")
    out.flush()
    return bank
