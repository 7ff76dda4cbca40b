"""Word bank: collected answers keyed by placeholder identifier."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, Field

from radlibs.errors import UnknownIdentifier


class WordBankEntry(BaseModel):
    """Pool of distinct answers for one identifier.

    A non-persistent entry shrinks as words are taken and is removed from the
    bank once empty. A persistent entry never shrinks.
    """

    pool: set[str] = Field(default_factory=set)
    persistent: bool = False

    def pick(self) -> str:
        # Any element will do; set iteration order is stable while the pool
        # is not mutated, so persistent entries repeat the same word.
        return next(iter(self.pool))


class WordBank:
    """Mapping from identifier to a ``WordBankEntry``."""

    def __init__(self) -> None:
        self._entries: dict[str, WordBankEntry] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def identifiers(self) -> list[str]:
        return list(self._entries)

    def entry(self, identifier: str) -> WordBankEntry:
        """Return the live entry for *identifier* or raise UnknownIdentifier."""
        try:
            return self._entries[identifier]
        except KeyError:
            raise UnknownIdentifier(identifier) from None

    def add_word(self, identifier: str, word: str, persistent: bool) -> None:
        """Store *word* for *identifier*, creating the entry on first use.

        The persistence flag is fixed by the first call for an identifier.
        Duplicate words collapse into one pool item.
        """
        entry = self._entries.get(identifier)
        if entry is None:
            entry = WordBankEntry(persistent=persistent)
            self._entries[identifier] = entry
        entry.pool.add(word)

    def take_word(self, identifier: str) -> str:
        """Return a word for *identifier*, consuming it unless the entry is persistent."""
        entry = self.entry(identifier)
        word = entry.pick()
        if not entry.persistent:
            entry.pool.discard(word)
            if not entry.pool:
                del self._entries[identifier]
        return word
