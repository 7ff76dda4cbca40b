"""Error taxonomy.

Library code raises these; only the CLI turns them into a diagnostic and an
exit code. None of them are retried.
"""

from __future__ import annotations


class RadlibsError(Exception):
    """Base class for every unrecoverable radlibs condition."""


class ArgumentMissing(RadlibsError):
    """No source path was supplied."""

    def __init__(self) -> None:
        super().__init__("please provide a file")


class SourceUnavailable(RadlibsError):
    """The source file could not be opened."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"couldn't open {path} ({reason})")


class ReadFailure(RadlibsError):
    """An I/O error occurred while scanning the source or reading input."""


class OperatorInputClosed(ReadFailure):
    """The operator channel reached end of input while an answer was expected."""

    def __init__(self, prompt: str) -> None:
        self.prompt = prompt
        super().__init__(f"input closed while waiting for: {prompt}")


class DecodeFailure(RadlibsError):
    """Segment bytes are not valid text in the configured encoding."""

    def __init__(self, data: bytes, encoding: str, cause: UnicodeDecodeError) -> None:
        self.data = data
        self.encoding = encoding
        self.cause = cause
        super().__init__(f"segment is not valid {encoding}: {cause.reason} at byte {cause.start}")


class UnknownIdentifier(RadlibsError, KeyError):
    """A word was requested for an identifier with no remaining entry."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"no word available for identifier {self.identifier!r}"
