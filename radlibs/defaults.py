"""Authoritative defaults for radlibs.

Every template-syntax constant and CLI convention lives here. Call sites
import from this module rather than repeating literals.

Syntax constants are part of the template format; changing any of them
changes how existing templates are scanned.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Template syntax (bytes, scanned before decoding)
# ---------------------------------------------------------------------------

PROMPT_START: bytes = b"{"
PROMPT_END: bytes = b"}"
ESCAPE_CHAR: bytes = b"\\"

# ---------------------------------------------------------------------------
# Placeholder grammar (text, applied after decoding)
# ---------------------------------------------------------------------------

IDENTIFIER_MARKER: str = "@"
SEPARATOR: str = " "

# ---------------------------------------------------------------------------
# Operator channel
# ---------------------------------------------------------------------------

PROMPT_FORMAT: str = "Please input {prompt}: "

# ---------------------------------------------------------------------------
# Decoding / IO
# ---------------------------------------------------------------------------

DEFAULT_ENCODING: str = "utf-8"

# Bytes pulled from the source per read call while scanning for a delimiter.
READ_CHUNK_SIZE: int = 8192

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK: int = 0
EXIT_USAGE: int = 1           # missing path / unopenable source
EXIT_UNKNOWN_IDENTIFIER: int = 2
EXIT_IO: int = 3              # read or decode failure
EXIT_INTERRUPTED: int = 130
