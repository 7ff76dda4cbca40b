"""Placeholder grammar.

``{@name some prompt words}`` is a persistent placeholder: the identifier is
``@name`` and the operator is asked for ``some prompt words``. Anything
without the leading marker is a one-shot placeholder whose full text is both
identifier and prompt.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from radlibs.defaults import IDENTIFIER_MARKER, SEPARATOR


class PlaceholderSpec(BaseModel):
    """A parsed placeholder, as seen by the collection pass."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    prompt: str
    persistent: bool = False

    @field_validator("identifier")
    @classmethod
    def _identifier_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("identifier must not be empty")
        return v


def parse_placeholder(text: str) -> Optional[PlaceholderSpec]:
    """Classify placeholder *text* for the collection pass.

    Returns None when the marker is present but no prompt phrase follows it;
    such placeholders are skipped during collection.
    """
    if text.startswith(IDENTIFIER_MARKER):
        tokens = text.split(SEPARATOR)
        prompt = SEPARATOR.join(tokens[1:])
        if len(tokens) < 2 or not prompt:
            return None
        return PlaceholderSpec(identifier=tokens[0], prompt=prompt, persistent=True)
    if not text:
        return None
    return PlaceholderSpec(identifier=text, prompt=text, persistent=False)


def resolve_identifier(text: str) -> str:
    """Return the identifier of placeholder *text* for the rendering pass.

    Only identity matters here, so the prompt phrase of a persistent
    placeholder is discarded.
    """
    if text.startswith(IDENTIFIER_MARKER):
        return text.split(SEPARATOR)[0]
    return text
