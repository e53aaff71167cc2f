"""
Language-tagged property value.

A [LocalizedValue][interlang.models.localized_value.LocalizedValue] pairs an
opaque payload (whatever the resource layer produced: a literal, a linked
resource, a URI) with the language tag it was recorded in.  The payload is
carried through filtering untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._validation import validate_str_no_null
from .constants import UNTAGGED


@dataclass(frozen=True, slots=True)
class LocalizedValue:
    """Immutable property value with its language tag.

    Attributes:
        lang: Language tag; ``""`` means the value carries no language.
            ``None`` is accepted and normalized to ``""``. Surrounding
            whitespace is stripped.
        payload: Opaque value content, never inspected or transformed.

    Examples:
        ```python
        LocalizedValue("fr", "Bonjour").is_tagged  # True
        LocalizedValue(None, 42).lang               # ''
        ```
    """

    lang: str
    payload: Any = None

    def __post_init__(self) -> None:
        if self.lang is None:
            object.__setattr__(self, "lang", UNTAGGED)
        validate_str_no_null(self.lang, "lang")
        object.__setattr__(self, "lang", self.lang.strip())

    @property
    def is_tagged(self) -> bool:
        """Whether the value declares a language."""
        return self.lang != UNTAGGED
