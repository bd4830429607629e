"""Header casing helpers.

SOURCE headers use PascalCase canonical names ("Transaction Date" becomes
``TransactionDate``); renamed TARGET headers use snake_case
(``date_of_transaction``).
"""

from __future__ import annotations

import re

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_UPPER_LOWER = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(text: str) -> list[str]:
    """Split ``text`` on separators and camel-case boundaries."""

    spaced = _LOWER_UPPER.sub(r"\1 \2", text)
    spaced = _UPPER_UPPER_LOWER.sub(r"\1 \2", spaced)
    return [word for word in _SEPARATORS.split(spaced) if word]


def pascal_case(text: str) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def snake_case(text: str) -> str:
    return "_".join(word.lower() for word in split_words(text))
