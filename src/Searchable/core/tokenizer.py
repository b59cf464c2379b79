"""Search phrase tokenizer.

Double-quoted runs become one word (quotes stripped, ``\\"`` unescaped);
everything else is split on whitespace. Matches are scanned left to right so
text consumed by a quoted run is never split again.
"""

from __future__ import annotations

import re

_TOKEN_RE = re.compile(r'"((?:\\.|[^\\"])*)"|(\S+)')
_ESCAPED_QUOTE = '\\"'


def normalize_phrase(phrase: str | None) -> str:
    """Trim and lower-case a raw search phrase."""
    if not phrase:
        return ""
    return phrase.strip().lower()


def tokenize(phrase: str) -> tuple[str, ...]:
    """Split a normalized phrase into words.

    Args:
        phrase: Phrase already trimmed and lower-cased by the caller.

    Returns:
        Words in order of appearance. Empty for an empty or blank phrase.
    """
    words: list[str] = []
    for match in _TOKEN_RE.finditer(phrase):
        quoted, bare = match.groups()
        word = quoted.replace(_ESCAPED_QUOTE, '"') if quoted is not None else bare
        if word:
            words.append(word)
    return tuple(words)
