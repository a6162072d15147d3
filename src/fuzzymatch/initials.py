"""Initials extraction.

Users often type the first letter of each word instead of a full name:
- "FM" for "Fuzzy Match"
- "ja" for "jungle-adventure"
- "DA" for "DesertAirway"

To support that, a key is split into words and the first character of each
word is collected.

Word splitting rules (applied in order):
1. whitespace
2. any non-alphanumeric character (covers kebab-case, snake_case, dots)
3. case transitions inside a piece (camelCase / TitleCase)
"""

from __future__ import annotations

import re

# Any run of characters that are neither letters nor digits.
# `\W` also treats "_" as a word character, so it is listed explicitly.
_NON_ALNUM_RE = re.compile(r"[\W_]+", flags=re.UNICODE)


def split_case(word: str) -> list[str]:
    """Split a single piece at camelCase / TitleCase boundaries.

    A new word starts before every uppercase character that is not the first
    character of the current word (and not preceded by whitespace).

    Examples:
        "aHappyDay" -> ["a", "Happy", "Day"]
        "AHappyDay" -> ["A", "Happy", "Day"]

    Args:
        word: A piece without separators.

    Returns:
        The list of sub-words. Empty input yields an empty list.
    """
    if not word:
        return []

    words: list[str] = []
    last_char = ""
    word_start = 0
    for i, c in enumerate(word):
        if c.isupper() and not last_char.isspace() and i > word_start:
            words.append(word[word_start:i])
            word_start = i
        last_char = c

    words.append(word[word_start:])
    return words


def split_words(key: str) -> list[str]:
    """Split a key into the words used for initials (empty pieces dropped)."""
    words: list[str] = []
    for chunk in key.split():
        for piece in _NON_ALNUM_RE.split(chunk):
            words.extend(w for w in split_case(piece) if w)
    return words


def initials(key: str) -> str:
    """Return the uppercase initials of `key`.

    Examples:
        "Fuzzy Match"       -> "FM"
        "pacific_cruiseship" -> "PC"
        "   "               -> ""
    """
    return "".join(w[0] for w in split_words(key)).upper()
