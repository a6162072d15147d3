"""Distance functions used to rank candidates.

Two distances are used by the matcher:

- `case_distance`: how many characters differ only by letter case. It is
  only meaningful for strings that are equal case-insensitively; anything
  else is `INCOMPARABLE`.
- `levenshtein`: case-insensitive edit distance.

Implementation notes:
- Both functions work on code points (Python `str` items), so non-ASCII
  characters count as a single unit.
- The edit distance kernel is `rapidfuzz`. We feed it per-character
  lowercased sequences instead of `a.lower()`, because lowercasing some
  characters changes the string length (e.g. "İ").
"""

from __future__ import annotations

import math

from rapidfuzz.distance import Levenshtein

# Sorts after every real distance.
INCOMPARABLE = math.inf


def case_distance(a: str, b: str) -> int | float:
    """Count positions where `a` and `b` differ only by case.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Number of case mismatches, or `INCOMPARABLE` if the strings are not
        equal case-insensitively.
    """
    if a.lower() != b.lower():
        return INCOMPARABLE

    return sum(1 for left, right in zip(a, b) if left != right)


def _folded(text: str) -> list[str]:
    return [c.lower() for c in text]


def levenshtein(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance between `a` and `b`.

    Insertions, deletions and substitutions all cost 1. Characters are
    compared after lowercasing each one individually.

    Examples:
        ("kitten", "mutton") -> 3
        ("KITteN", "mUttoN") -> 3
        ("", "x")            -> 1
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    return int(Levenshtein.distance(_folded(a), _folded(b)))
