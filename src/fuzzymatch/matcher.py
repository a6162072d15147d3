"""Tiered fuzzy matching.

Problem
-------
Given a list of keys (e.g. titles in a UI list) and a short typed term, return
the keys that plausibly match, best first. The term may contain typos, be an
abbreviation, be a fragment, or differ in case.

Approach
--------
Keys are classified into tiers, scanned in this order:

0. exact match        -> returned alone, nothing else runs
1. case-insensitive exact match
2. initials match     ("FM" -> "Fuzzy Match")
3. case-insensitive substring, within the length budget
4. case-insensitive edit distance, within the length budget

Each tier scans every key. A key keeps the first tier that accepted it; later
tiers never re-classify or duplicate it. Results are sorted by
(tier, distance) with a stable tie-break: first-accepted first.

Length budget
-------------
Tiers 3 and 4 accept a key only if

    distance <= len(key) - len(key) * threshold

so a higher threshold is stricter. The threshold is not clamped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Sequence

from .distance import INCOMPARABLE, case_distance, levenshtein
from .initials import initials

logger = logging.getLogger(__name__)


class Tier(IntEnum):
    """Coarse match quality; lower is better."""

    EXACT = 0
    CASE_INSENSITIVE = 1
    INITIALS = 2
    CONTAINS = 3
    EDIT_DISTANCE = 4


@dataclass(frozen=True)
class StringMatch:
    """A scored candidate.

    Identity is `(index, value)`; `tier` and `distance` only drive ordering.
    """

    tier: Tier
    distance: int | float
    index: int
    value: str

    @property
    def identity(self) -> tuple[int, str]:
        return self.index, self.value

    @property
    def sort_key(self) -> tuple[int, int | float]:
        return int(self.tier), self.distance

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "value": self.value,
            "tier": self.tier.name.lower(),
            # INCOMPARABLE is not valid JSON.
            "distance": None if self.distance == INCOMPARABLE else self.distance,
        }


class MatchIndex(NamedTuple):
    """A public result: original position and value of a matching key."""

    index: int
    value: str


def length_budget(length: int, threshold: float) -> float:
    """Maximum distance tolerated for a key of `length` characters."""
    return length - length * threshold


def rank(keys: Sequence[str], term: str, threshold: float) -> list[StringMatch]:
    """Run the tier cascade and return scored candidates, best first.

    Args:
        keys: Candidate strings. Positions are preserved in the output.
        term: The query string.
        threshold: Strictness for tiers 3 and 4 (conventionally 0..1).

    Returns:
        Deduplicated `StringMatch` records sorted by (tier, distance).
        Never raises; an empty list means nothing matched.
    """
    for i, key in enumerate(keys):
        if key == term:
            logger.debug("Exact match for %r at index %d", term, i)
            return [StringMatch(Tier.EXACT, 0, i, key)]

    term_lower = term.lower()
    term_len = len(term)

    # identity -> first accepting match (dicts keep insertion order)
    accepted: dict[tuple[int, str], StringMatch] = {}

    def accept(tier: Tier, distance: int | float, i: int, key: str) -> None:
        match = StringMatch(tier, distance, i, key)
        if match.identity not in accepted:
            accepted[match.identity] = match

    for i, key in enumerate(keys):
        if key.lower() == term_lower:
            accept(Tier.CASE_INSENSITIVE, case_distance(key, term), i, key)

    for i, key in enumerate(keys):
        if initials(key).lower() == term_lower:
            # Distance is taken on the full strings, so it is usually INCOMPARABLE.
            accept(Tier.INITIALS, case_distance(key, term), i, key)

    for i, key in enumerate(keys):
        if term_lower in key.lower():
            distance = abs(len(key) - term_len)
            if distance <= length_budget(len(key), threshold):
                accept(Tier.CONTAINS, distance, i, key)

    for i, key in enumerate(keys):
        distance = levenshtein(key, term)
        if distance <= length_budget(len(key), threshold):
            accept(Tier.EDIT_DISTANCE, distance, i, key)

    matches = sorted(accepted.values(), key=lambda m: m.sort_key)
    if logger.isEnabledFor(logging.DEBUG):
        counts = {t.name: sum(1 for m in matches if m.tier == t) for t in Tier}
        logger.debug(
            "Matched %d/%d keys for %r (threshold=%s): %s",
            len(matches),
            len(keys),
            term,
            threshold,
            counts,
        )
    return matches


def fuzzymatch(
    keys: Sequence[str], term: str, threshold: float
) -> list[MatchIndex]:
    """Return the keys matching `term`, best first, as `(index, value)` pairs.

    Examples:
        fuzzymatch(["foo", "bar", "abc"], "foo", 0.7)   -> [(0, "foo")]
        fuzzymatch(["Fuzzy Match", "Jungle"], "FM", 0.7) -> [(0, "Fuzzy Match")]
    """
    return [MatchIndex(m.index, m.value) for m in rank(keys, term, threshold)]


def best_match(
    keys: Sequence[str], term: str, threshold: float
) -> MatchIndex | None:
    """Return the single best match, or None if nothing passes."""
    matches = fuzzymatch(keys, term, threshold)
    if not matches:
        return None
    return matches[0]
