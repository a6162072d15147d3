"""Top-level package for tiered fuzzy string matching."""

from .distance import INCOMPARABLE, case_distance, levenshtein
from .initials import initials, split_case
from .matcher import MatchIndex, StringMatch, Tier, best_match, fuzzymatch, rank

__all__ = [
    "INCOMPARABLE",
    "MatchIndex",
    "StringMatch",
    "Tier",
    "best_match",
    "case_distance",
    "fuzzymatch",
    "initials",
    "levenshtein",
    "rank",
    "split_case",
]
