"""
Tests for fuzzymatch/distance.py
"""

import pytest

from fuzzymatch.distance import INCOMPARABLE, case_distance, levenshtein


class TestCaseDistance:
    def test_identical(self):
        assert case_distance("blue", "blue") == 0

    def test_counts_case_mismatches(self):
        assert case_distance("BLu", "BLU") == 1
        assert case_distance("bLUe", "BLUE") == 2
        assert case_distance("blue", "BLUE") == 4

    def test_different_strings_are_incomparable(self):
        assert case_distance("abc", "abd") == INCOMPARABLE
        assert case_distance("Fuzzy Match", "FM") == INCOMPARABLE

    def test_incomparable_sorts_last(self):
        assert sorted([INCOMPARABLE, 3, 0]) == [0, 3, INCOMPARABLE]

    def test_non_ascii(self):
        assert case_distance("Ärger", "ärger") == 1

    def test_empty(self):
        assert case_distance("", "") == 0


class TestLevenshtein:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("x", "x", 0),
            ("x", "y", 1),
            ("", "x", 1),
            ("y", "", 1),
            ("", "", 0),
            ("kitten", "mutton", 3),
            ("abc", "abbc", 1),
            ("book", "back", 2),
            ("foo", "fo.o", 1),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein(a, b) == expected

    def test_case_insensitive(self):
        assert levenshtein("KITteN", "mUttoN") == 3
        assert levenshtein("BLUE", "blue") == 0

    def test_symmetric(self):
        assert levenshtein("candyjake", "candycane") == levenshtein("candycane", "candyjake")

    def test_counts_code_points(self):
        assert levenshtein("café", "CAFÉ") == 0
        assert levenshtein("日本", "日本語") == 1
        assert levenshtein("naïve", "naive") == 1
