"""Tests for bounded Levenshtein distance."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from keysuggest.edit_distance import distance, full_distance, TOO_DIFFERENT


def test_identical_strings():
    for word in ("", "a", "hello", "Ünïcödé"):
        assert distance(word, word) == 0


def test_kitten_sitting():
    assert distance("kitten", "sitting") == 3


def test_single_edits():
    assert distance("hello", "hallo") == 1   # substitution
    assert distance("hello", "helllo") == 1  # insertion
    assert distance("hello", "helo") == 1    # deletion


def test_transposition_costs_two():
    assert distance("wrold", "world") == 2


def test_length_gap_returns_sentinel():
    # true distance is 5, but the gap alone exceeds 2
    assert distance("a", "bcdefg") == TOO_DIFFERENT
    assert distance("abcdef", "") == TOO_DIFFERENT
    assert full_distance("abcdef", "") == 6


def test_empty_strings():
    assert distance("", "") == 0
    assert distance("", "ab") == 2
    assert distance("abc", "") == 3


def test_symmetric():
    pairs = [("help", "hepl"), ("keyboard", "keybaord"), ("abc", "xyz")]
    for a, b in pairs:
        assert distance(a, b) == distance(b, a)


if __name__ == '__main__':
    test_identical_strings()
    test_kitten_sitting()
    test_single_edits()
    test_transposition_costs_two()
    test_length_gap_returns_sentinel()
    test_empty_strings()
    test_symmetric()
    print("All edit distance tests passed.")
