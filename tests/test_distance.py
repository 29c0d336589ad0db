"""Tests for the Levenshtein scorer."""

import itertools

import pytest

from declsearch.distance import levenshtein
from declsearch.lexer import normalize_query

SAMPLES = ["", "a", "ab", "int", "int ( ) ", "kitten", "sitting", "char * ", "int ( int ) "]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("abc", "", 3),
        ("abc", "abc", 0),
        ("abc", "abd", 1),
        ("abc", "xabc", 1),
    ],
)
def test_known_distances(a, b, expected):
    assert levenshtein(a, b) == expected


def test_signature_against_query():
    """Deleting "char * , " turns one signature into the other."""
    signature = normalize_query("int ( char * , int )")
    query = normalize_query("int(int)")
    assert signature == "int ( char * , int ) "
    assert query == "int ( int ) "
    assert levenshtein(signature, query) == 9
    assert levenshtein("int ( char * , int )", "int ( int )") == 9


@pytest.mark.parametrize("a", SAMPLES)
def test_identity(a):
    assert levenshtein(a, a) == 0


@pytest.mark.parametrize("a, b", list(itertools.product(SAMPLES, repeat=2)))
def test_symmetry(a, b):
    assert levenshtein(a, b) == levenshtein(b, a)


def test_triangle_inequality():
    for a, b, c in itertools.product(SAMPLES, repeat=3):
        assert levenshtein(a, c) <= levenshtein(a, b) + levenshtein(b, c)


def test_bounded_by_longer_length():
    assert levenshtein("abcdef", "xyz") <= 6
    assert levenshtein("abcdef", "xyz") >= 3
