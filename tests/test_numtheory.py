# tests/test_numtheory.py
"""
gcd / totient / binomial.

Run: pytest -v
"""

from __future__ import annotations

import math

import gmpy2
import pytest
import sympy

from mgons.numtheory import binom, binom_mpz, gcd, is_degenerate, totient

# ---------- gcd ---------------------------------------------------------------

GCD_CASES = [
    (1, 1, 1),
    (7, 7, 7),
    (12, 18, 6),
    (18, 12, 6),
    (3, 250, 1),
    (250, 100, 50),
    (17, 51, 17),
    (64, 48, 16),
]


@pytest.mark.parametrize("a,b,expected", GCD_CASES, ids=[f"gcd({a},{b})" for a, b, _ in GCD_CASES])
def test_gcd_known_values(a, b, expected):
    assert gcd(a, b) == expected


def test_gcd_is_commutative_and_matches_math():
    for a in range(1, 60):
        assert gcd(a, a) == a
        for b in range(1, 60):
            assert gcd(a, b) == gcd(b, a) == math.gcd(a, b)


@pytest.mark.parametrize("a,b", [(0, 5), (5, 0), (-3, 6)])
def test_gcd_rejects_non_positive(a, b):
    with pytest.raises(ValueError):
        gcd(a, b)


# ---------- totient -----------------------------------------------------------

def test_totient_small_values():
    # 1, 1, 2, 2, 4, 2, 6, 4, 6, 4 (OEIS A000010)
    assert [totient(z) for z in range(1, 11)] == [1, 1, 2, 2, 4, 2, 6, 4, 6, 4]


def test_totient_counts_from_one():
    # the count starts at 1 before any i >= 2 is tested
    assert totient(1) == 1
    assert totient(2) == 1


def test_totient_agrees_with_sympy():
    for z in range(1, 300):
        assert totient(z) == int(sympy.totient(z)), z


def test_totient_rejects_zero():
    with pytest.raises(ValueError):
        totient(0)


# ---------- binomial ----------------------------------------------------------

def test_binom_edges():
    for n in range(0, 40):
        assert binom(n, 0) == 1
        assert binom(n, n) == 1
        if n:
            assert binom(n, 1) == n


def test_binom_matches_sympy_and_gmpy2():
    for n in range(0, 80):
        for k in range(0, n + 1):
            expected = int(sympy.binomial(n, k))
            assert binom(n, k) == expected
            assert binom_mpz(n, k) == gmpy2.comb(n, k) == expected


def test_binom_is_exact_beyond_64_bits():
    b = binom(250, 125)
    assert b.bit_length() > 240
    assert b == math.comb(250, 125)


DEGENERATE = [
    (2, 3),    # choosing more than available
    (0, 1),
    (5, -1),   # m/2 - 2 for m < 4
    (-1, 0),   # top argument below zero
    (-1, -1),
    (-4, 2),
]


@pytest.mark.parametrize("bn,bd", DEGENERATE, ids=[f"C({a},{b})" for a, b in DEGENERATE])
def test_binom_degenerate_is_zero(bn, bd):
    assert is_degenerate(bn, bd)
    assert binom(bn, bd) == 0
    assert binom_mpz(bn, bd) == 0


def test_binom_results_are_plain_ints():
    assert type(binom(30, 7)) is int
    assert isinstance(binom_mpz(30, 7), type(gmpy2.mpz(0)))


def test_caches_can_be_cleared(fresh_caches):
    binom(20, 10)
    assert binom.cache_info().currsize >= 1
