# src/mgons/numtheory.py
"""
Elementary number theory used by the polygon-count formula:
Euclidean gcd, the totient count and exact binomial coefficients.

All three are memoized; a perimeter sweep asks for the same small
arguments many thousands of times.
"""
from __future__ import annotations

from functools import cache

import gmpy2


@cache
def gcd(a: int, b: int) -> int:
    """Euclidean GCD of two positive integers, in either order."""
    if a <= 0 or b <= 0:
        raise ValueError(f"gcd expects positive integers, got ({a}, {b})")
    while b:
        a, b = b, a % b
    return a


@cache
def totient(z: int) -> int:
    """
    Count of 1 <= i <= z coprime to z: the count starts at 1 (i = 1)
    and every 2 <= i < z with gcd(i, z) == 1 adds one.
    """
    if z < 1:
        raise ValueError(f"totient expects z >= 1, got {z}")
    res = 1
    for i in range(2, z):
        if gcd(i, z) == 1:
            res += 1
    return res


def is_degenerate(bn: int, bd: int) -> bool:
    """True when "bn choose bd" names an empty selection (combinatorial zero)."""
    return bd < 0 or bn < 0 or bn < bd


def _binom_product(bn: int, bd: int, one):
    # res * top is always divisible by i: after step i, res == C(bn, i).
    res = one
    top = bn
    for i in range(1, bd + 1):
        res = res * top // i
        top -= 1
    return res


@cache
def binom(bn: int, bd: int) -> int:
    """Exact binomial coefficient "bn choose bd"; 0 for degenerate arguments."""
    if is_degenerate(bn, bd):
        return 0
    return _binom_product(bn, bd, 1)


@cache
def binom_mpz(bn: int, bd: int) -> gmpy2.mpz:
    """Same as binom(), accumulated in gmpy2.mpz."""
    if is_degenerate(bn, bd):
        return gmpy2.mpz(0)
    return _binom_product(bn, bd, gmpy2.mpz(1))


def clear_caches() -> None:
    """Forget every memoised gcd, totient and binomial value."""
    for fn in (gcd, totient, binom, binom_mpz):
        fn.cache_clear()
