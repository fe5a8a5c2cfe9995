# src/mgons/formula.py
"""
East–Niles count of integer-sided m-gons with perimeter n, up to rotation
and reflection.

Burnside's Lemma over the dihedral group D_m gives

    P(m, n) = [ 2 * sum_{d | gcd(m,n)} phi(d) C(n/d - 1, m/d - 1)
                - 2m C(floor(n/2), m - 1)
                + reflection sum ] / (4m)

where the reflection sum depends on the parity of m. Everything is kept
over the common denominator 4m so the whole evaluation stays in integers;
the final division must leave no remainder.
"""
from __future__ import annotations

from dataclasses import dataclass

import gmpy2
from sympy import divisors

from mgons.numtheory import binom, binom_mpz, gcd, totient
from mgons.runtime import current as _rt_current

BAD_FRACTION = "bad_fraction"


class InternalConsistencyError(RuntimeError):
    """The accumulated numerator is not a multiple of 4m."""

    code = BAD_FRACTION

    def __init__(self, m: int, n: int, numerator: int, denom: int):
        self.m = m
        self.n = n
        self.numerator = numerator
        self.denom = denom
        super().__init__(
            f"{BAD_FRACTION}: numerator {numerator} for (m={m}, n={n}) "
            f"leaves remainder {numerator % denom} modulo {denom}"
        )


@dataclass(frozen=True)
class MgonTerms:
    m: int
    n: int
    denom: int
    gcd: int
    divisor_term: int       # 2 * sum over d | gcd of totient(d) * C(n/d-1, m/d-1)
    reflection_term: int    # 2m * C(n//2, m-1), subtracted
    parity_term: int        # odd/even case sum, already scaled by 2m or m

    @property
    def numerator(self) -> int:
        return self.divisor_term - self.reflection_term + self.parity_term

    @property
    def remainder(self) -> int:
        return self.numerator % self.denom

    @property
    def count(self) -> int:
        return self.numerator // self.denom


def _check_domain(m: int, n: int) -> None:
    if isinstance(m, bool) or isinstance(n, bool) or not isinstance(m, int) or not isinstance(n, int):
        raise ValueError(f"m and n must be integers, got m={m!r}, n={n!r}")
    if m < 3:
        raise ValueError(f"a polygon needs at least 3 sides, got m={m}")
    if n < m:
        raise ValueError(f"perimeter n={n} is smaller than the number of sides m={m}")


def _arith(use_gmpy2: bool | None):
    if use_gmpy2 is None:
        use_gmpy2 = _rt_current().use_gmpy2
    if use_gmpy2:
        return binom_mpz, gmpy2.mpz(0)
    return binom, 0


def _odd_sum(m: int, n: int, choose, zero):
    msum = zero
    for i in range(1, (n - 1) // 2 + 1):
        if (n + i) & 1:
            continue  # n and i must share parity
        msum += choose((n - i) // 2 - 1, m // 2 - 1)
    return msum


def _even_sum(m: int, n: int, choose, zero):
    msum = zero
    if n & 1 == 0:
        msum += choose(n // 2 - 1, m // 2 - 1)
    half = (n - 1) // 2
    for i in range(1, half + 1):
        for j in range(1, half + 1):
            bn = n - i - j
            if bn & 1:
                continue
            msum += choose(bn // 2 - 1, m // 2 - 2)
    return msum


def mgon_terms(m: int, n: int, *, use_gmpy2: bool | None = None) -> MgonTerms:
    """
    Accumulate the three parts of the numerator for (m, n) without dividing.

    use_gmpy2=None follows the runtime setting ARITHMETIC.USE_GMPY2.
    """
    _check_domain(m, n)
    choose, zero = _arith(use_gmpy2)

    denom = 4 * m
    g = gcd(m, n)

    # rotations: the factor 2 turns into 1/2 after dividing by 4m
    rot = zero
    for d in divisors(g):
        rot += 2 * totient(d) * choose(n // d - 1, m // d - 1)

    refl = 2 * m * choose(n // 2, m - 1)

    if m & 1:
        par = _odd_sum(m, n, choose, zero) * m * 2
    else:
        par = _even_sum(m, n, choose, zero) * m

    return MgonTerms(
        m=m,
        n=n,
        denom=denom,
        gcd=g,
        divisor_term=int(rot),
        reflection_term=int(refl),
        parity_term=int(par),
    )


def compute_mgon(m: int, n: int, *, use_gmpy2: bool | None = None) -> int:
    """
    Exact number of distinct m-gons (up to rotation and reflection) whose
    positive integer sides sum to n.

    Raises InternalConsistencyError if 4m does not divide the numerator.
    """
    t = mgon_terms(m, n, use_gmpy2=use_gmpy2)
    num = t.numerator
    if num % t.denom != 0:
        raise InternalConsistencyError(m, n, num, t.denom)
    return num // t.denom
