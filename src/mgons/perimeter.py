# src/mgons/perimeter.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from mgons.formula import compute_mgon

N_MIN = 3
N_MAX = 250
M_MIN = 3


@dataclass(frozen=True)
class PerimeterRow:
    n: int
    total: int
    log2: int                           # ceil(log2(total)), 0 for total <= 1
    counts: tuple[int, ...] | None = None  # per-m counts for m = m_min..n, if requested
    m_min: int = M_MIN

    def count_for(self, m: int) -> int:
        if self.counts is None:
            raise ValueError("row was produced without per-m counts")
        if not self.m_min <= m <= self.n:
            return 0
        return self.counts[m - self.m_min]


def ceil_log2(x: int) -> int:
    """Smallest k >= 0 with 2**k >= x."""
    x = int(x)
    if x <= 1:
        return 0
    return (x - 1).bit_length()


def perimeter_counts(n: int, *, m_min: int = M_MIN, use_gmpy2: bool | None = None) -> tuple[int, ...]:
    """Counts compute_mgon(m, n) for m = m_min..n."""
    if m_min < 3:
        raise ValueError(f"m_min must be >= 3, got {m_min}")
    return tuple(compute_mgon(m, n, use_gmpy2=use_gmpy2) for m in range(m_min, n + 1))


def perimeter_total(n: int, *, m_min: int = M_MIN, use_gmpy2: bool | None = None) -> int:
    """Total number of integer-sided polygons with perimeter n."""
    return sum(perimeter_counts(n, m_min=m_min, use_gmpy2=use_gmpy2))


def sweep(
    n_min: int = N_MIN,
    n_max: int = N_MAX,
    *,
    m_min: int = M_MIN,
    with_counts: bool = False,
    use_gmpy2: bool | None = None,
    progress: Callable[[int, int], None] | None = None,
) -> Iterator[PerimeterRow]:
    """
    Yield one PerimeterRow per perimeter n_min..n_max, in order.

    progress(done, n) is called after each row. An InternalConsistencyError
    from any (m, n) stops the sweep; the failing row is not yielded.
    """
    if n_min < 3:
        raise ValueError(f"n_min must be >= 3, got {n_min}")
    if n_max < n_min:
        raise ValueError(f"n_max ({n_max}) is smaller than n_min ({n_min})")

    for done, n in enumerate(range(n_min, n_max + 1), start=1):
        counts = perimeter_counts(n, m_min=m_min, use_gmpy2=use_gmpy2)
        total = sum(counts)
        yield PerimeterRow(
            n=n,
            total=total,
            log2=ceil_log2(total),
            counts=counts if with_counts else None,
            m_min=m_min,
        )
        if progress is not None:
            progress(done, n)
