"""Small-prime sieve and trial-division prefilter.

The sieve produces the table of small primes used to discard obvious
composites before any modular exponentiation is spent on a candidate.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

SMALL_PRIME_LIMIT = 2000


def _numpy_sieve(limit: int) -> np.ndarray:
    """NumPy-based Sieve of Eratosthenes.

    Args:
        limit: Upper bound for prime generation.

    Returns:
        Array of prime numbers up to limit.
    """
    if limit < 2:
        return np.array([], dtype=np.int64)

    is_prime = np.ones(limit + 1, dtype=bool)
    is_prime[0] = False
    is_prime[1] = False

    for i in range(2, int(np.sqrt(limit)) + 1):
        if is_prime[i]:
            is_prime[i*i::i] = False

    return np.nonzero(is_prime)[0].astype(np.int64)


def generate_primes(limit: int) -> np.ndarray:
    """Generate all prime numbers up to and including limit.

    Args:
        limit: Upper bound for prime generation (inclusive).

    Returns:
        Array of prime numbers up to limit.

    Raises:
        ValueError: If limit is less than 2.
    """
    if limit < 2:
        raise ValueError(f"Limit must be >= 2, got {limit}")

    return _numpy_sieve(limit)


# Plain ints: candidates are far wider than int64.
SMALL_PRIMES: tuple[int, ...] = tuple(int(p) for p in generate_primes(SMALL_PRIME_LIMIT))


def filter_cutoff(bit_length: int) -> int:
    """Number of small primes worth trial-dividing a ``bit_length``-bit candidate by.

    Only primes up to ``2**(bit_length/2)`` can be the smallest factor of a
    composite of that size.
    """
    bound = 1 << bit_length
    for i, p in enumerate(SMALL_PRIMES):
        if p * p > bound:
            return i
    return len(SMALL_PRIMES)


def passes_trial_division(n: int, cutoff: int | None = None) -> bool:
    """Return False if one of the first ``cutoff`` small primes divides ``n``.

    A small prime equal to ``n`` is not counted as a divisor, so small
    primes themselves pass.
    """
    if cutoff is None:
        cutoff = len(SMALL_PRIMES)
    for p in SMALL_PRIMES[:cutoff]:
        if n == p:
            continue
        if n % p == 0:
            return False
    return True


def small_factor(n: int) -> int | None:
    """Smallest tabulated prime dividing ``n`` (other than ``n`` itself), if any."""
    for p in SMALL_PRIMES:
        if p >= n:
            break
        if n % p == 0:
            return p
    return None


@lru_cache(maxsize=8)
def sieving_primes(limit: int) -> tuple[int, ...]:
    """Odd primes up to ``limit`` as plain ints, for window sieving."""
    return tuple(int(p) for p in generate_primes(limit) if p != 2)


def safe_prime_window(start: int, length: int, primes) -> np.ndarray:
    """Sieve ``q`` and ``2q + 1`` together over ``q = start + 2k``, ``0 <= k < length``.

    Every odd prime ``p`` strikes at most one residue class of ``k`` for
    ``q`` and one for ``2q + 1``, so each prime costs two strided writes
    instead of a big-integer division per candidate.

    Args:
        start: Odd first candidate ``q``; must exceed every prime in ``primes``.
        length: Number of candidates in the window.
        primes: Odd primes to sieve by.

    Returns:
        Offsets ``k`` (ascending) where neither ``q`` nor ``2q + 1`` has a
        factor in ``primes``.

    Raises:
        ValueError: If ``start`` is even.
    """
    if start % 2 == 0:
        raise ValueError(f"start must be odd, got {start}")

    keep = np.ones(length, dtype=bool)
    for p in primes:
        r = start % p
        inv2 = (p + 1) // 2
        inv4 = inv2 * inv2 % p
        # start + 2k = 0 (mod p)
        keep[(-r * inv2) % p::p] = False
        # 2*start + 1 + 4k = 0 (mod p)
        keep[(-(2 * r + 1) * inv4) % p::p] = False

    return np.flatnonzero(keep)
