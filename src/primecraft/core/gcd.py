"""Binary GCD (Stein's algorithm), LCM and coprimality.

Stein's algorithm uses only shifts, comparisons and subtraction, which
keeps it cheap on operands thousands of bits wide where division is the
expensive operation.
"""

from __future__ import annotations

from primecraft.core.bigint import ensure_unsigned, trailing_zeros


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two non-negative integers.

    ``gcd(a, 0) == a`` and ``gcd(0, 0) == 0``.
    """
    ensure_unsigned(a, "a")
    ensure_unsigned(b, "b")
    if a == 0:
        return b
    if b == 0:
        return a

    # common factors of two
    shift = trailing_zeros(a | b)
    u = a >> shift
    v = b >> shift

    u >>= trailing_zeros(u)

    # u stays odd; every difference lands in v and is stripped next round
    while True:
        v >>= trailing_zeros(v)
        if u > v:
            u, v = v, u
        v -= u
        if v == 0:
            break

    return u << shift


def lcm(a: int, b: int) -> int:
    """Least common multiple; 0 if either operand is 0."""
    ensure_unsigned(a, "a")
    ensure_unsigned(b, "b")
    if a == 0 or b == 0:
        return 0
    # divide first to keep the intermediate small
    return a * (b // gcd(a, b))


def are_coprime(a: int, b: int) -> bool:
    return gcd(a, b) == 1
