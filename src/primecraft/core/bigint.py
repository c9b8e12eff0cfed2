"""Arbitrary-precision unsigned integer helpers.

Python's ``int`` already provides immutable arbitrary-precision values with
no leading-zero digits, so the big-integer core is a set of free functions
over ``int`` rather than a wrapper type. Every function rejects negative
inputs: the rest of the package works in unsigned arithmetic only.
"""

from __future__ import annotations

U64_MASK = (1 << 64) - 1


def ensure_unsigned(n: int, name: str = "n") -> int:
    """Validate that ``n`` is a non-negative integer and return it.

    Raises:
        TypeError: If ``n`` is not an ``int`` (``bool`` is rejected too).
        ValueError: If ``n`` is negative.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"{name} must be an int, got {type(n).__name__}")
    if n < 0:
        raise ValueError(f"{name} must be non-negative, got {n}")
    return n


def bit_length(n: int) -> int:
    """Number of significant bits; 0 for zero."""
    return ensure_unsigned(n).bit_length()


def is_even(n: int) -> bool:
    return ensure_unsigned(n) & 1 == 0


def is_odd(n: int) -> bool:
    return ensure_unsigned(n) & 1 == 1


def trailing_zeros(n: int) -> int:
    """Count of trailing zero bits. Zero has none by convention."""
    ensure_unsigned(n)
    if n == 0:
        return 0
    return (n & -n).bit_length() - 1


def hamming_weight(n: int) -> int:
    """Number of set bits."""
    return bin(ensure_unsigned(n)).count("1")


def bit_bucket(n: int, width: int = 64) -> int:
    """Number of ``width``-bit limbs needed to hold ``n``."""
    if width < 1:
        raise ValueError(f"width must be >= 1, got {width}")
    return -(-bit_length(n) // width)


def to_u64_digits(n: int) -> list[int]:
    """Split ``n`` into little-endian 64-bit limbs. Zero yields an empty list."""
    ensure_unsigned(n)
    digits = []
    while n:
        digits.append(n & U64_MASK)
        n >>= 64
    return digits


def from_u64_digits(digits: list[int]) -> int:
    """Inverse of :func:`to_u64_digits`."""
    n = 0
    for i, d in enumerate(digits):
        if not 0 <= d <= U64_MASK:
            raise ValueError(f"digit {i} out of 64-bit range: {d}")
        n |= d << (64 * i)
    return n


def from_bytes_be(data: bytes) -> int:
    return int.from_bytes(data, "big")


# str(int) is capped at 4300 digits by default; 4000 bits is about 1200
_DIRECT_DECIMAL_BITS = 4000


def to_decimal(n: int) -> str:
    """Decimal rendering used at the serialization boundary.

    Values too wide for a direct ``str()`` are split by a power of ten and
    rendered piecewise, so products of many 4096-bit primes still convert.
    """
    ensure_unsigned(n)
    if n.bit_length() <= _DIRECT_DECIMAL_BITS:
        return str(n)

    # log10(2) ~ 0.30103; half the digits go to the low part
    low_digits = int(n.bit_length() * 0.30103) // 2
    high, low = divmod(n, 10 ** low_digits)
    return to_decimal(high) + to_decimal(low).zfill(low_digits)
