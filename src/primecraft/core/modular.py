"""Modular arithmetic over non-negative integers.

All functions take and return non-negative integers and never rely on
negative intermediates: subtraction that would go below zero is rewritten
as ``modulus - ((b - a) % modulus)``. A zero modulus raises ``ValueError``.
"""

from __future__ import annotations

from typing import NamedTuple

from primecraft.core.bigint import ensure_unsigned


def _check_modulus(modulus: int) -> int:
    ensure_unsigned(modulus, "modulus")
    if modulus == 0:
        raise ValueError("modulus must be positive")
    return modulus


def is_power_of_two(n: int) -> bool:
    """True for 2, 4, 8, ... (1 and 0 are not counted)."""
    if n <= 1:
        return False
    return n & (n - 1) == 0


def mod_pow(base: int, exp: int, modulus: int) -> int:
    """``base ** exp % modulus``. Any zero exponent yields 1, including ``0 ** 0``.

    With ``modulus == 1`` the result is 1 for a zero exponent and 0 otherwise.
    """
    ensure_unsigned(base, "base")
    ensure_unsigned(exp, "exp")
    _check_modulus(modulus)
    if exp == 0:
        return 1
    return pow(base, exp, modulus)


def mod_mul(a: int, b: int, modulus: int) -> int:
    ensure_unsigned(a, "a")
    ensure_unsigned(b, "b")
    return (a * b) % _check_modulus(modulus)


def mod_add(a: int, b: int, modulus: int) -> int:
    ensure_unsigned(a, "a")
    ensure_unsigned(b, "b")
    return (a + b) % _check_modulus(modulus)


def mod_sub(a: int, b: int, modulus: int) -> int:
    """``(a - b) mod modulus`` computed without negative intermediates.

    Note:
        When ``b - a`` is a multiple of ``modulus`` and ``a < b`` the result
        is ``modulus`` itself rather than 0.
    """
    ensure_unsigned(a, "a")
    ensure_unsigned(b, "b")
    _check_modulus(modulus)
    if a >= b:
        return (a - b) % modulus
    return modulus - ((b - a) % modulus)


class ExtendedGcd(NamedTuple):
    """Result of the extended Euclidean algorithm.

    ``inverse`` is set only when ``gcd == 1`` and the modulus exceeds 1, and
    is always reduced into ``[0, modulus)``.
    """
    gcd: int
    inverse: int | None


def extended_gcd(a: int, modulus: int) -> ExtendedGcd:
    """Iterative extended Euclid tracking only the coefficient of ``a``.

    Bezout coefficients are kept non-negative by reducing modulo
    ``modulus`` whenever ``old_s - q*s`` would underflow.
    """
    ensure_unsigned(a, "a")
    ensure_unsigned(modulus, "modulus")
    if a == 0:
        return ExtendedGcd(modulus, None)
    if modulus == 0:
        return ExtendedGcd(a, None)
    if modulus == 1:
        return ExtendedGcd(1, None)

    old_r, r = a, modulus
    old_s, s = 1, 0

    while r != 0:
        quotient = old_r // r

        old_r, r = r, old_r - quotient * r

        qs = quotient * s
        if qs <= old_s:
            new_s = old_s - qs
        else:
            new_s = modulus - ((qs - old_s) % modulus)
        old_s, s = s, new_s

    inverse = old_s % modulus if old_r == 1 else None
    return ExtendedGcd(old_r, inverse)


def mod_inverse(a: int, modulus: int) -> int | None:
    """Multiplicative inverse of ``a`` modulo ``modulus``.

    Returns:
        The inverse in ``[0, modulus)``, or ``None`` when it does not exist
        (``a == 0``, ``modulus <= 1``, or ``gcd(a, modulus) != 1``).
    """
    ensure_unsigned(a, "a")
    ensure_unsigned(modulus, "modulus")
    if modulus <= 1:
        return None
    return extended_gcd(a, modulus).inverse


def is_quadratic_residue(a: int, modulus: int) -> bool:
    """Whether ``x**2 == a (mod modulus)`` is solvable, for supported moduli.

    - ``a == 0`` is always a residue.
    - Odd modulus ``p``: Euler's criterion, ``a**((p-1)/2) mod p == 1``.
      Only a proof for prime ``p``.
    - Power of two ``>= 8``: residue iff ``a mod 8 == 1``.
    - Powers of two below 8 and other even moduli are not handled and
      report False.
    """
    ensure_unsigned(a, "a")
    ensure_unsigned(modulus, "modulus")
    if a == 0:
        return True
    if modulus <= 1:
        return False

    if modulus & 1:
        return pow(a, (modulus - 1) // 2, modulus) == 1

    if is_power_of_two(modulus) and modulus >= 8:
        return a % 8 == 1

    # TODO: decompose even composite moduli into prime-power factors
    return False
