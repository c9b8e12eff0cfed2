"""Tests for modular arithmetic."""

import random

import pytest

from primecraft.core.modular import (
    ExtendedGcd,
    extended_gcd,
    is_power_of_two,
    is_quadratic_residue,
    mod_add,
    mod_inverse,
    mod_mul,
    mod_pow,
    mod_sub,
)


class TestModPow:
    """Tests for mod_pow function."""

    def test_known_value(self):
        assert mod_pow(4, 13, 497) == 445

    def test_zero_exponent_is_one(self):
        assert mod_pow(5, 0, 7) == 1
        assert mod_pow(0, 0, 7) == 1
        assert mod_pow(0, 0, 1) == 1

    def test_zero_base(self):
        assert mod_pow(0, 5, 7) == 0

    def test_fermat(self):
        p = 2**127 - 1
        assert mod_pow(3, p - 1, p) == 1

    def test_zero_modulus(self):
        with pytest.raises(ValueError):
            mod_pow(2, 3, 0)


class TestModAddMulSub:
    """Tests for the basic ring operations."""

    def test_add(self):
        assert mod_add(5, 7, 10) == 2
        assert mod_add(0, 5, 10) == 5
        assert mod_add(999, 1, 1000) == 0

    def test_mul(self):
        assert mod_mul(3, 4, 5) == 2
        assert mod_mul(0, 5, 10) == 0
        assert mod_mul(1, 7, 10) == 7

    def test_sub_positive(self):
        assert mod_sub(7, 5, 10) == 2
        assert mod_sub(5, 5, 10) == 0

    def test_sub_wrapping(self):
        assert mod_sub(5, 7, 10) == 8
        assert mod_sub(0, 1, 10) == 9

    def test_sub_matches_python_modulo(self):
        rng = random.Random(17)
        m = 2**61 - 1
        for _ in range(200):
            a, b = rng.getrandbits(64), rng.getrandbits(64)
            if (b - a) % m:
                assert mod_sub(a, b, m) == (a - b) % m

    def test_zero_modulus(self):
        with pytest.raises(ValueError):
            mod_add(1, 2, 0)


class TestExtendedGcd:
    """Tests for the extended Euclidean algorithm."""

    def test_returns_named_result(self):
        result = extended_gcd(3, 7)
        assert isinstance(result, ExtendedGcd)
        assert result.gcd == 1
        assert result.inverse == 5

    def test_not_coprime(self):
        assert extended_gcd(6, 9) == ExtendedGcd(3, None)

    def test_edge_cases(self):
        assert extended_gcd(0, 7) == ExtendedGcd(7, None)
        assert extended_gcd(5, 0) == ExtendedGcd(5, None)
        assert extended_gcd(5, 1) == ExtendedGcd(1, None)

    def test_operand_larger_than_modulus(self):
        result = extended_gcd(10, 7)
        assert result.gcd == 1
        assert (10 * result.inverse) % 7 == 1

    def test_zero_modulus_has_no_coefficient(self):
        assert extended_gcd(6, 0) == ExtendedGcd(6, None)
        assert extended_gcd(1, 0).inverse is None

    def test_coefficient_always_reduced(self):
        for a in range(1, 50):
            result = extended_gcd(a, 51)
            if result.inverse is not None:
                assert result.gcd == 1
                assert 0 <= result.inverse < 51


class TestModInverse:
    """Tests for mod_inverse function."""

    def test_known_inverses(self):
        assert mod_inverse(3, 7) == 5
        assert mod_inverse(17, 3120) == 2753
        assert mod_inverse(1, 2) == 1

    def test_no_inverse(self):
        assert mod_inverse(0, 7) is None
        assert mod_inverse(5, 1) is None
        assert mod_inverse(6, 9) is None
        assert mod_inverse(4, 0) is None

    def test_inverse_property(self):
        rng = random.Random(31)
        m = 2**521 - 1  # prime
        for _ in range(50):
            a = rng.randrange(1, m)
            inv = mod_inverse(a, m)
            assert 0 <= inv < m
            assert (a * inv) % m == 1

    def test_inverse_composite_modulus(self):
        rng = random.Random(37)
        m = 2**64 * 3 * 5
        for _ in range(100):
            a = rng.randrange(1, m)
            inv = mod_inverse(a, m)
            if a % 2 and a % 3 and a % 5:
                assert (a * inv) % m == 1
            else:
                assert inv is None

    def test_matches_builtin(self):
        assert mod_inverse(65537, 2**1024 + 7) == pow(65537, -1, 2**1024 + 7)


class TestQuadraticResidue:
    """Tests for is_quadratic_residue function."""

    def test_mod_7(self):
        for a in (0, 1, 2, 4):
            assert is_quadratic_residue(a, 7)
        for a in (3, 5, 6):
            assert not is_quadratic_residue(a, 7)

    def test_matches_squares_mod_prime(self):
        p = 101
        squares = {(x * x) % p for x in range(p)}
        for a in range(1, p):
            assert is_quadratic_residue(a, p) == (a in squares)

    def test_zero_always_residue(self):
        assert is_quadratic_residue(0, 1)
        assert is_quadratic_residue(0, 12)

    def test_power_of_two_modulus(self):
        assert is_quadratic_residue(1, 8)
        assert is_quadratic_residue(9, 16)
        assert is_quadratic_residue(17, 32)
        assert not is_quadratic_residue(3, 16)
        assert not is_quadratic_residue(5, 8)

    def test_unsupported_moduli_report_false(self):
        assert not is_quadratic_residue(1, 4)
        assert not is_quadratic_residue(1, 2)
        assert not is_quadratic_residue(1, 6)
        assert not is_quadratic_residue(4, 12)

    def test_trivial_modulus(self):
        assert not is_quadratic_residue(3, 1)


class TestIsPowerOfTwo:
    def test_values(self):
        assert is_power_of_two(2)
        assert is_power_of_two(2**4096)
        assert not is_power_of_two(1)
        assert not is_power_of_two(0)
        assert not is_power_of_two(12)
