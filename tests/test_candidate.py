"""Tests for the candidate search loop."""

import logging

import pytest

from primecraft.config import GeneratorConfig
from primecraft.core.entropy import SeededEntropy
from primecraft.core.primality import is_probable_prime
from primecraft.core.wheel import Wheel
from primecraft.errors import AttemptBudgetExhausted
from primecraft.generation.candidate import (
    CandidateGenerator,
    PrimeCandidate,
    SearchState,
    max_attempts,
    normalize_candidate,
)


class FixedEntropy:
    """Entropy source replaying a fixed sequence of samples."""

    def __init__(self, values):
        self.values = list(values)

    def random_bits(self, bits):
        return self.values.pop(0)

    def randbelow(self, n):
        return 0

    def randrange(self, start, stop):
        return start


class TestMaxAttempts:
    def test_values(self):
        assert max_attempts(16) == 4850
        assert max_attempts(2) == 263

    def test_grows_with_bit_length(self):
        assert max_attempts(512) < max_attempts(1024) < max_attempts(4096)


class TestNormalizeCandidate:
    """Tests for normalize_candidate function."""

    def test_in_range_made_odd(self):
        assert normalize_candidate(12, 8, 15) == 13
        assert normalize_candidate(13, 8, 15) == 13

    def test_folds_out_of_range(self):
        assert normalize_candidate(4, 8, 15) == 13
        assert normalize_candidate(100, 8, 15) == 13

    def test_stays_below_high(self):
        assert normalize_candidate(14, 8, 14) == 13


class TestSampling:
    """Tests for CandidateGenerator.sample."""

    def test_rounds_up_to_wheel_survivor(self):
        gen = CandidateGenerator(8, FixedEntropy([200]))
        assert gen.wheel is Wheel.W30
        # 201 = 3 * 67, next 30-wheel residue above it is 203
        assert gen.sample() == 203

    def test_wraps_to_low_end(self):
        gen = CandidateGenerator(8, FixedEntropy([255]))
        assert gen.sample() == 131

    def test_without_wheel(self):
        config = GeneratorConfig(use_wheel=False)
        gen = CandidateGenerator(8, FixedEntropy([200]), config)
        assert gen.wheel is None
        assert gen.sample() == 201

    def test_no_wheel_for_tiny_ranges(self):
        gen = CandidateGenerator(6, SeededEntropy(0))
        assert gen.wheel is None

    def test_wide_wheel_for_mid_sizes(self):
        assert CandidateGenerator(1024, SeededEntropy(0)).wheel is Wheel.W210

    @pytest.mark.parametrize("bits", [3, 8, 16, 64, 600])
    def test_samples_exact_bit_length_and_odd(self, bits):
        gen = CandidateGenerator(bits, SeededEntropy(bits))
        for _ in range(100):
            c = gen.sample()
            assert c.bit_length() == bits
            assert c % 2 == 1


class TestGenerate:
    """Tests for CandidateGenerator.generate."""

    @pytest.mark.parametrize("bits", [8, 16, 32, 128])
    def test_finds_prime_of_exact_size(self, bits):
        gen = CandidateGenerator(bits, SeededEntropy(99))
        found = gen.generate(max_attempts(bits))
        assert isinstance(found, PrimeCandidate)
        assert found.bit_length == bits
        assert found.attempts >= 1
        assert is_probable_prime(found.value)
        assert gen.state is SearchState.ACCEPTED

    def test_seeded_runs_repeat(self):
        a = CandidateGenerator(64, SeededEntropy(5)).generate()
        b = CandidateGenerator(64, SeededEntropy(5)).generate()
        assert a == b

    def test_custom_predicate(self):
        gen = CandidateGenerator(16, SeededEntropy(4), predicate=lambda n: n % 4 == 3)
        found = gen.generate(100)
        assert found.value % 4 == 3

    def test_budget_exhausted(self, caplog):
        gen = CandidateGenerator(
            16, SeededEntropy(1), predicate=lambda n: False, kind="test value"
        )
        with caplog.at_level(logging.WARNING, logger="primecraft"):
            with pytest.raises(AttemptBudgetExhausted) as excinfo:
                gen.generate(max_attempts=5)
        assert excinfo.value.attempts == 5
        assert excinfo.value.bit_length == 16
        assert "test value" in str(excinfo.value)
        assert gen.state is SearchState.REJECTED
        assert "gave up" in caplog.text

    def test_zero_budget(self):
        gen = CandidateGenerator(16, SeededEntropy(1))
        with pytest.raises(AttemptBudgetExhausted):
            gen.generate(max_attempts=0)

    def test_invalid_bit_length(self):
        with pytest.raises(ValueError):
            CandidateGenerator(1)
