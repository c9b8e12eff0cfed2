"""Candidate search: sample, filter, test, repeat.

Each search runs the loop ``SAMPLING -> TESTING -> ACCEPTED`` or
``TESTING -> REJECTED -> SAMPLING``. Every sampled candidate counts as one
attempt. The loop has no built-in ceiling; callers pass ``max_attempts``
(usually :func:`max_attempts` of the bit length) to bound it.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable

from primecraft.config import GeneratorConfig
from primecraft.core.entropy import EntropySource, get_default_entropy
from primecraft.core.primality import is_probable_prime
from primecraft.core.sieve import filter_cutoff, passes_trial_division
from primecraft.core.wheel import Wheel, WheelCursor, select_wheel
from primecraft.errors import AttemptBudgetExhausted

logger = logging.getLogger(__name__)

# Below this the target range is narrower than a 30-wheel turn.
MIN_WHEEL_BITS = 7


def max_attempts(bit_length: int) -> int:
    """Heuristic attempt ceiling for a ``bit_length``-bit search.

    ``floor(100 * bit_length ** 1.4)``. Not a correctness bound; it only
    turns an unlucky search into an error instead of an endless loop.
    """
    return math.floor(100 * bit_length ** 1.4)


class SearchState(enum.Enum):
    SAMPLING = "sampling"
    TESTING = "testing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PrimeCandidate:
    """An accepted value and the attempts it took to find it."""
    value: int
    attempts: int

    @property
    def bit_length(self) -> int:
        return self.value.bit_length()


def normalize_candidate(candidate: int, low: int, high: int) -> int:
    """Fold ``candidate`` into ``[low, high]`` and make it odd."""
    if candidate < low or candidate > high:
        candidate = low + (candidate % (high - low + 1))

    candidate |= 1

    if candidate > high:
        candidate -= 2
    return candidate


class CandidateGenerator:
    """Search for a value of exactly ``bit_length`` bits that passes ``predicate``.

    Args:
        bit_length: Exact bit length of every candidate.
        entropy: Sampling source; defaults to the system CSPRNG.
        config: Search configuration.
        predicate: Acceptance test run after trial division. Defaults to a
            Miller-Rabin primality test.
        kind: Label used in log messages and budget errors.
    """

    def __init__(
        self,
        bit_length: int,
        entropy: EntropySource | None = None,
        config: GeneratorConfig | None = None,
        predicate: Callable[[int], bool] | None = None,
        kind: str = "prime",
    ):
        if bit_length < 2:
            raise ValueError(f"bit_length must be >= 2, got {bit_length}")

        self.bit_length = bit_length
        self.entropy = entropy if entropy is not None else get_default_entropy()
        self.config = config if config is not None else GeneratorConfig()
        self.kind = kind
        self.low = 1 << (bit_length - 1)
        self.high = (1 << bit_length) - 1
        self.cutoff = filter_cutoff(bit_length)
        self.state = SearchState.SAMPLING

        self.wheel: Wheel | None = None
        if self.config.use_wheel and bit_length >= MIN_WHEEL_BITS:
            self.wheel = select_wheel(bit_length)

        if predicate is None:
            predicate = self._is_prime
        self.predicate = predicate

    def _is_prime(self, n: int) -> bool:
        return is_probable_prime(n, self.config.mr_rounds, self.entropy)

    def sample(self) -> int:
        """Draw a fresh candidate, rounded up to the next wheel survivor."""
        raw = normalize_candidate(
            self.entropy.random_bits(self.bit_length), self.low, self.high
        )
        if self.wheel is None:
            return raw

        candidate = WheelCursor(raw, self.wheel).advance()
        if candidate > self.high:
            candidate = WheelCursor(self.low, self.wheel).advance()
        return candidate

    def test(self, candidate: int) -> bool:
        if not passes_trial_division(candidate, self.cutoff):
            return False
        return self.predicate(candidate)

    def generate(self, max_attempts: int | None = None) -> PrimeCandidate:
        """Run the search until a candidate is accepted.

        Raises:
            AttemptBudgetExhausted: If ``max_attempts`` candidates were
                rejected.
        """
        attempts = 0
        while True:
            if max_attempts is not None and attempts >= max_attempts:
                logger.warning(
                    "%s search gave up: %d-bit, %d attempts",
                    self.kind, self.bit_length, attempts,
                )
                raise AttemptBudgetExhausted(self.bit_length, attempts, self.kind)

            self.state = SearchState.SAMPLING
            candidate = self.sample()
            attempts += 1

            self.state = SearchState.TESTING
            if self.test(candidate):
                self.state = SearchState.ACCEPTED
                logger.debug(
                    "accepted %d-bit %s after %d attempts",
                    self.bit_length, self.kind, attempts,
                )
                return PrimeCandidate(candidate, attempts)

            self.state = SearchState.REJECTED
            logger.debug("rejected %d-bit candidate (attempt %d)", self.bit_length, attempts)
