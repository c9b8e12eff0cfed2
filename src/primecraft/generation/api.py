"""Request entry point: validate, generate, report.

:func:`generate_prime_set` is what a host binding calls. Primes leave this
layer as decimal strings so no precision is lost across the boundary.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

from primecraft.config import GeneratorConfig
from primecraft.core.bigint import to_decimal
from primecraft.core.entropy import EntropySource
from primecraft.errors import (
    InvalidBitLength,
    InvalidCount,
    StrategyCountMismatch,
    UnknownStrategy,
)
from primecraft.generation.properties import PrimeProperties, calculate_prime_properties
from primecraft.generation.strategies import STRATEGIES

logger = logging.getLogger(__name__)

MIN_BIT_LENGTH = 16
MAX_BIT_LENGTH = 4096
MIN_COUNT = 1
MAX_COUNT = 10


@dataclass(frozen=True)
class GenerationMetadata:
    attempts: int
    generation_time_ms: int
    strategy: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "attempts": self.attempts,
            "generation_time": self.generation_time_ms,
            "strategy": self.strategy,
        }


@dataclass(frozen=True)
class PrimeSetResult:
    """Serializable answer to a generation request."""
    primes: tuple[str, ...]
    properties: PrimeProperties
    metadata: GenerationMetadata

    @property
    def values(self) -> list[int]:
        return [int(p) for p in self.primes]

    def to_dict(self) -> dict[str, Any]:
        return {
            "primes": list(self.primes),
            "properties": self.properties.to_dict(),
            "metadata": self.metadata.to_dict(),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def validate_request(count: int, bit_length: int, strategy: str) -> None:
    """Check a request against the boundary limits.

    Raises:
        InvalidBitLength: ``bit_length`` outside ``[16, 4096]``.
        InvalidCount: ``count`` outside ``[1, 10]``.
        UnknownStrategy: ``strategy`` is not registered.
        StrategyCountMismatch: The strategy pins a different count.
    """
    if not MIN_BIT_LENGTH <= bit_length <= MAX_BIT_LENGTH:
        raise InvalidBitLength(bit_length, MIN_BIT_LENGTH, MAX_BIT_LENGTH)
    if not MIN_COUNT <= count <= MAX_COUNT:
        raise InvalidCount(count, MIN_COUNT, MAX_COUNT)
    if strategy not in STRATEGIES:
        raise UnknownStrategy(strategy, tuple(STRATEGIES))
    fixed = STRATEGIES[strategy].fixed_count
    if fixed is not None and count != fixed:
        raise StrategyCountMismatch(strategy, count, fixed)


def generate_prime_set(
    count: int,
    bit_length: int,
    strategy: str,
    entropy: EntropySource | None = None,
    config: GeneratorConfig | None = None,
) -> PrimeSetResult:
    """Generate a verified prime set for a ``(count, bit_length, strategy)`` request.

    Args:
        count: Number of primes, 1 to 10.
        bit_length: Bits per prime, 16 to 4096.
        strategy: ``"rsa-multi"`` or ``"strong"`` (count must be 1).
        entropy: Sampling source; defaults to the system CSPRNG.
        config: Search configuration.

    Returns:
        The primes as decimal strings, their properties and run metadata.

    Raises:
        InvalidBitLength, InvalidCount, UnknownStrategy, StrategyCountMismatch:
            On an invalid request, before any work is done.
        AttemptBudgetExhausted: If the search ran out of attempts.
    """
    validate_request(count, bit_length, strategy)

    start_time = time.perf_counter()
    result = STRATEGIES[strategy].generate(count, bit_length, entropy, config)
    elapsed_ms = int((time.perf_counter() - start_time) * 1000)

    logger.info(
        "%s: %d x %d-bit primes in %d ms (%d attempts)",
        strategy, count, bit_length, elapsed_ms, result.attempts,
    )

    return PrimeSetResult(
        primes=tuple(to_decimal(p) for p in result.primes),
        properties=calculate_prime_properties(result.primes, strategy),
        metadata=GenerationMetadata(
            attempts=result.attempts,
            generation_time_ms=elapsed_ms,
            strategy=strategy,
        ),
    )
