"""Descriptive statistics over a generated prime set.

Everything here is a pure function of the primes and the strategy name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from primecraft.core.bigint import to_decimal

STRENGTH_LEVELS: tuple[tuple[int, str], ...] = (
    (1023, "weak"),
    (2047, "legacy"),
    (3071, "standard"),
    (4095, "strong"),
)
STRONGEST_LEVEL = "ultra-strong"

# float64 keeps 53 bits of mantissa
_FLOAT_BITS = 53


def strength_label(total_bits: int) -> str:
    """Classify a prime set by the sum of its members' bit lengths."""
    for ceiling, label in STRENGTH_LEVELS:
        if total_bits <= ceiling:
            return label
    return STRONGEST_LEVEL


def relationship_tags(strategy: str, count: int) -> list[str]:
    """Qualitative tags implied by the strategy that produced the set."""
    if strategy == "rsa-multi":
        tags = ["rsa-suitable"]
        if count > 2:
            tags.append("multi-prime")
        return tags
    if strategy == "strong":
        return ["strong-prime", "safe-prime"]
    return []


def consecutive_gaps(primes: list[int] | tuple[int, ...]) -> list[int]:
    """Absolute differences between neighbours, in the given order."""
    return [abs(b - a) for a, b in zip(primes, primes[1:])]


def _scaled_floats(values: list[int]) -> np.ndarray:
    """Shift arbitrarily large integers into float range, preserving ratios."""
    widest = max(v.bit_length() for v in values)
    shift = max(0, widest - _FLOAT_BITS)
    return np.array([v >> shift for v in values], dtype=np.float64)


def analyze_distribution(primes: list[int] | tuple[int, ...]) -> dict[str, Any]:
    """Spacing regularity of the sorted primes.

    Returns:
        ``uniformity`` in ``(0, 1]`` (1 means evenly spaced) and
        ``clustering``, True when more than 30% of gaps are below a tenth
        of the mean gap. Sets with fewer than three primes are reported as
        uniform and unclustered.
    """
    if len(primes) < 3:
        return {"uniformity": 1.0, "clustering": False}

    gaps = _scaled_floats(consecutive_gaps(sorted(primes)))
    mean_gap = float(np.mean(gaps))
    if mean_gap <= 0:
        return {"uniformity": 0.0, "clustering": False}

    std_gap = float(np.std(gaps))
    uniformity = 1.0 / (1.0 + std_gap / mean_gap)

    small_gaps = int(np.count_nonzero(gaps < mean_gap * 0.1))
    clustering = small_gaps > len(gaps) * 0.3

    return {"uniformity": uniformity, "clustering": clustering}


@dataclass(frozen=True)
class PrimeProperties:
    """Report for a prime set.

    Attributes:
        gaps: ``|p[i+1] - p[i]|`` for consecutive primes.
        product: Product of all primes.
        bit_lengths: Bit length of each prime.
        relationships: Tags implied by the strategy.
        strength: Label from the summed bit lengths.
        distribution: Spacing statistics from :func:`analyze_distribution`.
    """
    gaps: tuple[int, ...]
    product: int
    bit_lengths: tuple[int, ...]
    relationships: tuple[str, ...]
    strength: str
    distribution: dict[str, Any] = field(default_factory=dict)

    @property
    def total_bits(self) -> int:
        return sum(self.bit_lengths)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; big integers become decimal strings."""
        return {
            "gaps": [to_decimal(g) for g in self.gaps],
            "product": to_decimal(self.product),
            "bit_lengths": list(self.bit_lengths),
            "relationships": list(self.relationships),
            "strength": self.strength,
            "distribution": dict(self.distribution),
        }


def calculate_prime_properties(
    primes: list[int] | tuple[int, ...],
    strategy: str,
) -> PrimeProperties:
    """Build the :class:`PrimeProperties` report for ``primes``."""
    product = 1
    for p in primes:
        product *= p
    bit_lengths = tuple(p.bit_length() for p in primes)

    return PrimeProperties(
        gaps=tuple(consecutive_gaps(primes)),
        product=product,
        bit_lengths=bit_lengths,
        relationships=tuple(relationship_tags(strategy, len(primes))),
        strength=strength_label(sum(bit_lengths)),
        distribution=analyze_distribution(primes),
    )
