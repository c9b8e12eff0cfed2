"""Entropy sources for candidate sampling.

Generators never reach for a global random module directly; they receive an
:class:`EntropySource`. :class:`SystemEntropy` is the production source and
draws from the operating system CSPRNG. :class:`SeededEntropy` reproduces
the same draws for a given seed and exists for tests and repeatable runs.
"""

from __future__ import annotations

import random
import secrets
from typing import Protocol, runtime_checkable

MIN_ENTROPY_BITS = 2


@runtime_checkable
class EntropySource(Protocol):
    """Anything that can produce random integers for candidate search."""

    def random_bits(self, bits: int) -> int:
        ...

    def randbelow(self, n: int) -> int:
        ...

    def randrange(self, start: int, stop: int) -> int:
        ...


def bits_from_bytes(buffer: bytes, bits: int) -> int:
    """Shape a big-endian byte buffer into an integer of exactly ``bits`` bits.

    The excess high bits of the first byte are cleared and the top bit of
    the result is forced to one.
    """
    if bits < MIN_ENTROPY_BITS:
        raise ValueError(f"Bit length must be at least {MIN_ENTROPY_BITS}, got {bits}")
    byte_len = (bits + 7) // 8
    if len(buffer) != byte_len:
        raise ValueError(f"Expected {byte_len} bytes for {bits} bits, got {len(buffer)}")

    excess_bits = 8 * byte_len - bits
    head = buffer[0] & (0xFF >> excess_bits)
    head |= 1 << (7 - excess_bits)
    return int.from_bytes(bytes([head]) + buffer[1:], "big")


class BaseEntropy:
    """Shared sampling on top of ``random_bytes`` and ``randbelow``."""

    def random_bytes(self, n: int) -> bytes:
        raise NotImplementedError

    def randbelow(self, n: int) -> int:
        raise NotImplementedError

    def random_bits(self, bits: int) -> int:
        """Uniform integer with exactly ``bits`` significant bits."""
        if bits < MIN_ENTROPY_BITS:
            raise ValueError(f"Bit length must be at least {MIN_ENTROPY_BITS}, got {bits}")
        return bits_from_bytes(self.random_bytes((bits + 7) // 8), bits)

    def randrange(self, start: int, stop: int) -> int:
        """Uniform integer in ``[start, stop)``."""
        if stop <= start:
            raise ValueError(f"empty range [{start}, {stop})")
        return start + self.randbelow(stop - start)


class SystemEntropy(BaseEntropy):
    """OS-backed cryptographically secure source."""

    def random_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def __repr__(self) -> str:
        return "SystemEntropy()"


class SeededEntropy(BaseEntropy):
    """Deterministic source for tests. Not suitable for key material."""

    def __init__(self, seed: int | str | bytes | None = 0):
        self.seed = seed
        self._rng = random.Random(seed)

    def random_bytes(self, n: int) -> bytes:
        return self._rng.randbytes(n)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return self._rng.randrange(n)

    def __repr__(self) -> str:
        return f"SeededEntropy(seed={self.seed!r})"


_default_source: SystemEntropy | None = None


def get_default_entropy() -> SystemEntropy:
    """Process-wide system entropy source."""
    global _default_source
    if _default_source is None:
        _default_source = SystemEntropy()
    return _default_source


def random_bits(bits: int, source: EntropySource | None = None) -> int:
    """Draw an integer with exactly ``bits`` significant bits.

    Args:
        bits: Target bit length, at least 2.
        source: Entropy source. Defaults to the system CSPRNG.

    Raises:
        ValueError: If ``bits`` is below 2.
    """
    if source is None:
        source = get_default_entropy()
    return source.random_bits(bits)
