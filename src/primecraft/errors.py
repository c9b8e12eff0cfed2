"""Exception taxonomy for prime generation requests.

Request validation failures subclass ``ValueError`` so callers that only
know the standard library can still catch them. Running out of the
attempt budget is a ``RuntimeError``: the request was valid, the search
simply did not finish.

A missing modular inverse is not an error and has no exception here;
``mod_inverse`` returns ``None`` for it.
"""

from __future__ import annotations


class PrimecraftError(Exception):
    """Base class for all errors raised by primecraft."""


class InvalidBitLength(PrimecraftError, ValueError):
    """Requested bit length is outside the supported range."""

    def __init__(self, bit_length: int, minimum: int, maximum: int):
        self.bit_length = bit_length
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Bit length must be between {minimum} and {maximum}, got {bit_length}"
        )


class InvalidCount(PrimecraftError, ValueError):
    """Requested prime count is outside the supported range."""

    def __init__(self, count: int, minimum: int, maximum: int):
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Count must be between {minimum} and {maximum}, got {count}")


class UnknownStrategy(PrimecraftError, ValueError):
    """Requested strategy name is not registered."""

    def __init__(self, strategy: str, known: tuple[str, ...] = ()):
        self.strategy = strategy
        self.known = known
        message = f"Unknown strategy: {strategy!r}"
        if known:
            message += f" (expected one of: {', '.join(known)})"
        super().__init__(message)


class StrategyCountMismatch(PrimecraftError, ValueError):
    """Strategy does not support the requested prime count."""

    def __init__(self, strategy: str, count: int, supported: int):
        self.strategy = strategy
        self.count = count
        self.supported = supported
        super().__init__(
            f"Strategy {strategy!r} only supports count={supported}, got {count}"
        )


class AttemptBudgetExhausted(PrimecraftError, RuntimeError):
    """Candidate search exceeded its attempt ceiling without finding a prime."""

    def __init__(self, bit_length: int, attempts: int, kind: str = "prime"):
        self.bit_length = bit_length
        self.attempts = attempts
        self.kind = kind
        super().__init__(
            f"Failed to generate {bit_length}-bit {kind} after {attempts} attempts"
        )
