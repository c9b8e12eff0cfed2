"""primecraft - verified prime generation for cryptographic use."""

__version__ = "0.1.0"

from primecraft.config import GeneratorConfig
from primecraft.errors import (
    AttemptBudgetExhausted,
    InvalidBitLength,
    InvalidCount,
    PrimecraftError,
    StrategyCountMismatch,
    UnknownStrategy,
)
from primecraft.generation.api import PrimeSetResult, generate_prime_set

__all__ = [
    "GeneratorConfig",
    "AttemptBudgetExhausted",
    "InvalidBitLength",
    "InvalidCount",
    "PrimecraftError",
    "StrategyCountMismatch",
    "UnknownStrategy",
    "PrimeSetResult",
    "generate_prime_set",
]
