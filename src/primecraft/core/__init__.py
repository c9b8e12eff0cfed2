"""Number-theory primitives: big integers, entropy, sieves, GCD, modular arithmetic."""

from primecraft.core.entropy import EntropySource, SeededEntropy, SystemEntropy, random_bits
from primecraft.core.gcd import are_coprime, gcd, lcm
from primecraft.core.modular import (
    ExtendedGcd,
    extended_gcd,
    is_quadratic_residue,
    mod_add,
    mod_inverse,
    mod_mul,
    mod_pow,
    mod_sub,
)
from primecraft.core.primality import (
    DETERMINISTIC_THRESHOLD,
    DETERMINISTIC_WITNESSES,
    is_probable_prime,
    is_safe_prime,
    is_strong_prime,
)
from primecraft.core.sieve import generate_primes, passes_trial_division, safe_prime_window
from primecraft.core.wheel import Wheel, WheelCursor, generate_wheel_residues, select_wheel

__all__ = [
    "EntropySource",
    "SeededEntropy",
    "SystemEntropy",
    "random_bits",
    "are_coprime",
    "gcd",
    "lcm",
    "ExtendedGcd",
    "extended_gcd",
    "is_quadratic_residue",
    "mod_add",
    "mod_inverse",
    "mod_mul",
    "mod_pow",
    "mod_sub",
    "DETERMINISTIC_THRESHOLD",
    "DETERMINISTIC_WITNESSES",
    "is_probable_prime",
    "is_safe_prime",
    "is_strong_prime",
    "generate_primes",
    "passes_trial_division",
    "safe_prime_window",
    "Wheel",
    "WheelCursor",
    "generate_wheel_residues",
    "select_wheel",
]
