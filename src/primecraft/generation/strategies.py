"""Prime-set strategies built on the candidate search.

``rsa-multi`` draws ``count`` independent primes and accepts each only if it
keeps the set safe for multi-prime RSA: distinct, far enough apart, and
without large shared factors in ``p-1``. ``strong`` draws one verified safe
prime that also meets the classic strong-prime conditions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from primecraft.config import GeneratorConfig
from primecraft.core.entropy import EntropySource, get_default_entropy
from primecraft.core.gcd import are_coprime, gcd
from primecraft.core.primality import is_probable_prime
from primecraft.core.sieve import safe_prime_window, sieving_primes
from primecraft.errors import AttemptBudgetExhausted
from primecraft.generation.candidate import (
    CandidateGenerator,
    max_attempts,
    normalize_candidate,
)

logger = logging.getLogger(__name__)

MAX_ALLOWED_GCD = 1 << 16
GCD_SCALING_FACTOR = 1 << 32
SECURE_RSA_BITS = 512
SAFE_PRIME_WINDOW = 1 << 14


@dataclass(frozen=True)
class StrategyResult:
    """Primes in acceptance order and the total attempts spent."""
    primes: tuple[int, ...]
    attempts: int


def min_rsa_gap(bit_length: int, count: int) -> int:
    """Minimum distance between RSA primes to resist close-prime (Fermat) attacks."""
    if bit_length < SECURE_RSA_BITS:
        logger.warning("RSA bit length %d < %d is not considered secure", bit_length, SECURE_RSA_BITS)

    prime_bit_length = bit_length // count
    min_gap_bits = prime_bit_length // 2
    return 1 << min_gap_bits


def _gcd_threshold(p: int) -> int:
    dynamic = (p - 1) // GCD_SCALING_FACTOR
    if dynamic and dynamic < MAX_ALLOWED_GCD:
        return dynamic
    return MAX_ALLOWED_GCD


def is_weak_for_multi_rsa(candidate: int, existing: list[int] | tuple[int, ...]) -> bool:
    """Whether ``candidate`` weakens a multi-prime RSA set containing ``existing``.

    Weak when ``gcd(candidate-1, p-1)`` is large for some accepted ``p`` or
    when one prime is congruent to 1 modulo the other.
    """
    for p in existing:
        if gcd(candidate - 1, p - 1) > _gcd_threshold(p):
            return True
        if candidate % p == 1 or p % candidate == 1:
            return True
    return False


def _rejection_reason(
    candidate: int,
    primes: list[int],
    min_gap: int,
    avoid_weak: bool,
) -> str | None:
    for p in primes:
        if candidate == p:
            return "duplicate"
        if abs(candidate - p) < min_gap:
            return "gap"
    if avoid_weak and is_weak_for_multi_rsa(candidate, primes):
        return "weak"
    return None


def generate_rsa_multi(
    count: int,
    bit_length: int,
    entropy: EntropySource | None = None,
    config: GeneratorConfig | None = None,
) -> StrategyResult:
    """Generate ``count`` distinct ``bit_length``-bit primes for multi-prime RSA.

    Every prime ``p`` has ``gcd(public_exponent, p - 1) == 1``.

    Raises:
        AttemptBudgetExhausted: If ``count * max_attempts(bit_length)``
            candidates were spent without completing the set.
    """
    config = config if config is not None else GeneratorConfig()
    entropy = entropy if entropy is not None else get_default_entropy()
    exponent = config.public_exponent
    min_gap = config.min_gap if config.min_gap is not None else min_rsa_gap(bit_length, 1)
    budget = count * max_attempts(bit_length)

    def predicate(n: int) -> bool:
        return are_coprime(exponent, n - 1) and is_probable_prime(n, config.mr_rounds, entropy)

    generator = CandidateGenerator(bit_length, entropy, config, predicate, kind="prime")

    logger.info("rsa-multi: generating %d x %d-bit primes", count, bit_length)
    primes: list[int] = []
    attempts = 0
    while len(primes) < count:
        try:
            found = generator.generate(max_attempts=budget - attempts)
        except AttemptBudgetExhausted:
            raise AttemptBudgetExhausted(bit_length, budget, "prime set") from None
        attempts += found.attempts

        reason = _rejection_reason(found.value, primes, min_gap, config.avoid_weak)
        if reason is not None:
            logger.debug("rsa-multi: dropped prime (%s) after %d attempts", reason, attempts)
            continue

        primes.append(found.value)
        logger.debug("rsa-multi: accepted prime %d/%d", len(primes), count)

    logger.info("rsa-multi: done in %d attempts", attempts)
    return StrategyResult(tuple(primes), attempts)


def generate_strong(
    bit_length: int,
    entropy: EntropySource | None = None,
    config: GeneratorConfig | None = None,
) -> StrategyResult:
    """Generate one strong prime of exactly ``bit_length`` bits.

    The prime is always a verified safe prime ``p = 2q + 1`` with
    ``p mod e != 1`` and ``p mod 3 != 1``. Each window starts at a random
    ``q``; ``q`` and ``2q + 1`` are sieved together so Miller-Rabin only runs
    on pairs with no small factor. Every ``q`` in a scanned window counts as
    one attempt.

    Raises:
        AttemptBudgetExhausted: If ``max_attempts(bit_length)`` values of
            ``q`` were scanned without finding a safe prime.
    """
    config = config if config is not None else GeneratorConfig()
    entropy = entropy if entropy is not None else get_default_entropy()
    exponent = config.public_exponent
    rounds = config.mr_rounds
    budget = max_attempts(bit_length)

    q_bits = bit_length - 1
    q_low = 1 << (q_bits - 1)
    q_high = (1 << q_bits) - 1
    # a sieving prime must stay below q, or it could strike q itself
    primes = [p for p in sieving_primes(config.sieve_limit) if p < q_low]

    logger.info("strong: searching %d-bit safe prime", bit_length)
    attempts = 0
    while attempts < budget:
        start = normalize_candidate(entropy.random_bits(q_bits), q_low, q_high)
        length = min(SAFE_PRIME_WINDOW, (q_high - start) // 2 + 1, budget - attempts)
        survivors = safe_prime_window(start, length, primes)
        logger.debug(
            "strong: %d of %d candidates survive sieving (attempt %d)",
            len(survivors), length, attempts,
        )

        for k in survivors.tolist():
            q = start + 2 * k
            p = 2 * q + 1
            if p % exponent == 1 or p % 3 == 1:
                continue
            if is_probable_prime(q, rounds, entropy) and is_probable_prime(p, rounds, entropy):
                attempts += k + 1
                logger.info("strong: done in %d attempts", attempts)
                return StrategyResult((p,), attempts)

        attempts += length

    logger.warning("safe prime search gave up: %d-bit, %d attempts", bit_length, attempts)
    raise AttemptBudgetExhausted(bit_length, attempts, "safe prime")


@dataclass(frozen=True)
class Strategy:
    """Registered strategy. ``fixed_count`` pins the number of primes it yields."""
    name: str
    generate: Callable[[int, int, EntropySource | None, GeneratorConfig | None], StrategyResult]
    fixed_count: int | None = None


def _strong(count, bit_length, entropy=None, config=None):
    return generate_strong(bit_length, entropy, config)


STRATEGIES: dict[str, Strategy] = {
    "rsa-multi": Strategy("rsa-multi", generate_rsa_multi),
    "strong": Strategy("strong", _strong, fixed_count=1),
}
