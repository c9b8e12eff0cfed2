"""Miller-Rabin primality testing.

Below :data:`DETERMINISTIC_THRESHOLD` the fixed witness set gives a proven
verdict. Above it the test is probabilistic: each random witness lets a
composite through with probability at most 1/4.
"""

from __future__ import annotations

from primecraft.config import COMMON_RSA_EXPONENT
from primecraft.core.entropy import EntropySource, get_default_entropy
from primecraft.core.sieve import SMALL_PRIME_LIMIT, SMALL_PRIMES, passes_trial_division

DETERMINISTIC_WITNESSES: tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
)

# The first seven witnesses (2..17) already cover every n below this bound.
DETERMINISTIC_THRESHOLD = 341_550_071_728_321

_SMALL_PRIME_SET = frozenset(SMALL_PRIMES)


def miller_rabin_rounds(bit_length: int) -> int:
    """Number of random witnesses to use for a candidate of ``bit_length`` bits."""
    if bit_length <= 64:
        return 7
    if bit_length <= 128:
        return 8
    if bit_length <= 256:
        return 9
    if bit_length <= 512:
        return 10
    if bit_length <= 1024:
        return 12
    if bit_length <= 2048:
        return 15
    return 20


def _decompose(n: int) -> tuple[int, int]:
    """Write n-1 as d * 2^r with d odd."""
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2
    return d, r


def miller_rabin(n: int, witnesses) -> bool:
    """Run Miller-Rabin on odd ``n > 3`` with the given witnesses.

    Returns:
        False if some witness proves ``n`` composite, True otherwise.
    """
    d, r = _decompose(n)

    def check(a):
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                return True
        return False

    for a in witnesses:
        a %= n
        if a in (0, 1, n - 1):
            continue
        if not check(a):
            return False
    return True


def is_probable_prime(
    n: int,
    rounds: int | None = None,
    entropy: EntropySource | None = None,
) -> bool:
    """Primality test: deterministic below the threshold, probabilistic above.

    Args:
        n: Number to test.
        rounds: Random witnesses for ``n >= DETERMINISTIC_THRESHOLD``.
            Defaults to :func:`miller_rabin_rounds` of ``n``'s bit length.
        entropy: Source for random witnesses. Defaults to the system CSPRNG.

    Returns:
        True if ``n`` is prime (or, above the threshold, probably prime).
    """
    if n < 2:
        return False
    if n in _SMALL_PRIME_SET:
        return True
    if not passes_trial_division(n):
        return False
    if n < SMALL_PRIME_LIMIT * SMALL_PRIME_LIMIT:
        return True

    if n < DETERMINISTIC_THRESHOLD:
        return miller_rabin(n, DETERMINISTIC_WITNESSES)

    if rounds is None:
        rounds = miller_rabin_rounds(n.bit_length())
    if entropy is None:
        entropy = get_default_entropy()
    witnesses = (entropy.randrange(2, n - 1) for _ in range(rounds))
    return miller_rabin(n, witnesses)


def is_safe_prime(
    n: int,
    rounds: int | None = None,
    entropy: EntropySource | None = None,
) -> bool:
    """True if both ``n`` and ``(n-1)/2`` are prime."""
    if n < 5 or n % 2 == 0:
        return False
    q = (n - 1) // 2
    # cheaper half first
    return is_probable_prime(q, rounds, entropy) and is_probable_prime(n, rounds, entropy)


def is_strong_prime(
    n: int,
    exponent: int = COMMON_RSA_EXPONENT,
    require_safe: bool = True,
    rounds: int | None = None,
    entropy: EntropySource | None = None,
) -> bool:
    """Prime usable as an RSA factor with public exponent ``exponent``.

    Rejects ``n = 1 (mod exponent)`` (so ``exponent`` is invertible mod
    ``n-1``) and ``n = 1 (mod 3)``. With ``require_safe`` the prime must
    also be safe.
    """
    if n % exponent == 1:
        return False
    if n % 3 == 1:
        return False
    if require_safe:
        return is_safe_prime(n, rounds, entropy)
    return is_probable_prime(n, rounds, entropy)
