"""Generator configuration.

Configuration is a plain dataclass so it can be built in code, loaded from
a JSON file, or echoed into a run record unchanged.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

COMMON_RSA_EXPONENT = 65537


@dataclass
class GeneratorConfig:
    """Tunable knobs for candidate search.

    Attributes:
        mr_rounds: Fixed number of random Miller-Rabin witnesses for moduli
            above the deterministic threshold. ``None`` picks a count from
            the candidate's bit length.
        sieve_limit: Largest prime used to sieve safe-prime candidates
            ``q`` and ``2q+1`` before any Miller-Rabin round.
        avoid_weak: Reject multi-prime candidates whose ``p-1`` shares a
            large factor with an already accepted prime's ``p-1``.
        min_gap: Minimum absolute difference between accepted primes.
            ``None`` derives it from the bit length.
        public_exponent: RSA exponent that must be invertible modulo ``p-1``.
        use_wheel: Round sampled candidates up to the next wheel residue.
    """
    mr_rounds: int | None = None
    sieve_limit: int = 1 << 16
    avoid_weak: bool = True
    min_gap: int | None = None
    public_exponent: int = COMMON_RSA_EXPONENT
    use_wheel: bool = True

    def __post_init__(self):
        if self.mr_rounds is not None and self.mr_rounds < 1:
            raise ValueError(f"mr_rounds must be >= 1, got {self.mr_rounds}")
        if self.sieve_limit < 3:
            raise ValueError(f"sieve_limit must be >= 3, got {self.sieve_limit}")
        if self.min_gap is not None and self.min_gap < 0:
            raise ValueError(f"min_gap must be >= 0, got {self.min_gap}")
        if self.public_exponent < 3 or self.public_exponent % 2 == 0:
            raise ValueError(
                f"public_exponent must be an odd integer >= 3, got {self.public_exponent}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'GeneratorConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    @classmethod
    def load(cls, path: Path | str) -> 'GeneratorConfig':
        """Load configuration from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def save(self, path: Path | str) -> None:
        """Write configuration to a JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
