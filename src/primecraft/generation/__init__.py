"""Prime generation: candidate search, strategies and reporting."""

from primecraft.generation.api import (
    GenerationMetadata,
    PrimeSetResult,
    generate_prime_set,
    validate_request,
)
from primecraft.generation.candidate import (
    CandidateGenerator,
    PrimeCandidate,
    SearchState,
    max_attempts,
)
from primecraft.generation.properties import (
    PrimeProperties,
    analyze_distribution,
    calculate_prime_properties,
    strength_label,
)
from primecraft.generation.strategies import (
    STRATEGIES,
    StrategyResult,
    generate_rsa_multi,
    generate_strong,
    is_weak_for_multi_rsa,
    min_rsa_gap,
)

__all__ = [
    # Boundary
    'GenerationMetadata',
    'PrimeSetResult',
    'generate_prime_set',
    'validate_request',
    # Candidate search
    'CandidateGenerator',
    'PrimeCandidate',
    'SearchState',
    'max_attempts',
    # Reporting
    'PrimeProperties',
    'analyze_distribution',
    'calculate_prime_properties',
    'strength_label',
    # Strategies
    'STRATEGIES',
    'StrategyResult',
    'generate_rsa_multi',
    'generate_strong',
    'is_weak_for_multi_rsa',
    'min_rsa_gap',
]
