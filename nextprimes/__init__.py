from .modarith import mul_mod, pow_mod
from .primality import (
    BASES_2_64,
    SMALL_PRIMES,
    is_prime,
    is_prime_u64,
    miller_rabin,
)
from .search import (
    BIG,
    U64,
    SearchResult,
    generate_primes,
    iter_primes,
    next_primes,
    next_primes_u64,
)
__all__ = [
    "mul_mod", "pow_mod",
    "BASES_2_64", "SMALL_PRIMES", "is_prime", "is_prime_u64", "miller_rabin",
    "BIG", "U64", "SearchResult", "generate_primes", "iter_primes", "next_primes", "next_primes_u64",
]
