# nextprimes/primality.py
# Primality testing
# - trial division by the primes below 500
# - Miller-Rabin with the 7 deterministic bases (exact for n < 2^64)
# - Miller-Rabin with random bases for arbitrary precision

from __future__ import annotations
import random
from typing import Iterable, Optional, Tuple
from gmpy2 import mpz

from .modarith import _mul_mod, _pow_mod
from .settings import DEFAULT_MR_ROUNDS, U64_MAX

SMALL_PRIMES = (
    2,3,5,7,11,13,17,19,23,29,31,37,41,43,47,53,59,61,67,71,
    73,79,83,89,97,101,103,107,109,113,127,131,137,139,149,151,
    157,163,167,173,179,181,191,193,197,199,211,223,227,229,233,
    239,241,251,257,263,269,271,277,281,283,293,307,311,313,317,
    331,337,347,349,353,359,367,373,379,383,389,397,401,409,419,
    421,431,433,439,443,449,457,461,463,467,479,487,491,499,
)

# Deterministic Miller-Rabin bases for n < 2^64
BASES_2_64 = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

# ---------- Utilities ----------

def _trial_division(n) -> Optional[bool]:
    """True/False if the small-prime table settles n, None otherwise."""
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False
    return None

def decompose(n) -> Tuple[int, int]:
    """Write n - 1 = d * 2^s with d odd; returns (d, s). n must be odd and > 2."""
    d = n - 1
    s = (d & -d).bit_length() - 1  # count trailing zeros
    d >>= s
    return d, s

def random_base(n: int, rng: random.Random) -> int:
    """
    Random witness in [2, n-2].
    Draws as many 64-bit words as n-2 needs, then reduces into range.
    """
    limit = int(n) - 2
    if limit <= 2:
        return 2
    words = (limit.bit_length() + 63) // 64
    a = 0
    for _ in range(words):
        a = (a << 64) | rng.getrandbits(64)
    return a % (limit - 1) + 2

# ---------- Miller-Rabin ----------

def _strong_probable_prime(n, a, d, s) -> bool:
    """One strong round for base a."""
    x = _pow_mod(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = _mul_mod(x, x, n)
        if x == n - 1:
            return True
    return False

def miller_rabin(n: int, bases: Iterable[int]) -> bool:
    """
    Strong test of odd n > 2 against every base; bases may be a lazy iterable.
    Bases that are multiples of n are skipped.
    """
    n = mpz(n)
    d, s = decompose(n)
    for a in bases:
        a = mpz(a)
        if a % n == 0:
            continue
        if not _strong_probable_prime(n, a, d, s):
            return False
    return True

# ---------- Public testers ----------

def is_prime_u64(n: int) -> bool:
    """Deterministic: no false positives for any n < 2^64, no randomness used."""
    if n > U64_MAX:
        raise ValueError("n must be a 64-bit unsigned integer (0..2^64-1)")
    if n < 2:
        return False
    hit = _trial_division(n)
    if hit is not None:
        return hit
    return miller_rabin(n, BASES_2_64)

def is_prime(n: int, rounds: int = DEFAULT_MR_ROUNDS,
             rng: Optional[random.Random] = None) -> bool:
    """
    Probabilistic test for any size of n: `rounds` random witnesses,
    false-positive probability at most 4^-rounds for a composite n.
    Pass `rng` to share one generator across many calls; without it a
    freshly OS-seeded generator is used.
    """
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    if n < 2:
        return False
    hit = _trial_division(n)
    if hit is not None:
        return hit
    if rng is None:
        rng = random.Random()
    return miller_rabin(n, (random_base(n, rng) for _ in range(rounds)))
