import pathlib
import random
import sys

import pytest
from sympy import isprime

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nextprimes.primality import (
    BASES_2_64,
    SMALL_PRIMES,
    decompose,
    is_prime,
    is_prime_u64,
    miller_rabin,
    random_base,
)

LIMIT = 10**6

# strong pseudoprime to every prime base up to 23, all factors above the trial-division table
SPSP_2_TO_23 = 3825123056546413051  # 149491 * 747451 * 34233211
# strong pseudoprime to every prime base up to 37
SPSP_2_TO_37 = 318665857834031151167461  # 399165290221 * 798330580441


def _sieve(limit):
    flags = bytearray([1]) * limit
    flags[0] = flags[1] = 0
    for p in range(2, int(limit**0.5) + 1):
        if flags[p]:
            flags[p * p::p] = bytearray(len(range(p * p, limit, p)))
    return flags


@pytest.fixture(scope="module")
def sieve():
    return _sieve(LIMIT)


def test_small_prime_table():
    assert len(SMALL_PRIMES) == 95
    assert SMALL_PRIMES[0] == 2 and SMALL_PRIMES[-1] == 499
    assert all(isprime(p) for p in SMALL_PRIMES)
    assert list(SMALL_PRIMES) == sorted(SMALL_PRIMES)


def test_u64_agrees_with_sieve_below_one_million(sieve):
    for n in range(LIMIT):
        assert is_prime_u64(n) == bool(sieve[n]), n


def test_randomized_agrees_with_sieve_below_100k(sieve):
    rng = random.Random(2024)
    for n in range(100_000):
        assert is_prime(n, rng=rng) == bool(sieve[n]), n


def test_u64_is_deterministic():
    values = [2**61 - 1, 2**64 - 59, SPSP_2_TO_23, 1_000_003, 2**64 - 1]
    first = [is_prime_u64(n) for n in values]
    for _ in range(3):
        assert [is_prime_u64(n) for n in values] == first


def test_known_large_primes_and_composites():
    for p in (2**31 - 1, 2**61 - 1, 2**64 - 59):
        assert is_prime_u64(p)
        assert is_prime(p)
    for p in (2**89 - 1, 2**107 - 1, 2**127 - 1):
        assert is_prime(p)
    for c in (2**64 - 1, 2**67 - 1, 2**101 - 1, (2**61 - 1) * (2**31 - 1)):
        assert not is_prime(c)
    assert not is_prime_u64(2**64 - 1)


def test_strong_pseudoprimes_rejected():
    assert not is_prime_u64(SPSP_2_TO_23)
    assert not is_prime(SPSP_2_TO_23, rng=random.Random(1))
    assert not is_prime(SPSP_2_TO_37, rng=random.Random(1))
    # fools the first nine prime bases
    assert miller_rabin(SPSP_2_TO_23, (2, 3, 5, 7, 11, 13, 17, 19, 23))


def test_carmichael_numbers_rejected():
    for n in (561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265):
        assert not isprime(n)
        assert not is_prime_u64(n)
        assert not is_prime(n)


def test_agrees_with_sympy_on_random_large_odds():
    rng = random.Random(99)
    for bits in (64, 96, 160, 256):
        for _ in range(30):
            n = rng.getrandbits(bits) | 1
            assert is_prime(n, rng=rng) == isprime(n)
    for _ in range(200):
        n = rng.getrandbits(64) | 1
        assert is_prime_u64(n) == isprime(n)


def test_u64_rejects_wide_input():
    with pytest.raises(ValueError):
        is_prime_u64(2**64)


def test_negative_and_tiny_inputs():
    for n in (-7, -1, 0, 1):
        assert not is_prime_u64(n)
        assert not is_prime(n)
    assert is_prime_u64(2) and is_prime(2)


def test_rounds_must_be_positive():
    with pytest.raises(ValueError):
        is_prime(1_000_003, rounds=0)


def test_decompose():
    assert decompose(561) == (35, 4)
    assert decompose(2**64 - 59) == ((2**64 - 60) // 4, 2)
    d, s = decompose(2**127 - 1)
    assert d % 2 == 1 and d * 2**s == 2**127 - 2


def test_miller_rabin_single_bases():
    # 2047 = 23 * 89 is the smallest strong pseudoprime to base 2
    assert miller_rabin(2047, [2])
    assert not miller_rabin(2047, [3])
    # bases that are multiples of n are skipped
    assert miller_rabin(15, [15, 30])


def test_deterministic_bases():
    assert BASES_2_64 == (2, 325, 9375, 28178, 450775, 9780504, 1795265022)


def test_random_base_range():
    rng = random.Random(5)
    for n in (5, 7, 503, 2**64 - 59, 2**64 + 13, 2**200 + 235):
        for _ in range(200):
            a = random_base(n, rng)
            assert 2 <= a <= n - 2
    assert random_base(4, rng) == 2


def test_shared_generator_is_consumed():
    rng = random.Random(3)
    state = rng.getstate()
    assert is_prime(1_000_003, rounds=4, rng=rng)
    assert rng.getstate() != state
    # settled by trial division, no witnesses drawn
    state = rng.getstate()
    assert is_prime(499, rng=rng)
    assert not is_prime(1_000_002, rng=rng)
    assert rng.getstate() == state
