# nextprimes/search.py
# Forward scan for the next primes at or above a start value
# - wheel-normalized odd candidates, step +2, never backtracking
# - u64 mode: deterministic tester, wheel {3}, hard ceiling at 2^64-1
# - big mode: randomized tester, wheel {3,5}, unbounded

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .primality import is_prime, is_prime_u64
from .settings import DEFAULT_MR_ROUNDS, U64_MAX

@dataclass(frozen=True)
class SearchMode:
    name: str
    wheel: Tuple[int, ...]     # multiples of these (other than themselves) are skipped at the start
    ceiling: Optional[int]     # last representable candidate, None = unbounded

U64 = SearchMode("u64", (3,), U64_MAX)
BIG = SearchMode("big", (3, 5), None)

@dataclass(frozen=True)
class SearchResult:
    start: int
    count: int
    mode: SearchMode
    primes: List[int]
    tested: int

    @property
    def truncated(self) -> bool:
        """True when the ceiling was hit before `count` primes were found."""
        return len(self.primes) < self.count

# ---------- Candidates ----------

def next_candidate(n: int, mode: SearchMode = BIG) -> Optional[int]:
    """
    First candidate at or above n: 2 for n <= 2, otherwise the next odd
    value that is not a multiple of a wheel prime. None past the ceiling.
    """
    if n <= 2:
        return 2
    if n % 2 == 0:
        n += 1
    while any(n % p == 0 and n != p for p in mode.wheel):
        n += 2
    if mode.ceiling is not None and n > mode.ceiling:
        return None
    return n

def candidates(start: int, mode: SearchMode = BIG) -> Iterator[int]:
    """Lazy stream: the normalized start, then every odd value after it."""
    n = next_candidate(start, mode)
    if n is None:
        return
    if n == 2:
        yield 2
        n = 3
    while mode.ceiling is None or n <= mode.ceiling:
        yield n
        n += 2

# ---------- Scan ----------

def _check_start(start: int, mode: SearchMode) -> None:
    if mode.ceiling is not None and not 0 <= start <= mode.ceiling:
        raise ValueError(f"start must be in 0..{mode.ceiling} for {mode.name} mode")

def _tester(mode: SearchMode, rounds: int,
            rng: Optional[random.Random]) -> Callable[[int], bool]:
    if mode.ceiling is not None:
        return is_prime_u64  # bounded modes are 64-bit
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    if rng is None:
        rng = random.Random()  # seeded from OS entropy, shared by the whole scan
    return lambda n: is_prime(n, rounds, rng)

def _scan(start, mode, test) -> Iterator[int]:
    for n in candidates(start, mode):
        if test(n):
            yield n

def iter_primes(start: int, mode: SearchMode = BIG, rounds: int = DEFAULT_MR_ROUNDS,
                rng: Optional[random.Random] = None) -> Iterator[int]:
    """Lazy, increasing stream of primes >= start (finite only in u64 mode)."""
    _check_start(start, mode)
    return _scan(start, mode, _tester(mode, rounds, rng))

def generate_primes(start: int, count: int, mode: SearchMode = BIG,
                    rounds: int = DEFAULT_MR_ROUNDS,
                    rng: Optional[random.Random] = None,
                    on_prime: Optional[Callable[[int], None]] = None) -> SearchResult:
    """
    Collect `count` primes >= start in increasing order.
    Fewer come back only in u64 mode when 2^64-1 is reached (result.truncated).
    `on_prime` is called with each prime as soon as it is found.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    _check_start(start, mode)
    primes: List[int] = []
    tested = 0
    if count == 0:
        return SearchResult(start, count, mode, primes, tested)

    test = _tester(mode, rounds, rng)
    for n in candidates(start, mode):
        tested += 1
        if not test(n):
            continue
        primes.append(n)
        if on_prime is not None:
            on_prime(n)
        if len(primes) == count:
            break
    return SearchResult(start, count, mode, primes, tested)

def next_primes_u64(start: int, count: int) -> List[int]:
    return generate_primes(start, count, mode=U64).primes

def next_primes(start: int, count: int, rounds: int = DEFAULT_MR_ROUNDS,
                rng: Optional[random.Random] = None) -> List[int]:
    return generate_primes(start, count, mode=BIG, rounds=rounds, rng=rng).primes
