# nextprimes/cli.py
# Command-line front ends
#   nextprimes64 [start] [count]                          (u64, deterministic)
#   nextprimes   [start] [count] [--rounds R] [--seed S]  (arbitrary precision)

from __future__ import annotations
import sys, time, random, argparse
from typing import List, Optional

from .search import BIG, U64, SearchMode, generate_primes
from .settings import (
    DEFAULT_COUNT, DEFAULT_MR_ROUNDS, DEFAULT_START_BIG, DEFAULT_START_U64,
)

def _parse_int(text: str, what: str, hi: Optional[int] = None) -> int:
    try:
        v = int(text.strip(), 10)
    except ValueError:
        raise ValueError(f"invalid {what}: {text!r}") from None
    if v < 0:
        raise ValueError(f"{what} must be non-negative: {text!r}")
    if hi is not None and v > hi:
        raise ValueError(f"{what} must be at most {hi}: {text!r}")
    return v

def _parser(prog: str, mode: SearchMode, default_start: int) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=prog,
        description=f"Print the next COUNT primes >= START ({mode.name} mode).")
    ap.add_argument("start", nargs="?", default=str(default_start),
                    help=f"start value, decimal (default {default_start})")
    ap.add_argument("count", nargs="?", default=str(DEFAULT_COUNT),
                    help=f"how many primes to print (default {DEFAULT_COUNT})")
    if mode is BIG:
        ap.add_argument("--rounds", type=str, default=str(DEFAULT_MR_ROUNDS),
                        help=f"Miller-Rabin rounds per candidate (default {DEFAULT_MR_ROUNDS})")
        ap.add_argument("--seed", type=str, default=None,
                        help="rng seed for reproducible witness selection")
    ap.add_argument("--stats", action="store_true",
                    help="print a summary line to stderr when done")
    return ap

def _run(argv: Optional[List[str]], prog: str, mode: SearchMode, default_start: int) -> int:
    args = _parser(prog, mode, default_start).parse_args(argv)
    rounds, rng = DEFAULT_MR_ROUNDS, None
    try:
        start = _parse_int(args.start, "start", hi=mode.ceiling)
        count = _parse_int(args.count, "count")
        if mode is BIG:
            rounds = _parse_int(args.rounds, "rounds")
            if rounds < 1:
                raise ValueError("rounds must be >= 1")
            if args.seed is not None:
                rng = random.Random(_parse_int(args.seed, "seed"))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    t0 = time.perf_counter()
    try:
        res = generate_primes(start, count, mode=mode, rounds=rounds, rng=rng,
                              on_prime=lambda p: print(p, flush=True))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 1
    ms = (time.perf_counter() - t0) * 1000

    if res.truncated:
        print(f"[warn] reached the 64-bit ceiling after {len(res.primes)} of {count} primes",
              file=sys.stderr)
    if args.stats:
        print(f"# found={len(res.primes)} tested={res.tested} ms={ms:.3f}", file=sys.stderr)
    return 0

def main_u64(argv: Optional[List[str]] = None) -> int:
    return _run(argv, "nextprimes64", U64, DEFAULT_START_U64)

def main_big(argv: Optional[List[str]] = None) -> int:
    return _run(argv, "nextprimes", BIG, DEFAULT_START_BIG)

if __name__ == "__main__":
    raise SystemExit(main_big())
