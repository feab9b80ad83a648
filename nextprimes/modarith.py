# nextprimes/modarith.py
# Modular arithmetic on GMP integers
# - mul_mod: multiply then reduce (no fixed-width overflow to guard against)
# - pow_mod: binary square-and-multiply, low bit first

from __future__ import annotations
from gmpy2 import mpz

# ---------- internal (mpz in, mpz out) ----------

def _mul_mod(a, b, m):
    return (a * b) % m

def _pow_mod(base, exp, m):
    res = mpz(1) % m
    base %= m
    while exp > 0:
        if exp & 1:
            res = _mul_mod(res, base, m)
        base = _mul_mod(base, base, m)
        exp >>= 1
    return res

# ---------- public (int in, int out) ----------

def mul_mod(a: int, b: int, m: int) -> int:
    """(a * b) mod m, result in [0, m)."""
    if m <= 0:
        raise ValueError("modulus must be positive")
    return int(_mul_mod(mpz(a), mpz(b), mpz(m)))

def pow_mod(a: int, d: int, m: int) -> int:
    """
    a^d mod m by square-and-multiply.
    The accumulator starts at 1 mod m, so pow_mod(a, 0, 1) == 0.
    """
    if m <= 0:
        raise ValueError("modulus must be positive")
    if d < 0:
        raise ValueError("exponent must be non-negative")
    return int(_pow_mod(mpz(a), mpz(d), mpz(m)))
