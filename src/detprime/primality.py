# -----------------------------------------------------------------------------
#  primality.py
#  Deterministic primality for 0 <= n < 2^64
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from detprime.modarith import _powmod_unchecked
from detprime.tables import (
    BASES_INT32,
    BITMASK_LIMIT,
    BOUND_32,
    BOUND_51,
    BOUND_64,
    INT32_MAX,
    INT32_STRONG_PSEUDOPRIMES,
    MAX_SMALL_SQUARED,
    ODD_PRIMES_MASK,
    PRIMES_TO_127,
    SMALL_PRIMES,
    SMALL_PRIMES_MAXCAP,
    TIER_32,
    TIER_51,
    TIER_64,
    TIER_BITMASK,
    UINT64_MAX,
    Tier,
)
from detprime.utility import DomainError, require_uint

"""
Tiers are chosen by the value of n, never by the caller. Each tier's witness
set is applied only inside the range it is proven for:

    [0, 127)        bitmask lookup
    [127, 2^32)     bases 2, 3, 61
    [2^32, 2^51)    bases 2, 3, 5, 7, 11, 13, 17, 19, 23
    [2^51, 2^64)    bases 2, 325, 9375, 28178, 450775, 9780504, 1795265022
"""


def is_prime_small_bitmask(n: int) -> bool:
    """Primality for 0 <= n <= 127 by a single bit lookup."""
    if n == 2:
        return True
    if n < 2 or n % 2 == 0:
        return False
    if n > BITMASK_LIMIT:
        raise DomainError(f"bitmask covers n <= {BITMASK_LIMIT}, got {n}")
    return bool((ODD_PRIMES_MASK >> ((n - 3) // 2)) & 1)


def select_tier(n: int) -> Tier:
    require_uint(n)
    if n < BITMASK_LIMIT:
        return TIER_BITMASK
    if n < BOUND_32:
        return TIER_32
    if n < BOUND_51:
        return TIER_51
    return TIER_64


def _decompose(n: int) -> tuple[int, int]:
    """n - 1 = d * 2^s with d odd."""
    d = n - 1
    s = 0
    while d & 1 == 0:
        d >>= 1
        s += 1
    return d, s


def _is_composite_witness(n: int, a: int, d: int, s: int) -> bool:
    x = _powmod_unchecked(a, d, n)
    if x == 1 or x == n - 1:
        return False
    for _ in range(s - 1):
        x = (x * x) % n
        if x == n - 1:
            return False
    return True


def is_strong_probable_prime(n: int, a: int) -> bool:
    """One Miller-Rabin round: True if base a fails to prove odd n > 2 composite."""
    if n < 3 or n % 2 == 0:
        raise DomainError(f"Miller-Rabin needs an odd n > 2, got {n}")
    if a % n == 0:
        return True
    d, s = _decompose(n)
    return not _is_composite_witness(n, a, d, s)


def miller_rabin(n: int, bases: Iterable[int]) -> bool:
    """
    Run Miller-Rabin on odd n > 2 with the given bases, stopping at the first
    witness of compositeness. Bases that are multiples of n are skipped.

    Deterministic only when the bases are proven for n's range; is_prime()
    takes care of that choice.
    """
    if n < 3 or n % 2 == 0:
        raise DomainError(f"Miller-Rabin needs an odd n > 2, got {n}")
    d, s = _decompose(n)
    for a in bases:
        if a % n == 0:
            continue
        if _is_composite_witness(n, a, d, s):
            return False
    return True


def is_prime(n: int) -> bool:
    """
    Deterministic primality test for every 0 <= n < 2^64.

    Order of checks (first match decides):
      1. n < 127: bitmask
      2. trial division by primes <= 97 (n equal to the divisor is prime)
      3. survivors <= 97^2 are prime
      4. Miller-Rabin with the witness set of n's tier
    """
    require_uint(n)
    if n < BITMASK_LIMIT:
        return is_prime_small_bitmask(n)

    for p in SMALL_PRIMES:
        if n % p == 0:
            return n == p
    if n <= MAX_SMALL_SQUARED:
        return True

    if n < BOUND_32:
        return miller_rabin(n, TIER_32.bases)
    if n < BOUND_51:
        return miller_rabin(n, TIER_51.bases)
    return miller_rabin(n, TIER_64.bases)


def is_prime32(n: int) -> bool:
    """
    Primality for 0 <= n < 2^31 using bases 2, 3, 5.

    The four strong pseudoprimes to those bases below 2^31 are rejected
    explicitly.
    """
    require_uint(n, bound=INT32_MAX + 1)
    if n <= BITMASK_LIMIT:
        return is_prime_small_bitmask(n)
    for p in PRIMES_TO_127:
        if n % p == 0:
            return n == p
    if n < SMALL_PRIMES_MAXCAP:
        return True
    if not miller_rabin(n, BASES_INT32):
        return False
    return n not in INT32_STRONG_PSEUDOPRIMES


def next_prime(n: int) -> int:
    """Smallest prime strictly greater than n, below 2^64."""
    require_uint(n)
    if n < 2:
        return 2
    c = n + 1 if n % 2 == 0 else n + 2
    while c <= UINT64_MAX:
        if is_prime(c):
            return c
        c += 2
    raise DomainError(f"no prime below 2^64 is greater than {n}")


def prev_prime(n: int) -> int:
    """Largest prime strictly less than n."""
    require_uint(n, bound=BOUND_64 + 1)
    if n <= 2:
        raise DomainError(f"no prime is smaller than {n}")
    if n == 3:
        return 2
    c = n - 1 if n % 2 == 0 else n - 2
    while not is_prime(c):
        c -= 2
    return c
