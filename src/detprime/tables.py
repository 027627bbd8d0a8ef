# -----------------------------------------------------------------------------
#  tables.py
#  Read-only constant tables: bounds, small primes, witness sets, bitmask
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from math import gcd

UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1
INT32_MAX = (1 << 31) - 1

BITMASK_LIMIT = 127             # bitmask answers n < 127
BOUND_32 = 1 << 32
BOUND_51 = 1 << 51
BOUND_64 = 1 << 64

# Trial-division cap before Miller-Rabin. Tunable; anything that survives and
# is at most the cap squared has no smaller factor and is prime.
SMALL_PRIMES: tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)
MAX_SMALL_SQUARED = SMALL_PRIMES[-1] ** 2   # 9409

# Factorizer phase one
FACTOR_PRIMES: tuple[int, ...] = tuple(p for p in SMALL_PRIMES if p <= 53)
WHEEL_START = 59

# Embedded signed 32-bit test
PRIMES_TO_127: tuple[int, ...] = (*SMALL_PRIMES, 101, 103, 107, 109, 113, 127)
SMALL_PRIMES_MAXCAP = 16384
BASES_INT32: tuple[int, ...] = (2, 3, 5)
INT32_STRONG_PSEUDOPRIMES = frozenset({25326001, 161304001, 960946321, 1157839381})

BASES_32: tuple[int, ...] = (2, 3, 61)                  # proven below 4_759_123_141
# {2, 3, 5, 7} alone is only proven below 3_215_031_751 (under 2^32); the
# first nine primes are proven below 3_825_123_056_546_413_051.
BASES_51: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23)
BASES_64: tuple[int, ...] = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)


def _trial_is_prime(n: int) -> bool:
    if n < 2:
        return False
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True


def _build_odd_primes_mask(limit: int) -> int:
    """Bit (n-3)/2 is set iff odd n in [3, limit] is prime."""
    mask = 0
    for n in range(3, limit + 1, 2):
        if _trial_is_prime(n):
            mask |= 1 << ((n - 3) // 2)
    return mask


ODD_PRIMES_MASK = _build_odd_primes_mask(127)

# Search layer: residues coprime with the primorial 2*3*5*7
PRIMORIAL = 2 * 3 * 5 * 7
COPRIME_RESIDUES: tuple[int, ...] = tuple(r for r in range(1, PRIMORIAL) if gcd(r, PRIMORIAL) == 1)

ONE_DIGIT_PRIMES: tuple[int, ...] = (2, 3, 5, 7)
TWO_DIGIT_PRIMES: tuple[int, ...] = tuple(p for p in SMALL_PRIMES if p >= 11)

POWERS_OF_TEN: tuple[int, ...] = tuple(10 ** k for k in range(21))
MAX_UINT64_DIGITS = 19          # 10^19 - 1 < 2^64 - 1 < 10^20 - 1


@dataclass(frozen=True)
class Tier:
    name: str
    low: int                    # inclusive
    high: int                   # exclusive
    bases: tuple[int, ...]

    def __contains__(self, n: int) -> bool:
        return self.low <= n < self.high


TIER_BITMASK = Tier("bitmask", 0, BITMASK_LIMIT, ())
TIER_32 = Tier("32-bit", BITMASK_LIMIT, BOUND_32, BASES_32)
TIER_51 = Tier("51-bit", BOUND_32, BOUND_51, BASES_51)
TIER_64 = Tier("64-bit", BOUND_51, BOUND_64, BASES_64)

TIERS: tuple[Tier, ...] = (TIER_BITMASK, TIER_32, TIER_51, TIER_64)
