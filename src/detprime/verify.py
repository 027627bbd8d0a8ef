# -----------------------------------------------------------------------------
#  verify.py
#  Cross-check the oracle, the factorizer and powmod against sympy / gmpy2
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter

import gmpy2
from sympy import factorint, isprime

from detprime.factorize import factor
from detprime.modarith import powmod
from detprime.primality import is_prime, select_tier
from detprime.randprime import DEFAULT_SEED, Lcg64Xorshift
from detprime.runtime import CFG, debug
from detprime.tables import BOUND_32, BOUND_51, BOUND_64, TIERS

# Wheel search is O(sqrt(n)); keep factor checks to values it finishes quickly.
FACTOR_CHECK_LIMIT = 1 << 40

# Tier edges plus composites that fool smaller witness sets.
EDGE_CASES: tuple[int, ...] = (
    0, 1, 2, 3, 126, 127, 128, 9409, 9411,
    BOUND_32 - 1, BOUND_32, BOUND_32 + 1,
    BOUND_51 - 1, BOUND_51, BOUND_51 + 1,
    BOUND_64 - 59, BOUND_64 - 1,
    3215031751,         # strong pseudoprime to 2, 3, 5, 7
    118670087467,       # strong pseudoprime to 2, 3, 5, 7 above 2^32
    3825123056546413051,
)


@dataclass
class Mismatch:
    check: str
    n: int
    got: object
    expected: object


@dataclass
class VerifyReport:
    samples: int
    per_tier: dict[str, int] = field(default_factory=dict)
    mismatches: list[Mismatch] = field(default_factory=list)
    factored: int = 0
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.mismatches


def sample_values(count: int, seed: int = DEFAULT_SEED) -> list[int]:
    """count pseudo-random values, dealt round-robin across the four tiers."""
    rng = Lcg64Xorshift(seed)
    out: list[int] = []
    for i in range(count):
        tier = TIERS[i % len(TIERS)]
        out.append(tier.low + rng.next_uint64() % (tier.high - tier.low))
    return out


def check_primality(n: int) -> Mismatch | None:
    got, expected = is_prime(n), bool(isprime(n))
    return None if got == expected else Mismatch("is_prime", n, got, expected)


def check_factor(n: int) -> Mismatch | None:
    got = factor(n)
    expected = sorted(p for p, e in factorint(n).items() for _ in range(e)) if n > 1 else [n]
    return None if got == expected else Mismatch("factor", n, got, expected)


def check_powmod(base: int, exponent: int, m: int) -> Mismatch | None:
    got = powmod(base, exponent, m)
    expected = int(gmpy2.powmod(base, exponent, m))
    return None if got == expected else Mismatch("powmod", m, got, expected)


def run_verify(samples: int | None = None, seed: int | None = None) -> VerifyReport:
    """
    Compare is_prime against sympy.isprime on tier edges and `samples` random
    values, factor against sympy.factorint on the values below
    FACTOR_CHECK_LIMIT, and powmod against gmpy2.powmod.
    """
    samples = int(CFG("VERIFY.SAMPLES", 10_000) if samples is None else samples)
    seed = int(CFG("SEARCH.SEED", DEFAULT_SEED) if seed is None else seed)

    t0 = perf_counter()
    values = [*EDGE_CASES, *sample_values(samples, seed)]
    report = VerifyReport(samples=len(values))
    rng = Lcg64Xorshift(seed ^ 0x5DEECE66D)

    for n in values:
        tier = select_tier(n).name
        report.per_tier[tier] = report.per_tier.get(tier, 0) + 1

        checks = [check_primality(n)]
        if n < FACTOR_CHECK_LIMIT:
            checks.append(check_factor(n))
            report.factored += 1
        if n > 0:
            checks.append(check_powmod(rng.next_uint64(), rng.next_uint64(), n))
        for miss in checks:
            if miss is not None:
                debug(f"verify: {miss.check}({miss.n}) -> {miss.got!r}, expected {miss.expected!r}")
                report.mismatches.append(miss)

    report.elapsed_s = perf_counter() - t0
    return report
