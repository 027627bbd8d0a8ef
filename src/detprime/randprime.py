# -----------------------------------------------------------------------------
#  randprime.py
#  LCG + xorshift generator and bounded random prime search
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable

from detprime.primality import is_prime
from detprime.runtime import CFG, debug
from detprime.tables import (
    COPRIME_RESIDUES,
    MAX_UINT64_DIGITS,
    ONE_DIGIT_PRIMES,
    POWERS_OF_TEN,
    PRIMORIAL,
    TWO_DIGIT_PRIMES,
    UINT64_MAX,
)
from detprime.utility import DomainError, PrimeNotFoundError, require_uint

DEFAULT_SEED = 0xDEADBEEFDEADBEEF
DEFAULT_MAX_ATTEMPTS = 100_000


def _check_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int) or not 1 <= digits <= MAX_UINT64_DIGITS:
        raise DomainError(f"digits must be in 1..{MAX_UINT64_DIGITS}, got {digits!r}")


class Lcg64Xorshift:
    """
    64-bit LCG whose state is scrambled by a xorshift on output.
    Fast and reproducible; not for cryptographic use.
    """

    A = 6364136223846793005
    C = 1
    XS_S1 = 12
    XS_S2 = 25
    XS_S3 = 27

    def __init__(self, seed: int = DEFAULT_SEED):
        self.state = require_uint(seed, name="seed")

    def next_uint64(self) -> int:
        self.state = (self.state * self.A + self.C) & UINT64_MAX
        x = self.state
        x ^= x >> self.XS_S1
        x = (x ^ (x << self.XS_S2)) & UINT64_MAX
        x ^= x >> self.XS_S3
        return x

    def next_range(self, low: int, high: int) -> int:
        """Value in [low, high]."""
        if low > high:
            raise DomainError(f"empty range [{low}, {high}]")
        return low + self.next_uint64() % (high - low + 1)

    def next_odd(self, low: int, high: int) -> int:
        """Odd value in [low, high]; the range must contain one."""
        if low > high or (low == high and low % 2 == 0):
            raise DomainError(f"no odd value in [{low}, {high}]")
        r = self.next_range(low, high)
        if r % 2 == 0:
            r += 1
        if r > high:
            r -= 2
        return r

    def next_uint64_with_digits(self, digits: int) -> int:
        """Value with exactly `digits` decimal digits, 1 <= digits <= 19."""
        _check_digits(digits)
        return self.next_range(POWERS_OF_TEN[digits - 1], POWERS_OF_TEN[digits] - 1)

    def next_matching(self, predicate: Callable[[int], bool], max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> int:
        """First draw satisfying predicate; PrimeNotFoundError after max_attempts draws."""
        return search(self.next_uint64, predicate, max_attempts=max_attempts)


def search(draw: Callable[[], int], accept: Callable[[int], bool], *, max_attempts: int) -> int:
    """
    Call draw() until accept() holds for the value, at most max_attempts times.
    Raises PrimeNotFoundError when the budget is exhausted.
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise DomainError(f"max_attempts must be a positive integer, got {max_attempts!r}")
    for attempt in range(1, max_attempts + 1):
        c = draw()
        if accept(c):
            debug(f"search: accepted {c} after {attempt} draw(s)")
            return c
    raise PrimeNotFoundError(f"no candidate accepted after {max_attempts} attempts", attempts=max_attempts)


def to_coprime_residue(r: int) -> int:
    """
    Move r into a residue class coprime with 2*3*5*7, staying in its block
    of 210 (or the block below when that would leave 64 bits).
    """
    require_uint(r, name="r")
    c = (r // PRIMORIAL) * PRIMORIAL + COPRIME_RESIDUES[r % len(COPRIME_RESIDUES)]
    if c > UINT64_MAX:
        c -= PRIMORIAL
    return c


def _resolve(seed: int | None, max_attempts: int | None, rng: Lcg64Xorshift | None) -> tuple[Lcg64Xorshift, int]:
    if rng is None:
        rng = Lcg64Xorshift(int(CFG("SEARCH.SEED", DEFAULT_SEED)) if seed is None else seed)
    if max_attempts is None:
        max_attempts = int(CFG("SEARCH.MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
    return rng, max_attempts


def random_prime(
    seed: int | None = None,
    *,
    max_attempts: int | None = None,
    rng: Lcg64Xorshift | None = None,
) -> int:
    """
    A pseudo-random 64-bit prime.

    Raw draws are mapped onto residues coprime with 210 before the primality
    oracle sees them. Passing `rng` continues an existing stream; otherwise a
    generator is seeded from `seed` (or SEARCH.SEED, or the default seed).
    """
    rng, max_attempts = _resolve(seed, max_attempts, rng)
    return search(lambda: to_coprime_residue(rng.next_uint64()), is_prime, max_attempts=max_attempts)


def random_prime_digits(
    digits: int = 19,
    seed: int | None = None,
    *,
    max_attempts: int | None = None,
    rng: Lcg64Xorshift | None = None,
) -> int:
    """A pseudo-random prime with exactly `digits` decimal digits (1..19)."""
    _check_digits(digits)
    rng, max_attempts = _resolve(seed, max_attempts, rng)
    if digits == 1:
        return ONE_DIGIT_PRIMES[rng.next_uint64() % len(ONE_DIGIT_PRIMES)]
    if digits == 2:
        return TWO_DIGIT_PRIMES[rng.next_uint64() % len(TWO_DIGIT_PRIMES)]

    low, high = POWERS_OF_TEN[digits - 1], POWERS_OF_TEN[digits]

    def accept(c: int) -> bool:
        return low <= c < high and is_prime(c)

    return search(
        lambda: to_coprime_residue(rng.next_uint64_with_digits(digits)),
        accept,
        max_attempts=max_attempts,
    )
