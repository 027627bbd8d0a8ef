from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("detprime")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .factorize import factor, factor_bounded, factor_map, is_semiprime, largest_prime_factor
from .modarith import mulmod, mulmod32, powmod, powmod32
from .primality import (
    is_prime,
    is_prime32,
    is_prime_small_bitmask,
    is_strong_probable_prime,
    miller_rabin,
    next_prime,
    prev_prime,
    select_tier,
)
from .randprime import Lcg64Xorshift, random_prime, random_prime_digits
from .runtime import APPLY, CFG
from .tables import TIERS, Tier
from .timing import Stopwatch
from .utility import DomainError, PrimeNotFoundError, UserInputError

__all__ = [
    "APPLY",
    "CFG",
    "TIERS",
    "DomainError",
    "Lcg64Xorshift",
    "PrimeNotFoundError",
    "Stopwatch",
    "Tier",
    "UserInputError",
    "__version__",
    "factor",
    "factor_bounded",
    "factor_map",
    "is_prime",
    "is_prime32",
    "is_prime_small_bitmask",
    "is_semiprime",
    "is_strong_probable_prime",
    "largest_prime_factor",
    "miller_rabin",
    "mulmod",
    "mulmod32",
    "next_prime",
    "powmod",
    "powmod32",
    "prev_prime",
    "random_prime",
    "random_prime_digits",
    "select_tier",
]
