# -----------------------------------------------------------------------------
#  modarith.py
#  Modular multiplication and exponentiation over 32- and 64-bit moduli
# -----------------------------------------------------------------------------

from __future__ import annotations

from detprime.tables import BOUND_32, BOUND_64
from detprime.utility import DomainError, require_uint


def _check(a: int, b: int, m: int, bound: int) -> None:
    require_uint(a, bound=bound, name="a")
    require_uint(b, bound=bound, name="b")
    require_uint(m, bound=bound, name="modulus")
    if m == 0:
        raise DomainError("modulus must be at least 1")


def _powmod_unchecked(base: int, exponent: int, m: int) -> int:
    # Square-and-multiply, exponent bits low to high. The product of two
    # residues below m needs at most twice the width of m.
    result = 1 % m
    x = base % m
    while exponent:
        if exponent & 1:
            result = (result * x) % m
        x = (x * x) % m
        exponent >>= 1
    return result


def mulmod(a: int, b: int, m: int) -> int:
    """(a*b) mod m for operands and modulus below 2^64."""
    _check(a, b, m, BOUND_64)
    return (a * b) % m


def powmod(base: int, exponent: int, m: int) -> int:
    """
    base^exponent mod m for operands and modulus below 2^64.

    Raises DomainError for modulus 0 or out-of-range operands.
    """
    _check(base, exponent, m, BOUND_64)
    return _powmod_unchecked(base, exponent, m)


def mulmod32(a: int, b: int, m: int) -> int:
    _check(a, b, m, BOUND_32)
    return (a * b) % m


def powmod32(base: int, exponent: int, m: int) -> int:
    _check(base, exponent, m, BOUND_32)
    return _powmod_unchecked(base, exponent, m)
