# tests/test_modarith.py
"""
Modular multiplication / exponentiation.

Run: pytest -v
"""

from __future__ import annotations

import gmpy2
import pytest

from detprime.modarith import mulmod, mulmod32, powmod, powmod32
from detprime.randprime import Lcg64Xorshift
from detprime.utility import DomainError

M64 = (1 << 64) - 1
P64 = (1 << 64) - 59


POWMOD_CASES = [
    (2, 64, 1_000_000_007),
    (3, 0, 7),
    (0, 0, 7),
    (0, 5, 7),
    (5, 3, 1),
    (M64, M64, P64),
    (M64 - 1, 2, M64),
    (1795265022, (P64 - 1) // 2, P64),
    (2, 10, 1 << 63),
]


@pytest.mark.parametrize("b,e,m", POWMOD_CASES, ids=[f"{b}^{e}%{m}" for b, e, m in POWMOD_CASES])
def test_powmod_matches_builtin_pow(b, e, m):
    assert powmod(b, e, m) == pow(b, e, m)


def test_powmod_two_to_64_mod_prime():
    assert powmod(2, 64, 1_000_000_007) == (2 ** 64) % 1_000_000_007


def test_powmod_agrees_with_gmpy2_on_random_operands():
    rng = Lcg64Xorshift(12345)
    for _ in range(500):
        b, e, m = rng.next_uint64(), rng.next_uint64(), rng.next_uint64() or 1
        assert powmod(b, e, m) == int(gmpy2.powmod(b, e, m))


def test_mulmod_full_width():
    assert mulmod(M64, M64, P64) == (M64 * M64) % P64
    assert mulmod(M64 - 1, M64 - 1, M64) == 1


def test_modulus_one_gives_zero():
    assert mulmod(123, 456, 1) == 0
    assert powmod(9, 0, 1) == 0


def test_32_bit_variants():
    m = (1 << 32) - 5
    assert mulmod32(m - 1, m - 1, m) == 1
    assert powmod32(3, m - 1, m) == 1  # Fermat, m is prime


@pytest.mark.parametrize(
    "call",
    [
        lambda: powmod(2, 3, 0),
        lambda: mulmod(2, 3, 0),
        lambda: powmod(-1, 3, 7),
        lambda: powmod(2, -3, 7),
        lambda: powmod(2, 3, 1 << 64),
        lambda: mulmod32(1 << 32, 1, 7),
        lambda: powmod32(2, 3, 1 << 32),
        lambda: powmod(2.0, 3, 7),
        lambda: powmod(True, 3, 7),
    ],
    ids=["mod0", "mulmod0", "neg-base", "neg-exp", "wide-mod", "wide32", "wide32-mod", "float", "bool"],
)
def test_domain_errors(call):
    with pytest.raises(DomainError):
        call()


def test_domain_error_is_value_error():
    with pytest.raises(ValueError):
        powmod(1, 1, 0)
