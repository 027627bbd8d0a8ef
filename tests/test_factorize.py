# tests/test_factorize.py
"""
Factorizer: small primes, wheel, certification, bounded runs.

Run: pytest -v
"""

from __future__ import annotations

import os
from math import prod

import pytest
from sympy import factorint

import detprime.factorize as factorize
from detprime.factorize import factor, factor_bounded, factor_map, is_semiprime, largest_prime_factor
from detprime.primality import is_prime, prev_prime
from detprime.randprime import Lcg64Xorshift
from detprime.utility import DomainError

LARGEST_64 = 18446744073709551557


def _sympy_list(n: int) -> list[int]:
    return sorted(p for p, e in factorint(n).items() for _ in range(e))


CASES = [
    (0, [0]),
    (1, [1]),
    (2, [2]),
    (360, [2, 2, 2, 3, 3, 5]),
    (3599, [59, 61]),                       # first wheel pair
    (999999937, [999999937]),
    (2 ** 32, [2] * 32),
    (53 ** 5, [53] * 5),
    (59 * 59 * 61, [59, 59, 61]),
    (2 * 2305843009213693951, [2, 2305843009213693951]),
    ((1 << 64) - 1, [3, 5, 17, 257, 641, 65537, 6700417]),
    (LARGEST_64, [LARGEST_64]),
]


@pytest.mark.parametrize("n,expected", CASES, ids=[str(n) for n, _ in CASES])
def test_factor_known(n, expected):
    assert factor(n) == expected


def test_factor_properties_on_random_values():
    rng = Lcg64Xorshift(99)
    for _ in range(300):
        n = rng.next_uint64() >> 28          # keep the wheel short
        fs = factor(n)
        if n < 2:
            assert fs == [n]
            continue
        assert fs == sorted(fs)
        assert prod(fs) == n
        assert all(is_prime(p) for p in fs)
        assert fs == _sympy_list(n)


def test_factor_is_idempotent_on_its_output():
    for n in (360, 5040, 3599, 1000036000099):
        for p in factor(n):
            assert factor(p) == [p]


def test_factor_semiprime_of_mid_sized_primes():
    p, q = 1000003, 1000033
    assert factor(p * q) == [p, q]


def test_factor_map():
    assert factor_map(5040) == {2: 4, 3: 2, 5: 1, 7: 1}
    assert factor_map(0) == {}
    assert factor_map(1) == {}
    assert factor_map(97) == {97: 1}


def test_largest_prime_factor():
    assert largest_prime_factor(360) == 5
    assert largest_prime_factor(1) is None
    assert largest_prime_factor(LARGEST_64) == LARGEST_64


@pytest.mark.parametrize(
    "n,expected",
    [(4, True), (6, True), (3599, True), (8, False), (7, False), (1, False), (0, False)],
)
def test_is_semiprime(n, expected):
    assert is_semiprime(n) is expected


@pytest.mark.parametrize("bad", [-1, 1 << 64, 3.0], ids=repr)
def test_factor_domain(bad):
    with pytest.raises(DomainError):
        factor(bad)


# ---- bounded ----

def test_factor_bounded_finishes_in_time():
    assert factor_bounded(360, 30.0) == [2, 2, 2, 3, 3, 5]


def test_factor_bounded_gives_up_on_hard_semiprime():
    p = prev_prime(1 << 32)
    q = prev_prime(p)
    assert factor_bounded(p * q, 0.2) is None


def _dying_worker(q, n):
    os._exit(3)


def test_factor_bounded_reports_a_crashed_worker(monkeypatch):
    monkeypatch.setattr(factorize, "_factor_worker", _dying_worker)
    with pytest.raises(RuntimeError, match="exit code 3"):
        factor_bounded(360, 30.0)
