# tests/test_cli.py
"""
Command line entry point.

Run: pytest -v
"""

from __future__ import annotations

import pytest

import detprime.cli as cli
from detprime.cli import main
from detprime.primality import prev_prime


def run(capsys, *argv):
    rc = main(["--no-color", *argv])
    out, err = capsys.readouterr()
    return rc, out, err


def test_isprime(capsys):
    rc, out, _ = run(capsys, "isprime", "97", "2^64-59", "561")
    assert rc == 0
    lines = out.splitlines()
    assert lines[0] == "97: prime (bitmask)"
    assert lines[1] == "18446744073709551557: prime (64-bit)"
    assert lines[2] == "561: composite (32-bit)"


def test_isprime_with_timing(capsys):
    rc, out, _ = run(capsys, "--time", "isprime", "7", "11")
    assert rc == 0
    assert "average" in out


def test_factor(capsys):
    rc, out, _ = run(capsys, "factor", "--timeout", "0", "360", "1", "97")
    assert rc == 0
    assert out.splitlines() == ["360 = 2^3 × 3^2 × 5", "1 = 1", "97 = 97  (prime)"]


def test_factor_with_profile_timeout(capsys):
    rc, out, _ = run(capsys, "factor", "5040")
    assert rc == 0
    assert out.strip() == "5040 = 2^4 × 3^2 × 5 × 7"


def test_factor_gives_up(capsys):
    p = prev_prime(1 << 32)
    n = str(p * prev_prime(p))
    rc, _, err = run(capsys, "factor", "--timeout", "0.2", n)
    assert rc == 1
    assert "gave up" in err


def test_powmod(capsys):
    rc, out, _ = run(capsys, "powmod", "2", "64", "1000000007")
    assert rc == 0
    assert int(out) == pow(2, 64, 1000000007)


def test_powmod_zero_modulus_is_user_error(capsys):
    rc, _, err = run(capsys, "powmod", "2", "3", "0")
    assert rc == 2
    assert "Error:" in err


def test_tier(capsys):
    rc, out, _ = run(capsys, "tier", "100", "2^40")
    assert rc == 0
    assert "bitmask tier" in out
    assert "51-bit tier [2^32, 2^51) bases: 2, 3, 5, 7, 11, 13, 17, 19, 23" in out


def test_random_is_reproducible(capsys):
    rc, out1, _ = run(capsys, "random", "--digits", "12", "--seed", "0x1234", "--count", "3")
    rc2, out2, _ = run(capsys, "random", "--digits", "12", "--seed", "0x1234", "--count", "3")
    assert rc == rc2 == 0
    assert out1 == out2
    vals = [int(x) for x in out1.split()]
    assert len(vals) == 3 and all(len(str(v)) == 12 for v in vals)


def test_random_exhausted_budget(capsys):
    rc, _, err = run(capsys, "random", "--digits", "19", "--seed", "1", "--attempts", "1", "--count", "50")
    assert rc == 1
    assert "attempts" in err


def test_next_and_prev(capsys):
    assert run(capsys, "next", "2^32")[1].strip() == "4294967311"
    assert run(capsys, "prev", "2^32")[1].strip() == "4294967291"


def test_prev_of_two_is_user_error(capsys):
    rc, _, _ = run(capsys, "prev", "2")
    assert rc == 2


def test_verify_small_sample(capsys):
    rc, out, _ = run(capsys, "--profile", "quick", "verify", "--samples", "40")
    assert rc == 0
    assert "OK" in out


@pytest.mark.parametrize("bad", ["-5", "2^64", "hello", "1.5"])
def test_bad_numbers_exit_2(capsys, bad):
    rc, _, err = run(capsys, "isprime", bad)
    assert rc == 2
    assert "Invalid input" in err


def test_unknown_profile_exit_2(capsys):
    rc, _, err = run(capsys, "--profile", "nope", "isprime", "7")
    assert rc == 2
    assert "Unknown profile" in err


def test_init_where_profiles(capsys, isolated_workspace):
    rc, out, _ = run(capsys, "profiles")
    assert "detprime init" in out
    rc, out, _ = run(capsys, "init")
    assert rc == 0 and "Workspace ready" in out
    rc, out, _ = run(capsys, "profiles")
    assert "default" in out and "quick" in out
    rc, out, _ = run(capsys, "where")
    assert str(isolated_workspace.resolve()) in out


def test_debug_traces_to_stderr(capsys, monkeypatch):
    monkeypatch.setattr(cli, "_install_loud_error_handlers", lambda debug_on: None)
    rc, _, err = run(capsys, "--debug", "isprime", "7")
    assert rc == 0
    assert "[detprime]" in err


@pytest.mark.parametrize("count", ["0", "-3"])
def test_random_count_must_be_positive(capsys, count):
    rc, out, err = run(capsys, "random", "--count", count)
    assert rc == 2
    assert out == ""
    assert "--count" in err
