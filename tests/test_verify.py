# tests/test_verify.py
"""
Cross-check harness.

Run: pytest -v
"""

from __future__ import annotations

from detprime.tables import TIERS
from detprime.verify import EDGE_CASES, check_factor, check_powmod, check_primality, run_verify, sample_values


def test_sample_values_cover_every_tier():
    vals = sample_values(40, seed=9)
    assert len(vals) == 40
    for i, n in enumerate(vals):
        assert n in TIERS[i % len(TIERS)]


def test_single_checks_pass():
    assert check_primality(3825123056546413051) is None
    assert check_factor(5040) is None
    assert check_factor(1) is None
    assert check_powmod(3, 1000, 1000000007) is None


def test_run_verify_reports_no_mismatches():
    report = run_verify(samples=60, seed=123)
    assert report.ok
    assert report.samples == 60 + len(EDGE_CASES)
    assert sum(report.per_tier.values()) == report.samples
    assert 0 < report.factored < report.samples
