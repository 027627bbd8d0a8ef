# tests/test_timing.py
"""
Stopwatch values and duration formatting.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from detprime.fmt import format_duration
from detprime.timing import Stopwatch, timed


def test_lap_returns_a_new_stopwatch():
    sw = Stopwatch.start()
    dt, sw2 = sw.lap()
    assert dt >= 0
    assert sw.laps == 0 and sw2.laps == 1
    assert sw2.last >= sw.last
    assert sw2.started == sw.started


def test_tick_counts_without_moving_the_mark():
    sw = Stopwatch.start()
    sw2 = sw.tick().tick()
    assert sw2.laps == 2
    assert sw2.last == sw.last


def test_average():
    sw = Stopwatch.start()
    assert sw.average() == 0.0
    for _ in range(4):
        _, sw = sw.lap()
    assert sw.laps == 4
    assert 0 <= sw.average() <= sw.elapsed()


def test_reset_starts_over():
    _, sw = Stopwatch.start().lap()
    fresh = sw.reset()
    assert fresh.laps == 0
    assert fresh.started >= sw.started


def test_independent_stopwatches():
    a = Stopwatch.start()
    b = Stopwatch.start()
    _, a = a.lap()
    assert a.laps == 1 and b.laps == 0


def test_timed():
    res, dt = timed(sum, [1, 2, 3])
    assert res == 6
    assert dt >= 0


@pytest.mark.parametrize(
    "seconds,text",
    [(0.0, "0 ms"), (0.25, "250 ms"), (1.5, "1.500 s"), (75.0, "1:15.000"), (3725.5, "1:02:05.500")],
)
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text
