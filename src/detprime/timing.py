# src/detprime/timing.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from time import perf_counter
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Stopwatch:
    """
    Immutable timer value. Every operation that moves the mark returns a new
    Stopwatch; keep the one you get back.
    """
    started: float
    last: float
    laps: int = 0

    @classmethod
    def start(cls) -> Stopwatch:
        now = perf_counter()
        return cls(started=now, last=now)

    def lap(self) -> tuple[float, Stopwatch]:
        """Seconds since the previous mark, and the stopwatch moved to now."""
        now = perf_counter()
        return now - self.last, replace(self, last=now, laps=self.laps + 1)

    def tick(self) -> Stopwatch:
        """Count an iteration without taking a measurement."""
        return replace(self, laps=self.laps + 1)

    def elapsed(self) -> float:
        return perf_counter() - self.started

    def average(self) -> float:
        """Seconds per lap since start; 0.0 before the first lap."""
        if self.laps == 0:
            return 0.0
        return self.elapsed() / self.laps

    def reset(self) -> Stopwatch:
        return Stopwatch.start()


def timed(fn: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, float]:
    """Call fn and return (result, seconds)."""
    t0 = perf_counter()
    res = fn(*args, **kwargs)
    return res, perf_counter() - t0
