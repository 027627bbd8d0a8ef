# src/detprime/fmt.py
from __future__ import annotations

from collections.abc import Mapping

from colorama import Fore, Style

from detprime.runtime import current as _rt_current
from detprime.tables import Tier


def paint(text: str, color: str, *, bright: bool = False) -> str:
    """Wrap text in ANSI color unless colors are off for this runtime."""
    if not _rt_current().color:
        return text
    return f"{color}{Style.BRIGHT if bright else ''}{text}{Style.RESET_ALL}"


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def _fmt_bound(x: int) -> str:
    if x > 1024 and x & (x - 1) == 0:
        return f"2^{x.bit_length() - 1}"
    return str(x)


def format_tier(tier: Tier) -> str:
    """e.g. "51-bit tier [2^32, 2^51) bases: 2, 3, 5, 7, ..." """
    bases = ", ".join(str(b) for b in tier.bases) if tier.bases else "none (bit lookup)"
    return f"{tier.name} tier [{_fmt_bound(tier.low)}, {_fmt_bound(tier.high)}) bases: {bases}"


def format_verdict(n: int, prime: bool, tier: Tier) -> str:
    word = paint("prime", Fore.GREEN, bright=True) if prime else paint("composite", Fore.RED)
    return f"{n}: {word} ({tier.name})"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm (and hh:mm:ss.mmm if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm
    h, m = divmod(int(m), MAX_SECONDS)
    return f"{h}:{m:02d}:{s:06.3f}"                # hh:mm:ss.mmm
