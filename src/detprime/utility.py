# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import shutil

from detprime.tables import BOUND_64


class UserInputError(Exception):
    pass


class DomainError(UserInputError, ValueError):
    """Argument outside the documented domain of a core operation."""


class PrimeNotFoundError(LookupError):
    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


def require_uint(n: object, *, bound: int = BOUND_64, name: str = "n") -> int:
    """
    Return n unchanged if it is a plain int in [0, bound); raise DomainError otherwise.
    bool is rejected even though it subclasses int.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise DomainError(f"{name} must be an integer, got {type(n).__name__}")
    if n < 0:
        raise DomainError(f"{name} must be non-negative, got {n}")
    if n >= bound:
        raise DomainError(f"{name} must be below 2^{bound.bit_length() - 1}, got {n}")
    return n


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except OSError:
        return default


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """{'A': {'B': 1}} -> {'A.B': 1}"""
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
