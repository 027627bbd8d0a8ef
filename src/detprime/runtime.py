# runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import Any

from colorama import Fore, Style


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls stderr trace and tracebacks
    color: bool = True

    def apply(self, settings: Any) -> None:
        self.profile_name = getattr(settings, "name", None) or "default"

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            # grab UPPERCASE attributes from simple objects / modules
            cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}
        self.settings = dict(cfg)

        # sync runtime flags from profile
        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg
        col = self.get("DISPLAY.COLOR", None)
        if isinstance(col, bool):
            self.color = col

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'SEARCH.MAX_ATTEMPTS'."""
        if not key:
            return default
        cur = self.settings
        if "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("detprime_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug(msg: str) -> None:
    """Write a trace line to stderr when debug is on."""
    rt = current()
    if not rt.debug:
        return
    tag = f"{Fore.CYAN}[detprime]{Style.RESET_ALL}" if rt.color else "[detprime]"
    print(f"{tag} {msg}", file=sys.stderr)


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Verify the reference libraries used by `verify` are importable.
    If strict=True, prints a friendly error and returns False when missing.
    """
    required = ("sympy", "gmpy2")
    missing = [name for name in required if find_spec(name) is None]

    if not missing:
        return True

    msg = (
        f"{Fore.RED}{Style.BRIGHT}\nMissing dependencies:{Style.RESET_ALL} "
        + ", ".join(missing)
        + "\nInstall with: "
        + f"{Fore.YELLOW}pip install " + " ".join(missing) + f"{Style.RESET_ALL}"
    )
    print(msg, file=sys.stderr)
    return not strict
