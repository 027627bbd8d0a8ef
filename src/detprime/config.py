from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from detprime.utility import UserInputError
from detprime.workspace import workspace_dir


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path | None:
    """Workspace profile first, then the packaged one; None if neither exists."""
    p = _profiles_dir() / f"{name}.toml"
    if p.is_file():
        return p
    ref = pkg_files("detprime") / "profiles" / f"{name}.toml"
    with as_file(ref) as real:
        real = Path(real)
        return real if real.is_file() else None


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except (OSError, toml.TOMLDecodeError) as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _normalize(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Seeds may be written as strings ("0x..."), since TOML ints are signed 64-bit."""
    search = data.get("SEARCH")
    if isinstance(search, dict) and isinstance(search.get("SEED"), str):
        try:
            search["SEED"] = int(search["SEED"].replace("_", ""), 0)
        except ValueError:
            raise UserInputError(f"reading {path.name}: SEARCH.SEED is not an integer: {search['SEED']!r}.") from None
    return data


# --- Public API ------------------------------------------------------------

def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for all workspace profiles.
    Profiles lacking [_PROFILE_] get "(no description)".
    """
    pdir = _profiles_dir()
    if not pdir.is_dir():
        return []
    items: list[tuple[str, str]] = []
    for p in pdir.glob("*.toml"):
        try:
            _, nm, desc = _split_profile_data(_load_toml(p), p.stem)
        except UserInputError:
            # Best-effort listing; fall back to filename
            nm, desc = p.stem, "(unreadable)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [_PROFILE_]
    metadata and return Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if path is None:
        raise UserInputError(f"Profile '{name}' not found in {_profiles_dir()}")

    data, resolved_name, description = _split_profile_data(_load_toml(path), path.stem)
    return Settings(
        data=_normalize(data, path),
        name=resolved_name,
        description=description,
        _source=path,
    )
