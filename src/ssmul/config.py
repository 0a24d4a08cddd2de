from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except Exception:
    import tomli as toml  # type: ignore

from ssmul.utility import UserInputError


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

    Added fields:
      - name:        resolved profile name (FILE.stem if not provided in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def workspace_dir() -> Path | None:
    env = os.environ.get("SSMUL_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return None


def _profile_candidates(name: str) -> list[Path]:
    out = []
    ws = workspace_dir()
    if ws is not None:
        out.append(ws / "profiles" / f"{name}.toml")
    out.append(Path(str(pkg_files("ssmul") / "profiles" / f"{name}.toml")))
    return out


def _profile_path(name: str) -> Path | None:
    for path in _profile_candidates(name):
        if path.exists():
            return path
    return None


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except Exception as e:
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


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    if "_PROFILE_" in raw:
        raw = {k: v for k, v in raw.items() if k != "_PROFILE_"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Profile names (filename stems) from the workspace and the package."""
    dirs = [Path(str(pkg_files("ssmul") / "profiles"))]
    ws = workspace_dir()
    if ws is not None:
        dirs.append(ws / "profiles")
    names = set()
    for d in dirs:
        if d.is_dir():
            names.update(p.stem for p in d.glob("*.toml"))
    return sorted(names)


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'), workspace first, then packaged;
    strip the [_PROFILE_] metadata and return Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if path is None:
        raise UserInputError(f"profile '{name}' not found (available: {', '.join(list_all_profiles())})")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)

    mult = data.get("MULTIPLY", {}) or {}
    cutoff = mult.get("KARATSUBA_CUTOFF_BITS")
    if cutoff is not None and (not isinstance(cutoff, int) or cutoff < 1):
        raise UserInputError(f"{path.name}: MULTIPLY.KARATSUBA_CUTOFF_BITS must be a positive integer.")

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
