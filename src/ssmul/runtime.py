# src/ssmul/runtime.py
"""Process-wide settings for the current multiplication run."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # tracebacks and recursion statistics

    def apply(self, settings: Any) -> None:
        """Install a loaded Settings profile, or a plain nested dict of sections."""
        if isinstance(settings, dict):
            self.profile_name = "custom"
            self.settings = dict(settings)
        else:
            self.profile_name = settings.name
            self.settings = settings.as_dict()

        dbg = self.get("BEHAVIOUR.DEBUG")
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup into the settings sections, e.g. 'MULTIPLY.BASE_CASE'."""
        if not key:
            return default
        cur: Any = self.settings
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


_current_runtime: ContextVar[Runtime | None] = ContextVar("ssmul_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Drop the current runtime; the next current() starts from defaults."""
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)
