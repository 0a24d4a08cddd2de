# src/ssmul/registry.py
from __future__ import annotations

import inspect
import logging
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import import_module
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

from ssmul.runtime import CFG
from ssmul.utility import UserInputError

_logger = logging.getLogger(__name__)

Multiplier = Callable[[int, int], int]

DEFAULT_BASE_CASE = "karatsuba"


# --------------------- Discovery → Index (immutable) ----------------------


@dataclass
class Index:
    funcs: dict[str, Multiplier]               # name -> func
    descriptions: dict[str, str]               # name -> short description
    sources: dict[str, str]                    # name -> module


@dataclass
class DiscoveryReport:
    loaded: list[tuple[str, int]] = field(default_factory=list)           # (module.name, count)
    failed: list[tuple[str, str]] = field(default_factory=list)           # (module.name, error)
    skipped_duplicates: list[tuple[str, str, str]] = field(default_factory=list)  # (name, skipped_source, kept_source)


def _is_base_case(obj) -> bool:
    return callable(obj) and getattr(obj, "__is_base_case__", False)


def _collect_from_module(mod) -> list[Multiplier]:
    out = []
    for _, o in inspect.getmembers(mod):
        if _is_base_case(o):
            out.append(o)
    return out


# ---------- Decorator (only tags the function; no side effects) ----------


def base_case(*, name: str, description: str = ""):
    def deco(fn: Multiplier):
        fn.__is_base_case__ = True
        fn.label = name
        fn.description = description
        return fn
    return deco


def _module_names() -> list[str]:
    pkg_dir = pkg_files("ssmul") / "multipliers"
    with as_file(pkg_dir) as real:
        return [
            f"ssmul.multipliers.{file.stem}"
            for file in sorted(Path(real).glob("*.py"))
            if file.name != "__init__.py"
        ]


def discover_with_report() -> tuple[Index, DiscoveryReport]:
    """Index every @base_case function in ssmul.multipliers; broken modules are reported, not fatal."""
    report = DiscoveryReport()
    funcs: OrderedDict[str, Multiplier] = OrderedDict()
    desc: dict[str, str] = {}
    sources: dict[str, str] = {}

    for modname in _module_names():
        try:
            mod = import_module(modname)
        except Exception as e:
            _logger.warning("could not import %s: %s", modname, e)
            report.failed.append((modname, f"{type(e).__name__}: {e}"))
            continue
        found = 0
        for fn in _collect_from_module(mod):
            name = fn.label
            if name in funcs:
                report.skipped_duplicates.append((name, modname, sources[name]))
                continue
            funcs[name] = fn
            desc[name] = getattr(fn, "description", "")
            sources[name] = modname
            found += 1
        report.loaded.append((modname, found))

    return Index(funcs=funcs, descriptions=desc, sources=sources), report


@lru_cache(maxsize=1)
def discover() -> Index:
    index, _ = discover_with_report()
    return index


def get_base_case(name: str | None = None) -> Multiplier:
    """Resolve a base-case multiplier by name; None means the MULTIPLY.BASE_CASE setting."""
    if name is None:
        name = CFG("MULTIPLY.BASE_CASE", DEFAULT_BASE_CASE)
    funcs = discover().funcs
    try:
        fn = funcs[name]
    except KeyError:
        known = ", ".join(sorted(funcs)) or "(none)"
        raise UserInputError(f"unknown base-case multiplier '{name}'. Available: {known}.") from None
    _logger.debug("base case: %s (%s)", name, fn.__module__)
    return fn
