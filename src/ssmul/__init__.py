from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("ssmul")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .registry import discover, get_base_case
from .ring import FermatRing
from .runtime import APPLY, CFG
from .schonhage import RecursionStats, multiply, multiply_in_ring, ring_for_size
from .utility import NoSuitableRing, UserInputError

__all__ = [
    "APPLY",
    "CFG",
    "FermatRing",
    "NoSuitableRing",
    "RecursionStats",
    "UserInputError",
    "__version__",
    "discover",
    "get_base_case",
    "has_profile",
    "load_settings",
    "multiply",
    "multiply_in_ring",
    "ring_for_size",
]
