from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("mgons")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings, read_current_profile
from .formula import InternalConsistencyError, MgonTerms, compute_mgon, mgon_terms
from .numtheory import binom, gcd, totient
from .runtime import APPLY, CFG
from .perimeter import PerimeterRow, ceil_log2, perimeter_counts, perimeter_total, sweep
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "InternalConsistencyError",
    "MgonTerms",
    "PerimeterRow",
    "__version__",
    "binom",
    "ceil_log2",
    "compute_mgon",
    "gcd",
    "has_profile",
    "load_settings",
    "mgon_terms",
    "perimeter_counts",
    "perimeter_total",
    "read_current_profile",
    "sweep",
    "totient",
    "workspace_dir"
]
