# src/mgons/runtime.py
"""Run state for one invocation: the active profile's settings and a few flags."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

# profile key -> Runtime attribute; only real booleans override the defaults
_FLAG_KEYS = {
    "ARITHMETIC.USE_GMPY2": "use_gmpy2",
    "BEHAVIOUR.DEBUG": "debug",
    "BEHAVIOUR.PROGRESS": "progress",
}


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False
    use_gmpy2: bool = True
    progress: bool = True

    def apply(self, profile) -> None:
        """Take over a loaded config.Settings."""
        self.profile_name = profile.name
        self.settings = dict(profile.data)
        for key, attr in _FLAG_KEYS.items():
            value = self.get(key)
            if isinstance(value, bool):
                setattr(self, attr, value)

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self.settings
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


_active: ContextVar[Runtime | None] = ContextVar("mgons_runtime", default=None)


def current() -> Runtime:
    rt = _active.get()
    if rt is None:
        rt = reset()
    return rt


def reset() -> Runtime:
    rt = Runtime()
    _active.set(rt)
    return rt


def APPLY(profile) -> None:
    current().apply(profile)


def CFG(key: str, default: Any = None) -> Any:
    """Dotted profile lookup, e.g. CFG("SWEEP.N_MAX", 250)."""
    return current().get(key, default)
