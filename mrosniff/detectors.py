"""Smell detectors: pure functions over a finalized registry and its search paths.

Nothing here is cached; callers recompute on every query so a path override
is always reflected immediately.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from .model import Registry


class UnreachableMethod(NamedTuple):
    cls: str
    method: str

    def __str__(self) -> str:
        return f"{self.cls}::{self.method}"


def overridden(registry: Registry) -> dict[str, list[str]]:
    """Methods defined in more than one class, classes in search order."""
    return {
        method: list(classes)
        for method, classes in registry.method_index.items()
        if len(classes) > 1
    }


def _is_reachable(registry: Registry, definers: set[str], method: str, cls: str,
                  paths: Sequence[Sequence[str]]) -> bool | None:
    """Walk the paths in lookup order and decide whether ``cls`` is ever selected.

    Returns True once ``cls`` is met on a path, False when a new path starts
    after another provider of ``method`` was already met, and None when
    ``cls`` is on no path or the paths run out first.
    """
    if not any(cls in path for path in paths):
        return None
    resolved = False
    for path in paths:
        if resolved:
            return False
        for name in path:
            if name == cls:
                return True
            if not resolved and (name in definers or registry.provides(name, method)):
                resolved = True
    return None


def unreachable(registry: Registry, paths: Sequence[Sequence[str]]) -> list[UnreachableMethod]:
    """Overridden implementations the default lookup order can never select.

    A class is unreachable for a method when another provider of the method
    was already met on an earlier search path before the lookup gets to it.
    Classes met on the first path that reaches them, and classes on no path
    at all, are not reported.
    """
    found: list[UnreachableMethod] = []
    for method, classes in overridden(registry).items():
        definers = set(classes)
        for cls in classes:
            if _is_reachable(registry, definers, method, cls, paths) is False:
                found.append(UnreachableMethod(cls, method))
    return found


def multiple_inheritance(registry: Registry) -> list[str]:
    """Classes with more than one parent, in search order."""
    return [name for name in registry.ordered if len(registry.nodes[name].parents) > 1]


def exported(registry: Registry) -> dict[str, dict[str, str]]:
    """Methods implemented somewhere other than the class they are visible on."""
    return {
        name: dict(registry.nodes[name].exported)
        for name in registry.ordered
        if registry.nodes[name].exported
    }
