"""Typed failures raised by the analysis core."""

from __future__ import annotations


class SniffError(Exception):
    """Base class for every error the analysis core raises."""


class InvalidArgument(SniffError, ValueError):
    """Bad construction input: missing target, bad ignore pattern, bad width."""


class NotFound(SniffError, LookupError):
    """Query on a class that is absent from the hierarchy (unknown or pruned)."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No such class '{name}' found in hierarchy")


class CircularInheritance(SniffError):
    """A class was reached again while it was still being expanded."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = list(cycle)
        super().__init__("Circular inheritance: " + " -> ".join(self.cycle))


class UnbalancedInput(SniffError):
    """Parallel report columns differ in length."""


__all__ = [
    "CircularInheritance",
    "InvalidArgument",
    "NotFound",
    "SniffError",
    "UnbalancedInput",
]
