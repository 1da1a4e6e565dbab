"""Canonical detector registry — single source of truth.

Report sections, CLI detector names and JSON keys are all derived from this
registry instead of keeping their own lists.
"""

from __future__ import annotations

from dataclasses import dataclass

DISPLAY_ORDER = [
    "overridden",
    "unreachable",
    "multiple_inheritance",
    "exported",
]


@dataclass(frozen=True)
class DetectorMeta:
    name: str
    display: str  # Report section title
    columns: tuple[str, ...]  # Report table headers
    guidance: str  # One-line coaching text


DETECTORS: dict[str, DetectorMeta] = {
    "overridden": DetectorMeta(
        "overridden",
        "Overridden Methods",
        ("Method", "Class"),
        "check each override is intended; accidental overriding is hard to debug",
    ),
    "unreachable": DetectorMeta(
        "unreachable",
        "Unreachable Methods",
        ("Method", "Class"),
        "delete dead implementations or call them explicitly",
    ),
    "multiple_inheritance": DetectorMeta(
        "multiple_inheritance",
        "Multiple Inheritance",
        ("Class", "Parents"),
        "flatten diamonds; prefer composition over extra parents",
    ),
    "exported": DetectorMeta(
        "exported",
        "Exported Methods",
        ("Class", "Method", "Exported From"),
        "move helper functions out of the class namespace",
    ),
}


def detector_names() -> list[str]:
    """All registered detector names, sorted."""
    return sorted(DETECTORS.keys())


def display_order() -> list[str]:
    """Canonical display order for terminal output."""
    return list(DISPLAY_ORDER)
