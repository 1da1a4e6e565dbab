"""Human-readable report composed from the detector results.

Purely presentational: each section is a two- or three-column text table,
sections appear in registry display order, and an empty string means
nothing was found.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import InvalidArgument, UnbalancedInput
from .registry import DETECTORS, display_order
from .utils import format_table

if TYPE_CHECKING:
    from .session import HierarchySniff

DEFAULT_WIDTH = 72
MIN_WIDTH = 40


def validate_width(width: object) -> int:
    if isinstance(width, bool) or not isinstance(width, int) or width < MIN_WIDTH:
        raise InvalidArgument(f"Argument to 'width' must be a number >= {MIN_WIDTH}, not ({width!r})")
    return width


def _two_column_widths(title: str, strings: list[str], width: int) -> list[int]:
    longest = max([len(title), *(len(line) for s in strings for line in s.split("\n"))])
    longest = min(longest, width // 2)
    return [longest, width - longest - 2]


def build_table(title1: str, title2: str, strings1: list[str], strings2: list[str],
                width: int = DEFAULT_WIDTH) -> str:
    if len(strings1) != len(strings2):
        raise UnbalancedInput(
            f"Attempt to build unbalanced report ({len(strings1)} vs {len(strings2)} rows)"
        )
    widths = _two_column_widths(title1, strings1, width)
    return format_table([title1, title2], [list(row) for row in zip(strings1, strings2)], widths)


def _overridden_section(sniff: HierarchySniff, width: int) -> str:
    overridden = sniff.overridden()
    if not overridden:
        return ""
    methods = sorted(overridden)
    classes = ["\n".join(overridden[m]) for m in methods]
    return build_table(*DETECTORS["overridden"].columns, methods, classes, width)


def _unreachable_section(sniff: HierarchySniff, width: int) -> str:
    found = sorted(sniff.unreachable(), key=lambda u: (u.method, u.cls))
    if not found:
        return ""
    return build_table(*DETECTORS["unreachable"].columns,
                       [u.method for u in found], [u.cls for u in found], width)


def _multiple_inheritance_section(sniff: HierarchySniff, width: int) -> str:
    multis = sniff.multiple_inheritance()
    if not multis:
        return ""
    parents = ["\n".join(sniff.parents(cls)) for cls in multis]
    return build_table(*DETECTORS["multiple_inheritance"].columns, multis, parents, width)


def _exported_section(sniff: HierarchySniff, width: int) -> str:
    exported = sniff.exported()
    if not exported:
        return ""
    classes = sorted(exported)
    subs, sources = [], []
    longest_c, longest_m = len("Class"), len("Method")
    for cls in classes:
        names = sorted(exported[cls])
        subs.append("\n".join(names))
        sources.append("\n".join(exported[cls][n] for n in names))
        longest_c = max(longest_c, len(cls))
        longest_m = max(longest_m, *(len(n) for n in names))
    usable = width - 4
    third = usable // 3
    longest_c = min(longest_c, third)
    longest_m = min(longest_m, third)
    widths = [longest_c, longest_m, usable - longest_c - longest_m]
    rows = [list(row) for row in zip(classes, subs, sources)]
    return format_table(list(DETECTORS["exported"].columns), rows, widths)


_SECTIONS = {
    "overridden": _overridden_section,
    "unreachable": _unreachable_section,
    "multiple_inheritance": _multiple_inheritance_section,
    "exported": _exported_section,
}


def build_report(sniff: HierarchySniff, width: int | None = None) -> str:
    width = validate_width(sniff.width if width is None else width)
    report = ""
    for name in display_order():
        section = _SECTIONS[name](sniff, width)
        if section:
            report += f"{DETECTORS[name].display}\n{section}"
    if report:
        report = f"Report for class: {sniff.target_class}\n\n{report}"
    return report
