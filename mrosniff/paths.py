"""Search paths: every left-most, depth-first walk from the target to a root.

Paths are grown in lock-step with the builder's traversal.  They start as
``[[target]]``; a path only diverges where its last class has several
parents.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class PathEngine:
    def __init__(self, target: str):
        self._paths: list[list[str]] = [[target]]

    def extend(self, cls: str, parents: Sequence[str]) -> bool:
        """Replace each path ending at ``cls`` with one path per parent.

        Returns True if any path changed.
        """
        if not parents:
            return False
        return self.graft(cls, [[parent] for parent in parents])

    def graft(self, cls: str, suffixes: Sequence[Sequence[str]]) -> bool:
        """Replace each path ending at ``cls`` with ``path + suffix`` per suffix."""
        if not suffixes:
            return False
        changed = False
        paths: list[list[str]] = []
        for path in self._paths:
            if path[-1] == cls:
                changed = True
                paths.extend(path + list(suffix) for suffix in suffixes)
            else:
                paths.append(path)
        if changed:
            self._paths = paths
        return changed

    @property
    def paths(self) -> list[list[str]]:
        return [list(path) for path in self._paths]

    def set_paths(self, paths: Iterable[Sequence[str]]) -> None:
        """Replace the paths wholesale. No validation is done."""
        self._paths = [list(path) for path in paths]
