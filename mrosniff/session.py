"""Analysis session: build a hierarchy once, then answer queries about it.

    sniff = HierarchySniff("Grandchild", provider=DeclarativeProvider({...}))
    sniff.classes()          # search order
    sniff.unreachable()      # [UnreachableMethod("Child2", "foo"), ...]
    print(sniff.report())

The registry and search paths are built synchronously in the constructor.
Afterwards the only mutation is :meth:`HierarchySniff.set_paths`; detector
results are recomputed on every call.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from . import detectors
from .builder import HierarchyBuilder
from .enums import SessionState
from .errors import InvalidArgument
from .providers import ReflectionProvider, RuntimeProvider
from .report import DEFAULT_WIDTH, build_report, validate_width
from .views import GraphView, TreeNode, build_graph, build_tree, combine_graphs, render_tree

logger = logging.getLogger(__name__)


class HierarchySniff:
    def __init__(self, target: object, provider: ReflectionProvider | None = None, *,
                 ignore: object = None, universal: bool = False, width: int = DEFAULT_WIDTH):
        if target is None or target == "":
            raise InvalidArgument("'target' argument not supplied")
        self.state = SessionState.UNINITIALIZED
        self.provider = provider if provider is not None else RuntimeProvider()
        if isinstance(self.provider, RuntimeProvider):
            target = self.provider.resolve(target)
        elif not isinstance(target, str):
            raise InvalidArgument(f"'target' must be a class name, not {type(target).__name__}")
        self.width = width

        builder = HierarchyBuilder(self.provider, ignore=ignore, universal=universal)
        self._target = target
        self._ignore = builder.ignore
        self._universal = builder.universal
        self._registry, self._paths = builder.build(target)
        self.state = SessionState.BUILT
        self._registry.finalize()
        self.state = SessionState.FINALIZED
        logger.debug("Sniffed %s: %d classes, %d paths", target,
                     len(self._registry), len(self._paths.paths))

    # ── Construction inputs ───────────────────────────────

    @property
    def target_class(self) -> str:
        return self._target

    @property
    def ignore(self) -> re.Pattern | None:
        return self._ignore

    @property
    def universal(self) -> bool:
        return self._universal

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int) -> None:
        self._width = validate_width(value)

    # ── Registry queries ──────────────────────────────────

    def _node(self, cls: str | None):
        return self._registry.get(self._target if cls is None else cls)

    def classes(self) -> list[str]:
        """Every class in the hierarchy, in default search order."""
        return list(self._registry.ordered)

    def class_count(self) -> int:
        return len(self._registry)

    def parents(self, cls: str | None = None) -> list[str]:
        return list(self._node(cls).parents)

    def parent_count(self, cls: str | None = None) -> int:
        return len(self._node(cls).parents)

    def children(self, cls: str | None = None) -> list[str]:
        return list(self._node(cls).children)

    def child_count(self, cls: str | None = None) -> int:
        return len(self._node(cls).children)

    def methods(self, cls: str | None = None) -> list[str]:
        return list(self._node(cls).methods)

    def method_count(self, cls: str | None = None) -> int:
        return len(self._node(cls).methods)

    def visit_count(self, cls: str | None = None) -> int:
        """How many times the traversal reached ``cls``."""
        return self._node(cls).visit_count

    # ── Search paths ──────────────────────────────────────

    def paths(self) -> list[list[str]]:
        return self._paths.paths

    def set_paths(self, paths: Iterable[Sequence[str]]) -> HierarchySniff:
        """Override the search paths, e.g. for a non depth-first MRO.

        Nothing is validated and the hierarchy is not rebuilt.
        """
        self._paths.set_paths(paths)
        return self

    # ── Smells ────────────────────────────────────────────

    def overridden(self) -> dict[str, list[str]]:
        return detectors.overridden(self._registry)

    def unreachable(self) -> list[detectors.UnreachableMethod]:
        return detectors.unreachable(self._registry, self._paths.paths)

    def multiple_inheritance(self) -> list[str]:
        return detectors.multiple_inheritance(self._registry)

    def exported(self) -> dict[str, dict[str, str]]:
        return detectors.exported(self._registry)

    def report(self) -> str:
        return build_report(self)

    # ── Views ─────────────────────────────────────────────

    def tree(self) -> TreeNode:
        return build_tree(self._registry, self._target)

    def graph(self) -> GraphView:
        return build_graph(self._registry)

    def to_string(self) -> str:
        return render_tree(self.tree())

    def as_dict(self) -> dict:
        """JSON-ready payload of the hierarchy and every detector result."""
        return {
            "target": self._target,
            "classes": self.classes(),
            "paths": self.paths(),
            "overridden": self.overridden(),
            "unreachable": [str(u) for u in self.unreachable()],
            "multiple_inheritance": {
                cls: self.parents(cls) for cls in self.multiple_inheritance()
            },
            "exported": self.exported(),
        }


# ── Batch mode ────────────────────────────────────────────


def sniffs_from_namespace(namespace: object, provider: ReflectionProvider | None = None, *,
                          ignore: object = None, universal: bool = False) -> list[HierarchySniff]:
    """One session per root class among the loaded classes matching ``namespace``.

    A root is a matching class no other matching class inherits from.
    """
    if isinstance(namespace, str):
        try:
            namespace = re.compile(namespace)
        except re.error as exc:
            raise InvalidArgument(f"'namespace' is not a valid regex: {exc}") from exc
    elif not isinstance(namespace, re.Pattern):
        raise InvalidArgument("'namespace' requires a regex")
    provider = provider if provider is not None else RuntimeProvider()

    matching = sorted({name for name in provider.loaded_classes() if namespace.search(name)})
    inherited = {
        parent
        for name in matching
        for parent in provider.direct_parents(name)
    }
    roots = [name for name in matching if name not in inherited]
    logger.debug("Namespace %s: %d matching classes, %d roots",
                 namespace.pattern, len(matching), len(roots))
    return [
        HierarchySniff(name, provider, ignore=ignore, universal=universal)
        for name in roots
    ]


def combine_sniff_graphs(*sniffs: HierarchySniff | GraphView) -> GraphView:
    """Merge the graphs of several sessions into one view."""
    return combine_graphs(*(s if isinstance(s, GraphView) else s.graph() for s in sniffs))
