"""Hierarchy builder: one depth-first traversal from the target class.

The walk is pre-order and left-most first, so the order classes are first
discovered in is the default method search order.  Each class is expanded
exactly once; later arrivals only bump its visit count and graft its
already-known ancestry onto the search paths.
"""

from __future__ import annotations

import logging
import re

from .errors import CircularInheritance, InvalidArgument
from .model import ClassNode, Registry
from .paths import PathEngine
from .providers import ReflectionProvider

logger = logging.getLogger(__name__)


def compile_ignore(ignore: object) -> re.Pattern | None:
    """Normalize an ignore argument into a compiled regex (or None)."""
    if not ignore:
        return None
    if isinstance(ignore, re.Pattern):
        return ignore
    if not isinstance(ignore, str):
        raise InvalidArgument(f"'ignore' requires a regex, not {type(ignore).__name__}")
    try:
        return re.compile(ignore)
    except re.error as exc:
        raise InvalidArgument(f"'ignore' is not a valid regex ({ignore!r}): {exc}") from exc


def ancestor_chains(registry: Registry, name: str) -> list[list[str]]:
    """Every parent-to-root chain above an already expanded class."""
    chains: list[list[str]] = []
    stack = [[parent] for parent in reversed(registry.get(name).parents)]
    while stack:
        chain = stack.pop()
        parents = registry.get(chain[-1]).parents
        if parents:
            stack.extend([*chain, parent] for parent in reversed(parents))
        else:
            chains.append(chain)
    return chains


class HierarchyBuilder:
    def __init__(self, provider: ReflectionProvider, *, ignore: object = None,
                 universal: bool = False):
        self.provider = provider
        self.ignore = compile_ignore(ignore)
        self.universal = bool(universal)

    def parents_of(self, name: str) -> list[str]:
        """Direct parents after de-duplication, universal root and ignore filtering."""
        root = self.provider.universal_root
        if name == root:
            return []
        parents = list(dict.fromkeys(self.provider.direct_parents(name)))
        if self.universal and not parents:
            parents = [root]
        if self.ignore is not None:
            kept = [p for p in parents if not self.ignore.search(p)]
            if len(kept) != len(parents):
                logger.debug("Pruned parents of %s: %s", name,
                             [p for p in parents if p not in kept])
            parents = kept
        return parents

    def build(self, target: str) -> tuple[Registry, PathEngine]:
        registry = Registry()
        engine = PathEngine(target)
        pending_children: dict[str, list[str]] = {}

        root = self._register(registry, engine, pending_children, target)
        stack = [(target, iter(root.parents))]
        on_walk = {target}

        while stack:
            cls, remaining = stack[-1]
            parent = next(remaining, None)
            if parent is None:
                stack.pop()
                on_walk.discard(cls)
                continue

            if parent in on_walk:
                walk = [name for name, _ in stack]
                raise CircularInheritance(walk[walk.index(parent):] + [parent])

            known = registry.nodes.get(parent)
            if known is not None:
                known.visit_count += 1
                engine.graft(parent, ancestor_chains(registry, parent))
                logger.debug("Revisited %s from %s (visit %d)", parent, cls, known.visit_count)
                continue

            node = self._register(registry, engine, pending_children, parent)
            stack.append((parent, iter(node.parents)))
            on_walk.add(parent)

        return registry, engine

    def _register(self, registry: Registry, engine: PathEngine,
                  pending_children: dict[str, list[str]], name: str) -> ClassNode:
        parents = self.parents_of(name)
        node = registry.add(ClassNode(
            name=name,
            parents=parents,
            children=pending_children.pop(name, []),
            methods=list(dict.fromkeys(self.provider.own_methods(name))),
            exported=dict(self.provider.exported_methods(name)),
        ))
        for parent in parents:
            known = registry.nodes.get(parent)
            if known is not None:
                known.add_child(name)
            else:
                waiting = pending_children.setdefault(parent, [])
                if name not in waiting:
                    waiting.append(name)
        engine.extend(name, parents)
        logger.debug("Registered %s (parents: %s)", name, parents)
        return node
