"""Hierarchy data model: class nodes, the registry and its method index."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import NotFound


@dataclass
class ClassNode:
    """One class in the hierarchy, as seen from the target.

    parents keeps declaration order (post-filter); children keeps the order
    in which subclasses were wired in during traversal.
    """
    name: str
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    exported: dict[str, str] = field(default_factory=dict)
    visit_count: int = 1

    def add_child(self, child: str) -> None:
        if child not in self.children:
            self.children.append(child)


@dataclass
class Registry:
    """Every class reached from the target, plus first-discovery order.

    ``ordered`` is the canonical search order used for sorting and display.
    ``method_index`` is empty until :meth:`finalize` runs.
    """
    nodes: dict[str, ClassNode] = field(default_factory=dict)
    ordered: list[str] = field(default_factory=list)
    method_index: dict[str, list[str]] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.ordered)

    def add(self, node: ClassNode) -> ClassNode:
        self.nodes[node.name] = node
        self.ordered.append(node.name)
        return node

    def get(self, name: str) -> ClassNode:
        try:
            return self.nodes[name]
        except KeyError:
            raise NotFound(name) from None

    def provides(self, name: str, method: str) -> bool:
        """True if ``name`` is registered and defines ``method`` itself."""
        node = self.nodes.get(name)
        return node is not None and method in node.methods

    def finalize(self) -> dict[str, list[str]]:
        """Build the method index, each list sorted in canonical order."""
        position = {name: i for i, name in enumerate(self.ordered)}
        index: dict[str, list[str]] = {}
        for name in self.ordered:
            for method in self.nodes[name].methods:
                index.setdefault(method, []).append(name)
        for classes in index.values():
            classes.sort(key=position.__getitem__)
        self.method_index = index
        return index
