"""Read-only projections of a registry: inheritance tree and graph.

The tree is rooted at the target and follows parent pointers, so a shared
ancestor shows up once under every class that reaches it.  The graph has
one edge per (child, parent) pair and is meant to be drawn flowing upward.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .model import Registry


@dataclass
class TreeNode:
    name: str
    children: list[TreeNode] = field(default_factory=list)

    def as_dict(self) -> dict:
        root = {"name": self.name, "children": []}
        stack = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                entry = {"name": child.name, "children": []}
                out["children"].append(entry)
                stack.append((child, entry))
        return root


@dataclass
class GraphView:
    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=lambda: {"flow": "up"})

    def add_node(self, name: str) -> None:
        if name not in self.nodes:
            self.nodes.append(name)

    def add_edge(self, child: str, parent: str) -> None:
        self.add_node(child)
        self.add_node(parent)
        if (child, parent) not in self.edges:
            self.edges.append((child, parent))

    def as_dict(self) -> dict:
        return {
            "nodes": list(self.nodes),
            "edges": [list(edge) for edge in self.edges],
            "attributes": dict(self.attributes),
        }


def build_tree(registry: Registry, target: str) -> TreeNode:
    root = TreeNode(target)
    stack = [root]
    while stack:
        node = stack.pop()
        node.children = [TreeNode(parent) for parent in registry.get(node.name).parents]
        stack.extend(node.children)
    return root


def build_graph(registry: Registry) -> GraphView:
    graph = GraphView()
    for name in registry.ordered:
        graph.add_node(name)
        for parent in registry.nodes[name].parents:
            graph.add_edge(name, parent)
    return graph


def combine_graphs(*graphs: GraphView) -> GraphView:
    """Union of several graphs, nodes and edges de-duplicated in first-seen order."""
    combined = GraphView()
    for graph in graphs:
        for name in graph.nodes:
            combined.add_node(name)
        for child, parent in graph.edges:
            combined.add_edge(child, parent)
        for key, value in graph.attributes.items():
            combined.attributes.setdefault(key, value)
    return combined


def render_tree(root: TreeNode) -> str:
    """Indented text tree, one class per line."""
    lines = [root.name]
    stack = [(child, "", i == len(root.children) - 1)
             for i, child in reversed(list(enumerate(root.children)))]
    while stack:
        node, prefix, last = stack.pop()
        lines.append(f"{prefix}{'└── ' if last else '├── '}{node.name}")
        child_prefix = prefix + ("    " if last else "│   ")
        stack.extend(
            (child, child_prefix, i == len(node.children) - 1)
            for i, child in reversed(list(enumerate(node.children)))
        )
    return "\n".join(lines)


def render_edges(graph: GraphView) -> str:
    """One ``child -> parent`` line per edge; isolated nodes listed alone."""
    linked = {name for edge in graph.edges for name in edge}
    lines = [f"{child} -> {parent}" for child, parent in graph.edges]
    lines.extend(name for name in graph.nodes if name not in linked)
    return "\n".join(lines)
