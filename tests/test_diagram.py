"""Tests for mrosniff.diagram — layered layout and PNG rendering."""

import pytest

from mrosniff.builder import HierarchyBuilder
from mrosniff.diagram import layout, levels, render_diagram
from mrosniff.views import GraphView, build_graph


def _graph(provider, target):
    registry, _ = HierarchyBuilder(provider).build(target)
    return build_graph(registry)


class TestLevels:
    def test_diamond(self, diamond):
        assert levels(_graph(diamond, "Grandchild")) == {
            "Abstract": 0, "Child1": 1, "Child2": 1, "Grandchild": 2,
        }

    def test_deepest_parent_wins(self):
        graph = GraphView()
        graph.add_edge("C", "B")
        graph.add_edge("B", "A")
        graph.add_edge("C", "A")
        assert levels(graph)["C"] == 2

    def test_isolated_node(self):
        graph = GraphView()
        graph.add_node("Alone")
        assert levels(graph) == {"Alone": 0}


class TestLayout:
    def test_rows_top_down(self, convoluted):
        assert layout(_graph(convoluted, "One")) == [
            ["Two", "Six", "Five"],
            ["Four"],
            ["Three"],
            ["One"],
        ]

    def test_empty(self):
        assert layout(GraphView()) == []


class TestRenderDiagram:
    def test_writes_png(self, diamond, tmp_path):
        pytest.importorskip("PIL")
        out = render_diagram(_graph(diamond, "Grandchild"), tmp_path / "out" / "diamond.png",
                             highlight={"Child2"})
        assert out.exists()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_graph(self, tmp_path):
        pytest.importorskip("PIL")
        out = render_diagram(GraphView(), tmp_path / "empty.png")
        assert out.exists()
