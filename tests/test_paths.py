"""Tests for mrosniff.paths — incremental left-most depth-first search paths."""

from mrosniff.paths import PathEngine


class TestExtend:
    def test_initial_paths(self):
        assert PathEngine("T").paths == [["T"]]

    def test_single_parent_appends(self):
        engine = PathEngine("T")
        assert engine.extend("T", ["A"]) is True
        assert engine.paths == [["T", "A"]]

    def test_multiple_parents_diverge_in_declaration_order(self):
        engine = PathEngine("T")
        engine.extend("T", ["A", "B", "C"])
        assert engine.paths == [["T", "A"], ["T", "B"], ["T", "C"]]

    def test_no_parents_is_noop(self):
        engine = PathEngine("T")
        assert engine.extend("T", []) is False
        assert engine.paths == [["T"]]

    def test_only_paths_ending_at_class_change(self):
        engine = PathEngine("One")
        engine.extend("One", ["Two", "Three"])
        engine.extend("Three", ["Four", "Six"])
        engine.extend("Four", ["Five"])
        assert engine.paths == [
            ["One", "Two"],
            ["One", "Three", "Four", "Five"],
            ["One", "Three", "Six"],
        ]

    def test_unknown_class_is_noop(self):
        engine = PathEngine("T")
        assert engine.extend("Elsewhere", ["X"]) is False
        assert engine.paths == [["T"]]


class TestGraft:
    def test_graft_appends_each_chain(self):
        engine = PathEngine("G")
        engine.extend("G", ["C1", "C2"])
        engine.extend("C2", ["A"])
        engine.graft("A", [["Base", "Root"], ["Mixin"]])
        assert engine.paths == [
            ["G", "C1"],
            ["G", "C2", "A", "Base", "Root"],
            ["G", "C2", "A", "Mixin"],
        ]

    def test_graft_without_chains_is_noop(self):
        engine = PathEngine("G")
        assert engine.graft("G", []) is False
        assert engine.paths == [["G"]]


class TestSetPaths:
    def test_replacement_is_verbatim(self):
        engine = PathEngine("T")
        engine.set_paths([["T", "B", "A"], ["nonsense"]])
        assert engine.paths == [["T", "B", "A"], ["nonsense"]]

    def test_paths_are_copies(self):
        engine = PathEngine("T")
        engine.paths[0].append("X")
        assert engine.paths == [["T"]]

    def test_input_is_copied(self):
        engine = PathEngine("T")
        new = [["T", "A"]]
        engine.set_paths(new)
        new[0].append("B")
        assert engine.paths == [["T", "A"]]
