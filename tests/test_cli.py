"""Tests for mrosniff.cli — argument parsing and command dispatch."""

from __future__ import annotations

import json
import textwrap

import pytest

from mrosniff import config as config_mod
from mrosniff.cli import create_parser, main

MODULE = "cli_sample_models"

SAMPLE_SOURCE = textwrap.dedent("""
    class Abstract:
        def foo(self):
            return "abstract"

        def bar(self):
            return "abstract"


    class Child1(Abstract):
        def foo(self):
            return "child1"


    class Child2(Abstract):
        def foo(self):
            return "child2"

        def bar(self):
            return "child2"


    class Grandchild(Child1, Child2):
        def foo(self):
            return "grandchild"
""")


@pytest.fixture()
def sample(tmp_path, monkeypatch):
    """Importable diamond module plus an isolated config file."""
    (tmp_path / f"{MODULE}.py").write_text(SAMPLE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    config_file = tmp_path / ".mrosniff" / "config.json"
    monkeypatch.setattr(config_mod, "CONFIG_FILE", config_file)
    return config_file


def _q(name: str) -> str:
    return f"{MODULE}.{name}"


# ===========================================================================
# Module import
# ===========================================================================


class TestModuleImport:
    def test_module_importable(self):
        import mrosniff.cli
        assert hasattr(mrosniff.cli, "main")
        assert hasattr(mrosniff.cli, "create_parser")


# ===========================================================================
# create_parser — argument parsing
# ===========================================================================


class TestCreateParser:
    @pytest.fixture()
    def parser(self):
        return create_parser()

    def test_report_defaults(self, parser):
        args = parser.parse_args(["report", "pkg.mod:Thing"])
        assert args.command == "report"
        assert args.target == "pkg.mod:Thing"
        assert args.ignore is None
        assert args.universal is None
        assert args.width is None
        assert args.json is False

    def test_report_options(self, parser):
        args = parser.parse_args(["report", "pkg.Thing", "--ignore", "^Base", "--universal",
                                  "--width", "100", "--json"])
        assert args.ignore == "^Base"
        assert args.universal is True
        assert args.width == 100
        assert args.json is True

    def test_global_flags(self, parser):
        args = parser.parse_args(["-v", "--import", "a", "--import", "b", "paths", "x.Y"])
        assert args.verbose is True
        assert args.imports == ["a", "b"]

    def test_detect_choices(self, parser):
        args = parser.parse_args(["detect", "unreachable", "x.Y"])
        assert args.detector == "unreachable"
        with pytest.raises(SystemExit):
            parser.parse_args(["detect", "bogus", "x.Y"])

    def test_command_required(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_graph_options(self, parser):
        args = parser.parse_args(["graph", "--namespace", "^app\\."])
        assert args.namespace == "^app\\."
        assert args.universal is None

    def test_config_set(self, parser):
        args = parser.parse_args(["config", "set", "report_width", "90"])
        assert args.config_action == "set"
        assert (args.key, args.value) == ("report_width", "90")


# ===========================================================================
# main — sniffing commands
# ===========================================================================


class TestSniffCommands:
    def test_report(self, sample, capsys):
        main(["report", f"{MODULE}:Grandchild"])
        out = capsys.readouterr().out
        assert out.startswith(f"Report for class: {_q('Grandchild')}\n")
        assert "Unreachable Methods" in out
        assert _q("Child2") in out

    def test_report_json(self, sample, capsys):
        main(["report", f"{MODULE}.Grandchild", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["target"] == _q("Grandchild")
        assert payload["unreachable"] == [f"{_q('Child2')}::foo", f"{_q('Child2')}::bar"]
        assert payload["multiple_inheritance"] == {_q("Grandchild"): [_q("Child1"), _q("Child2")]}

    def test_report_nothing_found(self, sample, capsys):
        main(["report", f"{MODULE}:Abstract"])
        assert f"No smells found for {_q('Abstract')}" in capsys.readouterr().out

    def test_report_width_flag(self, sample, capsys):
        main(["report", f"{MODULE}:Grandchild", "--width", "40"])
        out = capsys.readouterr().out
        assert "─" * 40 in out
        assert "─" * 41 not in out

    def test_paths(self, sample, capsys):
        main(["paths", f"{MODULE}:Grandchild"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"Path #1: {_q('Grandchild')} -> {_q('Child1')} -> {_q('Abstract')}",
            f"Path #2: {_q('Grandchild')} -> {_q('Child2')} -> {_q('Abstract')}",
        ]

    def test_paths_ignore(self, sample, capsys):
        main(["paths", f"{MODULE}:Grandchild", "--ignore", "Child2$", "--json"])
        assert json.loads(capsys.readouterr().out) == [
            [_q("Grandchild"), _q("Child1"), _q("Abstract")],
        ]

    def test_tree(self, sample, capsys):
        main(["tree", f"{MODULE}:Grandchild"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == _q("Grandchild")
        assert lines[1] == f"├── {_q('Child1')}"

    def test_tree_universal_json(self, sample, capsys):
        main(["tree", f"{MODULE}:Abstract", "--universal", "--json"])
        assert json.loads(capsys.readouterr().out) == {
            "name": _q("Abstract"),
            "children": [{"name": "object", "children": []}],
        }

    def test_detect_json(self, sample, capsys):
        main(["detect", "unreachable", f"{MODULE}:Grandchild", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["detector"] == "unreachable"
        assert payload["count"] == 2
        assert payload["entries"] == [["bar", _q("Child2")], ["foo", _q("Child2")]]

    def test_detect_table(self, sample, capsys):
        main(["detect", "multiple_inheritance", f"{MODULE}:Grandchild"])
        out = capsys.readouterr().out
        assert "Multiple Inheritance: 1" in out
        assert f"{_q('Child1')}, {_q('Child2')}" in out
        assert "Next:" in out

    def test_detect_nothing_found(self, sample, capsys):
        main(["detect", "exported", f"{MODULE}:Grandchild"])
        assert "No exported methods" in capsys.readouterr().out

    def test_bad_target_exits(self, sample, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["report", f"{MODULE}:Missing"])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_width_exits(self, sample, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["report", f"{MODULE}:Grandchild", "--width", "10"])
        assert excinfo.value.code == 1
        assert "width" in capsys.readouterr().err

    def test_zero_width_is_rejected_not_defaulted(self, sample, capsys):
        main(["config", "set", "report_width", "80"])
        capsys.readouterr()
        with pytest.raises(SystemExit) as excinfo:
            main(["report", f"{MODULE}:Grandchild", "--width", "0"])
        assert excinfo.value.code == 1
        assert "width" in capsys.readouterr().err

    def test_bad_import_exits(self, sample, capsys):
        with pytest.raises(SystemExit):
            main(["--import", "no_such_module_for_mrosniff", "paths", f"{MODULE}:Grandchild"])
        assert "Cannot import" in capsys.readouterr().err


class TestGraphCommand:
    def test_namespace_roots(self, sample, capsys):
        main(["--import", MODULE, "graph", "--namespace", f"^{MODULE}\\."])
        captured = capsys.readouterr()
        lines = captured.out.splitlines()
        assert f"{_q('Grandchild')} -> {_q('Child1')}" in lines
        assert f"{_q('Child2')} -> {_q('Abstract')}" in lines
        assert "1 root classes" in captured.err

    def test_png(self, sample, tmp_path, capsys):
        pytest.importorskip("PIL")
        out = tmp_path / "hierarchy.png"
        main(["--import", MODULE, "graph", "--namespace", f"^{MODULE}\\.", "--png", str(out)])
        assert out.exists()
        assert "Diagram" in capsys.readouterr().err

    def test_json(self, sample, capsys):
        main(["--import", MODULE, "graph", "--namespace", f"^{MODULE}\\.", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["nodes"][0] == _q("Grandchild")
        assert payload["attributes"] == {"flow": "up"}


# ===========================================================================
# main — config command
# ===========================================================================


class TestConfigCommand:
    def test_set_and_show(self, sample, capsys):
        main(["config", "set", "report_width", "90"])
        assert config_mod.load_config(sample)["report_width"] == 90
        main(["config", "show"])
        out = capsys.readouterr().out
        assert "report_width" in out
        assert "90" in out

    def test_unset(self, sample, capsys):
        main(["config", "set", "universal", "yes"])
        main(["config", "unset", "universal"])
        assert config_mod.load_config(sample)["universal"] is False

    def test_unknown_key_exits(self, sample, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["config", "set", "nope", "1"])
        assert excinfo.value.code == 1
        assert "Unknown config key" in capsys.readouterr().err

    def test_config_width_used_by_report(self, sample, capsys):
        main(["config", "set", "report_width", "40"])
        capsys.readouterr()
        main(["report", f"{MODULE}:Grandchild"])
        out = capsys.readouterr().out
        assert "─" * 40 in out
        assert "─" * 41 not in out

    def test_configured_modules_imported(self, sample, capsys):
        main(["config", "set", "modules", MODULE])
        main(["config", "set", "namespace", f"^{MODULE}\\."])
        capsys.readouterr()
        main(["graph", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert _q("Abstract") in payload["nodes"]

    def test_config_ignore_overridden_by_flag(self, sample, capsys):
        main(["config", "set", "ignore", "Child2$"])
        capsys.readouterr()
        main(["paths", f"{MODULE}:Grandchild", "--ignore", "", "--json"])
        assert len(json.loads(capsys.readouterr().out)) == 2
