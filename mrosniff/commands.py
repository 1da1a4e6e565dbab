"""Command handlers for the CLI. Each takes the parsed argparse namespace."""

from __future__ import annotations

import importlib
import json
import logging
import sys
from pathlib import Path

from . import config as config_mod
from .errors import InvalidArgument
from .registry import DETECTORS
from .session import HierarchySniff, combine_sniff_graphs, sniffs_from_namespace
from .utils import PROJECT_ROOT, c, log, print_error, print_table
from .views import render_edges

logger = logging.getLogger(__name__)


def _import_modules(names: list[str]) -> None:
    root = str(PROJECT_ROOT)
    if root not in sys.path:
        sys.path.insert(0, root)
    for name in names:
        try:
            importlib.import_module(name)
        except ImportError as exc:
            raise InvalidArgument(f"Cannot import module {name!r}: {exc}") from exc
        logger.debug("Imported %s", name)


def _prepare(args) -> dict:
    """Load config and import every configured and requested module."""
    config = config_mod.load_config()
    _import_modules([*config["modules"], *getattr(args, "imports", [])])
    return config


def _options(args, config: dict) -> dict:
    ignore = args.ignore if args.ignore is not None else config["ignore"]
    universal = args.universal if args.universal is not None else config["universal"]
    return {"ignore": ignore or None, "universal": bool(universal)}


def _sniff(args) -> HierarchySniff:
    config = _prepare(args)
    width = getattr(args, "width", None)
    if width is None:
        width = config["report_width"]
    return HierarchySniff(args.target, width=width, **_options(args, config))


def _dump(payload) -> None:
    print(json.dumps(payload, indent=2))


def cmd_report(args):
    """Print the full smell report for one class."""
    sniff = _sniff(args)
    if args.json:
        _dump(sniff.as_dict())
        return
    report = sniff.report()
    if not report:
        print(c(f"No smells found for {sniff.target_class}", "green"))
        return
    print(report, end="")


def cmd_tree(args):
    """Print the inheritance tree rooted at the class."""
    sniff = _sniff(args)
    if args.json:
        _dump(sniff.tree().as_dict())
        return
    print(sniff.to_string())


def cmd_paths(args):
    """Print every method search path."""
    sniff = _sniff(args)
    paths = sniff.paths()
    if args.json:
        _dump(paths)
        return
    for i, path in enumerate(paths, 1):
        print(f"Path #{i}: {' -> '.join(path)}")


def _detector_rows(name: str, sniff: HierarchySniff) -> list[list[str]]:
    if name == "overridden":
        return [[m, ", ".join(classes)] for m, classes in sorted(sniff.overridden().items())]
    if name == "unreachable":
        found = sorted(sniff.unreachable(), key=lambda u: (u.method, u.cls))
        return [[u.method, u.cls] for u in found]
    if name == "multiple_inheritance":
        return [[cls, ", ".join(sniff.parents(cls))] for cls in sniff.multiple_inheritance()]
    return [
        [cls, method, origin]
        for cls, methods in sorted(sniff.exported().items())
        for method, origin in sorted(methods.items())
    ]


def cmd_detect(args):
    """Run one detector and print its findings as a table."""
    sniff = _sniff(args)
    meta = DETECTORS[args.detector]
    rows = _detector_rows(args.detector, sniff)
    if args.json:
        _dump({"detector": meta.name, "target": sniff.target_class,
               "count": len(rows), "entries": rows})
        return
    if not rows:
        print(c(f"No {meta.display.lower()} in {sniff.target_class}", "green"))
        return
    print(c(f"\n{meta.display}: {len(rows)}\n", "bold"))
    print_table(list(meta.columns), rows)
    print(c(f"\n  Next: {meta.guidance}", "dim"))


def cmd_graph(args):
    """Print the combined graph of every root class in a namespace."""
    config = _prepare(args)
    namespace = args.namespace if args.namespace is not None else config["namespace"]
    sniffs = sniffs_from_namespace(namespace, **_options(args, config))
    log(f"  Sniffed {len(sniffs)} root classes matching {namespace!r}")
    graph = combine_sniff_graphs(*sniffs)
    if getattr(args, "png", None):
        _write_diagram(graph, args.png, {u.cls for s in sniffs for u in s.unreachable()})
    if args.json:
        _dump(graph.as_dict())
        return
    print(render_edges(graph))


def _write_diagram(graph, path: str, highlight: set[str]) -> None:
    out = Path(path)
    if not out.is_absolute():
        out = PROJECT_ROOT / out
    try:
        from .diagram import render_diagram

        render_diagram(graph, out, highlight=highlight)
    except ImportError:
        print_error("Rendering a diagram requires Pillow (pip install pillow)")
        sys.exit(1)
    except OSError as exc:
        print_error(f"Could not write diagram to {out}: {exc}")
        sys.exit(1)
    log(f"  Diagram → {out}")


def cmd_config(args):
    """Handle config subcommands: show, set, unset."""
    action = getattr(args, "config_action", None)
    if action == "set":
        _config_set(args)
    elif action == "unset":
        _config_unset(args)
    else:
        _config_show()


def _config_show():
    config = config_mod.load_config()
    print(c("\n  mrosniff configuration\n", "bold"))
    for key, schema in config_mod.CONFIG_SCHEMA.items():
        value = config.get(key, schema.default)
        if isinstance(value, list):
            display = ", ".join(value) if value else "(empty)"
        else:
            display = str(value) if value != "" else "(none)"
        default_tag = c(" (default)", "dim") if value == schema.default else ""
        print(f"  {key:<15} {display}{default_tag}")
        print(c(f"  {'':15} {schema.description}", "dim"))
    print()


def _config_set(args):
    config = config_mod.load_config()
    try:
        config_mod.set_config_value(config, args.key, args.value)
    except (KeyError, ValueError) as e:
        print_error(str(e))
        sys.exit(1)
    config_mod.save_config(config)
    print(c(f"  Set {args.key} = {config[args.key]}", "green"))


def _config_unset(args):
    config = config_mod.load_config()
    try:
        config_mod.unset_config_value(config, args.key)
    except KeyError as e:
        print_error(str(e))
        sys.exit(1)
    config_mod.save_config(config)
    print(c(f"  Reset {args.key} to default ({config[args.key]})", "green"))
