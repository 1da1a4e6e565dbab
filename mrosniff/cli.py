"""CLI entry point: argparse, subcommand routing, shared helpers."""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import SniffError
from .registry import detector_names
from .utils import print_error

USAGE_EXAMPLES = """
targets:
  TARGET is an importable class: package.module:Outer.Inner or package.module.Name

examples:
  mrosniff report mypkg.models:Platypus
  mrosniff report mypkg.models:Platypus --ignore '^django\\.' --width 100
  mrosniff tree mypkg.models:Platypus --universal
  mrosniff paths mypkg.models:Platypus
  mrosniff detect unreachable mypkg.models:Platypus --json
  mrosniff --import mypkg.models graph --namespace '^mypkg\\.'
  mrosniff --import mypkg.models graph --png hierarchy.png
  mrosniff config set modules mypkg.models
"""


def _add_target_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("target", help="Class to sniff (module:Class or module.Class)")
    p.add_argument("--ignore", type=str, default=None,
                   help="Regex of class names to prune (with their ancestors)")
    p.add_argument("--universal", action="store_true", default=None,
                   help="Include the universal root class (object)")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mrosniff",
        description="mrosniff — class hierarchy smell detector",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log traversal details to stderr")
    parser.add_argument("--import", dest="imports", action="append", default=[],
                        metavar="MODULE", help="Import a module before running (repeatable)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_report = sub.add_parser("report", help="Full smell report for one class")
    _add_target_args(p_report)
    p_report.add_argument("--width", type=int, default=None, help="Report width (>= 40)")
    p_report.add_argument("--json", action="store_true")

    p_tree = sub.add_parser("tree", help="Inheritance tree rooted at the class")
    _add_target_args(p_tree)
    p_tree.add_argument("--json", action="store_true")

    p_paths = sub.add_parser("paths", help="Method search paths (left-most, depth-first)")
    _add_target_args(p_paths)
    p_paths.add_argument("--json", action="store_true")

    p_detect = sub.add_parser("detect", help="Run a single detector",
                              epilog=f"detectors: {', '.join(detector_names())}")
    p_detect.add_argument("detector", choices=detector_names())
    _add_target_args(p_detect)
    p_detect.add_argument("--json", action="store_true")

    p_graph = sub.add_parser("graph", help="Combined graph of every root class in a namespace")
    p_graph.add_argument("--namespace", type=str, default=None,
                         help="Regex selecting loaded classes (default from config)")
    p_graph.add_argument("--ignore", type=str, default=None)
    p_graph.add_argument("--universal", action="store_true", default=None)
    p_graph.add_argument("--json", action="store_true")
    p_graph.add_argument("--png", type=str, default=None, metavar="PATH",
                         help="Also render the graph as a PNG diagram (requires Pillow)")

    p_config = sub.add_parser("config", help="Show or change project config")
    config_sub = p_config.add_subparsers(dest="config_action", required=True)
    config_sub.add_parser("show", help="Print current config")
    p_set = config_sub.add_parser("set", help="Set a config value")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_unset = config_sub.add_parser("unset", help="Reset a config value to its default")
    p_unset.add_argument("key")

    return parser


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    pkg_logger = logging.getLogger("mrosniff")
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    # Lazy-load command handlers
    from .commands import (
        cmd_config,
        cmd_detect,
        cmd_graph,
        cmd_paths,
        cmd_report,
        cmd_tree,
    )

    commands = {
        "report": cmd_report,
        "tree": cmd_tree,
        "paths": cmd_paths,
        "detect": cmd_detect,
        "graph": cmd_graph,
        "config": cmd_config,
    }

    try:
        commands[args.command](args)
    except SniffError as exc:
        print_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
