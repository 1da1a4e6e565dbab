"""Shared utilities: paths, colors, table formatting, atomic writes."""

from __future__ import annotations

import os
import sys
import tempfile
import textwrap
from pathlib import Path

PROJECT_ROOT = Path(os.environ.get("MROSNIFF_ROOT", Path.cwd())).resolve()

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def c(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def log(msg: str):
    """Print a dim status message to stderr."""
    print(c(msg, "dim"), file=sys.stderr)


def print_error(message: str) -> None:
    """Print a user-facing error message to stderr in a consistent format."""
    print(c(f"  Error: {message}", "red"), file=sys.stderr)


# ── Tables ─────────────────────────────────────────────────


def _cell_lines(value: object, width: int) -> list[str]:
    lines: list[str] = []
    for part in str(value).split("\n"):
        lines.extend(textwrap.wrap(part, width) or [""])
    return lines


def format_table(headers: list[str], rows: list[list[str]],
                 widths: list[int] | None = None) -> str:
    """Render a plain-text table. Cells may hold several lines (``\\n``).

    Lines longer than their column are wrapped.
    """
    if not widths:
        widths = [
            max([len(str(h)), *(len(line) for r in rows for line in str(r[i]).split("\n"))])
            for i, h in enumerate(headers)
        ]
    out = ["  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip()]
    out.append("─" * (sum(widths) + 2 * (len(widths) - 1)))
    for row in rows:
        cells = [_cell_lines(v, w) for v, w in zip(row, widths)]
        height = max(len(cell) for cell in cells)
        for i in range(height):
            line = "  ".join(
                (cell[i] if i < len(cell) else "").ljust(w) for cell, w in zip(cells, widths)
            )
            out.append(line.rstrip())
    return "\n".join(out) + "\n"


def print_table(headers: list[str], rows: list[list[str]], widths: list[int] | None = None):
    if not rows:
        return
    header, rule, *body = format_table(headers, rows, widths).rstrip("\n").split("\n")
    print(c(header, "bold"))
    print(c(rule, "dim"))
    for line in body:
        print(line)


# ── Atomic file writes ─────────────────────────────────────


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
