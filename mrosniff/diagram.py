"""Hierarchy diagram image generator — renders a graph view as a PNG.

Parents sit above their children so edges flow upward.  Pillow is imported
lazily; everything up to the drawing step is plain Python.
"""

from __future__ import annotations

from pathlib import Path

from .views import GraphView

# Render at 2x for retina/high-DPI crispness
_SCALE = 2

BG = (247, 240, 228)           # warm cream
BOX = (240, 232, 217)          # node fill
BOX_FLAGGED = (226, 196, 180)  # node fill for highlighted classes
BORDER = (192, 176, 152)       # tan border
EDGE = (148, 112, 82)          # warm brown accent
TEXT = (58, 48, 38)            # warm dark brown


def _s(v: int | float) -> int:
    """Scale a layout value."""
    return int(v * _SCALE)


def levels(graph: GraphView) -> dict[str, int]:
    """Row of every node: 0 for classes without parents, else one below the lowest parent."""
    parents: dict[str, list[str]] = {name: [] for name in graph.nodes}
    for child, parent in graph.edges:
        parents.setdefault(child, []).append(parent)
        parents.setdefault(parent, [])

    result: dict[str, int] = {}
    for start in parents:
        stack = [start]
        while stack:
            name = stack[-1]
            if name in result:
                stack.pop()
                continue
            pending = [p for p in parents[name] if p not in result]
            if pending:
                stack.extend(pending)
                continue
            result[name] = 1 + max((result[p] for p in parents[name]), default=-1)
            stack.pop()
    return result


def layout(graph: GraphView) -> list[list[str]]:
    """Nodes grouped into rows, top row first, first-seen order within a row."""
    rows: dict[int, list[str]] = {}
    for name, level in levels(graph).items():
        rows.setdefault(level, []).append(name)
    order = {name: i for i, name in enumerate(graph.nodes)}
    return [sorted(rows[level], key=lambda n: order.get(n, len(order))) for level in sorted(rows)]


def _load_font(size: int):
    """Load a monospace font with cross-platform fallback."""
    from PIL import ImageFont

    for path in (
        "/System/Library/Fonts/SFNSMono.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    ):
        try:
            return ImageFont.truetype(path, size * _SCALE)
        except OSError:
            continue
    return ImageFont.load_default()


def render_diagram(graph: GraphView, output_path: str | Path, *,
                   highlight: set[str] | frozenset[str] = frozenset()) -> Path:
    """Render ``graph`` to a PNG at ``output_path``. Returns the output path."""
    from PIL import Image, ImageDraw

    output_path = Path(output_path)
    rows = layout(graph)
    font = _load_font(11)

    measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    pad_x, pad_y = _s(10), _s(6)
    gap_x, gap_y = _s(24), _s(40)
    margin = _s(20)
    box_h = _s(14) + 2 * pad_y

    widths = {
        name: int(measure.textlength(name, font=font)) + 2 * pad_x
        for row in rows for name in row
    }
    row_widths = [sum(widths[n] for n in row) + gap_x * (len(row) - 1) for row in rows]
    W = max(row_widths, default=0) + 2 * margin
    H = len(rows) * box_h + max(len(rows) - 1, 0) * gap_y + 2 * margin

    img = Image.new("RGB", (max(W, _s(40)), max(H, _s(40))), BG)
    draw = ImageDraw.Draw(img)

    boxes: dict[str, tuple[int, int, int, int]] = {}
    for r, row in enumerate(rows):
        x = margin + (W - 2 * margin - row_widths[r]) // 2
        y = margin + r * (box_h + gap_y)
        for name in row:
            boxes[name] = (x, y, x + widths[name], y + box_h)
            x += widths[name] + gap_x

    for child, parent in graph.edges:
        cx1, cy1, cx2, _ = boxes[child]
        px1, _, px2, py2 = boxes[parent]
        start = ((cx1 + cx2) // 2, cy1)
        end = ((px1 + px2) // 2, py2)
        draw.line([start, end], fill=EDGE, width=_s(1))
        tip = _s(4)
        draw.polygon([end, (end[0] - tip, end[1] + tip), (end[0] + tip, end[1] + tip)], fill=EDGE)

    for name, (x1, y1, x2, y2) in boxes.items():
        fill = BOX_FLAGGED if name in highlight else BOX
        draw.rounded_rectangle((x1, y1, x2, y2), radius=_s(4), fill=fill, outline=BORDER, width=1)
        bbox = draw.textbbox((0, 0), name, font=font)
        text_y = y1 + (box_h - (bbox[3] - bbox[1])) // 2 - bbox[1]
        draw.text((x1 + pad_x, text_y), name, fill=TEXT, font=font)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(str(output_path), "PNG", optimize=True)
    return output_path
