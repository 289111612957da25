"""Renderers for search results — text list, ASCII board and PNG canvas.

Pick one with ``RendererKind`` and call ``render``. Boards cover
(W + 1) × (H + 1) cells so the last scan row and column are drawn.
"""

from __future__ import annotations

import enum
import io
import logging

import numpy as np
from PIL import Image, ImageDraw

from bliffoscope.engine.image import SparseImage
from bliffoscope.engine.search import SearchResult
from bliffoscope.utils.rasterizer import grid_to_text

logger = logging.getLogger(__name__)

# Canvas cell edge in pixels
_CELL_PX = 5
# CSS "gray"
_SCAN_RGBA = (128, 128, 128, 255)
# Match overlays are half transparent so the scan shows through
_MATCH_ALPHA = 128

_SCAN_CHAR = "+"
_OVERLAP_CHAR = "#"
_MATCH_SYMBOLS = "abcdefghijklmnopqrstuvwxyz"


class RendererKind(str, enum.Enum):
    LIST = "list"
    GRID = "grid"
    CANVAS = "canvas"


def render(kind: RendererKind | str, scan: SparseImage, result: SearchResult) -> str | bytes:
    """Render ``result`` over ``scan``. CANVAS returns PNG bytes, the others text."""
    kind = RendererKind(kind)
    if kind is RendererKind.LIST:
        return render_list(result)
    if kind is RendererKind.GRID:
        return render_grid(scan, result)
    return render_canvas(scan, result)


def format_match_line(name: str, x: int, y: int, ratio: float) -> str:
    return f"{name} @ {x}.{y} - {ratio * 100:.2f}% ACC"


def render_list(result: SearchResult) -> str:
    lines = [
        f"Targets found: {result.count}",
        f"Execution time: {result.elapsed_ms / 1000:.3f}s",
    ]
    lines.extend(
        format_match_line(m.target_name, m.x, m.y, m.match_ratio) for m in result.matches
    )
    return "\n".join(lines)


def render_grid(scan: SparseImage, result: SearchResult) -> str:
    """ASCII board: scan pixels as '+', each match with its own letter.

    A match pixel that lands on a scan pixel is upper case, one over empty
    space lower case. Cells claimed by more than one match are '#'.
    """
    width, height = scan.size()
    rows, cols = height + 1, width + 1
    board = np.full((rows, cols), " ", dtype="<U1")
    claimed = np.zeros((rows, cols), dtype=np.bool_)

    for x, y in scan:
        board[y, x] = _SCAN_CHAR

    for i, record in enumerate(result.matches):
        symbol = _MATCH_SYMBOLS[i % len(_MATCH_SYMBOLS)]
        for x, y in record.positioned_pattern():
            if x >= cols or y >= rows:
                continue
            if claimed[y, x]:
                board[y, x] = _OVERLAP_CHAR
            else:
                board[y, x] = symbol.upper() if scan.index_contains((x, y)) else symbol
                claimed[y, x] = True

    return grid_to_text(board)


def render_canvas(scan: SparseImage, result: SearchResult) -> bytes:
    """PNG with gray scan pixels and each match in its color at half alpha."""
    width, height = scan.size()
    cols, rows = width + 1, height + 1
    img = Image.new("RGBA", (cols * _CELL_PX, rows * _CELL_PX), (0, 0, 0, 0))

    draw = ImageDraw.Draw(img)
    for x, y in scan:
        draw.rectangle(_cell_box(x, y), fill=_SCAN_RGBA)

    for record in result.matches:
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        layer_draw = ImageDraw.Draw(layer)
        fill = (*record.color, _MATCH_ALPHA)
        for x, y in record.positioned_pattern():
            if x < cols and y < rows:
                layer_draw.rectangle(_cell_box(x, y), fill=fill)
        img = Image.alpha_composite(img, layer)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    logger.debug("Canvas rendered: %dx%d px, %d matches", img.width, img.height, result.count)
    return buf.getvalue()


def _cell_box(x: int, y: int) -> tuple[int, int, int, int]:
    left, top = x * _CELL_PX, y * _CELL_PX
    return (left, top, left + _CELL_PX - 1, top + _CELL_PX - 1)
