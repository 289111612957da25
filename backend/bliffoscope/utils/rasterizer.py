"""Rasterization utilities — sparse pixels to dense grid, grid to text.

No engine imports.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray


def pixels_to_grid(
    pixels: Iterable[tuple[int, int]] | NDArray[np.int64],
    width: int,
    height: int,
) -> NDArray[np.bool_]:
    """Rasterize (x, y) pixels onto a height×width boolean grid.

    Args:
        pixels: Nx2 array or iterable of (x, y) coordinates.
        width: Number of columns.
        height: Number of rows.

    Returns:
        Grid indexed [y, x] where True = on. Pixels outside the grid are dropped.
    """
    grid = np.zeros((height, width), dtype=np.bool_)
    pts = np.asarray(list(pixels) if not isinstance(pixels, np.ndarray) else pixels)

    if len(pts) == 0:
        return grid

    pts = pts.reshape(-1, 2).astype(np.int64)
    cols, rows = pts[:, 0], pts[:, 1]
    inside = (cols >= 0) & (cols < width) & (rows >= 0) & (rows < height)
    grid[rows[inside], cols[inside]] = True
    return grid


def grid_to_text(
    grid: NDArray[np.generic],
    filled: str = "+",
    empty: str = " ",
    sep: str = "",
) -> str:
    """Convert a grid to text. Cells of a str-typed grid are written as-is."""
    rows = []
    for row in grid:
        if grid.dtype.kind == "U":
            rows.append(sep.join(str(cell) for cell in row))
        else:
            rows.append(sep.join(filled if cell else empty for cell in row))
    return "\n".join(rows)
