"""Match ratio between a positioned pattern and the scan.

The ratio only measures how much of the pattern is covered by the scan.
Scan pixels outside the pattern footprint are never penalised, so a dense
enough scan satisfies any threshold for any pattern. This is a known
limitation of the metric and is kept as-is.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from bliffoscope.engine.image import Pixel


class PixelIndex(Protocol):
    def index_contains(self, key: Pixel) -> bool: ...


class PixelSet(Protocol):
    def __iter__(self): ...

    def __len__(self) -> int: ...


def match_ratio(scan: PixelIndex, pattern: PixelSet) -> float:
    """Fraction of the pattern's on-pixels that are also on in the scan.

    An empty pattern has ratio 0.0.
    """
    total = len(pattern)
    if total == 0:
        return 0.0
    hits = sum(1 for px in pattern if scan.index_contains(px))
    return hits / total


def match_ratio_grid(
    scan_grid: NDArray[np.bool_],
    origin_pixels: NDArray[np.int64],
    x: int,
    y: int,
) -> float:
    """Same ratio as ``match_ratio`` computed by offset into a dense scan grid.

    ``origin_pixels`` are the pattern's decoded (x, y) coordinates; they are
    shifted by (x, y) and looked up in ``scan_grid[row, col]``. Pixels that
    land outside the grid count as misses.
    """
    total = len(origin_pixels)
    if total == 0:
        return 0.0
    cols = origin_pixels[:, 0] + x
    rows = origin_pixels[:, 1] + y
    height, width = scan_grid.shape
    inside = (cols < width) & (rows < height)
    hits = int(np.count_nonzero(scan_grid[rows[inside], cols[inside]]))
    return hits / total
