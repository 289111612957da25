"""SparseImage — the set of "on" pixels of a scan or target pattern.

The pixel tuple and the membership index are kept side by side: the tuple
preserves decode order for drawing, the index gives O(1) lookups for the
similarity metric. Every move of the pixels rebuilds the index before the
image can be queried again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from bliffoscope.engine.config import DEFAULT_MARKER
from bliffoscope.engine.errors import DecodeError
from bliffoscope.utils.rasterizer import pixels_to_grid

logger = logging.getLogger(__name__)

Pixel = tuple[int, int]

_ROW_SEPARATOR = "\n"


def decode_pixels(text: str | bytes, marker: str = DEFAULT_MARKER) -> list[Pixel]:
    """Decode a character grid into on-pixel coordinates, row-major order.

    Rows are split on newlines and may have different lengths. Only the
    marker character is on; spaces, carriage returns and any other
    character are off.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Image data is not valid UTF-8: {e}") from e
    if not isinstance(text, str):
        raise DecodeError(f"Image data must be str or bytes, got {type(text).__name__}")
    if len(marker) != 1 or marker == _ROW_SEPARATOR:
        raise DecodeError(f"Marker must be a single non-newline character, got {marker!r}")

    pixels: list[Pixel] = []
    for y, row in enumerate(text.split(_ROW_SEPARATOR)):
        pixels.extend((x, y) for x, char in enumerate(row) if char == marker)
    return pixels


class SparseImage:
    """On-pixels of a binary image with absolute translation support."""

    def __init__(self, pixels: Iterable[Pixel] = ()) -> None:
        origin: list[Pixel] = []
        seen: set[Pixel] = set()
        for x, y in pixels:
            px = (int(x), int(y))
            if px[0] < 0 or px[1] < 0:
                raise ValueError(f"Pixel coordinates must be non-negative, got {px}")
            if px not in seen:
                seen.add(px)
                origin.append(px)
        self._origin: tuple[Pixel, ...] = tuple(origin)
        self._pixels: tuple[Pixel, ...] = self._origin
        self._offset: Pixel = (0, 0)
        self._index: frozenset[Pixel] = frozenset()
        self._build_index()

    @classmethod
    def from_text(
        cls,
        text: str | bytes,
        marker: str = DEFAULT_MARKER,
        require_pixels: bool = False,
    ) -> SparseImage:
        """Build an image from a newline-delimited character grid.

        The empty string is a valid empty image. With ``require_pixels``
        an image without any marker character raises ``DecodeError``.
        """
        pixels = decode_pixels(text, marker)
        if require_pixels and not pixels:
            raise DecodeError(f"Image data contains no {marker!r} pixels")
        image = cls(pixels)
        logger.debug("Decoded image: %d pixels, size %s", len(image), image.size())
        return image

    def _build_index(self) -> None:
        self._index = frozenset(self._pixels)

    # ── Queries ──

    @property
    def pixels(self) -> frozenset[Pixel]:
        """Current on-pixels as an immutable set."""
        return self._index

    @property
    def offset(self) -> Pixel:
        return self._offset

    @property
    def is_empty(self) -> bool:
        return not self._pixels

    def __len__(self) -> int:
        return len(self._pixels)

    def __iter__(self):
        return iter(self._pixels)

    def __repr__(self) -> str:
        return f"SparseImage(pixels={len(self)}, size={self.size()}, offset={self._offset})"

    def index_contains(self, key: Pixel) -> bool:
        return key in self._index

    def size(self) -> Pixel:
        """(max_x, max_y) over the current on-pixels; (0, 0) when empty."""
        if not self._pixels:
            return (0, 0)
        return (
            max(x for x, _ in self._pixels),
            max(y for _, y in self._pixels),
        )

    def origin_pixels(self) -> NDArray[np.int64]:
        """Decoded (untranslated) coordinates as an Nx2 int array."""
        if not self._origin:
            return np.empty((0, 2), dtype=np.int64)
        return np.array(self._origin, dtype=np.int64)

    def to_grid(self) -> NDArray[np.bool_]:
        """Dense boolean raster of the current pixels, indexed [y, x]."""
        width, height = self.size()
        return pixels_to_grid(self._pixels, width + 1, height + 1)

    # ── Mutation ──

    def translate_to(self, x: int, y: int) -> None:
        """Move the image so its decoded origin sits at (x, y).

        Translation is absolute: calling twice with the same anchor is a
        no-op and (0, 0) restores the decoded position.
        """
        if x < 0 or y < 0:
            raise ValueError(f"Translation anchor must be non-negative, got ({x}, {y})")
        dx = x - self._offset[0]
        dy = y - self._offset[1]
        self._pixels = tuple((px + dx, py + dy) for px, py in self._pixels)
        self._offset = (x, y)
        self._build_index()

    def copy(self) -> SparseImage:
        """Independent clone at the same offset."""
        clone = SparseImage(self._origin)
        if self._offset != (0, 0):
            clone.translate_to(*self._offset)
        return clone


@dataclass(frozen=True)
class PositionedView:
    """Immutable snapshot of an image's decoded pixels anchored at a point."""

    anchor: Pixel
    pixels: frozenset[Pixel]

    def __len__(self) -> int:
        return len(self.pixels)

    def __iter__(self):
        return iter(self.pixels)

    def index_contains(self, key: Pixel) -> bool:
        return key in self.pixels

    def size(self) -> Pixel:
        if not self.pixels:
            return (0, 0)
        return (max(x for x, _ in self.pixels), max(y for _, y in self.pixels))


def positioned_view(image: SparseImage, x: int, y: int) -> PositionedView:
    """Return ``image`` anchored at (x, y) without touching its state."""
    if x < 0 or y < 0:
        raise ValueError(f"Translation anchor must be non-negative, got ({x}, {y})")
    return PositionedView(
        anchor=(x, y),
        pixels=frozenset((px + x, py + y) for px, py in image._origin),
    )
