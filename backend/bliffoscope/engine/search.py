"""Exhaustive target search over every anchor position of the scan.

Positions are visited row by row (y), then column by column (x), and at
each position every target is tried in catalog order. Both loop bounds are
inclusive of the scan size, so one column and one row past the last
on-pixel are still tried. The emitted record order follows this nesting.

Trials never mutate the catalog's targets: each pattern's decoded pixels are
offset arithmetically against a dense raster of the scan.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from bliffoscope.engine.catalog import Target, TargetCatalog
from bliffoscope.engine.config import DEFAULT_THRESHOLD, SearchConfig, validate_threshold
from bliffoscope.engine.errors import SearchCancelled
from bliffoscope.engine.image import Pixel, PositionedView, SparseImage, positioned_view
from bliffoscope.engine.similarity import match_ratio_grid

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]

# (target index, x, y, ratio)
_Hit = tuple[int, int, int, float]


@dataclass(frozen=True)
class MatchRecord:
    """A target found at an anchor position with a ratio above threshold."""

    target: Target
    x: int
    y: int
    match_ratio: float
    color: Color

    @property
    def target_name(self) -> str:
        return self.target.name

    @property
    def position(self) -> Pixel:
        return (self.x, self.y)

    def positioned_pattern(self) -> PositionedView:
        """The target's pixels as placed on the scan for this match."""
        return positioned_view(self.target.pattern, self.x, self.y)


class SearchResult(NamedTuple):
    matches: tuple[MatchRecord, ...]
    elapsed_ms: float

    @property
    def count(self) -> int:
        return len(self.matches)


def _search_row(
    scan_grid: NDArray[np.bool_],
    origins: list[NDArray[np.int64]],
    y: int,
    width: int,
    threshold: float,
) -> list[_Hit]:
    found: list[_Hit] = []
    for x in range(width + 1):
        for i, origin in enumerate(origins):
            ratio = match_ratio_grid(scan_grid, origin, x, y)
            if ratio >= threshold:
                found.append((i, x, y, ratio))
    return found


class SearchEngine:
    """Runs the brute-force search and stamps each hit with a display color."""

    def __init__(
        self,
        config: SearchConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.rng = rng or random.Random()

    def load_scan(self, text: str | bytes, require_pixels: bool = False) -> SparseImage:
        """Decode scan text using the configured marker."""
        return SparseImage.from_text(text, self.config.marker, require_pixels)

    def load_target(self, name: str, text: str | bytes) -> Target:
        """Build a target from pattern text using the configured marker."""
        return Target.from_text(name, text, self.config.marker)

    def find_targets(
        self,
        scan: SparseImage,
        catalog: TargetCatalog,
        threshold: float | None = None,
        *,
        should_cancel: Callable[[], bool] | None = None,
        progress_callback: Callable[[float], None] | None = None,
    ) -> SearchResult:
        """Try every target at every anchor (x, y) in [0, W] × [0, H].

        ``should_cancel`` is polled before each row; when it returns True the
        search stops with ``SearchCancelled``. ``progress_callback`` receives
        the fraction of rows completed after each row.
        """
        threshold = validate_threshold(
            self.config.threshold if threshold is None else threshold
        )
        start = time.perf_counter()
        targets = catalog.all()

        if not targets or scan.is_empty:
            elapsed = (time.perf_counter() - start) * 1000
            logger.info(
                "Search skipped: %d targets, %d scan pixels", len(targets), len(scan)
            )
            return SearchResult((), elapsed)

        width, height = scan.size()
        scan_grid = scan.to_grid()
        origins = [t.pattern.origin_pixels() for t in targets]
        n_rows = height + 1

        def run_row(y: int) -> list[_Hit]:
            if should_cancel is not None and should_cancel():
                raise SearchCancelled(y)
            return _search_row(scan_grid, origins, y, width, threshold)

        hits: list[_Hit] = []
        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                for y, row_hits in enumerate(pool.map(run_row, range(n_rows))):
                    hits.extend(row_hits)
                    if progress_callback is not None:
                        progress_callback((y + 1) / n_rows)
        else:
            for y in range(n_rows):
                hits.extend(run_row(y))
                if progress_callback is not None:
                    progress_callback((y + 1) / n_rows)

        # Colors drawn in emission order so a seeded rng is reproducible
        # whatever the worker count.
        matches = tuple(
            MatchRecord(targets[i], x, y, ratio, self._random_color())
            for i, x, y, ratio in hits
        )

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Search complete: %d targets × %d positions, %d matches in %.0fms",
            len(targets),
            (width + 1) * n_rows,
            len(matches),
            elapsed,
        )
        return SearchResult(matches, elapsed)

    def _random_color(self) -> Color:
        lo, hi = self.config.color_min, self.config.color_max
        return (
            self.rng.randrange(lo, hi),
            self.rng.randrange(lo, hi),
            self.rng.randrange(lo, hi),
        )


def find_targets(
    scan: SparseImage,
    catalog: TargetCatalog,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    rng: random.Random | None = None,
    workers: int = 1,
    should_cancel: Callable[[], bool] | None = None,
    progress_callback: Callable[[float], None] | None = None,
) -> SearchResult:
    """One-shot search with a fresh engine."""
    engine = SearchEngine(SearchConfig(threshold=threshold, workers=workers), rng=rng)
    return engine.find_targets(
        scan,
        catalog,
        should_cancel=should_cancel,
        progress_callback=progress_callback,
    )
