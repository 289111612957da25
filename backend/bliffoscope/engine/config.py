"""Search configuration — tunables for the exhaustive target search."""

from __future__ import annotations

from dataclasses import dataclass

# Below 0.65 the search reports too many spurious hits on noisy scans.
DEFAULT_THRESHOLD = 0.65

DEFAULT_MARKER = "+"


@dataclass
class SearchConfig:
    """Controls matching threshold, input decoding and display colors."""

    # Minimum match ratio for a trial to be recorded
    threshold: float = DEFAULT_THRESHOLD

    # Character that marks an "on" pixel in decoded text
    marker: str = DEFAULT_MARKER

    # Display color channel range [color_min, color_max).
    # 0 is too dark and 255 too light to read over the scan.
    color_min: int = 30
    color_max: int = 230

    # Row-level worker threads (1 = serial)
    workers: int = 1

    def __post_init__(self) -> None:
        validate_threshold(self.threshold)
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if not 0 <= self.color_min < self.color_max <= 256:
            raise ValueError(
                f"Invalid color range [{self.color_min}, {self.color_max})"
            )
        if len(self.marker) != 1 or self.marker == "\n":
            raise ValueError(f"marker must be a single non-newline character, got {self.marker!r}")


def validate_threshold(threshold: float) -> float:
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")
    return threshold
