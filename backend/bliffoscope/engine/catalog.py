"""Targets and the ordered catalog searched by the engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from bliffoscope.engine.config import DEFAULT_MARKER
from bliffoscope.engine.errors import DegenerateTargetError
from bliffoscope.engine.image import SparseImage

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SLIME_TORPEDO = "\n".join([
    "     +     ",
    "     +     ",
    "    +++    ",
    "  +++++++  ",
    "  ++   ++  ",
    " ++  +  ++ ",
    " ++ +++ ++ ",
    " ++  +  ++ ",
    "  ++   ++  ",
    "  +++++++  ",
    "    +++    ",
])

STAR_SHIP = "\n".join([
    "              ",
    "  ++++++++++  ",
    " ++        ++ ",
    "  ++++++++++  ",
    "      ++      ",
    "      ++      ",
    "      ++      ",
    "  ++++++++++  ",
    " ++        ++ ",
    "  ++++++++++  ",
    "              ",
    "",
])


class Target:
    """A named pattern. Each target owns its own SparseImage."""

    def __init__(self, name: str, pattern: SparseImage) -> None:
        if pattern.is_empty:
            raise DegenerateTargetError(f"Target {name!r} has no on-pixels")
        self.name = name
        self.pattern = pattern.copy()

    @classmethod
    def from_text(cls, name: str, text: str | bytes, marker: str = DEFAULT_MARKER) -> Target:
        return cls(name, SparseImage.from_text(text, marker))

    def __repr__(self) -> str:
        return f"Target(name={self.name!r}, pixels={len(self.pattern)})"


class TargetCatalog:
    """Targets in insertion order. Duplicate names are kept as separate entries."""

    def __init__(self, targets: Iterable[Target] = ()) -> None:
        self._targets: list[Target] = []
        self.extend(targets)

    def add(self, target: Target) -> None:
        self._targets.append(target)
        logger.debug("Catalog: added %r (%d total)", target.name, len(self._targets))

    def extend(self, targets: Iterable[Target]) -> None:
        for target in targets:
            self.add(target)

    def all(self) -> tuple[Target, ...]:
        return tuple(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(tuple(self._targets))


def builtin_catalog() -> TargetCatalog:
    """Fresh catalog with the stock Slime Torpedo and Star Ship targets."""
    return TargetCatalog([
        Target.from_text("Slime Torpedo", SLIME_TORPEDO),
        Target.from_text("Star Ship", STAR_SHIP),
    ])


def load_demo_scan() -> str:
    """Text of the bundled 100×100 demo scan."""
    with open(_DATA_DIR / "demo_scan.txt", encoding="utf-8") as f:
        return f.read()
