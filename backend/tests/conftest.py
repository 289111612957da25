"""Shared test fixtures."""

from __future__ import annotations

import pytest

from bliffoscope.engine.catalog import Target, TargetCatalog, builtin_catalog, load_demo_scan
from bliffoscope.engine.image import SparseImage


# Scan from the two-dot scenario: on-pixels at (0, 0) and (2, 0)
TWO_DOT_SCAN = "+ +"

DOT = "+"

# Small L-shape used as both scan and pattern
ELL = "++\n+ "

PLUS_SIGN = " + \n+++\n + "

# Matches of the built-in targets on the bundled demo scan at threshold 0.65,
# in emission order: (name, x, y, ratio)
DEMO_MATCHES = [
    ("Slime Torpedo", 0, 1, 33 / 47),
    ("Star Ship", 55, 25, 39 / 54),
    ("Star Ship", 64, 33, 38 / 54),
    ("Slime Torpedo", 25, 79, 33 / 47),
]


@pytest.fixture
def two_dot_scan() -> SparseImage:
    return SparseImage.from_text(TWO_DOT_SCAN)


@pytest.fixture
def dot_catalog() -> TargetCatalog:
    return TargetCatalog([Target.from_text("dot", DOT)])


@pytest.fixture
def demo_scan() -> SparseImage:
    return SparseImage.from_text(load_demo_scan())


@pytest.fixture
def demo_catalog() -> TargetCatalog:
    return builtin_catalog()
