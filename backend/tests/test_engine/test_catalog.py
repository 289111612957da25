"""Tests for targets and the target catalog."""

from __future__ import annotations

import pytest

from bliffoscope.engine.catalog import (
    Target,
    TargetCatalog,
    builtin_catalog,
    load_demo_scan,
)
from bliffoscope.engine.errors import DegenerateTargetError
from bliffoscope.engine.image import SparseImage
from tests.conftest import DOT, ELL


def test_catalog_preserves_insertion_order():
    catalog = TargetCatalog()
    for name in ["c", "a", "b"]:
        catalog.add(Target.from_text(name, DOT))
    assert [t.name for t in catalog.all()] == ["c", "a", "b"]
    assert [t.name for t in catalog] == ["c", "a", "b"]
    assert len(catalog) == 3


def test_catalog_keeps_duplicate_names():
    catalog = TargetCatalog([Target.from_text("x", DOT), Target.from_text("x", ELL)])
    first, second = catalog.all()
    assert first.name == second.name == "x"
    assert first is not second
    assert len(second.pattern) == 3


def test_all_is_read_only_snapshot():
    catalog = TargetCatalog([Target.from_text("a", DOT)])
    view = catalog.all()
    assert isinstance(view, tuple)
    catalog.add(Target.from_text("b", DOT))
    assert len(view) == 1


def test_empty_pattern_is_degenerate():
    with pytest.raises(DegenerateTargetError):
        Target.from_text("ghost", "   \n   ")
    with pytest.raises(ValueError):
        Target("ghost", SparseImage())


def test_target_owns_its_pattern():
    shared = SparseImage.from_text(ELL)
    a = Target("a", shared)
    b = Target("b", shared)
    assert a.pattern is not shared
    assert a.pattern is not b.pattern
    a.pattern.translate_to(4, 4)
    assert b.pattern.offset == (0, 0)
    assert shared.pixels == {(0, 0), (1, 0), (0, 1)}


def test_builtin_catalog():
    catalog = builtin_catalog()
    torpedo, ship = catalog.all()
    assert torpedo.name == "Slime Torpedo"
    assert ship.name == "Star Ship"
    assert len(torpedo.pattern) == 47
    assert len(ship.pattern) == 54
    assert torpedo.pattern.size() == (9, 10)
    assert ship.pattern.size() == (12, 9)


def test_builtin_catalog_is_fresh_each_call():
    first = builtin_catalog()
    first.all()[0].pattern.translate_to(3, 3)
    assert builtin_catalog().all()[0].pattern.offset == (0, 0)


def test_demo_scan_dimensions():
    scan = SparseImage.from_text(load_demo_scan())
    assert scan.size() == (99, 99)
    assert len(load_demo_scan().splitlines()) == 100
