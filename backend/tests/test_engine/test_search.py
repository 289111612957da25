"""Tests for the exhaustive target search."""

from __future__ import annotations

import random

import pytest

from bliffoscope.engine.catalog import Target, TargetCatalog
from bliffoscope.engine.config import SearchConfig
from bliffoscope.engine.errors import SearchCancelled
from bliffoscope.engine.image import SparseImage, positioned_view
from bliffoscope.engine.search import SearchEngine, find_targets
from bliffoscope.engine.similarity import match_ratio
from tests.conftest import DEMO_MATCHES, DOT, ELL


def _summary(result):
    return [(m.target_name, m.x, m.y, m.match_ratio) for m in result.matches]


def test_two_dot_scenario(two_dot_scan, dot_catalog):
    result = find_targets(two_dot_scan, dot_catalog, 0.65)
    assert [m.position for m in result.matches] == [(0, 0), (2, 0)]
    assert all(m.match_ratio == 1.0 for m in result.matches)
    assert result.count == 2


def test_result_unpacks_to_matches_and_elapsed(two_dot_scan, dot_catalog):
    matches, elapsed = find_targets(two_dot_scan, dot_catalog)
    assert len(matches) == 2
    assert elapsed >= 0.0


def test_pattern_identical_to_scan_matches_once():
    scan = SparseImage.from_text(ELL)
    catalog = TargetCatalog([Target.from_text("ell", ELL)])
    result = find_targets(scan, catalog)
    assert _summary(result) == [("ell", 0, 0, 1.0)]


def test_bounds_are_inclusive():
    # (W, H) = (1, 1) and the scan has no on-pixel at (1, 1)
    scan = SparseImage.from_text(" +\n+ ")
    catalog = TargetCatalog([Target.from_text("ell", ELL)])
    result = find_targets(scan, catalog, threshold=0.0)
    assert [m.position for m in result.matches] == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert result.matches[-1].match_ratio == 0.0


def test_emission_order_is_row_column_target():
    scan = SparseImage.from_text("++")
    catalog = TargetCatalog([Target.from_text("a", DOT), Target.from_text("b", DOT)])
    result = find_targets(scan, catalog)
    assert [(m.target_name, m.x) for m in result.matches] == [
        ("a", 0), ("b", 0), ("a", 1), ("b", 1),
    ]


def test_empty_catalog_returns_nothing(demo_scan):
    result = find_targets(demo_scan, TargetCatalog())
    assert result.matches == ()
    assert result.count == 0


def test_empty_scan_returns_nothing(dot_catalog):
    result = find_targets(SparseImage(), dot_catalog, threshold=0.0)
    assert result.matches == ()


def test_threshold_out_of_range(two_dot_scan, dot_catalog):
    with pytest.raises(ValueError):
        find_targets(two_dot_scan, dot_catalog, threshold=1.5)
    with pytest.raises(ValueError):
        SearchEngine().find_targets(two_dot_scan, dot_catalog, threshold=-0.1)


def test_retained_ratios_meet_threshold(demo_scan, demo_catalog):
    result = find_targets(demo_scan, demo_catalog, threshold=0.6)
    assert result.count > len(DEMO_MATCHES)
    assert all(m.match_ratio >= 0.6 for m in result.matches)


def test_demo_scan_matches(demo_scan, demo_catalog):
    result = find_targets(demo_scan, demo_catalog)
    assert [(n, x, y) for n, x, y, _ in _summary(result)] == [
        (n, x, y) for n, x, y, _ in DEMO_MATCHES
    ]
    for got, (_, _, _, ratio) in zip(result.matches, DEMO_MATCHES):
        assert got.match_ratio == pytest.approx(ratio)


def test_search_matches_translation_reference(demo_scan, demo_catalog):
    expected = []
    width, height = demo_scan.size()
    for y in range(height + 1):
        for x in range(width + 1):
            for target in demo_catalog:
                ratio = match_ratio(demo_scan, positioned_view(target.pattern, x, y))
                if ratio >= 0.65:
                    expected.append((target.name, x, y, ratio))
    assert _summary(find_targets(demo_scan, demo_catalog)) == expected


def test_search_does_not_move_targets(demo_scan, demo_catalog):
    find_targets(demo_scan, demo_catalog)
    for target in demo_catalog:
        assert target.pattern.offset == (0, 0)


def test_positioned_pattern_of_record(two_dot_scan, dot_catalog):
    record = find_targets(two_dot_scan, dot_catalog).matches[1]
    assert record.positioned_pattern().pixels == {(2, 0)}
    assert dot_catalog.all()[0].pattern.pixels == {(0, 0)}


def test_colors_in_range(demo_scan, demo_catalog):
    result = find_targets(demo_scan, demo_catalog, threshold=0.5)
    assert result.count > 0
    for m in result.matches:
        assert len(m.color) == 3
        assert all(30 <= c < 230 for c in m.color)


def test_seeded_colors_are_reproducible(demo_scan, demo_catalog):
    a = SearchEngine(rng=random.Random(7)).find_targets(demo_scan, demo_catalog)
    b = SearchEngine(rng=random.Random(7)).find_targets(demo_scan, demo_catalog)
    assert [m.color for m in a.matches] == [m.color for m in b.matches]


def test_custom_color_range(two_dot_scan, dot_catalog):
    engine = SearchEngine(SearchConfig(color_min=100, color_max=101))
    result = engine.find_targets(two_dot_scan, dot_catalog)
    assert [m.color for m in result.matches] == [(100, 100, 100)] * 2


def test_parallel_matches_serial(demo_scan, demo_catalog):
    serial = SearchEngine(SearchConfig(threshold=0.6), rng=random.Random(3))
    parallel = SearchEngine(SearchConfig(threshold=0.6, workers=4), rng=random.Random(3))
    a = serial.find_targets(demo_scan, demo_catalog)
    b = parallel.find_targets(demo_scan, demo_catalog)
    assert _summary(a) == _summary(b)
    assert [m.color for m in a.matches] == [m.color for m in b.matches]


def test_progress_callback(dot_catalog):
    scan = SparseImage.from_text("+\n\n+")
    seen = []
    find_targets(scan, dot_catalog, progress_callback=seen.append)
    assert seen == pytest.approx([1 / 3, 2 / 3, 1.0])


def test_cancellation_between_rows(demo_scan, demo_catalog):
    calls = []

    def should_cancel():
        calls.append(1)
        return len(calls) > 2

    with pytest.raises(SearchCancelled) as exc_info:
        find_targets(demo_scan, demo_catalog, should_cancel=should_cancel)
    assert exc_info.value.row == 2


def test_cancellation_in_parallel(demo_scan, demo_catalog):
    with pytest.raises(SearchCancelled):
        find_targets(demo_scan, demo_catalog, workers=2, should_cancel=lambda: True)


def test_invalid_config():
    with pytest.raises(ValueError):
        SearchConfig(workers=0)
    with pytest.raises(ValueError):
        SearchConfig(color_min=200, color_max=100)


def test_engine_decodes_with_configured_marker():
    engine = SearchEngine(SearchConfig(marker="#"))
    scan = engine.load_scan("#.#\n+++")
    catalog = TargetCatalog([engine.load_target("dot", "#")])
    assert scan.pixels == {(0, 0), (2, 0)}
    assert [m.position for m in engine.find_targets(scan, catalog).matches] == [(0, 0), (2, 0)]


def test_invalid_marker_config():
    with pytest.raises(ValueError):
        SearchConfig(marker="##")
    with pytest.raises(ValueError):
        SearchConfig(marker="\n")
