"""Bliffoscope matching core."""

from bliffoscope.engine.catalog import Target, TargetCatalog, builtin_catalog
from bliffoscope.engine.config import SearchConfig
from bliffoscope.engine.errors import (
    BliffoscopeError,
    DecodeError,
    DegenerateTargetError,
    SearchCancelled,
)
from bliffoscope.engine.image import PositionedView, SparseImage, positioned_view
from bliffoscope.engine.search import MatchRecord, SearchEngine, SearchResult, find_targets
from bliffoscope.engine.similarity import match_ratio

__all__ = [
    "SparseImage",
    "PositionedView",
    "positioned_view",
    "match_ratio",
    "Target",
    "TargetCatalog",
    "builtin_catalog",
    "SearchConfig",
    "SearchEngine",
    "SearchResult",
    "MatchRecord",
    "find_targets",
    "BliffoscopeError",
    "DecodeError",
    "DegenerateTargetError",
    "SearchCancelled",
]
