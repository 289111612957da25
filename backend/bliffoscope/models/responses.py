"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    builtin_targets: int = 0


class TargetInfo(BaseModel):
    name: str
    width: int
    height: int
    pixel_count: int


class MatchOut(BaseModel):
    target_name: str
    x: int
    y: int
    match_ratio: float
    color: tuple[int, int, int]


class SearchResponse(BaseModel):
    matches: list[MatchOut] = Field(default_factory=list)
    count: int = 0
    elapsed_ms: float = 0.0
    threshold: float
    renderer: str | None = None
    # Text for list/grid, base64 PNG for canvas
    rendering: str | None = None
