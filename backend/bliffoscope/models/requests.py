"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bliffoscope.report.renderers import RendererKind


class TargetSpec(BaseModel):
    name: str = Field(..., description="Target label")
    pattern: str = Field(..., description="Pattern rows separated by newlines, '+' = on")


class SearchRequest(BaseModel):
    scan: str = Field(..., description="Scan rows separated by newlines, '+' = on")
    targets: list[TargetSpec] | None = Field(
        default=None,
        description="Targets to search for (default: built-in catalog)",
    )
    threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Minimum match ratio (default: configured threshold)",
    )
    renderer: RendererKind | None = Field(
        default=None,
        description="Optional rendering of the result (list, grid, canvas)",
    )
