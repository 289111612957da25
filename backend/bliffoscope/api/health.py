"""Health check + catalog meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from bliffoscope.engine.catalog import builtin_catalog, load_demo_scan
from bliffoscope.models.responses import HealthResponse, TargetInfo

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        builtin_targets=len(builtin_catalog()),
    )


@router.get("/targets", response_model=list[TargetInfo])
async def targets() -> list[TargetInfo]:
    infos = []
    for target in builtin_catalog():
        width, height = target.pattern.size()
        infos.append(TargetInfo(
            name=target.name,
            width=width + 1,
            height=height + 1,
            pixel_count=len(target.pattern),
        ))
    return infos


@router.get("/demo-scan", response_class=PlainTextResponse)
async def demo_scan() -> str:
    return load_demo_scan()
