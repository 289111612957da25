"""POST /api/search — run the target search over a submitted scan."""

from __future__ import annotations

import asyncio
import base64
import logging
from functools import partial

from fastapi import APIRouter, Depends, HTTPException

from bliffoscope.config import Settings
from bliffoscope.dependencies import get_settings
from bliffoscope.engine.catalog import TargetCatalog, builtin_catalog
from bliffoscope.engine.config import SearchConfig
from bliffoscope.engine.errors import BliffoscopeError
from bliffoscope.engine.search import SearchEngine, SearchResult
from bliffoscope.models.requests import SearchRequest
from bliffoscope.models.responses import MatchOut, SearchResponse
from bliffoscope.report.renderers import RendererKind, render

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_catalog(req: SearchRequest, engine: SearchEngine) -> TargetCatalog:
    if req.targets is None:
        return builtin_catalog()
    return TargetCatalog(engine.load_target(t.name, t.pattern) for t in req.targets)


def _request_chars(req: SearchRequest) -> int:
    """Characters submitted in the scan plus every target pattern."""
    patterns = req.targets or []
    return len(req.scan) + sum(len(t.pattern) for t in patterns)


def _run_search(req: SearchRequest, cfg: Settings) -> SearchResponse:
    threshold = cfg.match_threshold if req.threshold is None else req.threshold
    engine = SearchEngine(SearchConfig(
        threshold=threshold,
        marker=cfg.scan_marker,
        workers=cfg.search_workers,
    ))
    scan = engine.load_scan(req.scan, require_pixels=True)
    catalog = _build_catalog(req, engine)

    result: SearchResult = engine.find_targets(scan, catalog)

    rendering: str | None = None
    if req.renderer is not None:
        output = render(req.renderer, scan, result)
        if isinstance(output, bytes):
            rendering = base64.b64encode(output).decode("ascii")
        else:
            rendering = output

    return SearchResponse(
        matches=[
            MatchOut(
                target_name=m.target_name,
                x=m.x,
                y=m.y,
                match_ratio=m.match_ratio,
                color=m.color,
            )
            for m in result.matches
        ],
        count=result.count,
        elapsed_ms=round(result.elapsed_ms, 1),
        threshold=threshold,
        renderer=RendererKind(req.renderer).value if req.renderer is not None else None,
        rendering=rendering,
    )


@router.post("/search", response_model=SearchResponse)
async def search(
    req: SearchRequest,
    cfg: Settings = Depends(get_settings),
) -> SearchResponse:
    if _request_chars(req) > cfg.max_scan_chars:
        raise HTTPException(
            status_code=422,
            detail=f"Scan and patterns exceed {cfg.max_scan_chars} characters",
        )

    loop = asyncio.get_running_loop()
    try:
        # CPU-bound; keep the event loop free
        return await loop.run_in_executor(None, partial(_run_search, req, cfg))
    except (BliffoscopeError, ValueError) as e:
        logger.warning("Search rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e
