"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from rasterturn import __version__
from rasterturn.engine.operations import OPERATION_TYPES
from rasterturn.engine.renderer import RenderStrategy
from rasterturn.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        operations=[op.name for op in OPERATION_TYPES],
        strategies=[s.value for s in RenderStrategy],
    )
