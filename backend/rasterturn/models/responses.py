"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    operations: list[str] = Field(default_factory=list)
    strategies: list[str] = Field(default_factory=list)


class TransformResponse(BaseModel):
    image: str = Field(..., description="Base64-encoded PNG")
    width: int
    height: int
    matrix: list[float] = Field(..., description="Composed coefficients a, b, c, d, e, f")
    strategy: str
    processing_time_ms: float = 0.0
    preview: list[str] | None = None
