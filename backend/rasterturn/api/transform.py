"""POST /api/transform — run a transform chain over an uploaded image."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from rasterturn.codec.png import ImageDecodeError, decode_image, encode_png
from rasterturn.config import Settings
from rasterturn.dependencies import get_settings
from rasterturn.engine.chain import TransformChain
from rasterturn.engine.errors import DegenerateTransformError
from rasterturn.engine.pixels import PixelBuffer
from rasterturn.engine.renderer import render
from rasterturn.models.requests import TransformRequest
from rasterturn.models.responses import TransformResponse
from rasterturn.utils.ascii_grid import render_ascii

logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_request_image(payload: str, max_pixels: int) -> PixelBuffer:
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {e}") from e

    try:
        image = decode_image(raw)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if image.width * image.height > max_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"Image {image.width}x{image.height} exceeds {max_pixels} pixels",
        )
    return image


@router.post("/transform", response_model=TransformResponse)
async def transform(req: TransformRequest, settings: Settings = Depends(get_settings)) -> TransformResponse:
    start = time.perf_counter()

    source = _decode_request_image(req.image, settings.max_image_pixels)

    chain = TransformChain()
    for spec in req.operations:
        chain.append(spec.to_operation())
    matrix = chain.compose(source.width, source.height)
    out_w, out_h = chain.output_size(source.width, source.height)

    if req.preview and out_w * out_h > settings.max_preview_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"Preview of {out_w}x{out_h} exceeds {settings.max_preview_pixels} pixels",
        )

    def _run() -> tuple[PixelBuffer, bytes, list[str] | None]:
        result = render(source, matrix, out_w, out_h, req.strategy, chain.config)
        preview = render_ascii(result) if req.preview else None
        return result, encode_png(result), preview

    # CPU-bound: run in a worker thread so the event loop stays free
    loop = asyncio.get_running_loop()
    try:
        result, png, preview = await loop.run_in_executor(None, _run)
    except DegenerateTransformError as e:
        logger.warning("Degenerate transform: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Transform: %d ops, %s, %dx%d -> %dx%d in %.0fms",
        len(chain),
        req.strategy.value,
        source.width,
        source.height,
        result.width,
        result.height,
        elapsed,
    )

    return TransformResponse(
        image=base64.b64encode(png).decode("ascii"),
        width=result.width,
        height=result.height,
        matrix=list(matrix.as_tuple()),
        strategy=req.strategy.value,
        processing_time_ms=round(elapsed, 1),
        preview=preview,
    )
