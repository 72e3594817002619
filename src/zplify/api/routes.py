"""REST API routes for zplify."""

import io
import logging
import secrets
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from zplify.config import AppConfig
from zplify.converters import encode_graphic
from zplify.errors import ConversionError
from zplify.models.pixels import ImagePixelSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

# Set by the app during startup
_app_state: dict[str, Any] = {}


def set_app_state(config: AppConfig) -> None:
    """Set application state references for the routes."""
    _app_state["config"] = config


def _get_config() -> AppConfig:
    return _app_state.get("config") or AppConfig()


async def verify_api_key(request: Request) -> None:
    """Verify API key if configured.

    API key can be provided via:
    - X-API-Key header
    - Authorization: Bearer <key> header
    - api_key query parameter

    If no API key is configured, all requests are allowed.
    """
    configured_key = _get_config().api_key

    # No API key configured = open access
    if not configured_key:
        return

    provided_key = None

    if "X-API-Key" in request.headers:
        provided_key = request.headers["X-API-Key"]
    elif "Authorization" in request.headers:
        auth = request.headers["Authorization"]
        if auth.startswith("Bearer "):
            provided_key = auth[7:]
    elif "api_key" in request.query_params:
        provided_key = request.query_params["api_key"]

    if not provided_key or not secrets.compare_digest(provided_key, configured_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Response models


class ConvertResponse(BaseModel):
    """Conversion result."""

    total: int
    bytes_per_row: int
    compressed: bool
    zpl: str


class ConfigInfo(BaseModel):
    """Effective default conversion settings."""

    compress: bool
    blackness_percentage: int | None
    black_limit: int
    add_header_footer: bool
    max_upload_bytes: int
    max_pixels: int


# Endpoints


@router.get("/config", response_model=ConfigInfo)
async def get_config() -> ConfigInfo:
    """Show the defaults applied to conversions."""
    config = _get_config()
    return ConfigInfo(
        compress=config.conversion.compress,
        blackness_percentage=config.conversion.blackness_percentage,
        black_limit=config.conversion.black_limit,
        add_header_footer=config.add_header_footer,
        max_upload_bytes=config.max_upload_bytes,
        max_pixels=config.max_pixels,
    )


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, rejecting it as soon as it passes limit bytes."""
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise HTTPException(status_code=413, detail=f"Image exceeds {limit} bytes")

    data = bytearray()
    async for chunk in request.stream():
        data.extend(chunk)
        if len(data) > limit:
            raise HTTPException(status_code=413, detail=f"Image exceeds {limit} bytes")
    return bytes(data)


@router.post(
    "/convert",
    response_model=ConvertResponse,
    responses={
        400: {"description": "Missing or unreadable image"},
        413: {"description": "Image too large"},
        422: {"description": "Image could not be encoded"},
    },
)
async def convert_image(
    request: Request,
    compress: bool | None = None,
    threshold: int | None = Query(default=None, ge=0, description="Blackness threshold percentage"),
    header_footer: bool | None = None,
) -> ConvertResponse:
    """Convert an uploaded image (raw request body) to a ^GFA command.

    Query parameters override the configured defaults.
    """
    config = _get_config()

    data = await _read_body(request, config.max_upload_bytes)
    if not data:
        raise HTTPException(status_code=400, detail="Request body must contain an image")

    try:
        # Only the header is parsed here; pixel data is decoded by load()
        image = Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise HTTPException(status_code=400, detail=f"Could not read image: {e}") from e

    if image.width * image.height > config.max_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"Image is {image.width}x{image.height}, over the {config.max_pixels} pixel limit",
        )

    try:
        image.load()
    except OSError as e:
        raise HTTPException(status_code=400, detail=f"Could not read image: {e}") from e

    overrides: dict[str, Any] = {}
    if compress is not None:
        overrides["compress"] = compress
    if threshold is not None:
        overrides["blackness_percentage"] = threshold
    conversion = config.conversion.model_copy(update=overrides)
    wrap = config.add_header_footer if header_footer is None else header_footer

    try:
        graphic = await run_in_threadpool(encode_graphic, ImagePixelSource(image), conversion)
    except ConversionError as e:
        logger.warning(f"Conversion failed for {image.width}x{image.height} image: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ConvertResponse(
        total=graphic.total,
        bytes_per_row=graphic.bytes_per_row,
        compressed=graphic.compressed,
        zpl=graphic.to_zpl(wrap),
    )
