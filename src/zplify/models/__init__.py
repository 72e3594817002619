"""Data models for zplify."""

from zplify.models.conversion import DEFAULT_BLACK_LIMIT, ConversionConfig, percentage_to_black_limit
from zplify.models.pixels import RGB, ImagePixelSource, PixelGrid, PixelSource

__all__ = [
    "DEFAULT_BLACK_LIMIT",
    "RGB",
    "ConversionConfig",
    "ImagePixelSource",
    "PixelGrid",
    "PixelSource",
    "percentage_to_black_limit",
]
