"""Convert raster images to ZPL ^GFA graphic commands."""

from zplify.converters import image_to_zpl
from zplify.errors import ConversionError, DecompressionError, EncodingRangeError, InvalidDimensionError
from zplify.models import ConversionConfig

__version__ = "0.1.0"

__all__ = [
    "ConversionConfig",
    "ConversionError",
    "DecompressionError",
    "EncodingRangeError",
    "InvalidDimensionError",
    "image_to_zpl",
]
