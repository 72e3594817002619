"""Threshold pixel sources into packed hex rows."""

import logging
from dataclasses import dataclass

from zplify.errors import InvalidDimensionError
from zplify.models.conversion import DEFAULT_BLACK_LIMIT
from zplify.models.pixels import PixelSource

logger = logging.getLogger(__name__)

# Separates rows in the uncompressed hex body
ROW_BREAK = "\n"


@dataclass(frozen=True)
class RasterImage:
    """Monochrome image packed as uppercase hex digits, one line per row."""

    hex_body: str
    width: int
    height: int
    bytes_per_row: int
    total: int


def bytes_per_row_for(width: int) -> int:
    """Number of bytes needed to hold one row of width pixels."""
    return (width + 7) // 8


def is_black(pixel: tuple[int, int, int], black_limit: int) -> bool:
    """Check whether a pixel prints black under the given threshold."""
    red, green, blue = pixel
    return red + green + blue <= black_limit


def _check_dimensions(width: object, height: object) -> None:
    if not isinstance(width, int) or not isinstance(height, int):
        raise InvalidDimensionError(f"Dimensions must be integers, got {width!r}x{height!r}")
    if width < 0 or height < 0:
        raise InvalidDimensionError(f"Dimensions must not be negative, got {width}x{height}")


def rasterize(source: PixelSource, black_limit: int = DEFAULT_BLACK_LIMIT) -> RasterImage:
    """Convert a pixel source to a packed hex body.

    Pixels are scanned top to bottom, left to right. Each black pixel
    (channel sum at or below black_limit) sets a bit, most significant bit
    first. Rows are padded with white bits to a byte boundary and every row,
    including the last, is followed by ROW_BREAK.

    Args:
        source: Pixel grid to convert.
        black_limit: Channel-sum threshold, 0-768.

    Returns:
        RasterImage with the hex body and the ^GFA size parameters.

    Raises:
        InvalidDimensionError: If the source reports negative or non-integer dimensions.
    """
    width, height = source.width, source.height
    _check_dimensions(width, height)

    bytes_per_row = bytes_per_row_for(width)
    total = bytes_per_row * height

    if width == 0 or height == 0:
        return RasterImage(hex_body="", width=width, height=height, bytes_per_row=bytes_per_row, total=total)

    lines = []
    for y in range(height):
        row_hex = []
        for byte_idx in range(bytes_per_row):
            byte_val = 0
            for bit in range(8):
                x = byte_idx * 8 + bit
                if x >= width:
                    break
                if is_black(source.get_pixel(x, y), black_limit):
                    byte_val |= 1 << (7 - bit)
            row_hex.append(f"{byte_val:02X}")
        lines.append("".join(row_hex))

    hex_body = ROW_BREAK.join(lines) + ROW_BREAK
    logger.debug(f"Rasterized {width}x{height} image: {bytes_per_row} bytes per row, {total} bytes total")

    return RasterImage(hex_body=hex_body, width=width, height=height, bytes_per_row=bytes_per_row, total=total)
