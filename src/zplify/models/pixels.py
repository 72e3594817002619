"""Pixel sources consumed by the rasterizer."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from PIL import Image

from zplify.errors import InvalidDimensionError

RGB = tuple[int, int, int]


@runtime_checkable
class PixelSource(Protocol):
    """Rectangular grid of RGB samples addressed by (column, row), row 0 at the top."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> RGB: ...


class ImagePixelSource:
    """Pixel source backed by a PIL image.

    The image is converted to RGB up front; any alpha channel is dropped,
    so fully transparent pixels read as whatever colour they carry.
    """

    def __init__(self, image: Image.Image) -> None:
        if image.mode != "RGB":
            image = image.convert("RGB")
        self._image = image
        self._pixels = image.load()

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def get_pixel(self, x: int, y: int) -> RGB:
        return self._pixels[x, y]  # type: ignore[index,return-value]


class PixelGrid:
    """In-memory pixel source built from rows of RGB tuples."""

    def __init__(self, rows: Sequence[Sequence[RGB]], width: int | None = None) -> None:
        """Initialize the grid.

        Args:
            rows: Pixel rows, top to bottom. All rows must have the same length.
            width: Explicit width, only needed to describe a grid with no rows.
        """
        self._rows = [list(row) for row in rows]
        widths = {len(row) for row in self._rows}
        if len(widths) > 1:
            raise InvalidDimensionError(f"Rows have inconsistent widths: {sorted(widths)}")
        if widths:
            row_width = widths.pop()
            if width is not None and width != row_width:
                raise InvalidDimensionError(f"Declared width {width} does not match row width {row_width}")
            width = row_width
        if width is None:
            width = 0
        if width < 0:
            raise InvalidDimensionError(f"Invalid grid width {width}")
        self._width = width

    @classmethod
    def filled(cls, width: int, height: int, color: RGB) -> "PixelGrid":
        """Create a grid of the given size with every pixel set to color.

        Convenience constructor for solid test patterns and blank canvases;
        conversions themselves only need the PixelSource interface.
        """
        if width < 0 or height < 0:
            raise InvalidDimensionError(f"Invalid grid size {width}x{height}")
        return cls([[color] * width for _ in range(height)], width=width)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    def get_pixel(self, x: int, y: int) -> RGB:
        return self._rows[y][x]
