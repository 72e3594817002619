"""Tests for image to ^GFA command conversion."""

import pytest
from PIL import Image

from zplify.converters import (
    GraphicField,
    build_graphic_field,
    decompress_hex,
    encode_graphic,
    gfa_prefix,
    image_to_zpl,
)
from zplify.errors import EncodingRangeError
from zplify.models.conversion import ConversionConfig
from zplify.models.pixels import PixelGrid

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


class TestBuildGraphicField:
    """Tests for the ^GFA command assembler."""

    def test_prefix(self):
        assert gfa_prefix(2, 1) == "^GFA,2,2,1, "

    def test_without_header_footer(self):
        assert build_graphic_field(2, 1, "F0\nF0\n") == "^GFA,2,2,1, F0\nF0\n"

    def test_with_header_footer_repeats_prefix(self):
        zpl = build_graphic_field(2, 1, "F0\nF0\n", add_header_footer=True)

        assert zpl == "^XA ^FO0,0^GFA,2,2,1, ^GFA,2,2,1, F0\nF0\n^FS^XZ"
        assert zpl.count("^GFA,2,2,1, ") == 2

    def test_graphic_field_to_zpl(self):
        graphic = GraphicField(total=6, bytes_per_row=2, body=",::", compressed=True)

        assert graphic.to_zpl() == "^GFA,6,6,2, ,::"
        assert graphic.to_zpl(add_header_footer=True).startswith("^XA ^FO0,0^GFA,6,6,2, ")


class TestImageToZPL:
    """Tests for image_to_zpl."""

    def test_half_black_image(self, half_black_image: Image.Image):
        assert image_to_zpl(half_black_image) == "^GFA,2,2,1, F0\nF0\n"

    def test_half_black_image_compressed(self, half_black_image: Image.Image):
        zpl = image_to_zpl(half_black_image, ConversionConfig(compress=True))

        assert zpl == "^GFA,2,2,1, GFG0:"

    def test_half_black_image_with_header_footer(self, half_black_image: Image.Image):
        zpl = image_to_zpl(half_black_image, add_header_footer=True)

        assert zpl == "^XA ^FO0,0^GFA,2,2,1, ^GFA,2,2,1, F0\nF0\n^FS^XZ"

    def test_accepts_pixel_source(self):
        grid = PixelGrid.filled(16, 3, WHITE)

        assert image_to_zpl(grid, ConversionConfig(compress=True)) == "^GFA,6,6,2, ,::"

    def test_all_black_compressed(self):
        grid = PixelGrid.filled(16, 2, BLACK)

        assert image_to_zpl(grid) == "^GFA,4,4,2, FFFF\nFFFF\n"
        assert image_to_zpl(grid, ConversionConfig(compress=True)) == "^GFA,4,4,2, !:"

    def test_one_bit_image(self):
        """Mode "1" images convert through RGB: 0 is black."""
        image = Image.new("1", (8, 1), color=255)
        image.load()[0, 0] = 0

        assert image_to_zpl(image) == "^GFA,1,1,1, 80\n"

    def test_grayscale_image_uses_threshold(self):
        image = Image.new("L", (8, 1), color=128)

        assert image_to_zpl(image) == "^GFA,1,1,1, 00\n"
        assert image_to_zpl(image, ConversionConfig(blackness_percentage=50)) == "^GFA,1,1,1, FF\n"

    def test_rgba_alpha_is_ignored(self):
        image = Image.new("RGBA", (8, 1), color=(0, 0, 0, 0))

        assert image_to_zpl(image) == "^GFA,1,1,1, FF\n"

    def test_threshold_extremes(self):
        image = Image.new("RGB", (8, 1), color=(200, 200, 200))

        assert image_to_zpl(image, ConversionConfig(blackness_percentage=100)) == "^GFA,1,1,1, FF\n"
        assert image_to_zpl(image, ConversionConfig(blackness_percentage=0)) == "^GFA,1,1,1, 00\n"

    def test_empty_image(self):
        grid = PixelGrid.filled(0, 5, WHITE)

        assert image_to_zpl(grid) == "^GFA,0,0,0, "
        assert image_to_zpl(grid, ConversionConfig(compress=True)) == "^GFA,0,0,0, "

    def test_run_limit_error_propagates(self):
        """An alternating 1608 pixel row is a single run of 402 'A' digits."""
        row = [BLACK if x % 2 == 0 else WHITE for x in range(1608)]
        grid = PixelGrid([row])

        assert image_to_zpl(grid).endswith("A" * 402 + "\n")
        with pytest.raises(EncodingRangeError):
            image_to_zpl(grid, ConversionConfig(compress=True))


class TestEncodeGraphic:
    """Tests for encode_graphic."""

    @pytest.mark.parametrize(("width", "height"), [(1, 1), (7, 2), (8, 8), (9, 3), (17, 5), (100, 4)])
    def test_header_counts_ignore_compression(self, width: int, height: int):
        grid = PixelGrid([[BLACK if (x * y) % 3 == 0 else WHITE for x in range(width)] for y in range(height)])

        raw = encode_graphic(grid)
        compressed = encode_graphic(grid, ConversionConfig(compress=True))

        assert raw.bytes_per_row == compressed.bytes_per_row == (width + 7) // 8
        assert raw.total == compressed.total == raw.bytes_per_row * height
        assert raw.compressed is False
        assert compressed.compressed is True
        assert decompress_hex(compressed.body, compressed.bytes_per_row) == raw.body

    def test_compressed_character_set(self):
        grid = PixelGrid([[BLACK if (x + y) % 5 else WHITE for x in range(40)] for y in range(6)])

        graphic = encode_graphic(grid, ConversionConfig(compress=True))

        allowed = set("0123456789ABCDEF") | set("GHIJKLMNOPQRSTUVWXY") | set("ghijklmnopqrstuvwxyz") | set(",!:")
        assert set(graphic.body) <= allowed
