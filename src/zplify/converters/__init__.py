"""Image to ZPL ^GFA converters."""

from zplify.converters.compression import RUN_CODES, compress_hex, decompress_hex, encode_run
from zplify.converters.rasterizer import ROW_BREAK, RasterImage, rasterize
from zplify.converters.zpl import GraphicField, build_graphic_field, encode_graphic, gfa_prefix, image_to_zpl

__all__ = [
    "ROW_BREAK",
    "RUN_CODES",
    "GraphicField",
    "RasterImage",
    "build_graphic_field",
    "compress_hex",
    "decompress_hex",
    "encode_graphic",
    "encode_run",
    "gfa_prefix",
    "image_to_zpl",
    "rasterize",
]
