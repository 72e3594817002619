"""Convert images to ZPL ^GFA commands."""

import logging
from dataclasses import dataclass

from PIL import Image

from zplify.converters.compression import compress_hex
from zplify.converters.rasterizer import rasterize
from zplify.models.conversion import ConversionConfig
from zplify.models.pixels import ImagePixelSource, PixelSource

logger = logging.getLogger(__name__)

LABEL_START = "^XA "
FIELD_ORIGIN = "^FO0,0"
FIELD_SEPARATOR = "^FS"
LABEL_END = "^XZ"


def gfa_prefix(total: int, bytes_per_row: int) -> str:
    """Parameter prefix of a ^GFA command, up to and including the space before the data."""
    return f"^GFA,{total},{total},{bytes_per_row}, "


def build_graphic_field(total: int, bytes_per_row: int, body: str, add_header_footer: bool = False) -> str:
    """Assemble a ^GFA command around a raw or compressed body.

    ZPL ^GFA format:
    ^GFA,<total_bytes>,<total_bytes>,<bytes_per_row>, <data>

    When add_header_footer is set the command is wrapped in ^XA/^FO0,0 ... ^FS^XZ
    so it prints as a standalone label. The wrapped form carries the ^GFA
    parameter prefix twice, once in the header and once on the payload;
    printers in the field expect this exact output.

    Args:
        total: Total bytes in the uncompressed image.
        bytes_per_row: Bytes in each image row.
        body: Hex data, compressed or not.
        add_header_footer: Wrap the command in label start/end markers.

    Returns:
        ZPL command text.
    """
    prefix = gfa_prefix(total, bytes_per_row)
    command = prefix + body
    if add_header_footer:
        header = LABEL_START + FIELD_ORIGIN + prefix
        footer = FIELD_SEPARATOR + LABEL_END
        command = header + command + footer
    return command


@dataclass(frozen=True)
class GraphicField:
    """Encoded ^GFA graphic ready to be rendered as ZPL."""

    total: int
    bytes_per_row: int
    body: str
    compressed: bool = False

    def to_zpl(self, add_header_footer: bool = False) -> str:
        """Render the graphic as a ^GFA command."""
        return build_graphic_field(self.total, self.bytes_per_row, self.body, add_header_footer)


def encode_graphic(source: PixelSource, config: ConversionConfig | None = None) -> GraphicField:
    """Rasterize a pixel source and optionally compress the result.

    Compression never changes the declared byte counts; the header always
    describes the uncompressed image.
    """
    config = config or ConversionConfig()
    raster = rasterize(source, config.black_limit)

    body = raster.hex_body
    if config.compress:
        body = compress_hex(body, raster.bytes_per_row)

    return GraphicField(
        total=raster.total,
        bytes_per_row=raster.bytes_per_row,
        body=body,
        compressed=config.compress,
    )


def image_to_zpl(
    image: Image.Image | PixelSource,
    config: ConversionConfig | None = None,
    add_header_footer: bool = False,
) -> str:
    """Convert an image to a ZPL ^GFA graphic command.

    Args:
        image: PIL image or any pixel source.
        config: Threshold and compression options; defaults apply when omitted.
        add_header_footer: Wrap the command so it prints as a standalone label.

    Returns:
        ZPL command text.

    Raises:
        ConversionError: If the image has invalid dimensions or cannot be encoded.
    """
    source = ImagePixelSource(image) if isinstance(image, Image.Image) else image
    graphic = encode_graphic(source, config)
    return graphic.to_zpl(add_header_footer)
