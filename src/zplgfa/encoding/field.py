"""Assemble packed rows into a ZPL ^GF Graphic Field.

ZPL ^GF format:
^GF<type>,<data_bytes>,<total_bytes>,<bytes_per_row>,<data>

``data_bytes`` is the length of the emitted data (after compression), while
``total_bytes`` is the size of the uncompressed bitmap.
"""

import logging
from abc import ABC, abstractmethod

from PIL import Image

from zplgfa.encoding.packing import bytes_per_row, pack_rows, row_to_hex
from zplgfa.encoding.rle import REPEAT_PREVIOUS, compress_ascii
from zplgfa.models.graphic import GraphicType

logger = logging.getLogger(__name__)


class RowRenderer(ABC):
    """Renders packed rows as graphic field data.

    A renderer may carry state between rows, so use a fresh instance for
    each field and feed it rows in order.
    """

    @abstractmethod
    def render(self, row: bytes) -> bytes:
        """Render one packed row."""
        pass


class AsciiRowRenderer(RowRenderer):
    """Uppercase hex, one row per line."""

    def render(self, row: bytes) -> bytes:
        return row_to_hex(row).encode("ascii") + b"\n"


class CompressedAsciiRowRenderer(RowRenderer):
    """Run-length compressed hex with ``:`` for rows repeating the previous one."""

    def __init__(self) -> None:
        self._previous: str | None = None

    def render(self, row: bytes) -> bytes:
        compressed = compress_ascii(row_to_hex(row))
        if compressed == self._previous:
            return REPEAT_PREVIOUS.encode("ascii")
        self._previous = compressed
        return compressed.encode("ascii")


class BinaryRowRenderer(RowRenderer):
    """Raw packed bytes."""

    def render(self, row: bytes) -> bytes:
        return row


def get_row_renderer(graphic_type: GraphicType) -> RowRenderer:
    """Create a new row renderer for a graphic type."""
    renderer_classes: dict[GraphicType, type[RowRenderer]] = {
        GraphicType.ASCII: AsciiRowRenderer,
        GraphicType.BINARY: BinaryRowRenderer,
        GraphicType.COMPRESSED_ASCII: CompressedAsciiRowRenderer,
    }
    renderer_class = renderer_classes.get(graphic_type)
    if not renderer_class:
        raise ValueError(f"Unknown graphic type: {graphic_type}")
    return renderer_class()


def build_graphic_field(rows: list[bytes], row_bytes: int, graphic_type: GraphicType) -> bytes:
    """Frame packed rows as a ^GF command.

    Args:
        rows: Packed rows, each ``row_bytes`` long.
        row_bytes: Bytes per packed row.
        graphic_type: Data encoding for the rows.

    Returns:
        The ^GF command as bytes.
    """
    renderer = get_row_renderer(graphic_type)
    data = b"".join(renderer.render(row) for row in rows)

    total_bytes = row_bytes * len(rows)
    header = f"^GF{graphic_type.field_tag},{len(data)},{total_bytes},{row_bytes},\n"

    logger.debug(
        f"Built ^GF field: type={graphic_type.name} rows={len(rows)} "
        f"bytes_per_row={row_bytes} data_bytes={len(data)}"
    )
    return header.encode("ascii") + data


def convert_to_graphic_field(
    image: Image.Image,
    graphic_type: GraphicType | str = GraphicType.COMPRESSED_ASCII,
) -> bytes:
    """Convert an image to a ZPL Graphic Field.

    The image is thresholded as is; run it through ``flatten_image`` first to
    resize it and apply darkness.

    Args:
        image: Pillow image to encode.
        graphic_type: ASCII, binary or compressed ASCII data encoding.

    Returns:
        The ^GF command as bytes. Binary fields contain raw row bytes.

    Raises:
        InvalidInputError: If the image has no pixels.
    """
    rows = pack_rows(image)
    return build_graphic_field(rows, bytes_per_row(image.width), GraphicType.parse(graphic_type))
