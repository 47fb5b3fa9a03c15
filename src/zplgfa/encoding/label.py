"""Wrap graphic fields in a complete ZPL label."""

from PIL import Image

from zplgfa.encoding.field import convert_to_graphic_field
from zplgfa.encoding.preprocess import flatten_image
from zplgfa.models.graphic import GraphicConfig, GraphicType

LABEL_START = b"^XA,^FS\n^FO0,0\n"
LABEL_END = b"^FS,^XZ\n"


def wrap_label(field: bytes) -> bytes:
    """Frame a ^GF field with label start/end and a field origin at 0,0."""
    return LABEL_START + field + LABEL_END


def convert_to_zpl(
    image: Image.Image,
    graphic_type: GraphicType = GraphicType.COMPRESSED_ASCII,
) -> bytes:
    """Convert an image to a printable ZPL label containing one ^GF field."""
    return wrap_label(convert_to_graphic_field(image, graphic_type))


def convert_image(
    image: Image.Image,
    config: GraphicConfig | None = None,
    graphic_type: GraphicType = GraphicType.COMPRESSED_ASCII,
    label: bool = True,
) -> bytes:
    """Flatten an image and convert it in one step.

    Args:
        image: Source image in any mode.
        config: Preprocessing config. Defaults to the image's own size,
            scale 1.0 and darkness 0.1.
        graphic_type: Data encoding for the field.
        label: If True, wrap the field in ^XA/^XZ label framing.

    Returns:
        ZPL commands as bytes.
    """
    if config is None:
        config = GraphicConfig.for_image(image)

    flat = flatten_image(image, config)
    if label:
        return convert_to_zpl(flat, graphic_type)
    return convert_to_graphic_field(flat, graphic_type)
