"""zplgfa - convert images to ZPL Graphic Field commands."""

from zplgfa.encoding import (
    convert_image,
    convert_to_graphic_field,
    convert_to_zpl,
    flatten_image,
)
from zplgfa.errors import ConversionError, InvalidInputError
from zplgfa.models import GraphicConfig, GraphicType

__all__ = [
    "ConversionError",
    "GraphicConfig",
    "GraphicType",
    "InvalidInputError",
    "convert_image",
    "convert_to_graphic_field",
    "convert_to_zpl",
    "flatten_image",
]
