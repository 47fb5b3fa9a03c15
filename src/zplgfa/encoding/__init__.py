"""Image to ZPL Graphic Field encoding pipeline."""

from zplgfa.encoding.edits import apply_edits
from zplgfa.encoding.field import convert_to_graphic_field, get_row_renderer
from zplgfa.encoding.label import convert_image, convert_to_zpl, wrap_label
from zplgfa.encoding.preprocess import flatten_image
from zplgfa.encoding.rle import compress_ascii, expand_ascii, repeat_code

__all__ = [
    "apply_edits",
    "compress_ascii",
    "convert_image",
    "convert_to_graphic_field",
    "convert_to_zpl",
    "expand_ascii",
    "flatten_image",
    "get_row_renderer",
    "repeat_code",
    "wrap_label",
]
