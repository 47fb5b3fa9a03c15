"""Pack image rows into monochrome bytes.

Each pixel becomes one bit (1 = dark, printed), packed most significant bit
first. Rows are padded with zero bits up to a whole number of bytes.
"""

from collections.abc import Sequence

from PIL import Image

from zplgfa.errors import InvalidInputError

MAX_16 = 0xFFFF
# 8-bit channel value v widens to 16 bits as v * 0x101 (0xAB -> 0xABAB)
WIDEN_8_TO_16 = 0x101
# Pixels with a 16-bit luminance below this are printed
DARK_THRESHOLD = MAX_16 // 2
# Single-channel modes whose values span 0..0xFFFF
WIDE_GREY_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}

RGBA = tuple[int, int, int, int]


def reduce_wide_grey(image: Image.Image) -> Image.Image:
    """Scale 16-bit greyscale images down to 8-bit ``L``.

    Converting these modes straight to RGBA clips every value above 255 to
    white. Other modes are returned unchanged.
    """
    if image.mode not in WIDE_GREY_MODES:
        return image
    return image.convert("I").point(lambda v: v * (1 / WIDEN_8_TO_16)).convert("L")


def rgba_pixels(image: Image.Image) -> list[RGBA]:
    """All pixels of an RGBA image as tuples, row by row."""
    data = image.tobytes()
    return list(zip(data[0::4], data[1::4], data[2::4], data[3::4]))


def bytes_per_row(width: int) -> int:
    """Number of packed bytes needed for a row of ``width`` pixels."""
    if width <= 0:
        raise InvalidInputError(f"Row width must be positive, got {width}")
    return (width + 7) // 8


def luminance16(r: int, g: int, b: int, a: int = 0xFF) -> int:
    """16-bit luminance of an 8-bit straight-alpha RGBA pixel.

    Channels are premultiplied by alpha, so a transparent pixel reads as black.
    """
    alpha16 = a * WIDEN_8_TO_16
    r16 = r * WIDEN_8_TO_16 * alpha16 // MAX_16
    g16 = g * WIDEN_8_TO_16 * alpha16 // MAX_16
    b16 = b * WIDEN_8_TO_16 * alpha16 // MAX_16
    return (19595 * r16 + 38470 * g16 + 7471 * b16 + (1 << 15)) >> 16


def is_dark(pixel: RGBA) -> bool:
    return luminance16(*pixel) < DARK_THRESHOLD


def pack_row(pixels: Sequence[RGBA]) -> bytes:
    """Pack one row of RGBA pixels into bytes, MSB first."""
    row = bytearray(bytes_per_row(len(pixels)))
    for x, pixel in enumerate(pixels):
        if is_dark(pixel):
            row[x >> 3] |= 0x80 >> (x & 7)
    return bytes(row)


def pack_rows(image: Image.Image) -> list[bytes]:
    """Pack every row of an image.

    Raises:
        InvalidInputError: If the image has no pixels.
    """
    width, height = image.size
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Cannot pack an empty image ({width}x{height})")

    image = reduce_wide_grey(image)
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    pixels = rgba_pixels(image)
    return [pack_row(pixels[y * width : (y + 1) * width]) for y in range(height)]


def row_to_hex(row: bytes) -> str:
    """Render a packed row as uppercase hex, two characters per byte."""
    return row.hex().upper()
