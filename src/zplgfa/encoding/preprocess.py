"""Prepare images for monochrome thresholding.

Preprocessing resizes the source to fit the configured canvas (keeping its
aspect ratio) and flattens transparency against a white background, dimming
every pixel by the configured darkness so the later threshold operates on an
opaque image.
"""

import logging

from PIL import Image

from zplgfa.encoding.packing import MAX_16, RGBA, WIDEN_8_TO_16, reduce_wide_grey, rgba_pixels
from zplgfa.errors import InvalidInputError
from zplgfa.models.graphic import GraphicConfig

logger = logging.getLogger(__name__)


def target_size(config: GraphicConfig) -> tuple[int, int]:
    """Compute the resize target for a config.

    One of the returned dimensions is 0 when it should be derived from the
    other to keep the source aspect ratio. The longer side is constrained
    first; if the predicted length of the other side overflows its maximum,
    the other side becomes the constraint instead.
    """
    src_w, src_h = config.source_width, config.source_height
    if src_w <= 0 or src_h <= 0:
        raise InvalidInputError(f"Source size must be positive, got {src_w}x{src_h}")

    target_w = target_h = 0
    predicted_w = predicted_h = 0

    if src_w > src_h:
        target_w = int(min(src_w * config.scale, config.max_width))
        predicted_h = int(src_h * (target_w / src_w))
    else:
        target_h = int(min(src_h * config.scale, config.max_height))
        predicted_w = int(src_w * (target_h / src_h))

    if predicted_h > config.max_height:
        target_w = 0
        target_h = int(min(src_h * config.scale, config.max_height))
    elif predicted_w > config.max_width:
        target_w = int(min(src_w * config.scale, config.max_width))
        target_h = 0

    return target_w, target_h


def _resolve_size(target: tuple[int, int], source: tuple[int, int]) -> tuple[int, int] | None:
    """Fill in a zero target dimension from the source aspect ratio."""
    target_w, target_h = target
    src_w, src_h = source

    if target_w <= 0 and target_h <= 0:
        return None
    if target_w <= 0:
        target_w = max(1, round(src_w * target_h / src_h))
    elif target_h <= 0:
        target_h = max(1, round(src_h * target_w / src_w))
    return target_w, target_h


def resize_image(source: Image.Image, config: GraphicConfig) -> Image.Image:
    """Resize an image according to the config's scale and canvas limits.

    The image is returned unchanged when the scale is 1.0 or the source size
    is unknown.
    """
    if config.scale == 1.0 or config.source_width == 0 or config.source_height == 0:
        return source

    size = _resolve_size(target_size(config), source.size)
    if size is None:
        logger.debug(f"Resize target collapsed to zero, keeping {source.width}x{source.height}")
        return source

    logger.debug(f"Resizing {source.width}x{source.height} -> {size[0]}x{size[1]} (scale={config.scale})")
    return source.resize(size, Image.Resampling.LANCZOS)


def flatten_pixel(pixel: RGBA, darkness: float) -> RGBA:
    """Composite one straight-alpha 8-bit RGBA pixel onto white.

    Channels are widened to 16 bits and premultiplied by alpha, then each is
    blended as ``(0xFFFF - bg*a) | (c*a*(1-darkness))`` and the high byte is
    kept. The result is always fully opaque.
    """
    r, g, b, a = pixel
    alpha16 = a * WIDEN_8_TO_16
    alpha = alpha16 / MAX_16
    background = MAX_16 - int(MAX_16 * alpha)
    dim = alpha * (1.0 - darkness)

    def blend(channel: int) -> int:
        premultiplied = channel * WIDEN_8_TO_16 * alpha16 // MAX_16
        value = background | int(premultiplied * dim)
        return (value >> 8) & 0xFF

    return blend(r), blend(g), blend(b), 0xFF


def flatten_image(source: Image.Image, config: GraphicConfig) -> Image.Image:
    """Resize and flatten an image so it is ready for thresholding.

    Args:
        source: Any Pillow image.
        config: Canvas limits, scale and darkness.

    Returns:
        A new opaque RGBA image.

    Raises:
        InvalidInputError: If the source image has no pixels.
    """
    if source.width <= 0 or source.height <= 0:
        raise InvalidInputError(f"Cannot flatten an empty image ({source.width}x{source.height})")

    image = resize_image(reduce_wide_grey(source), config).convert("RGBA")

    # Memoised per distinct pixel value
    flattened: dict[RGBA, RGBA] = {}
    pixels = []
    for pixel in rgba_pixels(image):
        flat = flattened.get(pixel)
        if flat is None:
            flat = flattened[pixel] = flatten_pixel(pixel, config.darkness)
        pixels.append(flat)

    target = Image.new("RGBA", image.size)
    target.putdata(pixels)
    return target
