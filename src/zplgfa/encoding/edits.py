"""Optional image edits applied before conversion."""

import logging
from collections.abc import Callable, Iterable

from PIL import Image, ImageFilter, ImageOps

from zplgfa.encoding.packing import reduce_wide_grey

logger = logging.getLogger(__name__)


def _on_rgb(image: Image.Image, edit: Callable[[Image.Image], Image.Image]) -> Image.Image:
    """Apply an RGB-only edit while keeping the image's alpha channel."""
    image = image.convert("RGBA")
    alpha = image.getchannel("A")
    edited = edit(image.convert("RGB")).convert("RGBA")
    edited.putalpha(alpha)
    return edited


def invert(image: Image.Image) -> Image.Image:
    return _on_rgb(image, ImageOps.invert)


def monochrome(image: Image.Image) -> Image.Image:
    return image.convert("LA").convert("RGBA")


def blur(image: Image.Image) -> Image.Image:
    return image.convert("RGBA").filter(ImageFilter.GaussianBlur(radius=1))


def contrast(image: Image.Image) -> Image.Image:
    return _on_rgb(image, lambda rgb: ImageOps.autocontrast(rgb, cutoff=1))


EDITS: dict[str, Callable[[Image.Image], Image.Image]] = {
    "invert": invert,
    "monochrome": monochrome,
    "blur": blur,
    "contrast": contrast,
    "flip": ImageOps.flip,
    "mirror": ImageOps.mirror,
}


def parse_edits(values: Iterable[str]) -> list[str]:
    """Split comma-separated edit names, e.g. ``["invert,blur", "flip"]``."""
    names: list[str] = []
    for value in values:
        names.extend(name.strip().lower() for name in value.split(",") if name.strip())
    return names


def apply_edits(image: Image.Image, edits: Iterable[str]) -> Image.Image:
    """Apply named edits in order.

    Raises:
        ValueError: If an edit name is unknown.
    """
    for name in parse_edits(edits):
        edit = EDITS.get(name)
        if edit is None:
            raise ValueError(f"Unknown image edit '{name}'. Available: {', '.join(EDITS)}")
        logger.debug(f"Applying image edit: {name}")
        image = edit(reduce_wide_grey(image))
    return image
