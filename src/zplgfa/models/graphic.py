"""Graphic field conversion models."""

import math
from enum import IntEnum
from typing import Any

from PIL import Image
from pydantic import BaseModel, field_validator

DEFAULT_SCALE = 1.0
DEFAULT_DARKNESS = 0.1


class GraphicType(IntEnum):
    """Data encodings supported by the ZPL ^GF command."""

    ASCII = 0  # Uppercase hex, one row per line
    BINARY = 1  # Raw packed bytes
    COMPRESSED_ASCII = 2  # Hex compressed with the ZPL run-length alphabet

    @property
    def field_tag(self) -> str:
        """Compression type letter written after ^GF."""
        return "B" if self is GraphicType.BINARY else "A"

    @classmethod
    def parse(cls, value: "str | int | GraphicType") -> "GraphicType":
        """Look up a graphic type by name or integer value.

        Names are matched case-insensitively and ignore ``_`` and ``-``,
        so ``compressed-ascii``, ``CompressedASCII`` and ``compressed_ascii``
        are all accepted.

        Raises:
            ValueError: If the value does not name a graphic type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))

        normalized = text.replace("_", "").replace("-", "").upper()
        for member in cls:
            if member.name.replace("_", "") == normalized:
                return member
        raise ValueError(f"Unknown graphic type: {value}")


def clamp_scale(value: float) -> float:
    """Floor a scale at 0, treating 0 as the default 1.0."""
    value = max(0.0, value)
    return DEFAULT_SCALE if value == 0.0 else value


class GraphicConfig(BaseModel):
    """Preprocessing configuration for a single conversion.

    Out-of-range values are clamped rather than rejected: ``scale`` is
    floored at 0 and a zero scale means 1.0, ``darkness`` is clamped into
    [0, 1] and a zero darkness means the default 0.1.
    """

    max_width: int
    max_height: int
    scale: float = DEFAULT_SCALE
    darkness: float = DEFAULT_DARKNESS
    # Size of the source image; resizing is skipped while either is unknown (0)
    source_width: int = 0
    source_height: int = 0

    @field_validator("scale", mode="after")
    @classmethod
    def _clamp_scale(cls, value: float) -> float:
        return clamp_scale(value)

    @field_validator("darkness", mode="after")
    @classmethod
    def _clamp_darkness(cls, value: float) -> float:
        value = max(0.0, min(1.0, value))
        return DEFAULT_DARKNESS if value == 0.0 else value

    @classmethod
    def for_image(cls, image: Image.Image, **overrides: Any) -> "GraphicConfig":
        """Build a config whose source size is the image's size.

        Without explicit limits the canvas is the scaled source size, so a
        scale above 1.0 enlarges the image.
        """
        overrides = {key: value for key, value in overrides.items() if value is not None}
        width, height = image.size
        scale = clamp_scale(overrides.get("scale", DEFAULT_SCALE))
        values: dict[str, Any] = {
            "max_width": math.ceil(width * scale),
            "max_height": math.ceil(height * scale),
            "source_width": width,
            "source_height": height,
        }
        values.update(overrides)
        return cls.model_validate(values)
