"""Pydantic models for zplgfa."""

from zplgfa.models.graphic import GraphicConfig, GraphicType

__all__ = [
    "GraphicConfig",
    "GraphicType",
]
