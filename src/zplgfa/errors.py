"""Exceptions raised by the conversion pipeline."""


class ConversionError(Exception):
    """Base exception for image to graphic field conversion errors."""

    pass


class InvalidInputError(ConversionError, ValueError):
    """Raised when an image or dimension cannot be encoded (e.g. zero-sized)."""

    pass
