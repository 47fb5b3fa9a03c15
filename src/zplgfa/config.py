"""Configuration management for zplgfa."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zplgfa.models.graphic import DEFAULT_DARKNESS, DEFAULT_SCALE

logger = logging.getLogger(__name__)


class ConversionDefaults(BaseModel):
    """Conversion defaults loaded from zplgfa.yaml."""

    graphic_type: str = "compressedascii"
    scale: float = DEFAULT_SCALE
    darkness: float = DEFAULT_DARKNESS
    # Canvas limits; None means the source image's own size
    max_width: int | None = None
    max_height: int | None = None
    edits: list[str] = Field(default_factory=list)
    # Wrap the field in ^XA/^XZ label framing
    label: bool = True


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZPLGFA_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("zplgfa.yaml")
    debug: bool = False


def load_config(config_path: Path) -> ConversionDefaults:
    """Load conversion defaults from a YAML file.

    A missing file yields the built-in defaults.
    """
    if not config_path.exists():
        logger.debug(f"Config file {config_path} not found, using defaults")
        return ConversionDefaults()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # YAML returns None for empty keys
    if data.get("edits") is None:
        data["edits"] = []

    logger.info(f"Loaded conversion defaults from {config_path}")
    return ConversionDefaults.model_validate(data)
