from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "delve"
CONFIG_FILENAME = "generation.yaml"

# Environment variable overrides (useful for tests and power users)
ENV_CONFIG_DIR = "DELVE_CONFIG_DIR"
ENV_OVERRIDES = {
    "DELVE_SEED": "seed",
    "DELVE_MAX_RETRIES": "max_retries",
    "DELVE_CORRIDOR_ROOMS": "corridor_rooms",
}


class GenerationSettings(BaseModel):
    """Tunable constants of the generation pipeline.

    All ``*_max`` bounds are exclusive, matching how the placement steps
    sample them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed: Optional[int] = Field(default=None, description="Seed for the shared random source")
    max_retries: int = Field(default=1000, ge=1, description="Attempt bound of retryable steps")
    room_min_size: int = Field(default=6, ge=3, description="Smallest room side")
    room_max_size: int = Field(default=16, description="Room side upper bound (exclusive)")
    corridor_min_length: int = Field(default=3, ge=3, description="Shortest corridor")
    corridor_max_length: int = Field(default=12, description="Corridor length upper bound (exclusive)")
    seed_region_min: int = Field(default=20, description="Lower corner of the first room's region")
    seed_region_max: int = Field(default=25, description="Upper bound of the first room's region (exclusive)")
    corridor_rooms: int = Field(default=8, ge=0, description="Corridor-then-room steps in the standard pipeline")

    @model_validator(mode="after")
    def check_ranges(self) -> "GenerationSettings":
        for lo, hi in (
            ("room_min_size", "room_max_size"),
            ("corridor_min_length", "corridor_max_length"),
            ("seed_region_min", "seed_region_max"),
        ):
            if getattr(self, hi) <= getattr(self, lo):
                raise ValueError(f"{hi} must be greater than {lo}")
        return self

    @classmethod
    def default_config_path(cls) -> Path:
        override = os.environ.get(ENV_CONFIG_DIR)
        base = Path(override) if override else Path(user_config_dir(APP_NAME))
        return base / CONFIG_FILENAME

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "GenerationSettings":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError("Invalid generation settings", e.errors()) from e

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> "GenerationSettings":
        """Build settings from defaults, YAML, environment and explicit overrides.

        Later sources win. ``path`` defaults to ``generation.yaml`` in the user
        config directory; a missing default file is not an error, a missing
        explicit one is.
        """
        data: Dict[str, Any] = {}
        if path is not None:
            cfg_path = Path(path)
            if not cfg_path.exists():
                raise ConfigError(f"Config file not found: {cfg_path}")
            data.update(_load_yaml(cfg_path))
        else:
            cfg_path = cls.default_config_path()
            if cfg_path.exists():
                data.update(_load_yaml(cfg_path))

        for env_key, attr in ENV_OVERRIDES.items():
            if env_key in os.environ:
                data[attr] = os.environ[env_key]
                logger.debug("Environment override %s=%s", env_key, os.environ[env_key])

        data.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls.from_mapping(data)
        logger.debug("Loaded generation settings: %s", settings)
        return settings


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}, got {type(raw).__name__}")
    logger.debug("Loaded generation config from path: %s", path)
    return raw


DEFAULT_SETTINGS = GenerationSettings()

__all__ = ["GenerationSettings", "DEFAULT_SETTINGS", "ENV_CONFIG_DIR", "ENV_OVERRIDES"]
