"""Configuration for shape_schema.

Environment Variables (prefix ``SHAPE_SCHEMA_``, case-insensitive):
- SHAPE_SCHEMA_MAX_DEPTH: maximum record nesting depth (default: 32)
- SHAPE_SCHEMA_INDENT: JSON indentation width (default: 2)
- SHAPE_SCHEMA_TAG_KEY: metadata key holding field tags (default: "json")
- SHAPE_SCHEMA_OMIT_OPTION: tag option marking a field optional (default: "omitempty")

Values can also come from a YAML mapping via ``MapperSettings.from_yaml``.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigError
from .core.tags import DEFAULT_TAG_KEY, OMIT_EMPTY


class MapperSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHAPE_SCHEMA_", case_sensitive=False)

    max_depth: int = Field(32, ge=1)
    indent: int = Field(2, ge=0)
    tag_key: str = Field(DEFAULT_TAG_KEY, min_length=1)
    omit_option: str = Field(OMIT_EMPTY, min_length=1)

    @classmethod
    def from_yaml(cls, path: Union[str, Path], **overrides: Any) -> "MapperSettings":
        """Load settings from a YAML mapping; keyword overrides win over the file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}", config_path=str(path), original_error=e)

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping", config_path=str(path))

        values: Dict[str, Any] = {**data, **{k: v for k, v in overrides.items() if v is not None}}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}", config_path=str(path), original_error=e)


def get_settings(**overrides: Any) -> MapperSettings:
    """Settings from the environment, with non-None keyword overrides applied."""
    return MapperSettings(**{k: v for k, v in overrides.items() if v is not None})
