# universe_rag/config.py
"""
Configuration schema and loading for the Universe adapter.

Hosts pass the adapter a plain mapping using camelCase keys:

    {"serverUrl": "https://store.example", "universe": "docs"}

`universeName` is accepted as an alias for `universe`. The same mapping can
live in a YAML file, either at the top level or under a `universe_rag:` key:

    universe_rag:
      serverUrl: https://store.example
      universe: docs
      timeout: 30
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Mapping, Union

import httpx
import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from universe_rag.exceptions import ConfigError
from universe_rag.logging.logger import get_logger
from universe_rag.logging.tags import CONFIG

logger = get_logger(__name__)

UNIVERSE_NAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")

CONFIG_SECTION = "universe_rag"


class UniverseConfig(BaseModel):
    """
    Validated adapter configuration.

    Immutable once built. Unknown keys are ignored because hosts usually
    hand over a broader config mapping.
    """

    server_url: str = Field(
        ...,
        validation_alias=AliasChoices("serverUrl", "server_url"),
        description="Base URL of the Universe server",
    )

    universe: str = Field(
        ...,
        validation_alias=AliasChoices("universe", "universeName"),
        description="Universe (collection) name, alphanumeric and underscores",
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    retry_delay: float = Field(
        default=1.0,
        ge=0,
        description="Seconds to wait before retrying a failed connection",
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("server_url")
    @classmethod
    def check_server_url(cls, v: str) -> str:
        if not v:
            raise ValueError("serverUrl must be specified in the config")
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError("serverUrl must be a valid URL") from e
        if not url.scheme or not url.host:
            raise ValueError("serverUrl must be a valid URL")
        return v

    @field_validator("universe")
    @classmethod
    def check_universe(cls, v: str) -> str:
        if not v:
            raise ValueError("universe must be specified in the config")
        if not UNIVERSE_NAME_PATTERN.fullmatch(v):
            raise ValueError("universe must be alphanumeric with underscores")
        return v


_FIELD_ALIASES = {
    "serverUrl": "server_url",
    "universeName": "universe",
}


def config_field(key: str) -> str:
    """Map an input key (camelCase alias or field name) to its field name."""
    return _FIELD_ALIASES.get(key, key)


def _format_errors(exc: PydanticValidationError) -> tuple[str, tuple[str, ...]]:
    messages = []
    fields = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "config"
        fields.append(config_field(field))
        if err["type"] == "missing":
            messages.append(f"{field} must be specified in the config")
        elif err["type"] == "value_error":
            messages.append(err["msg"].removeprefix("Value error, "))
        else:
            messages.append(f"{field}: {err['msg']}")
    return "; ".join(messages), tuple(fields)


def parse_config(
    data: Union[UniverseConfig, Mapping[str, Any]],
    path: Path | None = None,
) -> UniverseConfig:
    """
    Validate a config mapping.

    Raises:
        ConfigError: If a field is missing or invalid
    """
    if isinstance(data, UniverseConfig):
        return data

    if not isinstance(data, Mapping):
        raise ConfigError("Config must be a mapping", path=path)

    try:
        return UniverseConfig.model_validate(dict(data))
    except PydanticValidationError as e:
        message, fields = _format_errors(e)
        raise ConfigError(message, path=path, fields=fields) from e


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping
    """
    p = Path(path)

    if not p.exists():
        raise ConfigError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}", path=p) from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"{CONFIG} Loaded config from {p}")
    return data


def read_config_section(path: Union[str, Path]) -> dict[str, Any]:
    """Raw adapter settings from a YAML file, unwrapping `universe_rag:` if present."""
    data = load_yaml(path)

    section = data.get(CONFIG_SECTION)
    if isinstance(section, dict):
        return dict(section)
    return data


def load_config(path: Union[str, Path]) -> UniverseConfig:
    """Load and validate a YAML config file."""
    p = Path(path)
    return parse_config(read_config_section(p), path=p)
