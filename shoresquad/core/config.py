"""Configuration loading from YAML and environment variables."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from shoresquad.core.exceptions import ConfigError
from shoresquad.core.models import AppConfig

logger = logging.getLogger(__name__)

ENV_API_KEY = "OPENWEATHER_API_KEY"
ENV_STORAGE_PATH = "SHORESQUAD_STORAGE_PATH"
ENV_CONFIG_PATH = "SHORESQUAD_CONFIG"


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Build the application config.

    Values come from the YAML file (``path`` or ``$SHORESQUAD_CONFIG``), then
    environment overrides for the API key and storage path.

    Args:
        path: Optional YAML config file
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated application config

    Raises:
        ConfigError: If the file is missing, unparseable or invalid
    """
    env = os.environ if env is None else env
    path = path or env.get(ENV_CONFIG_PATH)

    data: dict[str, Any] = {}
    if path:
        data = _read_yaml(Path(path).expanduser())
        logger.debug(f"Loaded config from {path}")

    if env.get(ENV_API_KEY):
        data.setdefault("api", {})["weather_api_key"] = env[ENV_API_KEY]
    if env.get(ENV_STORAGE_PATH):
        data["storage_path"] = Path(env[ENV_STORAGE_PATH]).expanduser()

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
