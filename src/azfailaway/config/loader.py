"""Configuration loading.

The process environment is read here and nowhere else; components receive
their configuration section explicitly.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from azfailaway.config.schemas.app_schema import AppConfig
from azfailaway.domain.exceptions import ConfigurationError

# environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "AWS_DEFAULT_REGION": ("aws", "region"),
    "AWS_REGION": ("aws", "region"),
    "AWS_PROFILE": ("aws", "profile"),
    "AZ_FAILAWAY_ENDPOINT_URL": ("aws", "endpoint_url"),
    "AZ_FAILAWAY_TABLE_NAME": ("recovery_store", "table_name"),
    "AZ_FAILAWAY_MAX_CONCURRENCY": ("orchestrator", "max_concurrency"),
    "AZ_FAILAWAY_LOG_LEVEL": ("logging", "level"),
    "AZ_FAILAWAY_LOG_FILE": ("logging", "file_path"),
}


def _read_file(path: Union[str, Path]) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Load configuration from an optional JSON file plus environment overrides.

    Args:
        path: JSON configuration file
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated application configuration

    Raises:
        ConfigurationError: If the file cannot be read or validation fails
    """
    environ = os.environ if environ is None else environ
    data = _read_file(path) if path else {}

    # AWS_REGION wins over AWS_DEFAULT_REGION because it is applied later
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            data.setdefault(section, {})[key] = value

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
