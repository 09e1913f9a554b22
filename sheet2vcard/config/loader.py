from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from dotenv import load_dotenv
from jsonschema.exceptions import ValidationError

"""Configuration loader.

Responsibilities:
- Load YAML (config/app.yml by default, SHEET2VCARD_CONFIG / --config override)
- Validate against the bundled JSON schema (additionalProperties: false)
- Apply defaults for missing keys
"""

__all__ = [
    "AppConfig",
    "CONFIG_ENV_VAR",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_env_file",
    "resolve_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/app.yml")
CONFIG_ENV_VAR = "SHEET2VCARD_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    output_directory: str = "."  # CLI writes contacts.vcf here
    error_log_directory: str = "./logs"  # errors-*.log JSON Lines
    log_level: str = "INFO"
    page_title: str = "Excel to vCard"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: The schema file is missing or invalid, or ``data``
            violates it.
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = AppConfig()
    return AppConfig(
        output_directory=data.get("output_directory", defaults.output_directory),
        error_log_directory=data.get("error_log_directory", defaults.error_log_directory),
        log_level=data.get("log_level", defaults.log_level),
        page_title=data.get("page_title", defaults.page_title),
    )


def load_env_file(path: Path, override: bool = False) -> None:
    """Load ``path`` into the process environment via python-dotenv, if present."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def resolve_config(explicit: Path | None = None) -> AppConfig:
    """Load configuration from the first source that applies.

    1. ``explicit`` (e.g. ``--config``): must exist
    2. ``SHEET2VCARD_CONFIG`` environment variable (``.env`` honoured): must exist
    3. ``config/app.yml``: used when present, defaults otherwise
    """
    load_env_file(Path(".env"))
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig()
