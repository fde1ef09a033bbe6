from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_INSIGHT_BASE_URL,
    DEFAULT_INSIGHT_MODEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOP_ITEMS,
    DashboardConfig,
    InsightConfig,
    SheetSourceConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config/dashboard.yml
- Validate against config_schema.json (shipped next to this module)
- Apply defaults for optional keys
- Apply environment overrides (PPIC_SHEET_URL, LLM API key variables)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_api_key",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/dashboard.yml")

SHEET_URL_ENV = "PPIC_SHEET_URL"
# 先頭から順に参照 (Gemini キー優先)
API_KEY_ENVS = ("GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the config
            data fails schema validation.
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


def resolve_api_key() -> str | None:
    for name in API_KEY_ENVS:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config(path: Path) -> DashboardConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    sheet_raw = data["sheet"]
    sheet = SheetSourceConfig(
        url=os.getenv(SHEET_URL_ENV) or sheet_raw["url"],
        timeout_seconds=float(sheet_raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
    )

    insights_raw = data.get("insights") or {}
    insights = InsightConfig(
        model=insights_raw.get("model", DEFAULT_INSIGHT_MODEL),
        base_url=insights_raw.get("base_url", DEFAULT_INSIGHT_BASE_URL),
        max_tokens=insights_raw.get("max_tokens", DEFAULT_MAX_TOKENS),
        top_items=insights_raw.get("top_items", DEFAULT_TOP_ITEMS),
        api_key=resolve_api_key(),
    )

    return DashboardConfig(
        sheet=sheet,
        insights=insights,
        refresh_interval_seconds=float(
            data.get("refresh_interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS)
        ),
    )
