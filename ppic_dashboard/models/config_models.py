from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the PPIC dashboard.

Populated by ppic_dashboard.config.loader from config/dashboard.yml after JSON
schema validation. Defaults mirror the schema defaults so that a minimal YAML
(only ``sheet.url``) is enough to run.
"""

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_INSIGHT_MODEL = "gemini-2.0-flash"
DEFAULT_INSIGHT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TOP_ITEMS = 5
DEFAULT_REFRESH_INTERVAL_SECONDS = 300.0


@dataclass(frozen=True)
class SheetSourceConfig:
    """Where the CSV export of the production sheet is fetched from."""
    url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class InsightConfig:
    """LLM advisor settings (OpenAI-compatible endpoint).

    api_key is never read from YAML; the loader resolves it from the
    environment (.env included).
    """
    model: str = DEFAULT_INSIGHT_MODEL
    base_url: str | None = DEFAULT_INSIGHT_BASE_URL
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_items: int = DEFAULT_TOP_ITEMS  # digest に載せる品目数
    api_key: str | None = None


@dataclass(frozen=True)
class DashboardConfig:
    """Root configuration object."""
    sheet: SheetSourceConfig
    insights: InsightConfig
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
