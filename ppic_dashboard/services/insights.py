"""LLM insight advisor for the production dashboard.

Builds a short textual digest of a DashboardModel (totals and top items by
inventory), sends it to an OpenAI-compatible chat completion endpoint (Gemini
by default) and returns free-text bullet insights. The returned text is only
split into lines for display; it is not parsed further.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import openai
from openai import OpenAI

from ..models.config_models import InsightConfig
from ..models.dashboard import DashboardModel

logger = logging.getLogger(__name__)

__all__ = [
    "BaseLLMAdapter",
    "OpenAILLMAdapter",
    "MockLLMAdapter",
    "InsightAdvisor",
    "build_digest",
    "build_prompt",
    "split_insights",
    "EMPTY_RESPONSE_TEXT",
    "FALLBACK_TEXT",
]

EMPTY_RESPONSE_TEXT = "Unable to generate insights at this time."
FALLBACK_TEXT = "Error connecting to AI advisor. Please try again later."

_INSTRUCTIONS = (
    "Analyze this production data and provide 3-4 actionable bullet-point insights "
    "for management. Focus on rework issues, inventory levels, and production "
    "bottlenecks. Keep it professional and concise."
)


def build_digest(model: DashboardModel, top_items: int = 5) -> str:
    """Render the human-readable digest sent to the advisor.

    Items are ranked by finished goods inventory, largest first; ties keep
    sheet order.
    """
    s = model.summary
    lines = [
        "Production Summary:",
        f"- Total PO Qty: {s.total_po_qty}",
        f"- Total Stock In: {s.total_stock_in}",
        f"- Total Remaining: {s.total_remaining}",
        f"- Total Rework: {s.total_rework}",
        f"- Current Inventory: {s.total_inventory}",
        "",
        "Top Items by Inventory:",
    ]
    ranked = sorted(model.items, key=lambda i: i.finished_goods_inventory, reverse=True)
    for item in ranked[:top_items]:
        lines.append(f"- {item.part_no} ({item.customer}): {item.finished_goods_inventory}")
    return "\n".join(lines)


def build_prompt(digest: str) -> str:
    return f"{_INSTRUCTIONS}\n\n{digest}"


def split_insights(text: str) -> list[str]:
    """Split advisor output into non-empty display lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


class BaseLLMAdapter(ABC):
    """Abstract base for all LLM adapters."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt to the LLM and return the raw response text."""


class OpenAILLMAdapter(BaseLLMAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Gemini exposes an OpenAI-compatible endpoint, so the same client serves
    both; ``base_url`` selects the provider.
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        client_kwargs: dict = {"api_key": api_key or ""}
        if base_url:
            client_kwargs["base_url"] = base_url
        self._client = OpenAI(**client_kwargs)
        self._model = model
        self._max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: InsightConfig) -> OpenAILLMAdapter:
        return cls(
            model=config.model,
            api_key=config.api_key,
            base_url=config.base_url,
            max_tokens=config.max_tokens,
        )

    def generate(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self._max_tokens,
            stream=False,
        )
        return response.choices[0].message.content or ""


_MOCK_RESPONSE = "\n".join(
    [
        "- Rework volume is concentrated in a few part numbers; review their process first.",
        "- Finished goods inventory is available for the next shipment window.",
        "- Remaining quantity shows open PO balance; prioritise the oldest work orders.",
    ]
)


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter used offline and in tests."""

    def __init__(self, response: str = _MOCK_RESPONSE) -> None:
        self._response = response
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._response


class InsightAdvisor:
    """Turns a DashboardModel into management insights via an LLM adapter."""

    def __init__(self, adapter: BaseLLMAdapter, top_items: int = 5) -> None:
        self._adapter = adapter
        self._top_items = top_items

    def generate(self, model: DashboardModel) -> str:
        """Return insight text; fixed fallback text when the API call fails."""
        prompt = build_prompt(build_digest(model, self._top_items))
        try:
            text = self._adapter.generate(prompt)
        except openai.OpenAIError as e:
            logger.error(f"insights: {type(e).__name__}: {e}")
            return FALLBACK_TEXT
        return text or EMPTY_RESPONSE_TEXT
