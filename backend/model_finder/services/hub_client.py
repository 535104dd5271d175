from __future__ import annotations

import logging
from typing import Any

import httpx

from model_finder.core.config import Settings, settings as default_settings
from model_finder.schemas import ModelEntry
from model_finder.services.catalog_store import unique_by_id
from model_finder.services.normalizer import extract_param_count, transform


logger = logging.getLogger(__name__)


# Category tab -> hub pipeline tag used as the search filter.
CATEGORY_FILTERS: dict[str, str] = {
    "llm": "text-generation",
    "embedding": "feature-extraction",
    "ocr": "image-to-text",
    "tts": "text-to-speech",
    "stt": "automatic-speech-recognition",
}


class FetchFailure(Exception):
    """The hub search could not produce a usable result page."""


def build_query(source: str, category: str, page_size: int) -> dict[str, Any]:
    params: dict[str, Any] = {
        "sort": "likes" if source == "trending" else "lastModified",
        "direction": -1,
        "limit": page_size,
    }
    if category != "all":
        pipeline_tag = CATEGORY_FILTERS.get(category)
        if pipeline_tag:
            params["filter"] = pipeline_tag
    return params


def within_ceiling(record: dict[str, Any], max_params: float) -> bool:
    count = extract_param_count(record)
    return count is None or count <= max_params


class HubClient:
    def __init__(self, client: httpx.AsyncClient | None = None, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._settings.hub_timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_models(self, source: str, category: str) -> list[ModelEntry]:
        url = self._settings.hub_models_url()
        params = build_query(source, category, self._settings.hub_page_size)
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise FetchFailure(f"Hub request failed: {e}") from e

        if not resp.is_success:
            raise FetchFailure(f"Hub request failed with status {resp.status_code}")
        try:
            records = resp.json()
        except ValueError as e:
            raise FetchFailure("Hub returned invalid JSON") from e
        if not isinstance(records, list):
            raise FetchFailure("Hub returned an unexpected payload")

        ceiling = self._settings.max_params_billions
        models = [
            transform(r)
            for r in records
            if isinstance(r, dict) and (r.get("modelId") or r.get("id")) and within_ceiling(r, ceiling)
        ]
        logger.info(
            "Fetched %d hub models (%d kept) for source=%s category=%s",
            len(records),
            len(models),
            source,
            category,
        )
        return list(unique_by_id(models, "hub"))
