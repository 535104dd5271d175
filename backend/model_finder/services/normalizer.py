"""Turns raw hub search records into :class:`ModelEntry` values.

Hub records are plain JSON objects; any field may be missing or carry an
unexpected type, so every accessor here degrades to ``None``/0 instead of
raising.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from model_finder.schemas import Category, ModelEntry


_PARAM_PATTERN = re.compile(r"(\d+(?:\.\d+)?)[Bb]")

# (category, pipeline_tag, tag) checked in order; first hit wins.
_CATEGORY_RULES: tuple[tuple[Category, str, str], ...] = (
    ("llm", "text-generation", "text-generation"),
    ("embedding", "feature-extraction", "sentence-similarity"),
    ("ocr", "image-to-text", "ocr"),
    ("tts", "text-to-speech", "tts"),
    ("stt", "automatic-speech-recognition", "speech"),
)
_FALLBACK_CATEGORY: Category = "llm"

USE_CASE_LIMIT = 4


def _record_id(record: Mapping[str, Any]) -> str:
    value = record.get("modelId") or record.get("id") or ""
    return value if isinstance(value, str) else str(value)


def _as_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)) and value >= 0:
        return int(value)
    return 0


def _tags(record: Mapping[str, Any]) -> list[str]:
    tags = record.get("tags")
    if not isinstance(tags, (list, tuple)):
        return []
    return [t for t in tags if isinstance(t, str)]


def extract_param_count(record: Mapping[str, Any]) -> float | None:
    """Parameter count in billions, or None when the size is unknown."""
    safetensors = record.get("safetensors")
    if isinstance(safetensors, Mapping):
        total = safetensors.get("total")
        if isinstance(total, (int, float)) and not isinstance(total, bool):
            if math.isfinite(total) and total > 0:
                return total / 1e9

    match = _PARAM_PATTERN.search(_record_id(record))
    if match:
        return float(match.group(1))
    return None


def detect_category(record: Mapping[str, Any]) -> Category:
    pipeline = record.get("pipeline_tag") or ""
    tags = _tags(record)
    for category, pipeline_tag, tag in _CATEGORY_RULES:
        if pipeline == pipeline_tag or tag in tags:
            return category
    # Not a positive match: anything unclassified is listed as an LLM.
    return _FALLBACK_CATEGORY


def format_params(count: float | None) -> str:
    if not count:
        return "Unknown"
    return f"{count:.1f}B"


def format_number(value: int | float | None) -> str:
    if value is None:
        return "0"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(int(value))


def transform(record: Mapping[str, Any]) -> ModelEntry:
    model_id = _record_id(record)
    downloads = _as_count(record.get("downloads"))
    likes = _as_count(record.get("likes"))

    description = record.get("description")
    if not isinstance(description, str) or not description:
        description = f"{downloads:,} Downloads | {likes:,} Likes"

    last_modified = record.get("lastModified")
    return ModelEntry(
        id=model_id,
        name=model_id.split("/")[-1],
        category=detect_category(record),
        params=format_params(extract_param_count(record)),
        description=description,
        use_cases=_tags(record)[:USE_CASE_LIMIT],
        recommended=False,
        downloads=downloads,
        likes=likes,
        last_modified=last_modified if isinstance(last_modified, str) else None,
        from_api=True,
    )
