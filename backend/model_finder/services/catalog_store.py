from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import ValidationError

from model_finder.schemas import CatalogFile, CategoryFilter, ModelEntry, Source


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    category: CategoryFilter = "all"
    source: Source = "recommended"
    query: str = ""

    def with_changes(self, **changes) -> Selection:
        return replace(self, **changes)

    @property
    def is_live(self) -> bool:
        return self.source != "recommended"


def unique_by_id(models: list[ModelEntry], origin: str) -> tuple[ModelEntry, ...]:
    seen: set[str] = set()
    out: list[ModelEntry] = []
    for m in models:
        if m.id in seen:
            logger.warning("Dropping duplicate model id %r from %s", m.id, origin)
            continue
        seen.add(m.id)
        out.append(m)
    return tuple(out)


class CatalogStore:
    """Curated models (loaded once) plus the latest hub result page."""

    def __init__(self) -> None:
        self._curated: tuple[ModelEntry, ...] = ()
        self._curated_loaded = False
        # None until the first successful fetch.
        self._api: tuple[ModelEntry, ...] | None = None

    @property
    def curated(self) -> tuple[ModelEntry, ...]:
        return self._curated

    @property
    def api(self) -> tuple[ModelEntry, ...]:
        return self._api or ()

    @property
    def api_loaded(self) -> bool:
        return self._api is not None

    def load_curated(self, path: Path) -> None:
        if self._curated_loaded:
            logger.debug("Curated catalog already loaded, ignoring %s", path)
            return
        self._curated_loaded = True
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
            catalog = CatalogFile.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Failed to load curated models from %s: %s", path, e)
            return
        self._curated = unique_by_id(catalog.models, str(path))
        logger.info("Loaded %d curated models from %s", len(self._curated), path)

    def replace_api(self, models: list[ModelEntry]) -> None:
        self._api = unique_by_id(models, "hub")

    def collection(self, source: Source) -> tuple[ModelEntry, ...]:
        return self.curated if source == "recommended" else self.api

    def find(self, model_id: str) -> ModelEntry | None:
        for m in (*self.curated, *self.api):
            if m.id == model_id:
                return m
        return None
