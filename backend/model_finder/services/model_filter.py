from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from model_finder.schemas import ModelEntry
from model_finder.services.catalog_store import CatalogStore, Selection


GridState = Literal["loading", "error", "not_loaded", "empty", "results"]


@dataclass(frozen=True)
class GridView:
    state: GridState
    selection: Selection
    models: tuple[ModelEntry, ...] = ()


def _matches(model: ModelEntry, needle: str) -> bool:
    return (
        needle in (model.name or "").lower()
        or needle in (model.description or "").lower()
        or needle in (model.id or "").lower()
    )


def filter_models(collection: Iterable[ModelEntry], category: str, query: str) -> list[ModelEntry]:
    """Category and free-text filter; keeps the collection's order."""
    models = list(collection)
    if category != "all":
        models = [m for m in models if m.category == category]
    if query:
        needle = query.lower()
        models = [m for m in models if _matches(m, needle)]
    return models


def build_grid(store: CatalogStore, selection: Selection, *, loading: bool = False, error: bool = False) -> GridView:
    if selection.is_live:
        if loading:
            return GridView(state="loading", selection=selection)
        if error:
            return GridView(state="error", selection=selection)
        if not store.api_loaded:
            return GridView(state="not_loaded", selection=selection)

    models = filter_models(store.collection(selection.source), selection.category, selection.query)
    if not models:
        return GridView(state="empty", selection=selection)
    return GridView(state="results", selection=selection, models=tuple(models))
