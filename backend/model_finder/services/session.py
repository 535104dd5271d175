from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from model_finder.core.config import Settings, settings as default_settings
from model_finder.schemas import ModelEntry
from model_finder.services.catalog_store import CatalogStore, Selection
from model_finder.services.debounce import Debouncer, Scheduler
from model_finder.services.hub_client import FetchFailure
from model_finder.services.model_filter import GridView, build_grid


logger = logging.getLogger(__name__)


class ModelFetcher(Protocol):
    async def fetch_models(self, source: str, category: str) -> list[ModelEntry]: ...


class FinderSession:
    """Single-user UI state: one Selection snapshot, the store, and fetch bookkeeping."""

    def __init__(
        self,
        store: CatalogStore,
        fetcher: ModelFetcher,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        cfg = settings or default_settings
        self.store = store
        self.fetcher = fetcher
        self.selection = Selection()
        self.loading = False
        self.error = False
        self._generation = 0
        self._debouncer = Debouncer(cfg.search_debounce_ms / 1000, scheduler)
        self._pending_search: asyncio.Future[bool] | None = None

    def grid(self) -> GridView:
        return build_grid(self.store, self.selection, loading=self.loading, error=self.error)

    def find(self, model_id: str) -> ModelEntry | None:
        return self.store.find(model_id)

    async def select_category(self, category: str) -> GridView:
        self.selection = self.selection.with_changes(category=category)
        await self._refresh()
        return self.grid()

    async def select_source(self, source: str) -> GridView:
        self.selection = self.selection.with_changes(source=source)
        await self._refresh()
        return self.grid()

    async def _refresh(self) -> None:
        # Any transition makes in-flight fetches stale.
        self._generation += 1
        self.error = False
        if not self.selection.is_live:
            self.loading = False
            return
        await self._fetch(self._generation, self.selection)

    async def _fetch(self, generation: int, selection: Selection) -> None:
        self.loading = True
        try:
            models = await self.fetcher.fetch_models(selection.source, selection.category)
        except FetchFailure as e:
            if generation == self._generation:
                logger.warning("Failed to fetch from Hugging Face: %s", e)
                self.error = True
            else:
                logger.debug("Ignoring failure of stale fetch #%d: %s", generation, e)
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug("Discarding stale fetch #%d (current #%d)", generation, self._generation)
            return
        self.store.replace_api(models)

    def apply_query(self, query: str) -> None:
        self.selection = self.selection.with_changes(query=query)

    def _supersede_pending_search(self) -> None:
        if self._pending_search is not None and not self._pending_search.done():
            self._pending_search.set_result(False)

    def type_query(self, query: str) -> None:
        """Debounced variant of :meth:`apply_query`."""
        self._supersede_pending_search()
        self._debouncer.submit(self.apply_query, query)

    async def search(self, query: str) -> GridView | None:
        """Apply ``query`` after the quiet period.

        Returns None when a newer search superseded this one before it fired.
        """
        loop = asyncio.get_running_loop()
        self._supersede_pending_search()
        fut: asyncio.Future[bool] = loop.create_future()
        self._pending_search = fut

        def fire(q: str) -> None:
            self.apply_query(q)
            if not fut.done():
                fut.set_result(True)

        self._debouncer.submit(fire, query)
        if not await fut:
            return None
        return self.grid()
