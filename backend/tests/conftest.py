"""Pytest configuration and fixtures."""

import asyncio
import json
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from model_finder.api.deps import get_hub_client, get_session
from model_finder.main import app
from model_finder.schemas import ModelEntry
from model_finder.services.catalog_store import CatalogStore
from model_finder.services.hub_client import FetchFailure
from model_finder.services.session import FinderSession


CURATED = [
    {
        "id": "meta-llama/Llama-3-8B",
        "name": "Llama-3-8B",
        "category": "llm",
        "params": "8.0B",
        "description": "General purpose chat model.",
        "use_cases": ["Chat", "Coding", "Summaries", "Agents"],
        "recommended": True,
        "install_cmd": "pip install transformers",
        "python_code": 'print("authored llama snippet")',
    },
    {
        "id": "openai/whisper-base",
        "name": "Whisper-Base",
        "category": "stt",
        "params": "0.1B",
        "description": "Speech recognition.",
        "use_cases": ["Transcription"],
        "recommended": False,
    },
    {
        "id": "BAAI/bge-small-en",
        "name": "bge-small-en",
        "category": "embedding",
        "params": "0.1B",
        "description": "Compact English embeddings.",
        "use_cases": ["Search"],
        "recommended": True,
    },
]


class FakeHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock for the debouncer."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, seconds):
        self.now += seconds
        due = [h for h in self.handles if not h.cancelled and h.when <= self.now + 1e-9]
        self.handles = [h for h in self.handles if h not in due]
        for h in due:
            h.callback(*h.args)


class StubFetcher:
    """Returns canned models, or raises FetchFailure when ``fail`` is set."""

    def __init__(self, models=None, fail=False):
        self.models = models or []
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    async def fetch_models(self, source, category):
        self.calls.append((source, category))
        if self.fail:
            raise FetchFailure("hub unavailable")
        return list(self.models)


class ControlledFetcher:
    """Each call blocks until the test resolves its future."""

    def __init__(self):
        self.calls: list[tuple[str, str, asyncio.Future]] = []

    async def fetch_models(self, source, category):
        fut = asyncio.get_running_loop().create_future()
        self.calls.append((source, category, fut))
        return await fut


def hub_entry(model_id, category="llm", **extra):
    return ModelEntry(
        id=model_id,
        name=model_id.split("/")[-1],
        category=category,
        from_api=True,
        downloads=extra.pop("downloads", 1500),
        likes=extra.pop("likes", 42),
        **extra,
    )


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"models": CURATED}), encoding="utf-8")
    return path


@pytest.fixture
def store(catalog_file: Path) -> CatalogStore:
    s = CatalogStore()
    s.load_curated(catalog_file)
    return s


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def fetcher() -> StubFetcher:
    return StubFetcher(models=[hub_entry("tiiuae/falcon-7b-instruct"), hub_entry("BAAI/bge-base", "embedding")])


@pytest.fixture
def session(store: CatalogStore, fetcher: StubFetcher, scheduler: FakeScheduler) -> FinderSession:
    return FinderSession(store, fetcher, scheduler=scheduler)


@pytest_asyncio.fixture
async def client(session: FinderSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the session and hub client overridden."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_hub_client] = lambda: session.fetcher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
