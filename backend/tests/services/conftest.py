"""Service test fixtures — FastAPI test client over fixture dataset and upstream.

Invariants:
    - Every test gets a fresh DatasetStore over the DEX fixture file
    - get_dataset_store / get_ability_cache dependencies overridden per test
    - Upstream ability API replaced by httpx.MockTransport (no network)

Design Decisions:
    - Lifespan not run by ASGITransport: singletons are never touched, overrides
      are the only wiring
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from pokedex.infrastructure.ability_client import (
    AbilityDescriptionCache, get_ability_cache,
)
from pokedex.infrastructure.dataset_store import (
    DatasetStore, FileDatasetSource, get_dataset_store,
)
from pokedex.main import app
from tests.factories import ability_body


@pytest.fixture
def store(dataset_file) -> DatasetStore:
    return DatasetStore(FileDatasetSource(dataset_file))


@pytest.fixture
def upstream():
    """Upstream ability API: `responses` maps URL → Response, `calls` logs URLs."""
    state = {"calls": [], "responses": {}}

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        state["calls"].append(url)
        return state["responses"].get(url, httpx.Response(404))

    state["handler"] = handler
    return state


@pytest.fixture
async def ability_cache(upstream):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(upstream["handler"]),
    ) as http:
        yield AbilityDescriptionCache(http, timeout_seconds=10.0)


@pytest.fixture
async def client(store, ability_cache):
    """FastAPI test client with store and cache dependencies overridden."""
    app.dependency_overrides[get_dataset_store] = lambda: store
    app.dependency_overrides[get_ability_cache] = lambda: ability_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def static_ability(upstream) -> str:
    url = "https://pokeapi.example/api/v2/ability/static/"
    upstream["responses"][url] = httpx.Response(200, json=ability_body())
    return url
