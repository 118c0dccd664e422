"""
Pytest configuration and fixtures.

Root-level fixtures shared across all test modules.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before the app reads its settings
os.environ["APP_ENV"] = "test"
os.environ.pop("COLLECTION_DATABASE_URL", None)
os.environ.pop("COLLECTION_STORE_KEY", None)

from mtg_synergy.api.deps import get_card_lookup, get_collection_store  # noqa: E402
from mtg_synergy.core.database import create_engine  # noqa: E402
from mtg_synergy.core.errors import CardNotFoundError, UpstreamError  # noqa: E402
from mtg_synergy.core.security import Identity, create_access_token  # noqa: E402
from mtg_synergy.main import app  # noqa: E402
from mtg_synergy.services.collection import JsonFileCollectionStore, SqlCollectionStore  # noqa: E402
from mtg_synergy.services.scryfall import BatchLookupResult  # noqa: E402

TEST_STORE_KEY = "test-store-key"


def make_card(name: str, **extra) -> Dict:
    """Minimal Scryfall-like card object."""
    card = {
        "object": "card",
        "id": name.lower().replace(" ", "-"),
        "name": name,
        "type_line": "Instant",
    }
    card.update(extra)
    return card


KNOWN_CARDS = {
    card["name"].lower(): card
    for card in [
        make_card("Lightning Bolt", mana_cost="{R}"),
        make_card("Counterspell", mana_cost="{U}{U}"),
        make_card("Llanowar Elves", type_line="Creature - Elf Druid"),
        make_card("Sol Ring", type_line="Artifact"),
        make_card("Fire // Ice", type_line="Instant // Instant"),
    ]
}

# Names that make the fake upstream fail at the transport level
BROKEN_NAMES = {"broken card"}


class FakeCardLookup:
    """
    Stand-in for ScryfallLookup that never touches the network.

    Fuzzy matching accepts any case-insensitive substring of a known name.
    Every requested name is recorded in `calls`.
    """

    def __init__(self):
        self.calls: List[str] = []

    def _check_broken(self, name: str) -> None:
        if name.lower() in BROKEN_NAMES:
            raise UpstreamError("Scryfall request failed: connection reset")

    async def lookup_exact(self, name: str) -> Dict:
        self.calls.append(name)
        self._check_broken(name)
        card = KNOWN_CARDS.get(name.lower())
        if card is None:
            raise CardNotFoundError(name)
        return dict(card)

    async def lookup_fuzzy(self, name: str) -> Dict:
        self.calls.append(name)
        self._check_broken(name)
        query = name.lower()
        for key, card in KNOWN_CARDS.items():
            if query == key or query in key:
                return dict(card)
        raise CardNotFoundError(name)

    async def lookup_batch(self, names) -> BatchLookupResult:
        batch = BatchLookupResult()
        for name in names:
            try:
                batch.results.append(await self.lookup_fuzzy(name))
            except (CardNotFoundError, UpstreamError):
                batch.errors.append(name)
        return batch


# === Marker Configuration ===

def pytest_collection_modifyitems(config, items):
    """Automatically add markers based on test module name."""
    for item in items:
        if "_api" in item.path.name:
            item.add_marker(pytest.mark.api)
        if "relational" in item.path.name or "sql" in item.path.name:
            item.add_marker(pytest.mark.relational)


# === Service Fixtures ===

@pytest.fixture
def fake_lookup() -> FakeCardLookup:
    """Offline Scryfall lookup."""
    return FakeCardLookup()


@pytest.fixture
def file_store(tmp_path) -> JsonFileCollectionStore:
    """JSON file store in a fresh temporary directory."""
    return JsonFileCollectionStore(tmp_path / "collection.json")


@pytest_asyncio.fixture
async def sql_store(tmp_path) -> AsyncGenerator[SqlCollectionStore, None]:
    """Relational store on a temporary SQLite database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'collection.db'}")
    store = SqlCollectionStore(engine, secret_key=TEST_STORE_KEY)
    await store.init()

    yield store

    await store.close()


@pytest.fixture
def alice() -> Identity:
    return Identity(token=create_access_token("alice", secret_key=TEST_STORE_KEY, algorithm="HS256"))


@pytest.fixture
def bob() -> Identity:
    return Identity(token=create_access_token("bob", secret_key=TEST_STORE_KEY, algorithm="HS256"))


# === HTTP Client Fixtures ===

@asynccontextmanager
async def _client_for(store, lookup) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_card_lookup] = lambda: lookup
    app.dependency_overrides[get_collection_store] = lambda: store
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(file_store, fake_lookup) -> AsyncGenerator[AsyncClient, None]:
    """Test HTTP client backed by the JSON file store."""
    async with _client_for(file_store, fake_lookup) as ac:
        yield ac


@pytest_asyncio.fixture
async def sql_client(sql_store, fake_lookup) -> AsyncGenerator[AsyncClient, None]:
    """Test HTTP client backed by the relational store."""
    async with _client_for(sql_store, fake_lookup) as ac:
        yield ac
