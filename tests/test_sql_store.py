"""
Tests for the relational collection store.
"""

import pytest

from mtg_synergy.core.errors import DuplicateCardError, UnauthenticatedError
from mtg_synergy.core.security import ANONYMOUS, Identity, create_access_token
from mtg_synergy.services.collection import SqlCollectionStore

from .conftest import TEST_STORE_KEY, make_card


@pytest.mark.asyncio
async def test_load_empty_collection(sql_store, alice):
    assert await sql_store.load(alice) == []


@pytest.mark.asyncio
async def test_append_and_load_in_insertion_order(sql_store, alice):
    await sql_store.append(alice, make_card("Sol Ring"))
    await sql_store.append(alice, make_card("Counterspell", mana_cost="{U}{U}"))

    cards = await sql_store.load(alice)
    assert [card["name"] for card in cards] == ["Sol Ring", "Counterspell"]
    # The full opaque card object round-trips
    assert cards[1]["mana_cost"] == "{U}{U}"


@pytest.mark.asyncio
async def test_collections_are_isolated_per_identity(sql_store, alice, bob):
    await sql_store.append(alice, make_card("Sol Ring"))
    await sql_store.append(bob, make_card("Lightning Bolt"))

    assert [card["name"] for card in await sql_store.load(alice)] == ["Sol Ring"]
    assert [card["name"] for card in await sql_store.load(bob)] == ["Lightning Bolt"]

    # Bob cannot delete Alice's card
    assert await sql_store.remove_by_name(bob, "Sol Ring") is False
    assert len(await sql_store.load(alice)) == 1

    # Clearing Bob's collection leaves Alice's alone
    await sql_store.replace(bob, [])
    assert await sql_store.load(bob) == []
    assert len(await sql_store.load(alice)) == 1


@pytest.mark.asyncio
async def test_replace_swaps_whole_collection(sql_store, alice):
    await sql_store.append(alice, make_card("Sol Ring"))

    await sql_store.replace(alice, [make_card("Lightning Bolt"), make_card("Counterspell")])

    assert [card["name"] for card in await sql_store.load(alice)] == ["Lightning Bolt", "Counterspell"]


@pytest.mark.asyncio
async def test_remove_by_name_is_case_insensitive(sql_store, alice):
    await sql_store.append(alice, make_card("Lightning Bolt"))

    assert await sql_store.remove_by_name(alice, "lightning BOLT") is True
    assert await sql_store.remove_by_name(alice, "lightning bolt") is False
    assert await sql_store.load(alice) == []


@pytest.mark.asyncio
async def test_duplicate_append_is_rejected(sql_store, alice):
    await sql_store.append(alice, make_card("Sol Ring"))

    with pytest.raises(DuplicateCardError):
        await sql_store.append(alice, make_card("SOL RING"))

    assert len(await sql_store.load(alice)) == 1


@pytest.mark.asyncio
async def test_missing_token_is_unauthenticated(sql_store):
    with pytest.raises(UnauthenticatedError):
        await sql_store.load(ANONYMOUS)

    with pytest.raises(UnauthenticatedError):
        await sql_store.append(ANONYMOUS, make_card("Sol Ring"))


@pytest.mark.asyncio
async def test_invalid_token_is_unauthenticated(sql_store):
    with pytest.raises(UnauthenticatedError):
        await sql_store.load(Identity(token="not-a-jwt"))

    forged = create_access_token("alice", secret_key="some-other-key", algorithm="HS256")
    with pytest.raises(UnauthenticatedError):
        await sql_store.load(Identity(token=forged))


@pytest.mark.asyncio
async def test_anonymous_callers_share_default_identity(sql_store, alice):
    store = SqlCollectionStore(
        sql_store.engine,
        secret_key=TEST_STORE_KEY,
        require_identity=False,
        default_identity="shared",
    )

    await store.append(ANONYMOUS, make_card("Sol Ring"))

    assert [card["name"] for card in await store.load(ANONYMOUS)] == ["Sol Ring"]
    # A token holder still gets their own collection
    assert await store.load(alice) == []

    shared = Identity(token=create_access_token("shared", secret_key=TEST_STORE_KEY, algorithm="HS256"))
    assert len(await store.load(shared)) == 1
