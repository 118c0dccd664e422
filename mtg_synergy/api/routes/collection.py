"""
Collection endpoints.

All operations act on the collection of the caller's identity.
"""

from typing import List

from fastapi import APIRouter

from mtg_synergy.api.deps import CallerIdentity, Collections
from mtg_synergy.models import (
    AddCardsResponse,
    Card,
    CardNamesRequest,
    ErrorResponse,
    MessageResponse,
    RemoveCardResponse,
)

router = APIRouter()


@router.get("", responses={401: {"model": ErrorResponse}})
async def get_collection(identity: CallerIdentity, collections: Collections) -> List[Card]:
    """Get the full collection."""
    return await collections.get_collection(identity)


@router.post("", response_model=AddCardsResponse, responses={401: {"model": ErrorResponse}})
async def add_cards(
    payload: CardNamesRequest,
    identity: CallerIdentity,
    collections: Collections,
) -> AddCardsResponse:
    """
    Add cards to the collection by name.

    Names already in the collection are skipped without a Scryfall lookup;
    names Scryfall cannot resolve are reported in `errors`.
    """
    result = await collections.add_cards(identity, payload.card_names)
    return AddCardsResponse(
        added=result.added,
        errors=result.errors,
        skipped=result.skipped,
        total_in_collection=result.total_in_collection,
    )


@router.delete("", response_model=MessageResponse, responses={401: {"model": ErrorResponse}})
async def clear_collection(identity: CallerIdentity, collections: Collections) -> MessageResponse:
    """Remove every card from the collection."""
    await collections.clear(identity)
    return MessageResponse(message="Collection cleared successfully")


@router.delete(
    "/{name:path}",
    response_model=RemoveCardResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def remove_card(name: str, identity: CallerIdentity, collections: Collections) -> RemoveCardResponse:
    """Remove one card, matched by name case-insensitively."""
    total = await collections.remove_card(identity, name)
    return RemoveCardResponse(message="Card removed successfully", total_in_collection=total)
