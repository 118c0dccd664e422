"""
Card lookup endpoints.

Proxies single and batch lookups to Scryfall. Nothing here is persisted.
"""

from fastapi import APIRouter

from mtg_synergy.api.deps import CardLookup
from mtg_synergy.models import BatchLookupResponse, Card, CardNamesRequest, ErrorResponse

router = APIRouter()


@router.get(
    "/card/{name:path}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_card(name: str, lookup: CardLookup) -> Card:
    """
    Get a single card by exact name.

    Args:
        name: Card name from the path. Split and double-faced names keep their "//".
        lookup: Scryfall lookup.

    Returns:
        Card: The Scryfall card object.
    """
    return await lookup.lookup_exact(name)


@router.post("/cards/batch", response_model=BatchLookupResponse)
async def batch_fetch_cards(payload: CardNamesRequest, lookup: CardLookup) -> BatchLookupResponse:
    """
    Fuzzy-lookup a list of names.

    Names that do not resolve are returned in `errors`.
    """
    batch = await lookup.lookup_batch(payload.card_names)
    return BatchLookupResponse(results=batch.results, errors=batch.errors)
