"""
API Dependencies.

Shared dependencies for the caller identity, the Scryfall lookup and the
collection store. The lookup and store are created once in the application
lifespan and live on app.state.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mtg_synergy.core.security import ANONYMOUS, Identity
from mtg_synergy.services.collection import CollectionService, CollectionStore
from mtg_synergy.services.scryfall import ScryfallLookup

# Bearer scheme; a missing header is not an error at this layer.
bearer_scheme = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Identity:
    """
    Dependency that extracts the caller identity from the Authorization header.

    The token is passed through untouched; the collection store decides
    whether it is valid.

    Returns:
        Identity: Caller identity, anonymous when no bearer token was sent.
    """
    if credentials is None or not credentials.credentials:
        return ANONYMOUS
    return Identity(token=credentials.credentials)


def get_card_lookup(request: Request) -> ScryfallLookup:
    """Dependency that provides the process-wide Scryfall lookup."""
    return request.app.state.card_lookup


def get_collection_store(request: Request) -> CollectionStore:
    """Dependency that provides the configured collection backend."""
    return request.app.state.collection_store


def get_collection_service(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    lookup: Annotated[ScryfallLookup, Depends(get_card_lookup)],
) -> CollectionService:
    """Dependency that provides the collection service for this request."""
    return CollectionService(store, lookup)


# Type aliases for cleaner dependency injection
CallerIdentity = Annotated[Identity, Depends(get_identity)]
CardLookup = Annotated[ScryfallLookup, Depends(get_card_lookup)]
Collections = Annotated[CollectionService, Depends(get_collection_service)]
