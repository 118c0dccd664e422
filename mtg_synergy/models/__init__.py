"""
Database models and API schemas.
"""

from .card import Card, CollectionCard, card_key
from .collection import (
    AddCardsResponse,
    BatchLookupResponse,
    CardNamesRequest,
    ErrorResponse,
    MessageResponse,
    RemoveCardResponse,
)

__all__ = [
    # Storage
    "Card",
    "CollectionCard",
    "card_key",
    # API schemas
    "AddCardsResponse",
    "BatchLookupResponse",
    "CardNamesRequest",
    "ErrorResponse",
    "MessageResponse",
    "RemoveCardResponse",
]
