"""
Pydantic schemas for API request and response bodies.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .card import Card


class CardNamesRequest(BaseModel):
    """Body of the batch fetch and add-cards endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    card_names: List[str] = Field(alias="cardNames")


class BatchLookupResponse(BaseModel):
    """Cards found and names that could not be resolved."""
    results: List[Card]
    errors: List[str]


class AddCardsResponse(BaseModel):
    """Outcome of adding a list of names to the collection."""
    model_config = ConfigDict(populate_by_name=True)

    added: List[str]
    errors: List[str]
    skipped: List[str]
    total_in_collection: int = Field(alias="totalInCollection")


class RemoveCardResponse(BaseModel):
    """Confirmation of a single removal with the new collection size."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    total_in_collection: int = Field(alias="totalInCollection")


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
