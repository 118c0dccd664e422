"""
Card model for the relational collection store.

Cards are stored as the opaque JSON document Scryfall returned; only the
name is lifted into its own columns for lookups.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

# A card is whatever Scryfall returned; only "name" is ever read.
Card = Dict[str, Any]


def card_key(name: str) -> str:
    """Case-insensitive uniqueness key for a card name."""
    return name.lower()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionCard(SQLModel, table=True):
    """
    One card in one owner's collection.

    Attributes:
        id: Primary key; ascending id is insertion order.
        owner_id: Identity the row belongs to.
        name: Card name as returned by Scryfall.
        name_key: Lowercased name, unique per owner.
        data: Full Scryfall card object.
        created_at: When the card was added.
    """

    __tablename__ = "collection_cards"
    __table_args__ = (UniqueConstraint("owner_id", "name_key", name="uq_collection_owner_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: str = Field(index=True)
    name: str
    name_key: str = Field(index=True)
    data: Card = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_card(cls, owner_id: str, card: Card) -> "CollectionCard":
        """Build a row from a Scryfall card object."""
        name = card["name"]
        return cls(owner_id=owner_id, name=name, name_key=card_key(name), data=card)
