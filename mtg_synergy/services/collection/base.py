"""
Collection store contract.

Callers never know which backend is active; both honour the same methods.
"""

from abc import ABC, abstractmethod
from typing import List

from ...core.security import Identity
from ...models.card import Card


class CollectionStore(ABC):
    """Persistence for the list of cards an identity has saved."""

    #: Short backend name for logs.
    backend = "abstract"

    @abstractmethod
    async def load(self, identity: Identity) -> List[Card]:
        """
        Return the identity's collection in insertion order.

        Raises:
            UnauthenticatedError: If the backend requires an identity and
                none or an invalid one was supplied.
        """

    @abstractmethod
    async def replace(self, identity: Identity, cards: List[Card]) -> None:
        """Swap the stored collection for `cards` (clear-then-write, not a merge)."""

    @abstractmethod
    async def append(self, identity: Identity, card: Card) -> None:
        """
        Add a single card to the collection.

        Raises:
            DuplicateCardError: If a card with the same name is already stored.
        """

    @abstractmethod
    async def remove_by_name(self, identity: Identity, name: str) -> bool:
        """
        Delete the card whose name matches case-insensitively.

        Returns:
            bool: True if a card was removed.
        """

    async def init(self) -> None:
        """Prepare the backend at startup. No-op by default."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
