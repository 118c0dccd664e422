"""
Collection operations behind the /api/collection endpoints.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ...core.errors import CardNotFoundError, DuplicateCardError, UpstreamError
from ...core.security import Identity
from ...models.card import Card, card_key
from ..scryfall.client import ScryfallLookup
from .base import CollectionStore

logger = logging.getLogger(__name__)


@dataclass
class AddCardsResult:
    """Per-name outcome of an add-cards request."""
    added: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    total_in_collection: int = 0


class CollectionService:
    """Ties the Scryfall lookup to a collection store."""

    def __init__(self, store: CollectionStore, lookup: ScryfallLookup):
        self.store = store
        self.lookup = lookup

    async def get_collection(self, identity: Identity) -> List[Card]:
        return await self.store.load(identity)

    async def add_cards(self, identity: Identity, names: Iterable[str]) -> AddCardsResult:
        """
        Look up and store each name that is not already in the collection.

        Names already owned (case-insensitive) are skipped without a lookup.
        A fuzzy match that resolves to an owned card is skipped as well, and so
        is a card another request stored after the snapshot was taken.
        Failed lookups are reported in `errors` and do not stop the batch.

        Args:
            identity: Caller identity.
            names: Requested card names.

        Returns:
            AddCardsResult: Added, failed and skipped names plus the collection
            size reloaded from the store.
        """
        result = AddCardsResult()
        owned = {card_key(card.get("name", "")) for card in await self.store.load(identity)}

        for name in names:
            if card_key(name) in owned:
                result.skipped.append(name)
                continue

            try:
                card = await self.lookup.lookup_fuzzy(name)
            except (CardNotFoundError, UpstreamError) as e:
                logger.info(f"Could not add {name!r}: {e}")
                result.errors.append(name)
                continue

            resolved_key = card_key(card["name"])
            if resolved_key in owned:
                logger.debug(f"{name!r} resolved to owned card {card['name']!r}")
                result.skipped.append(name)
                continue

            try:
                await self.store.append(identity, card)
            except DuplicateCardError:
                # Stored by a concurrent request since the snapshot
                logger.info(f"{card['name']!r} was added concurrently; skipping")
                owned.add(resolved_key)
                result.skipped.append(name)
                continue

            owned.add(resolved_key)
            result.added.append(card["name"])

        result.total_in_collection = len(await self.store.load(identity))
        logger.info(
            f"Added {len(result.added)} card(s), skipped {len(result.skipped)}, "
            f"failed {len(result.errors)}; collection now {result.total_in_collection}"
        )
        return result

    async def remove_card(self, identity: Identity, name: str) -> int:
        """
        Remove a card by name.

        Returns:
            int: Collection size after the removal.

        Raises:
            CardNotFoundError: If no card in the collection has that name.
        """
        removed = await self.store.remove_by_name(identity, name)
        if not removed:
            raise CardNotFoundError(name, "Card not found in collection")
        return len(await self.store.load(identity))

    async def clear(self, identity: Identity) -> None:
        await self.store.replace(identity, [])
