"""
JSON file collection backend.

Keeps one shared collection as a pretty-printed JSON array on local disk.
There is no identity partitioning: every caller sees the same cards.
Concurrent writers from several processes can lose updates (last write wins).
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from ...core.errors import CollectionStoreError, DuplicateCardError
from ...core.security import Identity
from ...models.card import Card, card_key
from .base import CollectionStore

logger = logging.getLogger(__name__)


class JsonFileCollectionStore(CollectionStore):
    """Collection stored as a single JSON document."""

    backend = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    # --- sync file helpers, run in a worker thread ---

    def _read(self) -> List[Card]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not read collection file {self.path}: {e}")
            return []

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Collection file {self.path} is not valid JSON, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Collection file {self.path} does not hold a JSON array, treating as empty")
            return []

        return data

    def _write(self, cards: List[Card]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        # Write to a sibling temp file, then swap it in atomically.
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(cards, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    async def _save(self, cards: List[Card]) -> None:
        try:
            await asyncio.to_thread(self._write, cards)
        except OSError as e:
            logger.error(f"Failed to save collection to {self.path}: {e}")
            raise CollectionStoreError(f"Failed to save collection: {e}") from e

    # --- CollectionStore ---

    async def load(self, identity: Identity) -> List[Card]:
        return await asyncio.to_thread(self._read)

    async def replace(self, identity: Identity, cards: List[Card]) -> None:
        async with self._write_lock:
            await self._save(list(cards))

    async def append(self, identity: Identity, card: Card) -> None:
        async with self._write_lock:
            cards = await self.load(identity)
            key = card_key(card["name"])
            if any(card_key(owned.get("name", "")) == key for owned in cards):
                raise DuplicateCardError(card["name"])
            cards.append(card)
            await self._save(cards)

    async def remove_by_name(self, identity: Identity, name: str) -> bool:
        key = card_key(name)
        async with self._write_lock:
            cards = await self.load(identity)
            remaining = [card for card in cards if card_key(card.get("name", "")) != key]

            if len(remaining) == len(cards):
                return False

            await self._save(remaining)
            return True
