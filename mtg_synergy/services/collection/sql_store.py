"""
Relational collection backend.

One row per card in the `collection_cards` table, tagged with the owner id
decoded from the caller's bearer token. Every statement is filtered by that
owner, so a caller can never read or write another identity's rows.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import select

from ...core.database import create_session_factory, init_db
from ...core.errors import CollectionStoreError, DuplicateCardError, UnauthenticatedError
from ...core.security import Identity, decode_identity_token
from ...models.card import Card, CollectionCard, card_key
from .base import CollectionStore

logger = logging.getLogger(__name__)


class SqlCollectionStore(CollectionStore):
    """
    Collections partitioned by identity in a SQL table.

    Args:
        engine: Async engine for the store database.
        secret_key: Key that identity tokens are signed with.
        algorithm: JWT algorithm of identity tokens.
        require_identity: Reject callers without a token. When False they
            share the `default_identity` collection.
        default_identity: Owner id for anonymous callers.
    """

    backend = "relational"

    def __init__(
        self,
        engine: AsyncEngine,
        secret_key: str,
        algorithm: str = "HS256",
        require_identity: bool = True,
        default_identity: str = "anonymous",
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.engine = engine
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.require_identity = require_identity
        self.default_identity = default_identity
        self._session_factory = session_factory or create_session_factory(engine)

    def resolve_owner(self, identity: Identity) -> str:
        """
        Map a request identity to the owner id its rows are stored under.

        Raises:
            UnauthenticatedError: If the token is missing (and required) or invalid.
        """
        if identity.is_anonymous:
            if self.require_identity:
                raise UnauthenticatedError("Authentication required")
            return self.default_identity

        owner_id = decode_identity_token(identity.token, self.secret_key, self.algorithm)
        if owner_id is None:
            raise UnauthenticatedError("Invalid or expired token")
        return owner_id

    async def load(self, identity: Identity) -> List[Card]:
        owner_id = self.resolve_owner(identity)
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(CollectionCard)
                    .where(CollectionCard.owner_id == owner_id)
                    .order_by(CollectionCard.id)
                )
                return [row.data for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load collection for {owner_id}: {e}")
            raise CollectionStoreError(f"Failed to load collection: {e}") from e

    async def replace(self, identity: Identity, cards: List[Card]) -> None:
        owner_id = self.resolve_owner(identity)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(CollectionCard).where(CollectionCard.owner_id == owner_id)
                    )
                    session.add_all([CollectionCard.from_card(owner_id, card) for card in cards])
        except SQLAlchemyError as e:
            logger.error(f"Failed to replace collection for {owner_id}: {e}")
            raise CollectionStoreError(f"Failed to save collection: {e}") from e

    async def append(self, identity: Identity, card: Card) -> None:
        owner_id = self.resolve_owner(identity)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(CollectionCard.from_card(owner_id, card))
        except IntegrityError as e:
            raise DuplicateCardError(card["name"]) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to add {card.get('name')!r} for {owner_id}: {e}")
            raise CollectionStoreError(f"Failed to save card: {e}") from e

    async def remove_by_name(self, identity: Identity, name: str) -> bool:
        owner_id = self.resolve_owner(identity)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(CollectionCard)
                        .where(CollectionCard.owner_id == owner_id)
                        .where(CollectionCard.name_key == card_key(name))
                    )
                    return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove {name!r} for {owner_id}: {e}")
            raise CollectionStoreError(f"Failed to remove card: {e}") from e

    async def init(self) -> None:
        await init_db(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()
