"""
Collection storage service.

Two interchangeable backends implement CollectionStore; build_collection_store
picks one from the settings at startup.
"""

import logging

from ...core.config import Settings
from ...core.database import create_engine
from ...core.errors import ConfigurationError
from ...core.logging import mask_url
from .base import CollectionStore
from .file_store import JsonFileCollectionStore
from .service import AddCardsResult, CollectionService
from .sql_store import SqlCollectionStore

logger = logging.getLogger(__name__)

# Identity tokens are verified with a shared key
SUPPORTED_JWT_ALGORITHMS = ("HS256", "HS384", "HS512")


def build_collection_store(settings: Settings) -> CollectionStore:
    """
    Create the collection backend selected by the settings.

    The relational store is used when both COLLECTION_DATABASE_URL and
    COLLECTION_STORE_KEY are set; otherwise the JSON file store.

    Raises:
        ConfigurationError: If the relational settings are unusable.
    """
    if settings.use_relational_store:
        if settings.collection_jwt_algorithm not in SUPPORTED_JWT_ALGORITHMS:
            raise ConfigurationError(
                f"COLLECTION_JWT_ALGORITHM must be one of {', '.join(SUPPORTED_JWT_ALGORITHMS)}"
            )
        logger.info(f"Collection store: relational ({mask_url(settings.collection_database_url)})")
        return SqlCollectionStore(
            create_engine(settings.collection_database_url, echo=settings.debug),
            secret_key=settings.collection_store_key,
            algorithm=settings.collection_jwt_algorithm,
            require_identity=settings.collection_require_identity,
            default_identity=settings.default_identity,
        )

    if settings.collection_database_url or settings.collection_store_key:
        logger.warning(
            "Only one of COLLECTION_DATABASE_URL / COLLECTION_STORE_KEY is set; "
            "falling back to the JSON file store"
        )

    logger.info(f"Collection store: file ({settings.collection_file.resolve()})")
    return JsonFileCollectionStore(settings.collection_file)


__all__ = [
    "AddCardsResult",
    "CollectionService",
    "CollectionStore",
    "JsonFileCollectionStore",
    "SqlCollectionStore",
    "build_collection_store",
]
