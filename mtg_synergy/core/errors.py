"""
Exception hierarchy for the MTG Synergy Analyzer backend.

Every error raised on purpose inherits from SynergyError so the API layer
can map it to an HTTP status in one place.
"""

from typing import Optional


class SynergyError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CardNotFoundError(SynergyError):
    """Scryfall has no card matching the requested name."""

    status_code = 404

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Card not found: {name}")


class UpstreamError(SynergyError):
    """Transport failure or unreadable response from Scryfall."""

    pass


class UnauthenticatedError(SynergyError):
    """Identity is required by the store but missing or invalid."""

    status_code = 401


class CollectionStoreError(SynergyError):
    """Reading or writing the collection backend failed."""

    pass


class DuplicateCardError(CollectionStoreError):
    """The collection already holds a card with this name."""

    status_code = 409

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Card already in collection: {name}")


class ConfigurationError(SynergyError):
    """Invalid or incomplete settings detected at startup."""

    pass
