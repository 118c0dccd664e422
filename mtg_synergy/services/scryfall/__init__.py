"""
Scryfall card lookup service.
"""

from .client import BatchLookupResult, ScryfallLookup
from .throttle import FetchThrottle

__all__ = ["BatchLookupResult", "FetchThrottle", "ScryfallLookup"]
