"""
Main API router.

Aggregates all endpoint routers under /api.
"""

from fastapi import APIRouter

from .cards import router as cards_router
from .collection import router as collection_router

api_router = APIRouter()

# Scryfall proxy
api_router.include_router(
    cards_router,
    tags=["Cards"],
)

# Stored collection
api_router.include_router(
    collection_router,
    prefix="/collection",
    tags=["Collection"],
)
