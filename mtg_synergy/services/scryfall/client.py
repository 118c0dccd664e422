"""
Scryfall API wrapper.

Looks cards up by exact or fuzzy name through the /cards/named endpoint.
Every request passes through the shared FetchThrottle. Nothing is cached and
nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import httpx

from ...core.errors import CardNotFoundError, UpstreamError
from ...models.card import Card
from .throttle import FetchThrottle

logger = logging.getLogger(__name__)


@dataclass
class BatchLookupResult:
    """Cards resolved by a batch lookup and the names that failed."""
    results: List[Card] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class ScryfallLookup:
    """
    Card lookups against api.scryfall.com.

    Non-success responses are reported as CardNotFoundError, transport
    failures as UpstreamError.
    """

    BASE_URL = "https://api.scryfall.com"

    def __init__(
        self,
        throttle: FetchThrottle,
        base_url: Optional[str] = None,
        user_agent: str = "MTGSynergyAnalyzer/0.1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.throttle = throttle
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport
        self._client = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _named(self, name: str, mode: str) -> Card:
        """
        Query /cards/named with `exact` or `fuzzy` matching.

        Args:
            name: Card name to look up.
            mode: "exact" or "fuzzy".

        Returns:
            Card: The card object as returned by Scryfall.
        """
        await self.throttle.acquire()
        client = await self._get_client()

        logger.debug(f"Scryfall lookup ({mode}): {name!r}")
        try:
            response = await client.get("/cards/named", params={mode: name})
        except httpx.HTTPError as e:
            logger.warning(f"Scryfall request failed for {name!r}: {e}")
            raise UpstreamError(f"Scryfall request failed: {e}") from e

        if not response.is_success:
            logger.debug(f"Scryfall returned {response.status_code} for {name!r}")
            raise CardNotFoundError(name)

        try:
            card = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid response from Scryfall for {name!r}") from e

        if not isinstance(card, dict) or not card.get("name"):
            raise UpstreamError(f"Unexpected response from Scryfall for {name!r}")

        return card

    async def lookup_exact(self, name: str) -> Card:
        """Fetch a card whose name matches exactly (case-insensitive)."""
        return await self._named(name, "exact")

    async def lookup_fuzzy(self, name: str) -> Card:
        """Fetch a card by fuzzy name, so minor misspellings still resolve."""
        return await self._named(name, "fuzzy")

    async def lookup_batch(self, names: Iterable[str]) -> BatchLookupResult:
        """
        Fuzzy-lookup each name in turn.

        A name that fails to resolve goes to `errors`; the rest of the batch
        still runs.

        Args:
            names: Card names to look up.

        Returns:
            BatchLookupResult: Found cards in request order plus failed names.
        """
        batch = BatchLookupResult()

        for name in names:
            try:
                batch.results.append(await self.lookup_fuzzy(name))
            except (CardNotFoundError, UpstreamError) as e:
                logger.info(f"Batch lookup failed for {name!r}: {e}")
                batch.errors.append(name)

        return batch
