"""
Pexels stock photo search.
"""

import asyncio
import random
from typing import Any, Dict, List

import aiohttp
import structlog

from contentcast.core.config import settings
from contentcast.core.exceptions import ConfigurationError, ExternalServiceError

logger = structlog.get_logger(__name__)

FEATURED_CATEGORIES = {
    "crypto": ["cryptocurrency bitcoin", "blockchain technology", "ethereum digital currency"],
    "landscape": ["mountain landscape", "ocean sunset", "forest nature scenery"],
    "ai": ["artificial intelligence technology", "robot futuristic", "machine learning data"],
    "meme": ["funny crypto meme", "doge cryptocurrency", "internet meme culture"],
}
PHOTOS_PER_CATEGORY = 2
FEATURED_LIMIT = 8
FEATURED_MINIMUM = 4
FALLBACK_QUERY = "cryptocurrency"


class PexelsService:
    """Thin async client for the Pexels search API."""

    def __init__(self):
        self.base_url = settings.pexels_api_url
        self.timeout = aiohttp.ClientTimeout(total=settings.http_timeout_seconds)
        self.logger = logger.bind(service="pexels_service")

    def _headers(self) -> Dict[str, str]:
        if not settings.pexels_api_key:
            raise ConfigurationError("PEXELS_API_KEY missing in environment")
        return {"Authorization": settings.pexels_api_key}

    async def _search(
        self,
        session: aiohttp.ClientSession,
        query: str,
        per_page: int
    ) -> List[Dict[str, Any]]:
        params = {"query": query, "per_page": per_page, "orientation": "landscape"}
        async with session.get(f"{self.base_url}/search", params=params) as response:
            if response.status != 200:
                raise ExternalServiceError(
                    f"Pexels API error: {response.status}",
                    {"query": query, "status": response.status}
                )
            data = await response.json()
        return data.get("photos", [])

    async def search_photos(self, query: str, per_page: int = 6) -> List[Dict[str, Any]]:
        headers = self._headers()
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=headers) as session:
                return await self._search(session, query, per_page)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Pexels search failed", query=query, error=str(e))
            raise ExternalServiceError("Failed to search images", {"query": query}) from e

    async def get_featured_photos(self) -> List[Dict[str, Any]]:
        """Two photos from each featured category, topped up when too few arrive."""
        headers = self._headers()
        photos: List[Dict[str, Any]] = []

        async with aiohttp.ClientSession(timeout=self.timeout, headers=headers) as session:
            for category, terms in FEATURED_CATEGORIES.items():
                term = random.choice(terms)
                try:
                    found = await self._search(session, term, PHOTOS_PER_CATEGORY)
                except (aiohttp.ClientError, asyncio.TimeoutError, ExternalServiceError) as e:
                    self.logger.warning("Featured category failed", category=category, error=str(e))
                    continue
                photos.extend({**photo, "category": category} for photo in found)

            if len(photos) < FEATURED_MINIMUM:
                try:
                    photos.extend(
                        await self._search(session, FALLBACK_QUERY, FEATURED_LIMIT - len(photos))
                    )
                except (aiohttp.ClientError, asyncio.TimeoutError, ExternalServiceError) as e:
                    self.logger.warning("Featured fallback failed", error=str(e))

        return photos[:FEATURED_LIMIT]


# Global instance
pexels_service = PexelsService()
