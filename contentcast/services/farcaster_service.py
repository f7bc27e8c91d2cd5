"""
Farcaster lookups (Neynar, Warpcast, hub) and cast preparation.
"""

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp
import structlog

from contentcast.core.config import settings
from contentcast.core.exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)


def build_compose_url(text: str, image_url: Optional[str] = None) -> str:
    """Warpcast compose link with the text and an optional image embed."""
    url = f"{settings.warpcast_compose_url}?text={quote(text, safe='')}"
    if image_url:
        url += f"&embeds[]={quote(image_url, safe='')}"
    return url


class FarcasterService:
    """Read-only Farcaster client. Casts are published by the user via compose links."""

    def __init__(self):
        self.hub_url = settings.farcaster_hub_url
        self.warpcast_api_url = settings.warpcast_api_url
        self.neynar_api_url = settings.neynar_api_url
        self.neynar_api_key = settings.neynar_api_key
        self.timeout = aiohttp.ClientTimeout(total=settings.http_timeout_seconds)
        self.logger = logger.bind(service="farcaster_service")

    def prepare_cast(self, fid: str, text: str, image_url: Optional[str] = None) -> Dict[str, Any]:
        self.logger.info("Preparing cast", fid=fid, has_image=bool(image_url))
        return {
            "cast_content": text,
            "farcaster_url": build_compose_url(text, image_url),
            "ready": True,
        }

    async def get_user_profile(self, fid: str) -> Dict[str, Any]:
        """Raw hub user data for a fid."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                url = f"{self.hub_url}/v1/userDataByFid"
                async with session.get(url, params={"fid": fid}) as response:
                    if response.status != 200:
                        raise ExternalServiceError(
                            "Failed to fetch user profile from Farcaster",
                            {"status": response.status, "fid": fid}
                        )
                    return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Hub request failed", fid=fid, error=str(e))
            raise ExternalServiceError(
                "Failed to fetch user profile from Farcaster",
                {"fid": fid}
            ) from e

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[Dict[str, Any]]:
        """
        Find the Farcaster account verified for a wallet.

        Tries Neynar first when a key is configured, then Warpcast.
        Returns None when no account is found or both lookups fail.
        """
        if self.neynar_api_key:
            try:
                return await self._lookup_neynar(wallet_address.lower())
            except (aiohttp.ClientError, asyncio.TimeoutError, ExternalServiceError) as e:
                self.logger.warning("Neynar lookup failed, falling back to Warpcast", error=str(e))

        try:
            return await self._lookup_warpcast(wallet_address)
        except (aiohttp.ClientError, asyncio.TimeoutError, ExternalServiceError) as e:
            self.logger.error("Warpcast lookup failed", wallet=wallet_address, error=str(e))
            return None

    async def _lookup_neynar(self, address: str) -> Optional[Dict[str, Any]]:
        headers = {"x-api-key": self.neynar_api_key, "accept": "application/json"}
        async with aiohttp.ClientSession(timeout=self.timeout, headers=headers) as session:
            url = f"{self.neynar_api_url}/v2/farcaster/user/bulk-by-address"
            async with session.get(url, params={"addresses": address}) as response:
                if response.status == 404:
                    return None
                if response.status != 200:
                    raise ExternalServiceError("Neynar API error", {"status": response.status})
                data = await response.json()

        users = data.get(address) or []
        if not users:
            self.logger.info("No Farcaster user for wallet", wallet=address)
            return None

        user = users[0]
        score = (user.get("experimental") or {}).get("neynar_user_score")
        return {
            "fid": str(user["fid"]) if user.get("fid") is not None else None,
            "username": user.get("username"),
            "display_name": user.get("display_name"),
            "pfp_url": user.get("pfp_url"),
            "bio": ((user.get("profile") or {}).get("bio") or {}).get("text"),
            "follower_count": user.get("follower_count") or 0,
            "following_count": user.get("following_count") or 0,
            "verified_addresses": (user.get("verified_addresses") or {}).get("eth_addresses", []),
            "neynar_score": round(score * 100) if score else None,
        }

    async def _lookup_warpcast(self, address: str) -> Optional[Dict[str, Any]]:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            url = f"{self.warpcast_api_url}/v2/user-by-verification"
            async with session.get(url, params={"address": address}) as response:
                if response.status == 404:
                    return None
                if response.status != 200:
                    raise ExternalServiceError("Warpcast API error", {"status": response.status})
                data = await response.json()

        user = (data.get("result") or {}).get("user") or {}
        fid = user.get("fid")
        return {
            "fid": str(fid) if fid is not None else None,
            "username": user.get("username"),
            "display_name": user.get("displayName"),
            "pfp_url": (user.get("pfp") or {}).get("url"),
        }


# Global instance
farcaster_service = FarcasterService()
