"""
CoinGecko service for the market snippet added to crypto prompts
"""
import asyncio
import time
from typing import Optional, Dict, Any

import aiohttp
import structlog

logger = structlog.get_logger(__name__)

CRYPTO_KEYWORDS = (
    'bitcoin', 'btc', 'ethereum', 'eth', 'crypto', 'cryptocurrency',
    'blockchain', 'defi', 'nft', 'trading', 'price', 'market',
    'bull', 'bear', 'hodl', 'mining', 'wallet', 'exchange',
)


def detect_crypto_topic(topic: str) -> bool:
    topic_lower = topic.lower()
    return any(keyword in topic_lower for keyword in CRYPTO_KEYWORDS)


class MarketDataService:
    """Fetches BTC price and 24h change from CoinGecko"""

    def __init__(self):
        self.base_url = "https://api.coingecko.com/api/v3"
        self.cache_duration = 300  # 5 minutes
        self._cached: Optional[Dict[str, float]] = None
        self._cache_timestamp = 0.0

    async def get_btc_quote(self) -> Optional[Dict[str, float]]:
        """BTC price in USD and 24h change percent"""
        current_time = time.time()
        if self._cached is not None and current_time - self._cache_timestamp < self.cache_duration:
            return self._cached

        try:
            async with aiohttp.ClientSession() as session:
                url = f"{self.base_url}/simple/price"
                params = {
                    'ids': 'bitcoin',
                    'vs_currencies': 'usd',
                    'include_24hr_change': 'true'
                }

                async with session.get(url, params=params, timeout=aiohttp.ClientTimeout(total=10)) as response:
                    if response.status == 200:
                        data: Dict[str, Any] = await response.json()
                        btc = data.get('bitcoin', {})
                        if btc.get('usd'):
                            self._cached = {
                                'price': float(btc['usd']),
                                'change_24h': round(float(btc.get('usd_24h_change') or 0), 2),
                            }
                            self._cache_timestamp = current_time
                            logger.info("BTC price updated", price=self._cached['price'])
                            return self._cached
                    logger.warning("CoinGecko API error", status=response.status)

        except asyncio.TimeoutError:
            logger.warning("CoinGecko API timeout")
        except aiohttp.ClientError as e:
            logger.error("Error fetching BTC price", error=str(e))

        return None

    async def get_btc_context(self) -> str:
        """Prompt snippet like ``[CURRENT MARKET DATA: BTC $113,313 (+0.83% 24h)]``"""
        quote = await self.get_btc_quote()
        if not quote:
            return ""
        change = quote['change_24h']
        change_text = f"+{change}%" if change > 0 else f"{change}%"
        return f"[CURRENT MARKET DATA: BTC ${quote['price']:,.0f} ({change_text} 24h)]"


# Global instance
market_data_service = MarketDataService()
