"""Pyth Network price feeds, refreshed from the Hermes HTTP service."""
from __future__ import annotations

import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig
from ..constants import FEED_DECIMALS
from ..models import PriceReading

logger = logging.getLogger(__name__)


def normalize_price(price_raw: int, expo: int, decimals: int = FEED_DECIMALS) -> int:
    """Rescale a Pyth ``price * 10**expo`` pair to ``decimals`` fixed point.

    Examples:
        (350000000, -8) → 350000000
        (35000, -4) → 350000000
    """
    shift = decimals + expo
    if shift >= 0:
        return price_raw * 10**shift
    return price_raw // 10**-shift


class PythPriceFeed:
    """Latest-round view over one Pyth price id.

    Rounds are recorded by ``PythOracle.refresh``; until the first successful
    refresh the feed reports an all-zero round.
    """

    def __init__(self, name: str, price_id: str, decimals: int = FEED_DECIMALS) -> None:
        self.name = name
        self.price_id = price_id
        self._decimals = decimals
        self._latest = PriceReading(0, 0, 0, 0, 0)

    @property
    def decimals(self) -> int:
        return self._decimals

    def record(self, price_raw: int, expo: int, publish_time: int) -> PriceReading:
        """Store a Hermes price update as the next round."""
        answer = normalize_price(price_raw, expo, self._decimals)
        round_id = self._latest.round_id + 1
        self._latest = PriceReading(
            round_id, answer, publish_time, publish_time, round_id
        )
        return self._latest

    def latest_round_data(self) -> PriceReading:
        return self._latest


class PythOracle:
    """Fetch price updates from Pyth Network and feed them into ``PythPriceFeed``s."""

    def __init__(self, config: PythConfig) -> None:
        self.hermes_url = config.hermes_url
        self.feeds: dict[str, PythPriceFeed] = {
            name: PythPriceFeed(name, price_id)
            for name, price_id in config.feeds.items()
        }

    def feed(self, name: str) -> PythPriceFeed:
        return self.feeds[name]

    async def refresh(self, names: list[str] | None = None) -> dict[str, PriceReading]:
        """Fetch the latest Hermes update and record a new round per feed.

        Args:
            names: Optional list of feed names to refresh. If None, refreshes
                   all configured feeds.

        Returns the rounds recorded by this call. Feeds that could not be
        refreshed keep their previous round.
        """
        recorded: dict[str, PriceReading] = {}

        feeds = self.feeds
        if names is not None:
            feeds = {k: v for k, v in self.feeds.items() if k in names}

        price_ids = list({feed.price_id for feed in feeds.values()})
        if not price_ids:
            return recorded

        query_params = "&".join([f"ids[]={pid}" for pid in price_ids])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return recorded

                    data = await response.json()
        except (aiohttp.ClientError, OSError, ValueError) as e:
            logger.error("Error fetching prices from Pyth: %s", e)
            return recorded

        # Several feed names may share one price id
        id_to_feeds: dict[str, list[PythPriceFeed]] = {}
        for feed in feeds.values():
            id_to_feeds.setdefault(_strip_0x(feed.price_id), []).append(feed)

        parsed = data.get("parsed", []) if isinstance(data, dict) else None
        if not isinstance(parsed, list):
            logger.error("Unexpected Pyth response body: %r", data)
            return recorded

        for item in parsed:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object Pyth update: %r", item)
                continue
            price_id = _strip_0x(str(item.get("id", "")))
            price_data = item.get("price", {})
            try:
                price_raw = int(price_data["price"])
                expo = int(price_data["expo"])
                publish_time = int(price_data["publish_time"])
            except (KeyError, TypeError, ValueError):
                logger.warning("Malformed Pyth update for %s: %s", price_id, price_data)
                continue

            for feed in id_to_feeds.get(price_id, []):
                recorded[feed.name] = feed.record(price_raw, expo, publish_time)

        logger.info("Fetched prices from Pyth Network:")
        for name, reading in sorted(recorded.items()):
            logger.info(
                "  %s: %d (round %d, published %d)",
                name,
                reading.answer,
                reading.round_id,
                reading.updated_at,
            )

        return recorded


def _strip_0x(price_id: str) -> str:
    return price_id[2:] if price_id.startswith("0x") else price_id
