"""Keeps the configured Pyth feeds fresh and reports what the engine would trust."""
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Callable

from ..config import AppConfig
from ..constants import FEED_DECIMALS
from ..errors import StalePrice
from ..oracles.oracle_lib import read_price
from ..oracles.pyth import PythOracle

logger = logging.getLogger(__name__)


class FeedService:
    """Refreshes the engine's price feeds from Pyth Hermes."""

    def __init__(
        self,
        config: AppConfig,
        oracle: PythOracle | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config
        self._oracle = oracle or PythOracle(config.price_oracle.pyth)
        self._clock = clock or (lambda: int(time.time()))

        assets = config.engine.collateral_assets
        feeds = config.engine.price_feeds
        if len(assets) != len(feeds):
            logger.warning(
                "%d collateral assets but %d price feeds configured", len(assets), len(feeds)
            )
        self._pairs = list(zip(assets, feeds))

    @property
    def oracle(self) -> PythOracle:
        return self._oracle

    def describe(self) -> list[str]:
        """One status line per collateral asset, using the latest recorded rounds."""
        now = self._clock()
        lines: list[str] = []
        for asset, feed_name in self._pairs:
            feed = self._oracle.feed(feed_name)
            try:
                price, updated_at = read_price(feed, now)
            except StalePrice as e:
                lines.append(f"{asset} ({feed_name}): STALE ({e.reason})")
                continue
            lines.append(
                f"{asset} ({feed_name}): ${price / 10**FEED_DECIMALS:,.4f}"
                f" · {now - updated_at}s old"
            )
        return lines

    async def check(self) -> list[str]:
        """Refresh every engine feed once and return the status lines."""
        await self._oracle.refresh([feed for _, feed in self._pairs])
        lines = self.describe()
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        logger.info("Feed status at %s UTC", stamp)
        for line in lines:
            if "STALE" in line:
                logger.warning("  %s", line)
            else:
                logger.info("  %s", line)
        return lines

    async def run_continuous(self, interval_seconds: int | None = None) -> None:
        """Refresh feeds forever."""
        interval = interval_seconds or self._config.feed_service.refresh_interval_seconds
        logger.info("Refreshing price feeds every %d seconds", interval)

        while True:
            try:
                await self.check()
                await asyncio.sleep(interval)
            except Exception as e:
                logger.error("Error in feed refresh loop: %s", e)
                await asyncio.sleep(interval)
