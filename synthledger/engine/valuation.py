"""Converts asset quantities to and from the USD unit of account."""
from __future__ import annotations

from typing import Callable, Mapping

from ..constants import ADDITIONAL_FEED_PRECISION, PRECISION
from ..errors import UnsupportedAsset
from ..interfaces.price_feed import PriceFeed
from ..oracles.oracle_lib import read_price
from .ledger import CollateralLedger


class Valuation:
    """Prices collateral with fresh, staleness-checked feed reads.

    Nothing is cached: every conversion reads the feed again, so a feed that
    goes stale freezes valuation immediately. All conversions round down.
    """

    def __init__(
        self, price_feeds: Mapping[str, PriceFeed], clock: Callable[[], int]
    ) -> None:
        self._price_feeds = price_feeds
        self._clock = clock

    def price_of(self, asset: str) -> int:
        feed = self._price_feeds.get(asset)
        if feed is None:
            raise UnsupportedAsset(asset)
        price, _ = read_price(feed, self._clock())
        return price

    def usd_value(self, asset: str, amount: int) -> int:
        price = self.price_of(asset)
        return amount * price * ADDITIONAL_FEED_PRECISION // PRECISION

    def token_amount_from_usd(self, asset: str, usd_amount: int) -> int:
        price = self.price_of(asset)
        return usd_amount * PRECISION // (price * ADDITIONAL_FEED_PRECISION)

    def account_collateral_value(self, ledger: CollateralLedger, user: str) -> int:
        # Every registered feed is read, even for empty balances.
        return sum(
            self.usd_value(asset, ledger.collateral_of(user, asset))
            for asset in self._price_feeds
        )
