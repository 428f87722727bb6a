"""Oracle adapter — turns a raw feed round into a trusted price.

A reading is trusted only when it has been populated (``updated_at != 0``),
carries a positive answer and is no older than ``TIMEOUT``. Anything else
raises ``StalePrice``. There is no retry: callers are expected to fail, which
freezes every price-dependent operation until the feed recovers.
"""
from __future__ import annotations

import logging

from ..constants import TIMEOUT
from ..errors import StalePrice
from ..interfaces.price_feed import PriceFeed
from ..models import PriceReading

logger = logging.getLogger(__name__)


def stale_check_latest_round_data(feed: PriceFeed, now: int) -> PriceReading:
    """Fetch the latest round from ``feed`` and reject it if untrustworthy."""
    reading = feed.latest_round_data()

    if reading.updated_at == 0:
        raise StalePrice("feed has never been updated")

    age = now - reading.updated_at
    if age > TIMEOUT:
        logger.warning(
            "Rejecting round %d: %d seconds old (timeout %d)",
            reading.round_id,
            age,
            TIMEOUT,
        )
        raise StalePrice(f"round {reading.round_id} is {age}s old")

    if reading.answer <= 0:
        raise StalePrice(f"round {reading.round_id} has non-positive answer")

    return reading


def read_price(feed: PriceFeed, now: int) -> tuple[int, int]:
    """Return ``(price, updated_at)`` of the latest trusted round."""
    reading = stale_check_latest_round_data(feed, now)
    return reading.answer, reading.updated_at


def get_timeout() -> int:
    return TIMEOUT
