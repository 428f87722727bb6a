"""Price feed protocol — latest-round oracle abstraction."""
from typing import Protocol

from ..models import PriceReading


class PriceFeed(Protocol):
    """Abstract interface for a single-asset USD price feed."""

    @property
    def decimals(self) -> int: ...

    def latest_round_data(self) -> PriceReading: ...
