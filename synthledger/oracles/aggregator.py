"""In-memory price feed whose rounds are pushed by the caller."""
from __future__ import annotations

import time

from ..constants import FEED_DECIMALS
from ..models import PriceReading


class ManualPriceFeed:
    """Settable feed with latest-round semantics.

    Every ``update_answer`` opens a new round stamped with the current time.
    ``update_round_data`` writes an arbitrary round, which is how tests age a
    price past the staleness timeout.
    """

    def __init__(
        self,
        initial_answer: int | None = None,
        decimals: int = FEED_DECIMALS,
        description: str = "",
    ) -> None:
        self._decimals = decimals
        self.description = description
        self._latest = PriceReading(0, 0, 0, 0, 0)
        if initial_answer is not None:
            self.update_answer(initial_answer)

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def latest_round(self) -> int:
        return self._latest.round_id

    def update_answer(self, answer: int, timestamp: int | None = None) -> None:
        """Publish ``answer`` as a new round."""
        now = int(time.time()) if timestamp is None else timestamp
        round_id = self._latest.round_id + 1
        self._latest = PriceReading(round_id, answer, now, now, round_id)

    def update_round_data(
        self, round_id: int, answer: int, timestamp: int, started_at: int
    ) -> None:
        self._latest = PriceReading(round_id, answer, started_at, timestamp, round_id)

    def latest_round_data(self) -> PriceReading:
        return self._latest
