"""Price feeds and the staleness-checking oracle adapter."""
from .aggregator import ManualPriceFeed
from .oracle_lib import get_timeout, read_price, stale_check_latest_round_data
from .pyth import PythOracle, PythPriceFeed

__all__ = [
    "ManualPriceFeed",
    "PythOracle",
    "PythPriceFeed",
    "get_timeout",
    "read_price",
    "stale_check_latest_round_data",
]
