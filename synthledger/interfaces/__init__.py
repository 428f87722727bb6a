"""Protocol interfaces for the engine's collaborators."""
from .checkpoint import Checkpointable
from .price_feed import PriceFeed
from .token import DebtToken, FungibleToken

__all__ = ["Checkpointable", "DebtToken", "FungibleToken", "PriceFeed"]
