"""In-memory token collaborators."""
from .erc20 import Erc20Token
from .stable_unit import StableUnit

__all__ = ["Erc20Token", "StableUnit"]
