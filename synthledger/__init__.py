"""Overcollateralized synthetic-unit ledger with oracle-priced liquidations."""
from .engine import SynthEngine
from .oracles import ManualPriceFeed, PythOracle
from .tokens import Erc20Token, StableUnit

__all__ = ["Erc20Token", "ManualPriceFeed", "PythOracle", "StableUnit", "SynthEngine"]

__version__ = "0.1.0"
