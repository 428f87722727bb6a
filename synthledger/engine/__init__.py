"""Collateral/debt ledger, valuation and the synthetic-unit engine."""
from .engine import SynthEngine
from .health import Healthy, HealthStatus, Liquidatable, calculate_health_factor, evaluate
from .ledger import CollateralLedger
from .transaction import Transaction
from .valuation import Valuation

__all__ = [
    "CollateralLedger",
    "HealthStatus",
    "Healthy",
    "Liquidatable",
    "SynthEngine",
    "Transaction",
    "Valuation",
    "calculate_health_factor",
    "evaluate",
]
