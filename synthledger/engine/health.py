"""Health-factor math and account classification."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..constants import (
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_HEALTH_FACTOR,
    MIN_HEALTH_FACTOR,
    PRECISION,
)


@dataclass(frozen=True)
class Healthy:
    health_factor: int


@dataclass(frozen=True)
class Liquidatable:
    health_factor: int


HealthStatus = Union[Healthy, Liquidatable]


def calculate_health_factor(total_debt: int, collateral_value: int) -> int:
    """Risk-adjusted collateral per unit of debt, 18-decimal fixed point.

    Only ``LIQUIDATION_THRESHOLD`` percent of the collateral value counts, so
    an account needs twice its debt in collateral to sit at exactly 1.0.
    Accounts without debt get ``MAX_HEALTH_FACTOR``, which also caps the result
    for dust debt against very large collateral.
    """
    if total_debt == 0:
        return MAX_HEALTH_FACTOR
    adjusted = collateral_value * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
    return min(adjusted * PRECISION // total_debt, MAX_HEALTH_FACTOR)


def evaluate(total_debt: int, collateral_value: int) -> HealthStatus:
    """Classify an account as ``Healthy`` or ``Liquidatable``."""
    factor = calculate_health_factor(total_debt, collateral_value)
    if factor < MIN_HEALTH_FACTOR:
        return Liquidatable(factor)
    return Healthy(factor)
