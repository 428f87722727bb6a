"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceReading:
    """A single price-feed round, as returned by ``latest_round_data``.

    ``answer`` is fixed point with the feed's own decimals (8 for USD pairs).
    An all-zero reading means the feed was never populated.
    """

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int


@dataclass(frozen=True)
class AccountInformation:
    """Outstanding debt and collateral value of one account (18 decimals)."""

    total_debt: int
    collateral_value: int


@dataclass(frozen=True)
class CollateralDetail:
    """Single collateral asset held by an account."""

    asset: str
    symbol: str
    amount: int
    usd_value: int


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time view of an account for monitoring output."""

    user: str
    total_debt: int
    collateral_value: int
    health_factor: int
    liquidatable: bool
    collateral: tuple[CollateralDetail, ...] = ()


@dataclass(frozen=True)
class LiquidationResult:
    """Outcome of a successful liquidation."""

    user: str
    liquidator: str
    asset: str
    debt_covered: int
    collateral_seized: int
    bonus_collateral: int
    health_factor_before: int
    health_factor_after: int
