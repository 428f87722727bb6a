"""Per-account collateral and debt bookkeeping. No pricing happens here."""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Iterator

from ..errors import InsufficientCollateral, InsufficientDebt


class CollateralLedger:
    """Per-account collateral balances and synthetic-unit debt.

    An account appears on its first deposit or debt change and is never
    removed; zeroed balances simply remain.
    """

    def __init__(self) -> None:
        self._collateral: dict[str, dict[str, int]] = {}
        self._debt: dict[str, int] = {}
        self._total_deposited: dict[str, int] = {}
        self._total_debt = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def collateral_of(self, user: str, asset: str) -> int:
        return self._collateral.get(user, {}).get(asset, 0)

    def debt_of(self, user: str) -> int:
        return self._debt.get(user, 0)

    def total_deposited(self, asset: str) -> int:
        return self._total_deposited.get(asset, 0)

    @property
    def total_debt(self) -> int:
        return self._total_debt

    def accounts(self) -> Iterator[str]:
        """Yield every known account, in order of first appearance."""
        seen = dict.fromkeys(self._collateral)
        seen.update(dict.fromkeys(self._debt))
        yield from seen

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_collateral(self, user: str, asset: str, amount: int) -> None:
        balances = self._collateral.setdefault(user, {})
        balances[asset] = balances.get(asset, 0) + amount
        self._total_deposited[asset] = self.total_deposited(asset) + amount

    def remove_collateral(self, user: str, asset: str, amount: int) -> None:
        available = self.collateral_of(user, asset)
        if amount > available:
            raise InsufficientCollateral(user, asset, available, amount)
        self._collateral[user][asset] = available - amount
        self._total_deposited[asset] -= amount

    def add_debt(self, user: str, amount: int) -> None:
        self._debt[user] = self.debt_of(user) + amount
        self._total_debt += amount

    def remove_debt(self, user: str, amount: int) -> None:
        outstanding = self.debt_of(user)
        if amount > outstanding:
            raise InsufficientDebt(user, outstanding, amount)
        self._debt[user] = outstanding - amount
        self._total_debt -= amount

    def move_debt(self, from_user: str, to_user: str, amount: int) -> None:
        """Reassign ``amount`` of debt; total debt is unchanged."""
        self.remove_debt(from_user, amount)
        self.add_debt(to_user, amount)

    # ------------------------------------------------------------------
    # Checkpointing
    # ------------------------------------------------------------------

    def checkpoint(self) -> Any:
        return deepcopy(
            (self._collateral, self._debt, self._total_deposited, self._total_debt)
        )

    def restore(self, state: Any) -> None:
        collateral, debt, total_deposited, total_debt = deepcopy(state)
        self._collateral = collateral
        self._debt = debt
        self._total_deposited = total_deposited
        self._total_debt = total_debt
