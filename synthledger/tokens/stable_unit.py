"""Synthetic stable unit: a fungible token whose supply only its owner controls."""
from __future__ import annotations

from typing import Any

from ..addresses import ZERO_ADDRESS
from ..errors import AmountMustBePositive, BurnAmountExceedsBalance, NotOwner, ZeroAddress
from .erc20 import Erc20Token


class StableUnit(Erc20Token):
    """Owner-gated mint and burn.

    The engine is expected to own the token: it mints debt to borrowers and
    burns units that were repaid into its own balance.
    """

    def __init__(
        self,
        owner: str,
        name: str = "Stable Unit",
        symbol: str = "SUSD",
        address: str | None = None,
    ) -> None:
        super().__init__(name, symbol, decimals=18, address=address)
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._only_owner(caller)
        if new_owner == ZERO_ADDRESS:
            raise ZeroAddress("New owner is the zero address")
        self._owner = new_owner

    def mint(self, caller: str, to: str, amount: int) -> bool:  # type: ignore[override]
        self._only_owner(caller)
        return super().mint(to, amount)

    def burn(self, caller: str, amount: int) -> None:
        """Destroy ``amount`` units from the caller's own balance."""
        self._only_owner(caller)
        if amount <= 0:
            raise AmountMustBePositive("Burn amount must be more than zero")
        if self.balance_of(caller) < amount:
            raise BurnAmountExceedsBalance(
                f"Burn amount {amount} exceeds balance {self.balance_of(caller)}"
            )
        self._burn_from(caller, amount)

    def checkpoint(self) -> Any:
        return super().checkpoint(), self._owner

    def restore(self, state: Any) -> None:
        token_state, owner = state
        super().restore(token_state)
        self._owner = owner

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwner(f"{caller} is not the owner")
