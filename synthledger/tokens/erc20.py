"""Fungible balance ledger with approve / transfer_from semantics."""
from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from ..addresses import ZERO_ADDRESS, random_address
from ..errors import AmountMustBePositive, ZeroAddress

logger = logging.getLogger(__name__)


class Erc20Token:
    """Plain fungible token.

    Moving more than a holder owns, or spending more than an allowance,
    returns ``False`` and leaves balances untouched. Malformed calls
    (negative amounts, the zero address) raise ``TokenError``.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = 18,
        address: str | None = None,
    ) -> None:
        self.name = name
        self._symbol = symbol
        self.decimals = decimals
        self._address = address or random_address()
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    @property
    def address(self) -> str:
        return self._address

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        if spender == ZERO_ADDRESS:
            raise ZeroAddress("Cannot approve the zero address")
        if amount < 0:
            raise AmountMustBePositive("Allowance cannot be negative")
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        return self._move(sender, recipient, amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> bool:
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            logger.debug(
                "%s: allowance %d of %s for %s is below %d",
                self._symbol, allowed, owner, spender, amount,
            )
            return False
        if not self._move(owner, recipient, amount):
            return False
        self._allowances[(owner, spender)] = allowed - amount
        return True

    def mint(self, to: str, amount: int) -> bool:
        """Create ``amount`` new units for ``to``. Unrestricted on plain tokens."""
        if to == ZERO_ADDRESS:
            raise ZeroAddress("Cannot mint to the zero address")
        if amount <= 0:
            raise AmountMustBePositive("Mint amount must be more than zero")
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount
        return True

    def _burn_from(self, account: str, amount: int) -> None:
        self._balances[account] = self.balance_of(account) - amount
        self._total_supply -= amount

    def _move(self, sender: str, recipient: str, amount: int) -> bool:
        if recipient == ZERO_ADDRESS:
            raise ZeroAddress("Cannot transfer to the zero address")
        if amount < 0:
            raise AmountMustBePositive("Transfer amount cannot be negative")
        balance = self.balance_of(sender)
        if balance < amount:
            logger.debug(
                "%s: balance %d of %s is below %d", self._symbol, balance, sender, amount
            )
            return False
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        return True

    # ------------------------------------------------------------------
    # Checkpointing
    # ------------------------------------------------------------------

    def checkpoint(self) -> Any:
        return deepcopy((self._balances, self._allowances, self._total_supply))

    def restore(self, state: Any) -> None:
        balances, allowances, total_supply = deepcopy(state)
        self._balances = balances
        self._allowances = allowances
        self._total_supply = total_supply

    def __repr__(self) -> str:
        return f"Erc20Token({self._symbol!r}, address={self._address!r})"
