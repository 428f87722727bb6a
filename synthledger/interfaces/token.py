"""Token protocols — fungible balance ledgers held by the engine."""
from typing import Protocol


class FungibleToken(Protocol):
    """Abstract interface for a collateral asset balance store.

    ``transfer`` and ``transfer_from`` report failure by returning ``False``.
    """

    @property
    def address(self) -> str: ...

    @property
    def symbol(self) -> str: ...

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, owner: str, spender: str, amount: int) -> bool: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(
        self, spender: str, owner: str, recipient: str, amount: int
    ) -> bool: ...


class DebtToken(FungibleToken, Protocol):
    """Synthetic-unit token; mint and burn are gated to the owner."""

    def mint(self, caller: str, to: str, amount: int) -> bool: ...

    def burn(self, caller: str, amount: int) -> None: ...
