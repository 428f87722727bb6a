"""Error taxonomy for the engine, the oracle adapter and token collaborators."""
from __future__ import annotations


class SynthLedgerError(Exception):
    """Base class for every error raised by synthledger."""


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class EngineError(SynthLedgerError):
    """An engine operation was rejected; no state was changed."""


class ZeroAmount(EngineError):
    def __init__(self) -> None:
        super().__init__("Amount must be more than zero")


class UnsupportedAsset(EngineError):
    def __init__(self, asset: str) -> None:
        super().__init__(f"Asset '{asset}' is not an allowed collateral")
        self.asset = asset


class LengthMismatch(EngineError):
    def __init__(self, assets: int, feeds: int) -> None:
        super().__init__(
            f"Collateral assets ({assets}) and price feeds ({feeds}) must have the same length"
        )


class TransferFailed(EngineError):
    def __init__(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        super().__init__(
            f"Transfer of {amount} '{asset}' from {sender} to {recipient} failed"
        )
        self.asset = asset
        self.amount = amount


class MintFailed(EngineError):
    def __init__(self, to: str, amount: int) -> None:
        super().__init__(f"Mint of {amount} to {to} failed")


class BreaksHealthFactor(EngineError):
    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Health factor {health_factor} is below the minimum")
        self.health_factor = health_factor


class HealthFactorOk(EngineError):
    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Account is healthy (health factor {health_factor})")
        self.health_factor = health_factor


class HealthFactorNotImproved(EngineError):
    def __init__(self, before: int, after: int) -> None:
        super().__init__(f"Health factor did not improve ({before} -> {after})")
        self.before = before
        self.after = after


class InsufficientCollateral(EngineError):
    def __init__(self, user: str, asset: str, available: int, requested: int) -> None:
        super().__init__(
            f"{user} has {available} of '{asset}' deposited, cannot remove {requested}"
        )


class InsufficientDebt(EngineError):
    def __init__(self, user: str, outstanding: int, requested: int) -> None:
        super().__init__(f"{user} owes {outstanding}, cannot repay {requested}")


# ---------------------------------------------------------------------------
# Oracle
# ---------------------------------------------------------------------------


class OracleError(SynthLedgerError):
    """A price reading could not be trusted."""


class StalePrice(OracleError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Stale price: {reason}")
        self.reason = reason


# ---------------------------------------------------------------------------
# Token collaborators
# ---------------------------------------------------------------------------


class TokenError(SynthLedgerError):
    """A token collaborator rejected a call."""


class NotOwner(TokenError):
    pass


class ZeroAddress(TokenError):
    pass


class AmountMustBePositive(TokenError):
    pass


class BurnAmountExceedsBalance(TokenError):
    pass
