"""Synthetic-unit engine — position operations, liquidation and accessors."""
from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Sequence

from ..addresses import random_address
from ..constants import (
    ADDITIONAL_FEED_PRECISION,
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_HEALTH_FACTOR,
    PRECISION,
    TIMEOUT,
)
from ..errors import (
    BreaksHealthFactor,
    HealthFactorNotImproved,
    HealthFactorOk,
    LengthMismatch,
    MintFailed,
    TokenError,
    TransferFailed,
    UnsupportedAsset,
    ZeroAmount,
)
from ..interfaces.checkpoint import Checkpointable
from ..interfaces.price_feed import PriceFeed
from ..interfaces.token import DebtToken, FungibleToken
from ..models import (
    AccountInformation,
    AccountSnapshot,
    CollateralDetail,
    LiquidationResult,
)
from . import health
from .ledger import CollateralLedger
from .transaction import Transaction
from .valuation import Valuation

logger = logging.getLogger(__name__)


def _system_clock() -> int:
    return int(time.time())


class SynthEngine:
    """Overcollateralized ledger for a synthetic stable unit.

    Users deposit registered collateral, mint the stable unit against it and
    repay it to release collateral. Accounts whose health factor drops below
    ``MIN_HEALTH_FACTOR`` can be liquidated by anyone holding stable units.

    Every public mutating method runs under a single writer lock inside a
    ``Transaction``: on any failure the ledger and all token collaborators are
    restored and the error is re-raised. The health check is a post-condition,
    so an operation may pass through an unhealthy state as long as it ends
    healthy.

    The engine must own ``debt_token`` before ``mint_debt`` can succeed.
    """

    def __init__(
        self,
        collateral_assets: Sequence[FungibleToken],
        price_feeds: Sequence[PriceFeed],
        debt_token: DebtToken,
        *,
        clock: Callable[[], int] | None = None,
        address: str | None = None,
    ) -> None:
        if len(collateral_assets) != len(price_feeds):
            raise LengthMismatch(len(collateral_assets), len(price_feeds))
        for token in (*collateral_assets, debt_token):
            if not isinstance(token, Checkpointable):
                raise TypeError(f"{token!r} does not support checkpoint/restore")

        self._address = address or random_address()
        self._tokens: dict[str, FungibleToken] = {}
        self._price_feeds: dict[str, PriceFeed] = {}
        for token, feed in zip(collateral_assets, price_feeds):
            self._tokens[token.address] = token
            self._price_feeds[token.address] = feed

        self._debt_token = debt_token
        self._clock = clock or _system_clock
        self._ledger = CollateralLedger()
        self._valuation = Valuation(self._price_feeds, self._clock)
        self._lock = threading.RLock()

        logger.info(
            "Engine %s registered collateral: %s",
            self._address,
            ", ".join(t.symbol for t in self._tokens.values()),
        )

    # ------------------------------------------------------------------
    # Position operations
    #
    # Each operation first applies its ledger changes and runs every health
    # check, and only then calls the token collaborators.
    # ------------------------------------------------------------------

    def deposit_collateral(self, user: str, asset: str, amount: int) -> None:
        """Move ``amount`` of ``asset`` from the user's wallet into the engine.

        The user must have approved the engine for at least ``amount``.
        """
        with self._atomic("deposit_collateral"):
            self._add_collateral(user, asset, amount)
            self._pull(self._tokens[asset], user, amount)

    def mint_debt(self, user: str, amount: int) -> None:
        """Borrow ``amount`` stable units against the user's collateral."""
        with self._atomic("mint_debt"):
            self._add_debt(user, amount)
            self._revert_if_health_factor_is_broken(user)
            self._mint(user, amount)

    def redeem_collateral(self, user: str, asset: str, amount: int) -> None:
        """Withdraw collateral; fails if the account would end up unhealthy."""
        with self._atomic("redeem_collateral"):
            self._remove_collateral(user, asset, amount)
            self._revert_if_health_factor_is_broken(user)
            self._push(self._tokens[asset], user, amount)

    def burn_debt(self, user: str, amount: int) -> None:
        """Repay ``amount`` of debt with stable units from the user's wallet.

        Needs no price: repaying can only improve an account.
        """
        with self._atomic("burn_debt"):
            self._remove_debt(user, amount)
            self._pull_and_burn(user, amount)

    def deposit_collateral_and_mint_debt(
        self, user: str, asset: str, amount_collateral: int, amount_to_mint: int
    ) -> None:
        with self._atomic("deposit_collateral_and_mint_debt"):
            self._add_collateral(user, asset, amount_collateral)
            self._add_debt(user, amount_to_mint)
            self._revert_if_health_factor_is_broken(user)
            self._pull(self._tokens[asset], user, amount_collateral)
            self._mint(user, amount_to_mint)

    def redeem_collateral_for_debt(
        self, user: str, asset: str, amount_collateral: int, amount_to_burn: int
    ) -> None:
        """Repay debt and withdraw collateral in one step, repaying first."""
        with self._atomic("redeem_collateral_for_debt"):
            self._remove_debt(user, amount_to_burn)
            self._remove_collateral(user, asset, amount_collateral)
            self._revert_if_health_factor_is_broken(user)
            self._pull_and_burn(user, amount_to_burn)
            self._push(self._tokens[asset], user, amount_collateral)

    # ------------------------------------------------------------------
    # Liquidation
    # ------------------------------------------------------------------

    def liquidate(
        self, liquidator: str, user: str, asset: str, debt_to_cover: int
    ) -> LiquidationResult:
        """Cover part of an unhealthy account's debt in exchange for its collateral.

        The liquidator receives the ``asset`` quantity worth ``debt_to_cover``
        plus a ``LIQUIDATION_BONUS`` percent bonus, takes over the covered debt
        and repays it at once with stable units from their own wallet. The
        liquidated account's health factor must strictly improve and the
        liquidator must stay healthy.
        """
        with self._atomic("liquidate"):
            self._require_positive(debt_to_cover)
            self._require_allowed(asset)

            starting = self._health_factor(user)
            if starting >= MIN_HEALTH_FACTOR:
                raise HealthFactorOk(starting)

            base = self._valuation.token_amount_from_usd(asset, debt_to_cover)
            bonus = base * LIQUIDATION_BONUS // LIQUIDATION_PRECISION
            self._remove_collateral(user, asset, base + bonus)
            self._ledger.move_debt(user, liquidator, debt_to_cover)
            self._remove_debt(liquidator, debt_to_cover)

            ending = self._health_factor(user)
            if ending <= starting:
                raise HealthFactorNotImproved(starting, ending)
            self._revert_if_health_factor_is_broken(liquidator)

            self._pull_and_burn(liquidator, debt_to_cover)
            self._push(self._tokens[asset], liquidator, base + bonus)

        logger.info(
            "Liquidated %s by %s: covered %d, seized %d %s (bonus %d)",
            user,
            liquidator,
            debt_to_cover,
            base + bonus,
            self._tokens[asset].symbol,
            bonus,
        )
        return LiquidationResult(
            user=user,
            liquidator=liquidator,
            asset=asset,
            debt_covered=debt_to_cover,
            collateral_seized=base + bonus,
            bonus_collateral=bonus,
            health_factor_before=starting,
            health_factor_after=ending,
        )

    # ------------------------------------------------------------------
    # Ledger steps
    # ------------------------------------------------------------------

    def _add_collateral(self, user: str, asset: str, amount: int) -> None:
        self._require_positive(amount)
        self._require_allowed(asset)
        self._ledger.add_collateral(user, asset, amount)
        logger.info("Collateral deposited: %s %d %s", user, amount, self._tokens[asset].symbol)

    def _remove_collateral(self, user: str, asset: str, amount: int) -> None:
        self._require_positive(amount)
        self._require_allowed(asset)
        self._ledger.remove_collateral(user, asset, amount)
        logger.info("Collateral redeemed: %s %d %s", user, amount, self._tokens[asset].symbol)

    def _add_debt(self, user: str, amount: int) -> None:
        self._require_positive(amount)
        self._ledger.add_debt(user, amount)

    def _remove_debt(self, user: str, amount: int) -> None:
        self._require_positive(amount)
        self._ledger.remove_debt(user, amount)

    # ------------------------------------------------------------------
    # Collaborator calls
    # ------------------------------------------------------------------

    def _mint(self, user: str, amount: int) -> None:
        try:
            minted = self._debt_token.mint(self._address, user, amount)
        except TokenError as e:
            raise MintFailed(user, amount) from e
        if not minted:
            raise MintFailed(user, amount)
        logger.info("Debt minted: %s %d", user, amount)

    def _pull_and_burn(self, payer: str, amount: int) -> None:
        self._pull(self._debt_token, payer, amount)
        self._debt_token.burn(self._address, amount)
        logger.info("Debt burned: %d paid by %s", amount, payer)

    def _push(self, token: FungibleToken, to: str, amount: int) -> None:
        try:
            sent = token.transfer(self._address, to, amount)
        except TokenError as e:
            raise TransferFailed(token.address, self._address, to, amount) from e
        if not sent:
            raise TransferFailed(token.address, self._address, to, amount)

    def _pull(self, token: FungibleToken, owner: str, amount: int) -> None:
        try:
            received = token.transfer_from(self._address, owner, self._address, amount)
        except TokenError as e:
            raise TransferFailed(token.address, owner, self._address, amount) from e
        if not received:
            raise TransferFailed(token.address, owner, self._address, amount)

    # ------------------------------------------------------------------
    # Checks and plumbing
    # ------------------------------------------------------------------

    def _revert_if_health_factor_is_broken(self, user: str) -> None:
        status = self.evaluate(user)
        if isinstance(status, health.Liquidatable):
            raise BreaksHealthFactor(status.health_factor)

    def _health_factor(self, user: str) -> int:
        info = self._account_information(user)
        return health.calculate_health_factor(info.total_debt, info.collateral_value)

    def _account_information(self, user: str) -> AccountInformation:
        collateral_value = self._valuation.account_collateral_value(self._ledger, user)
        return AccountInformation(
            total_debt=self._ledger.debt_of(user), collateral_value=collateral_value
        )

    @staticmethod
    def _require_positive(amount: int) -> None:
        if amount <= 0:
            raise ZeroAmount()

    def _require_allowed(self, asset: str) -> None:
        if asset not in self._tokens:
            raise UnsupportedAsset(asset)

    @contextmanager
    def _atomic(self, name: str) -> Iterator[None]:
        with self._lock, Transaction(self._participants, name=name):
            yield

    @property
    def _participants(self) -> list[Checkpointable]:
        return [self._ledger, *self._tokens.values(), self._debt_token]

    # ------------------------------------------------------------------
    # Valuation-backed reads (propagate StalePrice)
    # ------------------------------------------------------------------

    def evaluate(self, user: str) -> health.HealthStatus:
        with self._lock:
            info = self._account_information(user)
        return health.evaluate(info.total_debt, info.collateral_value)

    def get_account_information(self, user: str) -> AccountInformation:
        with self._lock:
            return self._account_information(user)

    def get_health_factor(self, user: str) -> int:
        with self._lock:
            return self._health_factor(user)

    def get_account_collateral_value(self, user: str) -> int:
        with self._lock:
            return self._valuation.account_collateral_value(self._ledger, user)

    def get_usd_value(self, asset: str, amount: int) -> int:
        with self._lock:
            return self._valuation.usd_value(asset, amount)

    def get_token_amount_from_usd(self, asset: str, usd_amount: int) -> int:
        with self._lock:
            return self._valuation.token_amount_from_usd(asset, usd_amount)

    def get_total_collateral_value(self) -> int:
        with self._lock:
            return sum(
                self._valuation.usd_value(asset, self._ledger.total_deposited(asset))
                for asset in self._tokens
            )

    def is_solvent(self) -> bool:
        """Whether all deposited collateral is worth at least all outstanding debt."""
        with self._lock:
            return self.get_total_collateral_value() >= self._ledger.total_debt

    def snapshot_account(self, user: str) -> AccountSnapshot:
        with self._lock:
            details = tuple(
                CollateralDetail(
                    asset=asset,
                    symbol=token.symbol,
                    amount=self._ledger.collateral_of(user, asset),
                    usd_value=self._valuation.usd_value(
                        asset, self._ledger.collateral_of(user, asset)
                    ),
                )
                for asset, token in self._tokens.items()
            )
            total_debt = self._ledger.debt_of(user)
            collateral_value = sum(d.usd_value for d in details)
            status = health.evaluate(total_debt, collateral_value)
            return AccountSnapshot(
                user=user,
                total_debt=total_debt,
                collateral_value=collateral_value,
                health_factor=status.health_factor,
                liquidatable=isinstance(status, health.Liquidatable),
                collateral=details,
            )

    # ------------------------------------------------------------------
    # Plain reads (never fail)
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_health_factor(total_debt: int, collateral_value: int) -> int:
        return health.calculate_health_factor(total_debt, collateral_value)

    def get_collateral_tokens(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def get_collateral_balance_of_user(self, user: str, asset: str) -> int:
        return self._ledger.collateral_of(user, asset)

    def get_account_debt(self, user: str) -> int:
        return self._ledger.debt_of(user)

    def get_collateral_token_price_feed(self, asset: str) -> PriceFeed | None:
        return self._price_feeds.get(asset)

    def get_total_deposited(self, asset: str) -> int:
        return self._ledger.total_deposited(asset)

    def get_total_debt(self) -> int:
        return self._ledger.total_debt

    def accounts(self) -> tuple[str, ...]:
        return tuple(self._ledger.accounts())

    @property
    def address(self) -> str:
        return self._address

    @property
    def debt_token(self) -> DebtToken:
        return self._debt_token

    @property
    def precision(self) -> int:
        return PRECISION

    @property
    def additional_feed_precision(self) -> int:
        return ADDITIONAL_FEED_PRECISION

    @property
    def liquidation_threshold(self) -> int:
        return LIQUIDATION_THRESHOLD

    @property
    def liquidation_bonus(self) -> int:
        return LIQUIDATION_BONUS

    @property
    def liquidation_precision(self) -> int:
        return LIQUIDATION_PRECISION

    @property
    def min_health_factor(self) -> int:
        return MIN_HEALTH_FACTOR

    @property
    def timeout(self) -> int:
        return TIMEOUT
