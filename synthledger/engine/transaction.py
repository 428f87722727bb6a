"""All-or-nothing boundary around a state-mutating operation."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from ..interfaces.checkpoint import Checkpointable

logger = logging.getLogger(__name__)


class Transaction:
    """Checkpoint participants on entry, restore them all if the body raises.

    Usage::

        with Transaction([ledger, token], name="deposit"):
            ledger.add_collateral(...)
            token.transfer_from(...)

    The exception is always re-raised after rollback.
    """

    def __init__(self, participants: Iterable[Checkpointable], name: str = "tx") -> None:
        self.participants = list(participants)
        self.name = name
        self._snapshots: list[tuple[Checkpointable, Any]] = []

    def __enter__(self) -> Transaction:
        self._snapshots = [(p, p.checkpoint()) for p in self.participants]
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._rollback()
            logger.warning("Rolled back %s: %s", self.name, exc)
        self._snapshots = []
        return False

    def _rollback(self) -> None:
        for participant, state in self._snapshots:
            participant.restore(state)
