"""Checkpoint protocol — state that can be captured and restored."""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Checkpointable(Protocol):
    """Objects whose state a transaction can snapshot and roll back."""

    def checkpoint(self) -> Any: ...

    def restore(self, state: Any) -> None: ...
