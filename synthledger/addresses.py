"""Account principals are plain hex address strings."""
from __future__ import annotations

import secrets

ZERO_ADDRESS = "0x" + "0" * 40


def random_address() -> str:
    return "0x" + secrets.token_hex(20)
