# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/transaction.py

"""Stimulus record for one mem_ctrl clock tick.

Predictions and Verdicts live in memvip.shared.scoreboard.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass

DATA_MASK = 0xFF


@dataclass(frozen=True)
class Transaction:
    """Write/read flag pair plus a payload byte.

    The address is implied by the device's auto-incrementing pointer, so a
    transaction carries no address of its own.
    """

    write: bool = False
    read: bool = False
    data: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.data <= DATA_MASK:
            raise ValueError(f"data must fit in a byte, got {self.data!r}")

    @classmethod
    def idle(cls) -> Transaction:
        return cls()

    @classmethod
    def write_op(cls, data: int) -> Transaction:
        return cls(write=True, data=data & DATA_MASK)

    @classmethod
    def read_op(cls) -> Transaction:
        return cls(read=True)

    @property
    def kind(self) -> str:
        """One of ``idle``, ``write``, ``read`` or ``write_read``."""
        if self.write and self.read:
            return "write_read"
        if self.write:
            return "write"
        if self.read:
            return "read"
        return "idle"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
