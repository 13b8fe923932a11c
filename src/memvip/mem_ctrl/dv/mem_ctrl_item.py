# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_item.py


"""Sequence item for mem_ctrl verification."""

from __future__ import annotations

from memvip.mem_ctrl.model import Transaction
from memvip.shared.dv import BaseItem


class MemCtrlItem(BaseItem):
    """One tick of mem_ctrl pin activity.

    Inputs: we, re, wdata
    Outputs: rdata (checked)
    """

    def __init__(self, name: str = "mem_ctrl_item") -> None:
        super().__init__(name)
        self.we: int = 0
        self.re: int = 0
        self.wdata: int = 0
        self.rdata: int | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("we", "re", "wdata")

    def _out_fields(self) -> tuple[str, ...]:
        return ("rdata",)

    def load(self, tx: Transaction) -> MemCtrlItem:
        """Copy a golden-core Transaction onto the pins."""
        self.we = int(tx.write)
        self.re = int(tx.read)
        self.wdata = tx.data
        return self

    def to_transaction(self) -> Transaction:
        return Transaction(write=bool(self.we), read=bool(self.re), data=self.wdata)

    @property
    def kind(self) -> str:
        return self.to_transaction().kind
