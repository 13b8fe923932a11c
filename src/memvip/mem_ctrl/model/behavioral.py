# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/behavioral.py

"""Cycle-level stand-in for the mem_ctrl RTL.

Written against the pin list (``rst_n``, ``we``, ``re``, ``wdata``,
``rdata``) rather than against the reference model, so the TickHarness can
exercise the checking pipeline without a simulator. Each ``step`` is one
rising clock edge and mirrors ``rtl/mem_ctrl.sv``.
"""

from __future__ import annotations

from .transaction import Transaction


class BehavioralMemCtrl:
    """Registers: 4-bit address pointer, 16x8 memory, 8-bit read register.

    Reset clears the pointer and the read register; memory is kept.
    """

    def __init__(self, depth: int = 16) -> None:
        self.depth = depth
        self.addr = 0
        self.mem = [0] * depth
        self.rdata = 0

    def step(self, rst_n: int, tx: Transaction) -> int:
        """Clock one edge with the given pins and return the new ``rdata``."""
        if not rst_n:
            self.addr = 0
            self.rdata = 0
            return self.rdata
        if tx.write:
            self.mem[self.addr] = tx.data
        if tx.read:
            self.rdata = self.mem[self.addr]
        self.addr = (self.addr + 1) % self.depth
        return self.rdata
