# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/ref_model.py

"""mem_ctrl reference model (golden predictor).

The device has a 4-bit address pointer that advances by one on every clock
tick that is not held in reset, whether or not the tick carried a write or
a read. Reads are registered: the byte presented on ``rdata`` during tick
``t + 1`` is ``memory[address]`` for the address that was current while
``re`` was asserted at tick ``t``.

The model encodes that one-tick latch by pushing the prediction for a read
at the moment the read is applied. The scoreboard pops it when the monitor
samples the DUT after the clocked update, which is one tick later in the
DUT's frame.

Write and read in the same tick are write-first: the write lands, then the
read captures the new byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from memvip.shared.scoreboard import Prediction

from .transaction import DATA_MASK, Transaction

logger = logging.getLogger(__name__)

ADDR_BITS = 4
DEPTH = 1 << ADDR_BITS
ADDR_MASK = DEPTH - 1


@dataclass
class DeviceState:
    """State owned exclusively by the reference model."""

    address: int = 0
    memory: list[int] = field(default_factory=lambda: [0] * DEPTH)
    pending_output: int | None = None

    def snapshot(self) -> dict[str, object]:
        """Copy of the state for debug and invariant checks."""
        return {
            "address": self.address,
            "memory": list(self.memory),
            "pending_output": self.pending_output,
        }


class MemCtrlModel:
    """Pure state-transition model of the memory device.

    ``sink`` receives one Prediction for every applied read. In a bench it
    is the scoreboard's ``ExpectedQueue.push``.
    """

    def __init__(self, sink: Callable[[Prediction], None] | None = None) -> None:
        self.state = DeviceState()
        self._sink = sink
        self._reset_active: bool = False
        # Simple counters for debug/statistics
        self.ticks: int = 0
        self.writes: int = 0
        self.reads: int = 0

    # ------------------------------------------------------------------
    # Reset handling
    # ------------------------------------------------------------------

    @property
    def reset_active(self) -> bool:
        return self._reset_active

    def reset_change(self, active: bool) -> None:
        """Mirror the DUT's reset level. Memory contents survive reset."""
        logger.debug("reset_change: active=%s", active)
        self._reset_active = active
        if active:
            self.state.address = 0
            self.state.pending_output = None

    def clear(self) -> None:
        """Return to the power-on state: zeroed memory, address 0."""
        self.state = DeviceState()
        self.ticks = 0
        self.writes = 0
        self.reads = 0

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def apply(self, tx: Transaction, tick: int = 0) -> Prediction | None:
        """Advance the model by one tick with the transaction issued for it.

        Returns the prediction pushed for a read, else None.
        """
        self.ticks += 1
        st = self.state

        if self._reset_active:
            st.address = 0
            return None

        prediction: Prediction | None = None
        if tx.write:
            st.memory[st.address] = tx.data & DATA_MASK
            self.writes += 1
        if tx.read:
            data = st.memory[st.address]
            st.pending_output = data
            prediction = Prediction(tick=tick, address=st.address, data=data)
            self.reads += 1
            if self._sink is not None:
                self._sink(prediction)

        logger.debug(
            "REF tick=%d addr=%d %s -> %s",
            tick,
            st.address,
            tx.kind,
            "-" if prediction is None else f"0x{prediction.data:02x}",
        )
        st.address = (st.address + 1) & ADDR_MASK
        return prediction
