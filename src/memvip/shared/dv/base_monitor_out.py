# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_monitor_out.py

"""Base monitor for registered DUT outputs, one sample per tick."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from .base_item import BaseItem
from .base_monitor import BaseMonitor

T = TypeVar("T", bound=BaseItem)


class BaseMonitorOut(BaseMonitor[T], Generic[T]):  # pylint: disable=too-many-ancestors
    """Monitor for observing registered DUT outputs.

    Outputs are sampled in the ReadOnly region right after each rising edge,
    consistent with SystemVerilog's #1step timing: the values seen are the
    ones the flops captured on that edge, and the inputs seen are still the
    ones that produced them.

    Each rising edge advances ``tick`` by one, so an item sampled after the
    k-th edge carries ``tick == k``. The reference-model loop counts edges
    the same way, which keeps expected and observed ticks in one frame.

    Subclasses must implement:
        sample_dut(dut): await sample_dut_edge(), read outputs, return an
                         item (stamped via stamp()) or None

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)

    Example:
        >>> class MyOutputMonitor(BaseMonitorOut[MyItem]):
        ...     async def sample_dut(self, dut):
        ...         await self.sample_dut_edge()
        ...         item = self.stamp(MyItem())
        ...         item.result = self._get_val(dut.result.value)
        ...         return item
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.tick: int = 0

    async def sample_dut_edge(self) -> None:
        """Rising edge then ReadOnly; counts the tick."""
        await self.clock_sample_edge()
        self.tick += 1

    def stamp(self, tr: T) -> T:
        """Tag an observed item with the current tick."""
        tr.tick = self.tick
        return tr

    async def sample_dut(self, dut: Any) -> T | None:
        """Return the next observed transaction (or None to skip)."""
        raise NotImplementedError("Implement sample_dut here")
