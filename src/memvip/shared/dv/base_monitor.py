# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_monitor.py

"""Base monitor with BFM sampling hook."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(BaseClockMixin, pyuvm.uvm_monitor, Generic[T]):
    """Base monitor with clock synchronization and an analysis port.

    The run loop calls ``sample_dut`` forever. A ``None`` return means the
    sampled point carried nothing to publish (X/Z outputs, filtered ticks)
    and is dropped; anything else is counted and written to ``ap``.

    Subclasses must implement:
        sample_dut_edge(): Wait for the appropriate sampling edge
        sample_dut(dut): Sample DUT signals and return a transaction or None

    Attributes:
        ap: Analysis port for broadcasting observed transactions
        item_count: Number of transactions published
        skip_count: Number of sampled points dropped

    Example:
        >>> class MyMonitor(BaseMonitor[MyItem]):
        ...     async def sample_dut_edge(self):
        ...         await self.clock_sample_edge()
        ...
        ...     async def sample_dut(self, dut):
        ...         await self.sample_dut_edge()
        ...         item = MyItem()
        ...         item.data = self._get_val(dut.data.value)
        ...         return item
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.ap: pyuvm.uvm_analysis_port
        self.item_count: int = 0
        self.skip_count: int = 0
        # Bind once to help hot paths
        self._get_val = utils_dv.get_signal_value_int

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T | None
        while True:
            tr = await self.sample_dut(self._dut)
            if tr is None:
                self.skip_count += 1
                continue
            self.item_count += 1
            self.ap.write(tr)

    async def sample_dut_edge(self) -> None:
        """Wait until the edge to sample the DUT."""
        raise NotImplementedError("Implement sample_dut_edge here")

    async def sample_dut(self, dut: Any) -> T | None:
        """Return the next observed transaction (or None to skip)."""
        raise NotImplementedError("Implement sample_dut here")
