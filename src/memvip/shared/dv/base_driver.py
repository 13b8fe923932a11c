# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_driver.py

"""Base driver: one item per drive edge, each issued item broadcast on ap."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import cocotb
import pyuvm
from cocotb.triggers import Event, NextTimeStep, ReadWrite, Timer

from . import utils_dv
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseDriver(BaseClockMixin, pyuvm.uvm_driver, Generic[T]):
    """UVM driver with clock alignment, reset gating and an issue port.

    Every item is asserted on exactly one drive slot, and a clone of it is
    written to ``ap`` in that same slot. A slot is normally a drive edge;
    the first slot is the drive edge that released reset, so the first
    item lands on the first tick out of reset. The reference-model loop
    listens to ``ap``, so the model sees exactly what the DUT will see on
    the next rising edge.

    Flow:
        1. Apply initial_dut_input_values at t=0 (NBA-style, one delta)
        2. Wait for reset to assert, then deassert, and open the release slot
        3. get_next_item -> drive_item -> publish on ap -> item_done

    Subclasses must implement:
        drive_item(dut, tr): await drive_slot() and assert the signals

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> class MyDriver(BaseDriver[MyItem]):
        ...     async def drive_item(self, dut, tr):
        ...         await self.drive_slot()
        ...         dut.en.value = tr.en
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.initial_dut_input_values: dict[str, int] = {}
        self.ap: pyuvm.uvm_analysis_port
        self.issued: int = 0
        self._reset_active: bool = False
        self._release_slot: bool = False
        # Level-triggered events reflect current reset state
        self._rst_asserted: Event = Event()
        self._rst_deasserted: Event = Event()
        self._rst_deasserted.set()  # default: not in reset at t=0

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
        self.clock_compute_skew()
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T
        await self.apply_initial_dut_inputs()
        await self.wait_for_reset_active()
        await self.wait_for_reset_inactive()
        await self.open_release_slot()
        while True:
            tr = await self.seq_item_port.get_next_item()
            await self.drive_item(self._dut, tr)
            self.publish(tr)
            self.seq_item_port.item_done()

    def publish(self, tr: T) -> None:
        """Broadcast a clone of the item just driven."""
        self.issued += 1
        self.ap.write(tr.clone())

    async def apply_initial_dut_inputs(self) -> None:
        """
        Reference: SNUG 2016 "Applying Stimulus & Sampling Outputs." Apply DUT
        inputs at time 0 using a non-blocking-style write and advance one delta
        cycle to avoid races.
        """
        self.logger.debug("apply_initial_dut_inputs begin")
        utils_dv.drive_signals(self._dut, self.initial_dut_input_values)
        await ReadWrite()  # like an NBA at t=0
        await NextTimeStep()
        self.logger.debug("apply_initial_dut_inputs end")

    async def wait_for_reset_active(self) -> None:
        """Block until reset is asserted (polarity-neutral)."""
        await self._rst_asserted.wait()

    async def wait_for_reset_inactive(self) -> None:
        """Block until reset is deasserted (polarity-neutral)."""
        await self._rst_deasserted.wait()

    def reset_change(self, value: int, active: bool) -> None:
        """Called by BaseResetSink on reset level changes."""
        self._reset_active = active
        if active:
            self._rst_asserted.set()
            self._rst_deasserted.clear()
        else:
            self._rst_deasserted.set()
            self._rst_asserted.clear()
        self.logger.debug("reset_change: value=%d active=%s", value, active)

    async def drive_item(self, dut: Any, tr: T) -> None:
        """Drive DUT signals for one transaction."""
        raise NotImplementedError("Implement DUT signal driving here")

    async def open_release_slot(self) -> None:
        """Reopen the drive edge on which reset was released.

        The release is seen in ReadOnly of that edge, where inputs cannot be
        written. One simulator step later the inputs are writable again and
        the whole first tick out of reset is still ahead; the slot closes at
        that tick's rising edge.
        """
        await Timer(1, unit="step")
        self._release_slot = True
        cocotb.start_soon(self._close_release_slot())

    async def _close_release_slot(self) -> None:
        await self.clock_ref_edge()
        self._release_slot = False

    async def drive_slot(self) -> None:
        """Wait until inputs may be driven for the next tick."""
        if self._release_slot:
            self._release_slot = False
            return
        await self.clock_drive_edge()
