# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_reset_driver.py

"""Base reset driver."""

from __future__ import annotations

import pyuvm
from cocotb.triggers import NextTimeStep, ReadWrite

from . import utils_dv
from .base_clock_mixin import BaseClockMixin


# pylint: disable=duplicate-code
class BaseResetDriver(BaseClockMixin, pyuvm.uvm_component):
    # pylint: disable=line-too-long
    """Synchronous reset pulse aligned to the stimulus drive edge.

    Reset Sequence:
        1. Assert reset at time 0 using non-blocking write (avoids race conditions)
        2. Hold reset for reset_cycles drive edges; with the clock starting
           low this covers exactly reset_cycles rising edges
        3. Deassert reset on a drive edge
        4. Wait reset_settle_cycles drive edges

    Every rising edge inside the pulse is a reset tick: the DUT holds its
    address at 0 and the reference model predicts nothing. Those ticks
    count against the run's tick budget like any other.

    Configuration (via config_db):
        reset_enable (bool): Enable reset driver (default: True)
                            If False, assumes reset driven in HDL
        reset_name (str): Name of reset signal (default: "rst_n")
        reset_active_low (bool): True for active-low reset (default: True)
        reset_cycles (int): Reset ticks (default: 5); must be >= 1 when
                            enabled, since the stimulus driver waits for an
                            observed assert/deassert pair
        reset_settle_cycles (int): Drive edges after deassertion (default: 0)

    Reference:
        https://github.com/advanced-uvm/second_edition/blob/master/recipes/3.rst_drv.sv
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> uvm_config_db_set(self, "*", "reset_cycles", 20)
        >>> uvm_config_db_set(self, "*", "reset_active_low", False)
    """
    # pylint: enable=line-too-long

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.reset_enable: bool = True
        self.reset_name: str = "rst_n"
        self.reset_active_low: bool = True
        self.reset_cycles: int = 5
        self.reset_settle_cycles: int = 0

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self.clock_compute_skew()
        self._reset_pull_config()
        self.logger.debug("end_of_elaboration_phase end")

    def _reset_pull_config(self) -> None:
        """Read per-instance config from uvm_config_db (once) with defaults."""
        self.logger.debug("_reset_pull_config begin")

        for key in ("reset_enable", "reset_active_low"):
            v = utils_dv.uvm_config_db_get_try(self, key)
            if isinstance(v, bool):
                setattr(self, key, v)

        v = utils_dv.uvm_config_db_get_try(self, "reset_name")
        if isinstance(v, str) and v:
            self.reset_name = v

        for key in ("reset_cycles", "reset_settle_cycles"):
            v = utils_dv.uvm_config_db_get_try(self, key)
            if isinstance(v, int) and not isinstance(v, bool):
                setattr(self, key, v)

        if self.reset_enable:
            if self.reset_cycles < 1:
                raise ValueError(f"reset_cycles must be >= 1, got {self.reset_cycles}")
            if self.reset_settle_cycles < 0:
                raise ValueError("reset_settle_cycles must be >= 0")
        else:
            self.logger.debug(
                "Reset '%s' disabled (assumed driven in HDL).", self.reset_name
            )

        self.logger.debug("_reset_pull_config end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        if not self.reset_enable:
            return
        await self.pulse_reset()
        self.logger.debug("run_phase end")

    async def pulse_reset(self) -> None:
        """Assert/deassert reset on the same drive edge as stimuli."""
        self.logger.debug("pulse_reset begin: %d tick(s)", self.reset_cycles)

        rst = utils_dv.get_signal(self._dut, self.reset_name)
        active = 0 if self.reset_active_low else 1

        # SNUG 2016: NBA-style write at t=0, then one delta
        rst.value = active  # type: ignore[attr-defined]
        await ReadWrite()
        await NextTimeStep()

        for _ in range(self.reset_cycles):
            await self.clock_drive_edge()

        rst.value = 1 - active  # type: ignore[attr-defined]

        for _ in range(self.reset_settle_cycles):
            await self.clock_drive_edge()

        self.logger.debug("pulse_reset end")
