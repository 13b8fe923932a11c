# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_clock_mixin.py

"""Shared helpers for reading clk config, binding handles, and waiting edges."""

from __future__ import annotations

from typing import Any, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.triggers import ReadOnly, Timer

from . import utils_dv


class BaseClockMixin:
    """Mixin giving drivers, monitors and the predictor one shared notion of
    when a tick starts and where inside it each role acts.

    Within one clock tick the bench uses three fixed points:

        drive edge    falling edge (default), or rising edge + skew; the
                      driver asserts inputs here
        ref edge      rising edge, active region; the reference-model loop
                      applies the tick's transaction here
        sample edge   rising edge, ReadOnly region; monitors sample the
                      registered outputs here

    The ref edge always runs before the sample edge of the same tick, so
    every prediction for a tick is queued before its observation arrives.

    Configuration (via config_db):
        clock_name (str): Name of clock signal
        clock_period_ps (int): Clock period in picoseconds
        drive_falling_edge (bool): Drive on falling edge (default: True)
        drive_frac_after (float): Fraction of period after rising edge to drive
                                 when drive_falling_edge=False (default: 0.20)

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)
    """

    def _clock_init_defaults(
        self,
        *,
        name: str = "clk",
        period_ps: int = 1_000,
        falling: bool = True,
        frac_after: float = 0.20,
    ) -> None:
        """Set defaults in __init__ of the consumer."""
        self.clock_name: str = name
        self.clock_period_ps: int = period_ps
        self.drive_falling_edge: bool = falling
        self.drive_frac_after: float = frac_after
        self._dut: Any | None = None
        self._clk: SimHandleBase | None = None
        self._postedge_delay_ps: int = 0

    def _as_comp(self) -> pyuvm.uvm_component:
        """Type-narrow self for config_db utils (mixin is only used on components)."""
        return cast(pyuvm.uvm_component, self)

    def _clock_pull_config(self) -> None:
        """Read per-instance config once (EoE)."""
        comp = self._as_comp()
        comp.logger.debug("_clock_pull_config begin")
        v = utils_dv.uvm_config_db_get_try(comp, "clock_name")
        if isinstance(v, str) and v:
            self.clock_name = v
        v = utils_dv.uvm_config_db_get_try(comp, "clock_period_ps")
        if isinstance(v, int):
            self.clock_period_ps = v
        if self.clock_period_ps <= 0:
            raise ValueError(f"clock_period_ps must be > 0, got {self.clock_period_ps}")
        comp.logger.debug("_clock_pull_config end")

    def _clock_bind_handles(self) -> None:
        """Bind dut/signal once (EoE)."""
        comp = self._as_comp()
        comp.logger.debug("_clock_bind_handles begin")
        self._dut = utils_dv.uvm_config_db_get(comp, "dut")
        self._clk = utils_dv.get_signal(self._dut, self.clock_name)
        comp.logger.debug("_clock_bind_handles end")

    def clock_compute_skew(self) -> None:
        """Compute post-edge drive skew once (EoE)."""
        if self.drive_falling_edge:
            return
        if not 0.0 <= self.drive_frac_after <= 1.0:
            raise ValueError(
                f"drive_frac_after must be in [0.0, 1.0], got {self.drive_frac_after}"
            )
        self._postedge_delay_ps = int(self.clock_period_ps * self.drive_frac_after)

    async def clock_drive_edge(self) -> None:
        """Align to the driving edge (runtime)."""
        assert self._clk is not None, "clock_drive_edge before _clock_bind_handles"
        if self.drive_falling_edge:
            await self._clk.falling_edge
        else:
            await self._clk.rising_edge
            if self._postedge_delay_ps > 0:
                await Timer(self._postedge_delay_ps, unit="ps")

    async def clock_ref_edge(self) -> None:
        """Wake at the rising edge, before any ReadOnly sampling."""
        assert self._clk is not None, "clock_ref_edge before _clock_bind_handles"
        await self._clk.rising_edge

    async def clock_sample_edge(self) -> None:
        """Wake at the rising edge and settle into ReadOnly (SV #1step)."""
        assert self._clk is not None, "clock_sample_edge before _clock_bind_handles"
        await self._clk.rising_edge
        await ReadOnly()
