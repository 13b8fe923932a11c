# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_clock_driver.py

"""Clock source for the bench: the single tick every component follows."""

from __future__ import annotations

from typing import cast

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.handle import LogicObject
from cocotb.task import Task
from cocotb.triggers import Timer

from . import utils_dv
from .base_clock_mixin import BaseClockMixin


class BaseClockDriver(BaseClockMixin, pyuvm.uvm_component):
    """Starts a cocotb Clock on ``clock_name`` in start_of_simulation_phase
    and stops it in final_phase.

    Configuration (via config_db):
        clock_enable (bool): Drive the clock (default: True); False means the
                             HDL drives it
        clock_name (str): Name of clock signal (default: "clk")
        clock_period_ps (int): Clock period in picoseconds (default: 1000)
        clock_start_high (bool): Start with high phase (default: False)
        clock_init_delay_ps (int): Delay before starting clock (default: 0)

    Reference:
        https://github.com/advanced-uvm/second_edition/blob/master/recipes/2.clk_drv.sv
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.clock_enable: bool = True
        self.clock_start_high: bool = False
        self.clock_init_delay_ps: int = 0
        self._task: Task | None = None
        self._clock_task: Task | None = None

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        for key in ("clock_enable", "clock_start_high"):
            v = utils_dv.uvm_config_db_get_try(self, key)
            if isinstance(v, bool):
                setattr(self, key, v)
        v = utils_dv.uvm_config_db_get_try(self, "clock_init_delay_ps")
        if isinstance(v, int):
            if v < 0:
                raise ValueError(f"clock_init_delay_ps must be >= 0, got {v}")
            self.clock_init_delay_ps = v
        self._clock_bind_handles()
        self.logger.debug("end_of_elaboration_phase end")

    def start_of_simulation_phase(self) -> None:
        self.logger.debug("start_of_simulation_phase begin")
        super().start_of_simulation_phase()
        if not self.clock_enable:
            self.logger.debug(
                "Clock '%s' disabled (assumed driven in HDL).", self.clock_name
            )
            return
        self._task = cocotb.start_soon(self._run_clock())
        self.logger.debug("start_of_simulation_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        for task in (self._task, self._clock_task):
            if task is not None:
                task.cancel()
        self._task = None
        self._clock_task = None
        super().final_phase()
        self.logger.debug("final_phase end")

    async def _run_clock(self) -> None:
        assert self._clk is not None, "_run_clock before _clock_bind_handles"
        if self.clock_init_delay_ps > 0:
            await Timer(self.clock_init_delay_ps, unit="ps")
        self.logger.debug(
            "Starting clock: dut.%s period=%d ps start_high=%s",
            self.clock_name,
            self.clock_period_ps,
            self.clock_start_high,
        )
        clk = cast(LogicObject, self._clk)
        self._clock_task = cocotb.start_soon(
            Clock(clk, self.clock_period_ps, unit="ps").start(
                start_high=self.clock_start_high
            )
        )
        self._task = None
