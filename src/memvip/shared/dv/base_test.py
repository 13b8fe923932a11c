# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_test.py

"""Base test: settings -> config_db, clock/reset/env creation, budgeted run."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable

import cocotb
import pyuvm
from cocotb.task import Task
from cocotb.triggers import ClockCycles, Timer
from pyuvm import ConfigDB

from . import utils_cli, utils_dv
from .base_clock_driver import BaseClockDriver
from .base_env import BaseEnv
from .base_reset_driver import BaseResetDriver
from .base_sequence import BaseSequence

# (setting name, config_db key, type, default)
Knob = tuple[str, str, type, Any]

CLOCK_KNOBS: tuple[Knob, ...] = (
    ("CLOCK_ENABLE", "clock_enable", bool, True),
    ("CLOCK_NAME", "clock_name", str, "clk"),
    ("CLOCK_PERIOD_PS", "clock_period_ps", int, 1_000),
    ("CLOCK_START_HIGH", "clock_start_high", bool, False),
    ("CLOCK_INIT_DELAY_PS", "clock_init_delay_ps", int, 0),
)

RESET_KNOBS: tuple[Knob, ...] = (
    ("RESET_ENABLE", "reset_enable", bool, True),
    ("RESET_NAME", "reset_name", str, "rst_n"),
    ("RESET_ACTIVE_LOW", "reset_active_low", bool, True),
    ("RESET_CYCLES", "reset_cycles", int, 5),
    ("RESET_SETTLE_CYCLES", "reset_settle_cycles", int, 0),
)

ENV_KNOBS: tuple[Knob, ...] = (
    ("CHECK_EN", "check_en", bool, True),
    ("COVERAGE_EN", "coverage_en", bool, True),
    ("SB_FAIL_ON_ERROR", "sb_fail_on_error", bool, True),
)

_GETTERS: dict[type, Callable[[str, Any], Any]] = {
    bool: utils_cli.get_bool_setting,
    int: utils_cli.get_int_setting,
    str: utils_cli.get_str_setting,
}


class BaseTest(pyuvm.uvm_test):
    """Builds one clock, one reset and one env, then runs the sequence.

    run_phase starts the factory's BaseSequence on agent 0. When
    ``tick_budget`` is positive a watchdog counts rising edges from time 0
    and calls ``request_stop()`` on the sequence once the budget is spent;
    the item in flight completes and drain() lets its read data be observed.

    Settings (env > plusargs > defaults), published to config_db:
        clock (scope ``*``): CLOCK_ENABLE, CLOCK_NAME, CLOCK_PERIOD_PS,
            CLOCK_START_HIGH, CLOCK_INIT_DELAY_PS
        reset (scope ``*``): RESET_ENABLE, RESET_NAME, RESET_ACTIVE_LOW,
            RESET_CYCLES, RESET_SETTLE_CYCLES
        env (scope ``env*``): CHECK_EN, COVERAGE_EN, SB_FAIL_ON_ERROR
        test: DRAIN_TIME_PS, TICK_BUDGET

    Factory overrides come from set_factory_overrides() first, then
    +uvm_set_type_override / +uvm_set_inst_override plusargs.

    Example:
        >>> class MyTest(BaseTest):
        ...     def set_factory_overrides(self):
        ...         factory.set_type_override_by_type(BaseItem, MyItem)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)

        self.clock_driver: BaseClockDriver
        self.reset_driver: BaseResetDriver
        self.env: BaseEnv
        self.tick_budget: int = 0
        self.seq: BaseSequence | None = None

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        utils_dv.uvm_config_db_set(self, "*", "dut", cocotb.top)
        self.set_factory_overrides()
        utils_cli.apply_factory_overrides_from_plusargs(self.logger)
        super().build_phase()
        self.build_config()
        self.build_clocks()
        self.build_resets()
        self.build_envs()
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self.set_logging_level_hier(utils_dv.desired_log_level())

    def start_of_simulation_phase(self) -> None:
        super().start_of_simulation_phase()
        if self.logger.isEnabledFor(logging.DEBUG):
            print(ConfigDB())
            pyuvm.uvm_factory().print(debug_level=1)
        self.logger.info(
            "Simulator seed %s, tick budget %s",
            os.getenv("COCOTB_RANDOM_SEED", "(unset)"),
            self.tick_budget or "none",
        )

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        self.raise_objection()
        self.seq = pyuvm.uvm_factory().create_object_by_type(BaseSequence, name="seq")
        watchdog: Task | None = None
        if self.tick_budget > 0:
            watchdog = cocotb.start_soon(self.budget_watchdog(self.seq))
        await self.seq.start(self.env.agents[0].sqr)
        if watchdog is not None:
            watchdog.cancel()
        await self.drain()
        self.drop_objection()
        self.logger.debug("run_phase end: %d item(s) sent", self.seq.sent)

    async def budget_watchdog(self, seq: BaseSequence) -> None:
        """Stop ``seq`` once tick_budget rising edges have elapsed."""
        clk = utils_dv.get_signal(cocotb.top, self.clock_driver.clock_name)
        await ClockCycles(clk, self.tick_budget)
        self.logger.info("Tick budget of %d reached", self.tick_budget)
        seq.request_stop()

    def set_factory_overrides(self) -> None:
        """Override in subclasses to set uvm_factory() overrides."""
        raise NotImplementedError("Implement set_factory_overrides here")

    def publish_settings(
        self, scope: str, knobs: tuple[Knob, ...], **defaults: Any
    ) -> dict[str, Any]:
        """Resolve each knob and set it in config_db under ``scope``.

        ``defaults`` replaces a knob's default by config_db key.
        """
        values: dict[str, Any] = {}
        for setting, key, kind, default in knobs:
            value = _GETTERS[kind](setting, defaults.get(key, default))
            utils_dv.uvm_config_db_set(self, scope, key, value)
            values[key] = value
        return values

    def build_config(self) -> None:
        drain_time_ps = utils_cli.get_int_setting("DRAIN_TIME_PS", 10_000)
        if drain_time_ps > 0:
            utils_dv.uvm_config_db_set(self, "", "drain_time_ps", drain_time_ps)
        if not self.tick_budget:
            self.tick_budget = max(0, utils_cli.get_int_setting("TICK_BUDGET", 0))

    def build_clocks(self) -> None:
        values = self.publish_settings("*", CLOCK_KNOBS)
        self.clock_driver = pyuvm.uvm_factory().create_component_by_type(
            BaseClockDriver,
            parent_inst_path=self.get_full_name(),
            name="clock_driver",
            parent=self,
        )
        self.clock_driver.clock_name = values["clock_name"]

    def build_resets(self, reset_cycles: int = 5) -> None:
        self.publish_settings("*", RESET_KNOBS, reset_cycles=reset_cycles)
        self.reset_driver = pyuvm.uvm_factory().create_component_by_type(
            BaseResetDriver,
            parent_inst_path=self.get_full_name(),
            name="reset_driver",
            parent=self,
        )

    def build_envs(self) -> None:
        self.publish_settings("env*", ENV_KNOBS)
        self.env = pyuvm.uvm_factory().create_component_by_type(
            BaseEnv, parent_inst_path=self.get_full_name(), name="env", parent=self
        )

    async def drain(self, time_ps: int | None = None) -> None:
        """Wait ``time_ps`` (default: config_db drain_time_ps) after the last item.

        pyuvm has no set_drain_time(); waiting in time rather than clocks
        keeps this independent of the clock period.
        """
        if time_ps is None:
            dt = utils_dv.uvm_config_db_get_try(self, "drain_time_ps")
            if isinstance(dt, int) and dt > 0:
                time_ps = dt
        if time_ps is None:
            return
        n = max(0, int(time_ps))
        self.logger.debug("drain: %s ps", format(n, "_d"))
        await Timer(n, unit="ps")
