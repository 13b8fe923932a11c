# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/test_mem_ctrl.py


"""Tests for mem_ctrl verification."""

from __future__ import annotations

from typing import Any

import pyuvm

from memvip.mem_ctrl.model import RunConfig
from memvip.shared.dv import (
    BaseCoverage,
    BaseDriver,
    BaseItem,
    BaseMonitorOut,
    BaseRefModel,
    BaseSb,
    BaseSbComparator,
    BaseSbPredictor,
    BaseSequence,
    BaseTest,
    utils_dv,
)

from .mem_ctrl_coverage import MemCtrlCoverage
from .mem_ctrl_driver import MemCtrlDriver
from .mem_ctrl_item import MemCtrlItem
from .mem_ctrl_monitor import MemCtrlMonitor
from .mem_ctrl_ref_model import MemCtrlRefModel
from .mem_ctrl_sb import MemCtrlSb, MemCtrlSbComparator, MemCtrlSbPredictor
from .mem_ctrl_sequence import MemCtrlSequence


class MemCtrlBaseTest(BaseTest):
    """Single clock, single active-low reset, one agent.

    Subclasses pick the stimulus mode; everything else comes from
    RunConfig.from_settings() and is published as ``run_cfg``.
    """

    mode: str = "directed"

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.run_cfg: RunConfig

    def run_overrides(self) -> dict[str, Any]:
        return {"mode": self.mode}

    def build_config(self) -> None:
        self.run_cfg = RunConfig.from_settings(**self.run_overrides())
        self.tick_budget = self.run_cfg.tick_budget
        super().build_config()
        utils_dv.uvm_config_db_set(self, "*", "run_cfg", self.run_cfg)
        self.logger.info("Run config: %s", self.run_cfg)

    def build_resets(self, reset_cycles: int = 5) -> None:
        super().build_resets(max(1, self.run_cfg.reset_ticks))

    def set_factory_overrides(self) -> None:
        override_type_type = pyuvm.uvm_factory().set_type_override_by_type

        override_type_type(BaseItem, MemCtrlItem)
        override_type_type(BaseDriver, MemCtrlDriver)
        override_type_type(BaseMonitorOut, MemCtrlMonitor)
        override_type_type(BaseSequence, MemCtrlSequence)
        override_type_type(BaseCoverage, MemCtrlCoverage)
        override_type_type(BaseRefModel, MemCtrlRefModel)
        override_type_type(BaseSbPredictor, MemCtrlSbPredictor)
        override_type_type(BaseSbComparator, MemCtrlSbComparator)
        override_type_type(BaseSb, MemCtrlSb)


@pyuvm.test()
class MemCtrlDirectedTest(MemCtrlBaseTest):
    """Directed pattern (MEM_CTRL_PATTERN, default fill_then_drain)."""

    mode = "directed"


@pyuvm.test()
class MemCtrlStressTest(MemCtrlBaseTest):
    """Seeded constrained-random traffic until the tick budget is spent."""

    mode = "stress"


@pyuvm.test()
class MemCtrlStrictTest(MemCtrlBaseTest):
    """Same-tick write+read pattern checked under the strict policy.

    The monitor only reports ticks that registered a read, so every
    observation must meet a queued prediction.
    """

    mode = "directed"

    def run_overrides(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "pattern": "write_read_same_tick",
            "policy": "strict",
        }


@pyuvm.test()
class MemCtrlResetReleaseTest(MemCtrlBaseTest):
    """Reads on the first tick out of reset; that read must hit address 0.

    With ``reset_cycles`` reset ticks the first active tick is tick
    ``reset_cycles``, so its read data is observed at ``reset_cycles + 1``.
    """

    mode = "directed"

    def run_overrides(self) -> dict[str, Any]:
        return {"mode": self.mode, "pattern": "read_after_reset"}

    def check_phase(self) -> None:
        super().check_phase()
        assert self.env.sb is not None, "scoreboard disabled"
        verdicts = self.env.sb.cmp.scoreboard.verdicts
        first_tick = max(1, self.run_cfg.reset_ticks) + 1
        if not verdicts:
            raise AssertionError("no read after reset release was compared")
        first = verdicts[0]
        if (first.address, first.tick) != (0, first_tick):
            self.logger.error("first read after reset: %s", first)
            raise AssertionError(
                f"first read after reset hit address {first.address} at tick "
                f"{first.tick}; expected address 0 at tick {first_tick}"
            )
        self.logger.info("first read after reset: %s", first)
