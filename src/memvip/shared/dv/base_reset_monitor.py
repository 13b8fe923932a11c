# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_reset_monitor.py

"""Base reset monitor."""


from __future__ import annotations

from typing import Any

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.triggers import ReadOnly

from . import utils_dv
from .base_monitor import BaseMonitor
from .base_reset_item import BaseResetItem


class BaseResetMonitor(
    BaseMonitor[BaseResetItem]
):  # pylint: disable=too-many-ancestors disable=duplicate-code
    """Publishes polarity-neutral reset events on every level change.

    Behavior:
        1. At t=0: sample the initial reset level in ReadOnly and publish it
        2. Runtime: wake on reset value changes, sample in ReadOnly, publish
           only when the resolved level differs from the last one

    Since reset is driven on the drive edge, each event reaches the
    predictor and driver before the next rising edge, so the reference
    model's reset state always matches what the DUT sees on that edge.

    Configuration (via config_db):
        reset_name (str): Name of reset signal (default: "rst_n")
        reset_active_low (bool): True for active-low reset (default: True)

    Example:
        >>> mon_rst.ap.connect(reset_sink.analysis_export)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.reset_name: str = "rst_n"
        self.reset_active_low: bool = True
        self._rst: SimHandleBase | None = None
        self._last_val: int | None = None

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        v = utils_dv.uvm_config_db_get_try(self, "reset_name")
        if isinstance(v, str) and v:
            self.reset_name = v
        v = utils_dv.uvm_config_db_get_try(self, "reset_active_low")
        if isinstance(v, bool):
            self.reset_active_low = v
        self._rst = utils_dv.get_signal(self._dut, self.reset_name)
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        assert self._rst is not None, "run_phase before end_of_elaboration_phase"
        await ReadOnly()
        self._publish_if_changed()
        while True:
            await self._rst.value_change  # type: ignore[attr-defined]
            await ReadOnly()
            self._publish_if_changed()

    def _publish_if_changed(self) -> None:
        val = self._get_val(self._rst.value)  # type: ignore[union-attr]
        if val is None or val == self._last_val:
            return
        tr = pyuvm.uvm_factory().create_object_by_type(BaseResetItem, name="tr")
        tr.value = val
        tr.active = self.calc_active(val)
        self._last_val = val
        self.item_count += 1
        self.logger.debug("reset tr: %s", tr)
        self.ap.write(tr)

    def calc_active(self, level: int) -> bool:
        """Level: 0/1; active_low chooses polarity."""
        return (level == 0) if self.reset_active_low else (level != 0)

    async def sample_dut(self, dut: Any) -> BaseResetItem | None:
        raise NotImplementedError(
            "BaseResetMonitor uses run_phase(), not sample_dut()."
        )
