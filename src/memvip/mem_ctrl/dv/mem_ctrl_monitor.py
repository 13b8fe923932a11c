# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_monitor.py


"""Output monitor for mem_ctrl."""

from __future__ import annotations

from typing import Any

import pyuvm

from memvip.mem_ctrl.model import CorrelationPolicy
from memvip.shared.dv import BaseMonitorOut, utils_dv

from .mem_ctrl_item import MemCtrlItem


class MemCtrlMonitor(BaseMonitorOut[MemCtrlItem]):  # pylint: disable=too-many-ancestors
    """Samples rdata once per tick, after the rising edge has updated it.

    Under the ``by_read_request`` policy every tick is emitted and the
    scoreboard decides whether there is anything to compare. Under
    ``strict`` only ticks that registered a read (``re`` high and out of
    reset at that edge) are emitted, so every emission must find a
    prediction waiting.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.strict: bool = False

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        cfg = utils_dv.uvm_config_db_get_try(self, "run_cfg")
        if cfg is not None:
            self.strict = cfg.policy is CorrelationPolicy.STRICT
        self.logger.debug("end_of_elaboration_phase end: strict=%s", self.strict)

    async def sample_dut(self, dut: Any) -> MemCtrlItem | None:
        await self.sample_dut_edge()
        if self.strict:
            # re and rst_n still hold the values that produced this edge
            re = self._get_val(dut.re.value)
            rst_n = self._get_val(dut.rst_n.value)
            if not (re and rst_n):
                return None
        rdata = self._get_val(dut.rdata.value)
        if rdata is None:
            self.logger.warning("tick=%d rdata is X/Z; skipped", self.tick)
            return None
        item = self.stamp(MemCtrlItem(f"item{self.item_count}"))
        item.rdata = rdata
        self.logger.debug("tick=%d sampled rdata=0x%02x", self.tick, rdata)
        return item
