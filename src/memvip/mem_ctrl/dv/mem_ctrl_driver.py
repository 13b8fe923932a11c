# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_driver.py


"""Input driver for mem_ctrl."""

from __future__ import annotations

from typing import Any

import pyuvm

from memvip.shared.dv import BaseDriver

from .mem_ctrl_item import MemCtrlItem


class MemCtrlDriver(BaseDriver[MemCtrlItem]):  # pylint: disable=too-many-ancestors
    """Drives we, re and wdata on the falling edge, one item per tick.

    No backpressure: the device accepts an operation every cycle, so every
    item is issued on exactly the drive slot it was pulled for. The first
    slot is the edge that released reset, so item 0 meets address 0.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.initial_dut_input_values = {"we": 0, "re": 0, "wdata": 0}

    async def drive_item(self, dut: Any, tr: MemCtrlItem) -> None:
        await self.drive_slot()
        dut.we.value = tr.we
        dut.re.value = tr.re
        dut.wdata.value = tr.wdata
        tr.tick = self.issued
        self.logger.debug(
            "drove item %d: we=%d re=%d wdata=0x%02x",
            self.issued,
            tr.we,
            tr.re,
            tr.wdata,
        )
