# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_coverage.py


"""Coverage."""

from __future__ import annotations

import pyuvm
from cocotb_coverage.coverage import CoverCross, CoverPoint

from memvip.shared.dv import BaseCoverage

from .mem_ctrl_item import MemCtrlItem

KINDS = ["idle", "write", "read", "write_read"]
DATA_RANGES = ["0x00-0x3f", "0x40-0x7f", "0x80-0xbf", "0xc0-0xff"]


def _data_range(tt: MemCtrlItem) -> str | None:
    """Quartile of the written byte, or None when nothing is written."""
    if not tt.we:
        return None
    return DATA_RANGES[(tt.wdata & 0xFF) >> 6]


class MemCtrlCoverage(BaseCoverage[MemCtrlItem]):
    """Operation kinds and written data ranges over every issued item."""

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.counts: dict[str, int] = {k: 0 for k in KINDS}

    @CoverPoint("top.mem_ctrl.kind", xf=lambda self, tt: tt.kind, bins=KINDS)
    @CoverPoint(
        "top.mem_ctrl.wdata_range",
        xf=lambda self, tt: _data_range(tt),
        bins=DATA_RANGES,
    )
    @CoverCross(
        "top.mem_ctrl.kind_x_wdata_range",
        items=["top.mem_ctrl.kind", "top.mem_ctrl.wdata_range"],
        ign_bins=[("idle", None), ("read", None)],
    )
    def sample(self, tt: MemCtrlItem) -> None:
        self.counts[tt.kind] += 1

    def report_phase(self) -> None:
        """Print coverage summary."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        self.logger.info(
            "MemCtrlCoverage summary: %s",
            " ".join(f"{k}={v}" for k, v in self.counts.items()),
        )
        self.logger.debug("report_phase end")
