# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_ref_model.py

"""Reference model adapter: bench items in, golden-core predictions out."""

from __future__ import annotations

from memvip.mem_ctrl.model import MemCtrlModel
from memvip.shared.dv import BaseRefModel

from .mem_ctrl_item import MemCtrlItem


class MemCtrlRefModel(BaseRefModel[MemCtrlItem]):
    """Steps MemCtrlModel with the item on the pins for each rising edge.

    Predictions go straight to the sink installed by the scoreboard; this
    class keeps no state of its own.
    """

    def __init__(self, name: str = "mem_ctrl_ref_model") -> None:
        super().__init__(name)
        self.model = MemCtrlModel(sink=self.emit)

    def reset_change(self, value: int, active: bool) -> None:
        super().reset_change(value, active)
        self.model.reset_change(active)

    def step(self, tr: MemCtrlItem, tick: int) -> None:
        self.model.apply(tr.to_transaction(), tick)

    def snapshot(self) -> dict[str, object]:
        return self.model.state.snapshot()
