# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_sb.py

"""Scoreboard for mem_ctrl using base class architecture."""

from __future__ import annotations

from typing import Callable

import pyuvm

from memvip.mem_ctrl.model import Verdict
from memvip.shared.dv import BaseSb, BaseSbComparator, BaseSbPredictor

from .mem_ctrl_item import MemCtrlItem


class MemCtrlSbPredictor(BaseSbPredictor[MemCtrlItem]):
    """Predictor whose idle item is a MemCtrlItem with all inputs low."""

    def idle_item(self) -> MemCtrlItem:
        return MemCtrlItem("idle")


class MemCtrlSbComparator(BaseSbComparator[MemCtrlItem]):
    """Comparator that dumps the reference model state on a mismatch."""

    def __init__(self, name: str, parent: pyuvm.uvm_component) -> None:
        super().__init__(name, parent)
        self.state_probe: Callable[[], dict[str, object]] | None = None

    def on_verdict(self, verdict: Verdict) -> None:
        if verdict.matched or self.state_probe is None:
            return
        # State is one tick past the read: the address has already advanced
        self.logger.error("REF_MODEL_STATE: %s", self.state_probe())


class MemCtrlSb(BaseSb[MemCtrlItem]):
    """Scoreboard for mem_ctrl.

    Uses the base predictor/comparator split; the only addition is wiring
    the reference model's snapshot into the comparator's mismatch report.
    """

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        snapshot = getattr(self.prd.ref_model, "snapshot", None)
        if isinstance(self.cmp, MemCtrlSbComparator) and callable(snapshot):
            self.cmp.state_probe = snapshot
        self.logger.debug("connect_phase end")
