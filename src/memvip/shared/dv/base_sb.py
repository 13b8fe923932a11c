# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_sb.py

"""Scoreboard container: predictor plus comparator."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_sb_comparator import BaseSbComparator
from .base_sb_predictor import BaseSbPredictor

T = TypeVar("T", bound=BaseItem)


class BaseSb(pyuvm.uvm_scoreboard, Generic[T]):
    """Driven items -> prd -> ref_model --expect()--> cmp <--write()-- observed

    The predictor steps the reference model once per tick; the model's
    sink is the comparator's expected queue, so predictions never pass
    through an analysis port.

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.prd: BaseSbPredictor[T]
        self.cmp: BaseSbComparator[T]

    def build_phase(self) -> None:
        super().build_phase()
        create = pyuvm.uvm_factory().create_component_by_type
        path = self.get_full_name()
        self.prd = create(BaseSbPredictor, parent_inst_path=path, name="prd", parent=self)
        self.cmp = create(
            BaseSbComparator, parent_inst_path=path, name="cmp", parent=self
        )

    def connect_phase(self) -> None:
        super().connect_phase()
        self.prd.ref_model.connect_sink(self.cmp.expect)
