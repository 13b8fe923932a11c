# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_sb_predictor.py

"""Clocked predictor: steps the reference model once per rising edge."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem
from .base_ref_model import BaseRefModel

T = TypeVar("T", bound=BaseItem)


class BaseSbPredictor(BaseClockMixin, pyuvm.uvm_subscriber, Generic[T]):
    """Predictor that advances a reference model in lockstep with the clock.

    The driver writes each item it issues to this subscriber on the drive
    edge. At the following rising edge (the ref edge) the predictor hands
    that item to the reference model. When no new item arrived the DUT
    inputs are unchanged, so the last item is applied again; before the
    first item that is a factory-built default (idle) item.

    Flow:
        driver.ap -> write() -> held item
        rising edge k -> ref_model.step(held item, tick=k-1)

    Components:
        ref_model (BaseRefModel): The reference model, factory-overridable

    Reset Handling:
        Forwards reset events to the reference model via reset_change().

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)

    Example:
        >>> factory.set_type_override_by_type(BaseRefModel, MyRefModel)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.ref_model: BaseRefModel[T] = pyuvm.uvm_factory().create_object_by_type(
            BaseRefModel, name=f"{name}.ref_model"
        )
        self.tick: int = 0
        self._held: T | None = None

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        while True:
            await self.clock_ref_edge()
            self.tick += 1
            if self._held is None:
                self._held = self.idle_item()
            self.ref_model.step(self._held, self.tick - 1)

    def idle_item(self) -> T:
        """Default item matching the driver's initial DUT inputs."""
        return pyuvm.uvm_factory().create_object_by_type(BaseItem, name="idle")

    def reset_change(self, value: int, active: bool) -> None:
        """Apply reset to reference model."""
        self.logger.debug("reset_change begin")
        self.ref_model.reset_change(value, active)
        self.logger.debug("reset_change end: value=%d active=%s", value, active)

    def write(self, tt: T) -> None:
        """Hold a clone of the item the driver just put on the DUT inputs."""
        self._held = tt.clone()
