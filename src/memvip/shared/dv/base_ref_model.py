# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_ref_model.py

"""Reference model of DUT."""

import logging
from typing import Any, Callable, Generic, TypeVar

import pyuvm

from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseRefModel(pyuvm.uvm_object, Generic[T]):
    """Reference model stepped once per clock tick.

    The predictor calls ``step(tr, tick)`` at every rising edge with the
    item that was on the DUT inputs for that edge. Whatever the model
    expects to observe later is handed to the sink installed with
    ``connect_sink``; in the bench that is the comparator's expected queue.

    Subclasses must implement:
        step(tr, tick): Advance state by one tick

    Reset Handling:
        reset_change(value, active) is called when reset state changes.
        Subclasses override it to mirror what the DUT does under reset.

    Reference:
        R. Salemi, "Python for RTL Verification"
        C.E. Cummings, "OVM/UVM Scoreboards – Fundamental Architectures,"
        SNUG 2013

    Example:
        >>> class CounterRefModel(BaseRefModel[CountItem]):
        ...     def __init__(self, name="counter_ref"):
        ...         super().__init__(name)
        ...         self.count = 0
        ...
        ...     def step(self, tr, tick):
        ...         if tr.en:
        ...             self.count += 1
        ...             self.emit((tick, self.count))
    """

    def __init__(self, name: str = "ref_model") -> None:
        super().__init__(name)
        self._logger: logging.Logger = logging.getLogger(f"uvm.obj.{name}")
        self._reset_active: bool = False
        self._sink: Callable[[Any], None] | None = None

    @property
    def logger(self) -> logging.Logger:
        """Logger with a familiar .info/.debug/.warning interface."""
        return self._logger

    def connect_sink(self, sink: Callable[[Any], None]) -> None:
        """Route predictions to ``sink``."""
        self._sink = sink

    def emit(self, prediction: Any) -> None:
        if self._sink is not None:
            self._sink(prediction)

    def reset_change(self, value: int, active: bool) -> None:
        """Handle a change in reset."""
        self.logger.debug("reset_change begin")
        self._reset_active = active
        self.logger.debug("reset_change end: value = %d: active = %s", value, active)

    def step(self, tr: T, tick: int) -> None:
        """Advance the model by one tick."""
        raise NotImplementedError
