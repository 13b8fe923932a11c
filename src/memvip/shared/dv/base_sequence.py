# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_sequence.py

"""Unified base for item-generating sequences (UVM-style)."""

from __future__ import annotations

import logging
from typing import Generic, Type, TypeVar, cast

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_sequencer import BaseSequencer

T = TypeVar("T", bound=BaseItem)


class BaseSequence(pyuvm.uvm_sequence, Generic[T]):
    """Base class for item-generating sequences with factory support.

    Execution Flow:
        1. body_pre() - Optional pre-sequence hook
        2. For each item (up to seq_len, or until stopped):
           a. make_item(index) - Create transaction
           b. start_item(item) - Acquire sequencer grant
           c. set_item_inputs(item, index) - Fill inputs; return False when
              the stimulus source has nothing more to give (the untouched
              item is still sent, then the loop ends)
           d. finish_item(item) - Send to driver and release grant
        3. body_post() - Optional post-sequence hook

    A test can call request_stop() from another task (tick budget, user
    cancel). The loop checks the flag between items, so the item in flight
    always completes and nothing is left half-driven.

    Subclasses must implement:
        set_item_inputs(item, index): configure transaction fields

    Attributes:
        seq_len (int): Upper bound on items to generate (default: 100)
        sent (int): Items handed to the driver so far
        sequencer (BaseSequencer): Target sequencer (set by pyuvm at runtime)

    Factory Optimization:
        The concrete item type is resolved from factory overrides once per
        body() and its constructor cached for the hot path.

    Example:
        >>> class MySequence(BaseSequence[MyItem]):
        ...     async def set_item_inputs(self, item, index):
        ...         item.data = random.randint(0, 255)
        ...         return True
        ...
        >>> seq = factory.create_object_by_type(BaseSequence, name="seq")
        >>> await seq.start(sequencer)
    """

    def __init__(self, name: str = "seq", seq_len: int = 100) -> None:
        super().__init__(name)
        self.logger: logging.Logger = logging.getLogger(f"uvm.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self.sequencer: BaseSequencer  # pyuvm sets this at runtime on start()
        self._item_class_constructor: Type[T] | None = None
        self.seq_len: int = max(1, int(seq_len))
        self.sent: int = 0
        self._stop_requested: bool = False

    def request_stop(self) -> None:
        """Stop before the next item; the item in flight completes."""
        if not self._stop_requested:
            self.logger.info("Stop requested after %d item(s)", self.sent)
        self._stop_requested = True

    @property
    def stopped(self) -> bool:
        return self._stop_requested

    async def body(self) -> None:
        """UVM flow: start_item -> set_item_inputs -> finish_item, until done."""
        self.logger.debug("BaseSequence body begin: length = %d", self.seq_len)
        # Hook for subclasses
        await self.body_pre()
        # Ask the factory what BaseItem ultimately resolves to (after overrides).
        probe = pyuvm.uvm_factory().create_object_by_type(
            BaseItem, name="probe_for_type"
        )
        # Cache the concrete constructor for the hot path.
        self._item_class_constructor = cast(Type[T], type(probe))
        # Store handles for hot path
        make = self.make_item
        set_inputs = self.set_item_inputs
        # Send the items
        for i in range(self.seq_len):
            if self._stop_requested:
                break
            item = make(i)
            await self.start_item(item)
            more = await set_inputs(item, i)
            # An exhausted source leaves the item at its defaults; still
            # finish it so the grant is released
            await self.finish_item(item)
            self.sent += 1
            if more is False:
                self.logger.debug("Stimulus exhausted after %d item(s)", self.sent)
                break
        # Hook for subclasses
        await self.body_post()
        self.logger.debug("BaseSequence body end: sent = %d", self.sent)

    async def body_pre(self) -> None:
        """Placeholder."""
        self.logger.debug("BaseSequence body_pre begin")
        self.logger.debug("BaseSequence body_pre end")

    def make_item(self, index: int) -> T:
        """Create one transaction item efficiently (honors type overrides)."""
        if self._item_class_constructor is None:
            create = pyuvm.uvm_factory().create_object_by_type
            return cast(T, create(BaseItem, name=f"tr{index}"))
        return self._item_class_constructor(f"tr{index}")

    async def set_item_inputs(self, item: T, index: int) -> bool | None:
        """Must be implemented in subclasses: fill inputs before finish_item."""
        raise NotImplementedError

    async def body_post(self) -> None:
        """Placeholder."""
        self.logger.debug("BaseSequence body_post begin")
        self.logger.debug("BaseSequence body_post end")
