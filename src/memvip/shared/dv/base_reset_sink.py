# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_reset_sink.py

"""Fan-out of observed reset changes to every component that tracks reset."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar

import pyuvm

from . import utils_dv
from .base_reset_item import BaseResetItem

T = TypeVar("T", bound=BaseResetItem)


class ResetAware(Protocol):
    def reset_change(self, value: int, active: bool) -> None: ...


class BaseResetSink(pyuvm.uvm_subscriber, Generic[T]):
    """Forwards each resolved reset change, in connection order.

    The env connects the driver first (stimulus waits for reset release)
    and the scoreboard predictor second (the reference model mirrors the
    DUT's reset). Unresolved levels (X/Z) are dropped.

    Example:
        >>> reset_sink.connect_target(agent.drv)
        >>> mon_rst.ap.connect(reset_sink.analysis_export)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.targets: list[ResetAware] = []
        self.events: int = 0

    def connect_target(self, target: ResetAware) -> None:
        self.targets.append(target)

    def write(self, tt: T) -> None:
        if tt.value is None or tt.active is None:
            return
        self.events += 1
        self.logger.debug(
            "reset %s -> %d target(s)",
            "asserted" if tt.active else "released",
            len(self.targets),
        )
        for target in self.targets:
            target.reset_change(tt.value, tt.active)
