# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_reset_item.py

"""Reset observation item."""

from __future__ import annotations

from .base_item import BaseItem


class BaseResetItem(BaseItem):
    """One reset level change.

    Attributes:
        value (int | None): Raw resolved signal level (0 or 1)
        active (bool | None): True while the DUT is held in reset,
                              whatever the polarity
    """

    def __init__(self, name: str = "reset_tr") -> None:
        super().__init__(name)
        self.value: int | None = None
        self.active: bool | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("value", "active")
