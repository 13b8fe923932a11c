# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_item.py

"""Base sequence item: declared input/output fields plus a tick stamp."""

from __future__ import annotations

import copy
import json
from typing import Iterable, Self

import pyuvm


class BaseItem(pyuvm.uvm_sequence_item):
    """Transaction item split into input fields (driven) and output fields
    (observed), stamped with the clock tick it belongs to.

    Driven items carry the tick they were issued for; observed items carry
    the tick of the edge whose registered outputs they hold. The comparator
    only looks at ``tick`` and ``out_value()``.

    Subclasses must implement:
        _in_fields(): Return tuple of input field names
        _out_fields(): Return tuple of output field names

    Example:
        >>> class MyItem(BaseItem):
        ...     def __init__(self, name="my_item"):
        ...         super().__init__(name)
        ...         self.en = 0
        ...         self.dout = None
        ...
        ...     def _in_fields(self):
        ...         return ("en",)
        ...
        ...     def _out_fields(self):
        ...         return ("dout",)
    """

    def __init__(self, name: str = "item") -> None:
        super().__init__(name)
        self.tick: int | None = None

    def _in_fields(self) -> Iterable[str]:
        """Fields considered *inputs* (randomized / constrained)."""
        return ()

    def _out_fields(self) -> Iterable[str]:
        """Fields considered *outputs* (observed from DUT)."""
        return ()

    def _all_fields(self) -> tuple[str, ...]:
        # Preserve declared order while removing duplicates if any overlap
        seen: set[str] = set()
        ordered: list[str] = []
        for f in list(self._in_fields()) + list(self._out_fields()):
            if f not in seen:
                seen.add(f)
                ordered.append(f)
        return tuple(ordered)

    def clone(self) -> Self:
        """Deep copy so the clone can diverge safely."""
        return copy.deepcopy(self)

    def out_value(self) -> int | None:
        """Value of the single checked output field."""
        fields = tuple(self._out_fields())
        if len(fields) != 1:
            raise TypeError(
                f"{type(self).__name__} declares {len(fields)} output fields; "
                "override out_value() to pick the checked one"
            )
        return getattr(self, fields[0])

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON (tick + in + out)."""
        d: dict[str, object] = {"tick": self.tick}
        d.update({f: getattr(self, f) for f in self._all_fields()})
        return d

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def inputs_str(self) -> str:
        """Return JSON string of input fields only."""
        return json.dumps(
            {f: getattr(self, f) for f in self._in_fields()}, sort_keys=True
        )
