# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/sequences.py

"""Stimulus providers for mem_ctrl.

A single capability, ``SequenceProvider.transactions()``, with two variants
selected by configuration:

DirectedSequence:
    Finite, fixed and restartable. Either an explicit list of transactions
    or one of the named patterns below.

StressSequence:
    Infinite, lazy and constrained-random. Each tick is exactly one of
    write, read or idle, drawn with the configured probabilities, and write
    data is drawn uniformly from ``[data_min, data_max]``. Values repeat
    only when the same seed is used, so the seed is always recorded.

Named directed patterns (the address is implied by the auto-incrementing
pointer, so every pattern is written in ticks, not addresses):

fill_then_drain:
    16 writes of ``0x00..0x0F`` followed by 16 reads. The reads walk the
    same 16 addresses, so the observed stream is ``0x00..0x0F``.

write_read_same_tick:
    16 ticks that each write and read; write-first semantics make every
    read return the byte written in the same tick.

walking_ones:
    8 writes of ``1 << n`` then 8 idle ticks so the pointer wraps back, then
    8 reads of the walked bytes.

read_after_reset:
    A read on the first tick out of reset (address 0), a write of ``0x5A``
    to address 1, idles until the pointer wraps, then reads of addresses 0
    and 1. Any lost tick between reset release and the first item shows up
    as the first read landing somewhere other than address 0.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from memvip.shared.errors import ConfigError

from .ref_model import DEPTH
from .transaction import Transaction

if TYPE_CHECKING:
    from .config import RunConfig

logger = logging.getLogger(__name__)


class SequenceProvider(ABC):
    """Produces the transaction stream for one run."""

    restartable: bool = True

    @abstractmethod
    def transactions(self) -> Iterator[Transaction]:
        """Return a fresh iterator over the stream."""

    def describe(self) -> str:
        return self.__class__.__name__


# ---------------------------------------------------------------------
# Directed
# ---------------------------------------------------------------------


def fill_then_drain() -> list[Transaction]:
    writes = [Transaction.write_op(i) for i in range(DEPTH)]
    reads = [Transaction.read_op() for _ in range(DEPTH)]
    return writes + reads


def write_read_same_tick() -> list[Transaction]:
    return [Transaction(write=True, read=True, data=0xA0 | i) for i in range(DEPTH)]


def walking_ones() -> list[Transaction]:
    walk = [Transaction.write_op(1 << n) for n in range(8)]
    gap = [Transaction.idle() for _ in range(DEPTH - len(walk))]
    reads = [Transaction.read_op() for _ in range(len(walk))]
    return walk + gap + reads


def read_after_reset() -> list[Transaction]:
    # read 0, write 1, idle to the wrap, read 0 and 1
    head = [Transaction.read_op(), Transaction.write_op(0x5A)]
    gap = [Transaction.idle() for _ in range(DEPTH - len(head))]
    return head + gap + [Transaction.read_op(), Transaction.read_op()]


PATTERNS: dict[str, Callable[[], list[Transaction]]] = {
    "fill_then_drain": fill_then_drain,
    "write_read_same_tick": write_read_same_tick,
    "walking_ones": walking_ones,
    "read_after_reset": read_after_reset,
}


class DirectedSequence(SequenceProvider):
    """Finite, deterministic, restartable stream."""

    def __init__(
        self,
        items: Iterable[Transaction] | None = None,
        *,
        pattern: str = "fill_then_drain",
    ) -> None:
        if items is None:
            if pattern not in PATTERNS:
                raise ConfigError(
                    f"unknown directed pattern {pattern!r}; "
                    f"choose from {sorted(PATTERNS)}"
                )
            items = PATTERNS[pattern]()
            self.pattern = pattern
        else:
            self.pattern = "explicit"
        self._items: tuple[Transaction, ...] = tuple(items)

    def __len__(self) -> int:
        return len(self._items)

    def transactions(self) -> Iterator[Transaction]:
        return iter(self._items)

    def describe(self) -> str:
        return f"DirectedSequence(pattern={self.pattern}, len={len(self._items)})"


# ---------------------------------------------------------------------
# Stress
# ---------------------------------------------------------------------


class StressSequence(SequenceProvider):
    """Infinite constrained-random stream, reproducible from its seed."""

    restartable = False

    def __init__(  # pylint: disable=too-many-arguments
        self,
        seed: int,
        *,
        write_prob: float = 0.4,
        read_prob: float = 0.4,
        idle_prob: float = 0.2,
        data_min: int = 0,
        data_max: int = 0xFF,
    ) -> None:
        total = write_prob + read_prob + idle_prob
        if abs(total - 1.0) > 1e-6:
            raise ConfigError(f"probabilities must sum to 1, got {total}")
        if not 0 <= data_min <= data_max <= 0xFF:
            raise ConfigError(f"bad data range [{data_min}, {data_max}]")
        self.seed = seed
        self.write_prob = write_prob
        self.read_prob = read_prob
        self.idle_prob = idle_prob
        self.data_min = data_min
        self.data_max = data_max

    def transactions(self) -> Iterator[Transaction]:
        # Private generator so concurrent users never share RNG state
        rng = random.Random(self.seed)
        write_edge = self.write_prob
        read_edge = self.write_prob + self.read_prob
        while True:
            r = rng.random()
            if r < write_edge:
                yield Transaction.write_op(rng.randint(self.data_min, self.data_max))
            elif r < read_edge:
                yield Transaction.read_op()
            else:
                yield Transaction.idle()

    def describe(self) -> str:
        return (
            f"StressSequence(seed={self.seed}, w={self.write_prob}, "
            f"r={self.read_prob}, i={self.idle_prob}, "
            f"data=[{self.data_min}, {self.data_max}])"
        )


def make_provider(config: RunConfig) -> SequenceProvider:
    """Select the provider variant named by ``config.mode``."""
    if config.mode == "directed":
        provider: SequenceProvider = DirectedSequence(pattern=config.pattern)
    else:
        provider = StressSequence(
            config.resolved_seed(),
            write_prob=config.write_probability,
            read_prob=config.read_probability,
            idle_prob=config.idle_probability,
            data_min=config.data_min,
            data_max=config.data_max,
        )
    logger.info("Stimulus: %s", provider.describe())
    return provider
