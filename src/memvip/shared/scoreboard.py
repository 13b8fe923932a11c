# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/scoreboard.py

"""Prediction/verdict records, expected queue, scoreboard and run outcome.

Nothing here knows about a particular device: a reference model pushes
Predictions, a monitor supplies observed values, and the Scoreboard
pairs them in order.

The reference model is the only producer of the ExpectedQueue and the
scoreboard is its only consumer. Both run on the same thread of control
(cocotb coroutines or a plain tick loop), so a deque is a sufficient
single-producer/single-consumer channel as long as every push for tick N
happens before the pop for tick N. The benches guarantee that by applying
the reference model on the clock edge and sampling the DUT in the ReadOnly
region of the same edge.

Correlation policy (what ``compare`` does when the queue is empty):

by_read_request (default):
    The monitor reports every tick. Ticks with no outstanding read have no
    prediction and are skipped, so comparisons pair up by read request
    rather than by tick index.

strict:
    The monitor only reports ticks that follow a read request. An empty
    queue then means the harness lost track of a read, and the scoreboard
    raises QueueUnderflowError.
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any

from .errors import (
    MismatchError,
    QueueUnderflowError,
    SequenceExhaustedWithPendingPredictions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
    """Expected output value for a read issued at ``tick`` from ``address``."""

    tick: int
    address: int
    data: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class Verdict:
    """Result of comparing one prediction with one observation."""

    tick: int
    expected: int
    observed: int
    matched: bool
    address: int | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    def __str__(self) -> str:
        status = "PASS" if self.matched else "MISMATCH"
        return (
            f"{status} tick={self.tick} addr={self.address} "
            f"exp=0x{self.expected:02x} act=0x{self.observed:02x}"
        )


class CorrelationPolicy(str, enum.Enum):
    """How observations are paired with predictions."""

    BY_READ_REQUEST = "by_read_request"
    STRICT = "strict"


class ExpectedQueue:
    """FIFO of predictions; pushes from the model, pops from the scoreboard."""

    def __init__(self) -> None:
        self._q: deque[Prediction] = deque()
        self.pushed: int = 0
        self.popped: int = 0

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)

    def push(self, prediction: Prediction) -> None:
        self._q.append(prediction)
        self.pushed += 1

    def peek(self) -> Prediction | None:
        return self._q[0] if self._q else None

    def pop(self, tick: int) -> Prediction:
        """Pop the oldest prediction; underflow is a fatal harness error."""
        if not self._q:
            raise QueueUnderflowError(tick, self.snapshot())
        self.popped += 1
        return self._q.popleft()

    def snapshot(self) -> dict[str, Any]:
        return {
            "len": len(self._q),
            "pushed": self.pushed,
            "popped": self.popped,
            "head": None if not self._q else self._q[0].to_dict(),
        }


@dataclass(frozen=True)
class RunOutcome:
    """Externally reportable result of one run."""

    verdicts: tuple[Verdict, ...]
    ticks: int = 0
    fatal: str | None = None
    pending: int = 0
    skipped: int = 0
    seed: int | None = None
    notices: tuple[str, ...] = field(default_factory=tuple)

    @property
    def mismatches(self) -> tuple[Verdict, ...]:
        return tuple(v for v in self.verdicts if not v.matched)

    @property
    def mismatch_count(self) -> int:
        return sum(1 for v in self.verdicts if not v.matched)

    @property
    def first_mismatch(self) -> Verdict | None:
        return next((v for v in self.verdicts if not v.matched), None)

    @property
    def passed(self) -> bool:
        """Pass iff at least one comparison happened, none failed, no fatal."""
        return self.fatal is None and bool(self.verdicts) and not self.mismatch_count

    def summary_line(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        line = (
            f"*** TEST {status} - {len(self.verdicts)} compared, "
            f"{self.mismatch_count} mismatch(es), {self.ticks} tick(s)"
        )
        first = self.first_mismatch
        if first is not None:
            line += f", first mismatch at tick {first.tick}"
        if not self.verdicts and self.fatal is None:
            line += ", no comparisons made"
        if self.fatal is not None:
            line += f", fatal: {self.fatal}"
        return line + " ***"

    def raise_for_status(self) -> None:
        """Raise MismatchError if any comparison failed."""
        first = self.first_mismatch
        if first is not None:
            raise MismatchError(first, self.mismatch_count)

    def to_dict(self) -> dict[str, object]:
        first = self.first_mismatch
        return {
            "passed": self.passed,
            "ticks": self.ticks,
            "compared": len(self.verdicts),
            "mismatch_count": self.mismatch_count,
            "first_mismatch": None if first is None else first.to_dict(),
            "fatal": self.fatal,
            "pending": self.pending,
            "skipped": self.skipped,
            "seed": self.seed,
            "notices": list(self.notices),
            "verdicts": [v.to_dict() for v in self.verdicts],
        }


class Scoreboard:
    """Pairs observations with predictions and keeps the Verdict log."""

    def __init__(
        self, policy: CorrelationPolicy = CorrelationPolicy.BY_READ_REQUEST
    ) -> None:
        self.policy = CorrelationPolicy(policy)
        self.expected = ExpectedQueue()
        self.verdicts: list[Verdict] = []
        self.skipped: int = 0
        self.notices: list[str] = []

    @property
    def pending(self) -> int:
        return len(self.expected)

    @property
    def mismatches(self) -> list[Verdict]:
        return [v for v in self.verdicts if not v.matched]

    def compare(self, tick: int, observed: int) -> Verdict | None:
        """Compare one observation; O(1), never blocks.

        Returns the Verdict, or None when the tick had nothing to compare.
        """
        if not self.expected and self.policy is CorrelationPolicy.BY_READ_REQUEST:
            self.skipped += 1
            return None
        exp = self.expected.pop(tick)
        verdict = Verdict(
            tick=tick,
            expected=exp.data,
            observed=observed,
            matched=exp.data == observed,
            address=exp.address,
        )
        self.verdicts.append(verdict)
        if verdict.matched:
            logger.debug("%s vect_cnt=%d", verdict, len(self.verdicts))
        else:
            logger.error(
                "MISMATCH tick=%d addr=%d read issued at tick %d: "
                "exp=0x%02x act=0x%02x",
                tick,
                exp.address,
                exp.tick,
                exp.data,
                observed,
            )
        return verdict

    def note_exhausted(self, tick: int) -> None:
        """Record that stimulus ran out while predictions were queued."""
        if not self.expected:
            return
        notice = SequenceExhaustedWithPendingPredictions(tick, self.pending)
        logger.warning("%s", notice)
        self.notices.append(str(notice))

    def outcome(
        self, *, ticks: int, fatal: str | None = None, seed: int | None = None
    ) -> RunOutcome:
        """Finalize the Verdict log with whatever comparisons have occurred."""
        return RunOutcome(
            verdicts=tuple(self.verdicts),
            ticks=ticks,
            fatal=fatal,
            pending=self.pending,
            skipped=self.skipped,
            seed=seed,
            notices=tuple(self.notices),
        )
