# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/errors.py

"""Error taxonomy shared by the golden core and the benches.

Three conditions are distinguished:

MismatchError:
    The DUT presented a value that differs from the prediction. Always
    recorded as a failing Verdict and never raised while the run is in
    progress; ``RunOutcome.raise_for_status()`` raises it afterwards when
    the caller wants a hard failure.

QueueUnderflowError:
    The scoreboard tried to pop a prediction that does not exist. This is a
    harness sequencing bug, not a DUT bug, and aborts the run immediately.

SequenceExhaustedWithPendingPredictions:
    The stimulus ran out while predictions were still queued and the tick
    budget expired before they drained. Logged and recorded, not fatal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .scoreboard import Verdict


class VerificationError(Exception):
    """Base class for every error raised by the harness."""


class ConfigError(VerificationError, ValueError):
    """Raised when a run configuration or setting is invalid."""


class MismatchError(VerificationError):
    """Observed value differs from predicted value (non-fatal, recorded)."""

    def __init__(self, first: Verdict, count: int) -> None:
        self.first = first
        self.count = count
        super().__init__(
            f"{count} mismatch(es); first at tick {first.tick}: "
            f"expected=0x{first.expected:02x} observed=0x{first.observed:02x}"
        )


class QueueUnderflowError(VerificationError):
    """Pop from an empty ExpectedQueue (fatal to the run)."""

    invariant = "expected queue never popped faster than appended"

    def __init__(self, tick: int, queue_state: dict[str, Any]) -> None:
        self.tick = tick
        self.queue_state = queue_state
        super().__init__(
            f"expected queue underflow at tick {tick} "
            f"(violated: {self.invariant}; queue={queue_state})"
        )


class SequenceExhaustedWithPendingPredictions(VerificationError):
    """Stimulus exhausted with predictions still queued (non-fatal, drains)."""

    def __init__(self, tick: int, pending: int) -> None:
        self.tick = tick
        self.pending = pending
        super().__init__(
            f"sequence exhausted with {pending} pending prediction(s) "
            f"at tick {tick}"
        )
