# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/__init__.py

"""Golden core for mem_ctrl: stimulus, reference model and checking.

Pure Python with no simulator imports. The live bench in ``mem_ctrl.dv``
wraps these classes in pyuvm components; TickHarness runs them directly
against a cycle-level stand-in of the device. The device-independent
scoreboard and error types come from memvip.shared and are re-exported
here.
"""

from __future__ import annotations

from memvip.shared.errors import (
    ConfigError,
    MismatchError,
    QueueUnderflowError,
    SequenceExhaustedWithPendingPredictions,
    VerificationError,
)
from memvip.shared.scoreboard import (
    CorrelationPolicy,
    ExpectedQueue,
    Prediction,
    RunOutcome,
    Scoreboard,
    Verdict,
)

from .behavioral import BehavioralMemCtrl
from .config import RunConfig
from .harness import TickHarness
from .ref_model import ADDR_MASK, DEPTH, DeviceState, MemCtrlModel
from .sequences import (
    PATTERNS,
    DirectedSequence,
    SequenceProvider,
    StressSequence,
    make_provider,
)
from .transaction import DATA_MASK, Transaction

__all__ = (
    "ADDR_MASK",
    "DATA_MASK",
    "DEPTH",
    "PATTERNS",
    "BehavioralMemCtrl",
    "ConfigError",
    "CorrelationPolicy",
    "DeviceState",
    "DirectedSequence",
    "ExpectedQueue",
    "MemCtrlModel",
    "MismatchError",
    "Prediction",
    "QueueUnderflowError",
    "RunConfig",
    "RunOutcome",
    "Scoreboard",
    "SequenceExhaustedWithPendingPredictions",
    "SequenceProvider",
    "StressSequence",
    "TickHarness",
    "Transaction",
    "Verdict",
    "VerificationError",
    "make_provider",
)
