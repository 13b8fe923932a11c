# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/harness.py

"""Simulator-free per-tick loop.

TickHarness plays the roles of the live bench in plain Python, in the same
order the bench enforces with cocotb triggers:

    1. driver pulls the next Transaction (idle while in reset or drained)
    2. reference model applies it and queues any prediction
    3. DUT takes its clock edge
    4. monitor samples ``rdata`` and calls ``Scoreboard.compare``

Ticks are numbered from 0 in the driver's frame. The monitor's sample after
edge ``t`` is reported as observation tick ``t + 1``, the cycle in which the
registered value is presented.

The ``dut`` only needs ``step(rst_n, tx) -> rdata``; BehavioralMemCtrl is
the reference implementation of that interface.
"""

from __future__ import annotations

import logging
from typing import Any

from memvip.shared.errors import QueueUnderflowError
from memvip.shared.scoreboard import CorrelationPolicy, RunOutcome, Scoreboard

from .config import RunConfig
from .ref_model import MemCtrlModel
from .sequences import SequenceProvider, make_provider
from .transaction import Transaction

logger = logging.getLogger(__name__)

_IDLE = Transaction.idle()


class TickHarness:
    """Drive, predict, sample and compare once per tick until done."""

    def __init__(
        self,
        config: RunConfig,
        dut: Any,
        provider: SequenceProvider | None = None,
    ) -> None:
        self.config = config
        self.dut = dut
        self.provider = provider if provider is not None else make_provider(config)
        self.scoreboard = Scoreboard(config.policy)
        self.model = MemCtrlModel(sink=self.scoreboard.expected.push)
        self.issued: list[Transaction] = []

    def _monitor_fires(self, tx: Transaction, rst_n: int) -> bool:
        """Whether the monitor reports the sample that follows ``tx``.

        Under the strict policy only samples that follow a read request are
        reported; otherwise every tick is.
        """
        if self.config.policy is CorrelationPolicy.STRICT:
            return bool(rst_n) and tx.read
        return True

    def run(self, cancel_at: int | None = None) -> RunOutcome:
        """Run until the tick budget, stimulus exhaustion plus drain, a fatal
        error, or ``cancel_at`` (a tick boundary), and return the outcome.
        """
        cfg = self.config
        sb = self.scoreboard
        stimulus = self.provider.transactions()
        exhausted = False
        fatal: str | None = None
        tick = 0

        logger.info(
            "Run start: mode=%s budget=%d policy=%s %s",
            cfg.mode,
            cfg.tick_budget,
            sb.policy.value,
            self.provider.describe(),
        )
        self.model.reset_change(cfg.reset_ticks > 0)

        while tick < cfg.tick_budget:
            if cancel_at is not None and tick >= cancel_at:
                logger.info("Run cancelled at tick %d", tick)
                break

            in_reset = tick < cfg.reset_ticks
            if not in_reset and self.model.reset_active:
                self.model.reset_change(False)

            if in_reset or exhausted:
                tx = _IDLE
            else:
                nxt = next(stimulus, None)
                if nxt is None:
                    exhausted = True
                    logger.info("Stimulus exhausted at tick %d", tick)
                    tx = _IDLE
                else:
                    tx = nxt
                    self.issued.append(tx)

            if exhausted and not sb.pending:
                break

            rst_n = 0 if in_reset else 1
            self.model.apply(tx, tick)
            rdata = self.dut.step(rst_n, tx)
            tick += 1

            if not self._monitor_fires(tx, rst_n):
                continue
            try:
                sb.compare(tick, rdata)
            except QueueUnderflowError as e:
                logger.error("FATAL: %s", e)
                fatal = str(e)
                break

        if fatal is None and sb.pending:
            sb.note_exhausted(tick)

        outcome = sb.outcome(
            ticks=tick, fatal=fatal, seed=getattr(self.provider, "seed", None)
        )
        if outcome.passed:
            logger.info("%s", outcome.summary_line())
        else:
            logger.error("%s", outcome.summary_line())
        return outcome
