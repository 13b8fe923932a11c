# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_sb_comparator.py

"""Comparator: pairs observed outputs with queued predictions, in order."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from ..errors import QueueUnderflowError
from ..scoreboard import CorrelationPolicy, RunOutcome, Scoreboard, Verdict
from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseSbComparator(pyuvm.uvm_subscriber, Generic[T]):
    """Scoreboard comparator built on an in-order expected queue.

    Architecture:
        ref_model sink -> expect() -> Scoreboard.expected (FIFO)
        out monitor    -> write()  -> Scoreboard.compare(tick, value)

    Predictions arrive at the ref edge and observations at the sample edge
    of the same tick, so compare() never has to wait. What happens when an
    observation finds the queue empty depends on the correlation policy:
    ``by_read_request`` counts the tick as skipped, ``strict`` raises
    QueueUnderflowError and ends the run.

    Configuration (via config_db):
        run_cfg (RunConfig): supplies policy, fail_on_error and seed
        sb_policy (str): policy override when no run_cfg is published
        sb_fail_on_error (bool): Raise in final_phase if the run did not pass
                                (default: True)

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)

    Example:
        >>> uvm_config_db_set(self, "env*", "sb_policy", "strict")
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.scoreboard: Scoreboard = Scoreboard()
        self.fail_on_error: bool = True
        self._run_cfg: Any = None
        self.last_tick: int = 0
        self.fatal: str | None = None

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        policy: Any = CorrelationPolicy.BY_READ_REQUEST
        cfg = utils_dv.uvm_config_db_get_try(self, "run_cfg")
        if cfg is not None:
            policy = cfg.policy
            self.fail_on_error = cfg.fail_on_error
            self._run_cfg = cfg
        p = utils_dv.uvm_config_db_get_try(self, "sb_policy")
        if isinstance(p, str) and p:
            policy = p
        f = utils_dv.uvm_config_db_get_try(self, "sb_fail_on_error")
        if isinstance(f, bool):
            self.fail_on_error = f
        self.scoreboard = Scoreboard(CorrelationPolicy(policy))
        self.logger.debug(
            "build_phase end: policy=%s fail_on_error=%s",
            self.scoreboard.policy.value,
            self.fail_on_error,
        )

    def expect(self, prediction: Any) -> None:
        """Sink for the reference model."""
        self.scoreboard.expected.push(prediction)

    def write(self, tt: T) -> None:
        """Compare one observed item against the head of the queue."""
        tick = tt.tick if tt.tick is not None else self.last_tick + 1
        self.last_tick = tick
        value = tt.out_value()
        if value is None:
            self.logger.warning("tick=%d observed X/Z; not compared", tick)
            return
        try:
            verdict = self.scoreboard.compare(tick, value)
        except QueueUnderflowError as e:
            self.fatal = str(e)
            self.logger.error("%s", e)
            raise
        if verdict is not None:
            self.on_verdict(verdict)

    def on_verdict(self, verdict: Verdict) -> None:
        """Hook called after every comparison."""

    def outcome(self) -> RunOutcome:
        cfg = self._run_cfg
        seed = None
        if cfg is not None:
            seed = cfg.resolved_seed() if cfg.mode == "stress" else cfg.seed
        return self.scoreboard.outcome(ticks=self.last_tick, fatal=self.fatal, seed=seed)

    def check_phase(self) -> None:
        self.logger.debug("check_phase begin")
        self.scoreboard.note_exhausted(self.last_tick)
        self.logger.debug("check_phase end")

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        out = self.outcome()
        if out.passed:
            self.logger.info("%s", out.summary_line())
        else:
            self.logger.error("%s", out.summary_line())
        self.logger.debug("report_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        if self.fail_on_error:
            out = self.outcome()
            out.raise_for_status()
            if not out.passed:
                raise AssertionError(out.summary_line())
        self.logger.debug("final_phase end")
