# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/mem_ctrl_sequence.py


"""Stimulus sequence for mem_ctrl verification."""

from __future__ import annotations

from collections.abc import Iterator, Sized

from memvip.mem_ctrl.model import (
    RunConfig,
    SequenceProvider,
    Transaction,
    make_provider,
)
from memvip.shared.dv import BaseSequence

from .mem_ctrl_item import MemCtrlItem


class MemCtrlSequence(BaseSequence[MemCtrlItem]):
    """Feeds the driver from a SequenceProvider chosen by the run config.

    Directed providers run to exhaustion; stress providers are unbounded
    and stop when the test's tick budget calls request_stop(). Either way
    the last item sent is idle, so the pins are quiet while the bench
    drains.
    """

    def __init__(self, name: str = "mem_ctrl_seq", seq_len: int = 100) -> None:
        super().__init__(name, seq_len)
        self._me = self.__class__.__name__
        self.cfg: RunConfig | None = None
        self.provider: SequenceProvider | None = None
        self._stream: Iterator[Transaction] = iter(())
        self._ended_idle: bool = False

    async def body_pre(self) -> None:
        """Get run_cfg from the sequencer's config_db scope."""
        self.logger.debug("%s body_pre begin", self._me)
        await super().body_pre()
        cfg = self.sequencer.cfg_get("run_cfg")
        self.cfg = cfg if isinstance(cfg, RunConfig) else RunConfig.from_settings()
        self.provider = make_provider(self.cfg)
        self._stream = iter(self.provider.transactions())
        if isinstance(self.provider, Sized):
            # +1 for the idle item sent on exhaustion
            self.seq_len = len(self.provider) + 1
        else:
            self.seq_len = self.cfg.tick_budget
        self.logger.info("%s: %s", self._me, self.provider.describe())
        self.logger.debug("%s body_pre end", self._me)

    async def set_item_inputs(self, item: MemCtrlItem, index: int) -> bool:
        tx = next(self._stream, None)
        if tx is None:
            self._ended_idle = True
            return False
        item.load(tx)
        self._ended_idle = not (tx.write or tx.read)
        return True

    async def body_post(self) -> None:
        """Leave the pins idle."""
        self.logger.debug("%s body_post begin", self._me)
        if not self._ended_idle:
            idle = self.make_item(self.sent)
            await self.start_item(idle)
            await self.finish_item(idle)
            self.sent += 1
        await super().body_post()
        self.logger.debug("%s body_post end", self._me)
