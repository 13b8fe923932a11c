# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_sequencer.py

"""Base sequencer, extendable."""

from __future__ import annotations

import pyuvm

from . import utils_dv


class BaseSequencer(pyuvm.uvm_sequencer):
    """Sequencer between the stimulus sequence and the driver.

    Created by BaseAgent in active mode. The test publishes ``run_cfg`` to
    the config_db; sequences started on this sequencer look it up through
    cfg_get(), since sequences are objects and cannot query the DB
    themselves.

    Example:
        >>> await my_sequence.start(agent.sqr)
        >>> cfg = my_sequence.sequencer.cfg_get("run_cfg")
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)

    def cfg_get(self, key: str) -> object | None:
        """config_db lookup on behalf of a running sequence."""
        return utils_dv.uvm_config_db_get_try(self, key)
