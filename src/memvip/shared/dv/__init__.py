# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/__init__.py

"""Shared pyuvm/cocotb bench infrastructure.

Base Classes:
- BaseEnv: Top-level testbench environment
- BaseTest: Test case framework with tick budget
- BaseAgent: Agent containing driver, output monitor, and sequencer
- BaseDriver: Drives DUT inputs and publishes each issued item
- BaseMonitor / BaseMonitorOut: Sampling monitors
- BaseSequencer / BaseSequence: Stimulus plumbing
- BaseItem: Transaction item base class
- BaseRefModel: Reference model stepped once per tick
- BaseSb, BaseSbPredictor, BaseSbComparator: Scoreboard
- BaseCoverage: Functional coverage collection

Clock and Reset Infrastructure:
- BaseClockDriver, BaseClockMixin
- BaseResetDriver, BaseResetMonitor, BaseResetSink, BaseResetItem

Utilities:
- utils_dv: config_db, signal and logging helpers
- utils_cli: settings and plusarg factory overrides
"""

from __future__ import annotations

from memvip import __version__

from . import utils_cli, utils_dv
from .base_agent import BaseAgent
from .base_clock_driver import BaseClockDriver
from .base_clock_mixin import BaseClockMixin
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver
from .base_env import BaseEnv
from .base_item import BaseItem
from .base_monitor import BaseMonitor
from .base_monitor_out import BaseMonitorOut
from .base_ref_model import BaseRefModel
from .base_reset_driver import BaseResetDriver
from .base_reset_item import BaseResetItem
from .base_reset_monitor import BaseResetMonitor
from .base_reset_sink import BaseResetSink
from .base_sb import BaseSb
from .base_sb_comparator import BaseSbComparator
from .base_sb_predictor import BaseSbPredictor
from .base_sequence import BaseSequence
from .base_sequencer import BaseSequencer
from .base_test import BaseTest

__all__ = (
    "BaseAgent",
    "BaseClockDriver",
    "BaseClockMixin",
    "BaseCoverage",
    "BaseDriver",
    "BaseEnv",
    "BaseItem",
    "BaseMonitor",
    "BaseMonitorOut",
    "BaseRefModel",
    "BaseResetDriver",
    "BaseResetItem",
    "BaseResetMonitor",
    "BaseResetSink",
    "BaseSb",
    "BaseSbComparator",
    "BaseSbPredictor",
    "BaseSequence",
    "BaseSequencer",
    "BaseTest",
    "utils_dv",
    "utils_cli",
    "__version__",
)
