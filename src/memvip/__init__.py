# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/__init__.py

"""memvip: verification IP for a 16x8 auto-increment memory controller.

Main Components:

mem_ctrl.model:
    Simulator-free golden core: stimulus providers, the reference model,
    the in-order scoreboard, run configuration and a tick-level harness.

mem_ctrl.dv:
    pyuvm/cocotb bench that drives the RTL and checks it against the
    golden core.

shared.dv:
    Reusable pyuvm base classes (clock, reset, agent, scoreboard, test).

tools.dv:
    Command-line runner that builds and runs a bench in a simulator.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("memvip")
except PackageNotFoundError:
    __version__ = "0+local"
