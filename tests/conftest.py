# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Shared fixtures for the golden-core and tooling tests."""

from __future__ import annotations

import os

import pytest

from memvip.mem_ctrl.model import BehavioralMemCtrl, RunConfig, TickHarness

_SETTING_PREFIXES = ("MEM_CTRL_", "MEMVIP_")
_SETTING_NAMES = (
    "PLUSARGS",
    "COCOTB_PLUSARGS",
    "COCOTB_RANDOM_SEED",
    "RESET_CYCLES",
    "SB_FAIL_ON_ERROR",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's shell from leaking knobs into RunConfig.from_settings()."""
    for key in list(os.environ):
        if key.startswith(_SETTING_PREFIXES) or key in _SETTING_NAMES:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def dut() -> BehavioralMemCtrl:
    return BehavioralMemCtrl()


@pytest.fixture
def run_directed():
    """Run a directed pattern (or explicit provider) against the behavioral DUT."""

    def _run(pattern: str = "fill_then_drain", provider=None, dut=None, **fields):
        cfg = RunConfig(mode="directed", pattern=pattern, **fields)
        harness = TickHarness(
            cfg, dut if dut is not None else BehavioralMemCtrl(), provider=provider
        )
        return harness, harness.run()

    return _run
