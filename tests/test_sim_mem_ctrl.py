# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_sim_mem_ctrl.py

"""Live bench smoke runs through ``dv``; skipped when no simulator is installed."""

from __future__ import annotations

import shutil
import subprocess
import sys

import pytest


def _find_sim() -> str | None:
    for sim, exe in (("verilator", "verilator"), ("icarus", "iverilog")):
        if shutil.which(exe):
            return sim
    return None


SIM = _find_sim()

pytestmark = pytest.mark.skipif(SIM is None, reason="no HDL simulator on PATH")


def _dv(tmp_path, *extra: str) -> subprocess.CompletedProcess[str]:
    cmd = [
        sys.executable,
        "-m",
        "memvip.tools.dv",
        f"--sim={SIM}",
        f"--outdir={tmp_path}",
        "--verbosity=warning",
        *extra,
    ]
    return subprocess.run(cmd, capture_output=True, text=True, check=False)


def test_directed_and_strict(tmp_path):
    res = _dv(tmp_path, "--testcase=MemCtrl(Directed|Strict)Test")
    assert res.returncode == 0, res.stdout + res.stderr


def test_stress_two_seeds(tmp_path):
    res = _dv(
        tmp_path,
        "--testcase=MemCtrlStressTest",
        "--tick-budget=2000",
        "--seeds",
        "1",
        "2",
    )
    assert res.returncode == 0, res.stdout + res.stderr
    manifests = list(tmp_path.glob("tests/*/manifest.json"))
    assert len(manifests) == 2


def test_first_read_after_reset_hits_address_zero(tmp_path):
    res = _dv(tmp_path, "--testcase=MemCtrlResetReleaseTest", "--reset-ticks=3")
    assert res.returncode == 0, res.stdout + res.stderr
