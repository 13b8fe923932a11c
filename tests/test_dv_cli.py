# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_dv_cli.py

"""Argument handling in the dv runner (no simulator needed)."""

from __future__ import annotations

import pytest

from memvip.tools import dv


def test_defaults():
    args = dv.parse_args([])
    assert args.design == "mem_ctrl"
    assert args.test == "test_mem_ctrl"
    assert args.testcase is None
    dv.validate_args(args)
    assert dv.run_knob_plusargs(args) == []


def test_unknown_design_is_rejected():
    with pytest.raises(SystemExit):
        dv.validate_args(dv.parse_args(["--design", "no_such_block"]))


def test_run_flags_become_plusargs():
    args = dv.parse_args(
        ["--mode", "stress", "--tick-budget", "10000", "--policy", "strict"]
    )
    assert dv.run_knob_plusargs(args) == [
        "+MEM_CTRL_MODE=stress",
        "+MEM_CTRL_TICK_BUDGET=10000",
        "+MEM_CTRL_POLICY=strict",
    ]


def test_yaml_config_is_validated_and_flags_override(tmp_path):
    p = tmp_path / "stress.yaml"
    p.write_text("mode: stress\nseed: 9\nfail_on_error: false\ntick_budget: 50\n")
    args = dv.parse_args(["--config", str(p), "--tick-budget", "75"])
    assert dv.run_knob_plusargs(args) == [
        "+MEM_CTRL_MODE=stress",
        "+MEM_CTRL_TICK_BUDGET=75",
        "+MEM_CTRL_SEED=9",
        "+SB_FAIL_ON_ERROR=0",
    ]


def test_bad_yaml_config_exits(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("write_probability: 2.0\n")
    with pytest.raises(SystemExit):
        dv.run_knob_plusargs(dv.parse_args(["--config", str(p)]))


def test_replay_drops_seed_options():
    argv = ["--nseeds", "3", "--testcase=X", "--seeds", "1", "2", "--sim=icarus"]
    assert dv._strip_seed_args(argv) == ["--testcase=X", "--sim=icarus"]


def test_seed_derivation():
    assert dv._derive_seeds(dv.parse_args([])) == [42]
    assert dv._derive_seeds(dv.parse_args(["--seeds", "5", "0x10"])) == [5, 16]
    three = dv._derive_seeds(dv.parse_args(["--nseeds", "3"]))
    assert len(three) == 3
    assert three == dv._derive_seeds(dv.parse_args(["--nseeds", "3"]))


def test_test_cfg_carries_plusargs_and_filter(tmp_path):
    ctx = {
        "outdir": str(tmp_path),
        "seed": 7,
        "testcase": "MemCtrlStressTest",
        "check_en": True,
        "coverage_en": False,
        "run_plusargs": ["+MEM_CTRL_MODE=stress"],
        "tests_root": str(tmp_path / "tests"),
    }
    cfg = dv._make_test_cfg(ctx)
    assert cfg.test_module == "memvip.mem_ctrl.dv.test_mem_ctrl"
    assert cfg.test_filter == "MemCtrlStressTest"
    assert cfg.extra_env["COCOTB_RANDOM_SEED"] == "7"
    assert "+MEM_CTRL_MODE=stress" in cfg.extra_env["COCOTB_PLUSARGS"]
    assert "+COVERAGE_EN=0" in cfg.extra_plusargs
    assert "COV_YAML" not in cfg.extra_env
