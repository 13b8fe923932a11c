# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_config.py

from __future__ import annotations

import pytest
from pydantic import ValidationError

from memvip.mem_ctrl.model import ConfigError, CorrelationPolicy, RunConfig


def test_defaults():
    cfg = RunConfig()
    assert cfg.mode == "directed"
    assert cfg.tick_budget == 1000
    assert cfg.seed is None
    assert cfg.policy is CorrelationPolicy.BY_READ_REQUEST
    assert cfg.reset_ticks == 5
    assert cfg.fail_on_error


@pytest.mark.parametrize(
    "fields",
    [
        {"write_probability": 0.5, "read_probability": 0.5, "idle_probability": 0.5},
        {"data_min": 0x80, "data_max": 0x10},
        {"pattern": "no_such_pattern"},
        {"mode": "burst"},
        {"tick_budget": 0},
        {"policy": "loose"},
        {"unknown_knob": 1},
    ],
)
def test_build_rejects(fields):
    with pytest.raises(ConfigError):
        RunConfig.build(**fields)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        RunConfig.build(seed=-1)


def test_frozen():
    cfg = RunConfig()
    with pytest.raises(ValidationError):
        cfg.mode = "stress"  # type: ignore[misc]


def test_from_settings_env(monkeypatch):
    monkeypatch.setenv("MEM_CTRL_MODE", "stress")
    monkeypatch.setenv("MEM_CTRL_SEED", "0x10")
    monkeypatch.setenv("MEM_CTRL_TICK_BUDGET", "250")
    monkeypatch.setenv("MEMVIP_MEM_CTRL_POLICY", "strict")
    monkeypatch.setenv("RESET_CYCLES", "2")
    cfg = RunConfig.from_settings()
    assert cfg.mode == "stress"
    assert cfg.seed == 16
    assert cfg.tick_budget == 250
    assert cfg.policy is CorrelationPolicy.STRICT
    assert cfg.reset_ticks == 2


def test_from_settings_plusargs_lose_to_env(monkeypatch):
    monkeypatch.setenv(
        "COCOTB_PLUSARGS", "+MEM_CTRL_PATTERN=walking_ones +MEM_CTRL_TICK_BUDGET=64"
    )
    monkeypatch.setenv("MEM_CTRL_TICK_BUDGET", "128")
    cfg = RunConfig.from_settings()
    assert cfg.pattern == "walking_ones"
    assert cfg.tick_budget == 128


def test_from_settings_seed_falls_back_to_cocotb(monkeypatch):
    monkeypatch.setenv("COCOTB_RANDOM_SEED", "777")
    assert RunConfig.from_settings().seed == 777


def test_from_settings_overrides_win(monkeypatch):
    monkeypatch.setenv("MEM_CTRL_MODE", "stress")
    cfg = RunConfig.from_settings(mode="directed", pattern="write_read_same_tick")
    assert cfg.mode == "directed"
    assert cfg.pattern == "write_read_same_tick"


def test_from_settings_invalid(monkeypatch):
    monkeypatch.setenv("MEM_CTRL_WRITE_PROB", "0.9")
    with pytest.raises(ConfigError):
        RunConfig.from_settings()


def test_from_yaml(tmp_path):
    p = tmp_path / "run.yaml"
    p.write_text(
        "mode: stress\nseed: 5\ntick_budget: 10000\n"
        "write_probability: 0.3\nread_probability: 0.3\nidle_probability: 0.4\n"
    )
    cfg = RunConfig.from_yaml(p)
    assert (cfg.mode, cfg.seed, cfg.tick_budget) == ("stress", 5, 10000)
    assert cfg.idle_probability == pytest.approx(0.4)


def test_from_yaml_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert RunConfig.from_yaml(p) == RunConfig()


@pytest.mark.parametrize(
    "text", ["- just\n- a list\n", "mode: [unclosed\n", "mode: sideways\n"]
)
def test_from_yaml_rejects(tmp_path, text):
    p = tmp_path / "bad.yaml"
    p.write_text(text)
    with pytest.raises(ConfigError):
        RunConfig.from_yaml(p)


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        RunConfig.from_yaml(tmp_path / "absent.yaml")


def test_resolved_seed(caplog):
    assert RunConfig(seed=42).resolved_seed() == 42
    cfg = RunConfig(mode="stress")
    with caplog.at_level("INFO"):
        first = cfg.resolved_seed()
    assert cfg.resolved_seed() == first
    assert "drew" in caplog.text
    assert 0 <= first < 2**32
