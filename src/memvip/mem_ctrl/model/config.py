# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/model/config.py

"""Validated run configuration for mem_ctrl.

A RunConfig can be built three ways:

    RunConfig(mode="stress", seed=7)          # directly
    RunConfig.from_settings()                 # env > plusargs > defaults
    RunConfig.from_yaml(Path("run.yaml"))     # YAML file of the same fields

Settings (environment variable ``NAME`` or ``MEMVIP_NAME``, or plusarg
``+NAME=value``):

    MEM_CTRL_MODE           directed | stress
    MEM_CTRL_TICK_BUDGET    maximum ticks to run
    MEM_CTRL_SEED           stress seed (falls back to COCOTB_RANDOM_SEED)
    MEM_CTRL_WRITE_PROB     stress write probability
    MEM_CTRL_READ_PROB      stress read probability
    MEM_CTRL_IDLE_PROB      stress idle probability
    MEM_CTRL_DATA_MIN       lowest write byte
    MEM_CTRL_DATA_MAX       highest write byte
    MEM_CTRL_PATTERN        directed pattern name
    MEM_CTRL_POLICY         by_read_request | strict
    RESET_CYCLES            ticks held in reset before stimulus
    SB_FAIL_ON_ERROR        raise MismatchError at end of run
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Literal, Optional, cast

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    PrivateAttr,
    ValidationError,
    model_validator,
)

from memvip.utils import (
    get_bool_setting,
    get_float_setting,
    get_int_setting,
    get_str_setting,
)
from memvip.shared.errors import ConfigError
from memvip.shared.scoreboard import CorrelationPolicy

from .sequences import PATTERNS

logger = logging.getLogger(__name__)

_PROB_TOL = 1e-6


class RunConfig(BaseModel):
    """Test configuration surface: mode, budget, seed and stress constraints."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["directed", "stress"] = "directed"
    tick_budget: PositiveInt = 1000
    seed: Optional[NonNegativeInt] = None
    write_probability: float = Field(default=0.4, ge=0.0, le=1.0)
    read_probability: float = Field(default=0.4, ge=0.0, le=1.0)
    idle_probability: float = Field(default=0.2, ge=0.0, le=1.0)
    data_min: int = Field(default=0x00, ge=0x00, le=0xFF)
    data_max: int = Field(default=0xFF, ge=0x00, le=0xFF)
    pattern: str = "fill_then_drain"
    reset_ticks: NonNegativeInt = 5
    policy: CorrelationPolicy = CorrelationPolicy.BY_READ_REQUEST
    fail_on_error: bool = True

    _drawn_seed: Optional[int] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _check_constraints(self) -> RunConfig:
        total = self.write_probability + self.read_probability + self.idle_probability
        if abs(total - 1.0) > _PROB_TOL:
            raise ValueError(
                f"write/read/idle probabilities must sum to 1, got {total:.6f}"
            )
        if self.data_min > self.data_max:
            raise ValueError(f"{self.data_min=} > {self.data_max=}")
        if self.pattern not in PATTERNS:
            raise ValueError(
                f"unknown pattern {self.pattern!r}; choose from {sorted(PATTERNS)}"
            )
        return self

    def __str__(self) -> str:
        return f"{self.__class__.__name__}:\n" + json.dumps(
            self.model_dump(mode="json"), indent=2
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, **fields: Any) -> RunConfig:
        """Validate ``fields``, reporting problems as ConfigError."""
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise ConfigError(f"invalid run configuration: {e}") from e

    @classmethod
    def from_settings(cls, **overrides: Any) -> RunConfig:
        """Resolve every field from env > plusargs > defaults."""
        d = cls.model_fields
        seed = get_int_setting("MEM_CTRL_SEED", -1)
        if seed < 0:
            seed = get_int_setting("COCOTB_RANDOM_SEED", -1)
        fields: dict[str, Any] = {
            "mode": get_str_setting("MEM_CTRL_MODE", d["mode"].default),
            "tick_budget": get_int_setting(
                "MEM_CTRL_TICK_BUDGET", d["tick_budget"].default
            ),
            "seed": None if seed < 0 else seed,
            "write_probability": get_float_setting(
                "MEM_CTRL_WRITE_PROB", d["write_probability"].default
            ),
            "read_probability": get_float_setting(
                "MEM_CTRL_READ_PROB", d["read_probability"].default
            ),
            "idle_probability": get_float_setting(
                "MEM_CTRL_IDLE_PROB", d["idle_probability"].default
            ),
            "data_min": get_int_setting("MEM_CTRL_DATA_MIN", d["data_min"].default),
            "data_max": get_int_setting("MEM_CTRL_DATA_MAX", d["data_max"].default),
            "pattern": get_str_setting("MEM_CTRL_PATTERN", d["pattern"].default),
            "reset_ticks": get_int_setting("RESET_CYCLES", d["reset_ticks"].default),
            "policy": get_str_setting("MEM_CTRL_POLICY", d["policy"].default.value),
            "fail_on_error": get_bool_setting(
                "SB_FAIL_ON_ERROR", d["fail_on_error"].default
            ),
        }
        fields.update(overrides)
        return cls.build(**fields)

    @classmethod
    def from_yaml(cls, path: Path | str) -> RunConfig:
        """Load a YAML mapping of RunConfig fields."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"bad YAML in {path}: {e}") from e
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        return cls.build(**cast(dict[str, Any], raw))

    # ------------------------------------------------------------------
    # Seed
    # ------------------------------------------------------------------

    def resolved_seed(self) -> int:
        """Seed used for stimulus; drawn once and logged when not given."""
        if self.seed is not None:
            return self.seed
        if self._drawn_seed is None:
            self._drawn_seed = random.getrandbits(32)
            logger.info(
                "No seed given; drew %d (set MEM_CTRL_SEED to replay)",
                self._drawn_seed,
            )
        return self._drawn_seed
