# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_layering.py

"""Package layering: memvip.shared never depends on a design package."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

import memvip.mem_ctrl.model as model
from memvip.shared import errors, scoreboard

SHARED_DIR = Path(scoreboard.__file__).resolve().parent
DESIGN_PACKAGES = ("memvip.mem_ctrl",)


def _imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(), filename=str(path))
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            names.add(node.module)
    return names


@pytest.mark.parametrize(
    "path",
    sorted(SHARED_DIR.rglob("*.py")),
    ids=lambda p: str(p.relative_to(SHARED_DIR)),
)
def test_shared_module_imports_no_design(path):
    bad = {
        name
        for name in _imported_modules(path)
        if name.startswith(DESIGN_PACKAGES)
    }
    assert not bad, f"{path.name} imports {sorted(bad)}"


def test_model_reexports_shared_types():
    assert model.Scoreboard is scoreboard.Scoreboard
    assert model.ExpectedQueue is scoreboard.ExpectedQueue
    assert model.RunOutcome is scoreboard.RunOutcome
    assert model.Prediction is scoreboard.Prediction
    assert model.Verdict is scoreboard.Verdict
    assert model.CorrelationPolicy is scoreboard.CorrelationPolicy
    assert model.QueueUnderflowError is errors.QueueUnderflowError
    assert model.ConfigError is errors.ConfigError
