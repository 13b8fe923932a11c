# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_packaging.py

"""Project metadata in pyproject.toml."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path

import pytest

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _name(req: str) -> str:
    return re.split(r"[<>=!~\[; ]", req, maxsplit=1)[0].lower()


@pytest.fixture(scope="module")
def project() -> dict:
    with PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]


def test_pytest_is_a_runtime_dependency(project):
    # dv runs the cocotb runner through pytest.main
    assert "pytest" in {_name(r) for r in project["dependencies"]}


def test_extras_do_not_repeat_runtime_dependencies(project):
    runtime = {_name(r) for r in project["dependencies"]}
    for extra, reqs in project.get("optional-dependencies", {}).items():
        repeated = runtime & {_name(r) for r in reqs}
        assert not repeated, f"extra {extra!r} repeats {sorted(repeated)}"


def test_dv_script_entry_point(project):
    assert project["scripts"]["dv"] == "memvip.tools.dv:main"
