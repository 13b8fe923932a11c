# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils.py

from __future__ import annotations

import random

import pytest

from memvip import utils


def test_int_setting_env_hex_and_fallback(monkeypatch):
    monkeypatch.setenv("MEM_CTRL_DATA_MIN", "0x20")
    assert utils.get_int_setting("MEM_CTRL_DATA_MIN", 0) == 0x20
    monkeypatch.setenv("MEM_CTRL_DATA_MIN", "junk")
    assert utils.get_int_setting("MEM_CTRL_DATA_MIN", 7) == 7


def test_prefixed_env(monkeypatch):
    monkeypatch.setenv("MEMVIP_MEM_CTRL_PATTERN", "walking_ones")
    assert utils.get_str_setting("MEM_CTRL_PATTERN", "x") == "walking_ones"


def test_bool_setting(monkeypatch):
    monkeypatch.setenv("SB_FAIL_ON_ERROR", "off")
    assert utils.get_bool_setting("SB_FAIL_ON_ERROR", True) is False
    monkeypatch.setenv("SB_FAIL_ON_ERROR", "maybe")
    assert utils.get_bool_setting("SB_FAIL_ON_ERROR", True) is True


def test_plusargs(monkeypatch):
    monkeypatch.setenv("COCOTB_PLUSARGS", "+CHECK_EN +MEM_CTRL_READ_PROB=0.25")
    assert utils.get_plusarg("CHECK_EN") == "1"
    assert utils.get_plusarg("COVERAGE_EN") is None
    assert utils.get_bool_setting("CHECK_EN", False) is True
    assert utils.get_float_setting("MEM_CTRL_READ_PROB", 0.4) == pytest.approx(0.25)


def test_normalize_seed():
    rng = random.Random(1)
    assert utils.normalize_seed(rng, "0x10") == 16
    assert utils.normalize_seed(rng, str(2**32 + 3)) == 3
    assert 0 <= utils.normalize_seed(rng, "random") < 2**32
    with pytest.raises(SystemExit):
        utils.normalize_seed(rng, "seven")


def test_absolutize_srclist(tmp_path):
    root = tmp_path / "repo"
    (root / "rtl").mkdir(parents=True)
    (root / "rtl" / "inner.f").write_text("rtl/b.sv\n")
    top = root / "rtl" / "srclist.f"
    top.write_text(
        "// comment\n+incdir+rtl\nrtl/a.sv\n"
        "-f rtl/inner.f\n-f rtl/missing.f\n+define+X\n"
    )
    out = utils.absolutize_srclist(top, root, tmp_path)
    lines = out.read_text().splitlines()
    assert lines == [
        f"+incdir+{(root / 'rtl').resolve()}",
        str((root / "rtl" / "a.sv").resolve()),
        str((root / "rtl" / "b.sv").resolve()),
        "-f rtl/missing.f",
        "+define+X",
    ]


def test_repo_root_holds_the_rtl():
    root = utils.get_repo_root()
    assert (root / "src" / "memvip" / "mem_ctrl" / "rtl" / "srclist.f").is_file()
