# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/utils.py

"""Utility functions for dv.py, the golden core and the benches.

Settings resolution lives here rather than in ``shared.dv.utils_cli`` so the
simulator-free golden core can read the same knobs as the live bench.

Configuration Precedence:
    1. Environment variables (NAME or MEMVIP_NAME)
    2. Plusargs (+NAME or +NAME=value) from PLUSARGS, COCOTB_PLUSARGS or
       MEMVIP_PLUSARGS
    3. Default values
"""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from typing import Iterable

RED = "\033[31m"
GREEN = "\033[32m"
RESET = "\033[0m"

ENV_PREFIX = "MEMVIP_"

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}


# === Settings ===


def _parse_bool(s: str) -> bool | None:
    """Convert str to bool."""
    v = s.strip().lower()
    if v in _TRUE_SET:
        return True
    if v in _FALSE_SET:
        return False
    return None


def _plusarg_string() -> str:
    return (
        os.environ.get("PLUSARGS", "")
        or os.environ.get("COCOTB_PLUSARGS", "")
        or os.environ.get(f"{ENV_PREFIX}PLUSARGS", "")
    )


def iter_plusargs() -> Iterable[str]:
    """Yield +args from the first non-empty plusarg env var."""
    return _plusarg_string().split()


def get_plusarg(name: str) -> str | None:
    """Return the value of +NAME or +NAME=val if present; else None.
    - If found as '+NAME=val', returns 'val'
    - If found as bare '+NAME', returns '1' (treat like a true/enable flag)
    """
    prefix = f"+{name}="
    for tok in iter_plusargs():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def _env_values(name: str) -> Iterable[str]:
    for key in (name, f"{ENV_PREFIX}{name}"):
        v = os.environ.get(key)
        if v is not None:
            yield v


def get_bool_setting(name: str, default: bool) -> bool:
    """
    Resolve a boolean setting with precedence: env > plusarg > default.
    bare +NAME is treated as True
    """
    for v in _env_values(name):
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    v = get_plusarg(name)
    if v is not None:
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    return default


def get_str_setting(name: str, default: str) -> str:
    """Resolve a string setting: env > plusarg > default (always returns str)."""
    for v in _env_values(name):
        return v
    v = get_plusarg(name)
    return v if v is not None else default


def get_int_setting(name: str, default: int) -> int:
    """Resolve an int setting: env > plusarg > default (always returns int)."""
    for v in _env_values(name):
        try:
            return int(v, 0)  # supports 10/16 prefixes (e.g., "0x10")
        except ValueError:
            continue  # try the MEMVIP_ variant, then fall through
    v = get_plusarg(name)
    if v is not None:
        try:
            return int(v, 0)
        except ValueError:
            pass
    return default


def get_float_setting(name: str, default: float) -> float:
    """Resolve a float setting: env > plusarg > default (always returns float)."""
    for v in _env_values(name):
        try:
            return float(v)
        except ValueError:
            continue
    v = get_plusarg(name)
    if v is not None:
        try:
            return float(v)
        except ValueError:
            pass
    return default


# === dv.py helpers ===


def absolutize_srclist(infile: Path, repo_root: Path, out_dir: Path) -> Path:
    """
    Write an absolute-path copy of infile into out_dir and return its path.
    Recursively expands -f references and converts all paths to absolute.
    """
    out = out_dir / "srclist.abs.f"

    def process_file(filepath: Path, lines_out: list[str]) -> None:
        for raw in filepath.read_text().splitlines():
            line = raw.strip()
            if not line or line.startswith("//"):
                continue
            if line.startswith("+incdir+"):
                rel = line[len("+incdir+") :]
                lines_out.append(f"+incdir+{(repo_root / rel).resolve()}")
            elif line.startswith("-f "):
                nested_file = (repo_root / line[3:].strip()).resolve()
                if nested_file.exists():
                    process_file(nested_file, lines_out)
                else:
                    # pass through for the simulator to report
                    lines_out.append(line)
            elif line.startswith(("-", "+")):
                lines_out.append(line)
            else:
                lines_out.append(str((repo_root / line).resolve()))

    lines_out: list[str] = []
    process_file(infile, lines_out)
    out.write_text("\n".join(lines_out) + "\n")
    return out


def get_repo_root() -> Path:
    """Return the root of the repo (where pyproject.toml lives)."""
    here = Path(__file__).resolve()
    for p in [here] + list(here.parents):
        if (p / "pyproject.toml").exists():
            return p
    for p in here.parents:
        if p.name == "src":
            return p.parent
    return here.parents[-1]


def green(s: str) -> str:
    """Wrap text in green ANSI escape codes."""
    return f"{GREEN}{s}{RESET}"


def red(s: str) -> str:
    """Wrap text in red ANSI escape codes."""
    return f"{RED}{s}{RESET}"


def iso_utc() -> str:
    """Return current time in ISO8601 Z format (UTC)."""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def normalize_seed(rng: random.Random, s: str) -> int:
    """
    Normalize a seed string to a 32-bit int.
    Supports 'rand'/'random'/'auto' and 0x... hex.
    Raises SystemExit on invalid input (to match existing CLI behavior).
    """
    low = s.lower()
    if low in {"rand", "random", "auto"}:
        return rng.getrandbits(32)
    try:
        return int(s, 0) & 0xFFFF_FFFF
    except ValueError as exc:
        raise SystemExit(
            f"[dv] Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc
