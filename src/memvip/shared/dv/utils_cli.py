# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/utils_cli.py

"""Command-line settings and factory overrides for benches.

Setting resolution (env ``NAME`` or ``MEMVIP_NAME`` > plusarg ``+NAME`` >
default) is shared with the simulator-free golden core and lives in
``memvip.utils``; it is re-exported here so bench code has a single import.

Factory overrides follow the uvm_cmdline_processor plusargs:

    +uvm_set_type_override=req,over[,replace]
    +uvm_set_inst_override=req,over,path

Reference:
    UVM Class Reference Manual - uvm_cmdline_processor
    https://www.accellera.org/images/downloads/standards/uvm/UVM_Class_Reference_Manual_1.2.pdf

Example:
    >>> period = get_int_setting("CLOCK_PERIOD_PS", 1000)
    >>> write_prob = get_float_setting("MEM_CTRL_WRITE_PROB", 0.4)
    >>> apply_factory_overrides_from_plusargs(logger)
"""

from __future__ import annotations

import logging

import pyuvm

from memvip.utils import (
    get_bool_setting,
    get_float_setting,
    get_int_setting,
    get_plusarg,
    get_str_setting,
    iter_plusargs,
)

__all__ = (
    "apply_factory_overrides_from_plusargs",
    "get_bool_setting",
    "get_float_setting",
    "get_int_setting",
    "get_plusarg",
    "get_str_setting",
    "iter_plusargs",
)

# pyuvm typically throws lookup/value/type errors on bad overrides
_FACTORY_EXC: tuple[type[BaseException], ...] = (KeyError, ValueError, TypeError)

_TYPE_OVERRIDE = "+uvm_set_type_override="
_INST_OVERRIDE = "+uvm_set_inst_override="


def _override_parts(tok: str) -> list[str]:
    return [p.strip() for p in tok.split("=", 1)[1].split(",")]


def apply_factory_overrides_from_plusargs(logger: logging.Logger | None = None) -> int:
    """Apply +uvm_set_type_override / +uvm_set_inst_override plusargs via
    pyuvm's factory and return how many were applied. Safe to call more than
    once; bad tokens are logged and skipped.
    """
    log = logger or logging.getLogger("memvip.utils_cli.factory")
    f = pyuvm.uvm_factory()
    applied = 0

    for tok in iter_plusargs():
        if tok.startswith(_TYPE_OVERRIDE):
            parts = _override_parts(tok)
            if len(parts) not in (2, 3):
                log.warning("Bad +uvm_set_type_override: %s", tok)
                continue
            req, over = parts[0], parts[1]
            replace = len(parts) == 2 or parts[2] != "0"
            try:
                f.set_type_override_by_name(req, over, replace=replace)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)
                continue
            log.debug("Factory: type override %s -> %s (replace=%s)", req, over, replace)
            applied += 1

        elif tok.startswith(_INST_OVERRIDE):
            parts = _override_parts(tok)
            if len(parts) != 3:
                log.warning("Bad +uvm_set_inst_override: %s", tok)
                continue
            req, over, path = parts
            try:
                f.set_inst_override_by_name(req, over, path)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)
                continue
            log.debug("Factory: inst override %s @ %s -> %s", req, path, over)
            applied += 1

    return applied
