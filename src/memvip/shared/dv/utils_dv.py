# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/utils_dv.py

"""pyuvm config_db and cocotb signal helpers shared by every bench component.

Config DB:
    uvm_config_db(): cached config DB instance
    uvm_config_db_get_try(): value or None if missing
    uvm_config_db_get(): value or ConfigKeyError
    uvm_config_db_set(): set a value

Signals:
    get_signal(): handle from the DUT, RuntimeError/TypeError if unusable
    get_signal_value_int(): int from Logic/LogicArray, None if X/Z
    drive_signals(): write a name -> value mapping onto the DUT

Logging:
    desired_log_level(): level from COCOTB_LOG_LEVEL
    configure_component_logger(): for uvm_components
    configure_non_component_logger(): for sequences and plain objects

Example:
    >>> dut = uvm_config_db_get(self, "dut")
    >>> clk = get_signal(dut, "clk")
    >>> rdata = get_signal_value_int(dut.rdata.value)
    >>> if rdata is None:
    ...     self.logger.warning("rdata is X/Z")
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Mapping, Union, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from pyuvm import error_classes


class ConfigKeyError(KeyError):
    """Raised when a required key is missing from pyuvm's config_db."""


def desired_log_level(default: int = logging.INFO) -> int:
    """Return desired log level from env vars or default."""
    name = (os.getenv("COCOTB_LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, default)


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    """Configure logger for a component."""
    comp.set_logging_level(desired_log_level())


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Configure logger for a non-component"""
    logger.setLevel(desired_log_level())
    # Bubble up to the root/cocotb handlers (don't add new handlers)
    logger.propagate = True


@lru_cache(maxsize=1)
def uvm_config_db() -> Any:
    """Return pyuvm's config DB object (cached) without tripping static checkers."""
    if hasattr(pyuvm, "ConfigDB") and callable(getattr(pyuvm, "ConfigDB")):
        return getattr(pyuvm, "ConfigDB")()
    return getattr(pyuvm, "uvm_config_db")()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return value or None if missing (no logging/raise).
    Note: pyuvm allows wildcards only for set(), not get()."""
    if inst == "*":
        inst = ""
    try:
        return cast(Any, uvm_config_db().get(comp, inst, key))
    except error_classes.UVMConfigItemNotFound:
        return None


def uvm_config_db_get(comp: pyuvm.uvm_component, key: str) -> object:
    """Like uvm_config_db_get_try but raises if key is missing."""
    val = uvm_config_db_get_try(comp, key)
    if val is not None:
        return val
    raise ConfigKeyError(
        f"config_db[{key!r}] missing for component '{comp.get_full_name()}'. "
        "Did you forget to set it in build/start_of_sim?"
    )


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    """Set a key in the config DB (inst_name like '' or '*' etc.)."""
    uvm_config_db().set(ctx, inst_name, key, value)


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """Return dut.<signal_name> or raise a clear error."""
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(sig: Union[Logic, LogicArray]) -> int | None:
    """Return integer value if resolvable (no X/Z), else None."""
    if isinstance(sig, Logic):
        return (
            int(sig) if sig.is_resolvable else None
        )  # pyright: ignore[reportArgumentType]
    return sig.to_unsigned() if sig.is_resolvable else None


def drive_signals(dut: Any, values: Mapping[str, int]) -> None:
    """Deposit each value on the named DUT input."""
    for sig_name, val in values.items():
        get_signal(dut, sig_name).value = val  # type: ignore[attr-defined]
