# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_coverage.py

"""Base functional coverage subscriber (cocotb-coverage + pyuvm)."""

from __future__ import annotations

import os
from typing import Generic, TypeVar

import pyuvm
from cocotb_coverage.coverage import coverage_db

from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseCoverage(pyuvm.uvm_subscriber, Generic[T]):
    """Functional coverage over issued items, using cocotb-coverage.

    The agent's ap_in feeds this subscriber with every item the driver put
    on the DUT inputs. Subclasses decorate sample() with CoverPoint /
    CoverCross.

    Configuration (via config_db):
        coverage_en (bool): Enable coverage collection (default: True)

    Environment Variables:
        COV_YAML: Path to write coverage YAML report (optional)

    Example:
        >>> from cocotb_coverage.coverage import CoverPoint
        >>>
        >>> class MyCoverage(BaseCoverage[MyItem]):
        ...     @CoverPoint("top.kind", xf=lambda self, tt: tt.kind,
        ...                 bins=["idle", "write", "read"])
        ...     def sample(self, tt):
        ...         pass
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.yaml_path: str | None = os.getenv("COV_YAML")
        self._coverage_en: bool = True
        self.sampled: int = 0

    def end_of_elaboration_phase(self) -> None:
        """Cache coverage_en."""
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self._coverage_en = cvrg
        self.logger.debug("end_of_elaboration_phase end")

    def write(self, tt: T) -> None:
        if not self._coverage_en:
            return
        self.sampled += 1
        self.sample(tt)

    def sample(self, tt: T) -> None:  # pragma: no cover - abstract hook
        """Override in subclasses and decorate with CoverPoint/CoverCross."""
        raise NotImplementedError("Override in subclass and decorate with coverpoints")

    def report_phase(self) -> None:
        """Emit coverage report (and optional YAML) at end of sim."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        if not self._coverage_en:
            return
        self.logger.info(
            "Coverage: %d item(s) sampled, %.1f%% of bins hit",
            self.sampled,
            self.coverage_percent(),
        )
        coverage_db.report_coverage(self.logger.debug)
        if self.yaml_path:
            coverage_db.export_to_yaml(self.yaml_path)
            self.logger.debug("Coverage YAML written to %s", self.yaml_path)
        self.logger.debug("report_phase end")

    def coverage_percent(self) -> float:
        """Mean coverage over every top-level cover group in the DB."""
        tops = [k for k in coverage_db if "." not in k]
        if not tops:
            return 0.0
        return sum(coverage_db[k].cover_percentage for k in tops) / len(tops)
