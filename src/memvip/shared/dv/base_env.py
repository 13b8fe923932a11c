# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/dv/base_env.py

"""Environment: agents, scoreboard, coverage and reset fan-out."""

from __future__ import annotations

import pyuvm

from . import utils_dv
from .base_agent import BaseAgent
from .base_coverage import BaseCoverage
from .base_reset_item import BaseResetItem
from .base_reset_monitor import BaseResetMonitor
from .base_reset_sink import BaseResetSink
from .base_sb import BaseSb


class BaseEnv(pyuvm.uvm_env):
    """Top-level environment; every child comes from the factory.

    Per agent:
        ap_in  (driven items)   -> coverage, scoreboard predictor
        ap_out (observed items) -> scoreboard comparator
    Once:
        mon_rst -> reset_sink -> drivers, scoreboard predictor

    Configuration (via config_db):
        coverage_en (bool): build the coverage subscriber (default: True)
        check_en (bool): build the scoreboard (default: True)
    """

    num_agents: int = 1

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.agents: list[BaseAgent] = []
        self.cov: BaseCoverage | None = None
        self.sb: BaseSb | None = None
        self.mon_rst: BaseResetMonitor
        self.reset_sink: BaseResetSink[BaseResetItem]

    def _enabled(self, key: str) -> bool:
        v = utils_dv.uvm_config_db_get_try(self, key)
        return v if isinstance(v, bool) else True

    def build_phase(self) -> None:
        super().build_phase()
        path = self.get_full_name()

        def create(cls: type, name: str):
            return pyuvm.uvm_factory().create_component_by_type(
                cls, parent_inst_path=path, name=name, parent=self
            )

        self.agents = [create(BaseAgent, f"agent{i}") for i in range(self.num_agents)]
        if self._enabled("coverage_en"):
            self.cov = create(BaseCoverage, "coverage")
        if self._enabled("check_en"):
            self.sb = create(BaseSb, "sb")
        self.mon_rst = create(BaseResetMonitor, "mon_rst")
        self.reset_sink = create(BaseResetSink, "reset_sink")
        self.logger.debug(
            "built %d agent(s), coverage=%s, scoreboard=%s",
            len(self.agents),
            self.cov is not None,
            self.sb is not None,
        )

    def connect_phase(self) -> None:
        super().connect_phase()
        for agent in self.agents:
            if self.cov is not None:
                agent.ap_in.connect(self.cov.analysis_export)
            if self.sb is not None:
                agent.ap_in.connect(self.sb.prd.analysis_export)
                agent.ap_out.connect(self.sb.cmp.analysis_export)
            if agent.drv is not None:
                self.reset_sink.connect_target(agent.drv)
        if self.sb is not None:
            self.reset_sink.connect_target(self.sb.prd)
        self.mon_rst.ap.connect(self.reset_sink.analysis_export)
