# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/dv/__init__.py

"""pyuvm bench for mem_ctrl.

Components:
- mem_ctrl_item: we/re/wdata in, rdata out
- mem_ctrl_driver: drives one item per falling edge and publishes it
- mem_ctrl_monitor: samples rdata after every rising edge
- mem_ctrl_ref_model: wraps the golden MemCtrlModel
- mem_ctrl_sb: predictor, comparator and scoreboard
- mem_ctrl_sequence: feeds items from a SequenceProvider
- mem_ctrl_coverage: operation kind and written-data coverage

To run tests:
    dv --design=mem_ctrl --test=test_mem_ctrl
    dv --design=mem_ctrl --test=test_mem_ctrl --mode=stress --nseeds 3
"""
