# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/mem_ctrl/__init__.py

"""mem_ctrl: 16-entry x 8-bit memory with an auto-incrementing address.

Subpackages:
- model: simulator-free golden core (reference model, scoreboard, stimulus)
- dv: pyuvm bench for the RTL in rtl/
"""
