# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/tools/__init__.py

"""memvip command-line tools.

- dv: build the RTL and run a bench's pyuvm tests under cocotb, once per seed
"""
