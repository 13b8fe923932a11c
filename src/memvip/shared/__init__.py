# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/shared/__init__.py

"""Components shared by every memvip bench.

Modules:
- errors: VerificationError and the harness error types
- scoreboard: Prediction/Verdict records, ExpectedQueue, Scoreboard, RunOutcome

Subpackages:
- dv: pyuvm base classes and helpers the per-design benches extend
"""
