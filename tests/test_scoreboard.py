# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_scoreboard.py

from __future__ import annotations

import pytest

from memvip.mem_ctrl.model import (
    CorrelationPolicy,
    MismatchError,
    Prediction,
    QueueUnderflowError,
    Scoreboard,
)


def _pred(data: int, tick: int = 0, address: int = 0) -> Prediction:
    return Prediction(tick=tick, address=address, data=data)


def test_match_and_mismatch_are_recorded_in_order():
    sb = Scoreboard()
    sb.expected.push(_pred(0x10, address=3))
    sb.expected.push(_pred(0x20, address=4))
    v1 = sb.compare(1, 0x10)
    v2 = sb.compare(2, 0x21)
    assert v1 is not None and v1.matched
    assert v2 is not None and not v2.matched
    assert (v2.expected, v2.observed, v2.address, v2.tick) == (0x20, 0x21, 4, 2)
    assert sb.mismatches == [v2]
    assert sb.pending == 0


def test_by_read_request_skips_ticks_without_prediction():
    sb = Scoreboard(CorrelationPolicy.BY_READ_REQUEST)
    assert sb.compare(1, 0xFF) is None
    assert sb.compare(2, 0xFF) is None
    assert sb.skipped == 2
    assert not sb.verdicts


def test_strict_underflow_is_fatal_with_context():
    sb = Scoreboard("strict")
    sb.expected.push(_pred(1))
    sb.compare(1, 1)
    with pytest.raises(QueueUnderflowError) as info:
        sb.compare(2, 0)
    err = info.value
    assert err.tick == 2
    assert err.queue_state["len"] == 0
    assert err.queue_state["pushed"] == 1
    assert err.queue_state["popped"] == 1
    assert "never popped faster than appended" in str(err)


def test_mismatch_is_not_raised_until_asked():
    sb = Scoreboard()
    sb.expected.push(_pred(0xAA, tick=4))
    sb.compare(5, 0x55)
    out = sb.outcome(ticks=5)
    assert not out.passed
    assert out.mismatch_count == 1
    with pytest.raises(MismatchError) as info:
        out.raise_for_status()
    assert info.value.count == 1
    assert info.value.first.tick == 5


def test_outcome_needs_at_least_one_comparison():
    out = Scoreboard().outcome(ticks=10)
    assert not out.passed
    assert "no comparisons made" in out.summary_line()
    out.raise_for_status()


def test_summary_line_reports_counts_and_first_mismatch():
    sb = Scoreboard()
    for i, obs in enumerate([1, 9, 3]):
        sb.expected.push(_pred(i + 1))
        sb.compare(i + 10, obs)
    line = sb.outcome(ticks=12).summary_line()
    assert line.startswith("*** TEST FAIL")
    assert "3 compared" in line
    assert "1 mismatch(es)" in line
    assert "first mismatch at tick 11" in line


def test_fatal_outcome_fails_and_names_cause():
    out = Scoreboard().outcome(ticks=3, fatal="expected queue underflow at tick 3")
    assert not out.passed
    assert "fatal: expected queue underflow" in out.summary_line()


def test_note_exhausted_with_pending_predictions():
    sb = Scoreboard()
    sb.note_exhausted(7)
    assert not sb.notices
    sb.expected.push(_pred(1))
    sb.expected.push(_pred(2))
    sb.note_exhausted(8)
    assert sb.notices == ["sequence exhausted with 2 pending prediction(s) at tick 8"]
    out = sb.outcome(ticks=8)
    assert out.pending == 2
    assert out.to_dict()["notices"] == sb.notices


def test_expected_queue_is_fifo():
    sb = Scoreboard()
    for d in (3, 1, 2):
        sb.expected.push(_pred(d))
    assert sb.expected.peek() == _pred(3)
    assert [sb.expected.pop(0).data for _ in range(3)] == [3, 1, 2]
    assert sb.expected.peek() is None
