from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from PyQt6.QtTest import QTest

from stylecraft.core.debounce import Debouncer


def test_burst_of_calls_fires_once_with_last_arguments() -> None:
    calls = []
    debouncer = Debouncer(20, lambda value: calls.append(value))
    for value in ("a", "ab", "abc"):
        debouncer.call(value)
    assert debouncer.pending
    QTest.qWait(150)
    assert calls == ["abc"]
    assert not debouncer.pending


def test_cancel_drops_pending_call() -> None:
    calls = []
    debouncer = Debouncer(20, lambda: calls.append(1))
    debouncer.call()
    debouncer.cancel()
    QTest.qWait(80)
    assert calls == []


def test_flush_runs_pending_call_immediately() -> None:
    calls = []
    debouncer = Debouncer(5000, lambda value: calls.append(value))
    debouncer.call(7)
    debouncer.flush()
    assert calls == [7]
    debouncer.flush()
    assert calls == [7]


def test_delay_is_configurable() -> None:
    assert Debouncer(300, lambda: None).delay_ms == 300
