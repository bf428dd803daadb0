from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6 import QtWidgets  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _drain_pending_timers(qapp):
    # Let debounced writes scheduled by one test fire before the next test starts,
    # so they cannot leak into another test's monkeypatched hooks.
    yield
    from PyQt6.QtTest import QTest

    QTest.qWait(100)
