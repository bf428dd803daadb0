"""The inspector store: current snapshot, undo history and persistence."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Optional, Tuple

from PyQt6 import QtCore

from .bridge import ElementSelected, selection_patch
from .config import InspectorSettings
from .core import storage
from .core.compiler import compile_classes
from .core.debounce import Debouncer
from .core.generator import generated_markup
from .core.models import StyleState, default_snapshot

logger = logging.getLogger(__name__)


class InspectorStore(QtCore.QObject):
    """Owns the inspected element's :class:`StyleState`.

    Every mutation pushes the previous snapshot onto a bounded undo history
    and schedules a debounced write of the new snapshot. Undo pops one entry
    per call; there is no redo. The class string and markup are derived
    from the current snapshot and only recomputed when it changes.
    """

    stateChanged = QtCore.pyqtSignal(object)
    historyChanged = QtCore.pyqtSignal(int)

    def __init__(
        self,
        settings: Optional[InspectorSettings] = None,
        parent: Optional[QtCore.QObject] = None,
        initial: Optional[StyleState] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or InspectorSettings()
        self._history: Deque[StyleState] = deque(maxlen=self.settings.history_limit)
        self._state = initial or self._restore()
        self._derived_for: Optional[StyleState] = None
        self._tailwind = ""
        self._code = ""
        self._persist = Debouncer(self.settings.persist_delay_ms, self._write_snapshot, self)
        self._closed = False

    # ------------------------------------------------------------- State --
    @property
    def state(self) -> StyleState:
        return self._state

    @property
    def history(self) -> Tuple[StyleState, ...]:
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def generated_tailwind(self) -> str:
        self._derive()
        return self._tailwind

    @property
    def generated_code(self) -> str:
        self._derive()
        return self._code

    def _derive(self) -> None:
        if self._derived_for is self._state:
            return
        self._tailwind = compile_classes(self._state)
        self._code = generated_markup(self._state, self._tailwind)
        self._derived_for = self._state

    # --------------------------------------------------------- Mutations --
    def update_state(self, key: str, value: Any) -> None:
        self._commit(self._state.replace_field(key, value))

    def update_nested_state(self, key: str, nested_key: str, value: Any) -> None:
        self._commit(self._state.replace_nested(key, nested_key, value))

    def reset_state(self) -> None:
        self._history.append(self._state)
        self._state = default_snapshot()
        self._persist.cancel()
        self._clear_snapshot()
        self.stateChanged.emit(self._state)
        self.historyChanged.emit(len(self._history))

    def undo(self) -> None:
        if not self._history:
            return
        self._state = self._history.pop()
        self._schedule_write()
        self.stateChanged.emit(self._state)
        self.historyChanged.emit(len(self._history))

    def select_element(self, event: ElementSelected) -> None:
        """Load a newly selected element; its history starts empty."""
        self._state = selection_patch(
            event,
            self._state,
            mode=self.settings.selection_mode,
            max_text_length=self.settings.max_text_length,
        )
        self._history.clear()
        self._schedule_write()
        self.stateChanged.emit(self._state)
        self.historyChanged.emit(0)

    def _commit(self, new_state: StyleState) -> None:
        self._history.append(self._state)
        self._state = new_state
        self._schedule_write()
        self.stateChanged.emit(self._state)
        self.historyChanged.emit(len(self._history))

    # ------------------------------------------------------- Persistence --
    def flush(self) -> None:
        self._persist.flush()

    def close(self) -> None:
        """Cancel pending timers; nothing is written after this."""
        self._persist.cancel()
        self._closed = True

    def _restore(self) -> StyleState:
        path = self.settings.state_path
        if path is None:
            return default_snapshot()
        saved = storage.load_snapshot(path, base=default_snapshot())
        return saved if saved is not None else default_snapshot()

    def _schedule_write(self) -> None:
        if self.settings.state_path is not None and not self._closed:
            self._persist.call(self._state)

    def _write_snapshot(self, state: StyleState) -> None:
        try:
            storage.save_snapshot(self.settings.state_path, state)
        except OSError as exc:
            logger.warning(f"Failed to save inspector state: {exc}")

    def _clear_snapshot(self) -> None:
        if self.settings.state_path is None:
            return
        try:
            storage.clear_snapshot(self.settings.state_path)
        except OSError as exc:
            logger.warning(f"Failed to clear inspector state: {exc}")
