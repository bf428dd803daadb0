"""Properties panel bound to an :class:`InspectorStore`."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from PyQt6 import QtCore, QtGui, QtWidgets

from ..core.debounce import Debouncer
from ..core.models import BREAKPOINTS, TEXT_ALIGNMENTS, StyleState, is_number
from ..inspector import InspectorStore

logger = logging.getLogger(__name__)

# (nested record, field, label)
_TEXT_FIELDS = [
    ("padding", "top", "Padding top"),
    ("padding", "right", "Padding right"),
    ("padding", "bottom", "Padding bottom"),
    ("padding", "left", "Padding left"),
    ("margin", "top", "Margin top"),
    ("margin", "right", "Margin right"),
    ("margin", "bottom", "Margin bottom"),
    ("margin", "left", "Margin left"),
    ("size", "width", "Width"),
    ("size", "height", "Height"),
    ("size", "max_width", "Max width"),
    ("size", "max_height", "Max height"),
    ("typography", "font_size", "Font size"),
    ("typography", "font_weight", "Font weight"),
    ("typography", "letter_spacing", "Letter spacing"),
    ("typography", "line_height", "Line height"),
    ("background", "color", "Background"),
    ("border", "color", "Border color"),
    ("border", "width", "Border width"),
    ("border", "radius", "Radius"),
]

# (nested record, field, label, minimum, maximum)
_NUMBER_FIELDS = [
    ("transforms", "translate_x", "Translate X", -1000, 1000),
    ("transforms", "translate_y", "Translate Y", -1000, 1000),
    ("transforms", "rotate", "Rotate", -360, 360),
    ("transforms", "scale", "Scale %", 0, 300),
    ("transforms", "skew_x", "Skew X", -90, 90),
    ("transforms", "skew_y", "Skew Y", -90, 90),
    ("transforms3d", "rotate_x", "Rotate X", -360, 360),
    ("transforms3d", "rotate_y", "Rotate Y", -360, 360),
    ("transforms3d", "rotate_z", "Rotate Z", -360, 360),
    ("transforms3d", "perspective", "Perspective", 0, 20),
]

# top-level field, label, maximum
_EFFECT_FIELDS = [
    ("opacity", "Opacity", 100),
    ("blur", "Blur", 50),
    ("backdrop_blur", "Backdrop blur", 50),
]


class InspectorPanel(QtWidgets.QWidget):
    def __init__(self, store: InspectorStore, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self._line_edits: Dict[Tuple[str, Optional[str]], QtWidgets.QLineEdit] = {}
        self._debouncers: Dict[Tuple[str, Optional[str]], Debouncer] = {}
        self._spins: Dict[Tuple[str, str], QtWidgets.QSpinBox] = {}
        self._sliders: Dict[str, QtWidgets.QSlider] = {}

        self._build_ui()
        self._bind_events()
        self._sync_from_state(store.state)

    # ------------------------------------------------------------------ UI --
    def _build_ui(self) -> None:
        outer = QtWidgets.QVBoxLayout(self)
        outer.setContentsMargins(6, 6, 6, 6)
        outer.setSpacing(6)

        self.title = QtWidgets.QLabel(self)
        self.title.setTextFormat(QtCore.Qt.TextFormat.PlainText)
        outer.addWidget(self.title)

        scroll = QtWidgets.QScrollArea(self)
        scroll.setWidgetResizable(True)
        body = QtWidgets.QWidget(scroll)
        form = QtWidgets.QFormLayout(body)
        scroll.setWidget(body)
        outer.addWidget(scroll, 1)

        self.breakpoint_combo = QtWidgets.QComboBox(body)
        self.breakpoint_combo.addItems(BREAKPOINTS)
        form.addRow("Breakpoint", self.breakpoint_combo)

        form.addRow("Text", self._line_edit(body, "text_content", None))
        form.addRow("Link", self._line_edit(body, "link", None))

        for key, nested, label in _TEXT_FIELDS:
            form.addRow(label, self._line_edit(body, key, nested))

        self.align_combo = QtWidgets.QComboBox(body)
        self.align_combo.addItems(("",) + TEXT_ALIGNMENTS)
        form.addRow("Text align", self.align_combo)

        for key, nested, label, low, high in _NUMBER_FIELDS:
            spin = QtWidgets.QSpinBox(body)
            spin.setRange(low, high)
            self._spins[(key, nested)] = spin
            form.addRow(label, spin)

        for key, label, high in _EFFECT_FIELDS:
            slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal, body)
            slider.setRange(0, high)
            self._sliders[key] = slider
            form.addRow(label, slider)

        outer.addWidget(QtWidgets.QLabel("Tailwind output", self))
        self.output_view = QtWidgets.QPlainTextEdit(self)
        self.output_view.setReadOnly(True)
        self.output_view.setMaximumHeight(80)
        self.output_view.setPlaceholderText("No modifications…")
        outer.addWidget(self.output_view)

        self.code_view = QtWidgets.QPlainTextEdit(self)
        self.code_view.setReadOnly(True)
        self.code_view.setMaximumHeight(80)
        outer.addWidget(self.code_view)

        btn_row = QtWidgets.QHBoxLayout()
        self.btn_copy = QtWidgets.QPushButton("Copy", self)
        self.btn_undo = QtWidgets.QPushButton("Undo", self)
        self.btn_reset = QtWidgets.QPushButton("Reset", self)
        btn_row.addWidget(self.btn_copy)
        btn_row.addWidget(self.btn_undo)
        btn_row.addWidget(self.btn_reset)
        outer.addLayout(btn_row)

        self._copied_timer = QtCore.QTimer(self)
        self._copied_timer.setSingleShot(True)
        self._copied_timer.setInterval(2000)

    def _line_edit(self, parent: QtWidgets.QWidget, key: str, nested: Optional[str]) -> QtWidgets.QLineEdit:
        edit = QtWidgets.QLineEdit(parent)
        slot = (key, nested)
        self._line_edits[slot] = edit
        self._debouncers[slot] = Debouncer(
            self.store.settings.text_input_delay_ms,
            lambda value, key=key, nested=nested: self._commit_text(key, nested, value),
            self,
        )
        return edit

    def _bind_events(self) -> None:
        self.store.stateChanged.connect(self._sync_from_state)
        self.store.historyChanged.connect(self._on_history_changed)

        self.breakpoint_combo.currentTextChanged.connect(
            lambda value: self.store.update_state("breakpoint", value)
        )
        self.align_combo.currentTextChanged.connect(
            lambda value: self.store.update_nested_state("typography", "text_align", value)
        )
        for slot, edit in self._line_edits.items():
            edit.textEdited.connect(self._debouncers[slot].call)
        for (key, nested), spin in self._spins.items():
            spin.valueChanged.connect(
                lambda value, key=key, nested=nested: self.store.update_nested_state(key, nested, value)
            )
        for key, slider in self._sliders.items():
            slider.valueChanged.connect(lambda value, key=key: self.store.update_state(key, value))

        self.btn_copy.clicked.connect(self.copy_classes)
        self._copied_timer.timeout.connect(lambda: self.btn_copy.setText("Copy"))
        self.btn_undo.clicked.connect(self.store.undo)
        self.btn_reset.clicked.connect(self.store.reset_state)

    # ------------------------------------------------------------- Syncing --
    def _commit_text(self, key: str, nested: Optional[str], value: str) -> None:
        if nested is None:
            self.store.update_state(key, value)
        else:
            self.store.update_nested_state(key, nested, value)

    def _sync_from_state(self, state: StyleState) -> None:
        self.title.setText(f"<{state.element_tag}> #{state.element_id}")

        for (key, nested), edit in self._line_edits.items():
            if self._debouncers[(key, nested)].pending:
                continue
            value = getattr(state, key)
            if nested is not None:
                value = getattr(value, nested)
            if edit.text() != value:
                edit.setText(value)

        _set_quietly(self.breakpoint_combo, lambda: self.breakpoint_combo.setCurrentText(state.breakpoint))
        _set_quietly(self.align_combo, lambda: self.align_combo.setCurrentText(state.typography.text_align))
        for (key, nested), spin in self._spins.items():
            value = _bounded(getattr(getattr(state, key), nested), spin.minimum(), spin.maximum())
            _set_quietly(spin, lambda spin=spin, value=value: spin.setValue(value))
        for key, slider in self._sliders.items():
            value = _bounded(getattr(state, key), slider.minimum(), slider.maximum())
            _set_quietly(slider, lambda slider=slider, value=value: slider.setValue(value))

        self.output_view.setPlainText(self.store.generated_tailwind)
        self.code_view.setPlainText(self.store.generated_code)
        self.btn_undo.setEnabled(self.store.can_undo)

    def _on_history_changed(self, size: int) -> None:
        self.btn_undo.setEnabled(size > 0)

    # ------------------------------------------------------------ Clipboard --
    def copy_classes(self) -> bool:
        clipboard = QtGui.QGuiApplication.clipboard()
        if clipboard is None:
            logger.warning("Clipboard unavailable; classes were not copied")
            return False
        clipboard.setText(self.store.generated_tailwind)
        self.btn_copy.setText("Copied")
        self._copied_timer.start()
        return True

    def shutdown(self) -> None:
        for debouncer in self._debouncers.values():
            debouncer.cancel()


def _bounded(value, low: int, high: int) -> int:
    """Fit a model number into a Qt control range; non-numbers show as 0."""
    if not is_number(value):
        value = 0
    return int(max(low, min(high, value)))


def _set_quietly(widget: QtWidgets.QWidget, apply) -> None:
    widget.blockSignals(True)
    try:
        apply()
    finally:
        widget.blockSignals(False)
