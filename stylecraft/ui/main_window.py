"""Main application window: editors, live preview and inspector."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtWebEngineCore import QWebEnginePage
from PyQt6.QtWebEngineWidgets import QWebEngineView

from ..bridge import PreviewError, SelectionBridge, inspector_script
from ..core import storage
from ..core.debounce import Debouncer
from ..core.models import Project
from ..exceptions import StorageError
from ..inspector import InspectorStore
from ..projects import ProjectStore
from .editors import EditorTabs
from .inspector_panel import InspectorPanel
from .preview import DEVICE_WIDTHS, build_preview_document, device_width

logger = logging.getLogger(__name__)

APP_TITLE = "Stylecraft"

_STARTER_FILES = [
    ("index.html", "html", "<main>\n  <h2 id=\"title\">Layers</h2>\n  <p>Click the inspector, then an element.</p>\n</main>\n"),
    ("style.css", "css", "body { font-family: system-ui, sans-serif; margin: 2rem; }\n"),
    ("script.js", "javascript", ""),
]


class PreviewPage(QWebEnginePage):
    """Forwards console output from the preview document to the bridge."""

    def __init__(self, bridge: SelectionBridge, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._bridge = bridge

    def javaScriptConsoleMessage(self, level, message, line_number, source_id) -> None:  # noqa: N802
        self._bridge.handle_console_message(message)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        store: InspectorStore,
        bridge: SelectionBridge,
        projects: Optional[ProjectStore] = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1400, 860)

        self.store = store
        self.bridge = bridge
        self.projects = projects or ProjectStore()
        self.project: Optional[Project] = None
        self.project_path: Optional[Path] = None
        self.inspector_active = False
        self._debounce = Debouncer(store.settings.preview_delay_ms, self.update_preview, self)

        self._build_ui()
        self._build_menu()
        self._bind_events()

        self.new_project()

    # ------------------------------------------------------------------ UI --
    def _build_ui(self) -> None:
        splitter = QtWidgets.QSplitter(self)
        splitter.setOrientation(QtCore.Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        self.editor_tabs = EditorTabs(self)

        preview_panel = QtWidgets.QWidget(self)
        preview_layout = QtWidgets.QVBoxLayout(preview_panel)
        preview_layout.setContentsMargins(6, 6, 6, 6)
        self.btn_inspect = QtWidgets.QPushButton("Inspect", preview_panel)
        self.btn_inspect.setCheckable(True)
        self.device_combo = QtWidgets.QComboBox(preview_panel)
        self.device_combo.addItems(DEVICE_WIDTHS)
        toolbar = QtWidgets.QHBoxLayout()
        toolbar.addWidget(self.btn_inspect)
        toolbar.addStretch(1)
        toolbar.addWidget(self.device_combo)
        self.preview = QWebEngineView(preview_panel)
        self.preview.setPage(PreviewPage(self.bridge, self.preview))
        preview_layout.addLayout(toolbar)
        preview_layout.addWidget(self.preview, 1)

        self.panel = InspectorPanel(self.store, self)

        splitter.addWidget(self.editor_tabs)
        splitter.addWidget(preview_panel)
        splitter.addWidget(self.panel)
        splitter.setSizes([480, 560, 360])

        self.status = self.statusBar()

    def _build_menu(self) -> None:
        bar = self.menuBar()
        file_menu = bar.addMenu("&File")
        self.act_new = QtGui.QAction("New Project", self)
        self.act_open = QtGui.QAction("Open Project…", self)
        self.act_save = QtGui.QAction("Save", self)
        self.act_quit = QtGui.QAction("Quit", self)
        file_menu.addActions([self.act_new, self.act_open, self.act_save])
        file_menu.addSeparator()
        file_menu.addAction(self.act_quit)

        edit_menu = bar.addMenu("&Edit")
        self.act_undo = QtGui.QAction("Undo Style Change", self)
        self.act_undo.setShortcut(QtGui.QKeySequence.StandardKey.Undo)
        self.act_copy_classes = QtGui.QAction("Copy Classes", self)
        edit_menu.addActions([self.act_undo, self.act_copy_classes])

    def _bind_events(self) -> None:
        self.editor_tabs.contentChanged.connect(self._on_editor_changed)
        self.device_combo.currentTextChanged.connect(self.set_device)
        self.btn_inspect.toggled.connect(self.set_inspector_active)

        self.bridge.elementSelected.connect(self._on_element_selected)
        self.bridge.previewError.connect(self._on_preview_error)

        self.act_new.triggered.connect(self.new_project)
        self.act_open.triggered.connect(self.open_project_dialog)
        self.act_save.triggered.connect(self.save_project)
        self.act_quit.triggered.connect(self.close)
        self.act_undo.triggered.connect(self.store.undo)
        self.act_copy_classes.triggered.connect(self.panel.copy_classes)

    # ----------------------------------------------------------- Project Ops --
    def new_project(self) -> None:
        project = self.projects.create_project("My Site")
        for name, language, content in _STARTER_FILES:
            self.projects.add_file(project.id, name, language, content)
        self._load_project(project)
        self.project_path = None

    def open_project_dialog(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open Project", "", "Site Project (*.siteproj)")
        if not path:
            return
        try:
            project = storage.load_project(path)
        except StorageError as exc:
            QtWidgets.QMessageBox.warning(self, "Open Project", str(exc))
            return
        self._load_project(self.projects.import_project(project))
        self.project_path = Path(path)
        self.status.showMessage(f"Opened {os.path.basename(path)}", 4000)

    def save_project(self) -> None:
        if self.project is None:
            return
        self._flush_editors_to_model()
        if self.project_path is None:
            path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save Project", "", "Site Project (*.siteproj)")
            if not path:
                return
            self.project_path = Path(path if path.endswith(".siteproj") else f"{path}.siteproj")
        storage.save_project(self.project_path, self.project)
        self.status.showMessage("Project saved", 2500)

    def _load_project(self, project: Project) -> None:
        self.project = project
        self.editor_tabs.load(project.files)
        self.setWindowTitle(f"{project.name} — {APP_TITLE}")
        self.update_preview()

    def _flush_editors_to_model(self) -> None:
        if self.project is None:
            return
        self.editor_tabs.flush_to(self.projects, self.project)

    # ---------------------------------------------------- Editing & Preview --
    def _on_editor_changed(self) -> None:
        self._debounce.call()

    def set_inspector_active(self, active: bool) -> None:
        self.inspector_active = active
        self.update_preview()

    def set_device(self, name: str) -> None:
        self.preview.setMaximumWidth(device_width(name))

    def update_preview(self) -> None:
        script = inspector_script(self.store.settings.max_text_length) if self.inspector_active else ""
        self.preview.setHtml(build_preview_document(self.editor_tabs.sources(), script))

    def _on_element_selected(self, event) -> None:
        self.store.select_element(event)
        self.btn_inspect.setChecked(False)
        self.status.showMessage(f"Selected {event.element_tag}#{event.element_id}", 3000)

    def _on_preview_error(self, error: PreviewError) -> None:
        where = f" (line {error.line})" if error.line else ""
        self.status.showMessage(f"{error.error_type}: {error.message}{where}", 6000)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802
        self._debounce.cancel()
        self.panel.shutdown()
        self.store.flush()
        self.store.close()
        super().closeEvent(event)
