"""Source editor tabs, one per project file."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from PyQt6 import QtCore, QtWidgets

from ..core.models import Project, ProjectFile
from ..projects import ProjectStore
from .preview import preview_sources

logger = logging.getLogger(__name__)


class EditorTabs(QtWidgets.QTabWidget):
    """Plain-text editors keyed by file id, so files sharing a language stay separate."""

    contentChanged = QtCore.pyqtSignal()

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setDocumentMode(True)
        self.editors: Dict[str, QtWidgets.QPlainTextEdit] = {}
        self._languages: Dict[str, str] = {}

    def load(self, files: Iterable[ProjectFile]) -> None:
        self.clear()
        for editor in self.editors.values():
            editor.deleteLater()
        self.editors = {}
        self._languages = {}
        for f in files:
            editor = QtWidgets.QPlainTextEdit(self)
            editor.setPlainText(f.content)
            editor.textChanged.connect(self.contentChanged)
            self.editors[f.id] = editor
            self._languages[f.id] = f.language
            self.addTab(editor, f.name)

    def sources(self) -> Dict[str, str]:
        return preview_sources(
            (self._languages[file_id], editor.toPlainText()) for file_id, editor in self.editors.items()
        )

    def flush_to(self, projects: ProjectStore, project: Project) -> int:
        """Write edited text back to its own file; returns how many files changed."""
        written = 0
        for f in list(project.files):
            editor = self.editors.get(f.id)
            if editor is None or editor.toPlainText() == f.content:
                continue
            projects.update_file(project.id, f.id, content=editor.toPlainText())
            written += 1
        logger.debug(f"Wrote {written} edited file(s) to project {project.id}")
        return written
