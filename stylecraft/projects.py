"""In-memory project and file store."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .core.models import FILE_LANGUAGES, Project, ProjectFile
from .exceptions import ProjectError

logger = logging.getLogger(__name__)

_PROJECT_FIELDS = {"name", "description", "is_public", "owner_id"}
_FILE_FIELDS = {"name", "language", "content"}
_IMMUTABLE_FIELDS = {"id", "files", "created_at"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _not_found(kind: str, **details: str) -> ProjectError:
    return ProjectError(f"{kind} not found", code="NOT_FOUND", status=404, details=dict(details))


def _check_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ProjectError("Name is required", code="INVALID_NAME", status=400)
    return name.strip()


def _check_language(language: object) -> str:
    if language not in FILE_LANGUAGES:
        raise ProjectError(
            f"Unsupported language: {language!r}",
            code="INVALID_LANGUAGE",
            status=400,
            details={"allowed": list(FILE_LANGUAGES)},
        )
    return language  # type: ignore[return-value]


def _check_updates(updates: dict, allowed: set) -> None:
    bad = sorted(set(updates) - allowed)
    if bad:
        kind = "Immutable" if set(bad) & _IMMUTABLE_FIELDS else "Unknown"
        raise ProjectError(
            f"{kind} fields: {', '.join(bad)}", code="INVALID_PARAMS", status=400, details={"fields": bad}
        )


class ProjectStore:
    """Projects and their files, held in memory for the session."""

    def __init__(self) -> None:
        self._projects: Dict[str, Project] = {}

    # ------------------------------------------------------------ Projects --
    def create_project(self, name: str, description: Optional[str] = None) -> Project:
        project = Project(id=str(uuid.uuid4()), name=_check_name(name), description=description)
        self._projects[project.id] = project
        logger.debug(f"Created project {project.id} ({project.name})")
        return project

    def import_project(self, project: Project) -> Project:
        """Register a project loaded from disk, replacing any with the same id.

        Files without a unique id get a fresh one so each can be addressed.
        """
        if not project.id:
            project.id = str(uuid.uuid4())
        seen = set()
        for index, f in enumerate(project.files):
            if not f.id or f.id in seen:
                project.files[index] = f = replace(f, id=str(uuid.uuid4()))
            seen.add(f.id)
        self._projects[project.id] = project
        return project

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise _not_found("Project", projectId=project_id) from None

    def list_projects(self) -> List[Project]:
        return list(self._projects.values())

    def update_project(self, project_id: str, **updates) -> Project:
        project = self.get_project(project_id)
        _check_updates(updates, _PROJECT_FIELDS)
        if "name" in updates:
            updates["name"] = _check_name(updates["name"])
        updated = replace(project, **updates, updated_at=_now())
        self._projects[project_id] = updated
        return updated

    def delete_project(self, project_id: str) -> None:
        if self._projects.pop(project_id, None) is None:
            raise _not_found("Project", projectId=project_id)

    # --------------------------------------------------------------- Files --
    def add_file(self, project_id: str, name: str, language: str, content: str = "") -> ProjectFile:
        project = self.get_project(project_id)
        new_file = ProjectFile(
            id=str(uuid.uuid4()),
            name=_check_name(name),
            language=_check_language(language),
            content=content,
        )
        project.files.append(new_file)
        project.updated_at = _now()
        return new_file

    def list_files(self, project_id: str) -> List[ProjectFile]:
        return list(self.get_project(project_id).files)

    def get_file(self, project_id: str, file_id: str) -> ProjectFile:
        for f in self.get_project(project_id).files:
            if f.id == file_id:
                return f
        raise _not_found("File", projectId=project_id, fileId=file_id)

    def update_file(self, project_id: str, file_id: str, **updates) -> ProjectFile:
        project = self.get_project(project_id)
        _check_updates(updates, _FILE_FIELDS)
        if "name" in updates:
            updates["name"] = _check_name(updates["name"])
        if "language" in updates:
            _check_language(updates["language"])
        for index, f in enumerate(project.files):
            if f.id == file_id:
                updated = replace(f, **updates, updated_at=_now())
                project.files[index] = updated
                project.updated_at = updated.updated_at
                return updated
        raise _not_found("File", projectId=project_id, fileId=file_id)

    def delete_file(self, project_id: str, file_id: str) -> None:
        project = self.get_project(project_id)
        for index, f in enumerate(project.files):
            if f.id == file_id:
                del project.files[index]
                project.updated_at = _now()
                return
        raise _not_found("File", projectId=project_id, fileId=file_id)

    def clear(self) -> None:
        self._projects.clear()
