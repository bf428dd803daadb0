import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..exceptions import StorageError
from .models import Project, StyleState

logger = logging.getLogger(__name__)


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def save_snapshot(path: str | Path, state: StyleState) -> None:
    _write_json(Path(path), state.to_dict())


def load_snapshot(path: str | Path, base: Optional[StyleState] = None) -> Optional[StyleState]:
    """Read a stored snapshot merged over ``base``.

    Returns ``None`` when there is nothing usable on disk.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(f"Failed to load inspector state from {path}: {exc}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"Ignoring inspector state in {path}: expected an object")
        return None
    return StyleState.from_dict(data, base)


def clear_snapshot(path: str | Path) -> None:
    Path(path).unlink(missing_ok=True)


def save_project(path: str | Path, project: Project) -> None:
    path = Path(path)
    path.write_text(json.dumps(project.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")


def load_project(path: str | Path) -> Project:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise StorageError(f"Cannot read project file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError(f"Project file {path} does not contain an object")
    return Project.from_dict(data)
