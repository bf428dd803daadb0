"""Exception hierarchy for stylecraft.

    StylecraftError (base)
    ├── UnknownFieldError - patch addressed a field StyleState does not have
    ├── InvalidFieldValueError - patch gave a nested record a value of the wrong type
    ├── BridgeMessageError - preview message could not be parsed
    ├── StorageError - project file could not be read
    └── ProjectError - project store failure carrying an error code and status

The class compiler and markup generator never raise; a corrupt inspector
snapshot is recovered by falling back to defaults rather than raising.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StylecraftError(Exception):
    """Base exception for all stylecraft errors."""


class UnknownFieldError(StylecraftError, KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InvalidFieldValueError(StylecraftError, TypeError):
    pass


class BridgeMessageError(StylecraftError, ValueError):
    pass


class StorageError(StylecraftError):
    pass


class ProjectError(StylecraftError):
    """Project store failure, shaped like the ``{error, code, details}`` API body."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details

    def to_dict(self) -> dict:
        body: Dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body
