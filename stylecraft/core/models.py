"""Data models for the inspector and project store."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import InvalidFieldValueError, UnknownFieldError

BREAKPOINTS = ("auto", "base", "sm", "md", "lg", "xl", "2xl")
TEXT_ALIGNMENTS = ("left", "center", "right", "justify")
FILE_LANGUAGES = ("html", "css", "javascript")

OPACITY_RANGE = (0, 100)
BLUR_RANGE = (0, 50)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def is_number(value: Any) -> bool:
    """Real, finite and not a bool."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return max(low, min(high, value))


class _Record:
    """Shared (de)serialization for the nested style records.

    Keys on the wire are camelCase; a field whose incoming value has the
    wrong type keeps its default.
    """

    def to_dict(self) -> dict:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Any):
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            return cls()
        values = {}
        defaults = cls()
        for f in fields(cls):
            key = _camel(f.name)
            raw = data.get(key, data.get(f.name))
            default = getattr(defaults, f.name)
            if isinstance(default, str):
                if isinstance(raw, str):
                    values[f.name] = raw
            elif is_number(raw):
                values[f.name] = raw
        return cls(**values)

    def replace_field(self, name: str, value: Any):
        if name not in {f.name for f in fields(self)}:
            raise UnknownFieldError(f"{type(self).__name__} has no field {name!r}")
        return replace(self, **{name: value})


@dataclass(frozen=True)
class Spacing(_Record):
    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""


@dataclass(frozen=True)
class Size(_Record):
    width: str = ""
    height: str = ""
    max_width: str = ""
    max_height: str = ""


@dataclass(frozen=True)
class Typography(_Record):
    font_family: str = ""
    font_size: str = ""
    font_weight: str = ""
    letter_spacing: str = ""
    line_height: str = ""
    text_align: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Typography":
        record = super().from_dict(data)
        if record.text_align and record.text_align not in TEXT_ALIGNMENTS:
            record = replace(record, text_align="")
        return record


@dataclass(frozen=True)
class Background(_Record):
    color: str = ""
    image: str = ""


@dataclass(frozen=True)
class Border(_Record):
    color: str = ""
    width: str = ""
    radius: str = ""


@dataclass(frozen=True)
class Transform2D(_Record):
    translate_x: float = 0
    translate_y: float = 0
    rotate: float = 0
    scale: float = 100  # percent, 100 = identity
    skew_x: float = 0
    skew_y: float = 0


@dataclass(frozen=True)
class Transform3D(_Record):
    rotate_x: float = 0
    rotate_y: float = 0
    rotate_z: float = 0
    perspective: float = 0  # hundreds of pixels


NESTED_FIELDS: Dict[str, type] = {
    "margin": Spacing,
    "padding": Spacing,
    "size": Size,
    "typography": Typography,
    "background": Background,
    "border": Border,
    "transforms": Transform2D,
    "transforms3d": Transform3D,
}

_STRING_FIELDS = ("element_id", "element_tag", "text_content", "link", "tailwind_classes")


@dataclass(frozen=True)
class StyleState:
    """Snapshot of one inspected element's editable properties.

    Instances are immutable; the inspector store swaps whole snapshots and
    keeps the previous ones as undo history.
    """

    element_id: str = ""
    element_tag: str = "div"
    text_content: str = ""
    link: str = ""
    tailwind_classes: str = ""
    margin: Spacing = field(default_factory=Spacing)
    padding: Spacing = field(default_factory=Spacing)
    size: Size = field(default_factory=Size)
    typography: Typography = field(default_factory=Typography)
    background: Background = field(default_factory=Background)
    border: Border = field(default_factory=Border)
    transforms: Transform2D = field(default_factory=Transform2D)
    transforms3d: Transform3D = field(default_factory=Transform3D)
    opacity: float = 100
    blur: Optional[float] = 0
    backdrop_blur: Optional[float] = 0
    breakpoint: str = "base"

    def to_dict(self) -> dict:
        data: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in NESTED_FIELDS:
                value = value.to_dict()
            data[_camel(f.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Any, base: Optional["StyleState"] = None) -> "StyleState":
        """Validate an external object into a snapshot.

        Top-level fields that are missing or mistyped keep the value from
        ``base`` (schema defaults when omitted); a nested record that is
        present is filled out with its own defaults.
        """
        base = base if base is not None else cls()
        if not isinstance(data, Mapping):
            return base

        def get(name: str) -> Any:
            return data.get(_camel(name), data.get(name))

        values: dict = {}
        for name in _STRING_FIELDS:
            raw = get(name)
            if isinstance(raw, str):
                values[name] = raw
        for name, record in NESTED_FIELDS.items():
            raw = get(name)
            if isinstance(raw, Mapping):
                values[name] = record.from_dict(raw)

        opacity = get("opacity")
        if is_number(opacity):
            values["opacity"] = _clamp(opacity, OPACITY_RANGE)
        for name in ("blur", "backdrop_blur"):
            raw = get(name)
            if is_number(raw):
                values[name] = _clamp(raw, BLUR_RANGE)
            elif raw is None and _camel(name) in data:
                values[name] = None

        breakpoint = get("breakpoint")
        if breakpoint in BREAKPOINTS:
            values["breakpoint"] = breakpoint
        return replace(base, **values)

    def replace_field(self, key: str, value: Any) -> "StyleState":
        if key not in {f.name for f in fields(self)}:
            raise UnknownFieldError(f"StyleState has no field {key!r}")
        record = NESTED_FIELDS.get(key)
        if record is not None:
            if isinstance(value, Mapping):
                value = record.from_dict(value)
            elif not isinstance(value, record):
                raise InvalidFieldValueError(
                    f"{key!r} expects a mapping or {record.__name__}, got {type(value).__name__}"
                )
        return replace(self, **{key: value})

    def replace_nested(self, key: str, nested_key: str, value: Any) -> "StyleState":
        if key not in NESTED_FIELDS:
            raise UnknownFieldError(f"StyleState has no nested field {key!r}")
        return replace(self, **{key: getattr(self, key).replace_field(nested_key, value)})


def default_snapshot() -> StyleState:
    """The inspector's initial snapshot, also used by reset."""
    return StyleState(
        element_id="aura-emgn5hp8g9knbc3d",
        element_tag="h2",
        text_content="Layers",
        padding=Spacing(top="", right="2", bottom="3", left="2"),
        breakpoint="auto",
    )


# ---------------------------------------------------------------- Projects --


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    return _now()


@dataclass
class ProjectFile:
    id: str
    name: str
    language: str  # html, css, javascript
    content: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "language": self.language,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectFile":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", "index.html"),
            language=data.get("language", "html"),
            content=data.get("content", ""),
            created_at=_parse_time(data.get("createdAt")),
            updated_at=_parse_time(data.get("updatedAt")),
        )


@dataclass
class Project:
    id: str
    name: str
    description: Optional[str] = None
    files: List[ProjectFile] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    is_public: bool = False
    owner_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "files": [f.to_dict() for f in self.files],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "isPublic": self.is_public,
            "ownerId": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        files: List[ProjectFile] = []
        for file_data in data.get("files", []):
            if isinstance(file_data, dict):
                files.append(ProjectFile.from_dict(file_data))
        return cls(
            id=data.get("id", ""),
            name=data.get("name", "My Site"),
            description=data.get("description"),
            files=files,
            created_at=_parse_time(data.get("createdAt")),
            updated_at=_parse_time(data.get("updatedAt")),
            is_public=bool(data.get("isPublic", False)),
            owner_id=data.get("ownerId"),
        )
