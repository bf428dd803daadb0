"""Messages from the preview surface and their mapping onto inspector state."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from PyQt6 import QtCore

from .core.models import TEXT_ALIGNMENTS, Spacing, StyleState, is_number
from .exceptions import BridgeMessageError

logger = logging.getLogger(__name__)

CONSOLE_PREFIX = "stylecraft:"

ELEMENT_SELECTED = "ELEMENT_SELECTED"
PREVIEW_READY = "PREVIEW_READY"
PREVIEW_ERROR = "PREVIEW_ERROR"

_ALIGN_ALIASES = {"start": "left", "end": "right"}


@dataclass(frozen=True)
class ElementSelected:
    element_id: Optional[str] = None
    element_tag: Optional[str] = None
    text_content: Optional[str] = None
    tailwind_classes: Optional[str] = None
    padding: Dict[str, Any] = field(default_factory=dict)
    margin: Dict[str, Any] = field(default_factory=dict)
    typography: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PreviewReady:
    pass


@dataclass(frozen=True)
class PreviewError:
    error_type: str
    message: str
    stack: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None


BridgeEvent = Union[ElementSelected, PreviewReady, PreviewError]


def _opt_str(data: Mapping, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _opt_int(data: Mapping, key: str) -> Optional[int]:
    value = data.get(key)
    return int(value) if is_number(value) else None


def _group(data: Mapping, key: str) -> Dict[str, Any]:
    value = data.get(key)
    return dict(value) if isinstance(value, Mapping) else {}


def parse_message(payload: Union[str, bytes, Mapping]) -> BridgeEvent:
    """Turn a raw preview message (dict or JSON text) into a bridge event."""
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise BridgeMessageError(f"Preview message is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise BridgeMessageError("Preview message must be an object")

    kind = payload.get("type")
    if kind == ELEMENT_SELECTED:
        return ElementSelected(
            element_id=_opt_str(payload, "elementId"),
            element_tag=_opt_str(payload, "elementTag"),
            text_content=_opt_str(payload, "textContent"),
            tailwind_classes=_opt_str(payload, "tailwindClasses"),
            padding=_group(payload, "padding"),
            margin=_group(payload, "margin"),
            typography=_group(payload, "typography"),
        )
    if kind == PREVIEW_READY:
        return PreviewReady()
    if kind == PREVIEW_ERROR:
        return PreviewError(
            error_type=_opt_str(payload, "errorType") or "Error",
            message=_opt_str(payload, "message") or "",
            stack=_opt_str(payload, "stack"),
            line=_opt_int(payload, "line"),
            column=_opt_int(payload, "column"),
        )
    raise BridgeMessageError(f"Unknown preview message type: {kind!r}")


def _pixels(value: Any) -> Optional[str]:
    if is_number(value):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _merge_spacing(current: Spacing, reported: Mapping) -> Spacing:
    values = {}
    for side in ("top", "right", "bottom", "left"):
        text = _pixels(reported.get(side))
        if text is not None:
            values[side] = text
    return replace(current, **values)


def selection_patch(
    event: ElementSelected,
    current: StyleState,
    mode: str = "merge",
    max_text_length: int = 200,
) -> StyleState:
    """Return the snapshot that results from selecting ``event``'s element.

    Only the fields the preview reported are written. In ``merge`` mode they
    land on ``current``; in ``reset`` mode on a fresh default snapshot that
    keeps the active breakpoint.
    """
    base = current if mode == "merge" else StyleState(breakpoint=current.breakpoint)
    values: Dict[str, Any] = {}

    if event.element_id is not None:
        values["element_id"] = event.element_id
    if event.element_tag is not None:
        values["element_tag"] = event.element_tag.lower()
    if event.text_content is not None:
        values["text_content"] = event.text_content[:max_text_length]
    if event.tailwind_classes is not None:
        values["tailwind_classes"] = event.tailwind_classes

    if event.padding:
        values["padding"] = _merge_spacing(base.padding, event.padding)
    if event.margin:
        values["margin"] = _merge_spacing(base.margin, event.margin)

    if event.typography:
        typo = base.typography
        font_size = _pixels(event.typography.get("fontSize"))
        if font_size is not None:
            typo = replace(typo, font_size=font_size)
        font_weight = _pixels(event.typography.get("fontWeight"))
        if font_weight is not None:
            typo = replace(typo, font_weight=font_weight)
        align = event.typography.get("textAlign")
        if isinstance(align, str):
            align = _ALIGN_ALIASES.get(align, align)
            if align in TEXT_ALIGNMENTS:
                typo = replace(typo, text_align=align)
        values["typography"] = typo

    return replace(base, **values)


class SelectionBridge(QtCore.QObject):
    """Routes preview messages to Qt signals.

    Malformed messages are logged and dropped so a misbehaving preview page
    cannot raise into the event loop.
    """

    elementSelected = QtCore.pyqtSignal(object)
    previewReady = QtCore.pyqtSignal()
    previewError = QtCore.pyqtSignal(object)

    def handle_message(self, payload: Union[str, bytes, Mapping]) -> Optional[BridgeEvent]:
        try:
            event = parse_message(payload)
        except BridgeMessageError as exc:
            logger.warning(f"Dropping preview message: {exc}")
            return None

        if isinstance(event, ElementSelected):
            self.elementSelected.emit(event)
        elif isinstance(event, PreviewReady):
            self.previewReady.emit()
        else:
            logger.info(f"Preview error {event.error_type}: {event.message} (line {event.line})")
            self.previewError.emit(event)
        return event

    def handle_console_message(self, message: str) -> Optional[BridgeEvent]:
        if not message.startswith(CONSOLE_PREFIX):
            return None
        return self.handle_message(message[len(CONSOLE_PREFIX):])


INSPECTOR_SCRIPT = """
(function() {
  function send(data) { console.log('%(prefix)s' + JSON.stringify(data)); }
  function px(value, fallback) { var n = parseInt(value); return isNaN(n) ? fallback : n; }

  window.addEventListener('error', function(e) {
    send({type: '%(error)s', errorType: (e.error && e.error.name) || 'Error',
          message: e.message || '', stack: (e.error && e.error.stack) || null,
          line: e.lineno || null, column: e.colno || null});
  });

  window.addEventListener('click', function(e) {
    e.preventDefault();
    e.stopPropagation();
    var el = e.target;
    var style = window.getComputedStyle(el);
    send({
      type: '%(selected)s',
      elementId: el.id || 'aura-' + Math.random().toString(36).substr(2, 9),
      elementTag: el.tagName.toLowerCase(),
      textContent: (el.innerText || '').slice(0, %(max_text)d),
      tailwindClasses: typeof el.className === 'string' ? el.className : '',
      padding: {top: px(style.paddingTop, 0), bottom: px(style.paddingBottom, 0),
                left: px(style.paddingLeft, 0), right: px(style.paddingRight, 0)},
      margin: {top: px(style.marginTop, 0), bottom: px(style.marginBottom, 0),
               left: px(style.marginLeft, 0), right: px(style.marginRight, 0)},
      typography: {fontSize: px(style.fontSize, 16), fontWeight: style.fontWeight,
                   textAlign: style.textAlign, lineHeight: style.lineHeight}
    });
  }, true);

  window.addEventListener('mouseover', function(e) {
    e.target.style.outline = '2px solid #6366f1';
    e.target.style.outlineOffset = '-2px';
  });
  window.addEventListener('mouseout', function(e) { e.target.style.outline = ''; });

  send({type: '%(ready)s'});
})();
"""


def inspector_script(max_text_length: int = 200) -> str:
    return INSPECTOR_SCRIPT % {
        "prefix": CONSOLE_PREFIX,
        "error": PREVIEW_ERROR,
        "selected": ELEMENT_SELECTED,
        "ready": PREVIEW_READY,
        "max_text": max_text_length,
    }
