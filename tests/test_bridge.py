from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylecraft.bridge import (
    CONSOLE_PREFIX,
    ElementSelected,
    PreviewError,
    PreviewReady,
    SelectionBridge,
    inspector_script,
    parse_message,
    selection_patch,
)
from stylecraft.core.models import Border, Spacing, StyleState, Transform2D, Typography, default_snapshot
from stylecraft.exceptions import BridgeMessageError

SELECTED = {
    "type": "ELEMENT_SELECTED",
    "elementId": "cta",
    "elementTag": "BUTTON",
    "textContent": "Sign up",
    "tailwindClasses": "px-4 py-2",
    "padding": {"top": 8, "bottom": 8, "left": 16, "right": 16},
    "margin": {"top": 0, "bottom": 12.0, "left": 0, "right": 0},
    "typography": {"fontSize": 14, "fontWeight": "500", "textAlign": "start", "lineHeight": "20px"},
}


def test_parse_element_selected() -> None:
    event = parse_message(SELECTED)
    assert isinstance(event, ElementSelected)
    assert event.element_id == "cta"
    assert event.tailwind_classes == "px-4 py-2"
    assert event.padding["left"] == 16


def test_parse_accepts_json_text() -> None:
    assert isinstance(parse_message(json.dumps({"type": "PREVIEW_READY"})), PreviewReady)


def test_parse_preview_error() -> None:
    event = parse_message(
        {"type": "PREVIEW_ERROR", "errorType": "TypeError", "message": "x is undefined", "line": 3, "column": 9}
    )
    assert event == PreviewError(error_type="TypeError", message="x is undefined", line=3, column=9)


@pytest.mark.parametrize("payload", ["{oops", "[]", {"type": "RESIZE"}, {"elementId": "x"}])
def test_parse_rejects_bad_messages(payload) -> None:
    with pytest.raises(BridgeMessageError):
        parse_message(payload)


def test_selection_patch_stringifies_reported_pixels() -> None:
    state = selection_patch(parse_message(SELECTED), default_snapshot())
    assert state.element_tag == "button"
    assert state.padding == Spacing(top="8", right="16", bottom="8", left="16")
    assert state.margin == Spacing(top="0", right="0", bottom="12", left="0")
    assert state.typography.font_size == "14"
    assert state.typography.font_weight == "500"
    assert state.typography.text_align == "left"
    assert state.tailwind_classes == "px-4 py-2"


def test_selection_patch_keeps_unreported_fields() -> None:
    current = StyleState(
        transforms=Transform2D(rotate=20),
        border=Border(radius="4"),
        opacity=70,
        typography=Typography(letter_spacing="wide"),
        padding=Spacing(top="9", left="1"),
    )
    event = ElementSelected(element_id="x", padding={"top": 2})
    state = selection_patch(event, current)
    assert state.transforms.rotate == 20
    assert state.border.radius == "4"
    assert state.opacity == 70
    assert state.typography.letter_spacing == "wide"
    assert state.padding == Spacing(top="2", left="1")


def test_selection_patch_ignores_unknown_alignment() -> None:
    current = StyleState(typography=Typography(text_align="center"))
    event = ElementSelected(typography={"textAlign": "-webkit-match-parent"})
    assert selection_patch(event, current).typography.text_align == "center"


def test_selection_patch_reset_mode() -> None:
    current = StyleState(transforms=Transform2D(rotate=20), breakpoint="sm")
    state = selection_patch(ElementSelected(element_id="y"), current, mode="reset")
    assert state == StyleState(element_id="y", breakpoint="sm")


def test_selection_patch_truncates_text() -> None:
    event = ElementSelected(text_content="x" * 500)
    assert len(selection_patch(event, StyleState(), max_text_length=200).text_content) == 200


def test_bridge_emits_typed_signals() -> None:
    bridge = SelectionBridge()
    selected, ready, errors = [], [], []
    bridge.elementSelected.connect(selected.append)
    bridge.previewReady.connect(lambda: ready.append(True))
    bridge.previewError.connect(errors.append)

    bridge.handle_message(SELECTED)
    bridge.handle_message({"type": "PREVIEW_READY"})
    bridge.handle_message({"type": "PREVIEW_ERROR", "message": "boom"})

    assert selected[0].element_id == "cta"
    assert ready == [True]
    assert errors[0].message == "boom"
    assert errors[0].error_type == "Error"


def test_bridge_drops_malformed_messages(caplog: pytest.LogCaptureFixture) -> None:
    bridge = SelectionBridge()
    assert bridge.handle_message("not json") is None
    assert "Dropping preview message" in caplog.text


def test_console_messages_need_prefix() -> None:
    bridge = SelectionBridge()
    assert bridge.handle_console_message("hello from the page") is None
    event = bridge.handle_console_message(CONSOLE_PREFIX + json.dumps({"type": "PREVIEW_READY"}))
    assert isinstance(event, PreviewReady)


def test_inspector_script_reports_through_console() -> None:
    script = inspector_script(max_text_length=120)
    assert f"console.log('{CONSOLE_PREFIX}'" in script
    assert "ELEMENT_SELECTED" in script
    assert ".slice(0, 120)" in script
