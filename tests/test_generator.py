from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylecraft.core.generator import generated_markup, render_markup, safe_tag
from stylecraft.core.models import StyleState


def test_render_markup_plain_element() -> None:
    state = StyleState(element_tag="h2", text_content="Layers")
    assert render_markup(state, " pb-3 pl-2 ") == '<h2 class="pb-3 pl-2">Layers</h2>'


def test_render_markup_wraps_link() -> None:
    state = StyleState(element_tag="span", text_content="Docs", link="https://example.com/docs")
    assert render_markup(state, "pt-1") == (
        '<a href="https://example.com/docs">\n  <span class="pt-1">Docs</span>\n</a>'
    )


def test_render_markup_escapes_text_and_attributes() -> None:
    state = StyleState(element_tag="p", text_content="<b>Tom & Jerry</b>", link='x" onclick="y')
    html = render_markup(state, 'a"b')
    assert "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;" in html
    assert 'onclick="y' not in html
    assert 'class="a&#34;b"' in html


def test_safe_tag() -> None:
    assert safe_tag("H2") == "h2"
    assert safe_tag("my-widget") == "my-widget"
    assert safe_tag("img onerror=alert(1)") == "img"
    assert safe_tag("") == "div"
    assert safe_tag("<script>") == "div"


def test_generated_markup_prefers_captured_classes() -> None:
    state = StyleState(element_tag="p", text_content="Hi", tailwind_classes="text-lg font-bold")
    assert generated_markup(state, "pt-4") == '<p class="text-lg font-bold">Hi</p>'


def test_generated_markup_falls_back_to_compiled_classes() -> None:
    state = StyleState(element_tag="p", text_content="Hi")
    assert generated_markup(state, "pt-4") == '<p class="pt-4">Hi</p>'
