"""Markup helpers for the inspected element."""

from __future__ import annotations

import re

from jinja2 import DictLoader, Environment, select_autoescape

from .models import StyleState

_TEMPLATES = {
    "element.html": '<{{ tag }} class="{{ classes }}">{{ content }}</{{ tag }}>',
    "linked.html": (
        '<a href="{{ link }}">\n'
        '  <{{ tag }} class="{{ classes }}">{{ content }}</{{ tag }}>\n'
        "</a>"
    ),
}

_TAG_RE = re.compile(r"[a-z][a-z0-9-]*")


def _env() -> Environment:
    return Environment(
        loader=DictLoader(_TEMPLATES),
        autoescape=select_autoescape(["html", "xml"]),
    )


_environment = _env()


def safe_tag(tag: str) -> str:
    match = _TAG_RE.match((tag or "").strip().lower())
    return match.group(0) if match else "div"


def render_markup(state: StyleState, classes: str) -> str:
    """Render ``state`` as an HTML fragment using ``classes`` verbatim.

    Text, link and class values are escaped by the template environment.
    """
    name = "linked.html" if state.link else "element.html"
    return _environment.get_template(name).render(
        tag=safe_tag(state.element_tag),
        classes=classes.strip(),
        content=state.text_content,
        link=state.link,
    )


def generated_markup(state: StyleState, compiled: str) -> str:
    # Classes captured from the element win over the compiled output.
    return render_markup(state, state.tailwind_classes or compiled)
