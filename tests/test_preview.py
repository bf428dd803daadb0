from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylecraft.ui.preview import UNBOUNDED_WIDTH, build_preview_document, device_width, preview_sources


@pytest.mark.parametrize(
    "name, width",
    [("Mobile", 375), ("Tablet", 768), ("Desktop", UNBOUNDED_WIDTH), ("Watch", UNBOUNDED_WIDTH)],
)
def test_device_width(name: str, width: int) -> None:
    assert device_width(name) == width


def test_preview_sources_keep_first_per_language() -> None:
    files = [("html", "a"), ("css", "b"), ("html", "c")]
    assert preview_sources(files) == {"html": "a", "css": "b"}


def test_document_injects_style_and_script_into_full_page() -> None:
    html = "<html><head></head><body><p>x</p></body></html>"
    doc = build_preview_document({"html": html, "css": "p {}", "javascript": "go()"}, script="inspect()")
    assert "<style>p {}</style>\n</head>" in doc
    assert doc.index("go()") < doc.index("inspect()") < doc.index("</body>")


def test_document_from_fragment() -> None:
    doc = build_preview_document({"html": "<p>x</p>"})
    assert doc.startswith("<style></style><p>x</p>")
    assert doc.endswith("</script>")
