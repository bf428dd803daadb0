"""Preview document assembly and device widths."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

# Device name -> preview width in px; None fills the available space.
DEVICE_WIDTHS: Dict[str, Optional[int]] = {
    "Desktop": None,
    "Tablet": 768,
    "Mobile": 375,
}

UNBOUNDED_WIDTH = 16777215  # QWIDGETSIZE_MAX


def device_width(name: str) -> int:
    """Maximum preview width for a device; unknown names are unbounded."""
    width = DEVICE_WIDTHS.get(name)
    return UNBOUNDED_WIDTH if width is None else width


def preview_sources(files: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Pick the first (language, content) pair of each language, in project order."""
    sources: Dict[str, str] = {}
    for language, content in files:
        sources.setdefault(language, content)
    return sources


def build_preview_document(files: Dict[str, str], script: str = "") -> str:
    """Assemble one HTML document from the project's html/css/js sources."""
    content = files.get("html", "")
    style_tag = f"<style>{files.get('css', '')}</style>"
    if "</head>" in content:
        content = content.replace("</head>", f"{style_tag}\n</head>", 1)
    else:
        content = style_tag + content

    script_tag = f"<script>\n{files.get('javascript', '')}\n{script}\n</script>"
    if "</body>" in content:
        content = content.replace("</body>", f"{script_tag}\n</body>", 1)
    else:
        content += script_tag
    return content
