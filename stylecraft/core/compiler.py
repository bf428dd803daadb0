"""Compile an inspector snapshot into a utility-class string."""

from __future__ import annotations

from typing import List

from .models import StyleState


def breakpoint_prefix(breakpoint: str) -> str:
    if breakpoint in ("auto", "base", ""):
        return ""
    return f"{breakpoint}:"


def _num(value: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _fraction(percent: float) -> str:
    return f"{percent / 100:.2f}"


def compile_tokens(state: StyleState) -> List[str]:
    """Return the ordered, duplicate-free class tokens for ``state``.

    A token is only emitted when its property differs from the no-op value:
    empty strings, zero offsets/angles, 100 for scale and opacity, and
    ``left`` for text alignment. Every token carries the same breakpoint
    prefix.
    """
    bp = breakpoint_prefix(state.breakpoint)
    raw: List[str] = []

    for name, spacing in (("p", state.padding), ("m", state.margin)):
        for side in ("top", "bottom", "left", "right"):
            value = getattr(spacing, side)
            if value:
                raw.append(f"{name}{side[0]}-{value}")

    size = state.size
    if size.width:
        raw.append(f"w-[{size.width}px]")
    if size.height:
        raw.append(f"h-[{size.height}px]")
    if size.max_width:
        raw.append(f"max-w-[{size.max_width}px]")
    if size.max_height:
        raw.append(f"max-h-[{size.max_height}px]")

    typo = state.typography
    if typo.font_size:
        raw.append(f"text-[{typo.font_size}px]")
    if typo.font_weight:
        raw.append(f"font-{typo.font_weight}")
    if typo.letter_spacing:
        raw.append(f"tracking-{typo.letter_spacing}")
    if typo.line_height:
        raw.append(f"leading-{typo.line_height}")
    if typo.text_align:
        raw.append(f"text-{typo.text_align}")

    t = state.transforms
    if t.translate_x != 0:
        raw.append(f"translate-x-[{_num(t.translate_x)}px]")
    if t.translate_y != 0:
        raw.append(f"translate-y-[{_num(t.translate_y)}px]")
    if t.rotate != 0:
        raw.append(f"rotate-[{_num(t.rotate)}deg]")
    if t.scale != 100:
        raw.append(f"scale-[{_fraction(t.scale)}]")
    if t.skew_x != 0:
        raw.append(f"skew-x-[{_num(t.skew_x)}deg]")
    if t.skew_y != 0:
        raw.append(f"skew-y-[{_num(t.skew_y)}deg]")

    t3 = state.transforms3d
    if t3.rotate_x != 0:
        raw.append(f"[transform:rotateX({_num(t3.rotate_x)}deg)]")
    if t3.rotate_y != 0:
        raw.append(f"[transform:rotateY({_num(t3.rotate_y)}deg)]")
    if t3.rotate_z != 0:
        raw.append(f"[transform:rotateZ({_num(t3.rotate_z)}deg)]")
    if t3.perspective != 0:
        raw.append(f"[perspective:{_num(t3.perspective * 100)}px]")

    if state.opacity != 100:
        raw.append(f"opacity-[{_fraction(state.opacity)}]")

    if state.blur:
        raw.append(f"blur-[{_num(state.blur)}px]")
    if state.backdrop_blur:
        raw.append(f"backdrop-blur-[{_num(state.backdrop_blur)}px]")

    if state.background.color:
        raw.append(f"bg-[{state.background.color}]")

    border = state.border
    if border.color:
        raw.append(f"border-[{border.color}]")
    if border.width:
        raw.append(f"border-[{border.width}px]")
    if border.radius:
        raw.append(f"rounded-[{border.radius}px]")

    tokens: List[str] = []
    seen = set()
    for token in raw:
        token = f"{bp}{token}"
        if token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens


def compile_classes(state: StyleState) -> str:
    return " ".join(compile_tokens(state))
