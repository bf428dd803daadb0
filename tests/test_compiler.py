from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylecraft.core.compiler import breakpoint_prefix, compile_classes, compile_tokens
from stylecraft.core.models import (
    Background,
    Border,
    Size,
    Spacing,
    StyleState,
    Transform2D,
    Transform3D,
    Typography,
    default_snapshot,
)


def test_default_state_compiles_to_empty_string() -> None:
    assert compile_classes(StyleState()) == ""


def test_initial_snapshot_emits_padding_top_bottom_left_right() -> None:
    assert compile_classes(default_snapshot()) == "pb-3 pl-2 pr-2"


def test_full_emission_order() -> None:
    state = StyleState(
        padding=Spacing(top="1"),
        margin=Spacing(right="2"),
        size=Size(width="100", max_height="50"),
        typography=Typography(font_size="18", font_weight="bold", text_align="center"),
        transforms=Transform2D(translate_x=10, rotate=45, scale=150),
        transforms3d=Transform3D(rotate_x=30, perspective=5),
        opacity=80,
        blur=4,
        backdrop_blur=8,
        background=Background(color="#fff"),
        border=Border(color="#000", width="2", radius="6"),
    )
    assert compile_tokens(state) == [
        "pt-1",
        "mr-2",
        "w-[100px]",
        "max-h-[50px]",
        "text-[18px]",
        "font-bold",
        "text-center",
        "translate-x-[10px]",
        "rotate-[45deg]",
        "scale-[1.50]",
        "[transform:rotateX(30deg)]",
        "[perspective:500px]",
        "opacity-[0.80]",
        "blur-[4px]",
        "backdrop-blur-[8px]",
        "bg-[#fff]",
        "border-[#000]",
        "border-[2px]",
        "rounded-[6px]",
    ]


def test_spacing_order_within_a_group() -> None:
    state = StyleState(margin=Spacing(top="1", right="2", bottom="3", left="4"))
    assert compile_classes(state) == "mt-1 mb-3 ml-4 mr-2"


def test_typography_and_skew_tokens() -> None:
    state = StyleState(
        typography=Typography(letter_spacing="tight", line_height="snug", text_align="justify"),
        transforms=Transform2D(translate_y=-4, skew_x=10, skew_y=-5),
        transforms3d=Transform3D(rotate_y=15, rotate_z=90),
    )
    assert compile_classes(state) == (
        "tracking-tight leading-snug text-justify translate-y-[-4px] "
        "skew-x-[10deg] skew-y-[-5deg] "
        "[transform:rotateY(15deg)] [transform:rotateZ(90deg)]"
    )


@pytest.mark.parametrize("breakpoint", ["auto", "base"])
def test_mobile_first_breakpoints_have_no_prefix(breakpoint: str) -> None:
    state = StyleState(padding=Spacing(top="4"), opacity=50, breakpoint=breakpoint)
    assert compile_classes(state) == "pt-4 opacity-[0.50]"


def test_named_breakpoint_prefixes_every_token() -> None:
    state = StyleState(
        padding=Spacing(top="4"),
        transforms=Transform2D(rotate=10),
        border=Border(radius="8"),
        breakpoint="md",
    )
    tokens = compile_tokens(state)
    assert tokens == ["md:pt-4", "md:rotate-[10deg]", "md:rounded-[8px]"]
    assert all(token.startswith("md:") for token in tokens)


def test_breakpoint_prefix() -> None:
    assert breakpoint_prefix("auto") == ""
    assert breakpoint_prefix("base") == ""
    assert breakpoint_prefix("2xl") == "2xl:"


def test_no_op_sentinels_are_suppressed() -> None:
    state = StyleState(
        transforms=Transform2D(scale=100),
        opacity=100,
        blur=None,
        backdrop_blur=0,
        typography=Typography(),
    )
    assert compile_classes(state) == ""


def test_whole_floats_render_without_decimal_point() -> None:
    state = StyleState(transforms=Transform2D(translate_x=12.0, rotate=7.5))
    assert compile_classes(state) == "translate-x-[12px] rotate-[7.5deg]"


def test_fractions_use_two_decimals() -> None:
    state = StyleState(transforms=Transform2D(scale=33), opacity=5)
    assert compile_classes(state) == "scale-[0.33] opacity-[0.05]"


def test_out_of_range_values_are_emitted_as_is() -> None:
    assert compile_classes(StyleState(opacity=150)) == "opacity-[1.50]"


def test_duplicate_tokens_are_emitted_once() -> None:
    state = StyleState(border=Border(color="2px", width="2"))
    assert compile_classes(state) == "border-[2px]"


def test_compilation_is_deterministic() -> None:
    state = StyleState(
        padding=Spacing(top="1", left="2"),
        transforms3d=Transform3D(rotate_x=5),
        breakpoint="sm",
    )
    assert compile_classes(state) == compile_classes(state)


def test_explicit_left_alignment_is_emitted() -> None:
    state = StyleState(typography=Typography(text_align="left"), breakpoint="md")
    assert compile_classes(state) == "md:text-left"
