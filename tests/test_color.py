"""Tests for text color resolution."""

import random
import re

import pytest

from deeper_tiles.effects.color import (
    DARK_OUTLINE,
    DARK_TEXT,
    LIGHT_OUTLINE,
    LIGHT_TEXT,
    ResolvedColor,
    apply_text_color,
    parse_color,
    perceived_luminance,
    resolve_text_color,
)
from deeper_tiles.render import Label

RGB_PATTERN = re.compile(r"rgb\((\d+),(\d+),(\d+)\)")


class TestAlternate:
    def test_even_cycles_are_light_on_dark_outline(self) -> None:
        assert resolve_text_color("alternate", 0) == ResolvedColor(LIGHT_TEXT, DARK_OUTLINE)

    def test_odd_cycles_are_dark_on_light_outline(self) -> None:
        assert resolve_text_color("alternate", 1) == ResolvedColor(DARK_TEXT, LIGHT_OUTLINE)

    def test_period_is_two(self) -> None:
        for index in range(20):
            assert resolve_text_color("alternate", index) == resolve_text_color("alternate", index + 2)


class TestRandom:
    def test_outline_contrasts_with_luminance(self) -> None:
        rng = random.Random(7)
        for _ in range(1000):
            resolved = resolve_text_color("random", 0, rng)
            match = RGB_PATTERN.fullmatch(resolved.color)
            assert match is not None
            red, green, blue = (int(part) for part in match.groups())
            assert all(0 <= channel <= 255 for channel in (red, green, blue))
            expected = DARK_OUTLINE if perceived_luminance(red, green, blue) > 0.5 else LIGHT_OUTLINE
            assert resolved.outline == expected

    def test_seeded_rng_is_reproducible(self) -> None:
        first = [resolve_text_color("random", i, random.Random(3)) for i in range(3)]
        second = [resolve_text_color("random", i, random.Random(3)) for i in range(3)]
        assert first == second


def test_literal_color_passes_through_without_outline() -> None:
    assert resolve_text_color("#ff0000", 5) == ResolvedColor("#ff0000", None)


def test_missing_mode_leaves_style_untouched() -> None:
    label = Label("Sink")
    label.color = "#123456"
    label.outline = LIGHT_OUTLINE

    apply_text_color(label, resolve_text_color(None, 0))

    assert label.color == "#123456"
    assert label.outline == LIGHT_OUTLINE


def test_apply_sets_color_and_outline() -> None:
    label = Label("Sink")
    apply_text_color(label, resolve_text_color("alternate", 1))
    assert label.color == DARK_TEXT
    assert label.outline == LIGHT_OUTLINE


def test_luminance_extremes() -> None:
    assert perceived_luminance(0, 0, 0) == 0
    assert perceived_luminance(255, 255, 255) == pytest.approx(1)


def test_parse_color() -> None:
    assert parse_color("#ff0000") == (255, 0, 0)
    assert parse_color("rgb(10, 20, 30)") == (10, 20, 30)
    assert parse_color("not-a-color") is None
    assert parse_color(None) is None
