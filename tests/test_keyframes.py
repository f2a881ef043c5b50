"""Tests for the keyframe store and the built-in curves."""

import pytest

from deeper_tiles.effects.keyframes import (
    KeyframeStop,
    KeyframeStore,
    appear_fade_stops,
    vibrate_key,
    vibrate_stops,
    word_fade_key,
    word_fade_stops,
)


class TestKeyframeStore:
    def test_builder_called_once_per_key(self) -> None:
        store = KeyframeStore()
        calls = []

        def builder():
            calls.append(True)
            return appear_fade_stops()

        first = store.ensure("fade", builder)
        second = store.ensure("fade", builder)

        assert len(calls) == 1
        assert first is second
        assert len(store) == 1
        assert "fade" in store

    def test_stops_are_sorted_by_percent(self) -> None:
        store = KeyframeStore()
        descriptor = store.ensure(
            "unsorted",
            lambda: [KeyframeStop(100, opacity=0.0), KeyframeStop(0, opacity=1.0)],
        )
        assert [stop.percent for stop in descriptor.stops] == [0, 100]

    def test_sample_interpolates_opacity(self) -> None:
        store = KeyframeStore()
        store.ensure("fade", appear_fade_stops)

        assert store.sample("fade", 0.0).opacity == 1.0
        assert store.sample("fade", 0.5).opacity == pytest.approx(0.5)
        assert store.sample("fade", 1.0).opacity == 0.0

    def test_sample_interpolates_translate(self) -> None:
        store = KeyframeStore()
        store.ensure("buzz", lambda: vibrate_stops(4))

        assert store.sample("buzz", 0.12).translate == pytest.approx((4.0, -2.0))
        assert store.sample("buzz", 0.0).translate == pytest.approx((0.0, 0.0))

    def test_unknown_key_samples_empty(self) -> None:
        state = KeyframeStore().sample("missing", 0.5)
        assert state.opacity is None
        assert state.translate is None


class TestWordFade:
    def test_first_word_visible_in_first_slot_only(self) -> None:
        store = KeyframeStore()
        store.ensure("w0", lambda: word_fade_stops(0, 2))

        assert store.sample("w0", 0.0).opacity == 1.0
        assert store.sample("w0", 0.25).opacity == pytest.approx(0.5)
        assert store.sample("w0", 0.75).opacity == 0.0

    def test_later_word_invisible_before_its_slot(self) -> None:
        store = KeyframeStore()
        store.ensure("w1", lambda: word_fade_stops(1, 2))

        assert store.sample("w1", 0.25).opacity == 0.0
        assert store.sample("w1", 0.51).opacity == pytest.approx(1.0, abs=0.02)
        assert store.sample("w1", 0.75).opacity == pytest.approx(0.5, abs=0.01)

    def test_middle_word_returns_to_invisible(self) -> None:
        stops = word_fade_stops(1, 3)
        assert stops[-1] == KeyframeStop(100, opacity=0.0)
        assert stops[-2].percent == pytest.approx(66.67)


def test_keys() -> None:
    assert word_fade_key(1, 3) == "tile-word-fade-1-of-3"
    assert vibrate_key(4, 40) == "tile-vibrate-a4-s40"
    assert vibrate_key(1.5, 50) == "tile-vibrate-a1.5-s50"
