"""Tests for the board actuator: tile lifecycle, resize handling, score and overlay."""

import random

import pytest

from deeper_tiles.board import LOSE_MESSAGE, WIN_MESSAGE, BoardActuator, BoardSnapshot, TileState
from deeper_tiles.config import EffectConfig, TileSpec, TileVisualSpec, default_tile_config
from deeper_tiles.effects.color import DARK_TEXT, LIGHT_TEXT
from deeper_tiles.event_loop import FrameLoop
from deeper_tiles.render import RenderContext


@pytest.fixture
def actuator(loop, measurer) -> BoardActuator:
    return BoardActuator(
        default_tile_config(),
        loop,
        context=RenderContext.classic(),
        measurer=measurer,
        rng=random.Random(0),
    )


class TestTiles:
    def test_render_places_one_view_per_tile(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot.from_ranks([2, 16, 4096]))

        assert [view.rank for view in actuator.tiles] == [2, 16, 4096]
        assert [(view.x, view.y) for view in actuator.tiles] == [(0, 0), (1, 0), (2, 0)]
        assert actuator.tiles[0].handle is not None
        assert actuator.tiles[0].bg_image is not None

    def test_unconfigured_rank_is_static(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot.from_ranks([4096]))
        view = actuator.tiles[0]

        assert view.handle is None
        assert view.layer.text == "Deeper"

    def test_rerender_stops_previous_effects(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.render(BoardSnapshot.from_ranks([2, 128]))
        old_handles = [view.handle for view in actuator.tiles]
        loop.advance(500)

        actuator.render(BoardSnapshot.from_ranks([4]))

        assert all(handle.stopped for handle in old_handles)
        assert all(not handle.pending for handle in old_handles)
        assert len(actuator.tiles) == 1

    def test_clear_container_releases_all_scheduling(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.render(BoardSnapshot.from_ranks([2, 4, 8, 16, 128]))
        loop.advance(1000)

        actuator.clear_container()
        loop.advance(100)

        assert loop.pending_timers() == 0
        assert loop.pending_frames() == 0

    def test_vibrate_descriptor_shared_across_tiles(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot.from_ranks([16, 16, 16]))
        actuator.render(BoardSnapshot.from_ranks([16]))

        vibrate_keys = [key for key in actuator.keyframes.keys() if key.startswith("tile-vibrate")]
        assert vibrate_keys == ["tile-vibrate-a4-s40"]

    def test_labels_fitted_after_layout(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.render(BoardSnapshot.from_ranks([4096]))
        layer = actuator.tiles[0].layer
        assert layer.font_size is None

        loop.advance(66)

        assert layer.font_size == 23

    def test_actuate_defers_to_next_frame(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.actuate(BoardSnapshot.from_ranks([2]))
        assert actuator.tiles == []

        loop.advance(33)
        assert len(actuator.tiles) == 1

    def test_moved_tile_slides_from_previous_position(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        tile = TileState(x=3, y=0, value=2, previous_position=(0, 0))
        actuator.render(BoardSnapshot(tiles=(tile,)))
        view = actuator.tiles[0]

        assert (view.x, view.y) == (0, 0)
        assert view.transition == "moved"

        loop.advance(33)
        assert (view.x, view.y) == (3, 0)

    def test_merged_tile_renders_its_sources(self, actuator: BoardActuator) -> None:
        sources = (TileState(x=0, y=0, value=2), TileState(x=1, y=0, value=2))
        merged = TileState(x=1, y=0, value=4, merged_from=sources)

        actuator.render(BoardSnapshot(tiles=(merged,)))

        assert sorted(view.rank for view in actuator.tiles) == [2, 2, 4]
        assert actuator.tiles[-1].transition == "merged"


def _single_tile_actuator(loop, measurer, effect: EffectConfig) -> BoardActuator:
    config = TileVisualSpec(tiles={2: TileSpec(text="Stop Thinking", effect=effect)})
    return BoardActuator(config, loop, context=RenderContext.classic(), measurer=measurer)


class TestConfiguredEffects:
    def test_flash_blinks_on_rendered_tile(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.render(BoardSnapshot.from_ranks([2]))
        view = actuator.tiles[0]
        label = view.layer.labels[0]
        assert label.text == "Stop Thinking"

        loop.advance(300)
        assert not label.visible

        loop.advance(60)
        assert label.visible
        assert label.color == LIGHT_TEXT

        loop.advance(100)
        assert not label.visible

        loop.advance(100)
        assert label.visible
        assert label.color == DARK_TEXT
        assert view.handle.cycle.cycle_index == 1

    def test_negative_durations_use_defaults(self, loop, measurer) -> None:
        actuator = _single_tile_actuator(
            loop,
            measurer,
            EffectConfig("Flash", {"durationOn": -100, "durationOff": -100, "startDelay": 0}),
        )
        actuator.render(BoardSnapshot.from_ranks([2]))
        label = actuator.tiles[0].layer.labels[0]

        loop.advance(10)
        assert label.visible

        loop.advance(490)
        assert not label.visible

    def test_numeric_string_params(self, loop, measurer) -> None:
        actuator = _single_tile_actuator(
            loop,
            measurer,
            EffectConfig("Vibrate", {"amplitude": "4", "speed": "40", "startDelay": "0"}),
        )
        actuator.render(BoardSnapshot.from_ranks([2]))
        loop.advance(10)

        assert actuator.keyframes.keys() == ["tile-vibrate-a4-s40"]
        assert actuator.tiles[0].layer.labels[0].animation is not None


class TestResize:
    def test_refit_runs_once_after_activity_pauses(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        calls = []
        actuator.refit = lambda: calls.append(loop.now_ms)

        actuator.notify_resize()
        loop.advance(100)
        actuator.notify_resize()
        loop.advance(100)
        actuator.notify_resize()

        loop.advance(149)
        assert calls == []

        loop.advance(1)
        assert calls == [350]

    def test_new_tile_size_relayouts_tiles(self, actuator: BoardActuator, loop: FrameLoop) -> None:
        actuator.render(BoardSnapshot.from_ranks([4096]))
        loop.advance(66)
        layer = actuator.tiles[0].layer

        actuator.notify_resize(tile_size=80)
        loop.advance(150 + 66)

        assert layer.width == 80
        assert layer.font_size == 17
        assert actuator.overlay.width == actuator.context.board_size


class TestScoreAndMessages:
    def test_score_addition_tracks_positive_difference(self, actuator: BoardActuator) -> None:
        actuator.update_score(4)
        assert actuator.score_addition == 4

        actuator.update_score(12)
        assert actuator.score == 12
        assert actuator.score_addition == 8

        actuator.update_score(12)
        assert actuator.score_addition is None

    def test_game_over_message(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot(over=True, terminated=True))
        assert actuator.message == LOSE_MESSAGE
        assert actuator.won is False

        actuator.continue_game()
        assert actuator.message is None

    def test_win_message(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot(won=True, terminated=True))
        assert actuator.message == WIN_MESSAGE


class TestOverlay:
    def test_snapshot_overlay_is_shown_and_fitted(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot(overlay_index=6))
        overlay = actuator.overlay

        assert overlay.visible
        assert overlay.text == "Fuzzy And Floaty More and More"
        assert overlay.opacity == 0.45
        assert 8 <= overlay.font_size <= 72

    def test_out_of_range_overlay_hides(self, actuator: BoardActuator) -> None:
        actuator.show_overlay(0)
        actuator.show_overlay(99)
        assert not actuator.overlay.visible

    def test_snapshot_without_overlay_hides(self, actuator: BoardActuator) -> None:
        actuator.render(BoardSnapshot(overlay_index=0))
        actuator.render(BoardSnapshot())
        assert not actuator.overlay.visible
