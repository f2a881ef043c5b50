"""Tests for the deterministic frame loop."""

import pytest

from deeper_tiles.event_loop import FrameLoop


class TestTimers:
    def test_timer_fires_when_due(self, loop: FrameLoop) -> None:
        fired = []
        loop.set_timeout(lambda: fired.append(loop.now_ms), 100)

        loop.advance(99)
        assert fired == []

        loop.advance(1)
        assert fired == [100]

    def test_zero_delay_fires_on_next_advance(self, loop: FrameLoop) -> None:
        fired = []
        loop.set_timeout(lambda: fired.append(True), 0)

        loop.advance(0)
        assert fired == [True]

    def test_same_instant_timers_fire_in_scheduling_order(self, loop: FrameLoop) -> None:
        order = []
        loop.set_timeout(lambda: order.append("a"), 50)
        loop.set_timeout(lambda: order.append("b"), 50)

        loop.advance(50)
        assert order == ["a", "b"]

    def test_cleared_timer_never_fires(self, loop: FrameLoop) -> None:
        fired = []
        timer_id = loop.set_timeout(lambda: fired.append(True), 10)
        assert loop.pending_timers() == 1

        loop.clear_timeout(timer_id)
        loop.advance(100)

        assert fired == []
        assert loop.pending_timers() == 0

    def test_clear_timeout_ignores_unknown_ids(self, loop: FrameLoop) -> None:
        loop.clear_timeout(None)
        loop.clear_timeout(12345)
        assert loop.pending_timers() == 0

    def test_timer_scheduled_inside_callback_fires_in_same_advance(self, loop: FrameLoop) -> None:
        fired = []

        def first() -> None:
            fired.append(loop.now_ms)
            loop.set_timeout(lambda: fired.append(loop.now_ms), 20)

        loop.set_timeout(first, 10)
        loop.advance(100)

        assert fired == [10, 30]
        assert loop.now_ms == 100


class TestFrames:
    def test_frames_fire_on_frame_boundaries(self, loop: FrameLoop) -> None:
        stamps = []
        loop.request_frame(stamps.append)

        loop.advance(32)
        assert stamps == []

        loop.advance(1)
        assert stamps == [33]

    def test_frame_requested_during_frame_runs_next_frame(self, loop: FrameLoop) -> None:
        stamps = []

        def tick(timestamp: float) -> None:
            stamps.append(timestamp)
            if len(stamps) < 3:
                loop.request_frame(tick)

        loop.request_frame(tick)
        loop.advance(1000)

        assert stamps == [33, 66, 99]

    def test_timers_fire_before_frames_at_same_instant(self, loop: FrameLoop) -> None:
        order = []
        loop.request_frame(lambda _ts: order.append("frame"))
        loop.set_timeout(lambda: order.append("timer"), 33)

        loop.advance(33)
        assert order == ["timer", "frame"]

    def test_frame_requested_by_timer_at_frame_instant_still_fires(self, loop: FrameLoop) -> None:
        stamps = []
        loop.set_timeout(lambda: loop.request_frame(stamps.append), 33)

        loop.advance(33)
        assert stamps == [33]

    def test_cancelled_frame_does_not_fire(self, loop: FrameLoop) -> None:
        stamps = []
        frame_id = loop.request_frame(stamps.append)
        loop.cancel_frame(frame_id)

        loop.advance(100)
        assert stamps == []
        assert loop.pending_frames() == 0

    def test_after_layout_waits_two_frames(self, loop: FrameLoop) -> None:
        fired = []
        loop.after_layout(lambda: fired.append(loop.now_ms))

        loop.advance(33)
        assert fired == []

        loop.advance(33)
        assert fired == [66]


def test_fps_must_be_positive() -> None:
    with pytest.raises(ValueError):
        FrameLoop(fps=0)


def test_frame_duration_is_integer_milliseconds() -> None:
    assert FrameLoop(fps=30).frame_duration == 33
    assert FrameLoop(fps=25).frame_duration == 40


def test_fps_capped_at_one_millisecond_frames() -> None:
    assert FrameLoop(fps=1000).frame_duration == 1
    with pytest.raises(ValueError, match="between 1 and 1000"):
        FrameLoop(fps=1001)
