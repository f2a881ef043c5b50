"""Deterministic single-threaded event loop for timers and frame callbacks."""

import heapq
import math
from dataclasses import dataclass, field
from typing import Callable

from .constants import DEFAULT_FPS, MAX_FPS

TimerCallback = Callable[[], None]
FrameCallback = Callable[[float], None]


@dataclass(order=True)
class _Timer:
    due_ms: float
    seq: int
    timer_id: int = field(compare=False)
    callback: TimerCallback = field(compare=False)


class FrameLoop:
    """
    Cooperative event loop with one-shot timers and per-frame callbacks.

    Time only moves when ``advance`` is called, which makes every effect
    reproducible in tests and previews. Frames fire at multiples of
    ``frame_duration`` milliseconds.
    """

    def __init__(self, fps: int = DEFAULT_FPS):
        """
        Initialize the loop at time zero.

        Args:
            fps: Frame callbacks per second of simulated time
        """
        if not 0 < fps <= MAX_FPS:
            raise ValueError(f"fps must be between 1 and {MAX_FPS}")
        self.fps = fps
        self.frame_duration = 1000 // fps
        self.now_ms: float = 0.0
        self._timers: list[_Timer] = []
        self._live_timers: set[int] = set()
        self._frame_callbacks: dict[int, FrameCallback] = {}
        self._last_frame_ms: float = 0.0
        self._next_id = 1
        self._seq = 0

    def _allocate_id(self) -> int:
        handle_id = self._next_id
        self._next_id += 1
        return handle_id

    def set_timeout(self, callback: TimerCallback, delay_ms: float = 0) -> int:
        """Schedule ``callback`` to run once after ``delay_ms`` milliseconds."""
        timer_id = self._allocate_id()
        self._seq += 1
        due = self.now_ms + max(0.0, delay_ms)
        heapq.heappush(self._timers, _Timer(due, self._seq, timer_id, callback))
        self._live_timers.add(timer_id)
        return timer_id

    def clear_timeout(self, timer_id: int | None) -> None:
        """Cancel a pending timer. Unknown or fired ids are ignored."""
        self._live_timers.discard(timer_id)

    def request_frame(self, callback: FrameCallback) -> int:
        """Run ``callback(timestamp_ms)`` on the next frame."""
        frame_id = self._allocate_id()
        self._frame_callbacks[frame_id] = callback
        return frame_id

    def cancel_frame(self, frame_id: int | None) -> None:
        """Cancel a pending frame callback."""
        if frame_id is not None:
            self._frame_callbacks.pop(frame_id, None)

    def after_layout(self, callback: TimerCallback) -> None:
        """Run ``callback`` two frames from now, once layout has settled."""
        self.request_frame(lambda _ts: self.request_frame(lambda _ts2: callback()))

    def pending_timers(self) -> int:
        """Number of timers still waiting to fire."""
        return len(self._live_timers)

    def pending_frames(self) -> int:
        """Number of frame callbacks waiting for the next frame."""
        return len(self._frame_callbacks)

    def advance(self, delta_ms: float) -> None:
        """
        Move simulated time forward, firing everything that comes due.

        Timers due at the same instant fire in scheduling order and before the
        frame callbacks of that instant.

        Args:
            delta_ms: Milliseconds to advance
        """
        target = self.now_ms + max(0.0, delta_ms)
        while True:
            next_timer = self._next_timer_due()
            next_frame = self._next_frame_time() if self._frame_callbacks else None
            candidates = [t for t in (next_timer, next_frame) if t is not None and t <= target]
            if not candidates:
                break
            moment = min(candidates)
            self.now_ms = moment
            if next_timer is not None and next_timer == moment:
                self._fire_next_timer()
            else:
                self._fire_frame()
        self.now_ms = target

    def _next_timer_due(self) -> float | None:
        while self._timers and self._timers[0].timer_id not in self._live_timers:
            heapq.heappop(self._timers)
        return self._timers[0].due_ms if self._timers else None

    def _next_frame_time(self) -> float:
        next_frame = (int(self._last_frame_ms // self.frame_duration) + 1) * self.frame_duration
        if next_frame < self.now_ms:
            next_frame = math.ceil(self.now_ms / self.frame_duration) * self.frame_duration
        return next_frame

    def _fire_next_timer(self) -> None:
        timer = heapq.heappop(self._timers)
        self._live_timers.discard(timer.timer_id)
        timer.callback()

    def _fire_frame(self) -> None:
        # Callbacks requested while running belong to the following frame
        self._last_frame_ms = self.now_ms
        callbacks = list(self._frame_callbacks.values())
        self._frame_callbacks.clear()
        for callback in callbacks:
            callback(self.now_ms)
