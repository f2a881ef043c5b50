"""Runtime handle owning the scheduling resources of one running effect."""

import logging
from dataclasses import dataclass
from typing import Callable

from ..event_loop import FrameCallback, FrameLoop, TimerCallback

logger = logging.getLogger(__name__)


@dataclass
class CycleState:
    """Loop counter used to detect the start of a new effect cycle."""

    cycle_index: int = -1
    last_cycle_boundary: float | None = None

    def advance(self, now_ms: float) -> int:
        """Begin the next cycle and return its index."""
        self.cycle_index += 1
        self.last_cycle_boundary = now_ms
        return self.cycle_index

    def enter(self, cycle: int, now_ms: float) -> bool:
        """Move to ``cycle`` if it is newer than the current one."""
        if cycle <= self.cycle_index:
            return False
        self.cycle_index = cycle
        self.last_cycle_boundary = now_ms
        return True


class EffectHandle:
    """
    Exclusive owner of the timers and frame callbacks of one effect instance.

    Every callback scheduled through the handle is tracked until it fires, so
    ``stop`` can cancel whatever is still pending. After ``stop`` the handle
    refuses new work.
    """

    def __init__(self, loop: FrameLoop, name: str = "effect"):
        self.loop = loop
        self.name = name
        self.cycle = CycleState()
        self.stopped = False
        self._timer_ids: set[int] = set()
        self._frame_ids: set[int] = set()
        self._on_stop: list[Callable[[], None]] = []

    @property
    def now_ms(self) -> float:
        return self.loop.now_ms

    def set_timeout(self, callback: TimerCallback, delay_ms: float) -> int | None:
        """Schedule a one-shot phase transition owned by this handle."""
        if self.stopped:
            return None
        timer_id: int | None = None

        def fire() -> None:
            self._timer_ids.discard(timer_id)
            if not self.stopped:
                callback()

        timer_id = self.loop.set_timeout(fire, delay_ms)
        self._timer_ids.add(timer_id)
        return timer_id

    def request_frame(self, callback: FrameCallback) -> int | None:
        """Schedule a callback for the next frame owned by this handle."""
        if self.stopped:
            return None
        frame_id: int | None = None

        def fire(timestamp: float) -> None:
            self._frame_ids.discard(frame_id)
            if not self.stopped:
                callback(timestamp)

        frame_id = self.loop.request_frame(fire)
        self._frame_ids.add(frame_id)
        return frame_id

    def on_stop(self, callback: Callable[[], None]) -> None:
        """Register cleanup to run when the handle is stopped."""
        self._on_stop.append(callback)

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks still owned by this handle."""
        return len(self._timer_ids) + len(self._frame_ids)

    def stop(self) -> None:
        """Release every pending timer and frame callback. Idempotent."""
        if self.stopped:
            return
        self.stopped = True
        for timer_id in self._timer_ids:
            self.loop.clear_timeout(timer_id)
        for frame_id in self._frame_ids:
            self.loop.cancel_frame(frame_id)
        self._timer_ids.clear()
        self._frame_ids.clear()
        for callback in self._on_stop:
            callback()
        self._on_stop.clear()
        logger.debug("Stopped %s after %d cycles", self.name, self.cycle.cycle_index + 1)
