"""RiseFall effect: the label drifts vertically through or within the tile."""

import math
from dataclasses import dataclass

from ..render.nodes import Label, TextLayer
from .base_effect import BaseEffect, EffectParams, TextStyle, duration_param, start_delay_param
from .handle import EffectHandle

DIRECTIONS: tuple[str, ...] = ("rise", "fall", "bounce", "sin")


@dataclass(frozen=True, slots=True)
class TravelRange:
    """
    Pixel values for a label's ``top`` inside a tile.

    ``top_in``/``bottom_in`` keep the label fully visible at the top/bottom
    edge; ``above``/``below`` put it entirely outside the tile.
    """
    top_in: float
    bottom_in: float
    above: float
    below: float
    center: float

    @classmethod
    def for_heights(cls, tile_height: float, label_height: float) -> "TravelRange":
        return cls(
            top_in=0.0,
            bottom_in=tile_height - label_height,
            above=-label_height,
            below=tile_height,
            center=(tile_height - label_height) / 2,
        )


def rise_fall_position(
    elapsed_ms: float, duration_ms: float, direction: str, travel: TravelRange
) -> float:
    """
    Label ``top`` after ``elapsed_ms`` of motion.

    Position is derived from the elapsed time rather than accumulated per
    frame, so frame-rate variance never causes drift.

    Args:
        elapsed_ms: Time since the first animation frame
        duration_ms: Length of one traversal or cycle
        direction: ``rise``, ``fall``, ``bounce`` or ``sin``
        travel: Pixel range of the motion

    Returns:
        The label's top offset in pixels
    """
    if direction == "rise":
        t = (elapsed_ms % duration_ms) / duration_ms
        return travel.below + t * (travel.above - travel.below)
    if direction == "fall":
        t = (elapsed_ms % duration_ms) / duration_ms
        return travel.above + t * (travel.below - travel.above)
    if direction == "bounce":
        # Triangle wave: bottom -> top -> bottom at constant speed
        t = (elapsed_ms % duration_ms) / duration_ms
        fraction = t * 2 if t < 0.5 else 2 - t * 2
        return travel.bottom_in * (1 - fraction) + travel.top_in * fraction
    amplitude = (travel.bottom_in - travel.top_in) / 2
    return travel.center + amplitude * math.cos(2 * math.pi * elapsed_ms / duration_ms)


class RiseFall(BaseEffect):
    """
    Moves the label along the vertical axis every frame.

    ``rise`` and ``fall`` travel fully through the tile and are clipped at its
    edges; ``bounce`` and ``sin`` stay inside the tile, the latter easing in
    and out at each edge.
    """

    name = "RiseFall"

    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        duration = duration_param(params, "duration", 3000)
        direction = params.get("direction") or "rise"

        if direction in ("rise", "fall"):
            target.clip = True
        target.layout = "block"

        label = target.add_label(target.take_text())
        label.visible = False
        self.style_label(label, style)

        def begin() -> None:
            label.visible = True
            start_time: float | None = None

            def tick(timestamp: float) -> None:
                nonlocal start_time
                if start_time is None:
                    start_time = timestamp
                elapsed = timestamp - start_time
                if handle.cycle.enter(math.floor(elapsed / duration), timestamp):
                    self.recolor([label], style, handle.cycle.cycle_index)
                self._place(target, label, elapsed, duration, direction)
                handle.request_frame(tick)

            handle.request_frame(tick)

        handle.set_timeout(begin, start_delay_param(params))

    def _place(
        self,
        target: TextLayer,
        label: Label,
        elapsed: float,
        duration: float,
        direction: str,
    ) -> None:
        if target.height <= 0:
            # Not laid out (or collapsed): skip this frame
            return
        _, label_height = target.label_size(label)
        travel = TravelRange.for_heights(target.height, label_height)
        label.top = rise_fall_position(elapsed, duration, direction, travel)
