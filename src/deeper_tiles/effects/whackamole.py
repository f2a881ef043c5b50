"""Whackamole effect: the label pops up at random spots inside the tile."""

from ..render.nodes import OpacityRamp, TextLayer
from .base_effect import (
    BaseEffect,
    EffectParams,
    TextStyle,
    duration_param,
    start_delay_param,
)
from .handle import EffectHandle

# Anchor range keeps the label inside the inner 60% x 60% of the tile
ANCHOR_MIN = 0.2
ANCHOR_MAX = 0.8
JITTER_MIN = 0.9
JITTER_MAX = 1.1


class Whackamole(BaseEffect):
    """
    Text snaps visible at a random position, stays for ``durationOn`` ms, then
    hides for ``durationOff`` ms before reappearing somewhere else.

    With ``fade`` the label fades linearly to transparent over ``durationOn``
    instead of staying fully opaque. With ``tilesUnsync`` both durations are
    jittered by up to 10% once per tile, so neighbouring tiles drift apart.
    """

    name = "Whackamole"

    def jitter(self, base: float, enabled: bool) -> float:
        """Scale ``base`` by a per-instance factor in ``[0.9, 1.1]``, never below 1 ms."""
        if not enabled or base <= 0:
            return base
        return max(1, round(base * self._rng.uniform(JITTER_MIN, JITTER_MAX)))

    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        tiles_unsync = bool(params.get("tilesUnsync", False))
        fade = bool(params.get("fade", False))
        duration_on = self.jitter(duration_param(params, "durationOn", 2000), tiles_unsync)
        duration_off = self.jitter(duration_param(params, "durationOff", 0), tiles_unsync)

        target.layout = "block"
        target.clip = True
        label = target.add_label(target.take_text())
        label.visible = False
        label.anchor = (0.5, 0.5)
        self.style_label(label, style)

        def cycle() -> None:
            label.anchor = (
                self._rng.uniform(ANCHOR_MIN, ANCHOR_MAX),
                self._rng.uniform(ANCHOR_MIN, ANCHOR_MAX),
            )
            self.recolor([label], style, handle.cycle.advance(handle.now_ms))
            if fade:
                label.opacity_ramp = OpacityRamp(start_ms=handle.now_ms, duration_ms=duration_on)
            label.visible = True
            handle.set_timeout(hide, duration_on)

        def hide() -> None:
            label.opacity_ramp = None
            label.opacity = 1.0
            label.visible = False
            if duration_off > 0:
                handle.set_timeout(cycle, duration_off)
            else:
                cycle()

        handle.set_timeout(cycle, start_delay_param(params))
