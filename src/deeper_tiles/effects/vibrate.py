"""Vibrate effect: the label buzzes with a small jitter."""

from ..render.nodes import AnimationBinding, Label, TextLayer
from .base_effect import (
    BaseEffect,
    EffectParams,
    TextStyle,
    duration_param,
    optional_param,
    start_delay_param,
)
from .handle import EffectHandle
from .keyframes import vibrate_key, vibrate_stops


class Vibrate(BaseEffect):
    """
    Rapid jitter built from one shared keyframe pattern per
    ``(amplitude, speed)`` pair, looped every ``speed`` ms.

    Setting both ``durationOn`` and ``durationOff`` makes it buzz for
    ``durationOn`` ms and rest for ``durationOff`` ms; otherwise it buzzes
    continuously once ``startDelay`` has passed.
    """

    name = "Vibrate"

    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        amplitude = optional_param(params, "amplitude", 2)
        speed = duration_param(params, "speed", 50)
        duration_on = duration_param(params, "durationOn", 0)
        duration_off = duration_param(params, "durationOff", 0)
        pulsed = duration_on > 0 and duration_off > 0

        key = vibrate_key(amplitude, speed)
        self.keyframes.ensure(key, lambda: vibrate_stops(amplitude))

        label = target.add_label(target.take_text())
        handle.cycle.advance(handle.now_ms)
        self.style_label(label, style)

        def start_buzz() -> None:
            label.animation = AnimationBinding(
                name=key, duration_ms=speed, start_ms=handle.now_ms, fill="none"
            )

        handle.on_stop(lambda: _stop_buzz(label))

        if not pulsed:
            handle.set_timeout(start_buzz, start_delay_param(params))
            return

        def buzz_cycle() -> None:
            self.recolor([label], style, handle.cycle.advance(handle.now_ms))
            start_buzz()
            handle.set_timeout(rest, duration_on)

        def rest() -> None:
            _stop_buzz(label)
            handle.set_timeout(buzz_cycle, duration_off)

        handle.set_timeout(buzz_cycle, start_delay_param(params))


def _stop_buzz(label: Label) -> None:
    label.animation = None
    label.translate = (0.0, 0.0)
