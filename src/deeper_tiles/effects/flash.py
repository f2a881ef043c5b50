"""Flash effect: the centered label blinks on and off."""

from ..render.nodes import TextLayer
from .base_effect import BaseEffect, EffectParams, TextStyle, duration_param, start_delay_param
from .handle import EffectHandle


class Flash(BaseEffect):
    """
    Centered text snaps visible for ``durationOn`` ms, then hidden for
    ``durationOff`` ms, forever. No movement, no fading.
    """

    name = "Flash"

    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        duration_on = duration_param(params, "durationOn", 500)
        duration_off = duration_param(params, "durationOff", 500)

        label = target.add_label(target.take_text())
        label.visible = False
        self.style_label(label, style)

        def flash_on() -> None:
            self.recolor([label], style, handle.cycle.advance(handle.now_ms))
            label.visible = True
            handle.set_timeout(flash_off, duration_on)

        def flash_off() -> None:
            label.visible = False
            handle.set_timeout(flash_on, duration_off)

        handle.set_timeout(flash_on, start_delay_param(params))
