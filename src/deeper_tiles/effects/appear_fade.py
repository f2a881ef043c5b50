"""AppearFade effect: text snaps visible and fades out, optionally word by word."""

from ..render.nodes import AnimationBinding, Label, TextLayer
from .base_effect import BaseEffect, EffectParams, TextStyle, duration_param, start_delay_param
from .handle import EffectHandle
from .keyframes import appear_fade_key, appear_fade_stops, word_fade_key, word_fade_stops


class AppearFade(BaseEffect):
    """
    Text becomes fully visible, then fades to transparent over ``duration``,
    looping indefinitely.

    With ``wordByWord`` each word owns an equal slot of the cycle, e.g.
    "Focus More" at 1500 ms shows "Focus" during 0-750 ms and "More" during
    750-1500 ms. Every word shares the same cycle length so they stay in step.
    """

    name = "AppearFade"

    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        duration = duration_param(params, "duration", 2000)
        start_delay = start_delay_param(params)
        word_by_word = bool(params.get("wordByWord", False))

        full_text = target.take_text()
        words = full_text.split(" ")

        if not word_by_word or len(words) <= 1:
            key = appear_fade_key()
            self.keyframes.ensure(key, appear_fade_stops)
            labels = [target.add_label(full_text)]
            keys = [key]
        else:
            # One row per word, stacked vertically
            target.layout = "column"
            count = len(words)
            labels = []
            keys = []
            for index, word in enumerate(words):
                key = word_fade_key(index, count)
                self.keyframes.ensure(key, lambda i=index: word_fade_stops(i, count))
                labels.append(target.add_label(word, slot=(index, count)))
                keys.append(key)

        handle.cycle.advance(handle.now_ms)
        for label, key in zip(labels, keys):
            self.style_label(label, style)
            label.animation = AnimationBinding(
                name=key,
                duration_ms=duration,
                start_ms=handle.now_ms,
                delay_ms=start_delay,
            )

        if style.dynamic:
            self._schedule_iterations(labels, style, handle, start_delay + duration, duration)

    def _schedule_iterations(
        self,
        labels: list[Label],
        style: TextStyle,
        handle: EffectHandle,
        first_delay: float,
        duration: float,
    ) -> None:
        """Recolor every label together at each animation iteration boundary."""

        def iteration() -> None:
            self.recolor(labels, style, handle.cycle.advance(handle.now_ms))
            handle.set_timeout(iteration, duration)

        handle.set_timeout(iteration, first_delay)
