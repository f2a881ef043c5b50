"""Base interface for tile label effects."""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from ..constants import DEFAULT_START_DELAY_MS
from ..event_loop import FrameLoop
from ..render.nodes import Label, TextLayer
from .color import DYNAMIC_COLOR_MODES, ResolvedColor, apply_text_color, resolve_text_color
from .handle import EffectHandle
from .keyframes import KeyframeStore

logger = logging.getLogger(__name__)

EffectParams = Mapping[str, Any]


def number_param(params: EffectParams, key: str) -> float | None:
    """Numeric value of ``key``, or ``None`` when it is missing or not a number."""
    value = params.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        try:
            return float(value)
        except (TypeError, ValueError):
            pass
    logger.warning("Ignoring non-numeric %s=%r", key, value)
    return None


def duration_param(params: EffectParams, key: str, default: float) -> float:
    """Duration parameter where a missing, zero or negative value means ``default``."""
    value = number_param(params, key)
    return value if value is not None and value > 0 else default


def optional_param(params: EffectParams, key: str, default: float) -> float:
    """Numeric parameter where only a missing value means ``default``."""
    value = number_param(params, key)
    return default if value is None else value


def start_delay_param(params: EffectParams) -> float:
    return optional_param(params, "startDelay", DEFAULT_START_DELAY_MS)


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Text styling shared by every effect."""
    text_color: str | None = None
    color: str | None = None
    font_size: str | None = None
    font_weight: str | None = None
    font_family: str | None = None

    @classmethod
    def from_params(cls, params: EffectParams) -> "TextStyle":
        return cls(
            text_color=params.get("textColor"),
            color=params.get("color"),
            font_size=_css_value(params.get("fontSize")),
            font_weight=_css_value(params.get("fontWeight")),
            font_family=params.get("fontFamily"),
        )

    @property
    def initial_mode(self) -> str | None:
        """Mode used for the first coloring; falls back to ``color``."""
        return self.text_color or self.color

    @property
    def dynamic(self) -> bool:
        """Whether the color must be re-resolved at every cycle."""
        return self.text_color in DYNAMIC_COLOR_MODES


def _css_value(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class BaseEffect(ABC):
    """
    Abstract base class for label effects.

    An effect instance is bound to the loop, keyframe store and random source
    of the rendering layer; ``start`` may be called once per tile.
    """

    name: ClassVar[str]

    def __init__(
        self,
        loop: FrameLoop,
        keyframes: KeyframeStore,
        rng: random.Random | None = None,
    ) -> None:
        self.loop = loop
        self.keyframes = keyframes
        self._rng = rng or random.Random()

    def set_rng(self, rng: random.Random) -> None:
        """Inject RNG source for deterministic previews."""
        self._rng = rng

    def start(self, target: TextLayer | None, params: EffectParams | None = None) -> EffectHandle | None:
        """
        Start the effect on ``target``.

        Args:
            target: The tile's text layer; ``None`` is a no-op
            params: Effect parameters keyed as in the tile configuration

        Returns:
            A handle owning the effect's timers, or ``None`` without a target
        """
        if target is None:
            return None
        params = params or {}
        handle = EffectHandle(self.loop, name=self.name)
        style = TextStyle.from_params(params)
        self._run(target, params, style, handle)
        target.on_detach(handle.stop)
        logger.debug("Started %s on %r", self.name, target)
        return handle

    @abstractmethod
    def _run(
        self,
        target: TextLayer,
        params: EffectParams,
        style: TextStyle,
        handle: EffectHandle,
    ) -> None:
        """Build labels on ``target`` and schedule the effect's phases on ``handle``."""
        raise NotImplementedError

    def resolve_color(self, mode: str | None, cycle_index: int) -> ResolvedColor:
        return resolve_text_color(mode, cycle_index, self._rng)

    def style_label(self, label: Label, style: TextStyle) -> None:
        """Apply the initial color and font overrides to ``label``."""
        apply_text_color(label, self.resolve_color(style.initial_mode, 0))
        if style.font_size:
            label.font_size = style.font_size
        if style.font_weight:
            label.font_weight = style.font_weight
        if style.font_family:
            label.font_family = style.font_family

    def recolor(self, labels: list[Label], style: TextStyle, cycle_index: int) -> None:
        """Re-resolve a dynamic color once and apply it to ``labels``."""
        if not style.dynamic:
            return
        resolved = self.resolve_color(style.text_color, cycle_index)
        for label in labels:
            apply_text_color(label, resolved)
