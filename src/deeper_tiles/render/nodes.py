"""Retained render tree for tile labels: text layers and the labels inside them."""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Literal

from ..constants import TEXT_FIT_WIDTH_RATIO
from .measure import FontSpec, PillowTextMeasurer, TextMeasurer, block_size

if TYPE_CHECKING:
    from ..effects.keyframes import KeyframeStore

Layout = Literal["flex", "column", "block"]
FillMode = Literal["backwards", "none"]


def parse_px(value: str | float | None, base: float) -> float | None:
    """Parse a CSS length (``px``, ``em``, ``%`` or bare number) against ``base``."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip().lower()
    try:
        if text.endswith("px"):
            return float(text[:-2])
        if text.endswith("em"):
            return float(text.removesuffix("em").removesuffix("r")) * base
        if text.endswith("%"):
            return float(text[:-1]) / 100 * base
        return float(text)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class AnimationBinding:
    """A named keyframe animation applied to a label, looping forever."""
    name: str
    duration_ms: float
    start_ms: float
    delay_ms: float = 0
    fill: FillMode = "backwards"

    def progress_at(self, now_ms: float) -> float | None:
        """Cycle progress in ``[0, 1)``, or ``None`` while the animation has no effect."""
        elapsed = now_ms - self.start_ms - self.delay_ms
        if elapsed < 0:
            return 0.0 if self.fill == "backwards" else None
        if self.duration_ms <= 0:
            return None
        return (elapsed % self.duration_ms) / self.duration_ms


@dataclass(frozen=True, slots=True)
class OpacityRamp:
    """Linear opacity transition started at ``start_ms``."""
    start_ms: float
    duration_ms: float
    start: float = 1.0
    end: float = 0.0

    def value_at(self, now_ms: float) -> float:
        if self.duration_ms <= 0:
            return self.end
        fraction = min(max((now_ms - self.start_ms) / self.duration_ms, 0.0), 1.0)
        return self.start + (self.end - self.start) * fraction


class Label:
    """A text span inside a tile's text layer."""

    def __init__(self, text: str, slot: tuple[int, int] | None = None):
        self.text = text
        self.slot = slot
        self.color: str | None = None
        self.outline: str | None = None
        self.visible = True
        self.opacity = 1.0
        self.opacity_ramp: OpacityRamp | None = None
        self.animation: AnimationBinding | None = None
        self.translate: tuple[float, float] = (0.0, 0.0)
        # Center point as fractions of the layer (free positioning)
        self.anchor: tuple[float, float] | None = None
        # Pixel offset from the layer top (vertical motion)
        self.top: float | None = None
        self.font_size: str | None = None
        self.font_weight: str | None = None
        self.font_family: str | None = None

    def __repr__(self) -> str:
        return f"Label({self.text!r}, visible={self.visible}, color={self.color!r})"

    def font(self, inherited: FontSpec) -> FontSpec:
        """Font of this label given the font of its layer."""
        size = parse_px(self.font_size, inherited.size)
        return replace(
            inherited,
            family=self.font_family or inherited.family,
            weight=self.font_weight or inherited.weight,
            size=size if size is not None else inherited.size,
        )

    def opacity_at(self, now_ms: float, keyframes: "KeyframeStore") -> float:
        """Effective opacity including ramps and keyframe animation."""
        if not self.visible:
            return 0.0
        opacity = self.opacity_ramp.value_at(now_ms) if self.opacity_ramp else self.opacity
        state = self._animated_state(now_ms, keyframes)
        if state is not None and state.opacity is not None:
            opacity *= state.opacity
        return opacity

    def translate_at(self, now_ms: float, keyframes: "KeyframeStore") -> tuple[float, float]:
        """Effective pixel offset including keyframe animation."""
        state = self._animated_state(now_ms, keyframes)
        if state is not None and state.translate is not None:
            return state.translate
        return self.translate

    def _animated_state(self, now_ms: float, keyframes: "KeyframeStore"):
        if self.animation is None:
            return None
        progress = self.animation.progress_at(now_ms)
        if progress is None:
            return None
        return keyframes.sample(self.animation.name, progress)


class TextLayer:
    """
    The text layer of one tile: the render target effects operate on.

    Geometry is assigned by the actuator when the tile is laid out; a layer
    that has not been attached yet reports zero size.
    """

    def __init__(
        self,
        text: str = "",
        *,
        font: FontSpec | None = None,
        measurer: TextMeasurer | None = None,
    ):
        self.text = text
        self.raw_text = text
        self.base_font = font or FontSpec()
        self.font_size: float | None = None
        self.measurer = measurer or PillowTextMeasurer()
        self.width = 0.0
        self.height = 0.0
        self.layout: Layout = "flex"
        self.clip = False
        self.labels: list[Label] = []
        self.attached = False
        self._detach_callbacks: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        return f"TextLayer({self.raw_text!r}, {self.width:g}x{self.height:g})"

    @property
    def font(self) -> FontSpec:
        """Computed font, honoring an inline font size."""
        if self.font_size is None:
            return self.base_font
        return replace(self.base_font, size=self.font_size)

    def attach(self, width: float, height: float) -> None:
        """Lay the layer out at the given size."""
        self.width = float(width)
        self.height = float(height)
        self.attached = True

    def take_text(self) -> str:
        """Return the plain text content and clear it so labels can replace it."""
        text = self.text
        self.text = ""
        return text

    def add_label(self, text: str, slot: tuple[int, int] | None = None) -> Label:
        label = Label(text, slot=slot)
        self.labels.append(label)
        return label

    def label_size(self, label: Label) -> tuple[float, float]:
        """Rendered size of ``label`` wrapped to its maximum width."""
        max_width = self.width * TEXT_FIT_WIDTH_RATIO if self.width > 0 else float("inf")
        return block_size(label.text, label.font(self.font), self.measurer, max_width)

    def on_detach(self, callback: Callable[[], None]) -> None:
        """Register teardown to run when the layer leaves the render tree."""
        self._detach_callbacks.append(callback)

    def detach(self) -> None:
        """Remove the layer from the render tree and run its teardown hooks."""
        self.attached = False
        callbacks, self._detach_callbacks = self._detach_callbacks, []
        for callback in callbacks:
            callback()
