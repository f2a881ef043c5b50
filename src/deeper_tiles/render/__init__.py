"""Render tree, text measurement and Pillow rendering."""

from .context import RenderContext
from .measure import FontSpec, PillowTextMeasurer, TextMeasurer
from .nodes import AnimationBinding, Label, OpacityRamp, TextLayer
from .overlay import BoardOverlay
from .renderer import Renderer

__all__ = [
    "AnimationBinding",
    "BoardOverlay",
    "FontSpec",
    "Label",
    "OpacityRamp",
    "PillowTextMeasurer",
    "RenderContext",
    "Renderer",
    "TextLayer",
    "TextMeasurer",
]
