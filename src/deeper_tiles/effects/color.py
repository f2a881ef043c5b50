"""Text color resolution for effect cycles."""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import ImageColor

if TYPE_CHECKING:
    from ..render.nodes import Label

DARK_OUTLINE = "0 0 4px #000, 0 1px 3px rgba(0,0,0,0.9)"
LIGHT_OUTLINE = "0 0 4px #fff, 0 1px 3px rgba(255,255,255,0.9)"
LIGHT_TEXT = "#ffffff"
DARK_TEXT = "#000000"

DYNAMIC_COLOR_MODES = frozenset({"alternate", "random"})


@dataclass(frozen=True, slots=True)
class ResolvedColor:
    """A text color and its contrast outline. ``None`` leaves the style untouched."""
    color: str | None = None
    outline: str | None = None


def perceived_luminance(red: int, green: int, blue: int) -> float:
    """ITU-R BT.601 perceived luminance in ``[0, 1]``."""
    return (0.299 * red + 0.587 * green + 0.114 * blue) / 255


def resolve_text_color(
    mode: str | None, cycle_index: int, rng: random.Random | None = None
) -> ResolvedColor:
    """
    Resolve a color mode for the given cycle.

    Args:
        mode: ``None``, ``"alternate"``, ``"random"`` or a literal color
        cycle_index: Index of the effect cycle being colored
        rng: Random source for the ``"random"`` mode

    Returns:
        The resolved color and outline
    """
    if not mode:
        return ResolvedColor()
    if mode == "alternate":
        if cycle_index % 2 == 0:
            return ResolvedColor(LIGHT_TEXT, DARK_OUTLINE)
        return ResolvedColor(DARK_TEXT, LIGHT_OUTLINE)
    if mode == "random":
        rng = rng or random.Random()
        red, green, blue = (rng.randrange(256) for _ in range(3))
        outline = DARK_OUTLINE if perceived_luminance(red, green, blue) > 0.5 else LIGHT_OUTLINE
        return ResolvedColor(f"rgb({red},{green},{blue})", outline)
    # Literal colors pass through unvalidated
    return ResolvedColor(mode, None)


def apply_text_color(label: "Label", resolved: ResolvedColor) -> None:
    """Write the non-empty parts of ``resolved`` onto ``label``."""
    if resolved.color is not None:
        label.color = resolved.color
    if resolved.outline is not None:
        label.outline = resolved.outline


def parse_color(value: str | None) -> tuple[int, ...] | None:
    """Convert a CSS color string to an RGB(A) tuple, or ``None`` if unrecognized."""
    if not value:
        return None
    try:
        return ImageColor.getrgb(value.replace(" ", ""))
    except ValueError:
        return None
