"""Text measurement backed by Pillow fonts."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from PIL import ImageFont

from ..constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_TILE_FONT_SIZE,
    LINE_HEIGHT_RATIO,
)

logger = logging.getLogger(__name__)

_BOLD_WEIGHTS = {"bold", "bolder", "600", "700", "800", "900"}

# Font files tried for a family, most specific first.
_FONT_CANDIDATES = {
    "regular": ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf"),
    "bold": ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "LiberationSans-Bold.ttf"),
}


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Computed font of a text node."""
    family: str = DEFAULT_FONT_FAMILY
    weight: str = DEFAULT_FONT_WEIGHT
    size: float = DEFAULT_TILE_FONT_SIZE

    @property
    def is_bold(self) -> bool:
        return str(self.weight).lower() in _BOLD_WEIGHTS


class TextMeasurer(Protocol):
    """Measures rendered text. Implementations must be deterministic."""

    def text_width(self, text: str, font: FontSpec) -> float:
        ...

    def line_height(self, font: FontSpec) -> float:
        ...


@lru_cache(maxsize=256)
def load_font(family: str, bold: bool, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load the first available TrueType font for ``family``, falling back to Pillow's default."""
    names = [part.strip().strip("'\"") for part in family.split(",") if part.strip()]
    style = "bold" if bold else "regular"
    candidates = [f"{name}.ttf" for name in names] + list(_FONT_CANDIDATES[style])
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("No TrueType font found for %r, using Pillow default", family)
    return ImageFont.load_default(size=size)


class PillowTextMeasurer:
    """Measures text with Pillow, at the size and family a layout engine would use."""

    def text_width(self, text: str, font: FontSpec) -> float:
        if not text:
            return 0.0
        pil_font = load_font(font.family, font.is_bold, max(1, round(font.size)))
        return float(pil_font.getlength(text))

    def line_height(self, font: FontSpec) -> float:
        return font.size * LINE_HEIGHT_RATIO


def wrap_words(text: str, font: FontSpec, measurer: TextMeasurer, max_width: float) -> list[str]:
    """Greedy word wrap; a word wider than ``max_width`` gets a line of its own."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and measurer.text_width(candidate, font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def block_size(
    text: str, font: FontSpec, measurer: TextMeasurer, max_width: float
) -> tuple[float, float]:
    """Rendered ``(width, height)`` of ``text`` wrapped inside ``max_width``."""
    lines = wrap_words(text, font, measurer, max_width)
    if not lines:
        return 0.0, 0.0
    widest = max(measurer.text_width(line, font) for line in lines)
    return widest, len(lines) * measurer.line_height(font)
