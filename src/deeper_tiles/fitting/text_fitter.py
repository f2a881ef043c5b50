"""Shrinks tile labels so their widest word fits the tile."""

import logging
import math
from typing import Iterable

from ..constants import (
    REFERENCE_FONT_SIZE,
    TEXT_FIT_MAX_RATIO,
    TEXT_FIT_MIN_SIZE,
    TEXT_FIT_WIDTH_RATIO,
)
from ..event_loop import FrameLoop
from ..render.measure import FontSpec, TextMeasurer
from ..render.nodes import TextLayer

logger = logging.getLogger(__name__)


def compute_fit_size(
    tile_width: float,
    word_widths: Iterable[float],
    reference_size: float = REFERENCE_FONT_SIZE,
) -> int | None:
    """
    Font size at which the widest word fills 80% of the tile width.

    Args:
        tile_width: Laid-out width of the tile in pixels
        word_widths: Width of each word measured at ``reference_size``
        reference_size: Font size the words were measured at

    Returns:
        The size clamped to ``[6, 0.38 * tile_width]`` and floored, or
        ``None`` when there is nothing to fit
    """
    if tile_width <= 0:
        return None
    max_width = max(word_widths, default=0.0)
    if max_width <= 0:
        return None
    target = reference_size * (tile_width * TEXT_FIT_WIDTH_RATIO) / max_width
    size = max(TEXT_FIT_MIN_SIZE, min(tile_width * TEXT_FIT_MAX_RATIO, target))
    return math.floor(size)


class TextFitter:
    """Measures words with an off-tree reference font and sets the layer's font size."""

    def __init__(self, loop: FrameLoop, measurer: TextMeasurer, reference_size: float = REFERENCE_FONT_SIZE):
        self.loop = loop
        self.measurer = measurer
        self.reference_size = reference_size

    def fit(self, layer: TextLayer, text: str) -> None:
        """Fit ``layer`` two frames from now, once its layout has settled."""
        self.loop.after_layout(lambda: self.fit_now(layer, text))

    def fit_now(self, layer: TextLayer, text: str) -> int | None:
        """
        Fit ``layer`` immediately.

        Returns:
            The applied font size, or ``None`` if the layer was left untouched
        """
        if not text or not layer.attached:
            return None
        reference = FontSpec(
            family=layer.font.family,
            weight=layer.font.weight,
            size=self.reference_size,
        )
        widths = [self.measurer.text_width(word, reference) for word in text.split()]
        size = compute_fit_size(layer.width, widths, self.reference_size)
        if size is None:
            return None
        layer.font_size = size
        logger.debug("Fitted %r to %dpx", text, size)
        return size
