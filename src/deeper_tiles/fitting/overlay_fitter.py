"""Shrinks the board overlay text until it fits the overlay."""

from ..constants import (
    OVERLAY_DEFAULT_FONT_SIZE,
    OVERLAY_HEIGHT_RATIO,
    OVERLAY_MIN_FONT_SIZE,
    OVERLAY_WIDTH_RATIO,
)
from ..render.measure import TextMeasurer, block_size
from ..render.overlay import BoardOverlay


class OverlayFitter:
    """Steps the overlay font size down 1px at a time until the text block fits."""

    def __init__(self, measurer: TextMeasurer):
        self.measurer = measurer

    def fit(self, overlay: BoardOverlay) -> int | None:
        """
        Fit the overlay text inside 90% of the overlay width and 85% of its height.

        Returns:
            The final font size, or ``None`` when the overlay has no area
        """
        overlay.font_size = None
        max_width = overlay.width * OVERLAY_WIDTH_RATIO
        max_height = overlay.height * OVERLAY_HEIGHT_RATIO
        if max_width <= 0 or max_height <= 0:
            return None

        size = int(overlay.base_font.size or OVERLAY_DEFAULT_FONT_SIZE)
        while True:
            overlay.font_size = size
            width, height = block_size(overlay.text, overlay.font, self.measurer, max_width)
            if (width <= max_width and height <= max_height) or size <= OVERLAY_MIN_FONT_SIZE:
                break
            size -= 1
        return size
