"""Board overlay shown each time the board fills up."""

from dataclasses import replace
from typing import TYPE_CHECKING

from ..constants import DEFAULT_FONT_FAMILY, OVERLAY_DEFAULT_FONT_SIZE
from .measure import FontSpec

if TYPE_CHECKING:
    from ..config.tile_config import OverlaySpec


class BoardOverlay:
    """Full-board layer with a background image and a large message."""

    def __init__(self, width: float = 0, height: float = 0, font: FontSpec | None = None):
        self.width = float(width)
        self.height = float(height)
        self.base_font = font or FontSpec(DEFAULT_FONT_FAMILY, "bold", OVERLAY_DEFAULT_FONT_SIZE)
        self.font_size: float | None = None
        self.visible = False
        self.text = ""
        self.bg_image: str | None = None
        self.bg_color: str | None = None
        self.image_fit = "cover"
        self.opacity = 0.0

    @property
    def font(self) -> FontSpec:
        if self.font_size is None:
            return self.base_font
        return replace(self.base_font, size=self.font_size)

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def show(self, spec: "OverlaySpec", default_text: str) -> None:
        """Display ``spec``; missing text falls back to ``default_text``."""
        self.bg_color = spec.bg_color
        self.bg_image = spec.bg_image
        self.image_fit = spec.bg_image_style.get("objectFit", "cover")
        self.text = spec.text or default_text
        self.opacity = spec.opacity
        self.visible = True

    def hide(self) -> None:
        self.visible = False
