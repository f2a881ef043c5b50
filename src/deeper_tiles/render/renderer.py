"""Renderer for drawing board frames using Pillow."""

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from ..constants import OVERLAY_WIDTH_RATIO, TEXT_FIT_WIDTH_RATIO
from ..effects.color import DARK_OUTLINE, LIGHT_OUTLINE, parse_color
from .context import Color
from .measure import FontSpec, load_font, wrap_words
from .nodes import Label, TextLayer

if TYPE_CHECKING:
    from ..board.actuator import BoardActuator, TileView

OUTLINE_COLORS: dict[str, Color] = {
    DARK_OUTLINE: (0, 0, 0),
    LIGHT_OUTLINE: (255, 255, 255),
}


class Renderer:
    """Renders the actuator's render tree as PIL Images."""

    def __init__(self, actuator: "BoardActuator"):
        """
        Initialize renderer.

        Args:
            actuator: The actuator whose tiles, score and overlay are drawn
        """
        self.actuator = actuator

    @property
    def size(self) -> int:
        return self.actuator.context.board_size

    def render_frame(self) -> Image.Image:
        """
        Render the board at the loop's current time.

        Returns:
            PIL Image of the current frame
        """
        context = self.actuator.context
        img = Image.new("RGBA", (self.size, self.size), (*context.background_color, 255))
        draw = ImageDraw.Draw(img, "RGBA")

        for row in range(context.grid_size):
            for col in range(context.grid_size):
                x, y = context.get_cell_position(col, row)
                draw.rounded_rectangle(
                    [x, y, x + context.tile_size - 1, y + context.tile_size - 1],
                    radius=3,
                    fill=context.empty_cell_color,
                )

        for view in self.actuator.tiles:
            self._draw_tile(img, view)

        if self.actuator.overlay.visible:
            img = self._draw_overlay(img)

        self._draw_score(ImageDraw.Draw(img, "RGBA"))
        return img.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE)

    def _draw_tile(self, img: Image.Image, view: "TileView") -> None:
        context = self.actuator.context
        size = context.tile_size
        layer = view.layer
        # Unclipped labels may spill half a tile past each edge
        margin = 0 if layer.clip else size // 2
        canvas = Image.new("RGBA", (size + 2 * margin, size + 2 * margin), (0, 0, 0, 0))
        draw = ImageDraw.Draw(canvas, "RGBA")

        fill = parse_color(view.bg_color) or context.tile_color(view.rank)
        draw.rounded_rectangle(
            [margin, margin, margin + size - 1, margin + size - 1],
            radius=3,
            fill=fill[:3],
        )

        theme_color = context.tile_text_color(view.rank)
        if layer.labels:
            for label in layer.labels:
                self._draw_label(draw, layer, label, margin, theme_color)
        elif layer.text:
            static = Label(layer.text)
            self._draw_label(draw, layer, static, margin, theme_color)

        x, y = context.get_cell_position(view.x, view.y)
        img.alpha_composite(canvas, (max(0, x - margin), max(0, y - margin)),
                            (max(0, margin - x), max(0, margin - y)))

    def _draw_label(
        self,
        draw: ImageDraw.ImageDraw,
        layer: TextLayer,
        label: Label,
        margin: int,
        theme_color: Color,
    ) -> None:
        now = self.actuator.loop.now_ms
        opacity = label.opacity_at(now, self.actuator.keyframes)
        if opacity <= 0:
            return

        font_spec = label.font(layer.font)
        lines = wrap_words(label.text, font_spec, layer.measurer, layer.width * TEXT_FIT_WIDTH_RATIO)
        if not lines:
            return
        block_width, block_height = layer.label_size(label)
        center_x, top = self._label_origin(layer, label, block_height)
        dx, dy = label.translate_at(now, self.actuator.keyframes)

        color = parse_color(label.color) or theme_color
        alpha = round(255 * opacity)
        stroke = OUTLINE_COLORS.get(label.outline or "")
        font = load_font(font_spec.family, font_spec.is_bold, max(1, round(font_spec.size)))
        line_height = layer.measurer.line_height(font_spec)
        for index, line in enumerate(lines):
            draw.text(
                (margin + center_x + dx, margin + top + dy + index * line_height),
                line,
                font=font,
                fill=(*color[:3], alpha),
                anchor="ma",
                stroke_width=1 if stroke else 0,
                stroke_fill=(*stroke, alpha) if stroke else None,
            )

    def _label_origin(self, layer: TextLayer, label: Label, block_height: float) -> tuple[float, float]:
        """Horizontal center and top of ``label`` inside its layer."""
        if label.anchor is not None:
            ax, ay = label.anchor
            return ax * layer.width, ay * layer.height - block_height / 2
        if label.top is not None:
            return layer.width / 2, label.top
        if label.slot is not None:
            index, count = label.slot
            row_height = layer.height / count
            return layer.width / 2, index * row_height + (row_height - block_height) / 2
        return layer.width / 2, (layer.height - block_height) / 2

    def _draw_overlay(self, img: Image.Image) -> Image.Image:
        overlay = self.actuator.overlay
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer, "RGBA")
        alpha = round(255 * overlay.opacity)
        tint = parse_color(overlay.bg_color) or (0, 0, 0)
        draw.rectangle([0, 0, img.width, img.height], fill=(*tint[:3], alpha))

        font_spec: FontSpec = overlay.font
        measurer = self.actuator.measurer
        lines = wrap_words(overlay.text, font_spec, measurer, overlay.width * OVERLAY_WIDTH_RATIO)
        font = load_font(font_spec.family, font_spec.is_bold, max(1, round(font_spec.size)))
        line_height = measurer.line_height(font_spec)
        top = (img.height - len(lines) * line_height) / 2
        for index, line in enumerate(lines):
            draw.text(
                (img.width / 2, top + index * line_height),
                line,
                font=font,
                fill=(255, 255, 255, 255),
                anchor="ma",
            )
        return Image.alpha_composite(img, layer)

    def _draw_score(self, draw: ImageDraw.ImageDraw) -> None:
        """Draw the current score in the top-left corner."""
        font = load_font("sans-serif", True, 12)
        score_text = f"Score: {self.actuator.score}"
        if self.actuator.score_addition:
            score_text += f" +{self.actuator.score_addition}"
        draw.text((5, 2), score_text, font=font, fill=(255, 255, 255))
