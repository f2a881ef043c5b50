"""Rendering configuration: board geometry and theme colors."""

from dataclasses import dataclass, replace

from ..constants import (
    BOARD_BACKGROUND_COLOR,
    BOARD_PADDING,
    DARK_TILE_TEXT_COLOR,
    DEFAULT_TILE_SIZE,
    EMPTY_CELL_COLOR,
    GRID_SIZE,
    SUPER_TILE_COLOR,
    TILE_COLORS,
    TILE_SPACING,
    TILE_TEXT_COLOR,
)

Color = tuple[int, ...]


@dataclass(frozen=True)
class RenderContext:
    """Board layout and theme shared by the actuator and the renderer."""
    tile_size: int = DEFAULT_TILE_SIZE
    tile_spacing: int = TILE_SPACING
    padding: int = BOARD_PADDING
    grid_size: int = GRID_SIZE
    background_color: Color = BOARD_BACKGROUND_COLOR
    empty_cell_color: Color = EMPTY_CELL_COLOR

    @classmethod
    def classic(cls, tile_size: int = DEFAULT_TILE_SIZE) -> "RenderContext":
        """Default 4x4 board, spacing scaled with the tile size."""
        spacing = max(2, round(tile_size * TILE_SPACING / DEFAULT_TILE_SIZE))
        return cls(tile_size=tile_size, tile_spacing=spacing, padding=spacing)

    def with_tile_size(self, tile_size: int) -> "RenderContext":
        return replace(self, tile_size=tile_size)

    @property
    def board_size(self) -> int:
        """Width and height of the square board in pixels."""
        return (
            self.grid_size * self.tile_size
            + (self.grid_size - 1) * self.tile_spacing
            + 2 * self.padding
        )

    def get_cell_position(self, x: float, y: float) -> tuple[int, int]:
        """Top-left pixel of the cell at grid position ``(x, y)``."""
        step = self.tile_size + self.tile_spacing
        return (
            int(self.padding + x * step),
            int(self.padding + y * step),
        )

    def tile_color(self, rank: int) -> Color:
        if rank in TILE_COLORS:
            return TILE_COLORS[rank]
        return SUPER_TILE_COLOR

    def tile_text_color(self, rank: int) -> Color:
        """Theme label color: dark on the two lightest ranks."""
        return DARK_TILE_TEXT_COLOR if rank <= 4 else TILE_TEXT_COLOR
