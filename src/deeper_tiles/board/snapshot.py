"""Board state handed to the actuator by the grid logic on each render pass."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TileState:
    """An occupied cell."""
    x: int
    y: int
    value: int
    previous_position: tuple[int, int] | None = None
    merged_from: tuple["TileState", ...] = ()


@dataclass(frozen=True)
class BoardSnapshot:
    """Occupied cells plus score and overlay state."""
    tiles: tuple[TileState, ...] = field(default_factory=tuple)
    score: int = 0
    best_score: int = 0
    overlay_index: int | None = None
    over: bool = False
    won: bool = False
    terminated: bool = False

    @classmethod
    def from_ranks(cls, ranks: list[int], grid_size: int = 4, **kwargs) -> "BoardSnapshot":
        """Lay ``ranks`` out row by row, as new tiles."""
        tiles = tuple(
            TileState(x=index % grid_size, y=index // grid_size, value=rank)
            for index, rank in enumerate(ranks[: grid_size * grid_size])
        )
        return cls(tiles=tiles, **kwargs)
