"""Board actuation: snapshots in, render tree out."""

from .actuator import LOSE_MESSAGE, WIN_MESSAGE, BoardActuator, TileView
from .snapshot import BoardSnapshot, TileState

__all__ = [
    "BoardActuator",
    "BoardSnapshot",
    "LOSE_MESSAGE",
    "TileState",
    "TileView",
    "WIN_MESSAGE",
]
