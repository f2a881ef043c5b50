"""Tile visual configuration."""

from .defaults import DEFAULT_THEME, default_tile_config
from .tile_config import (
    DEFAULT_TEXT,
    EffectConfig,
    OverlaySpec,
    TileConfigError,
    TileSpec,
    TileVisualSpec,
    load_tile_config,
    tile_visual_spec_from_dict,
)

__all__ = [
    "DEFAULT_TEXT",
    "DEFAULT_THEME",
    "EffectConfig",
    "OverlaySpec",
    "TileConfigError",
    "TileSpec",
    "TileVisualSpec",
    "default_tile_config",
    "load_tile_config",
    "tile_visual_spec_from_dict",
]
