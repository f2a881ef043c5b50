"""Per-rank tile visuals: label, background and effect."""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ..constants import OVERLAY_DEFAULT_OPACITY
from ..effects import resolve_effect_name
from ..effects.rise_fall import DIRECTIONS

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "Deeper"

NUMERIC_PARAMS = ("duration", "durationOn", "durationOff", "startDelay", "amplitude", "speed")

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class TileConfigError(ValueError):
    """Raised when a tile configuration file is malformed."""
    pass


@dataclass(frozen=True)
class EffectConfig:
    """A resolved effect name with its parameters."""
    name: str
    params: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class TileSpec:
    """Visuals of a single tile rank."""
    text: str
    bg_color: str | None = None
    bg_image: str | None = None
    bg_image_style: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    effect: EffectConfig | None = None


@dataclass(frozen=True)
class OverlaySpec:
    """One entry of the board-overlay sequence."""
    text: str | None = None
    bg_image: str | None = None
    opacity: float = OVERLAY_DEFAULT_OPACITY
    bg_color: str | None = None
    bg_image_style: Mapping[str, str] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class TileVisualSpec:
    """Read-only lookup table of tile visuals, created once at startup."""
    tiles: Mapping[int, TileSpec] = field(default_factory=lambda: _EMPTY)
    default_text: str = DEFAULT_TEXT
    board_overlay: tuple[OverlaySpec, ...] = field(default_factory=tuple)

    def get_text(self, rank: int) -> str:
        """Label for ``rank``, or the default text for unconfigured ranks."""
        spec = self.tiles.get(rank)
        return (spec.text if spec else None) or self.default_text

    def get_tile(self, rank: int) -> TileSpec | None:
        return self.tiles.get(rank)

    def get_effect(self, rank: int) -> EffectConfig | None:
        spec = self.tiles.get(rank)
        return spec.effect if spec else None

    def get_overlay(self, index: int | None) -> OverlaySpec | None:
        """Overlay entry at ``index``; ``None`` hides the overlay."""
        if index is None or not 0 <= index < len(self.board_overlay):
            return None
        return self.board_overlay[index]

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the JSON configuration surface."""
        return {
            "tiles": {str(rank): _tile_to_dict(spec) for rank, spec in sorted(self.tiles.items())},
            "defaultText": self.default_text,
            "boardOverlay": [_overlay_to_dict(entry) for entry in self.board_overlay],
        }


def tile_visual_spec_from_dict(data: Mapping[str, Any]) -> TileVisualSpec:
    """
    Build a TileVisualSpec from the JSON configuration surface.

    Unknown effect names are dropped with a warning so the tile renders
    statically.

    Raises:
        TileConfigError: If the structure is not as expected
    """
    if not isinstance(data, Mapping):
        raise TileConfigError("Tile configuration must be a JSON object")

    raw_tiles = data.get("tiles", {})
    if not isinstance(raw_tiles, Mapping):
        raise TileConfigError("'tiles' must be an object keyed by tile rank")

    tiles: dict[int, TileSpec] = {}
    for raw_rank, raw_tile in raw_tiles.items():
        try:
            rank = int(raw_rank)
        except (TypeError, ValueError):
            raise TileConfigError(f"Tile rank '{raw_rank}' is not an integer")
        tiles[rank] = _parse_tile(rank, raw_tile)

    raw_overlay = data.get("boardOverlay", [])
    if not isinstance(raw_overlay, list):
        raise TileConfigError("'boardOverlay' must be a list")

    return TileVisualSpec(
        tiles=MappingProxyType(tiles),
        default_text=data.get("defaultText") or DEFAULT_TEXT,
        board_overlay=tuple(_parse_overlay(i, entry) for i, entry in enumerate(raw_overlay)),
    )


def load_tile_config(file_path: str | Path) -> TileVisualSpec:
    """
    Load a tile configuration from a JSON file.

    Raises:
        TileConfigError: If the file is missing or malformed
    """
    try:
        with open(file_path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise TileConfigError(f"File '{file_path}' not found")
    except json.JSONDecodeError as e:
        raise TileConfigError(f"Invalid JSON in '{file_path}': {e}")
    return tile_visual_spec_from_dict(data)


def _parse_tile(rank: int, raw: Any) -> TileSpec:
    if not isinstance(raw, Mapping):
        raise TileConfigError(f"Tile {rank} must be an object")
    text = raw.get("text")
    if not isinstance(text, str):
        raise TileConfigError(f"Tile {rank} needs a 'text' string")

    return TileSpec(
        text=text,
        bg_color=raw.get("bgColor"),
        bg_image=raw.get("bgImage"),
        bg_image_style=_string_mapping(raw.get("bgImageStyle"), f"Tile {rank} bgImageStyle"),
        effect=_parse_effect(rank, raw.get("animation"), raw.get("animationParams")),
    )


def _parse_effect(rank: int, name: Any, params: Any) -> EffectConfig | None:
    if not name:
        return None
    effect_name = resolve_effect_name(name)
    if effect_name is None:
        logger.warning("Tile %s: unknown animation '%s', rendering statically", rank, name)
        return None
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise TileConfigError(f"Tile {rank} animationParams must be an object")
    params = _coerce_numbers(rank, params)
    direction = params.get("direction")
    if effect_name == "RiseFall" and direction and direction not in DIRECTIONS:
        logger.warning("Tile %s: unknown RiseFall direction '%s'", rank, direction)
    return EffectConfig(name=effect_name, params=MappingProxyType(params))


def _coerce_numbers(rank: int, params: Mapping[str, Any]) -> dict[str, Any]:
    """Convert numeric parameters, given as numbers or numeric strings, to finite floats."""
    coerced = dict(params)
    for key in NUMERIC_PARAMS:
        value = coerced.get(key)
        if value is None:
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
        if number is None or isinstance(value, bool) or not math.isfinite(number):
            raise TileConfigError(f"Tile {rank} {key} must be a number, got {value!r}")
        if number < 0 and key != "amplitude":
            raise TileConfigError(f"Tile {rank} {key} must not be negative")
        coerced[key] = number
    return coerced


def _parse_overlay(index: int, raw: Any) -> OverlaySpec:
    if not isinstance(raw, Mapping):
        raise TileConfigError(f"Overlay entry {index} must be an object")
    opacity = raw.get("opacity", OVERLAY_DEFAULT_OPACITY)
    if not isinstance(opacity, (int, float)) or not 0 <= opacity <= 1:
        raise TileConfigError(f"Overlay entry {index} opacity must be between 0 and 1")
    return OverlaySpec(
        text=raw.get("text"),
        bg_image=raw.get("bgImage"),
        opacity=float(opacity),
        bg_color=raw.get("bgColor"),
        bg_image_style=_string_mapping(raw.get("bgImageStyle"), f"Overlay entry {index} bgImageStyle"),
    )


def _string_mapping(raw: Any, what: str) -> Mapping[str, str]:
    if raw is None:
        return _EMPTY
    if not isinstance(raw, Mapping):
        raise TileConfigError(f"{what} must be an object")
    return MappingProxyType({str(k): str(v) for k, v in raw.items()})


def _tile_to_dict(spec: TileSpec) -> dict[str, Any]:
    data: dict[str, Any] = {"text": spec.text}
    if spec.bg_color:
        data["bgColor"] = spec.bg_color
    if spec.bg_image:
        data["bgImage"] = spec.bg_image
    if spec.bg_image_style:
        data["bgImageStyle"] = dict(spec.bg_image_style)
    if spec.effect:
        data["animation"] = spec.effect.name
        data["animationParams"] = dict(spec.effect.params)
    return data


def _overlay_to_dict(spec: OverlaySpec) -> dict[str, Any]:
    data: dict[str, Any] = {"opacity": spec.opacity}
    if spec.text:
        data["text"] = spec.text
    if spec.bg_image:
        data["bgImage"] = spec.bg_image
    if spec.bg_color:
        data["bgColor"] = spec.bg_color
    if spec.bg_image_style:
        data["bgImageStyle"] = dict(spec.bg_image_style)
    return data
