"""Applies board snapshots to the render tree: tiles, effects, score and overlay."""

import logging
import random
from dataclasses import dataclass, field
from typing import Literal, Mapping

from ..config.tile_config import TileVisualSpec
from ..constants import RESIZE_DEBOUNCE_MS
from ..effects import BaseEffect, EffectHandle, KeyframeStore, create_effect
from ..event_loop import FrameLoop
from ..fitting import OverlayFitter, TextFitter
from ..render.context import RenderContext
from ..render.measure import FontSpec, PillowTextMeasurer, TextMeasurer
from ..render.nodes import TextLayer
from ..render.overlay import BoardOverlay
from .snapshot import BoardSnapshot, TileState

logger = logging.getLogger(__name__)

WIN_MESSAGE = "Deeper and deeper."
LOSE_MESSAGE = "You can always fall deeper."

TileTransition = Literal["new", "merged", "moved"]


@dataclass
class TileView:
    """A tile placed on the board."""
    rank: int
    x: int
    y: int
    layer: TextLayer
    transition: TileTransition = "new"
    bg_color: str | None = None
    bg_image: str | None = None
    bg_image_style: Mapping[str, str] = field(default_factory=dict)
    handle: EffectHandle | None = None


class BoardActuator:
    """
    Renders snapshots supplied by the grid logic.

    Each pass clears the tile container, which detaches every text layer and
    stops the effect running on it, then rebuilds one tile per occupied cell.
    """

    def __init__(
        self,
        config: TileVisualSpec,
        loop: FrameLoop,
        *,
        context: RenderContext | None = None,
        keyframes: KeyframeStore | None = None,
        measurer: TextMeasurer | None = None,
        rng: random.Random | None = None,
        font: FontSpec | None = None,
    ):
        self.config = config
        self.loop = loop
        self.context = context or RenderContext.classic()
        self.keyframes = keyframes or KeyframeStore()
        self.measurer = measurer or PillowTextMeasurer()
        self.font = font or FontSpec()
        self.rng = rng or random.Random()
        self.text_fitter = TextFitter(loop, self.measurer)
        self.overlay_fitter = OverlayFitter(self.measurer)
        self.overlay = BoardOverlay(self.context.board_size, self.context.board_size)
        self.effects = self._create_effects()

        self.tiles: list[TileView] = []
        self.score = 0
        self.best_score = 0
        self.score_addition: int | None = None
        self.message: str | None = None
        self.won: bool | None = None
        self._resize_timer: int | None = None

    def _create_effects(self) -> dict[str, BaseEffect]:
        """Resolve each configured effect name to one strategy instance."""
        names = {spec.effect.name for spec in self.config.tiles.values() if spec.effect}
        return {
            name: create_effect(name, self.loop, self.keyframes, rng=self.rng)
            for name in sorted(names)
        }

    def actuate(self, snapshot: BoardSnapshot) -> None:
        """Render ``snapshot`` on the next frame."""
        self.loop.request_frame(lambda _ts: self.render(snapshot))

    def render(self, snapshot: BoardSnapshot) -> None:
        """Render ``snapshot`` immediately."""
        self.clear_container()
        for tile in snapshot.tiles:
            self.add_tile(tile)

        self.update_score(snapshot.score)
        self.best_score = snapshot.best_score

        if snapshot.overlay_index is not None:
            self.show_overlay(snapshot.overlay_index)
        else:
            self.hide_overlay()

        if snapshot.terminated:
            if snapshot.over:
                self.show_message(False)
            elif snapshot.won:
                self.show_message(True)

    def clear_container(self) -> None:
        """Remove every tile, stopping the effects bound to their labels."""
        for view in self.tiles:
            view.layer.detach()
        self.tiles.clear()

    def add_tile(self, tile: TileState) -> TileView:
        """Build the view of ``tile``: background, label, effect and text fit."""
        rank = tile.value
        x, y = tile.previous_position or (tile.x, tile.y)
        spec = self.config.get_tile(rank)

        layer = TextLayer(self.config.get_text(rank), font=self.font, measurer=self.measurer)
        layer.attach(self.context.tile_size, self.context.tile_size)
        raw_text = layer.raw_text

        view = TileView(rank=rank, x=x, y=y, layer=layer)
        if spec is not None:
            view.bg_color = spec.bg_color
            view.bg_image = spec.bg_image
            view.bg_image_style = spec.bg_image_style

        view.handle = self.apply_effect(layer, rank)

        if tile.previous_position:
            view.transition = "moved"
            # Render at the previous position first, then slide
            self.loop.request_frame(lambda _ts: self._move(view, tile.x, tile.y))
        elif tile.merged_from:
            view.transition = "merged"
            for merged in tile.merged_from:
                self.add_tile(merged)
        self.tiles.append(view)

        self.text_fitter.fit(layer, raw_text)
        return view

    def apply_effect(self, layer: TextLayer, rank: int) -> EffectHandle | None:
        """Start the effect configured for ``rank`` on ``layer``, if any."""
        effect_config = self.config.get_effect(rank)
        if effect_config is None:
            return None
        effect = self.effects.get(effect_config.name)
        if effect is None:
            return None
        return effect.start(layer, effect_config.params)

    def _move(self, view: TileView, x: int, y: int) -> None:
        view.x = x
        view.y = y

    def update_score(self, score: int) -> None:
        """Update the score, recording the positive difference as the score addition."""
        difference = score - self.score
        self.score = score
        self.score_addition = difference if difference > 0 else None

    def show_message(self, won: bool) -> None:
        self.won = won
        self.message = WIN_MESSAGE if won else LOSE_MESSAGE

    def continue_game(self) -> None:
        """Clear the end-of-game message (restart or keep playing)."""
        self.won = None
        self.message = None

    def show_overlay(self, index: int) -> None:
        """Show overlay entry ``index`` and fit its text."""
        spec = self.config.get_overlay(index)
        if spec is None:
            self.hide_overlay()
            return
        self.overlay.show(spec, self.config.default_text)
        self.fit_overlay()

    def hide_overlay(self) -> None:
        self.overlay.hide()

    def fit_overlay(self) -> int | None:
        return self.overlay_fitter.fit(self.overlay)

    def notify_resize(self, tile_size: int | None = None) -> None:
        """
        Record a resize; refitting runs once resize activity pauses for 150 ms.

        Args:
            tile_size: New tile size in pixels, if the layout changed
        """
        if tile_size is not None and tile_size != self.context.tile_size:
            self.context = self.context.with_tile_size(tile_size)
            for view in self.tiles:
                view.layer.attach(tile_size, tile_size)
            self.overlay.resize(self.context.board_size, self.context.board_size)
        self.loop.clear_timeout(self._resize_timer)
        self._resize_timer = self.loop.set_timeout(self.refit, RESIZE_DEBOUNCE_MS)

    def refit(self) -> None:
        """Refit every live label, and the overlay when it is shown."""
        self._resize_timer = None
        for view in self.tiles:
            layer = view.layer
            if layer.raw_text:
                # Drop the old inline size so the fit starts from fresh geometry
                layer.font_size = None
                self.text_fitter.fit(layer, layer.raw_text)
        if self.overlay.visible:
            self.fit_overlay()
        logger.debug("Refit %d tiles after resize", len(self.tiles))
