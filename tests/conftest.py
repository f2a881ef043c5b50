"""Shared fixtures: a deterministic measurer and tile layers laid out at the classic size."""

import pytest

from deeper_tiles.effects import KeyframeStore
from deeper_tiles.event_loop import FrameLoop
from deeper_tiles.render import FontSpec, TextLayer

TILE_SIZE = 107


class FakeTextMeasurer:
    """Every character is ``char_ratio`` times the font size wide."""

    def __init__(self, char_ratio: float = 0.6):
        self.char_ratio = char_ratio

    def text_width(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size * self.char_ratio

    def line_height(self, font: FontSpec) -> float:
        return font.size * 1.2


@pytest.fixture
def loop() -> FrameLoop:
    return FrameLoop(fps=30)


@pytest.fixture
def keyframes() -> KeyframeStore:
    return KeyframeStore()


@pytest.fixture
def measurer() -> FakeTextMeasurer:
    return FakeTextMeasurer()


@pytest.fixture
def make_layer(measurer):
    """Factory for attached tile text layers."""

    def _make(text: str = "Deeper", size: float = TILE_SIZE, attached: bool = True) -> TextLayer:
        layer = TextLayer(text, measurer=measurer)
        if attached:
            layer.attach(size, size)
        return layer

    return _make
