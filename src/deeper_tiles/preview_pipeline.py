"""Preview orchestration shared by the CLI and web app entry points."""

import hashlib
import json
import random
from typing import Iterator

from PIL import Image

from .board import BoardActuator, BoardSnapshot
from .config import TileVisualSpec
from .constants import DEFAULT_FPS, DEFAULT_PREVIEW_DURATION_MS, DEFAULT_TILE_SIZE
from .event_loop import FrameLoop
from .output import AnimationEncoder, resolve_encoder
from .render import RenderContext, Renderer, TextMeasurer


def derive_preview_seed(ranks: list[int], fps: int) -> int:
    """Create a stable seed based on preview inputs."""
    payload = {"fps": fps, "ranks": ranks}
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    digest = hashlib.sha256(encoded).digest()
    return int.from_bytes(digest[:8], "big")


class PreviewAnimator:
    """Drives a board of tiles through simulated time."""

    def __init__(
        self,
        config: TileVisualSpec,
        ranks: list[int],
        fps: int = DEFAULT_FPS,
        duration_ms: int = DEFAULT_PREVIEW_DURATION_MS,
        tile_size: int = DEFAULT_TILE_SIZE,
        overlay_index: int | None = None,
        seed: int | None = None,
        measurer: TextMeasurer | None = None,
    ):
        """
        Initialize animator.

        Args:
            config: Tile visuals to preview
            ranks: Tile ranks laid out row by row on the board
            fps: Frames per second for the preview
            duration_ms: Length of the preview
            tile_size: Tile width and height in pixels
            overlay_index: Board overlay entry to show, if any
            seed: Optional deterministic seed for random-driven effects
            measurer: Text measurer override
        """
        self.config = config
        self.ranks = ranks
        self.fps = fps
        self.duration_ms = duration_ms
        self.tile_size = tile_size
        self.overlay_index = overlay_index
        self.seed = seed if seed is not None else derive_preview_seed(ranks, fps)
        self.measurer = measurer
        self.frame_duration = 1000 // fps

    def create_actuator(self) -> BoardActuator:
        loop = FrameLoop(fps=self.fps)
        return BoardActuator(
            self.config,
            loop,
            context=RenderContext.classic(self.tile_size),
            measurer=self.measurer,
            rng=random.Random(self.seed),
        )

    def iter_board_timeline(self, max_frames: int | None = None) -> Iterator[tuple[BoardActuator, int]]:
        """Yield the live actuator once per frame with elapsed time in milliseconds."""
        actuator = self.create_actuator()
        snapshot = BoardSnapshot.from_ranks(
            self.ranks,
            grid_size=actuator.context.grid_size,
            overlay_index=self.overlay_index,
        )
        actuator.render(snapshot)

        rendered = 0
        elapsed_ms = 0
        while elapsed_ms <= self.duration_ms:
            if max_frames is not None and rendered >= max_frames:
                break
            yield actuator, elapsed_ms
            rendered += 1
            actuator.loop.advance(self.frame_duration)
            elapsed_ms += self.frame_duration

        actuator.clear_container()


def generate_raster_frames(
    animator: PreviewAnimator, max_frames: int | None = None
) -> Iterator[Image.Image]:
    """Render raster frames from an animator timeline."""
    renderer: Renderer | None = None
    for actuator, _elapsed_ms in animator.iter_board_timeline(max_frames=max_frames):
        if renderer is None:
            renderer = Renderer(actuator)
        yield renderer.render_frame()


def encode_preview(
    config: TileVisualSpec,
    ranks: list[int],
    output_path: str,
    *,
    fps: int = DEFAULT_FPS,
    duration_ms: int = DEFAULT_PREVIEW_DURATION_MS,
    tile_size: int = DEFAULT_TILE_SIZE,
    overlay_index: int | None = None,
    seed: int | None = None,
    max_frames: int | None = None,
    encoder: AnimationEncoder | None = None,
) -> bytes:
    """Encode preview bytes for the given ranks and output path."""
    target_encoder = encoder or resolve_encoder(output_path)
    animator = PreviewAnimator(
        config,
        ranks,
        fps=fps,
        duration_ms=duration_ms,
        tile_size=tile_size,
        overlay_index=overlay_index,
        seed=seed,
    )
    frames = generate_raster_frames(animator, max_frames)
    return target_encoder.encode(frames, frame_duration=animator.frame_duration)
