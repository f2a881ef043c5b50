"""FastAPI web app serving themed tile previews."""

import os

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from deeper_tiles.config import TileConfigError, TileVisualSpec, default_tile_config, load_tile_config
from deeper_tiles.constants import DEFAULT_FPS
from deeper_tiles.effects import supported_effect_names
from deeper_tiles.output import output_spec_for_format
from deeper_tiles.preview_pipeline import encode_preview

load_dotenv()

app = FastAPI(title="Deeper Tiles")

PREVIEW_DURATION_MS = 2000
PREVIEW_MAX_FRAMES = 120


def load_config() -> TileVisualSpec:
    """Load the tile theme named by DEEPER_TILES_CONFIG, or the built-in one."""
    path = os.getenv("DEEPER_TILES_CONFIG")
    if not path:
        return default_tile_config()
    return load_tile_config(path)


def parse_ranks(ranks: str) -> list[int]:
    try:
        rank_list = [int(part) for part in ranks.split(",") if part.strip()]
    except ValueError:
        raise ValueError(f"Ranks must be comma-separated integers, got '{ranks}'")
    if not rank_list:
        raise ValueError("At least one rank is required")
    return rank_list


@app.get("/api/tiles")
async def tiles():
    """Return the active tile configuration."""
    try:
        config = load_config()
    except TileConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"effects": supported_effect_names(), **config.to_dict()}


@app.get("/api/preview")
async def preview(
    ranks: str = Query("2,4,8,16", min_length=1, description="Comma-separated tile ranks"),
    overlay: int | None = Query(None, description="Board overlay entry to show"),
    seed: int | None = Query(None, description="Seed for random-driven effects"),
    output_format: str = Query("gif", alias="format", description="Output format: gif or webp"),
):
    """Render and return an animated board preview."""
    try:
        config = load_config()
        spec = output_spec_for_format(output_format)
        encoded = encode_preview(
            config,
            parse_ranks(ranks),
            f"preview{spec.extension}",
            fps=DEFAULT_FPS,
            duration_ms=PREVIEW_DURATION_MS,
            overlay_index=overlay,
            seed=seed,
            max_frames=PREVIEW_MAX_FRAMES,
        )
        return Response(
            content=encoded,
            media_type=spec.media_type,
            headers={
                "Response-Type": "blob",
                "Content-Disposition": f"inline; filename=deeper-tiles{spec.extension}",
            },
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to generate preview: {e}")
