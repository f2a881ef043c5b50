"""CLI interface for deeper-tiles."""

import logging
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import TileConfigError, TileVisualSpec, default_tile_config, load_tile_config
from .constants import DEFAULT_FPS, DEFAULT_PREVIEW_DURATION_MS, DEFAULT_TILE_SIZE, MAX_FPS
from .effects import supported_effect_names
from .output import supported_output_formats
from .preview_pipeline import encode_preview

# Load environment variables from .env file
load_dotenv()

CONFIG_ENV_VAR = "DEEPER_TILES_CONFIG"
DEFAULT_RANKS = "2,4,8,16,32,64,128,256,512,1024,2048"

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    ranks: str = typer.Argument(DEFAULT_RANKS, help="Comma-separated tile ranks to place on the board"),
    out: str = typer.Option(
        "deeper-tiles.gif",
        "--output",
        "-o",
        help=f"Preview file to write ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Tile configuration JSON (defaults to ${CONFIG_ENV_VAR}, then the built-in theme)",
    ),
    fps: int = typer.Option(DEFAULT_FPS, "--fps", help="Frames per second for the preview"),
    duration: int = typer.Option(
        DEFAULT_PREVIEW_DURATION_MS,
        "--duration",
        help="Preview length in milliseconds",
    ),
    tile_size: int = typer.Option(DEFAULT_TILE_SIZE, "--tile-size", help="Tile size in pixels"),
    overlay: int | None = typer.Option(
        None,
        "--overlay",
        help="Board overlay entry to show during the preview",
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for random-driven effects"),
    list_effects: bool = typer.Option(
        False,
        "--list-effects",
        help="List the configured tiles and their effects, then exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Render an animated preview of themed tile effects.

    Examples:
      # Preview every rank of the built-in theme
      deeper-tiles --output board.gif

      # Preview two ranks from a custom theme with the first overlay shown
      deeper-tiles 2,16 --config theme.json --overlay 0 --output fuzzy.webp
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_path or os.getenv(CONFIG_ENV_VAR))

        if list_effects:
            _print_tiles(config)
            return

        rank_list = _parse_ranks(ranks)
        if not 0 < fps <= MAX_FPS:
            raise CLIError(f"--fps must be between 1 and {MAX_FPS}")
        if duration <= 0:
            raise CLIError("--duration must be positive")
        if overlay is not None and config.get_overlay(overlay) is None:
            raise CLIError(
                f"Overlay index {overlay} out of range (0-{len(config.board_overlay) - 1})"
            )

        _generate_output(config, rank_list, out, fps, duration, tile_size, overlay, seed)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_config(file_path: str | None) -> TileVisualSpec:
    """Load tile configuration from a JSON file, or the built-in theme."""
    if not file_path:
        return default_tile_config()
    console.print(f"[bold blue]Loading tile configuration from {file_path}...[/bold blue]")
    try:
        return load_tile_config(file_path)
    except TileConfigError as e:
        raise CLIError(str(e))


def _parse_ranks(ranks: str) -> list[int]:
    try:
        rank_list = [int(part) for part in ranks.split(",") if part.strip()]
    except ValueError:
        raise CLIError(f"Ranks must be comma-separated integers, got '{ranks}'")
    if not rank_list:
        raise CLIError("At least one rank is required")
    return rank_list


def _print_tiles(config: TileVisualSpec) -> None:
    table = Table(title="Tile effects")
    table.add_column("Rank", justify="right")
    table.add_column("Text")
    table.add_column("Effect")
    table.add_column("Parameters")
    for rank, spec in sorted(config.tiles.items()):
        effect = spec.effect
        params = ", ".join(f"{k}={v}" for k, v in effect.params.items()) if effect else ""
        table.add_row(str(rank), spec.text, effect.name if effect else "-", params)
    console.print(table)
    console.print(f"Available effects: {', '.join(supported_effect_names())}")


def _generate_output(
    config: TileVisualSpec,
    ranks: list[int],
    output_path: str,
    fps: int,
    duration: int,
    tile_size: int,
    overlay: int | None,
    seed: int | None,
) -> None:
    """Render the preview and write it to ``output_path``."""
    if output_path.lower().endswith(".gif") and fps > 50:
        console.print(
            f"[yellow]Warning:[/yellow] FPS > 50 may not display correctly in browsers "
            f"(GIF delay will be {1000 // fps}ms, but browsers clamp delays < 20ms to ~100ms)"
        )

    ext = Path(output_path).suffix[1:].upper()
    console.print(f"\n[bold blue]Generating {ext} preview...[/bold blue]")
    try:
        encoded = encode_preview(
            config,
            ranks,
            output_path,
            fps=fps,
            duration_ms=duration,
            tile_size=tile_size,
            overlay_index=overlay,
            seed=seed,
        )
    except ValueError as e:
        raise CLIError(str(e))

    console.print(f"[bold blue]Saving to {output_path}...[/bold blue]")
    try:
        with open(output_path, "wb") as f:
            f.write(encoded)
    except IOError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
