"""Encoders for rendered preview frames."""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Iterable

from PIL import Image


@dataclass(frozen=True)
class OutputFormatSpec:
    """An animated image format Pillow can write."""
    name: str
    extension: str
    media_type: str
    save_options: dict[str, object] = field(default_factory=dict)


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "gif": OutputFormatSpec(
        name="gif",
        extension=".gif",
        media_type="image/gif",
        save_options={"optimize": False, "disposal": 2},
    ),
    "webp": OutputFormatSpec(
        name="webp",
        extension=".webp",
        media_type="image/webp",
        save_options={"lossless": True, "quality": 100, "method": 4},
    ),
}


class AnimationEncoder:
    """Encodes a frame sequence into one animated image."""

    def __init__(self, spec: OutputFormatSpec):
        self.spec = spec

    def encode(self, frames: Iterable[Image.Image], frame_duration: int) -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Rendered frames in display order
            frame_duration: Frame duration in milliseconds

        Returns:
            Encoded bytes, empty when there are no frames
        """
        frame_list = list(frames)
        if not frame_list:
            return b""

        buffer = BytesIO()
        frame_list[0].save(
            buffer,
            format=self.spec.name,
            save_all=True,
            append_images=frame_list[1:],
            duration=max(1, frame_duration),
            loop=0,
            **self.spec.save_options,
        )
        return buffer.getvalue()


def resolve_encoder(file_path: str) -> AnimationEncoder:
    """
    Resolve the encoder for a file path from its extension.

    Raises:
        ValueError: If the extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _OUTPUT_FORMATS.get(ext.removeprefix("."))
    if spec is None:
        supported = ", ".join(s.extension for s in _OUTPUT_FORMATS.values())
        raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")
    return AnimationEncoder(spec)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def output_spec_for_format(output_format: str) -> OutputFormatSpec:
    """
    Look up a format by name.

    Raises:
        ValueError: If the format is not supported
    """
    spec = _OUTPUT_FORMATS.get(output_format.lower())
    if spec is None:
        supported = ", ".join(supported_output_formats())
        raise ValueError(f"Invalid format. Choose from: {supported}")
    return spec


__all__ = [
    "AnimationEncoder",
    "OutputFormatSpec",
    "output_spec_for_format",
    "resolve_encoder",
    "supported_output_formats",
]
