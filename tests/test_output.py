"""Tests for animation encoders."""

from PIL import Image
import pytest
from deeper_tiles.output import (
    AnimationEncoder,
    output_spec_for_format,
    resolve_encoder,
    supported_output_formats,
)


def create_test_frame(color="red"):
    """Helper to create a test frame."""
    img = Image.new("RGB", (10, 10), color)
    return img


def test_gif_encoder_encodes_frames():
    """GIF encoder should produce GIF89 bytes."""
    encoder = resolve_encoder("test_output.gif")
    frames = [create_test_frame("red"), create_test_frame("blue")]

    result = encoder.encode(iter(frames), frame_duration=100)

    assert result.startswith(b"GIF89")


def test_webp_encoder_encodes_frames():
    """WebP encoder should produce a RIFF/WEBP container."""
    encoder = resolve_encoder("test_output.webp")
    frames = [create_test_frame("red"), create_test_frame("blue")]

    result = encoder.encode(iter(frames), frame_duration=100)

    # WebP files start with RIFF....WEBP
    assert result.startswith(b"RIFF")
    assert result[8:12] == b"WEBP"


@pytest.mark.parametrize("path", ["test_output.gif", "test_output.webp"])
def test_encoder_empty_frames(path):
    """Encoders should return empty bytes for an empty frame sequence."""
    result = resolve_encoder(path).encode(iter([]), frame_duration=100)

    assert result == b""


def test_encoder_clamps_non_positive_frame_duration():
    """A zero frame duration should still encode."""
    result = resolve_encoder("x.gif").encode([create_test_frame()], frame_duration=0)

    assert result.startswith(b"GIF89")


def test_resolve_unsupported_format():
    """resolve_encoder should raise ValueError for unsupported formats."""
    with pytest.raises(ValueError, match="Unsupported output format"):
        resolve_encoder("output.mp4")


def test_resolve_case_insensitive():
    """resolve_encoder should handle uppercase extensions."""
    assert resolve_encoder("output.GIF").spec.name == "gif"
    assert resolve_encoder("output.WEBP").spec.name == "webp"


def test_output_spec_for_format():
    """Format lookup should expose the media type used by the web app."""
    assert supported_output_formats() == ("gif", "webp")
    assert output_spec_for_format("WEBP").media_type == "image/webp"
    assert isinstance(AnimationEncoder(output_spec_for_format("gif")), AnimationEncoder)
    with pytest.raises(ValueError, match="Invalid format"):
        output_spec_for_format("svg")
