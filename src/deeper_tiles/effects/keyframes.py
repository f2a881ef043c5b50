"""Idempotent store of named keyframe animation descriptors."""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeyframeStop:
    """Visual state at a point of an animation cycle."""
    percent: float
    opacity: float | None = None
    translate: tuple[float, float] | None = None


@dataclass(frozen=True, slots=True)
class KeyframeDescriptor:
    """A registered animation curve. Identity is ``key``."""
    key: str
    stops: tuple[KeyframeStop, ...]


@dataclass(frozen=True, slots=True)
class VisualState:
    """Sampled visual state. ``None`` fields are not animated."""
    opacity: float | None = None
    translate: tuple[float, float] | None = None


StopBuilder = Callable[[], Sequence[KeyframeStop]]


class KeyframeStore:
    """
    Append-only cache of keyframe descriptors.

    A descriptor is built the first time its key is requested and kept for
    the lifetime of the store. One store is owned by the rendering layer and
    shared by every effect it starts.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, KeyframeDescriptor] = {}

    def ensure(self, key: str, builder: StopBuilder) -> KeyframeDescriptor:
        """
        Register ``key`` unless it already exists.

        Args:
            key: Descriptor name
            builder: Produces the stops; only called on first registration

        Returns:
            The descriptor registered under ``key``
        """
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            stops = tuple(sorted(builder(), key=lambda stop: stop.percent))
            descriptor = KeyframeDescriptor(key=key, stops=stops)
            self._descriptors[key] = descriptor
            logger.debug("Registered keyframes %s (%d stops)", key, len(stops))
        return descriptor

    def get(self, key: str) -> KeyframeDescriptor | None:
        return self._descriptors.get(key)

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def sample(self, key: str, progress: float) -> VisualState:
        """
        Interpolate the descriptor ``key`` at ``progress`` in ``[0, 1]``.

        Unknown keys sample as an empty state.
        """
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            return VisualState()
        percent = min(max(progress, 0.0), 1.0) * 100
        return VisualState(
            opacity=_interpolate(descriptor.stops, percent, "opacity"),
            translate=_interpolate(descriptor.stops, percent, "translate"),
        )


def _interpolate(stops: Sequence[KeyframeStop], percent: float, prop: str):
    defined = [stop for stop in stops if getattr(stop, prop) is not None]
    if not defined:
        return None
    before = defined[0]
    for stop in defined:
        if stop.percent > percent:
            if stop is defined[0] or stop.percent == before.percent:
                return getattr(stop, prop)
            fraction = (percent - before.percent) / (stop.percent - before.percent)
            return _lerp(getattr(before, prop), getattr(stop, prop), fraction)
        before = stop
    return getattr(before, prop)


def _lerp(start, end, fraction: float):
    if isinstance(start, tuple):
        return tuple(a + (b - a) * fraction for a, b in zip(start, end))
    return start + (end - start) * fraction


def appear_fade_stops() -> list[KeyframeStop]:
    """Snap visible, then fade to transparent over the whole cycle."""
    return [KeyframeStop(0, opacity=1.0), KeyframeStop(100, opacity=0.0)]


def word_fade_stops(index: int, count: int) -> list[KeyframeStop]:
    """
    Fade curve for word ``index`` of ``count`` sharing one cycle.

    Each word is invisible outside its ``[index/count, (index+1)/count)`` slot
    and snaps visible at the start of it before fading out.
    """
    slot_start = round(index / count * 100, 2)
    slot_end = round((index + 1) / count * 100, 2)
    snap_at = round(slot_start + 0.1, 2)
    if index == 0:
        stops = [KeyframeStop(0, opacity=1.0), KeyframeStop(slot_end, opacity=0.0)]
    else:
        stops = [
            KeyframeStop(0, opacity=0.0),
            KeyframeStop(slot_start, opacity=0.0),
            KeyframeStop(snap_at, opacity=1.0),
            KeyframeStop(slot_end, opacity=0.0),
        ]
    if slot_end < 100:
        stops.append(KeyframeStop(100, opacity=0.0))
    return stops


# (percent, dx, dy) offsets in units of the amplitude
VIBRATE_PATTERN: tuple[tuple[float, float, float], ...] = (
    (0, 0, 0),
    (12, 1, -0.5),
    (25, -0.7, 0.8),
    (37, 0.9, 0.3),
    (50, -0.4, -0.9),
    (62, 0.6, 0.7),
    (75, -0.8, -0.2),
    (87, 0.3, -0.6),
    (100, 0, 0),
)


def vibrate_stops(amplitude: float) -> list[KeyframeStop]:
    """Eight-offset jitter pattern scaled by ``amplitude`` pixels."""
    return [
        KeyframeStop(percent, translate=(dx * amplitude, dy * amplitude))
        for percent, dx, dy in VIBRATE_PATTERN
    ]


def appear_fade_key() -> str:
    return "tile-appear-and-fade"


def word_fade_key(index: int, count: int) -> str:
    return f"tile-word-fade-{index}-of-{count}"


def vibrate_key(amplitude: float, speed: float) -> str:
    return f"tile-vibrate-a{amplitude:g}-s{speed:g}"
