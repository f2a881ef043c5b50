"""Tile label effects and their registry."""

import random

from ..event_loop import FrameLoop
from .appear_fade import AppearFade
from .base_effect import BaseEffect, EffectParams, TextStyle
from .color import ResolvedColor, resolve_text_color
from .flash import Flash
from .handle import CycleState, EffectHandle
from .keyframes import KeyframeDescriptor, KeyframeStop, KeyframeStore
from .rise_fall import RiseFall, TravelRange, rise_fall_position
from .vibrate import Vibrate
from .whackamole import Whackamole

EFFECT_TYPES: dict[str, type[BaseEffect]] = {
    "AppearFade": AppearFade,
    "Whackamole": Whackamole,
    "Flash": Flash,
    "RiseFall": RiseFall,
    "Vibrate": Vibrate,
}

# Names accepted in configuration files for backwards compatibility
EFFECT_ALIASES: dict[str, str] = {
    "Appear_and_fade": "AppearFade",
}


def supported_effect_names() -> tuple[str, ...]:
    """Return supported effect names in deterministic order."""
    return tuple(EFFECT_TYPES.keys())


def resolve_effect_name(name: str | None) -> str | None:
    """Canonical effect name for ``name``, or ``None`` if it is not known."""
    if not name:
        return None
    name = EFFECT_ALIASES.get(name, name)
    return name if name in EFFECT_TYPES else None


def create_effect(
    name: str,
    loop: FrameLoop,
    keyframes: KeyframeStore,
    rng: random.Random | None = None,
) -> BaseEffect:
    """Create an effect instance by name."""
    effect_name = resolve_effect_name(name)
    if effect_name is None:
        available = ", ".join(supported_effect_names())
        raise ValueError(f"Unknown effect '{name}'. Available: {available}")

    effect_class = EFFECT_TYPES[effect_name]
    return effect_class(loop, keyframes, rng=rng)


__all__ = [
    "AppearFade",
    "BaseEffect",
    "CycleState",
    "EFFECT_ALIASES",
    "EFFECT_TYPES",
    "EffectHandle",
    "EffectParams",
    "Flash",
    "KeyframeDescriptor",
    "KeyframeStop",
    "KeyframeStore",
    "ResolvedColor",
    "RiseFall",
    "TextStyle",
    "TravelRange",
    "Vibrate",
    "Whackamole",
    "create_effect",
    "resolve_effect_name",
    "resolve_text_color",
    "rise_fall_position",
    "supported_effect_names",
]
