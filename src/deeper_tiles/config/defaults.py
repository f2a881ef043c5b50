"""Built-in "Deeper" theme, in the same shape as a JSON tile configuration."""

from .tile_config import TileVisualSpec, tile_visual_spec_from_dict

_GIFER = "https://i.gifer.com/origin"

DEFAULT_THEME = {
    "tiles": {
        "2": {
            "text": "Stop Thinking",
            "bgImage": f"{_GIFER}/5b/5b422c794a860c653d9273fda7ef06f2_w200.webp",
            "animation": "Flash",
            "animationParams": {"durationOn": 100, "durationOff": 100, "textColor": "alternate"},
        },
        "4": {
            "text": "Relax",
            "bgImage": f"{_GIFER}/9e/9ea2a8299209bfbd746e648137f9e562_w200.gif",
            "animation": "Whackamole",
            "animationParams": {
                "fade": True,
                "durationOn": 800,
                "tilesUnsync": True,
                "durationOff": 200,
                "textColor": "alternate",
            },
        },
        "8": {
            "text": "Focus Focus",
            "bgImage": f"{_GIFER}/df/df4525ed4f916186a0342e0aa08b0b40_w200.webp",
            "animation": "AppearFade",
            "animationParams": {"duration": 1500, "wordByWord": True, "textColor": "alternate"},
        },
        "16": {
            "text": "Fuzzy",
            "bgImage": f"{_GIFER}/9c/9c7bf931cf42e1ab6e36a7bd74aa68d7_w200.webp",
            "animation": "Vibrate",
            "animationParams": {
                "amplitude": 4,
                "speed": 40,
                "durationOn": 500,
                "durationOff": 150,
                "textColor": "random",
            },
        },
        "32": {
            "text": "Melt Melt Melt",
            "bgImage": f"{_GIFER}/89/89ebf67f4ecc214a42168f8dfd065572_w200.webp",
            "animation": "AppearFade",
            "animationParams": {"duration": 1400, "wordByWord": True, "textColor": "random"},
        },
        "64": {
            "text": "Sleep",
            "bgImage": "https://i.makeagif.com/media/8-24-2023/rrtGly.gif",
            "animation": "Flash",
            "animationParams": {"durationOn": 100, "durationOff": 1200, "textColor": "alternate"},
        },
        "128": {
            "text": "Sink",
            "bgImage": f"{_GIFER}/89/89ed53123bb01a4eba7397fefc2830d8_w200.webp",
            "animation": "RiseFall",
            "animationParams": {"duration": 3000, "direction": "fall", "textColor": "alternate"},
        },
        "256": {
            "text": "Blank",
            "bgImage": f"{_GIFER}/12/12a94bd9daec21697527d5a99bddc24b_w200.webp",
            "animation": "Whackamole",
            "animationParams": {
                "durationOn": 100,
                "tilesUnsync": True,
                "durationOff": 300,
                "textColor": "alternate",
            },
        },
        "512": {
            "text": "Empty",
            "bgImage": f"{_GIFER}/6e/6ebe3326095d85bd912fdd416d929abc_w200.webp",
            "animation": "AppearFade",
            "animationParams": {"duration": 1100, "textColor": "alternate"},
        },
        "1024": {
            "text": "Drop",
            "bgImage": f"{_GIFER}/9b/9bf27f312f37fc9e7e988d7599a9612e_w200.webp",
            "animation": "RiseFall",
            "animationParams": {"duration": 800, "direction": "fall"},
        },
        "2048": {
            "text": "SURRENDER",
            "bgImage": "https://media.tenor.com/eBl9Op1iop4AAAAM/hypnosis-hypnotized.gif",
            "animation": "Flash",
            "animationParams": {"durationOn": 200, "durationOff": 200},
        },
    },
    "defaultText": "Deeper",
    "boardOverlay": [
        {"text": "Let Go More and More", "bgImage": f"{_GIFER}/5b/5b422c794a860c653d9273fda7ef06f2_w200.webp", "opacity": 0.2},
        {"text": "So Easy to Give In", "bgImage": f"{_GIFER}/9b/9bf27f312f37fc9e7e988d7599a9612e_w200.webp", "opacity": 0.3},
        {"text": "Empty and Blank", "bgImage": f"{_GIFER}/6e/6ebe3326095d85bd912fdd416d929abc_w200.webp", "opacity": 0.6},
        {"text": "Mind Melting", "bgImage": f"{_GIFER}/89/89ebf67f4ecc214a42168f8dfd065572_w200.webp", "opacity": 0.5},
        {"text": "Slipping Away", "bgImage": f"{_GIFER}/9e/9ea2a8299209bfbd746e648137f9e562_w200.gif", "opacity": 0.35},
        {"text": "So Easy To Drop Deeper", "bgImage": f"{_GIFER}/df/df4525ed4f916186a0342e0aa08b0b40_w200.webp", "opacity": 0.4},
        {"text": "Fuzzy And Floaty More and More", "bgImage": f"{_GIFER}/9c/9c7bf931cf42e1ab6e36a7bd74aa68d7_w200.webp", "opacity": 0.45},
        {"text": "Drop Deep", "bgImage": f"{_GIFER}/9b/9bf27f312f37fc9e7e988d7599a9612e_w200.webp", "opacity": 0.75},
        {"text": "Sinking and Swirling", "bgImage": f"{_GIFER}/89/89ed53123bb01a4eba7397fefc2830d8_w200.webp", "opacity": 0.6},
        {"text": "SLEEP NOW", "bgImage": "https://i.makeagif.com/media/8-24-2023/rrtGly.gif", "opacity": 0.4},
        {"text": "LET GO NOW", "bgImage": "https://media.tenor.com/pdPU15AJpqsAAAAM/hypnosis-hypnotized.gif", "opacity": 0.75},
        {"text": "SURRENDER", "bgImage": "https://media.tenor.com/eBl9Op1iop4AAAAM/hypnosis-hypnotized.gif", "opacity": 0.8},
    ],
}


def default_tile_config() -> TileVisualSpec:
    """The built-in theme as a TileVisualSpec."""
    return tile_visual_spec_from_dict(DEFAULT_THEME)
