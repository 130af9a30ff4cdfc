"""Game configuration — loads tunable constants from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once at startup
and handed to the client, the session and the spawn service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULT_GAME_CONFIG_PATH = "config/game.yaml"


@dataclass
class GameConfig:
    """All tunable constants.

    Every field has a default so the game runs without the file.
    """

    # -- Bootstrap ---------------------------------------------------
    min_radius: int = 2
    max_radius: int = 6
    default_hostname: str = "hex2048-lambda.octa.wtf"
    default_port: str = "80"
    default_radius: int = 3

    # -- Field -------------------------------------------------------
    field_width: int = 540

    # -- Network -----------------------------------------------------
    request_timeout_s: float = 10.0
    serve_host: str = "0.0.0.0"
    serve_port: int = 13337

    # -- Spawning ----------------------------------------------------
    initial_tiles: int = 3
    tiles_per_move: int = 1
    four_probability: float = 0.1


def load_game_config(path: str = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load game configuration from a YAML file.

    Missing keys fall back to dataclass defaults, unknown keys are
    ignored.  If the file does not exist, a warning is logged and pure
    defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s, using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    unknown = sorted(k for k in raw if k not in GameConfig.__dataclass_fields__)
    if unknown:
        log.warning("Ignoring unknown game config keys: %s", ", ".join(unknown))

    return GameConfig(**{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
