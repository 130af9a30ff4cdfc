"""hex2048 entry point.

Two commands:

- ``play``: start a game against a tile service. Moves are typed as
  letters (``q w e a s d``) followed by Enter.
- ``serve``: run the tile spawn service locally.

Usage:
    hex2048 play --hostname localhost --port 13337 --radius 3
    hex2048 serve
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Optional

import httpx

from hex2048.engine.game_loop import GameLoop
from hex2048.engine.game_session import GameSession
from hex2048.loaders.game_config_loader import DEFAULT_GAME_CONFIG_PATH, GameConfig, load_game_config
from hex2048.models.actions import KEY_ALIASES, GameStatus
from hex2048.models.grid import Grid
from hex2048.models.layout import Layout
from hex2048.network.game_client import GameClient
from hex2048.util.events import BoardChanged, EventBus, KeyDown, KeyUp, StatusChanged
from hex2048.util.ordering import is_in_range

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bootstrap:
    """Where to fetch tiles from and how big the board is."""

    hostname: str
    port: str
    radius: int


def resolve_bootstrap(
    hostname: Optional[str],
    port: Optional[str],
    radius: Optional[int],
    config: GameConfig,
) -> Bootstrap:
    """Validate start parameters, falling back to the configured defaults.

    A missing hostname or an out-of-range radius replaces all three
    parameters with the defaults.
    """
    if not hostname or radius is None or not is_in_range(radius, config.min_radius, config.max_radius):
        log.warning(
            "Invalid start parameters (hostname=%r radius=%r), using defaults %s:%s radius %d",
            hostname, radius, config.default_hostname, config.default_port, config.default_radius,
        )
        return Bootstrap(config.default_hostname, config.default_port, config.default_radius)
    return Bootstrap(hostname, port or "", radius)


def format_board(session: GameSession, layout: Layout) -> str:
    """One line per occupied cell, top to bottom, with its pixel centre."""
    lines = []
    for tile in sorted(session.board.values(), key=lambda t: (layout.center_of(t).y, t.x)):
        c = layout.center_of(tile)
        lines.append(f"  ({tile.x:+d},{tile.y:+d},{tile.z:+d})  {tile.value}  at ({c.x:.0f}, {c.y:.0f})")
    return "\n".join(lines) or "  (empty)"


# ===================================================================
# play
# ===================================================================


async def _read_keys(game_loop: GameLoop) -> None:
    """Turn typed letters into key presses until stdin closes."""
    loop = asyncio.get_running_loop()
    stdin = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(stdin), sys.stdin)
    while game_loop.is_running:
        line = (await stdin.readline()).decode(errors="ignore")
        if not line:
            game_loop.stop()
            return
        for ch in line.strip().lower():
            code = KEY_ALIASES.get(ch, ch)
            game_loop.post(KeyDown(code=code))
            game_loop.post(KeyUp(code=code))


async def play(bootstrap: Bootstrap, config: GameConfig) -> GameStatus:
    """Run one game until it ends or input closes."""
    grid = Grid(bootstrap.radius - 1)
    bus = EventBus()
    session = GameSession(grid, bus)
    layout = Layout.for_field(config.field_width, grid)
    log.info("Board radius %d: %d cells, hex size %dpx", grid.radius, session.total_tiles, layout.size)

    bus.on(BoardChanged, lambda e: print(format_board(session, layout), flush=True))
    bus.on(StatusChanged, lambda e: print(f"Game status: {e.status}", flush=True))

    async with httpx.AsyncClient() as http:
        client = GameClient(
            bootstrap.hostname, bootstrap.port, bootstrap.radius,
            http=http, timeout=config.request_timeout_s,
        )
        log.info("Tile service: %s", client.url)
        game_loop = GameLoop(session, client)
        print("Controls: q, w, e, a, s, d", flush=True)
        reader = asyncio.create_task(_read_keys(game_loop))
        try:
            status = await game_loop.run()
        finally:
            reader.cancel()
    log.info("Score %d, best tile %d", session.score(), session.best_tile())
    return status


# ===================================================================
# serve
# ===================================================================


def serve(config: GameConfig) -> None:
    """Run the spawn service with uvicorn (blocks)."""
    import uvicorn

    from hex2048.network.spawn_api import create_app

    log.info("Tile service listening on http://%s:%d", config.serve_host, config.serve_port)
    uvicorn.run(
        create_app(config),
        host=config.serve_host,
        port=config.serve_port,
        log_level="info",
        access_log=False,
    )


# ===================================================================
# Entry point
# ===================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hex2048", description="Hexagonal 2048")
    parser.add_argument("--config", default=DEFAULT_GAME_CONFIG_PATH, help="path to game.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="play against a tile service")
    p_play.add_argument("--hostname")
    p_play.add_argument("--port")
    p_play.add_argument("--radius", type=int)

    sub.add_parser("serve", help="run the tile spawn service")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    config = load_game_config(args.config)

    if args.command == "serve":
        serve(config)
        return 0

    bootstrap = resolve_bootstrap(args.hostname, args.port, args.radius, config)
    status = asyncio.run(play(bootstrap, config))
    return 1 if status is GameStatus.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
