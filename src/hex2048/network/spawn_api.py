"""Tile spawn service — FastAPI application answering the game client.

``POST /{radius}`` takes the board after a move and returns the tiles
spawned onto free cells. An empty board starts a new game.

Usage::

    from hex2048.network.spawn_api import create_app

    app = create_app(game_config)
    # serve with uvicorn
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from hex2048.loaders.game_config_loader import GameConfig
from hex2048.models.grid import Grid
from hex2048.network.rest_models import HexData
from hex2048.util.ordering import is_in_range

log = logging.getLogger(__name__)


def spawn_tiles(
    grid: Grid,
    board: list[HexData],
    count: int,
    rng: random.Random,
    four_probability: float = 0.1,
) -> list[HexData]:
    """Pick up to ``count`` free cells and put a 2 (or sometimes a 4) there."""
    taken = {(t.x, t.y, t.z) for t in board}
    free = [h for h in grid.layout_hexes() if (h.x, h.y, h.z) not in taken]
    cells = rng.sample(free, min(count, len(free)))
    return [
        HexData(x=h.x, y=h.y, z=h.z, value=4 if rng.random() < four_probability else 2)
        for h in cells
    ]


def create_app(config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> FastAPI:
    """Build the spawn service.

    Args:
        config: Radius bounds and spawn tuning; defaults when omitted.
        rng: Random source, injectable for deterministic tests.
    """
    cfg = config or GameConfig()
    rand = rng or random.Random()

    app = FastAPI(title="hex2048 tile service")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST"],
        allow_headers=["*"],
    )

    @app.post("/{radius}", response_model=List[HexData])
    async def spawn(radius: int, board: Optional[List[HexData]] = Body(default=None)) -> list[HexData]:
        board = board or []
        if not is_in_range(radius, cfg.min_radius, cfg.max_radius):
            raise HTTPException(
                status_code=422,
                detail=f"radius must be within [{cfg.min_radius}, {cfg.max_radius}]",
            )
        grid = Grid(radius - 1)
        off_grid = [t for t in board if not grid.contains(t)]
        if off_grid:
            raise HTTPException(status_code=422, detail=f"{len(off_grid)} tiles outside the grid")
        if len({(t.x, t.y, t.z) for t in board}) != len(board):
            raise HTTPException(status_code=422, detail="two tiles share a cell")

        count = cfg.initial_tiles if not board else cfg.tiles_per_move
        spawned = spawn_tiles(grid, board, count, rand, cfg.four_probability)
        log.debug("radius=%d board=%d spawned=%d", radius, len(board), len(spawned))
        return spawned

    return app
