"""Game session — the state-transition function of one game.

Owns the board (cell identity → tile) and the game status. Every change
replaces the board as a whole; nothing is edited in place.

The session never talks to the network itself. A move that changes the
board returns the tiles to send to the tile service, and the caller
schedules the request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from hex2048.models.actions import ACTION_SETTINGS, ActionSettings, ActionType, GameStatus
from hex2048.models.grid import Grid, HexDictionary
from hex2048.models.hex import DataHex, Hex
from hex2048.util.events import (
    BoardChanged,
    EventBus,
    FetchFailed,
    KeyDown,
    KeyUp,
    StatusChanged,
    TilesArrived,
)
from hex2048.util.ordering import keys_equal, sort_by

log = logging.getLogger(__name__)


class GameSession:
    """Board state plus the rules for changing it.

    Args:
        grid: The grid being played on.
        event_bus: Receives ``BoardChanged`` and ``StatusChanged``.
    """

    def __init__(self, grid: Grid, event_bus: Optional[EventBus] = None) -> None:
        self.grid = grid
        self.field: HexDictionary[Hex] = grid.to_dictionary(grid.layout_hexes())
        self.total_tiles = len(self.field)
        self._events = event_bus or EventBus()
        self._board: HexDictionary[DataHex] = {}
        self._status = GameStatus.PLAYING
        self._key_held = False

    @property
    def board(self) -> HexDictionary[DataHex]:
        return dict(self._board)

    @property
    def status(self) -> GameStatus:
        return self._status

    # -- Dispatch --------------------------------------------------------

    def handle(self, event: object) -> Optional[list[DataHex]]:
        """Apply one event.

        Returns:
            The board to send to the tile service when a move changed it,
            otherwise None.
        """
        if isinstance(event, KeyDown):
            return self.on_key_down(event.code)
        if isinstance(event, KeyUp):
            self._key_held = False
        elif isinstance(event, TilesArrived):
            self.add_tiles(event.tiles)
        elif isinstance(event, FetchFailed):
            self.fail(event.reason)
        else:
            log.debug("Ignoring unknown event %r", event)
        return None

    def on_key_down(self, code: str) -> Optional[list[DataHex]]:
        """Handle a key press; held keys repeat nothing until released."""
        if self._status is not GameStatus.PLAYING or self._key_held:
            return None
        self._key_held = True
        action = ActionType.from_code(code)
        if action is None:
            return None
        return self.apply_move(ACTION_SETTINGS[action])

    # -- Transitions -----------------------------------------------------

    def apply_move(self, settings: ActionSettings) -> Optional[list[DataHex]]:
        """Move the board; None when no tile changed cell."""
        moved = self.grid.move(self._board.values(), settings)
        new_board = self.grid.to_dictionary(sort_by(moved, "index"))
        if keys_equal(self._board, new_board):
            return None
        self._replace(new_board)
        return moved

    def add_tiles(self, tiles: Iterable[DataHex]) -> None:
        """Merge freshly spawned tiles into the board, then check for game over."""
        if self._status is GameStatus.ERROR:
            log.debug("Dropping tiles that arrived after a network failure")
            return
        self._replace({**self._board, **self.grid.to_dictionary(tiles)})
        if len(self._board) == self.total_tiles and not self.grid.has_moves(self._board):
            log.info("No moves left, game over (best tile %d)", self.best_tile())
            self._set_status(GameStatus.GAME_OVER)

    def fail(self, reason: str) -> None:
        """Tile service failure; the session stops accepting input."""
        log.error("Tile service failure: %s", reason)
        self._set_status(GameStatus.ERROR)

    # -- Queries ---------------------------------------------------------

    def best_tile(self) -> int:
        return max((t.value for t in self._board.values()), default=0)

    def score(self) -> int:
        return sum(t.value for t in self._board.values())

    # -- Internal --------------------------------------------------------

    def _replace(self, board: HexDictionary[DataHex]) -> None:
        self._board = board
        self._events.emit(BoardChanged(board=dict(board)))

    def _set_status(self, status: GameStatus) -> None:
        if status is self._status:
            return
        self._status = status
        self._events.emit(StatusChanged(status=status.value))
