"""Game loop — single-threaded asyncio event pump.

Responsibilities:
- Deliver key and tile events to the session, one at a time
- Start a tile request whenever a move changes the board
- Stop once the game is over or the tile service failed

Tile requests run as background tasks and post their outcome back onto
the queue. Requests are never cancelled or de-duplicated; whichever
answer arrives last is merged last.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Iterable

from hex2048.models.actions import GameStatus
from hex2048.network.game_client import RemoteDataError
from hex2048.util.events import FetchFailed, TilesArrived

if TYPE_CHECKING:
    from hex2048.engine.game_session import GameSession
    from hex2048.models.hex import DataHex
    from hex2048.network.game_client import GameClient

log = logging.getLogger(__name__)

_STOP = object()


class GameLoop:
    """Feeds queued events to a game session.

    Args:
        session: The session whose state the events change.
        client: Tile service client used for spawn requests.
    """

    def __init__(self, session: GameSession, client: GameClient) -> None:
        self._session = session
        self._client = client
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()
        self._running = False

        # --- Monitoring counters ---
        self.events_processed: int = 0
        self.fetches_started: int = 0
        self.started_at: float = 0.0

    def post(self, event: object) -> None:
        """Queue an event for the session. Safe to call from handlers."""
        self._queue.put_nowait(event)

    async def run(self) -> GameStatus:
        """Request the opening tiles, then pump events until the game ends.

        Returns:
            The final game status.
        """
        self._running = True
        self.started_at = time.monotonic()
        self._request_tiles(())
        try:
            while self._running:
                event = await self._queue.get()
                if event is _STOP:
                    break
                board = self._session.handle(event)
                self.events_processed += 1
                if board is not None:
                    self._request_tiles(board)
                if self._session.status is not GameStatus.PLAYING:
                    log.info("Game finished: %s", self._session.status.value)
                    break
        finally:
            self._running = False
            pending = list(self._tasks)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
        return self._session.status

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_fetches(self) -> int:
        return len(self._tasks)

    def stop(self) -> None:
        """Signal the loop to stop after the current event."""
        self._running = False
        self.post(_STOP)

    def _request_tiles(self, board: Iterable[DataHex]) -> None:
        self.fetches_started += 1
        task = asyncio.get_running_loop().create_task(self._fetch(list(board)))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, board: list[DataHex]) -> None:
        try:
            tiles = await self._client.fetch_new_items(board)
        except RemoteDataError as e:
            self.post(FetchFailed(reason=str(e)))
            return
        except Exception as e:
            log.exception("Tile request failed unexpectedly")
            self.post(FetchFailed(reason=f"{type(e).__name__}: {e}"))
            return
        self.post(TilesArrived(tiles=tuple(tiles)))
