"""Client for the remote tile service.

The service receives the current board and answers with newly spawned
tiles. The client numbers every tile it receives with a running spawn
index, which the merge engine uses as its tie-break.

Usage::

    async with httpx.AsyncClient() as http:
        client = GameClient("localhost", "13337", radius=3, http=http)
        tiles = await client.fetch_new_items()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

import httpx
from pydantic import ValidationError

from hex2048.models.hex import DataHex
from hex2048.network.rest_models import HexDataList

log = logging.getLogger(__name__)


class RemoteDataError(RuntimeError):
    """The tile service failed; the game cannot continue."""


def build_base_url(hostname: str, port: str = "") -> str:
    """Plain HTTP with an explicit port for localhost, HTTPS otherwise."""
    if hostname == "localhost":
        return f"http://{hostname}:{port}/" if port else f"http://{hostname}/"
    return f"https://{hostname}/"


class GameClient:
    """Fetches spawned tiles for one game session.

    Args:
        hostname: Tile service host.
        port: Port, only used for ``localhost``.
        radius: Board size as understood by the service (rings including
            the centre cell).
        http: Shared ``httpx.AsyncClient``; one is created when omitted.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        hostname: str,
        port: str = "",
        radius: int = 2,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = build_base_url(hostname, port)
        self.radius = radius
        self._http = http
        self._owns_http = http is None
        self._timeout = timeout
        self._current_index = 1

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.radius}"

    @property
    def current_index(self) -> int:
        """Index the next received tile will get."""
        return self._current_index

    async def fetch_new_items(self, board: Iterable[DataHex] = ()) -> list[DataHex]:
        """Send the board and return the newly spawned tiles.

        Raises:
            RemoteDataError: On transport errors, HTTP error status, or a
                response that is not a list of tiles.
        """
        payload = [tile.to_wire() for tile in board]
        http = self._client()
        try:
            response = await http.post(self.url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            items = HexDataList.validate_json(response.content)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            log.warning("Tile fetch from %s failed: %s", self.url, e)
            raise RemoteDataError(str(e)) from e
        except ValidationError as e:
            log.warning("Tile service at %s sent an invalid response", self.url)
            raise RemoteDataError(f"invalid response: {e.error_count()} errors") from e

        tiles = [item.to_data_hex(self._current_index + i) for i, item in enumerate(items)]
        self._current_index += len(tiles)
        log.debug("Received %d tiles (next index %d)", len(tiles), self._current_index)
        return tiles

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http
