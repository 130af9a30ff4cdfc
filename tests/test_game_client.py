"""Tests for the tile service client.

The spawn service runs in-process behind httpx ``ASGITransport``;
failure cases use ``MockTransport``.
"""

from __future__ import annotations

import json
import random

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from hex2048.loaders.game_config_loader import GameConfig
from hex2048.models.grid import Grid
from hex2048.models.hex import DataHex
from hex2048.network.game_client import GameClient, RemoteDataError, build_base_url
from hex2048.network.spawn_api import create_app


def _asgi_client(config: GameConfig | None = None) -> AsyncClient:
    app = create_app(config or GameConfig(), rng=random.Random(7))
    return AsyncClient(transport=ASGITransport(app=app))


def _mock_client(handler) -> AsyncClient:
    return AsyncClient(transport=httpx.MockTransport(handler))


class TestBaseUrl:
    def test_localhost_uses_http_and_port(self):
        assert build_base_url("localhost", "13337") == "http://localhost:13337/"

    def test_localhost_without_port(self):
        assert build_base_url("localhost", "") == "http://localhost/"

    def test_remote_host_uses_https_without_port(self):
        assert build_base_url("hex2048-lambda.octa.wtf", "80") == "https://hex2048-lambda.octa.wtf/"

    def test_endpoint_includes_radius(self):
        client = GameClient("localhost", "13337", radius=4)
        assert client.url == "http://localhost:13337/4"


class TestFetch:
    @pytest.mark.asyncio
    async def test_opening_tiles_get_fresh_indices(self):
        async with _asgi_client() as http:
            client = GameClient("localhost", "13337", radius=3, http=http)
            tiles = await client.fetch_new_items()
        assert [t.index for t in tiles] == [1, 2, 3]
        assert client.current_index == 4
        assert all(Grid(2).contains(t) for t in tiles)
        assert all(t.value in (2, 4) for t in tiles)

    @pytest.mark.asyncio
    async def test_index_continues_across_fetches(self):
        async with _asgi_client() as http:
            client = GameClient("localhost", "13337", radius=3, http=http)
            first = await client.fetch_new_items()
            second = await client.fetch_new_items(first)
        assert [t.index for t in second] == [4]
        assert second[0].hex_id not in {t.hex_id for t in first}

    @pytest.mark.asyncio
    async def test_sends_wire_form_without_index(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.read())
            return httpx.Response(200, json=[])

        async with _mock_client(handler) as http:
            client = GameClient("localhost", "1", radius=2, http=http)
            await client.fetch_new_items([DataHex.at(0, 1, -1, 2, index=9)])
        assert json.loads(seen[0]) == [{"x": 0, "y": 1, "z": -1, "value": 2}]

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with _mock_client(lambda r: httpx.Response(500)) as http:
            client = GameClient("localhost", "1", http=http)
            with pytest.raises(RemoteDataError):
                await client.fetch_new_items()
        assert client.current_index == 1

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler) as http:
            client = GameClient("localhost", "1", http=http)
            with pytest.raises(RemoteDataError):
                await client.fetch_new_items()

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("bad url")

        async with _mock_client(handler) as http:
            client = GameClient("localhost", "1", http=http)
            with pytest.raises(RemoteDataError):
                await client.fetch_new_items()

    @pytest.mark.asyncio
    async def test_garbage_body(self):
        async with _mock_client(lambda r: httpx.Response(200, content=b"not json")) as http:
            client = GameClient("localhost", "1", http=http)
            with pytest.raises(RemoteDataError):
                await client.fetch_new_items()

    @pytest.mark.asyncio
    async def test_wrong_shape(self):
        body = [{"x": 1, "y": 1, "z": 1, "value": 2}]
        async with _mock_client(lambda r: httpx.Response(200, json=body)) as http:
            client = GameClient("localhost", "1", http=http)
            with pytest.raises(RemoteDataError):
                await client.fetch_new_items()
