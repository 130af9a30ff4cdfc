"""Tests for start-parameter handling and the command line."""

import pytest

from hex2048.engine.game_session import GameSession
from hex2048.loaders.game_config_loader import GameConfig
from hex2048.main import Bootstrap, build_parser, format_board, resolve_bootstrap
from hex2048.models.grid import Grid
from hex2048.models.hex import DataHex
from hex2048.models.layout import Layout

DEFAULTS = Bootstrap("hex2048-lambda.octa.wtf", "80", 3)


class TestResolveBootstrap:
    def test_valid_parameters_kept(self):
        b = resolve_bootstrap("localhost", "13337", 4, GameConfig())
        assert b == Bootstrap("localhost", "13337", 4)

    @pytest.mark.parametrize("radius", [2, 6])
    def test_bounds_inclusive(self, radius):
        assert resolve_bootstrap("localhost", "1", radius, GameConfig()).radius == radius

    @pytest.mark.parametrize("radius", [1, 7, None])
    def test_bad_radius_uses_defaults(self, radius):
        assert resolve_bootstrap("localhost", "1", radius, GameConfig()) == DEFAULTS

    def test_missing_hostname_uses_defaults(self):
        assert resolve_bootstrap(None, "1", 3, GameConfig()) == DEFAULTS

    def test_missing_port_is_empty(self):
        assert resolve_bootstrap("example.org", None, 3, GameConfig()).port == ""


class TestParser:
    def test_play_arguments(self):
        args = build_parser().parse_args(["play", "--hostname", "localhost", "--port", "13337", "--radius", "4"])
        assert (args.command, args.hostname, args.port, args.radius) == ("play", "localhost", "13337", 4)

    def test_serve(self):
        assert build_parser().parse_args(["serve"]).command == "serve"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestFormatBoard:
    def test_empty(self):
        assert format_board(GameSession(Grid(1)), Layout(10)) == "  (empty)"

    def test_lists_tiles_with_field_sized_centres(self):
        grid = Grid(1)
        session = GameSession(grid)
        session.add_tiles([DataHex.at(0, 1, -1, 2, index=1), DataHex.at(0, -1, 1, 4, index=2)])
        layout = Layout.for_field(GameConfig().field_width, grid)
        assert layout.size == 103
        assert format_board(session, layout).splitlines() == [
            "  (+0,+1,-1)  2  at (0, -178)",
            "  (+0,-1,+1)  4  at (0, 178)",
        ]

    def test_config_field_width_scales_centres(self):
        grid = Grid(1)
        session = GameSession(grid)
        session.add_tiles([DataHex.at(1, -1, 0, 8, index=1)])
        config = GameConfig(field_width=52)
        assert format_board(session, Layout.for_field(config.field_width, grid)) == "  (+1,-1,+0)  8  at (15, 9)"
