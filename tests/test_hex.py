"""Tests for Hex and DataHex — derivation, shifting, derived copies."""

import pytest

from hex2048.models.hex import Axis, DataHex, Hex


class TestFromCoordinates:
    def test_derives_missing_z(self):
        assert Hex.from_coordinates(x=1, y=-3) == Hex(1, -3, 2)

    def test_derives_missing_x(self):
        assert Hex.from_coordinates(y=2, z=0) == Hex(-2, 2, 0)

    def test_derives_missing_y(self):
        assert Hex.from_coordinates(x=-1, z=-1) == Hex(-1, 2, -1)

    def test_result_always_on_plane(self):
        for a in range(-3, 4):
            for b in range(-3, 4):
                for h in (
                    Hex.from_coordinates(x=a, y=b),
                    Hex.from_coordinates(y=a, z=b),
                    Hex.from_coordinates(x=a, z=b),
                ):
                    assert h.x + h.y + h.z == 0

    def test_single_coordinate_rejected(self):
        with pytest.raises(ValueError):
            Hex.from_coordinates(x=1)

    def test_all_three_kept_as_given(self):
        assert Hex.from_coordinates(x=1, y=1, z=-2) == Hex(1, 1, -2)


class TestHexBasics:
    def test_is_immutable(self):
        h = Hex(0, 0, 0)
        with pytest.raises(AttributeError):
            h.x = 1

    def test_coordinate_by_axis(self):
        h = Hex(1, -2, 1)
        assert h.coordinate(Axis.X) == 1
        assert h.coordinate(Axis.Y) == -2
        assert h.coordinate("z") == 1

    def test_hex_id_concatenates(self):
        assert Hex(1, -2, 1).hex_id == "1-21"
        assert Hex(0, 0, 0).hex_id == "000"


class TestShiftTop:
    def test_non_positive_row_uses_full_radius(self):
        moved = Hex(-1, 0, 1).shift_top(2, Axis.X, Axis.Y, 0)
        assert moved == Hex(-1, 2, -1)

    def test_positive_row_is_shorter(self):
        moved = Hex(1, -2, 1).shift_top(2, Axis.X, Axis.Y, 0)
        assert moved == Hex(1, 1, -2)

    def test_occupied_cells_are_skipped(self):
        moved = Hex(0, -2, 2).shift_top(2, Axis.X, Axis.Y, 2)
        assert moved == Hex(0, 0, 0)

    def test_other_axis_pair(self):
        moved = Hex(0, 1, -1).shift_top(2, Axis.Y, Axis.Z, 0)
        assert moved == Hex(-2, 1, 1)


class TestDataHex:
    def test_update_value_returns_copy(self):
        tile = DataHex.at(0, 1, -1, 2, index=7)
        merged = tile.update_value(4)
        assert merged.value == 4
        assert merged.index == 7
        assert merged.hex == tile.hex
        assert tile.value == 2

    def test_shift_keeps_value_and_index(self):
        tile = DataHex.at(0, -1, 1, 8, index=3)
        moved = tile.shift_top(1, Axis.X, Axis.Y, 0)
        assert moved.hex == Hex(0, 1, -1)
        assert (moved.value, moved.index) == (8, 3)

    def test_wire_form_drops_index(self):
        tile = DataHex.at(1, 0, -1, 16, index=42)
        assert tile.to_wire() == {"x": 1, "y": 0, "z": -1, "value": 16}

    def test_position_passthrough(self):
        tile = DataHex.at(1, -1, 0, 2)
        assert (tile.x, tile.y, tile.z) == (1, -1, 0)
        assert tile.hex_id == "1-10"
