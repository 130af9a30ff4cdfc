"""Hexagonal coordinate system using cube coordinates (x, y, z).

Cube coordinates place every cell on the plane x + y + z = 0:
- each axis is one of the three hex directions
- any two coordinates determine the third

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Axis(str, Enum):
    """The three cube axes."""

    X = "x"
    Y = "y"
    Z = "z"


@dataclass(frozen=True)
class Hex:
    """Immutable cube hex coordinate.

    The constructor does not check ``x + y + z == 0``; use
    :meth:`from_coordinates` when only two coordinates are known.

    Attributes:
        x: First cube coordinate.
        y: Second cube coordinate.
        z: Third cube coordinate.
    """

    x: int
    y: int
    z: int

    # -- Construction ----------------------------------------------------

    @classmethod
    def from_coordinates(
        cls,
        *,
        x: Optional[int] = None,
        y: Optional[int] = None,
        z: Optional[int] = None,
    ) -> Hex:
        """Build a hex from at least two coordinates, deriving the third.

        Raises:
            ValueError: If fewer than two coordinates are given.
        """
        if sum(c is None for c in (x, y, z)) > 1:
            raise ValueError(f"need at least two coordinates, got x={x} y={y} z={z}")
        hx = x if x is not None else -y - z
        hy = y if y is not None else -x - z
        hz = z if z is not None else -x - y
        return Hex(hx, hy, hz)

    # -- Access ----------------------------------------------------------

    def coordinate(self, axis: Axis) -> int:
        """Return the coordinate along ``axis``."""
        return getattr(self, Axis(axis).value)

    @property
    def hex_id(self) -> str:
        """Cell identity: the three coordinates concatenated."""
        return f"{self.x}{self.y}{self.z}"

    # -- Movement --------------------------------------------------------

    def shift_top(self, radius: int, main_axis: Axis, move_direction: Axis, occupied: int) -> Hex:
        """Shift to the top-most free cell of this hex's main-axis row.

        Args:
            radius: Grid radius.
            main_axis: Axis held constant along the row.
            move_direction: Axis along which the hex is shifted.
            occupied: Number of cells already filled ahead of this one.

        Returns:
            New hex in the same row.
        """
        row = self.coordinate(main_axis)
        top = (radius if row <= 0 else radius - row) - occupied
        return Hex.from_coordinates(**{
            Axis(main_axis).value: row,
            Axis(move_direction).value: top,
        })

    def __repr__(self) -> str:
        return f"Hex({self.x},{self.y},{self.z})"


@dataclass(frozen=True)
class DataHex:
    """A tile on the board: a position plus its value and spawn index.

    Attributes:
        hex: Cell the tile occupies.
        value: Tile value (a power of two).
        index: Spawn order; lower is older. Used as the merge tie-break
            and never reassigned.
    """

    hex: Hex
    value: int
    index: int = field(default=0)

    @classmethod
    def at(cls, x: int, y: int, z: int, value: int, index: int = 0) -> DataHex:
        return cls(Hex(x, y, z), value, index)

    # -- Position passthrough --------------------------------------------

    @property
    def x(self) -> int:
        return self.hex.x

    @property
    def y(self) -> int:
        return self.hex.y

    @property
    def z(self) -> int:
        return self.hex.z

    @property
    def hex_id(self) -> str:
        return self.hex.hex_id

    def coordinate(self, axis: Axis) -> int:
        return self.hex.coordinate(axis)

    # -- Derived copies --------------------------------------------------

    def shift_top(self, radius: int, main_axis: Axis, move_direction: Axis, occupied: int) -> DataHex:
        """Same as :meth:`Hex.shift_top`, keeping value and index."""
        moved = self.hex.shift_top(radius, main_axis, move_direction, occupied)
        return DataHex(moved, self.value, self.index)

    def update_value(self, new_value: int) -> DataHex:
        """Return a copy with ``new_value``; position and index unchanged."""
        return DataHex(self.hex, new_value, self.index)

    def to_wire(self) -> dict[str, Any]:
        """Wire form sent to the tile service. The index stays local."""
        return {"x": self.x, "y": self.y, "z": self.z, "value": self.value}

    def __repr__(self) -> str:
        return f"DataHex({self.x},{self.y},{self.z} v={self.value} #{self.index})"
