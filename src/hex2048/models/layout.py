"""Axial layout — converts cube coordinates to pixel space.

Flat-top orientation only. Reference:
https://www.redblobgames.com/grids/hexagons/implementation.html#layout
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property

from hex2048.models.grid import Grid
from hex2048.models.hex import DataHex, Hex


@dataclass(frozen=True)
class Orientation:
    """Forward matrix and corner start angle (in sixths of a turn)."""

    f0: float
    f1: float
    f2: float
    f3: float
    start_angle: float


FLAT_ORIENTATION = Orientation(
    f0=3 / 2,
    f1=0.0,
    f2=math.sqrt(3) / 2,
    f3=math.sqrt(3),
    start_angle=0.0,
)


@dataclass(frozen=True)
class Point:
    """A 2D pixel coordinate."""

    x: float
    y: float


class Layout:
    """Pixel geometry for hexes of one size.

    Args:
        size: Distance from a hex centre to its corners, in pixels.
    """

    orientation: Orientation = FLAT_ORIENTATION

    def __init__(self, size: float) -> None:
        self._size = size

    @classmethod
    def for_field(cls, field_width: float, grid: Grid) -> Layout:
        """Size hexes so the longest row fits across ``field_width``."""
        return cls(math.floor(field_width / (grid.axis_max_hexes() * math.sqrt(3))))

    @property
    def size(self) -> float:
        return self._size

    def center_of(self, hex: Hex | DataHex) -> Point:
        """Pixel centre of a hex."""
        m = self.orientation
        x = (m.f0 * hex.x + m.f1 * hex.z) * self._size
        y = (m.f2 * hex.x + m.f3 * hex.z) * self._size
        return Point(x, y)

    def point_dictionary(self, hexes: Mapping[str, Hex | DataHex]) -> dict[str, Point]:
        """Pixel centre for every entry, under the same keys."""
        return {hex_id: self.center_of(h) for hex_id, h in hexes.items()}

    @cached_property
    def _corners(self) -> tuple[Point, ...]:
        corners = []
        for i in range(6):
            angle = 2 * math.pi * (self.orientation.start_angle - i) / 6.0
            corners.append(Point(self._size * math.cos(angle), self._size * math.sin(angle)))
        return tuple(corners)

    def corner_offsets(self) -> list[Point]:
        """The six corners relative to any hex centre."""
        return list(self._corners)

    def corner_points_attr(self) -> str:
        """Corners as an SVG ``points`` attribute, e.g. ``"10.0,0.0 5.0,-8.66 ..."``."""
        return " ".join(f"{p.x},{p.y}" for p in self._corners)
