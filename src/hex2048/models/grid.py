"""Hexagonal grid — layout generation and the move/merge engine.

A grid of radius ``r`` holds every cube coordinate within ``r`` steps of
the origin. Moving tiles works row by row: a row is every tile sharing the
main-axis coordinate, and rows never interact.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from hex2048.models.actions import ACTION_SETTINGS, ActionSettings
from hex2048.models.hex import DataHex, Hex
from hex2048.util.ordering import group_by, keys_equal, sort_by

H = TypeVar("H", Hex, DataHex)

HexDictionary = dict[str, H]
"""Cell identity → hex. Sparse for board state, total for the layout."""


@dataclass(frozen=True)
class Grid:
    """A hexagonal region around the origin.

    Attributes:
        radius: Steps from the centre to the edge. Fixed for a session.
    """

    radius: int

    # -- Shape -----------------------------------------------------------

    def axis_max_hexes(self) -> int:
        """Number of cells in the longest axis row."""
        return 1 + 2 * self.radius

    def cell_count(self) -> int:
        """Total number of cells in the grid."""
        return 1 + 3 * self.radius * (self.radius + 1)

    def layout_hexes(self) -> list[Hex]:
        """Every cell of the grid, enumerated by x then y."""
        r = self.radius
        cells: list[Hex] = []
        for x in range(-r, r + 1):
            for y in range(max(-r, -x - r), min(r, r - x) + 1):
                cells.append(Hex(x, y, -x - y))
        return cells

    def contains(self, cell: Hex | DataHex) -> bool:
        """True if the cell lies on this grid."""
        if cell.x + cell.y + cell.z != 0:
            return False
        return max(abs(cell.x), abs(cell.y), abs(cell.z)) <= self.radius

    @staticmethod
    def to_dictionary(hexes: Iterable[H]) -> HexDictionary[H]:
        """Key hexes by cell identity. Later duplicates overwrite earlier."""
        return {h.hex_id: h for h in hexes}

    # -- Moves -----------------------------------------------------------

    def move(self, hexes: Iterable[DataHex], settings: ActionSettings) -> list[DataHex]:
        """Merge and shift tiles in the direction given by ``settings``.

        Each row is sorted by the move-direction coordinate (highest
        first), merged pairwise, then packed against the row's top edge.

        Returns:
            New tiles; one fewer than the input for every merge.
        """
        main_axis, move_direction = settings.main_axis, settings.move_direction
        result: list[DataHex] = []
        for row in group_by(hexes, lambda h: h.coordinate(main_axis)):
            ordered = sort_by(row, lambda h: h.coordinate(move_direction), desc=True)
            merged = self._merge_left(ordered)
            result.extend(
                item.shift_top(self.radius, main_axis, move_direction, i)
                for i, item in enumerate(merged)
            )
        return result

    def has_moves(self, board: Mapping[str, DataHex]) -> bool:
        """True if at least one direction changes which cells are occupied."""
        tiles = list(board.values())
        return any(
            not keys_equal(board, self.to_dictionary(self.move(tiles, settings)))
            for settings in ACTION_SETTINGS.values()
        )

    @staticmethod
    def _merge_left(row: list[DataHex]) -> list[DataHex]:
        """Merge equal neighbours in one ordered row.

        Each tile merges at most once per move. The merged tile keeps the
        lower (older) index.
        """
        pending = list(row)
        result: list[DataHex] = []
        i = 0
        while i < len(pending):
            first = pending[i]
            i += 1
            if i < len(pending) and pending[i].value == first.value:
                second = pending[i]
                i += 1
                keeper = first if first.index < second.index else second
                first = keeper.update_value(first.value + second.value)
            result.append(first)
        return result
