"""Player actions and game status.

Each of the six directions holds one cube axis constant (the row) and
shifts tiles along another.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hex2048.models.hex import Axis


class ActionType(str, Enum):
    """Keyboard codes bound to the six move directions."""

    N = "KeyW"
    NE = "KeyE"
    NW = "KeyQ"
    S = "KeyS"
    SE = "KeyD"
    SW = "KeyA"

    @classmethod
    def from_code(cls, code: str) -> ActionType | None:
        """Map a key code to its action, or None for unbound keys."""
        try:
            return cls(code)
        except ValueError:
            return None


@dataclass(frozen=True)
class ActionSettings:
    """Axes involved in one move direction.

    Attributes:
        main_axis: Coordinate shared by all cells of a row.
        move_direction: Coordinate along which tiles are pushed.
    """

    main_axis: Axis
    move_direction: Axis


ACTION_SETTINGS: dict[ActionType, ActionSettings] = {
    ActionType.N: ActionSettings(Axis.X, Axis.Y),
    ActionType.NE: ActionSettings(Axis.Y, Axis.X),
    ActionType.NW: ActionSettings(Axis.Z, Axis.Y),
    ActionType.S: ActionSettings(Axis.X, Axis.Z),
    ActionType.SE: ActionSettings(Axis.Z, Axis.X),
    ActionType.SW: ActionSettings(Axis.Y, Axis.Z),
}

# Letter keys accepted from a terminal, mapped to browser key codes.
KEY_ALIASES: dict[str, str] = {a.value[-1].lower(): a.value for a in ActionType}


class GameStatus(str, Enum):
    """Lifecycle of a game session."""

    PLAYING = "playing"
    GAME_OVER = "game-over"
    ERROR = "network-issues"
