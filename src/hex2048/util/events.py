"""Typed event bus — decoupled communication inside a game session.

Input devices and the tile client post events; the session reacts to
them and publishes what changed.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar, Type

from hex2048.models.hex import DataHex

T = TypeVar("T")


# -- Input events --------------------------------------------------------

@dataclass(frozen=True)
class KeyDown:
    """A key was pressed."""
    code: str


@dataclass(frozen=True)
class KeyUp:
    """A key was released."""
    code: str


# -- Remote data events --------------------------------------------------

@dataclass(frozen=True)
class TilesArrived:
    """The tile service answered with newly spawned tiles."""
    tiles: tuple[DataHex, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FetchFailed:
    """The tile service could not be reached or answered garbage."""
    reason: str


# -- Session events ------------------------------------------------------

@dataclass(frozen=True)
class BoardChanged:
    """The board was replaced (after a move or after new tiles)."""
    board: dict[str, DataHex] = field(hash=False, compare=False)


@dataclass(frozen=True)
class StatusChanged:
    """The game status moved on (game over or network issues)."""
    status: str


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(KeyDown, lambda e: print(e.code))
        bus.emit(KeyDown(code="KeyW"))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in self._handlers.get(type(event), []):
            handler(event)
