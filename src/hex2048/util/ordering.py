"""Ordering and grouping helpers shared by the grid and the session."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, TypeVar

T = TypeVar("T")

Key = Callable[[Any], Any]


def _key_func(key: str | Key) -> Key:
    if callable(key):
        return key
    return lambda item: getattr(item, key)


def group_by(items: Iterable[T], key: str | Key) -> list[list[T]]:
    """Split items into groups sharing the same key, in first-seen order."""
    get = _key_func(key)
    groups: dict[Hashable, list[T]] = {}
    for item in items:
        groups.setdefault(get(item), []).append(item)
    return list(groups.values())


def sort_by(items: Iterable[T], key: str | Key, desc: bool = False) -> list[T]:
    """Return a new list sorted by key. Stable in both directions."""
    return sorted(items, key=_key_func(key), reverse=desc)


def keys_equal(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> bool:
    """True if both mappings hold the same set of keys."""
    return a.keys() == b.keys()


def is_in_range(value: float, low: float, high: float) -> bool:
    """Inclusive range check; bounds may be given in either order."""
    return (value - low) * (value - high) <= 0
