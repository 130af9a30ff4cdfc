"""Hexagonal 2048 — cube-coordinate grid, merge engine and tile-spawn client."""

__version__ = "0.1.0"
