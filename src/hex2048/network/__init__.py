"""Tile service client, wire models and the reference spawn service."""
