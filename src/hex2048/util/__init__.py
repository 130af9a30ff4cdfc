"""Shared helpers: ordering utilities and the event bus."""
