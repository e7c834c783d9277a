"""Cooperative boss raid game engine with a small JSON CRDT document model."""

__version__ = "0.1.0"