"""Chunk visualizer package initialisation."""

__version__ = "0.1.0"
