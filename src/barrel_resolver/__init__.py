"""Barrel file re-export resolution and reconstruction."""

__version__ = "0.1.0"
