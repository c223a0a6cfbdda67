"""Scoring engines."""

from . import tennis

__all__ = ["tennis"]
