"""Boundary services (pure helpers, no I/O)."""

from .validation import (
    validate_event,
    validate_match_state,
    validate_player,
    validate_set_scores,
)
from ..exceptions import ValidationError

__all__ = [
    "ValidationError",
    "validate_event",
    "validate_match_state",
    "validate_player",
    "validate_set_scores",
]
