import logging
from typing import Any, List, Mapping, Sequence, Tuple

import pydantic
from pydantic import TypeAdapter

from ..config import GAMES_TO_WIN_SET, SETS_IN_MATCH, SETS_TO_WIN
from ..exceptions import ValidationError
from ..schemas import (
    Event,
    MatchState,
    NewGame,
    NewMatch,
    Player,
    PointScored,
    set_winner,
)

logger = logging.getLogger(__name__)

_EVENT_ADAPTER = TypeAdapter(Event)
_PLAYER_ADAPTER = TypeAdapter(Player)

# Completed set scores the engine can actually produce, winner first.
_COMPLETED_SETS = {(GAMES_TO_WIN_SET, lost) for lost in range(GAMES_TO_WIN_SET - 1)}
_COMPLETED_SETS |= {
    (GAMES_TO_WIN_SET + 1, GAMES_TO_WIN_SET - 1),
    (GAMES_TO_WIN_SET + 1, GAMES_TO_WIN_SET),
}


def _from_pydantic(what: str, exc: pydantic.ValidationError) -> ValidationError:
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ())) or what
    message = first.get("msg", "invalid value")
    logger.info("Rejected %s: %s (%d error(s))", what, message, len(errors))
    return ValidationError(f"Invalid {what} at {location}: {message}", errors=errors)


def validate_match_state(data: Any) -> MatchState:
    """Parse an externally supplied snapshot record into a ``MatchState``.

    The record must match the snapshot shape exactly: three set pairs, three
    tiebreak slots, a tagged ``currentGame``, ``currentSet`` in 1..3 and a
    ``matchWinner`` that agrees with the set scores. Nothing is coerced.
    """
    if isinstance(data, MatchState):
        return data
    if not isinstance(data, Mapping):
        logger.info("Rejected match state of type %s", type(data).__name__)
        raise ValidationError("Match state must be an object.")
    try:
        return MatchState.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        raise _from_pydantic("match state", exc) from exc


def validate_event(data: Any) -> Event:
    """Parse an external intent (``PointScored``, ``NewGame``, ``NewMatch``)."""
    if isinstance(data, (PointScored, NewGame, NewMatch)):
        return data
    if not isinstance(data, Mapping):
        logger.info("Rejected event of type %s", type(data).__name__)
        raise ValidationError("Event must be an object with a 'kind' field.")
    try:
        return _EVENT_ADAPTER.validate_python(dict(data))
    except pydantic.ValidationError as exc:
        raise _from_pydantic("event", exc) from exc


def validate_player(player: Any) -> Player:
    """Check a point winner is one of the two players."""
    try:
        return _PLAYER_ADAPTER.validate_python(player)
    except pydantic.ValidationError as exc:
        raise _from_pydantic("player", exc) from exc


def validate_set_scores(set_scores: Sequence[Any]) -> List[Tuple[int, int]]:
    """Validate a list of completed set scores for a single match.

    Rules:
    - At least one set is required, at most three
    - Each set is a 2-item ``(Player1 games, Player2 games)`` pair
    - Scores must be integers >= 0 (booleans are rejected)
    - Each set must be a finished set: 6-0 to 6-4, 7-5 or 7-6 either way
    - No set may follow the set that decided the match
    """
    if (
        not isinstance(set_scores, Sequence)
        or isinstance(set_scores, (str, bytes))
        or len(set_scores) == 0
    ):
        raise ValidationError("At least one set is required.")
    if len(set_scores) > SETS_IN_MATCH:
        raise ValidationError(f"Too many sets. Max allowed is {SETS_IN_MATCH}.")

    normalized: List[Tuple[int, int]] = []
    wins = {"Player1": 0, "Player2": 0}
    for i, pair in enumerate(set_scores, start=1):
        if max(wins.values()) >= SETS_TO_WIN:
            raise ValidationError(f"Set #{i} is played after the match was decided.")
        if (
            not isinstance(pair, Sequence)
            or isinstance(pair, (str, bytes))
            or len(pair) != 2
        ):
            raise ValidationError(f"Set #{i} must be a pair of game counts.")

        p1, p2 = pair
        # bool is a subclass of int
        if isinstance(p1, bool) or isinstance(p2, bool):
            raise ValidationError(f"Set #{i} scores must be integers (not booleans).")
        if not isinstance(p1, int) or not isinstance(p2, int):
            raise ValidationError(f"Set #{i} scores must be integers.")
        if p1 < 0 or p2 < 0:
            raise ValidationError(f"Set #{i} scores must be >= 0.")
        if (max(p1, p2), min(p1, p2)) not in _COMPLETED_SETS:
            raise ValidationError(f"Set #{i} ({p1}-{p2}) is not a completed set.")

        winner = set_winner((p1, p2))
        wins[winner] += 1
        normalized.append((p1, p2))

    return normalized
