import pytest
from scorekeeper.schemas import NewGame, NewMatch, PointScored, TiebreakGame
from scorekeeper.services import (
    ValidationError,
    validate_event,
    validate_match_state,
    validate_player,
    validate_set_scores,
)


def _snapshot(**overrides):
    data = {
        "sets": [[6, 3], [2, 1], [0, 0]],
        "tiebreaks": [None, None, None],
        "currentGame": {"kind": "Normal", "player1Point": "THIRTY", "player2Point": "LOVE"},
        "currentSet": 2,
        "matchWinner": None,
    }
    data.update(overrides)
    return data


def test_accepts_valid_snapshot() -> None:
    state = validate_match_state(_snapshot())
    assert state.sets == ((6, 3), (2, 1), (0, 0))
    assert state.currentGame.player1Point == "THIRTY"


def test_accepts_finished_snapshot_with_tiebreak() -> None:
    state = validate_match_state(
        _snapshot(
            sets=[[7, 6], [6, 2], [0, 0]],
            tiebreaks=[[9, 7], None, None],
            currentGame={"kind": "Normal", "player1Point": "LOVE", "player2Point": "LOVE"},
            matchWinner="Player1",
        )
    )
    assert state.matchWinner == "Player1"
    assert state.tiebreaks[0] == (9, 7)


def test_accepts_tiebreak_game() -> None:
    state = validate_match_state(
        _snapshot(
            sets=[[6, 6], [0, 0], [0, 0]],
            currentSet=1,
            currentGame={"kind": "Tiebreak", "p1Points": 4, "p2Points": 2},
        )
    )
    assert state.currentGame == TiebreakGame(p1Points=4, p2Points=2)


@pytest.mark.parametrize(
    "overrides",
    [
        {"currentSet": 0},
        {"currentSet": 4},
        {"currentSet": True},
        {"currentSet": "2"},
        {"sets": [[6, 3], [2, 1]]},
        {"sets": [[6, 3], [2, -1], [0, 0]]},
        {"sets": [[6, 3], ["2", 1], [0, 0]]},
        {"tiebreaks": [[7], None, None]},
        {"tiebreaks": [None, None]},
        {"currentGame": {"kind": "Bogus"}},
        {"currentGame": {"kind": "Normal", "player1Point": "FORTY", "player2Point": "FORTY"}},
        {"currentGame": {"kind": "Normal", "player1Point": "FIFTY", "player2Point": "LOVE"}},
        {"currentGame": {"kind": "Advantage", "playerAtAdvantage": "Player3"}},
        {"currentGame": {"kind": "Tiebreak", "p1Points": -1, "p2Points": 0}},
        {"currentGame": {"kind": "Deuce", "extra": 1}},
        {"matchWinner": "Player1"},
        {"matchWinner": "Player3"},
        {"unexpected": "field"},
    ],
    ids=[
        "set-zero",
        "set-four",
        "set-bool",
        "set-string",
        "two-sets",
        "negative-games",
        "string-games",
        "short-tiebreak",
        "two-tiebreaks",
        "unknown-kind",
        "forty-all",
        "unknown-point",
        "unknown-player",
        "negative-tiebreak",
        "extra-game-field",
        "winner-disagrees",
        "winner-unknown",
        "extra-field",
    ],
)
def test_rejects_malformed_snapshot(overrides) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_match_state(_snapshot(**overrides))
    assert exc.value.code == "validation_error"
    assert exc.value.errors


def test_rejects_missing_field() -> None:
    data = _snapshot()
    del data["currentGame"]
    with pytest.raises(ValidationError, match="currentGame"):
        validate_match_state(data)


@pytest.mark.parametrize("data", [None, "state", [1, 2, 3]], ids=["none", "string", "list"])
def test_rejects_non_mapping_snapshot(data) -> None:
    with pytest.raises(ValidationError, match="must be an object"):
        validate_match_state(data)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"kind": "PointScored", "player": "Player2"}, PointScored(player="Player2")),
        ({"kind": "NewGame"}, NewGame()),
        ({"kind": "NewMatch"}, NewMatch()),
    ],
)
def test_accepts_events(raw, expected) -> None:
    assert validate_event(raw) == expected


def test_passes_parsed_events_through() -> None:
    event = PointScored(player="Player1")
    assert validate_event(event) is event


@pytest.mark.parametrize(
    "raw",
    [
        {"kind": "Undo"},
        {},
        {"kind": "PointScored"},
        {"kind": "PointScored", "player": "Player3"},
        {"kind": "PointScored", "player": "player1"},
        {"kind": "NewGame", "player": "Player1"},
        "PointScored",
        None,
    ],
    ids=[
        "unknown-kind",
        "no-kind",
        "no-player",
        "unknown-player",
        "wrong-case",
        "extra-field",
        "string",
        "none",
    ],
)
def test_rejects_malformed_events(raw) -> None:
    with pytest.raises(ValidationError):
        validate_event(raw)


def test_accepts_valid_sets() -> None:
    assert validate_set_scores([[6, 4]]) == [(6, 4)]
    assert validate_set_scores([(6, 4), (6, 7), (7, 5)]) == [(6, 4), (6, 7), (7, 5)]


@pytest.mark.parametrize(
    "sets, msg",
    [
        ([], "At least one set"),
        ("not a list", "At least one set"),
        ([(6, 0)] * 4, "Too many sets"),
        ([(6, 4), (6, 3), (6, 0)], "after the match was decided"),
        ([6], "pair of game counts"),
        ([(6, 4, 1)], "pair of game counts"),
        ([(True, 4)], "not booleans"),
        ([("6", 4)], "must be integers"),
        ([(-1, 6)], ">= 0"),
        ([(6, 5)], "not a completed set"),
        ([(8, 6)], "not a completed set"),
        ([(5, 3)], "not a completed set"),
    ],
    ids=[
        "empty",
        "not-a-list",
        "too-many",
        "after-decided",
        "not-a-pair",
        "triple",
        "boolean",
        "string",
        "negative",
        "six-five",
        "eight-six",
        "short-set",
    ],
)
def test_rejects_invalid_sets(sets, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_set_scores(sets)  # type: ignore[arg-type]
    assert msg.lower() in str(exc.value).lower()


def test_validate_player() -> None:
    assert validate_player("Player1") == "Player1"
    with pytest.raises(ValidationError):
        validate_player("Player3")
