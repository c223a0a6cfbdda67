"""Match snapshot, game state and event models, plus the set and match rules."""

from typing import Annotated, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from .config import GAMES_TO_WIN_SET, SETS_IN_MATCH, SETS_TO_WIN, WIN_MARGIN

Player = Literal["Player1", "Player2"]
PointValue = Literal["LOVE", "FIFTEEN", "THIRTY", "FORTY"]

# Ordered pre-deuce points; index is the number of points won in the game.
POINT_SEQUENCE: Tuple[PointValue, ...] = ("LOVE", "FIFTEEN", "THIRTY", "FORTY")

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
ScorePair = Tuple[NonNegativeInt, NonNegativeInt]


def other_player(player: Player) -> Player:
    return "Player2" if player == "Player1" else "Player1"


def set_winner(games: ScorePair) -> Optional[Player]:
    """Return the winner of a set from its game count, if decided.

    A set is won with at least six games and a two game lead, or 7-6 once a
    tiebreak has been played.
    """
    p1, p2 = games
    if p1 >= GAMES_TO_WIN_SET and p1 - p2 >= WIN_MARGIN:
        return "Player1"
    if p2 >= GAMES_TO_WIN_SET and p2 - p1 >= WIN_MARGIN:
        return "Player2"
    if (p1, p2) == (GAMES_TO_WIN_SET + 1, GAMES_TO_WIN_SET):
        return "Player1"
    if (p2, p1) == (GAMES_TO_WIN_SET + 1, GAMES_TO_WIN_SET):
        return "Player2"
    return None


def match_winner(sets: Sequence[ScorePair]) -> Optional[Player]:
    """Return the player who has won two sets, if any."""
    results = [set_winner(games) for games in sets]
    if results.count("Player1") >= SETS_TO_WIN:
        return "Player1"
    if results.count("Player2") >= SETS_TO_WIN:
        return "Player2"
    return None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class NormalGame(_Frozen):
    kind: Literal["Normal"] = "Normal"
    player1Point: PointValue
    player2Point: PointValue

    @model_validator(mode="after")
    def _reject_forty_all(self):
        # 40-40 is represented by DeuceGame.
        if self.player1Point == "FORTY" and self.player2Point == "FORTY":
            raise ValueError("FORTY-FORTY must be represented as Deuce")
        return self


class DeuceGame(_Frozen):
    kind: Literal["Deuce"] = "Deuce"


class AdvantageGame(_Frozen):
    kind: Literal["Advantage"] = "Advantage"
    playerAtAdvantage: Player


class TiebreakGame(_Frozen):
    kind: Literal["Tiebreak"] = "Tiebreak"
    p1Points: NonNegativeInt = 0
    p2Points: NonNegativeInt = 0


class GameOver(_Frozen):
    kind: Literal["GameOver"] = "GameOver"
    gameWinner: Player


GameState = Annotated[
    Union[NormalGame, DeuceGame, AdvantageGame, TiebreakGame, GameOver],
    Field(discriminator="kind"),
]


class MatchState(_Frozen):
    sets: Tuple[ScorePair, ScorePair, ScorePair]
    tiebreaks: Tuple[Optional[ScorePair], Optional[ScorePair], Optional[ScorePair]]
    currentGame: GameState
    currentSet: Annotated[StrictInt, Field(ge=1, le=SETS_IN_MATCH)]
    matchWinner: Optional[Player] = None

    @model_validator(mode="after")
    def _check_match_winner(self):
        derived = match_winner(self.sets)
        if self.matchWinner != derived:
            raise ValueError(
                f"matchWinner {self.matchWinner!r} does not agree with sets "
                f"(expected {derived!r})"
            )
        return self


class PointScored(_Frozen):
    kind: Literal["PointScored"] = "PointScored"
    player: Player


class NewGame(_Frozen):
    kind: Literal["NewGame"] = "NewGame"


class NewMatch(_Frozen):
    kind: Literal["NewMatch"] = "NewMatch"


Event = Annotated[
    Union[PointScored, NewGame, NewMatch],
    Field(discriminator="kind"),
]
