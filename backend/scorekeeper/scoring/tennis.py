"""Tennis scoring engine.
Tracks points -> games -> sets for a best of three match with advantage
games and a 7 point tiebreak at 6-6 in every set."""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..config import (
    GAMES_TO_WIN_SET,
    SETS_IN_MATCH,
    TIEBREAK_POINTS_TO_WIN,
    WIN_MARGIN,
)
from ..exceptions import InvariantViolation
from ..schemas import (
    POINT_SEQUENCE,
    AdvantageGame,
    DeuceGame,
    Event,
    GameOver,
    GameState,
    MatchState,
    NewGame,
    NewMatch,
    NormalGame,
    Player,
    PointScored,
    TiebreakGame,
    match_winner,
    other_player,
    set_winner,
)
from ..services.validation import (
    validate_event,
    validate_player,
    validate_set_scores,
)

logger = logging.getLogger(__name__)


def start_game() -> NormalGame:
    return NormalGame(player1Point="LOVE", player2Point="LOVE")


def start_match() -> MatchState:
    """Initialise a match: three sets at 0-0, no tiebreaks, first set."""
    return MatchState(
        sets=((0, 0), (0, 0), (0, 0)),
        tiebreaks=(None, None, None),
        currentGame=start_game(),
        currentSet=1,
    )


def _next_normal(game: NormalGame, winner: Player) -> GameState:
    points = {"Player1": game.player1Point, "Player2": game.player2Point}
    won, lost = points[winner], points[other_player(winner)]

    if won == "FORTY":
        if lost == "FORTY":
            raise InvariantViolation("Normal game observed at FORTY-FORTY")
        return GameOver(gameWinner=winner)

    points[winner] = POINT_SEQUENCE[POINT_SEQUENCE.index(won) + 1]
    if points["Player1"] == "FORTY" and points["Player2"] == "FORTY":
        return DeuceGame()
    return NormalGame(player1Point=points["Player1"], player2Point=points["Player2"])


def _next_tiebreak(game: TiebreakGame, winner: Player) -> GameState:
    p1 = game.p1Points + (1 if winner == "Player1" else 0)
    p2 = game.p2Points + (1 if winner == "Player2" else 0)
    if max(p1, p2) >= TIEBREAK_POINTS_TO_WIN and abs(p1 - p2) >= WIN_MARGIN:
        return GameOver(gameWinner="Player1" if p1 > p2 else "Player2")
    return TiebreakGame(p1Points=p1, p2Points=p2)


def next_game(game: GameState, winner: Player) -> GameState:
    """Advance a single game by one point won by ``winner``.

    ``GameOver`` is terminal and returned unchanged.
    """
    if isinstance(game, NormalGame):
        return _next_normal(game, winner)
    if isinstance(game, DeuceGame):
        return AdvantageGame(playerAtAdvantage=winner)
    if isinstance(game, AdvantageGame):
        if game.playerAtAdvantage == winner:
            return GameOver(gameWinner=winner)
        return DeuceGame()
    if isinstance(game, TiebreakGame):
        return _next_tiebreak(game, winner)
    if isinstance(game, GameOver):
        return game
    raise InvariantViolation(f"Unknown game state {game!r}")


def _replace(items: Tuple, index: int, value) -> Tuple:
    return items[:index] + (value,) + items[index + 1 :]


def apply_game_result(match: MatchState, game_winner: Player) -> MatchState:
    """Fold a finished game into the set score and decide set and match.

    ``match.currentGame`` must still hold the game that was just finished so a
    completed tiebreak can be recorded against its set.
    """
    set_index = match.currentSet - 1
    p1, p2 = match.sets[set_index]
    games = (p1 + 1, p2) if game_winner == "Player1" else (p1, p2 + 1)
    sets = _replace(match.sets, set_index, games)
    tiebreaks = match.tiebreaks

    finished = match.currentGame
    if isinstance(finished, TiebreakGame):
        final = (
            finished.p1Points + (1 if game_winner == "Player1" else 0),
            finished.p2Points + (1 if game_winner == "Player2" else 0),
        )
        tiebreaks = _replace(tiebreaks, set_index, final)
        logger.debug(
            "Tiebreak in set %d won %s-%s by %s", match.currentSet, *final, game_winner
        )
        next_up: GameState = start_game()
    elif games == (GAMES_TO_WIN_SET, GAMES_TO_WIN_SET):
        logger.debug("Set %d reached 6-6; starting tiebreak", match.currentSet)
        next_up = TiebreakGame()
    else:
        next_up = start_game()

    winner_of_match = match.matchWinner or match_winner(sets)
    current_set = match.currentSet
    won_set = set_winner(games)
    if won_set is not None:
        logger.debug("Set %d won %s-%s by %s", current_set, *games, won_set)
        if winner_of_match is None and current_set < SETS_IN_MATCH:
            current_set += 1
            next_up = start_game()
    if winner_of_match is not None and match.matchWinner is None:
        logger.debug("Match won by %s", winner_of_match)

    return match.model_copy(
        update={
            "sets": sets,
            "tiebreaks": tiebreaks,
            "currentGame": next_up,
            "currentSet": current_set,
            "matchWinner": winner_of_match,
        }
    )


def score_point(match: MatchState, winner: Player) -> MatchState:
    """Score one point for ``winner``; a decided match absorbs further points."""
    winner = validate_player(winner)
    if match.matchWinner is not None:
        logger.debug("Ignoring point for %s; match already won", winner)
        return match

    new_game = next_game(match.currentGame, winner)
    if not isinstance(new_game, GameOver):
        return match.model_copy(update={"currentGame": new_game})

    logger.debug("Game in set %d won by %s", match.currentSet, new_game.gameWinner)
    return apply_game_result(match, new_game.gameWinner)


def update(match: MatchState, event: Any) -> MatchState:
    """Route an external intent onto the engine.

    ``event`` may be a parsed event model or a raw mapping; raw input is
    validated before any state is touched.
    """
    event = validate_event(event)
    if isinstance(event, PointScored):
        return score_point(match, event.player)
    if isinstance(event, NewGame):
        return match.model_copy(update={"currentGame": start_game()})
    if isinstance(event, NewMatch):
        return start_match()
    raise InvariantViolation(f"Unhandled event {event!r}")


def replay(events: Iterable[Any], state: Optional[MatchState] = None) -> MatchState:
    """Fold a sequence of events over ``state`` (a fresh match by default)."""
    if state is None:
        state = start_match()
    for event in events:
        state = update(state, event)
    return state


def summary(match: MatchState) -> dict:
    """JSON-ready record of a snapshot."""
    return match.model_dump(mode="json")


def _game_events(player: Player, points: int) -> List[Event]:
    return [PointScored(player=player) for _ in range(points)]


def record_sets(
    set_scores: Sequence[Sequence[int]], state: Optional[MatchState] = None
) -> Tuple[List[Event], MatchState]:
    """Generate point events to reach the provided set scores.

    Games alternate so no set is decided early; a 7-6 set is settled by a
    7-0 tiebreak for the set winner. The sets are played on top of ``state``
    (a fresh match by default), which should sit at the start of a set.
    """
    events: List[Event] = []

    for p1, p2 in validate_set_scores(set_scores):
        winner: Player = "Player1" if p1 > p2 else "Player2"
        loser = other_player(winner)
        win_games, lose_games = max(p1, p2), min(p1, p2)

        order: List[Player] = [winner, loser] * lose_games
        if lose_games < GAMES_TO_WIN_SET:
            order += [winner] * (win_games - lose_games)
        for side in order:
            events.extend(_game_events(side, len(POINT_SEQUENCE)))
        if lose_games == GAMES_TO_WIN_SET:
            events.extend(_game_events(winner, TIEBREAK_POINTS_TO_WIN))

    if state is None:
        state = start_match()
    for event in events:
        state = score_point(state, event.player)
    return events, state
