"""
Session transitions for the classroom game.

Every public transition takes a GameSession and returns the next one. Illegal
actions are no-ops: the internal helpers raise InvalidActionError, the public
function logs it and hands back the unchanged session.
"""

from collections.abc import Callable

import structlog
from pydantic import BaseModel, ConfigDict

from little_mahjong.logic import messages
from little_mahjong.logic.deck import Deck, create_deck, deal_opening, draw_tile
from little_mahjong.logic.enums import SessionPhase, TileSelector
from little_mahjong.logic.exceptions import InvalidActionError
from little_mahjong.logic.rng import generate_seed
from little_mahjong.logic.settings import GameSettings, validate_settings
from little_mahjong.logic.state import GameSession
from little_mahjong.logic.tiles import Tile, sort_tiles
from little_mahjong.logic.visibility import (
    TargetReport,
    TargetSpec,
    build_target_report,
    default_target,
    parse_target,
    total_copies,
)
from little_mahjong.logic.visibility import remaining_count as count_remaining
from little_mahjong.logic.win import evaluate_hand

logger = structlog.get_logger()

DiscardSelector = int | TileSelector


class LegalActions(BaseModel):
    """Actions the player may take on the current session."""

    model_config = ConfigDict(frozen=True)

    discard_selectors: tuple[DiscardSelector, ...] = ()
    can_declare_win: bool = False


def start_session(deck: Deck, seed: str = "", settings: GameSettings | None = None) -> GameSession:
    """
    Deal the opening hand from an already shuffled deck.

    The hand gets hand_size - 1 tiles and one more becomes the drawn tile;
    the session then waits for the first discard.
    """
    settings = settings or GameSettings()
    validate_settings(settings)

    dealing = GameSession(deck=deck, seed=seed, settings=settings, phase=SessionPhase.DEALING)
    remaining, hand, drawn = deal_opening(dealing.deck, settings.hand_size)
    win = evaluate_hand((*hand, drawn), settings.hand_size)

    session = dealing.model_copy(
        update={
            "deck": remaining,
            "hand": hand,
            "drawn_tile": drawn,
            "phase": SessionPhase.AWAITING_DISCARD,
            "can_win": win.is_win,
            "message": messages.WIN_AVAILABLE_AT_START if win.is_win else messages.GAME_STARTED,
        }
    )
    logger.info("session started", tiles_in_deck=session.tiles_in_deck, can_win=session.can_win)
    return session


def new_session(seed: str | None = None, settings: GameSettings | None = None) -> GameSession:
    """Start a fresh game with a shuffled deck (random seed unless one is given)."""
    settings = settings or GameSettings()
    validate_settings(settings)
    if seed is None:
        seed = generate_seed()
    return start_session(create_deck(seed, settings), seed=seed, settings=settings)


def reset(session: GameSession | None = None, seed: str | None = None) -> GameSession:
    """Throw the current game away and deal a new one, keeping its settings."""
    settings = session.settings if session is not None else None
    return new_session(seed=seed, settings=settings)


def _require_awaiting_discard(session: GameSession) -> Tile:
    """Return the drawn tile, or raise if the session is not waiting for a discard."""
    if session.phase != SessionPhase.AWAITING_DISCARD or session.drawn_tile is None:
        raise InvalidActionError(f"cannot act in phase {session.phase.value}")
    return session.drawn_tile


def _apply_discard(session: GameSession, selector: DiscardSelector) -> GameSession:
    drawn = _require_awaiting_discard(session)

    if isinstance(selector, str):
        if selector != TileSelector.DRAWN:
            raise InvalidActionError(f"unknown selector {selector!r}")
        discarded = drawn
        hand = session.hand
    elif isinstance(selector, int) and not isinstance(selector, bool):
        if not 0 <= selector < len(session.hand):
            raise InvalidActionError(f"no tile at hand index {selector}")
        discarded = session.hand[selector]
        hand = (*session.hand[:selector], *session.hand[selector + 1 :], drawn)
    else:
        raise InvalidActionError(f"unknown selector {selector!r}")

    hand = sort_tiles(hand)
    discard_pile = (*session.discard_pile, discarded)
    deck, next_tile = draw_tile(session.deck)
    turn_count = session.turn_count + 1

    if next_tile is None:
        logger.info("deck exhausted", discarded=discarded.id, turn_count=turn_count)
        return session.model_copy(
            update={
                "deck": deck,
                "hand": hand,
                "drawn_tile": None,
                "discard_pile": discard_pile,
                "phase": SessionPhase.EXHAUSTED,
                "can_win": False,
                "message": messages.DECK_EXHAUSTED,
                "turn_count": turn_count,
            }
        )

    win = evaluate_hand((*hand, next_tile), session.settings.hand_size)
    logger.debug("tile discarded", discarded=discarded.id, drawn=next_tile.id, can_win=win.is_win)
    return session.model_copy(
        update={
            "deck": deck,
            "hand": hand,
            "drawn_tile": next_tile,
            "discard_pile": discard_pile,
            "can_win": win.is_win,
            "message": messages.WIN_AVAILABLE if win.is_win else messages.discarded_and_drew(discarded.display_name),
            "turn_count": turn_count,
        }
    )


def _apply_declare_win(session: GameSession) -> GameSession:
    _require_awaiting_discard(session)
    if not session.can_win:
        raise InvalidActionError("hand is not a winning hand")

    win = evaluate_hand(session.current_tiles, session.settings.hand_size)
    if not win.is_win:
        raise InvalidActionError("hand is not a winning hand")

    logger.info("win declared", reason=win.reason, turn_count=session.turn_count)
    return session.model_copy(
        update={
            "hand": sort_tiles(session.current_tiles),
            "drawn_tile": None,
            "phase": SessionPhase.WON,
            "can_win": False,
            "win_result": win,
            "message": messages.GAME_WON,
        }
    )


def _ignoring_illegal(action: str, session: GameSession, apply: Callable[[], GameSession]) -> GameSession:
    try:
        return apply()
    except InvalidActionError as e:
        logger.warning("ignored illegal action", action=action, phase=session.phase, reason=str(e))
        return session


def discard(session: GameSession, selector: DiscardSelector) -> GameSession:
    """
    Discard a hand tile (by index) or the drawn tile (TileSelector.DRAWN).

    A discarded hand tile is replaced by the drawn tile, then the next tile
    is drawn. An empty deck ends the game as exhausted.
    """
    return _ignoring_illegal("discard", session, lambda: _apply_discard(session, selector))


def declare_win(session: GameSession) -> GameSession:
    """Declare the win; only legal while a discard is awaited and the hand wins."""
    return _ignoring_illegal("declare_win", session, lambda: _apply_declare_win(session))


def remaining_count(session: GameSession, target: TargetSpec | int | str) -> int:
    """Copies of the target not yet visible to the player in this session."""
    return count_remaining(
        parse_target(target),
        session.discard_pile,
        session.hand,
        session.drawn_tile,
        session.settings,
    )


def target_report(session: GameSession, target: TargetSpec | int | str | None = None) -> TargetReport:
    """
    Probability panel data for a target.

    Defaults to the first tile value in the hand, like the panel does.
    """
    spec = default_target(session.hand) if target is None else parse_target(target)
    return build_target_report(
        spec,
        remaining=remaining_count(session, spec),
        tiles_in_deck=session.tiles_in_deck,
        total=total_copies(spec, session.settings),
    )


def legal_actions(session: GameSession) -> LegalActions:
    if session.phase != SessionPhase.AWAITING_DISCARD or session.drawn_tile is None:
        return LegalActions()
    selectors: tuple[DiscardSelector, ...] = (*range(len(session.hand)), TileSelector.DRAWN)
    return LegalActions(discard_selectors=selectors, can_declare_win=session.can_win)
