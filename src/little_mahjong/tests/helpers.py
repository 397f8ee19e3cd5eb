"""Builders for tiles, decks and sessions used across the unit tests."""

from collections.abc import Sequence

from little_mahjong.logic.deck import Deck, build_deck, create_deck_from_tiles
from little_mahjong.logic.enums import SessionPhase
from little_mahjong.logic.game import start_session
from little_mahjong.logic.state import GameSession
from little_mahjong.logic.tiles import Tile, make_circle, make_dragon, make_universal

FIXED_SEED = "ab" * 32


def tile(code: str, copy: int = 0) -> Tile:
    """Build a tile from a short code: "1".."9" circles, "D" dragon, "U" universal."""
    if code == "D":
        return make_dragon(copy)
    if code == "U":
        return make_universal(copy)
    return make_circle(int(code), copy)


def tiles(codes: str) -> list[Tile]:
    """
    Build distinct tiles from space separated codes.

    Repeated codes get increasing copy numbers so ids stay unique.
    """
    seen: dict[str, int] = {}
    result = []
    for code in codes.split():
        copy = seen.get(code, 0)
        seen[code] = copy + 1
        result.append(tile(code, copy))
    return result


def deck_with_front(codes: str) -> Deck:
    """
    Full deck whose first tiles have the given faces, in order.

    The rest of the deck keeps build order. Dealing takes hand_size - 1 tiles
    for the hand, then the drawn tile, then later draws.
    """
    remaining = list(build_deck().tiles)
    front: list[Tile] = []
    for code in codes.split():
        wanted = tile(code).face
        index = next(i for i, t in enumerate(remaining) if t.face == wanted)
        front.append(remaining.pop(index))
    return create_deck_from_tiles(front + remaining)


def session_from_front(codes: str) -> GameSession:
    """Start a session from a deck arranged with deck_with_front."""
    return start_session(deck_with_front(codes), seed=FIXED_SEED)


def make_session(
    hand: Sequence[Tile],
    drawn: Tile | None,
    *,
    deck: Sequence[Tile] = (),
    discard_pile: Sequence[Tile] = (),
    phase: SessionPhase = SessionPhase.AWAITING_DISCARD,
    can_win: bool = False,
) -> GameSession:
    """Create a GameSession directly, bypassing dealing (composition is not checked)."""
    return GameSession(
        deck=Deck(tiles=tuple(deck)),
        hand=tuple(hand),
        drawn_tile=drawn,
        discard_pile=tuple(discard_pile),
        phase=phase,
        can_win=can_win,
        seed=FIXED_SEED,
    )
