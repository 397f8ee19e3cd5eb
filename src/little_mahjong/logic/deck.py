"""
Deck state and operations for the classroom game.

The deck is built once per session from a fixed multiset and shuffled with a
seeded Fisher-Yates permutation. Tiles are drawn from the front; the deck is
never rebuilt mid-game.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from little_mahjong.logic.enums import TileKind
from little_mahjong.logic.exceptions import InvalidDeckError
from little_mahjong.logic.rng import create_deck_rng, fisher_yates_shuffle
from little_mahjong.logic.settings import GameSettings
from little_mahjong.logic.tiles import (
    DRAGON_RANK,
    UNIVERSAL_RANK,
    Tile,
    TileFace,
    count_faces,
    make_circle,
    make_dragon,
    make_universal,
    sort_tiles,
)


class Deck(BaseModel):
    """Immutable ordered deck of undrawn tiles."""

    model_config = ConfigDict(frozen=True)

    tiles: tuple[Tile, ...] = ()

    def __len__(self) -> int:
        return len(self.tiles)


def deck_composition(settings: GameSettings | None = None) -> dict[TileFace, int]:
    """Expected number of copies per tile face in a freshly built deck."""
    settings = settings or GameSettings()
    composition: dict[TileFace, int] = {
        (TileKind.CIRCLE, rank): settings.copies_per_tile for rank in range(1, settings.circle_ranks + 1)
    }
    if settings.dragon_copies:
        composition[(TileKind.DRAGON, DRAGON_RANK)] = settings.dragon_copies
    if settings.universal_copies:
        composition[(TileKind.UNIVERSAL, UNIVERSAL_RANK)] = settings.universal_copies
    return composition


def build_deck(settings: GameSettings | None = None) -> Deck:
    """
    Enumerate the unshuffled deck.

    Circles rank by rank (1-9, four copies each), then the dragons, then the
    universal tile: 41 tiles with the default settings.
    """
    settings = settings or GameSettings()
    tiles: list[Tile] = [
        make_circle(rank, copy)
        for rank in range(1, settings.circle_ranks + 1)
        for copy in range(settings.copies_per_tile)
    ]
    tiles.extend(make_dragon(copy) for copy in range(settings.dragon_copies))
    tiles.extend(make_universal(copy) for copy in range(settings.universal_copies))
    return Deck(tiles=tuple(tiles))


def shuffle_deck(deck: Deck, seed: str) -> Deck:
    """Return a uniformly shuffled copy of the deck, reproducible from the seed."""
    shuffled = fisher_yates_shuffle(deck.tiles, create_deck_rng(seed))
    return deck.model_copy(update={"tiles": tuple(shuffled)})


def create_deck(seed: str, settings: GameSettings | None = None) -> Deck:
    """Build and shuffle a deck for a new session."""
    return shuffle_deck(build_deck(settings), seed)


def create_deck_from_tiles(tiles: Sequence[Tile], settings: GameSettings | None = None) -> Deck:
    """
    Create a deck from explicit tile order (for tests and replays).

    The tiles must form exactly the configured multiset with unique ids.
    """
    settings = settings or GameSettings()
    if len(tiles) != settings.deck_size:
        raise InvalidDeckError(f"Expected {settings.deck_size} tiles, got {len(tiles)}")
    if len({tile.id for tile in tiles}) != len(tiles):
        raise InvalidDeckError("All tile ids must be unique")
    if count_faces(tiles) != deck_composition(settings):
        raise InvalidDeckError("Tile faces do not match the deck composition")
    return Deck(tiles=tuple(tiles))


def draw_tile(deck: Deck) -> tuple[Deck, Tile | None]:
    """Draw from the front of the deck. Returns (new_deck, tile) or (deck, None) if empty."""
    if not deck.tiles:
        return deck, None
    tile = deck.tiles[0]
    return deck.model_copy(update={"tiles": deck.tiles[1:]}), tile


def deal_opening(deck: Deck, hand_size: int) -> tuple[Deck, tuple[Tile, ...], Tile]:
    """
    Deal the opening hand (hand_size - 1 tiles) and the first drawn tile.

    Returns (remaining_deck, sorted_hand, drawn_tile).
    """
    if len(deck) < hand_size:
        raise InvalidDeckError(f"Deck has {len(deck)} tiles, need at least {hand_size} for dealing")
    hand = sort_tiles(deck.tiles[: hand_size - 1])
    drawn = deck.tiles[hand_size - 1]
    return deck.model_copy(update={"tiles": deck.tiles[hand_size:]}), hand, drawn


def is_deck_exhausted(deck: Deck) -> bool:
    """Check if no tiles are left to draw."""
    return len(deck.tiles) == 0


def tiles_remaining(deck: Deck) -> int:
    """Count undrawn tiles."""
    return len(deck.tiles)
