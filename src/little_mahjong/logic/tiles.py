"""
Tile representation utilities for the classroom deck.
"""

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from little_mahjong.logic.enums import TileKind

# sentinel ranks for the non-numbered tiles
DRAGON_RANK = 10
UNIVERSAL_RANK = 0

DRAGON_NAME = "Red Dragon"
UNIVERSAL_NAME = "White Universal"

# canonical hand order: circles first, then the dragon, the universal tile last
KIND_ORDER: dict[TileKind, int] = {
    TileKind.CIRCLE: 0,
    TileKind.DRAGON: 1,
    TileKind.UNIVERSAL: 2,
}

TileFace = tuple[TileKind, int]


class Tile(BaseModel):
    """Immutable tile. Identity is the id, game logic compares faces."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: TileKind
    rank: int
    display_name: str

    @property
    def face(self) -> TileFace:
        return (self.kind, self.rank)

    @property
    def is_universal(self) -> bool:
        return self.kind == TileKind.UNIVERSAL


def circle_name(rank: int) -> str:
    return f"{rank} Circle"


def make_circle(rank: int, copy: int = 0) -> Tile:
    """Create a numbered circle tile."""
    return Tile(id=f"circle-{rank}-{copy}", kind=TileKind.CIRCLE, rank=rank, display_name=circle_name(rank))


def make_dragon(copy: int = 0) -> Tile:
    """Create a red dragon tile."""
    return Tile(id=f"dragon-red-{copy}", kind=TileKind.DRAGON, rank=DRAGON_RANK, display_name=DRAGON_NAME)


def make_universal(copy: int = 0) -> Tile:
    """
    Create the universal (wildcard) tile.

    The classroom deck has a single universal tile with the plain id
    "universal-white"; extra copies get a numeric suffix.
    """
    tile_id = "universal-white" if copy == 0 else f"universal-white-{copy}"
    return Tile(id=tile_id, kind=TileKind.UNIVERSAL, rank=UNIVERSAL_RANK, display_name=UNIVERSAL_NAME)


def face_name(face: TileFace) -> str:
    """Display name for a tile face."""
    kind, rank = face
    if kind == TileKind.DRAGON:
        return DRAGON_NAME
    if kind == TileKind.UNIVERSAL:
        return UNIVERSAL_NAME
    return circle_name(rank)


def tile_sort_key(tile: Tile) -> tuple[int, int]:
    return (KIND_ORDER[tile.kind], tile.rank)


def sort_tiles(tiles: Iterable[Tile]) -> tuple[Tile, ...]:
    """
    Sort tiles into canonical hand order.

    Stable: tiles with the same face keep their relative order.
    """
    return tuple(sorted(tiles, key=tile_sort_key))


def count_faces(tiles: Iterable[Tile]) -> Counter[TileFace]:
    """Count tiles per face."""
    return Counter(tile.face for tile in tiles)
