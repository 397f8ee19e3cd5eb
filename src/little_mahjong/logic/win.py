"""
Win detection for the classroom hand (one triplet + one pair).

Each tile is first classified into a tagged slot: the universal tile becomes
Wild, every other tile a Concrete face. The evaluator then partitions the
concrete faces into a triplet group and a pair group, letting wildcards add
copies to those groups. Substitution rules live only here.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import permutations

from pydantic import BaseModel, ConfigDict

from little_mahjong.logic.enums import TileKind
from little_mahjong.logic.settings import SUPPORTED_HAND_SIZE
from little_mahjong.logic.tiles import Tile

TRIPLET_SIZE = 3
PAIR_SIZE = 2

REASON_TRIPLET_PAIR = "triplet + pair"
REASON_TRIPLET_WILD_PAIR = "triplet + wildcard pair"
REASON_WILD_TRIPLET_PAIR = "wildcard triplet + pair"
REASON_WILD_TRIPLET_WILD_PAIR = "wildcard triplet + wildcard pair"

# (triplet completed by wildcard, pair completed by wildcard) -> reason
_REASONS: dict[tuple[bool, bool], str] = {
    (False, False): REASON_TRIPLET_PAIR,
    (False, True): REASON_TRIPLET_WILD_PAIR,
    (True, False): REASON_WILD_TRIPLET_PAIR,
    (True, True): REASON_WILD_TRIPLET_WILD_PAIR,
}


class WinResult(BaseModel):
    """Outcome of evaluating a hand."""

    model_config = ConfigDict(frozen=True)

    is_win: bool = False
    reason: str = ""


NO_WIN = WinResult()


@dataclass(frozen=True)
class Wild:
    """Slot filled by the universal tile; stands for one copy of any face."""


@dataclass(frozen=True)
class Concrete:
    """Slot filled by a regular tile."""

    kind: TileKind
    rank: int


HandSlot = Wild | Concrete


def classify_tile(tile: Tile) -> HandSlot:
    if tile.is_universal:
        return Wild()
    return Concrete(kind=tile.kind, rank=tile.rank)


def _match_triplet_and_pair(group_sizes: list[int], wild_count: int) -> str | None:
    """
    Find the reason a set of concrete groups plus wildcards forms triplet + pair.

    Wildcards only extend existing groups and must all be used. When several
    assignments work, the one needing fewer wildcard-completed groups wins.
    """
    if len(group_sizes) != 2:  # noqa: PLR2004
        return None

    candidates: list[tuple[bool, bool]] = []
    for triplet, pair in permutations(group_sizes):
        if triplet > TRIPLET_SIZE or pair > PAIR_SIZE:
            continue
        if (TRIPLET_SIZE - triplet) + (PAIR_SIZE - pair) != wild_count:
            continue
        candidates.append((triplet < TRIPLET_SIZE, pair < PAIR_SIZE))

    if not candidates:
        return None
    best = min(candidates, key=lambda c: (sum(c), not c[0]))
    return _REASONS[best]


def evaluate_hand(tiles: Iterable[Tile], hand_size: int = SUPPORTED_HAND_SIZE) -> WinResult:
    """
    Decide whether the tiles form one triplet and one pair.

    Pure and order independent. Hands of any size other than hand_size
    are never a win.
    """
    slots = [classify_tile(tile) for tile in tiles]
    if len(slots) != hand_size:
        return NO_WIN

    wild_count = sum(1 for slot in slots if isinstance(slot, Wild))
    frequencies = Counter(slot for slot in slots if isinstance(slot, Concrete))

    reason = _match_triplet_and_pair(sorted(frequencies.values(), reverse=True), wild_count)
    if reason is None:
        return NO_WIN
    return WinResult(is_win=True, reason=reason)


def is_winning_hand(tiles: Iterable[Tile], hand_size: int = SUPPORTED_HAND_SIZE) -> bool:
    return evaluate_hand(tiles, hand_size).is_win
