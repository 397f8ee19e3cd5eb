"""
Visible-tile counting for the probability panel.

A tile copy is visible once it sits in the player's hand (the drawn tile
included) or in the discard pile. Every copy that is not visible is still in
the undrawn deck, so the remaining count is also the number of draws that
would hit the target.
"""

from collections.abc import Iterable, Sequence
from fractions import Fraction

from pydantic import BaseModel, ConfigDict

from little_mahjong.logic.enums import RemainingOutlook, TileKind
from little_mahjong.logic.exceptions import InvalidTargetError, VisibilityCountError
from little_mahjong.logic.settings import MAX_CIRCLE_RANK, GameSettings
from little_mahjong.logic.tiles import DRAGON_RANK, UNIVERSAL_RANK, Tile, TileFace, face_name


class TargetSpec(BaseModel):
    """A tile value the player asks about: a circle rank, the dragon or the universal tile."""

    model_config = ConfigDict(frozen=True)

    kind: TileKind
    rank: int | None = None  # only set for circles

    @property
    def face(self) -> TileFace:
        if self.kind == TileKind.DRAGON:
            return (TileKind.DRAGON, DRAGON_RANK)
        if self.kind == TileKind.UNIVERSAL:
            return (TileKind.UNIVERSAL, UNIVERSAL_RANK)
        return (TileKind.CIRCLE, self.rank or 0)

    @property
    def display_name(self) -> str:
        return face_name(self.face)

    def matches(self, tile: Tile) -> bool:
        return tile.face == self.face


class TargetReport(BaseModel):
    """Everything the probability panel shows for one target."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: TargetSpec
    display_name: str
    remaining: int
    total: int
    outlook: RemainingOutlook
    draw_probability: Fraction


DRAGON_TARGET = TargetSpec(kind=TileKind.DRAGON)
UNIVERSAL_TARGET = TargetSpec(kind=TileKind.UNIVERSAL)


def circle_target(rank: int) -> TargetSpec:
    if isinstance(rank, bool) or not 1 <= rank <= MAX_CIRCLE_RANK:
        raise InvalidTargetError(f"Circle rank must be between 1 and {MAX_CIRCLE_RANK}, got {rank!r}")
    return TargetSpec(kind=TileKind.CIRCLE, rank=rank)


def parse_target(value: int | str | TargetSpec) -> TargetSpec:
    """
    Parse a panel target value.

    Accepts a circle rank (1-9), "dragon", "universal", or a TargetSpec.
    """
    if isinstance(value, TargetSpec):
        return value
    if isinstance(value, int):
        return circle_target(value)
    if value == TileKind.DRAGON.value:
        return DRAGON_TARGET
    if value == TileKind.UNIVERSAL.value:
        return UNIVERSAL_TARGET
    raise InvalidTargetError(f"Unknown target {value!r}")


def target_for_tile(tile: Tile) -> TargetSpec:
    if tile.kind == TileKind.CIRCLE:
        return circle_target(tile.rank)
    return TargetSpec(kind=tile.kind)


def total_copies(target: TargetSpec, settings: GameSettings | None = None) -> int:
    """Number of copies of the target in a full deck."""
    settings = settings or GameSettings()
    if target.kind == TileKind.DRAGON:
        return settings.dragon_copies
    if target.kind == TileKind.UNIVERSAL:
        return settings.universal_copies
    if target.rank is None or not 1 <= target.rank <= settings.circle_ranks:
        raise InvalidTargetError(f"Circle rank {target.rank!r} is not in this deck")
    return settings.copies_per_tile


def count_visible(
    target: TargetSpec,
    discard_pile: Iterable[Tile],
    hand: Iterable[Tile],
    drawn_tile: Tile | None = None,
) -> int:
    """Count copies of the target in the discard pile, the hand and the drawn tile."""
    visible = sum(1 for tile in discard_pile if target.matches(tile))
    visible += sum(1 for tile in hand if target.matches(tile))
    if drawn_tile is not None and target.matches(drawn_tile):
        visible += 1
    return visible


def remaining_count(
    target: TargetSpec,
    discard_pile: Iterable[Tile],
    hand: Iterable[Tile],
    drawn_tile: Tile | None = None,
    settings: GameSettings | None = None,
) -> int:
    """
    Copies of the target not yet seen by the player.

    Raises VisibilityCountError when more copies are visible than the deck
    holds, since that can only come from an inconsistent caller.
    """
    total = total_copies(target, settings)
    visible = count_visible(target, discard_pile, hand, drawn_tile)
    remaining = total - visible
    if not 0 <= remaining <= total:
        raise VisibilityCountError(target=target.display_name, total=total, visible=visible)
    return remaining


def distinct_targets(hand: Sequence[Tile]) -> list[TargetSpec]:
    """Distinct targets present in the hand, in hand order."""
    targets: list[TargetSpec] = []
    for tile in hand:
        target = target_for_tile(tile)
        if target not in targets:
            targets.append(target)
    return targets


def default_target(hand: Sequence[Tile]) -> TargetSpec:
    """The panel's default target: the first tile value in the hand, else 1 Circle."""
    targets = distinct_targets(hand)
    return targets[0] if targets else circle_target(1)


def draw_probability(remaining: int, tiles_in_deck: int) -> Fraction:
    """Chance that the next draw is one of the remaining copies."""
    if tiles_in_deck <= 0:
        return Fraction(0)
    return Fraction(remaining, tiles_in_deck)


def remaining_outlook(remaining: int) -> RemainingOutlook:
    if remaining <= 0:
        return RemainingOutlook.IMPOSSIBLE
    if remaining == 1:
        return RemainingOutlook.LAST_CHANCE
    return RemainingOutlook.GOOD_CHANCE


def build_target_report(target: TargetSpec, remaining: int, tiles_in_deck: int, total: int) -> TargetReport:
    return TargetReport(
        target=target,
        display_name=target.display_name,
        remaining=remaining,
        total=total,
        outlook=remaining_outlook(remaining),
        draw_probability=draw_probability(remaining, tiles_in_deck),
    )
