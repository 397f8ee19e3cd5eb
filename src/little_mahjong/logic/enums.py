"""
String enum definitions for the classroom game.
"""

from enum import Enum


class TileKind(str, Enum):
    """Kinds of tiles in the classroom deck."""

    CIRCLE = "circle"
    DRAGON = "dragon"
    UNIVERSAL = "universal"


class SessionPhase(str, Enum):
    """Phase of a game session."""

    DEALING = "dealing"
    AWAITING_DISCARD = "awaiting_discard"
    WON = "won"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionPhase.WON, SessionPhase.EXHAUSTED)


class TileSelector(str, Enum):
    """Non-index selectors for the discard action."""

    DRAWN = "drawn"


class RemainingOutlook(str, Enum):
    """How hopeful a target tile is, as shown by the probability panel."""

    IMPOSSIBLE = "impossible"  # every copy is already visible
    LAST_CHANCE = "last_chance"  # one copy left somewhere in the deck
    GOOD_CHANCE = "good_chance"
