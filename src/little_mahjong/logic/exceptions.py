"""Typed domain exceptions for classroom rule violations.

Domain helpers raise subclasses of GameRuleError instead of raw ValueError.
Illegal player actions are caught at the controller boundary (game.py) and
turned into no-ops; the remaining errors signal caller defects.
"""


class GameRuleError(Exception):
    """Base exception for game rule violations."""


class InvalidActionError(GameRuleError):
    """Action is not valid in the current session state."""


class InvalidDeckError(GameRuleError):
    """Explicit deck does not match the configured tile composition."""


class InvalidTargetError(GameRuleError):
    """Probability target does not name a tile in the deck."""


class VisibilityCountError(GameRuleError):
    """Visible tiles exceed the number of copies in the deck.

    Only reachable when the caller passes a hand or discard pile that
    could not have come from a single deck.
    """

    def __init__(self, *, target: str, total: int, visible: int) -> None:
        self.target = target
        self.total = total
        self.visible = visible
        super().__init__(f"{visible} visible copies of {target}, but the deck only holds {total}")


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain values the engine cannot honour."""
