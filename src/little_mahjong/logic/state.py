"""
Game session model for the classroom game.
"""

from pydantic import BaseModel, ConfigDict, Field

from little_mahjong.logic.deck import Deck
from little_mahjong.logic.enums import SessionPhase
from little_mahjong.logic.messages import WELCOME
from little_mahjong.logic.settings import GameSettings
from little_mahjong.logic.tiles import Tile
from little_mahjong.logic.win import WinResult


class GameSession(BaseModel):
    """
    Immutable aggregate for a single game.

    Transitions in game.py return a new session; the previous value is
    never modified.
    """

    model_config = ConfigDict(frozen=True)

    deck: Deck = Field(default_factory=Deck)  # undrawn tiles
    hand: tuple[Tile, ...] = ()  # canonical order, drawn tile excluded
    drawn_tile: Tile | None = None  # present exactly while awaiting a discard
    discard_pile: tuple[Tile, ...] = ()  # append-only
    phase: SessionPhase = SessionPhase.DEALING
    can_win: bool = False
    win_result: WinResult | None = None  # set only when the win is declared
    message: str = WELCOME
    seed: str = ""
    turn_count: int = 0  # completed discards
    settings: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal

    @property
    def tiles_in_deck(self) -> int:
        return len(self.deck.tiles)

    @property
    def total_tiles(self) -> int:
        """Tiles across deck, hand, drawn tile and discard pile."""
        drawn = 1 if self.drawn_tile is not None else 0
        return self.tiles_in_deck + len(self.hand) + drawn + len(self.discard_pile)

    @property
    def current_tiles(self) -> tuple[Tile, ...]:
        """Hand plus the drawn tile, the set the win check looks at."""
        if self.drawn_tile is None:
            return self.hand
        return (*self.hand, self.drawn_tile)
