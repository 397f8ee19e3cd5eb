"""Centralized game settings for the classroom deck and hand rules."""

from pydantic import BaseModel, ConfigDict

from little_mahjong.logic.exceptions import UnsupportedSettingsError

SUPPORTED_HAND_SIZE = 5  # one triplet + one pair
MAX_CIRCLE_RANK = 9


class GameSettings(BaseModel):
    """
    Configuration for the deck composition and hand size.

    Defaults describe the 41-tile classroom deck.
    """

    model_config = ConfigDict(frozen=True)

    # --- Hand ---
    hand_size: int = SUPPORTED_HAND_SIZE

    # --- Deck composition ---
    circle_ranks: int = MAX_CIRCLE_RANK
    copies_per_tile: int = 4
    dragon_copies: int = 4
    universal_copies: int = 1

    @property
    def deck_size(self) -> int:
        return self.circle_ranks * self.copies_per_tile + self.dragon_copies + self.universal_copies


def validate_settings(settings: GameSettings) -> None:
    """Validate that all settings values are supported by the engine.

    Raises UnsupportedSettingsError listing every unsupported value.
    """
    errors: list[str] = []

    if settings.hand_size != SUPPORTED_HAND_SIZE:
        errors.append(f"hand_size={settings.hand_size} is not supported (only triplet + pair hands)")

    if not 1 <= settings.circle_ranks <= MAX_CIRCLE_RANK:
        errors.append(f"circle_ranks={settings.circle_ranks} must be between 1 and {MAX_CIRCLE_RANK}")

    if settings.copies_per_tile < 1:
        errors.append(f"copies_per_tile={settings.copies_per_tile} must be at least 1")

    if settings.dragon_copies < 0 or settings.universal_copies < 0:
        errors.append("dragon_copies and universal_copies cannot be negative")

    if settings.deck_size < settings.hand_size:
        errors.append(f"deck of {settings.deck_size} tiles cannot deal a hand of {settings.hand_size}")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
