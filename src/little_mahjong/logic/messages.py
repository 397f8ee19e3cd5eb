"""Status lines shown to the player after each transition."""

WELCOME = "Welcome to the Little Mahjong probability classroom!"
GAME_STARTED = "Game started! Look at the tile you just drew and discard one you don't need."
WIN_AVAILABLE_AT_START = "Congratulations! You can declare a win now, or keep playing."
WIN_AVAILABLE = "Here's your chance! You can declare a win now!"
DECK_EXHAUSTED = "No more tiles to draw. Better luck next time!"
GAME_WON = "Winning hand! You reached the goal!"


def discarded_and_drew(tile_name: str) -> str:
    return f"Discarded {tile_name}. Drew a new tile!"
