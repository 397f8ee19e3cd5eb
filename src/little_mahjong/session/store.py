"""
State container for a presentation layer.

The store holds the current GameSession and swaps it for the value returned
by each transition. Actions run one at a time under a lock. Entering the won
phase starts the celebration; leaving it (reset) or closing the store cancels it.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from little_mahjong.logic import game
from little_mahjong.logic.enums import SessionPhase
from little_mahjong.logic.game import DiscardSelector, LegalActions
from little_mahjong.logic.rng import create_celebration_rng
from little_mahjong.logic.settings import GameSettings
from little_mahjong.logic.state import GameSession
from little_mahjong.logic.visibility import TargetReport, TargetSpec
from little_mahjong.session.celebration import BurstCallback, CelebrationBurst, CelebrationConfig, CelebrationTimer
from little_mahjong.session.settings import ClassroomSettings
from little_mahjong.shared.logging import setup_logging

logger = structlog.get_logger()

ChangeCallback = Callable[[GameSession], Awaitable[None]]


async def _ignore_burst(_burst: CelebrationBurst) -> None:
    return None


class SessionStore:
    def __init__(
        self,
        session: GameSession | None = None,
        *,
        settings: GameSettings | None = None,
        seed: str | None = None,
        on_burst: BurstCallback | None = None,
        celebration_config: CelebrationConfig | None = None,
        show_tutorial: bool = True,
    ) -> None:
        self._session = session if session is not None else game.new_session(seed=seed, settings=settings)
        self._seed = seed
        self._lock = asyncio.Lock()
        self._subscribers: list[ChangeCallback] = []
        self._celebration = CelebrationTimer(
            on_burst or _ignore_burst,
            config=celebration_config,
            rng=create_celebration_rng(seed),
        )
        self.show_tutorial = show_tutorial

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def is_celebrating(self) -> bool:
        return self._celebration.is_active

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback invoked with every new session value."""
        self._subscribers.append(callback)

    def toggle_tutorial(self) -> bool:
        self.show_tutorial = not self.show_tutorial
        return self.show_tutorial

    async def discard(self, selector: DiscardSelector) -> GameSession:
        return await self._dispatch("discard", lambda s: game.discard(s, selector))

    async def declare_win(self) -> GameSession:
        return await self._dispatch("declare_win", game.declare_win)

    async def reset(self) -> GameSession:
        """Deal a new game; a fixed store seed replays the same deal."""
        return await self._dispatch("reset", lambda s: game.reset(s, seed=self._seed))

    async def close(self) -> None:
        """Stop background work; the store must not be used afterwards."""
        self._celebration.cancel()
        self._subscribers.clear()
        logger.debug("session store closed")

    def remaining_count(self, target: TargetSpec | int | str) -> int:
        return game.remaining_count(self._session, target)

    def target_report(self, target: TargetSpec | int | str | None = None) -> TargetReport:
        return game.target_report(self._session, target)

    def legal_actions(self) -> LegalActions:
        return game.legal_actions(self._session)

    async def _dispatch(self, action: str, transition: Callable[[GameSession], GameSession]) -> GameSession:
        async with self._lock:
            previous = self._session
            with structlog.contextvars.bound_contextvars(seed=previous.seed, turn=previous.turn_count):
                current = transition(previous)
                if current is previous:
                    return current

                self._session = current
                logger.info("session updated", action=action, phase=current.phase, tiles_in_deck=current.tiles_in_deck)

                if previous.phase == SessionPhase.WON and current.phase != SessionPhase.WON:
                    self._celebration.cancel()
                elif current.phase == SessionPhase.WON and previous.phase != SessionPhase.WON:
                    self._celebration.start()

                await self._notify(action, current)
                return current

    async def _notify(self, action: str, session: GameSession) -> None:
        """Await every subscriber; one failing subscriber does not stop the rest."""
        for callback in list(self._subscribers):
            try:
                await callback(session)
            except Exception:
                logger.exception("subscriber failed", action=action)


def create_store(
    settings: ClassroomSettings | None = None,
    game_settings: GameSettings | None = None,
    on_burst: BurstCallback | None = None,
) -> SessionStore:
    """Configure logging and build a store from environment settings."""
    settings = settings or ClassroomSettings()
    setup_logging(settings.log_format, settings.log_level, log_dir=settings.log_dir)
    return SessionStore(
        settings=game_settings,
        seed=settings.seed,
        on_burst=on_burst,
        celebration_config=CelebrationConfig(
            duration_seconds=settings.celebration_seconds,
            interval_seconds=settings.celebration_interval_seconds,
        ),
        show_tutorial=settings.show_tutorial,
    )
