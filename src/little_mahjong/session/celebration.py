"""
Celebration bursts after a declared win.

A time-bounded asyncio task emits confetti bursts to a renderer callback. It
only reads configuration, never the game session, and must be cancelled when
the win it celebrates is replaced (reset) or the store closes.
"""

import asyncio
import random
import time
from collections.abc import Awaitable, Callable

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger()

DEFAULT_COLORS = ("#10b981", "#fbbf24", "#3b82f6", "#ef4444")
LEFT_ORIGIN_RANGE = (0.1, 0.3)
RIGHT_ORIGIN_RANGE = (0.7, 0.9)


class CelebrationConfig(BaseModel):
    """Timing and shape of the celebration."""

    duration_seconds: float = 5
    interval_seconds: float = 0.25
    particles_per_burst: int = 50
    spread: int = 360
    start_velocity: int = 30
    colors: tuple[str, ...] = DEFAULT_COLORS


class CelebrationBurst(BaseModel):
    """One confetti burst for the renderer."""

    model_config = ConfigDict(frozen=True)

    particle_count: int
    origin_x: float
    origin_y: float
    spread: int
    start_velocity: int
    colors: tuple[str, ...]


BurstCallback = Callable[[CelebrationBurst], Awaitable[None]]


class CelebrationTimer:
    """
    Run one celebration at a time.

    Every tick emits two bursts (left and right) whose particle count shrinks
    with the time left, until the duration runs out.
    """

    def __init__(
        self,
        on_burst: BurstCallback,
        config: CelebrationConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or CelebrationConfig()
        self._on_burst = on_burst
        self._rng = rng or random.Random()  # noqa: S311
        self._active_task: asyncio.Task[None] | None = None

    @property
    def is_active(self) -> bool:
        return self._active_task is not None and not self._active_task.done()

    def start(self) -> None:
        """Start celebrating, replacing any celebration still running."""
        self.cancel()
        self._active_task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        """Cancel the running celebration, if any."""
        if self._active_task is not None and not self._active_task.done():
            self._active_task.cancel()
        self._active_task = None

    async def wait(self) -> None:
        """Wait for the current celebration to finish on its own."""
        if self._active_task is not None:
            await asyncio.shield(self._active_task)

    def _burst(self, particle_count: int, origin_range: tuple[float, float]) -> CelebrationBurst:
        return CelebrationBurst(
            particle_count=particle_count,
            origin_x=self._rng.uniform(*origin_range),
            origin_y=self._rng.random() - 0.2,
            spread=self._config.spread,
            start_velocity=self._config.start_velocity,
            colors=self._config.colors,
        )

    async def _run(self) -> None:
        duration = self._config.duration_seconds
        end_time = time.monotonic() + duration
        try:
            while True:
                await asyncio.sleep(self._config.interval_seconds)
                time_left = end_time - time.monotonic()
                if time_left <= 0:
                    break
                particle_count = int(self._config.particles_per_burst * (time_left / duration))
                await self._on_burst(self._burst(particle_count, LEFT_ORIGIN_RANGE))
                await self._on_burst(self._burst(particle_count, RIGHT_ORIGIN_RANGE))
        except asyncio.CancelledError:
            logger.debug("celebration cancelled")
            raise
        except Exception:
            logger.exception("celebration callback failed")
