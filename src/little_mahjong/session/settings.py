"""Classroom configuration via environment variables."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from little_mahjong.logic.rng import validate_seed_hex
from little_mahjong.shared.logging import LogFormat

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ClassroomSettings(BaseSettings):
    model_config = {"env_prefix": "CLASSROOM_"}

    log_dir: str | None = None
    log_format: LogFormat = "console"
    log_level: LogLevel = "INFO"
    seed: str | None = None  # fixed seed replays the same deal for a whole lesson
    show_tutorial: bool = True
    celebration_seconds: float = 5.0
    celebration_interval_seconds: float = 0.25

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_log_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v

    @field_validator("celebration_seconds", "celebration_interval_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v
