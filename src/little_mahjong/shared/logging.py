"""Logging for the classroom app.

Game modules log through structlog; every event is handed to the stdlib root
logger so one set of handlers serves the console and the optional log file.
Format and level come from ClassroomSettings (CLASSROOM_LOG_FORMAT and
CLASSROOM_LOG_LEVEL). The store binds the session seed and turn into
structlog context vars, so every line written during an action carries them.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import structlog

from little_mahjong.logic.tiles import Tile

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LogFormat = Literal["json", "console"]

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def _plain_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Tile):
        return value.id
    if isinstance(value, tuple | list) and value and all(isinstance(item, Tile) for item in value):
        return [item.id for item in value]
    return value


def render_game_values(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Log phases and kinds by value, tiles (and tile sequences) by id."""
    for key, value in event_dict.items():
        event_dict[key] = _plain_value(value)
    return event_dict


def configure_structlog() -> None:
    """Send structlog events to stdlib logging; handlers decide the rendering."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            render_game_values,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _handler(handler: logging.Handler, log_format: LogFormat, *, colors: bool = False) -> logging.Handler:
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )
    return handler


def _is_test() -> bool:
    return "pytest" in sys.modules


def _log_file_path(log_dir: Path | str) -> Path:
    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"


def setup_logging(
    log_format: LogFormat = "console",
    level: int | str = "INFO",
    log_dir: Path | str | None = None,
) -> Path | None:
    """
    Configure structlog and the root logger.

    Replaces any handlers installed by an earlier call. With a log_dir (and
    outside pytest) lessons are also written to a timestamped file, whose path
    is returned.
    """
    configure_structlog()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_handler(logging.StreamHandler(sys.stdout), log_format, colors=sys.stdout.isatty()))

    if log_dir is None or _is_test():
        return None

    file_path = _log_file_path(log_dir)
    root_logger.addHandler(_handler(logging.FileHandler(file_path), log_format))
    return file_path
