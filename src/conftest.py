"""Test-wide setup: classroom test environment and the app's structlog pipeline."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from little_mahjong.shared.logging import configure_structlog

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

# No handlers here: caplog receives each event dict as record.msg.
configure_structlog()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Drop seed/turn bindings left over from a previous test."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
