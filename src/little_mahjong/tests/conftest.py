import pytest

from little_mahjong.logic.game import new_session
from little_mahjong.tests.helpers import FIXED_SEED


@pytest.fixture
def session():
    return new_session(seed=FIXED_SEED)
