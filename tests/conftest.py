import pytest

from mandelview.config import normalise_config
from mandelview.state import create_engine_state

@pytest.fixture
def make_state():
    def _make(**overrides):
        return create_engine_state(normalise_config(overrides))
    return _make

@pytest.fixture
def state(make_state):
    return make_state()
