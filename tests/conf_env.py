import pytest

from sharevault import Env
from constants import START_TIMESTAMP


@pytest.fixture
def env():
    # every test gets a fresh environment, state never leaks between tests
    return Env(timestamp=START_TIMESTAMP)


@pytest.fixture
def deploy3r(env):
    return env.eoa
