from typing import Generator

import pytest

from config import config
from tests.helpers.clock import FakeClock


@pytest.fixture(autouse=True)
def _reset_config_cache() -> Generator[None, None, None]:
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()
