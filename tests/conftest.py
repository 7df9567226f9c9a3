import random

import pytest

from config import Config


@pytest.fixture(autouse=True)
def seeded_random():
    random.seed(1234)


@pytest.fixture
def config(tmp_path):
    return Config(episodes=20, report_every=10, qtable_file=str(tmp_path / "snake_qtable.bin"))
