import random

import pytest

from neon_blaster.entities import Enemy, Laser
from neon_blaster.inputs import Action, InputState
from neon_blaster.leaderboard import Leaderboard, MemoryStorage
from neon_blaster.settings import GameConfig
from neon_blaster.simulation import Simulation


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def leaderboard(storage):
    board = Leaderboard(storage)
    board.load()
    return board


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sim(config, leaderboard):
    s = Simulation(config, leaderboard, rng=random.Random(42), star_seed=7)
    s.start()
    return s


def make_enemy(x, y, size=60, speed=0.0):
    return Enemy(x=x, y=y, width=size, height=size, speed=speed)


def laser_at(enemy):
    return Laser(enemy.x, enemy.y)


def holding(*actions):
    inputs = InputState()
    for action in actions:
        inputs.press(action)
    return inputs


@pytest.fixture
def fire_input():
    return holding(Action.FIRE)
