import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from pinball_client.game_entities import Ball, BallState
from pinball_client.game_world import GameWorld
from pinball_client.resolvers import SimContext
from pinball_client.table_layout import build_table
from pinball_shared.game_config import PhysicsConfig
from pinball_shared.scorestore import HighScoreStore


@pytest.fixture
def table():
    return build_table(500, 800)


@pytest.fixture
def ctx(table):
    ball = Ball(radius=10.0, state=BallState.IN_PLAY)
    return SimContext(ball, table, PhysicsConfig())


@pytest.fixture
def world():
    return GameWorld(500, 800, store=HighScoreStore(None), seed=7)
