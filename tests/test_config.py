import math
from dataclasses import FrozenInstanceError

import pytest

from pinball_shared.game_config import PhysicsConfig, PHYSICS_LIMITS, CFG


def test_defaults():
    p = PhysicsConfig()
    assert p.as_dict() == {
        "gravity": 0.35, "bounce": 0.6, "friction": 0.985, "flipper_power": 18.0,
        "bumper_force": 12.0, "sling_force": 14.0, "sling_threshold": 3.0, "speed_multiplier": 1.0,
    }
    assert set(p.as_dict()) == set(PHYSICS_LIMITS)


@pytest.mark.parametrize("name,value,expected", [
    ("gravity", 0.8, 0.8),
    ("gravity", -1, 0.0),
    ("bounce", 1.5, 0.95),
    ("friction", 1.0, 0.999),
    ("speed_multiplier", "1.5", 1.5),
])
def test_update_clamps(name, value, expected):
    p = PhysicsConfig()
    assert p.update(name, value)
    assert getattr(p, name) == pytest.approx(expected)


@pytest.mark.parametrize("name,value", [
    ("gravity", math.nan),
    ("gravity", math.inf),
    ("gravity", "heavy"),
    ("gravity", None),
    ("mass", 3.0),
])
def test_update_rejects_bad_input(name, value):
    p = PhysicsConfig()
    assert not p.update(name, value)
    assert p == PhysicsConfig()


def test_reset_to_defaults():
    p = PhysicsConfig()
    assert p.update("gravity", 1.0)
    assert p.update("bounce", 0.2)
    assert p.gravity == 1.0
    p.reset_to_defaults()
    assert p == PhysicsConfig()


def test_table_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        CFG.ball_radius = 12
