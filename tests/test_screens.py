from types import SimpleNamespace

import pygame
import pytest

from pinball_client.game_entities import Side
from pinball_client.game_world import GameWorld
from pinball_client.screens import GameScreen
from pinball_shared.scorestore import HighScoreStore


@pytest.fixture
def screen():
    pygame.init()
    app = SimpleNamespace(
        world=GameWorld(500, 800, store=HighScoreStore(None), seed=7),
        screen=pygame.Surface((500, 800)),
        change_screen=lambda *a, **k: None,
    )
    yield GameScreen(app)
    pygame.quit()


def finger(kind, finger_id, x):
    return pygame.event.Event(kind, touch_id=0, finger_id=finger_id, x=x, y=0.5, dx=0.0, dy=0.0, pressure=1.0)


def active(screen, side):
    return screen.app.world.table.flipper(side).active


def test_finger_lifted_on_other_half_releases_its_own_flipper(screen):
    screen.handle_event(finger(pygame.FINGERDOWN, 1, 0.2))
    assert active(screen, Side.LEFT)

    screen.handle_event(finger(pygame.FINGERUP, 1, 0.8))
    assert not active(screen, Side.LEFT)
    assert not active(screen, Side.RIGHT)
    assert screen.fingers == {}


def test_flipper_held_while_another_finger_stays_down(screen):
    screen.handle_event(finger(pygame.FINGERDOWN, 1, 0.1))
    screen.handle_event(finger(pygame.FINGERDOWN, 2, 0.3))
    screen.handle_event(finger(pygame.FINGERDOWN, 3, 0.9))

    screen.handle_event(finger(pygame.FINGERUP, 1, 0.1))
    assert active(screen, Side.LEFT)
    screen.handle_event(finger(pygame.FINGERUP, 2, 0.6))
    assert not active(screen, Side.LEFT)
    assert active(screen, Side.RIGHT)


def test_unknown_finger_up_is_ignored(screen):
    screen.handle_event(finger(pygame.FINGERDOWN, 1, 0.9))
    screen.handle_event(finger(pygame.FINGERUP, 5, 0.9))
    assert active(screen, Side.RIGHT)


def test_leaving_screen_forgets_fingers(screen):
    screen.handle_event(finger(pygame.FINGERDOWN, 1, 0.2))
    screen.on_exit()
    assert screen.fingers == {}
    assert not active(screen, Side.LEFT)


def test_game_screen_draws(screen):
    screen.draw(screen.app.screen)
