import math

import pytest
from pygame.math import Vector2 as Vec2

from pinball_client.game_entities import Ball, BallState, Side
from pinball_client.game_state import GameState
from pinball_client.game_world import GameWorld, integrate
from pinball_client.resolvers import BALL_LOST, BANK_CLEARED
from pinball_client.scheduler import RESET_TARGETS, RESET_GAME
from pinball_shared.game_config import PhysicsConfig
from pinball_shared.scorestore import HighScoreStore


def drain(world):
    world.ball.pos = Vec2(230, 820)
    world.ball.vel = Vec2(0, 5)
    return world.step()


# ---------------- integrator ----------------
def test_friction_strictly_decays_speed():
    ball = Ball(pos=Vec2(0, 0), vel=Vec2(10, 0), state=BallState.IN_PLAY)
    physics = PhysicsConfig(gravity=0.0)
    last = ball.vel.length()
    for _ in range(200):
        integrate(ball, physics)
        assert 0 < ball.vel.length() < last
        last = ball.vel.length()


def test_tiny_components_snap_to_zero():
    ball = Ball(vel=Vec2(1e-10, 5))
    integrate(ball, PhysicsConfig(gravity=0.0))
    assert ball.vel.x == 0.0
    assert ball.vel.y == pytest.approx(5 * 0.985)


def test_speed_multiplier_scales_gravity_and_step():
    ball = Ball(pos=Vec2(0, 0), vel=Vec2(0, 0))
    integrate(ball, PhysicsConfig(gravity=1.0, friction=0.9, speed_multiplier=2.0))
    assert ball.vel.y == pytest.approx(1.8)
    assert ball.pos.y == pytest.approx(3.6)


# ---------------- lifecycle ----------------
def test_launch_needs_idle_ball(world):
    assert world.launch()
    assert world.ball_in_play
    assert world.game_state is GameState.PLAYING
    lx, ly = world.table.lanes.launch_pos
    assert (world.ball.pos.x, world.ball.pos.y) == (lx, ly)
    assert world.ball.vel.x == -2
    assert -32 <= world.ball.vel.y <= -28

    world.ball.pos = Vec2(100, 100)
    world.ball.vel = Vec2(1, 1)
    assert not world.launch()
    assert (world.ball.pos.x, world.ball.pos.y) == (100, 100)
    assert (world.ball.vel.x, world.ball.vel.y) == (1, 1)
    assert world.balls_remaining == 3
    assert world.score == 0


def test_launch_is_reproducible_with_seed():
    a = GameWorld(500, 800, store=HighScoreStore(None), seed=3)
    b = GameWorld(500, 800, store=HighScoreStore(None), seed=3)
    a.launch()
    b.launch()
    assert a.ball.vel.y == b.ball.vel.y


def test_drain_reports_ball_lost(world):
    world.launch()
    events = drain(world)
    assert BALL_LOST in events
    assert not world.ball_in_play
    assert world.balls_remaining == 2
    assert world.game_state is GameState.PLAYING


def test_last_drain_ends_game_then_resets(world):
    world.launch()
    world.game.add_score(1234)
    for _ in range(3):
        world.launch()
        drain(world)
    assert world.game_state is GameState.GAME_OVER
    assert world.scheduler.pending(RESET_GAME)
    assert not world.launch()

    for _ in range(29):
        world.step()
    assert world.game_state is GameState.GAME_OVER
    for _ in range(3):
        world.step()
    assert world.game_state is GameState.IDLE
    assert world.score == 0
    assert world.balls_remaining == 3
    assert world.high_score == 1234
    assert world.launch()


# ---------------- target bank ----------------
def _clear_bank(world):
    world.launch()
    for t in world.table.targets[1:]:
        t.active = False
    world.ball.pos = Vec2(57, 360)
    world.ball.vel = Vec2(5, 1)
    events = world.step()
    world.ball.state = BallState.INACTIVE
    return events


def test_bank_clear_scores_and_reactivates_later(world):
    events = _clear_bank(world)
    assert BANK_CLEARED in events
    assert world.score == 5500
    assert not any(t.active for t in world.table.targets)
    assert world.scheduler.pending(RESET_TARGETS)

    for _ in range(100):
        world.step()
    assert not any(t.active for t in world.table.targets)

    for _ in range(30):
        world.step()
    assert all(t.active for t in world.table.targets)
    assert not world.scheduler.pending(RESET_TARGETS)


def test_bank_reset_is_scheduled_once(world):
    _clear_bank(world)
    world._on_bank_cleared()
    assert len(world.scheduler) == 1


def test_game_reset_cancels_target_reset(world):
    _clear_bank(world)
    world.reset_game()
    assert not world.scheduler.pending(RESET_TARGETS)
    assert all(t.active for t in world.table.targets)


# ---------------- animation ----------------
def test_spinning_spinner_keeps_scoring(world):
    world.launch()
    world.ball.state = BallState.INACTIVE
    world.table.spinner.spin_speed = 10.0
    world.step()
    assert world.score == 9
    assert world.table.spinner.angle == pytest.approx(10.0)


def test_flipper_eases_toward_target(world):
    f = world.table.flipper(Side.LEFT)
    world.set_flipper_active(Side.LEFT, True)
    world.step()
    assert f.angle == pytest.approx(0.45 + (-0.5 - 0.45) * 0.35)
    world.set_flipper_active(Side.LEFT, False)
    before = f.angle
    world.step()
    assert f.angle == pytest.approx(before + (0.45 - before) * 0.175)


def test_no_scoring_outside_play(world):
    world.table.spinner.spin_speed = 10.0
    world.step()
    assert world.score == 0


# ---------------- long run ----------------
def test_seeded_run_keeps_score_monotonic(world):
    last = 0
    for frame in range(3000):
        if world.game.can_launch():
            world.launch()
        if frame % 40 == 0:
            world.set_flipper_active(Side.LEFT, True)
            world.set_flipper_active(Side.RIGHT, True)
        elif frame % 40 == 8:
            world.set_flipper_active(Side.LEFT, False)
            world.set_flipper_active(Side.RIGHT, False)

        world.step()
        if world.game_state is GameState.IDLE:
            last = 0
        assert world.score >= last
        last = world.score
        assert math.isfinite(world.ball.pos.x) and math.isfinite(world.ball.pos.y)


# ---------------- resize / snapshot ----------------
def test_resize_same_size_is_a_no_op(world):
    table = world.table
    world.resize(500, 800)
    assert world.table is table


def test_resize_keeps_state_and_rescales_ball(world):
    world.launch()
    world.table.targets[2].active = False
    world.ball.pos = Vec2(250, 400)
    world.resize(1000, 1600)
    assert world.table.width == 1000
    assert world.ctx.table is world.table
    assert not world.table.targets[2].active
    assert (world.ball.pos.x, world.ball.pos.y) == pytest.approx((500, 800))


def test_snapshot(world):
    snap = world.make_snapshot()
    assert snap["score"] == 0
    assert snap["game_state"] == "idle"
    assert snap["ball"]["active"] is False
    assert len(snap["targets"]) == 6
    assert set(snap["flippers"]) == {"left", "right"}


@pytest.mark.parametrize("seed", range(10))
def test_untouched_ball_drains(seed):
    world = GameWorld(500, 800, store=HighScoreStore(None), seed=seed)
    assert world.launch()
    for _ in range(3600):
        world.step()
        if not world.ball_in_play:
            break
    assert not world.ball_in_play
    assert world.balls_remaining == 2


def test_bank_reset_survives_resize(world):
    _clear_bank(world)
    world.resize(600, 960)
    assert not any(t.active for t in world.table.targets)
    for _ in range(130):
        world.step()
    assert all(t.active for t in world.table.targets)
