# pinball_client/resolvers.py
"""
Collision resolvers, one per playfield element.

Each resolver takes the simulation context and one element, tests the ball
against the element's collidable shape and, on contact, rewrites the ball's
velocity/position and records score and events on the context. They never
touch the game-state controller directly; the world hands the collected
score and events over once the frame is complete.

Bumper pops, slingshot kicks and the ramp redirect assign a velocity
rather than reflecting the incoming one.
"""
from dataclasses import dataclass, field
from typing import List

from pygame.math import Vector2 as Vec2

from pinball_client.game_entities import Ball, Table, Flipper, Slingshot, Bumper, DropTarget, Spinner, Ramp
from pinball_client.collidables import Contact, Collidable
from pinball_client.geometry import reflect
from pinball_shared.game_config import CFG, PhysicsConfig, TableConfig

# frame events
BANK_CLEARED = "bank_cleared"
BALL_LOST = "ball_lost"
SLINGSHOT_FIRED = "slingshot_fired"
RAMP_SHOT = "ramp_shot"


@dataclass
class SimContext:
    ball: Ball
    table: Table
    physics: PhysicsConfig
    cfg: TableConfig = CFG
    pending_score: int = 0
    events: List[str] = field(default_factory=list)

    def award(self, points: int):
        self.pending_score += int(points)

    def emit(self, event: str):
        self.events.append(event)

    def take_score(self) -> int:
        pts, self.pending_score = self.pending_score, 0
        return pts

    def take_events(self) -> List[str]:
        evs, self.events = self.events, []
        return evs


def _push_out(ball: Ball, c: Contact):
    ball.pos += c.normal * c.depth


# ---------------- Walls ----------------
def resolve_wall(ctx: SimContext, shape: Collidable) -> bool:
    ball = ctx.ball
    c = shape.probe(ball.pos, ball.radius)
    if c is None:
        return False
    _push_out(ball, c)
    if ball.vel.dot(c.normal) < 0:
        ball.vel = reflect(ball.vel, c.normal, ctx.physics.bounce)
    return True


def resolve_top_arc(ctx: SimContext) -> bool:
    ball = ctx.ball
    arc = ctx.table.top_arc
    if ball.pos.y >= arc.center.y:
        return False
    c = arc.probe(ball.pos, ball.radius)
    if c is None or ball.vel.dot(c.normal) >= 0:
        return False
    _push_out(ball, c)
    ball.vel = reflect(ball.vel, c.normal, ctx.physics.bounce)
    return True


def resolve_walls(ctx: SimContext) -> int:
    hits = 0
    for w in ctx.table.walls:
        if resolve_wall(ctx, w.shape):
            hits += 1
    if resolve_top_arc(ctx):
        hits += 1
    return hits


# ---------------- Slingshots ----------------
def resolve_slingshot(ctx: SimContext, sling: Slingshot) -> bool:
    ball, cfg = ctx.ball, ctx.cfg
    c = sling.shape.probe(ball.pos, ball.radius)
    if c is None:
        return False
    _push_out(ball, c)
    n = c.normal
    vn = ball.vel.dot(n)

    if c.edge != Slingshot.RUBBER_EDGE:
        # backstop: plain reflector
        if vn < 0:
            ball.vel = reflect(ball.vel, n, ctx.physics.bounce)
        return True

    if -vn > ctx.physics.sling_threshold:
        ball.vel = n * ctx.physics.sling_force + Vec2(0, -cfg.sling_up_bias)
        sling.flash(cfg.sling_flash_frames)
        ctx.award(cfg.sling_score)
        ctx.emit(SLINGSHOT_FIRED)
    elif vn < 0:
        # soft hit: dead rubber, lots of friction
        tangential = ball.vel - n * vn
        ball.vel = tangential * cfg.sling_soft_friction - n * (vn * cfg.sling_soft_bounce)
    return True


# ---------------- Flippers ----------------
def resolve_flipper(ctx: SimContext, flipper: Flipper) -> bool:
    ball, cfg = ctx.ball, ctx.cfg
    c = flipper.shape().probe(ball.pos, ball.radius, cfg.flipper_half_thickness)
    if c is None:
        return False
    n = c.normal
    vn = ball.vel.dot(n)
    if vn >= 0 and not flipper.active:
        # a resting flipper only answers a ball that comes down onto it
        _push_out(ball, c)
        return True
    if vn < 0:
        ball.vel = ball.vel - n * (2.0 * vn)

    power = ctx.physics.flipper_power if flipper.active else cfg.flipper_passive_power
    ball.vel.y -= power
    # the closer to the tip, the harder the sideways flick
    side = 1.0 if flipper.is_left else -1.0
    ball.vel.x += side * c.t * power * cfg.flipper_kick
    ball.vel *= ctx.physics.bounce

    _push_out(ball, c)
    return True


# ---------------- Bumpers ----------------
def resolve_bumper(ctx: SimContext, bumper: Bumper) -> bool:
    ball, cfg = ctx.ball, ctx.cfg
    c = bumper.shape().probe(ball.pos, ball.radius)
    if c is None:
        return False
    n = c.normal
    ball.vel = n * ctx.physics.bumper_force
    ball.pos = bumper.center + n * (bumper.radius + ball.radius + 1)

    bumper.hits += 1
    bumper.flash(cfg.bumper_flash_frames)
    ctx.award(bumper.score)
    return True


# ---------------- Drop targets ----------------
def resolve_drop_target(ctx: SimContext, target: DropTarget) -> bool:
    if not target.active:
        return False
    ball, cfg = ctx.ball, ctx.cfg
    c = target.shape().probe(ball.pos, ball.radius)
    if c is None:
        return False

    target.active = False
    if c.normal.x != 0:
        ball.vel.x = -ball.vel.x * ctx.physics.bounce
    else:
        ball.vel.y = -ball.vel.y * ctx.physics.bounce
    ctx.award(cfg.target_score)

    # this hit took down the last standing target
    if not any(t.active for t in ctx.table.targets):
        ctx.award(cfg.bank_bonus)
        ctx.emit(BANK_CLEARED)
    return True


# ---------------- Spinner ----------------
def resolve_spinner(ctx: SimContext, spinner: Spinner) -> bool:
    ball, cfg = ctx.ball, ctx.cfg
    if spinner.shape().probe(ball.pos, ball.radius) is None:
        return False
    spinner.spin_speed += ball.vel.y * cfg.spinner_transfer
    ball.vel.y *= cfg.spinner_damping
    ctx.award(cfg.spinner_score)
    return True


# ---------------- Ramp ----------------
def resolve_ramp(ctx: SimContext, ramp: Ramp) -> bool:
    ball, cfg = ctx.ball, ctx.cfg
    if ramp.capture().probe(ball.pos, 0.0) is None:
        return False
    if ball.vel.y >= 0:
        return False
    speed = ball.vel.length()
    if speed <= cfg.ramp_min_speed:
        return False
    d = ramp.direction()
    if ball.vel.dot(d) / speed >= cfg.ramp_align_cos:
        return False

    ball.vel = d * (speed * cfg.ramp_damping)
    ctx.award(cfg.ramp_score)
    ctx.emit(RAMP_SHOT)
    return True


def resolve_all(ctx: SimContext):
    """Run every resolver in the fixed per-frame order."""
    t = ctx.table
    resolve_walls(ctx)
    for s in t.slingshots:
        resolve_slingshot(ctx, s)
    for f in t.flippers:
        resolve_flipper(ctx, f)
    for b in t.bumpers:
        resolve_bumper(ctx, b)
    for tg in t.targets:
        resolve_drop_target(ctx, tg)
    resolve_spinner(ctx, t.spinner)
    resolve_ramp(ctx, t.ramp)
