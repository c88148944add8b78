# pinball_client/game_world.py
import math
import random
from typing import Dict, Any, List, Optional

import pygame
from pygame.math import Vector2 as Vec2

from pinball_client.game_entities import Ball, Side, Table
from pinball_client.game_state import GameController, GameState
from pinball_client.resolvers import SimContext, resolve_all, BANK_CLEARED, BALL_LOST
from pinball_client.scheduler import Scheduler, ScheduledEvent, RESET_TARGETS, RESET_GAME
from pinball_client.table_layout import build_table, carry_state
from pinball_shared.constants import WIDTH, HEIGHT, FRAME_DT, WHITE, TEAL, RED, DARK
from pinball_shared.game_config import CFG, PhysicsConfig, TableConfig
from pinball_shared.scorestore import HighScoreStore


def integrate(ball: Ball, physics: PhysicsConfig, eps: float = CFG.vel_eps):
    """Gravity, geometric friction, then one position step."""
    m = physics.speed_multiplier
    ball.vel.y += physics.gravity * m
    ball.vel *= physics.friction
    # keep resting components from drifting through denormals
    if abs(ball.vel.x) < eps:
        ball.vel.x = 0.0
    if abs(ball.vel.y) < eps:
        ball.vel.y = 0.0
    ball.pos += ball.vel * m


# ---------------- World ----------------
class GameWorld:
    """
    Owns the whole simulation: table geometry, the ball, physics parameters,
    the game controller and the delayed-event queue.

    step() runs exactly one animation frame; all mutation of shared state
    happens inside it or through the input/config/resize entry points
    between frames.
    """

    def __init__(self, width: float = WIDTH, height: float = HEIGHT,
                 physics: Optional[PhysicsConfig] = None,
                 store: Optional[HighScoreStore] = None,
                 seed: Optional[int] = None,
                 cfg: TableConfig = CFG):
        self.cfg = cfg
        self.physics = physics if physics is not None else PhysicsConfig()
        self.table: Table = build_table(width, height, cfg)
        self.ball = Ball(radius=cfg.ball_radius)
        self.game = GameController(self.ball, store, cfg)
        self.scheduler = Scheduler()
        self.rng = random.Random(seed)
        self.ctx = SimContext(self.ball, self.table, self.physics, cfg)

        self.frame: int = 0
        self.time_s: float = 0.0

    # ---------------- Read-only state for the UI ----------------
    @property
    def score(self) -> int:
        return self.game.score

    @property
    def high_score(self) -> int:
        return self.game.high_score

    @property
    def balls_remaining(self) -> int:
        return self.game.balls_remaining

    @property
    def ball_in_play(self) -> bool:
        return self.game.ball_in_play

    @property
    def game_state(self) -> GameState:
        return self.game.state

    # ---------------- Inputs ----------------
    def set_flipper_active(self, side: Side, active: bool):
        self.table.flipper(side).active = bool(active)

    def launch(self) -> bool:
        return self.game.launch(self.table.lanes.launch_pos, self.rng)

    def resize(self, width: float, height: float):
        old = self.table
        if (float(width), float(height)) == (old.width, old.height):
            return
        new = build_table(width, height, self.cfg)
        carry_state(old, new)
        if self.ball.active:
            self.ball.pos = Vec2(self.ball.pos.x * new.width / old.width,
                                 self.ball.pos.y * new.height / old.height)
        self.table = new
        self.ctx.table = new

    # ---------------- Frame step ----------------
    def step(self) -> List[str]:
        self.frame += 1
        self.time_s += FRAME_DT

        lost = False
        if self.ball.active:
            integrate(self.ball, self.physics, self.cfg.vel_eps)
            resolve_all(self.ctx)
            if self.ball.pos.y > self.table.height + self.ball.radius:
                lost = True

        self.update_animations()

        for ev in self.scheduler.due(self.time_s):
            self._fire(ev)

        events = self.ctx.take_events()
        self.game.add_score(self.ctx.take_score())
        if BANK_CLEARED in events:
            self._on_bank_cleared()

        if lost:
            events.append(BALL_LOST)
            if self.game.ball_lost():
                self.scheduler.schedule(RESET_GAME, self.time_s + self.cfg.game_over_delay)

        return events

    def update_animations(self):
        t = self.table
        for f in t.flippers:
            f.update()

        t.spinner.update()
        spin = abs(t.spinner.spin_speed)
        if spin > self.cfg.spin_score_threshold:
            self.ctx.award(math.floor(spin))

        for b in t.bumpers:
            b.tick()
        for s in t.slingshots:
            s.tick()

    # ---------------- Delayed events ----------------
    def _on_bank_cleared(self):
        # indices survive a resize, target objects do not
        down = tuple(i for i, tg in enumerate(self.table.targets) if not tg.active)
        if self.scheduler.schedule(RESET_TARGETS, self.time_s + self.cfg.target_reset_delay, down):
            print(f"[pinball] [t={self.frame}] Target bank cleared, bonus {self.cfg.bank_bonus}")

    def _fire(self, ev: ScheduledEvent):
        if ev.kind == RESET_TARGETS:
            for i in ev.payload:
                self.table.targets[i].active = True
        elif ev.kind == RESET_GAME:
            self.reset_game()

    def reset_game(self):
        self.scheduler.cancel(RESET_TARGETS)
        self.game.reset()
        for tg in self.table.targets:
            tg.active = True
        for b in self.table.bumpers:
            b.reset()
        for s in self.table.slingshots:
            s.active = False
            s.timer = 0

    # ---------------- Snapshot ----------------
    def make_snapshot(self) -> Dict[str, Any]:
        """Render-facing state, rounded like a HUD would show it."""
        t = self.table
        return {
            "score": self.score,
            "high_score": self.high_score,
            "balls_remaining": self.balls_remaining,
            "ball_in_play": self.ball_in_play,
            "game_state": self.game_state.value,
            "ball": {
                "x": float(round(self.ball.pos.x, 3)),
                "y": float(round(self.ball.pos.y, 3)),
                "r": self.ball.radius,
                "active": self.ball.active,
            },
            "flippers": {f.side.value: float(round(f.angle, 4)) for f in t.flippers},
            "bumpers": [b.active for b in t.bumpers],
            "slingshots": [s.active for s in t.slingshots],
            "targets": [tg.active for tg in t.targets],
            "spinner": float(round(t.spinner.angle, 4)),
        }

    # ---------------- Draw ----------------
    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None):
        t = self.table
        lanes = t.lanes
        surface.fill(DARK)

        for x in range(0, int(t.width), 30):
            pygame.draw.line(surface, (25, 45, 60), (x, 0), (x, int(t.height)))
        for y in range(0, int(t.height), 30):
            pygame.draw.line(surface, (25, 45, 60), (0, y), (int(t.width), y))

        lane_rect = pygame.Rect(int(lanes.lane_wall_x), 0, int(t.width - lanes.lane_wall_x), int(t.height))
        pygame.draw.rect(surface, (34, 47, 62), lane_rect)

        cx, cy = lanes.arc_center
        r = lanes.arc_radius
        arc_rect = pygame.Rect(int(cx - r), int(cy - r), int(2 * r), int(2 * r))
        pygame.draw.arc(surface, TEAL, arc_rect, 0.0, math.pi, 4)

        drain = pygame.Rect(int(lanes.drain_left_x), int(t.height - 30),
                            int(lanes.drain_right_x - lanes.drain_left_x), 30)
        pygame.draw.rect(surface, (90, 35, 35), drain)

        t.ramp.draw(surface)
        t.spinner.draw(surface)
        for b in t.bumpers:
            b.draw(surface, font)
        for tg in t.targets:
            tg.draw(surface)
        for s in t.slingshots:
            s.draw(surface)
        for w in t.walls:
            w.draw(surface)
        for f in t.flippers:
            f.draw(surface)

        self.ball.draw(surface)

        if font and self.game.can_launch():
            txt = font.render("Press SPACE to launch!", True, TEAL)
            surface.blit(txt, txt.get_rect(center=(int(lanes.play_width / 2), int(t.height / 2))))
            if (self.frame // 15) % 2 == 0:
                lx, ly = lanes.launch_pos
                pygame.draw.circle(surface, WHITE, (int(lx), int(ly)), int(self.ball.radius), 1)

        if font and self.game.is_game_over:
            txt = font.render(f"GAME OVER  -  {self.score}", True, RED)
            surface.blit(txt, txt.get_rect(center=(int(lanes.play_width / 2), int(t.height / 2))))
