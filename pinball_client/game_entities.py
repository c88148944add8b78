# pinball_client/game_entities.py
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import pygame
from pygame.math import Vector2 as Vec2

from pinball_client.collidables import CircleShape, PolygonShape, RectShape, SegmentShape
from pinball_shared.constants import WHITE, BLACK, BLUE, TEAL, GREEN, ORANGE, RED, PURPLE, GRAY


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


class BallState(Enum):
    INACTIVE = "inactive"
    IN_PLAY = "in_play"


def _pt(v: Vec2) -> Tuple[int, int]:
    return int(v.x), int(v.y)


# ---------------- Ball ----------------
@dataclass
class Ball:
    pos: Vec2 = field(default_factory=lambda: Vec2(0, 0))
    vel: Vec2 = field(default_factory=lambda: Vec2(0, 0))
    radius: float = 10.0
    state: BallState = BallState.INACTIVE

    @property
    def active(self) -> bool:
        return self.state is BallState.IN_PLAY

    def place(self, pos: Vec2, vel: Vec2):
        self.pos = Vec2(pos)
        self.vel = Vec2(vel)

    def draw(self, surf: pygame.Surface):
        if not self.active:
            return
        r = int(self.radius)
        pygame.draw.circle(surf, BLACK, (int(self.pos.x) + 3, int(self.pos.y) + 3), r)
        pygame.draw.circle(surf, (200, 200, 200), _pt(self.pos), r)
        pygame.draw.circle(surf, WHITE, (int(self.pos.x) - 3, int(self.pos.y) - 3), max(1, int(r * 0.3)))


# ---------------- Static walls ----------------
@dataclass
class Wall:
    shape: SegmentShape
    kind: str = "wall"    # wall / rail / lane / separator

    def draw(self, surf: pygame.Surface):
        width = 3 if self.kind == "separator" else 4
        pygame.draw.line(surf, TEAL, _pt(self.shape.a), _pt(self.shape.b), width)


# ---------------- Flipper ----------------
@dataclass
class Flipper:
    side: Side
    pivot: Vec2
    length: float
    rest_angle: float
    max_angle: float
    rate: float = 0.35
    return_factor: float = 0.5
    angle: float = 0.0
    active: bool = False

    @property
    def is_left(self) -> bool:
        return self.side is Side.LEFT

    @property
    def target_angle(self) -> float:
        return self.max_angle if self.active else self.rest_angle

    def tip(self) -> Vec2:
        return self.pivot + Vec2(math.cos(self.angle), math.sin(self.angle)) * self.length

    def shape(self) -> SegmentShape:
        return SegmentShape(Vec2(self.pivot), self.tip())

    def update(self):
        """Ease the angle toward the driven or resting position."""
        rate = self.rate if self.active else self.rate * self.return_factor
        self.angle += (self.target_angle - self.angle) * rate

    def draw(self, surf: pygame.Surface):
        end = self.tip()
        color = TEAL if self.active else BLUE
        pygame.draw.line(surf, color, _pt(self.pivot), _pt(end), 14)
        pygame.draw.circle(surf, color, _pt(end), 7)
        pygame.draw.circle(surf, (44, 62, 80), _pt(self.pivot), 8)


# ---------------- Slingshot ----------------
@dataclass
class Slingshot:
    side: Side
    shape: PolygonShape       # edge 0 is the rubber band
    active: bool = False
    timer: int = 0

    RUBBER_EDGE = 0

    def flash(self, frames: int):
        self.active = True
        self.timer = frames

    def tick(self):
        if self.timer > 0:
            self.timer -= 1
            if self.timer == 0:
                self.active = False

    def draw(self, surf: pygame.Surface):
        pts = [_pt(v) for v in self.shape.vertices]
        pygame.draw.polygon(surf, (40, 60, 40), pts)
        pygame.draw.polygon(surf, TEAL, pts, 3)
        a, b = self.shape.edges()[self.RUBBER_EDGE]
        pygame.draw.line(surf, WHITE if self.active else ORANGE, _pt(a), _pt(b), 5)


# ---------------- Bumper ----------------
@dataclass
class Bumper:
    center: Vec2
    radius: float
    score: int = 100
    hits: int = 0
    active: bool = False
    timer: int = 0

    def shape(self) -> CircleShape:
        return CircleShape(self.center, self.radius)

    def flash(self, frames: int):
        self.active = True
        self.timer = frames

    def tick(self):
        if self.timer > 0:
            self.timer -= 1
            if self.timer == 0:
                self.active = False

    def reset(self):
        self.hits = 0
        self.active = False
        self.timer = 0

    def draw(self, surf: pygame.Surface, font: pygame.font.Font = None):
        pygame.draw.circle(surf, (255, 107, 107) if self.active else RED, _pt(self.center), int(self.radius))
        pygame.draw.circle(surf, WHITE, _pt(self.center), max(1, int(self.radius) - 3), 3)
        if font:
            txt = font.render(str(self.score), True, WHITE)
            surf.blit(txt, txt.get_rect(center=_pt(self.center)))


# ---------------- Drop target ----------------
@dataclass
class DropTarget:
    center: Vec2
    width: float
    height: float
    active: bool = True

    def shape(self) -> RectShape:
        return RectShape(self.center, self.width, self.height)

    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.center.x - self.width / 2), int(self.center.y - self.height / 2),
                           int(self.width), int(self.height))

    def draw(self, surf: pygame.Surface):
        if self.active:
            pygame.draw.rect(surf, GREEN, self.rect())
        else:
            pygame.draw.rect(surf, (20, 70, 45), self.rect(), 1)


# ---------------- Spinner ----------------
@dataclass
class Spinner:
    center: Vec2
    width: float
    height: float
    friction: float = 0.98
    angle: float = 0.0
    spin_speed: float = 0.0

    def shape(self) -> RectShape:
        return RectShape(self.center, self.width, self.height)

    def update(self):
        self.angle += self.spin_speed
        self.spin_speed *= self.friction

    def draw(self, surf: pygame.Surface):
        # the flap seen edge-on: its apparent height follows cos(angle)
        half = Vec2(self.width / 2, 0)
        h = max(2, int(abs(math.cos(self.angle)) * self.height) + 1)
        pygame.draw.line(surf, ORANGE, _pt(self.center - half), _pt(self.center + half), h)
        pygame.draw.circle(surf, RED, _pt(self.center), int(self.width / 2 + 5), 2)
        pygame.draw.circle(surf, GRAY, _pt(self.center), 4)


# ---------------- Ramp ----------------
@dataclass
class Ramp:
    entry: Vec2
    exit: Vec2
    capture_w: float
    capture_h: float

    def direction(self) -> Vec2:
        return (self.exit - self.entry).normalize()

    def capture(self) -> RectShape:
        return RectShape(self.entry, self.capture_w, self.capture_h)

    def draw(self, surf: pygame.Surface):
        off = Vec2(15, 0)
        for sign in (-1, 1):
            pygame.draw.line(surf, PURPLE, _pt(self.entry + off * sign), _pt(self.exit + off * sign), 4)
        r = pygame.Rect(0, 0, 40, 20)
        r.center = _pt(self.entry)
        pygame.draw.rect(surf, (80, 50, 100), r)


# ---------------- Derived lane geometry ----------------
@dataclass(frozen=True)
class LaneGeometry:
    play_width: float
    lane_wall_x: float
    lane_top_y: float
    arc_center: Tuple[float, float]
    arc_radius: float
    outlane_left_x: float
    outlane_right_x: float
    rail_top_y: float
    left_rail: Tuple[Tuple[float, float], Tuple[float, float]]
    right_rail: Tuple[Tuple[float, float], Tuple[float, float]]
    drain_left_x: float
    drain_right_x: float
    launch_pos: Tuple[float, float]


@dataclass
class Table:
    width: float
    height: float
    walls: List[Wall]
    top_arc: CircleShape
    flippers: List[Flipper]
    slingshots: List[Slingshot]
    bumpers: List[Bumper]
    targets: List[DropTarget]
    spinner: Spinner
    ramp: Ramp
    lanes: LaneGeometry

    def flipper(self, side: Side) -> Flipper:
        for f in self.flippers:
            if f.side is side:
                return f
        raise KeyError(side)

    def signature(self) -> tuple:
        """Every positional field as plain floats, for exact comparisons."""
        def v(p):
            return (p.x, p.y)
        return (
            (self.width, self.height),
            tuple((w.kind, w.shape.points()) for w in self.walls),
            self.top_arc.points(),
            tuple((f.side.value, v(f.pivot), f.length, f.rest_angle, f.max_angle, f.angle) for f in self.flippers),
            tuple((s.side.value, s.shape.points()) for s in self.slingshots),
            tuple((v(b.center), b.radius) for b in self.bumpers),
            tuple((v(t.center), t.width, t.height) for t in self.targets),
            (v(self.spinner.center), self.spinner.width, self.spinner.height),
            (v(self.ramp.entry), v(self.ramp.exit), self.ramp.capture_w, self.ramp.capture_h),
            self.lanes,
        )
