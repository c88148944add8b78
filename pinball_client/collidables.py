# pinball_client/collidables.py
"""
Collision shapes of the playfield.

Every shape answers the same question through probe(): is a ball of this
radius touching me, and if so, where, how deep, and along which unit normal
(pointing from the surface toward the ball centre)? Resolvers only deal with
Contact objects and never look at the concrete shape.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pygame.math import Vector2 as Vec2

from pinball_client.geometry import closest_point_on_segment, safe_normalize, point_in_triangle


@dataclass
class Contact:
    distance: float      # ball centre -> surface (negative when the centre is inside)
    normal: Vec2         # unit, surface -> ball
    point: Vec2          # contact point on the surface
    depth: float         # how far the ball must move along normal to just touch
    t: float = 0.0       # segment parameter of the contact point
    edge: int = -1       # polygon edge index


class Collidable:
    def probe(self, center: Vec2, radius: float, margin: float = 0.0) -> Optional[Contact]:
        raise NotImplementedError

    def points(self) -> Tuple[Tuple[float, float], ...]:
        raise NotImplementedError


@dataclass
class SegmentShape(Collidable):
    a: Vec2
    b: Vec2

    def probe(self, center, radius, margin=0.0):
        closest, t = closest_point_on_segment(center, self.a, self.b)
        diff = center - closest
        dist = diff.length()
        reach = radius + margin
        if dist >= reach:
            return None
        # centre exactly on the line: fall back to the segment's left-hand normal
        edge = self.b - self.a
        fallback = safe_normalize(Vec2(edge.y, -edge.x))
        n = safe_normalize(diff, fallback)
        return Contact(dist, n, closest, reach - dist, t=t)

    def points(self):
        return ((self.a.x, self.a.y), (self.b.x, self.b.y))


@dataclass
class CircleShape(Collidable):
    center: Vec2
    radius: float
    inner: bool = False   # concave: the ball lives inside the circle

    def probe(self, center, radius, margin=0.0):
        diff = center - self.center
        d = diff.length()
        reach = radius + margin
        if self.inner:
            dist = self.radius - d
            if dist >= reach:
                return None
            n = safe_normalize(-diff, Vec2(0, 1))
            point = self.center - n * self.radius
        else:
            dist = d - self.radius
            if dist >= reach:
                return None
            n = safe_normalize(diff, Vec2(0, -1))
            point = self.center + n * self.radius
        return Contact(dist, n, point, reach - dist)

    def points(self):
        return ((self.center.x, self.center.y), (self.radius, float(self.inner)))


@dataclass
class PolygonShape(Collidable):
    """Convex polygon; edge i runs from vertex i to vertex i+1."""
    vertices: List[Vec2]
    normals: List[Vec2] = field(init=False)

    def __post_init__(self):
        self.vertices = [Vec2(v) for v in self.vertices]
        c = self.centroid()
        self.normals = []
        for a, b in self.edges():
            e = b - a
            n = safe_normalize(Vec2(e.y, -e.x))
            if n.dot((a + b) * 0.5 - c) < 0:
                n = -n
            self.normals.append(n)

    def centroid(self) -> Vec2:
        s = Vec2(0, 0)
        for v in self.vertices:
            s += v
        return s / len(self.vertices)

    def edges(self) -> List[Tuple[Vec2, Vec2]]:
        n = len(self.vertices)
        return [(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def contains(self, p: Vec2) -> bool:
        if len(self.vertices) == 3:
            return point_in_triangle(p, *self.vertices)
        return all(n.dot(p - a) <= 0 for (a, _), n in zip(self.edges(), self.normals))

    def probe(self, center, radius, margin=0.0):
        reach = radius + margin
        best = None
        for i, (a, b) in enumerate(self.edges()):
            closest, t = closest_point_on_segment(center, a, b)
            d = (center - closest).length()
            if best is None or d < best[0]:
                best = (d, i, closest, t)
        d, i, closest, t = best

        if self.contains(center):
            # sunk past the surface: push out through the nearest edge
            n = Vec2(self.normals[i])
            return Contact(-d, n, closest, reach + d, t=t, edge=i)

        if d >= reach:
            return None
        n = safe_normalize(center - closest, self.normals[i])
        return Contact(d, n, closest, reach - d, t=t, edge=i)

    def points(self):
        return tuple((v.x, v.y) for v in self.vertices)


@dataclass
class RectShape(Collidable):
    """Axis-aligned rectangle given by centre and size."""
    center: Vec2
    width: float
    height: float

    def probe(self, center, radius, margin=0.0):
        reach = radius + margin
        dx = center.x - self.center.x
        dy = center.y - self.center.y
        over_x = self.width / 2 + reach - abs(dx)
        over_y = self.height / 2 + reach - abs(dy)
        if over_x <= 0 or over_y <= 0:
            return None
        # resolve along the axis of least penetration
        if over_x < over_y:
            sx = 1.0 if dx >= 0 else -1.0
            n = Vec2(sx, 0)
            point = Vec2(self.center.x + sx * self.width / 2, center.y)
            return Contact(reach - over_x, n, point, over_x)
        sy = 1.0 if dy >= 0 else -1.0
        n = Vec2(0, sy)
        point = Vec2(center.x, self.center.y + sy * self.height / 2)
        return Contact(reach - over_y, n, point, over_y)

    def points(self):
        return ((self.center.x, self.center.y), (self.width, self.height))

