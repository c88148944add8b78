# pinball_client/geometry.py
from typing import Sequence, Tuple

from pygame.math import Vector2 as Vec2


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def safe_normalize(v: Vec2, fallback: Vec2 = Vec2(0, -1)) -> Vec2:
    """Unit vector along v, or a copy of fallback when v has no length."""
    length = v.length()
    if length == 0:
        return Vec2(fallback)
    return v / length


def closest_point_on_segment(p: Vec2, a: Vec2, b: Vec2) -> Tuple[Vec2, float]:
    """Closest point to p on segment ab and its parameter t in [0, 1].

    A zero-length segment collapses to its start point (t = 0).
    """
    ab = b - a
    ab2 = ab.length_squared()
    if ab2 == 0:
        return Vec2(a), 0.0
    t = clamp((p - a).dot(ab) / ab2, 0.0, 1.0)
    return a + ab * t, t


def point_segment_distance(p: Vec2, a: Vec2, b: Vec2) -> float:
    closest, _ = closest_point_on_segment(p, a, b)
    return (p - closest).length()


def circle_hits_segment(c: Vec2, r: float, a: Vec2, b: Vec2) -> bool:
    return point_segment_distance(c, a, b) < r


def circle_hits_circle(c1: Vec2, r1: float, c2: Vec2, r2: float) -> bool:
    return (c1 - c2).length_squared() < (r1 + r2) * (r1 + r2)


def _cross(o: Vec2, a: Vec2, b: Vec2) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def point_in_triangle(p: Vec2, a: Vec2, b: Vec2, c: Vec2) -> bool:
    d1 = _cross(a, b, p)
    d2 = _cross(b, c, p)
    d3 = _cross(c, a, p)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def circle_hits_triangle(c: Vec2, r: float, tri: Sequence[Vec2]) -> bool:
    a, b, d = tri
    if point_in_triangle(c, a, b, d):
        return True
    return any(circle_hits_segment(c, r, p, q) for p, q in ((a, b), (b, d), (d, a)))


def circle_hits_rect(c: Vec2, r: float, center: Vec2, w: float, h: float) -> bool:
    """Containment of the circle centre in the rectangle grown by r."""
    return (abs(c.x - center.x) < w / 2 + r) and (abs(c.y - center.y) < h / 2 + r)


def reflect(v: Vec2, n: Vec2, k: float) -> Vec2:
    """v - (1 + k)(v.n)n : normal component reversed and scaled by k."""
    return v - n * ((1.0 + k) * v.dot(n))
