# pinball_client/table_layout.py
"""
Table layout generator.

build_table() is a pure function of the canvas size: it lays out every
element from proportions of the playfield, so the same (width, height)
always yields the same geometry and a resized window rescales the table
without distortion. The launch lane is a strip of CFG.lane_width on the
right; everything else lives in the playfield to its left.
"""
import math

from pygame.math import Vector2 as Vec2

from pinball_client.collidables import CircleShape, PolygonShape, SegmentShape
from pinball_client.game_entities import (
    Table, LaneGeometry, Wall, Flipper, Slingshot, Bumper, DropTarget, Spinner, Ramp, Side,
)
from pinball_shared.game_config import CFG, TableConfig


def _mirror(p: Vec2, play_w: float) -> Vec2:
    return Vec2(play_w - p.x, p.y)


def _xy(p: Vec2):
    return (p.x, p.y)


def build_table(width: float, height: float, cfg: TableConfig = CFG) -> Table:
    W, H = float(width), float(height)
    pw = W - cfg.lane_width
    cx = pw / 2
    r = cfg.ball_radius

    # ---- curved top wall spanning playfield + launch lane ----
    arc_r = W / 2
    arc_c = Vec2(W / 2, arc_r)

    # lane wall stops below the point where a launched ball meets the arc
    lane_cx = pw + cfg.lane_width / 2
    reach = arc_r - r
    dx = lane_cx - arc_c.x
    contact_y = arc_c.y - math.sqrt(max(0.0, reach * reach - dx * dx))
    lane_top = contact_y + cfg.lane_top_pad * r

    # ---- flippers: symmetric about the playfield centre, drain gap between tips ----
    pivot_y = H - cfg.flipper_pivot_rise
    length = cfg.flipper_len_frac * pw
    tip_x = cx - cfg.drain_gap / 2
    left_pivot = Vec2(tip_x - length * math.cos(cfg.flipper_rest), pivot_y)
    right_pivot = _mirror(left_pivot, pw)

    flippers = [
        Flipper(Side.LEFT, left_pivot, length,
                rest_angle=cfg.flipper_rest, max_angle=cfg.flipper_extended,
                rate=cfg.flipper_rate, return_factor=cfg.flipper_return_factor,
                angle=cfg.flipper_rest),
        Flipper(Side.RIGHT, right_pivot, length,
                rest_angle=math.pi - cfg.flipper_rest, max_angle=math.pi - cfg.flipper_extended,
                rate=cfg.flipper_rate, return_factor=cfg.flipper_return_factor,
                angle=math.pi - cfg.flipper_rest),
    ]

    # ---- outlane separators and guide rails, derived from the pivots ----
    sep_left = left_pivot.x * cfg.outlane_frac
    sep_right = pw - sep_left
    rail_top = H * cfg.rail_top_frac
    rail_l0 = Vec2(sep_left, rail_top)
    rail_r0 = Vec2(sep_right, rail_top)

    walls = [
        Wall(SegmentShape(Vec2(0, arc_c.y), Vec2(0, H)), "wall"),
        Wall(SegmentShape(Vec2(W, arc_c.y), Vec2(W, H)), "wall"),
        Wall(SegmentShape(Vec2(pw, lane_top), Vec2(pw, H)), "lane"),
        Wall(SegmentShape(Vec2(rail_l0), Vec2(left_pivot)), "rail"),
        Wall(SegmentShape(Vec2(rail_r0), Vec2(right_pivot)), "rail"),
        Wall(SegmentShape(Vec2(sep_left, rail_top), Vec2(sep_left, H)), "separator"),
        Wall(SegmentShape(Vec2(sep_right, rail_top), Vec2(sep_right, H)), "separator"),
    ]

    # ---- slingshots sit on top of the guide rails ----
    lift = Vec2(0, cfg.sling_lift_frac * H)
    outer_bottom = rail_l0.lerp(left_pivot, cfg.sling_start) - lift
    inner_bottom = rail_l0.lerp(left_pivot, cfg.sling_end) - lift
    top = outer_bottom - Vec2(0, cfg.sling_height_frac * H)
    slingshots = [
        Slingshot(Side.LEFT, PolygonShape([top, inner_bottom, outer_bottom])),
        Slingshot(Side.RIGHT, PolygonShape([_mirror(top, pw), _mirror(inner_bottom, pw),
                                            _mirror(outer_bottom, pw)])),
    ]

    bumper_r = cfg.bumper_radius_frac * pw
    bumpers = [Bumper(Vec2(fx * pw, fy * H), bumper_r, cfg.bumper_score) for fx, fy in cfg.bumper_spots]

    targets = [DropTarget(Vec2(fx * pw, fy * H), cfg.target_width, cfg.target_height)
               for fx, fy in cfg.target_spots]

    sx, sy = cfg.spinner_spot
    spinner = Spinner(Vec2(sx * pw, sy * H), cfg.spinner_width_frac * pw, cfg.spinner_height,
                      friction=cfg.spinner_friction)

    ramp = Ramp(Vec2(cfg.ramp_entry[0] * pw, cfg.ramp_entry[1] * H),
                Vec2(cfg.ramp_exit[0] * pw, cfg.ramp_exit[1] * H),
                cfg.ramp_capture_w, cfg.ramp_capture_h)

    lanes = LaneGeometry(
        play_width=pw,
        lane_wall_x=pw,
        lane_top_y=lane_top,
        arc_center=_xy(arc_c),
        arc_radius=arc_r,
        outlane_left_x=sep_left,
        outlane_right_x=sep_right,
        rail_top_y=rail_top,
        left_rail=(_xy(rail_l0), _xy(left_pivot)),
        right_rail=(_xy(rail_r0), _xy(right_pivot)),
        drain_left_x=tip_x,
        drain_right_x=pw - tip_x,
        launch_pos=(lane_cx, H - cfg.launch_rise),
    )

    return Table(
        width=W,
        height=H,
        walls=walls,
        top_arc=CircleShape(arc_c, arc_r, inner=True),
        flippers=flippers,
        slingshots=slingshots,
        bumpers=bumpers,
        targets=targets,
        spinner=spinner,
        ramp=ramp,
        lanes=lanes,
    )


def carry_state(old: Table, new: Table):
    """Copy element state (not geometry) from a previous layout."""
    for a, b in zip(old.flippers, new.flippers):
        b.active = a.active
        b.angle = b.rest_angle + (a.angle - a.rest_angle)
    for a, b in zip(old.bumpers, new.bumpers):
        b.hits, b.active, b.timer = a.hits, a.active, a.timer
    for a, b in zip(old.slingshots, new.slingshots):
        b.active, b.timer = a.active, a.timer
    for a, b in zip(old.targets, new.targets):
        b.active = a.active
    new.spinner.angle = old.spinner.angle
    new.spinner.spin_speed = old.spinner.spin_speed
