# pinball_shared/game_config.py
import math
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Tuple


# ---------------- Physics (settings panel) ----------------
# (min, max) for every tunable; friction and bounce stay inside (0, 1)
PHYSICS_LIMITS: Dict[str, Tuple[float, float]] = {
    "gravity": (0.0, 1.5),
    "bounce": (0.05, 0.95),
    "friction": (0.9, 0.999),
    "flipper_power": (5.0, 40.0),
    "bumper_force": (4.0, 30.0),
    "sling_force": (4.0, 30.0),
    "sling_threshold": (0.0, 15.0),
    "speed_multiplier": (0.25, 2.0),
}


@dataclass
class PhysicsConfig:
    # all values are per animation frame
    gravity: float = 0.35
    bounce: float = 0.6
    friction: float = 0.985
    flipper_power: float = 18.0
    bumper_force: float = 12.0
    sling_force: float = 14.0
    sling_threshold: float = 3.0
    speed_multiplier: float = 1.0

    def update(self, name: str, value: Any) -> bool:
        """Set one parameter, clamped into its allowed range.

        Returns False (and leaves the config untouched) for unknown names
        and for values that are not finite numbers.
        """
        limits = PHYSICS_LIMITS.get(name)
        if limits is None:
            return False
        try:
            v = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(v):
            return False
        lo, hi = limits
        setattr(self, name, max(lo, min(hi, v)))
        return True

    def reset_to_defaults(self):
        for f in fields(self):
            setattr(self, f.name, f.default)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


# ---------------- Table (fixed at layout time) ----------------
@dataclass(frozen=True)
class TableConfig:
    lane_width: float = 40.0
    ball_radius: float = 10.0

    # curved top wall / launch lane
    lane_top_pad: float = 2.2       # lane wall starts this many ball radii below the arc contact

    # flippers
    flipper_len_frac: float = 0.17
    flipper_half_thickness: float = 5.0
    drain_gap: float = 80.0            # tip to tip, at rest
    flipper_pivot_rise: float = 90.0   # pivot height above the bottom edge
    flipper_rest: float = 0.45        # below horizontal, toward the drain
    flipper_extended: float = -0.5
    flipper_rate: float = 0.35
    flipper_return_factor: float = 0.5
    flipper_passive_power: float = 5.0
    flipper_kick: float = 0.5

    # outlanes / guide rails
    outlane_frac: float = 0.4          # separator x as a fraction of the pivot x
    rail_top_frac: float = 0.72

    # slingshots (positions along the guide rail)
    sling_start: float = 0.35
    sling_end: float = 0.85
    sling_lift_frac: float = 0.06
    sling_height_frac: float = 0.1
    sling_soft_bounce: float = 0.3
    sling_soft_friction: float = 0.8
    sling_up_bias: float = 2.0
    sling_flash_frames: int = 8
    sling_score: int = 10

    # bumpers: (x, y) fractions of the playfield
    bumper_spots: Tuple[Tuple[float, float], ...] = ((0.3, 0.25), (0.7, 0.25), (0.5, 0.35))
    bumper_radius_frac: float = 0.055
    bumper_flash_frames: int = 10
    bumper_score: int = 100

    # drop targets
    target_spots: Tuple[Tuple[float, float], ...] = (
        (0.15, 0.45), (0.15, 0.50), (0.15, 0.55),
        (0.85, 0.45), (0.85, 0.50), (0.85, 0.55),
    )
    target_width: float = 8.0
    target_height: float = 30.0
    target_score: int = 500
    bank_bonus: int = 5000
    target_reset_delay: float = 2.0    # seconds

    # spinner
    spinner_spot: Tuple[float, float] = (0.5, 0.15)
    spinner_width_frac: float = 0.087
    spinner_height: float = 6.0
    spinner_friction: float = 0.98
    spinner_transfer: float = 0.5
    spinner_damping: float = 0.95
    spinner_score: int = 50
    spin_score_threshold: float = 0.5

    # ramp
    ramp_entry: Tuple[float, float] = (0.35, 0.55)
    ramp_exit: Tuple[float, float] = (0.25, 0.15)
    ramp_capture_w: float = 35.0
    ramp_capture_h: float = 40.0
    ramp_min_speed: float = 8.0
    ramp_damping: float = 0.8
    ramp_align_cos: float = 0.99
    ramp_score: int = 200

    # ball lifecycle
    start_balls: int = 3
    launch_vx: float = -2.0
    launch_speed: float = 28.0
    launch_jitter: float = 4.0
    launch_rise: float = 50.0          # launch y above the bottom edge
    game_over_delay: float = 0.5       # seconds

    vel_eps: float = 1e-9


CFG = TableConfig()
