# pinball_client/game_state.py
import random
from enum import Enum
from typing import Optional, Tuple

from pygame.math import Vector2 as Vec2

from pinball_client.game_entities import Ball, BallState
from pinball_shared.game_config import CFG, TableConfig
from pinball_shared.scorestore import HighScoreStore


class GameState(Enum):
    IDLE = "idle"            # waiting for the first launch
    PLAYING = "playing"
    GAME_OVER = "game_over"  # until the delayed reset fires


class GameController:
    """
    Ball lifecycle and scoring.

    inactive -> in play   launch(), only with balls left and no ball in play
    in play -> inactive   ball_lost(), one ball fewer
    inactive -> game over when the last ball is lost
    game over -> idle     reset(), fired by the world after a short delay
    """

    def __init__(self, ball: Ball, store: Optional[HighScoreStore] = None, cfg: TableConfig = CFG):
        self.ball = ball
        self.cfg = cfg
        self.store = store if store is not None else HighScoreStore(None)

        self.score: int = 0
        self.high_score: int = self.store.load()
        self.balls_remaining: int = cfg.start_balls
        self.state: GameState = GameState.IDLE
        self._record_announced = False

    # ---------------- queries ----------------
    @property
    def ball_in_play(self) -> bool:
        return self.ball.state is BallState.IN_PLAY

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    @property
    def is_game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def can_launch(self) -> bool:
        return (self.state is not GameState.GAME_OVER
                and not self.ball_in_play
                and self.balls_remaining > 0)

    # ---------------- transitions ----------------
    def launch(self, launch_pos: Tuple[float, float], rng: random.Random) -> bool:
        if not self.can_launch():
            return False
        if self.state is GameState.IDLE:
            print(f"[pinball] Game started ({self.balls_remaining} balls)")
            self._record_announced = False
        self.state = GameState.PLAYING

        vy = -(self.cfg.launch_speed + rng.random() * self.cfg.launch_jitter)
        self.ball.place(Vec2(launch_pos), Vec2(self.cfg.launch_vx, vy))
        self.ball.state = BallState.IN_PLAY
        return True

    def ball_lost(self) -> bool:
        """Drain the ball. Returns True on the transition into game over."""
        if not self.ball_in_play:
            return False
        self.ball.state = BallState.INACTIVE
        self.balls_remaining = max(0, self.balls_remaining - 1)
        print(f"[pinball] Ball lost, {self.balls_remaining} left (score {self.score})")

        if self.balls_remaining == 0:
            self.state = GameState.GAME_OVER
            print(f"[pinball] Game over: score {self.score}, high score {self.high_score}")
            return True
        return False

    def add_score(self, points: int):
        if points <= 0 or not self.is_playing:
            return
        self.score += int(points)
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.save(self.high_score)
            if not self._record_announced:
                self._record_announced = True
                print("[pinball] New high score!")

    def reset(self):
        self.score = 0
        self.balls_remaining = self.cfg.start_balls
        self.state = GameState.IDLE
        self.ball.state = BallState.INACTIVE
