"""
runner_engine.py: The runner game simulation.

Owns the ninja, the obstacle list, the score timers and the
not-started / running / game-over state machine.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    FRAME_TIME_MS, OBSTACLE_START_X, OBSTACLE_LABELS, SCORE_INTERVAL_MS,
    FIRST_SPAWN_DELAY_MS, SPAWN_INTERVAL_MIN_MS, SPAWN_INTERVAL_MAX_MS
)
from .data_models import Command, GameState, Ninja, Obstacle
from .physics_core import PhysicsCore
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


@dataclass
class RunnerEngine:
    """
    The authoritative runner game. step() is one display frame; the client
    calls update() with elapsed wall time and the engine catches up in
    fixed FRAME_TIME_MS increments.
    """
    core: PhysicsCore = field(default_factory=PhysicsCore)
    rng: random.Random = field(default_factory=random.Random)
    scheduler: Scheduler = field(default_factory=Scheduler)

    state: GameState = GameState.NOT_STARTED
    ninja: Ninja = field(default_factory=Ninja)
    obstacles: List[Obstacle] = field(default_factory=list)
    score: int = 0
    high_score: int = 0
    debug: bool = False
    tick_count: int = 0

    frame_timer: float = 0.0
    _next_obstacle_id: int = 0
    _score_timer: Optional[TimerHandle] = field(default=None, repr=False)
    _spawn_timer: Optional[TimerHandle] = field(default=None, repr=False)

    # ---------- State machine ----------

    def start(self):
        """Resets all mutable state and begins a run. Also used for restart."""
        restarting = self.state is GameState.GAME_OVER
        self.scheduler.reset()

        self.state = GameState.RUNNING
        self.score = 0
        self.obstacles = []
        self.ninja.reset()
        self.tick_count = 0
        self.frame_timer = 0.0
        self._next_obstacle_id = 0

        self._score_timer = self.scheduler.set_interval(SCORE_INTERVAL_MS, self._increment_score)
        self._spawn_timer = self.scheduler.set_timeout(FIRST_SPAWN_DELAY_MS, self._spawn_obstacle)

        logger.info("Game %s (high score %d)", "restarted" if restarting else "started", self.high_score)

    def game_over(self):
        if self.state is not GameState.RUNNING:
            return
        self.state = GameState.GAME_OVER
        self._cancel_timers()

        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d", self.high_score)
        logger.info("Game over after %d ticks. Score: %d, high score: %d",
                    self.tick_count, self.score, self.high_score)

    def shutdown(self):
        """Cancels every pending timer. Called when the window closes."""
        self._cancel_timers()

    def _cancel_timers(self):
        self.scheduler.cancel(self._score_timer)
        self.scheduler.cancel(self._spawn_timer)
        self._score_timer = None
        self._spawn_timer = None

    # ---------- Input ----------

    def jump(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        jumped = self.core.jump(self.ninja)
        if jumped:
            logger.debug("Jump at tick %d", self.tick_count)
        return jumped

    def handle_command(self, command: Optional[Command]):
        """Applies one player input. None and inputs that mean nothing in the current state are ignored."""
        if command is Command.TOGGLE_DEBUG:
            self.debug = not self.debug
        elif command is Command.JUMP:
            if self.state is GameState.NOT_STARTED:
                self.start()
            elif self.state is GameState.RUNNING:
                self.jump()
        elif command is Command.RESTART:
            if self.state is GameState.GAME_OVER:
                self.start()
        elif command is Command.CLICK:
            if self.state is GameState.RUNNING:
                self.jump()
            else:
                self.start()

    # ---------- Timers ----------

    def _increment_score(self):
        self.score += 1

    def _spawn_obstacle(self):
        self._next_obstacle_id += 1
        obstacle = Obstacle(
            x=OBSTACLE_START_X,
            label=self.rng.choice(OBSTACLE_LABELS),
            id=self._next_obstacle_id,
        )
        self.obstacles.append(obstacle)
        logger.debug("Spawned obstacle %d (%s) at tick %d", obstacle.id, obstacle.label, self.tick_count)

        next_interval = self.rng.uniform(SPAWN_INTERVAL_MIN_MS, SPAWN_INTERVAL_MAX_MS)
        self._spawn_timer = self.scheduler.set_timeout(next_interval, self._spawn_obstacle)

    # ---------- Simulation ----------

    def step(self):
        """
        One tick: ninja physics, obstacle movement, collision check, then the
        timers that came due during this frame.
        """
        if self.state is not GameState.RUNNING:
            return
        self.tick_count += 1

        # 1. Ninja
        self.core.step_ninja(self.ninja)

        # 2. Obstacles
        self.obstacles = self.core.step_obstacles(self.obstacles)

        # 3. Collision
        hit = self.core.first_collision(self.ninja, self.obstacles)
        if hit is not None:
            logger.debug("Collision with obstacle %d at x=%.1f", hit.id, hit.x)
            self.game_over()
            return

        # 4. Score / spawn timers
        self.scheduler.advance(FRAME_TIME_MS)

    def update(self, dt_seconds: float) -> int:
        """Runs as many fixed ticks as fit in the elapsed time. Returns the count."""
        if self.state is not GameState.RUNNING:
            self.frame_timer = 0.0
            return 0

        self.frame_timer += dt_seconds * 1000.0
        steps = 0
        # Small tolerance: 1000/60 does not add back up to whole milliseconds.
        while self.frame_timer + 1e-6 >= FRAME_TIME_MS and self.state is GameState.RUNNING:
            self.frame_timer -= FRAME_TIME_MS
            self.step()
            steps += 1
        return steps

    def pose(self) -> tuple[str, int]:
        """Sprite pose name and frame index for the renderer."""
        if self.state is GameState.GAME_OVER:
            return "dead", 0
        if self.ninja.jumping:
            return "jump", 0
        return "run", math.floor(self.ninja.sprite_frame)
