"""
classic_engine.py: The fixed-interval variant of the game.

The jump is a linear climb and fall in CLASSIC_JUMP_STEP increments, and
a single obstacle loops across the screen, scoring a point each time it
wraps around. A hit is an obstacle inside the fixed window near the ninja
while the ninja is too low to clear it.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    CLASSIC_TICK_MS, CLASSIC_JUMP_HEIGHT, CLASSIC_JUMP_STEP, CLASSIC_OBSTACLE_RESET,
    CLASSIC_OBSTACLE_END, CLASSIC_OBSTACLE_STEP, CLASSIC_HIT_WINDOW, CLASSIC_SAFE_HEIGHT
)
from .data_models import ClassicNinja, Command, GameState, JumpPhase

logger = logging.getLogger(__name__)


@dataclass
class ClassicEngine:
    state: GameState = GameState.NOT_STARTED
    ninja: ClassicNinja = field(default_factory=ClassicNinja)
    obstacle_right: int = CLASSIC_OBSTACLE_RESET
    score: int = 0
    high_score: int = 0
    tick_count: int = 0
    frame_timer: float = 0.0

    def start(self):
        self.state = GameState.RUNNING
        self.ninja = ClassicNinja()
        self.obstacle_right = CLASSIC_OBSTACLE_RESET
        self.score = 0
        self.tick_count = 0
        self.frame_timer = 0.0
        logger.info("Classic game started (high score %d)", self.high_score)

    def game_over(self):
        if self.state is not GameState.RUNNING:
            return
        self.state = GameState.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d", self.high_score)
        logger.info("Game over. Final score: %d", self.score)

    def shutdown(self):
        """Drops any partial tick; nothing else runs outside step()."""
        self.frame_timer = 0.0

    def jump(self) -> bool:
        if self.state is not GameState.RUNNING or self.ninja.jumping:
            return False
        self.ninja.phase = JumpPhase.RISING
        return True

    def handle_command(self, command: Optional[Command]):
        if command is Command.JUMP:
            if self.state is GameState.RUNNING:
                self.jump()
            elif self.state is GameState.NOT_STARTED:
                self.start()
        elif command is Command.RESTART:
            if self.state is GameState.GAME_OVER:
                self.start()
        elif command is Command.CLICK:
            if self.state is GameState.RUNNING:
                self.jump()
            else:
                self.start()

    def _step_ninja(self):
        ninja = self.ninja
        if ninja.phase is JumpPhase.RISING:
            if ninja.bottom >= CLASSIC_JUMP_HEIGHT:
                ninja.phase = JumpPhase.FALLING
            else:
                ninja.bottom += CLASSIC_JUMP_STEP
        elif ninja.phase is JumpPhase.FALLING:
            if ninja.bottom <= 0:
                ninja.phase = JumpPhase.GROUNDED
            else:
                ninja.bottom -= CLASSIC_JUMP_STEP

    def _step_obstacle(self):
        if self.obstacle_right >= CLASSIC_OBSTACLE_END:
            self.obstacle_right = CLASSIC_OBSTACLE_RESET
            self.score += 1
        else:
            self.obstacle_right += CLASSIC_OBSTACLE_STEP

    def in_hit_window(self) -> bool:
        low, high = CLASSIC_HIT_WINDOW
        return low < self.obstacle_right < high

    def step(self):
        if self.state is not GameState.RUNNING:
            return
        self.tick_count += 1

        self._step_ninja()
        self._step_obstacle()

        if self.in_hit_window() and self.ninja.bottom < CLASSIC_SAFE_HEIGHT:
            self.game_over()

    def update(self, dt_seconds: float) -> int:
        if self.state is not GameState.RUNNING:
            self.frame_timer = 0.0
            return 0

        self.frame_timer += dt_seconds * 1000.0
        steps = 0
        while self.frame_timer >= CLASSIC_TICK_MS and self.state is GameState.RUNNING:
            self.frame_timer -= CLASSIC_TICK_MS
            self.step()
            steps += 1
        return steps

    @staticmethod
    def jump_duration_ticks() -> int:
        """Ticks from the jump command until the ninja can jump again."""
        climb = CLASSIC_JUMP_HEIGHT // CLASSIC_JUMP_STEP
        # One extra tick at the apex and one on landing to switch phase.
        return 2 * climb + 2
