"""
physics_core.py: The shared, deterministic kinematic functions and collision logic.
"""

import math
from typing import Iterable, Optional

from .constants import (
    GRAVITY, JUMP_VELOCITY, GROUND_Y, NINJA_X, NINJA_WIDTH, NINJA_HITBOX_SHRINK,
    OBSTACLE_WIDTH, OBSTACLE_HEIGHT, OBSTACLE_HITBOX_SHRINK, COLLISION_MARGIN,
    OBSTACLE_START_X, GAME_SPEED, SPRITE_FRAMES, SPRITE_FRAME_STEP
)
from .data_models import Ninja, Obstacle, Hitbox


class PhysicsCore:
    """
    Shared deterministic physics used by the runner engine and the client's
    debug overlay. One call to step_ninja is one tick.
    """

    def __init__(self, gravity: float = GRAVITY, jump_velocity: float = JUMP_VELOCITY,
                 ground_y: float = GROUND_Y):
        self.gravity = gravity
        self.jump_velocity = jump_velocity
        self.ground_y = ground_y

    def apply_gravity_and_movement(self, y: float, velocity: float) -> tuple[float, float]:
        """
        Calculates new position and velocity after one tick.
        Position moves by the current velocity before gravity is added.
        """
        y += velocity
        velocity += self.gravity

        y = round(y, 4)
        velocity = round(velocity, 4)

        return y, velocity

    def jump(self, ninja: Ninja) -> bool:
        """Starts a jump if the ninja is on the ground. Returns whether it did."""
        if not ninja.grounded:
            return False
        ninja.jumping = True
        ninja.velocity = self.jump_velocity
        return True

    def step_ninja(self, ninja: Ninja):
        """Advances the ninja one tick. Mutates the ninja."""
        if ninja.jumping:
            ninja.y, ninja.velocity = self.apply_gravity_and_movement(ninja.y, ninja.velocity)

            # Landing check
            if ninja.y >= self.ground_y:
                ninja.y = self.ground_y
                ninja.velocity = 0.0
                ninja.jumping = False

        ninja.sprite_frame = round(ninja.sprite_frame + SPRITE_FRAME_STEP, 4) % SPRITE_FRAMES

    def ticks_to_land(self) -> int:
        """Ticks from take-off until the ninja is back on the ground."""
        # y_n - ground = n * v0 + g * n * (n - 1) / 2, first n where that is >= 0,
        # i.e. n - 1 >= -2 * v0 / g
        return math.ceil(round(-2 * self.jump_velocity / self.gravity, 9)) + 1

    def apex_y(self) -> float:
        """Highest point (smallest y) reached by a full jump."""
        y, velocity = self.ground_y, self.jump_velocity
        apex = y
        while velocity < 0:
            y, velocity = self.apply_gravity_and_movement(y, velocity)
            apex = min(apex, y)
        return apex

    # ---------- Collision ----------

    def ninja_hitbox(self, ninja: Ninja) -> Hitbox:
        """Feet strip of the ninja: only the lowest COLLISION_MARGIN pixels can hit."""
        return Hitbox(
            x=NINJA_X,
            y=ninja.y - COLLISION_MARGIN,
            width=NINJA_WIDTH - NINJA_HITBOX_SHRINK,
            height=COLLISION_MARGIN,
        )

    def obstacle_hitbox(self, obstacle: Obstacle) -> Hitbox:
        return Hitbox(
            x=obstacle.x,
            y=self.ground_y - OBSTACLE_HEIGHT,
            width=OBSTACLE_WIDTH - OBSTACLE_HITBOX_SHRINK,
            height=OBSTACLE_HEIGHT,
        )

    def check_collision(self, ninja: Ninja, obstacle: Obstacle) -> bool:
        """
        Horizontal: the hitboxes overlap strictly, so touching edges miss.
        Vertical: the top of the ninja's feet strip is strictly below the
        obstacle's top edge.
        """
        ninja_box = self.ninja_hitbox(ninja)
        obstacle_box = self.obstacle_hitbox(obstacle)

        horizontal_overlap = (
            ninja_box.left < obstacle_box.right and ninja_box.right > obstacle_box.left
        )
        vertical_collision = ninja_box.top > obstacle_box.top

        return horizontal_overlap and vertical_collision

    def first_collision(self, ninja: Ninja, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
        for obstacle in obstacles:
            if self.check_collision(ninja, obstacle):
                return obstacle
        return None

    # ---------- Obstacles ----------

    def step_obstacles(self, obstacles: list[Obstacle]) -> list[Obstacle]:
        """Moves obstacles left and drops the ones that left the screen."""
        for obstacle in obstacles:
            obstacle.x = round(obstacle.x - GAME_SPEED, 4)
        return [o for o in obstacles if o.x > -OBSTACLE_WIDTH]

    @staticmethod
    def ticks_to_exit(start_x: float = OBSTACLE_START_X) -> int:
        """Ticks until an obstacle spawned at start_x is dropped off the left edge."""
        return math.ceil((start_x + OBSTACLE_WIDTH) / GAME_SPEED)
