"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass
from enum import Enum

from .constants import GROUND_Y


class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class Command(Enum):
    """Device-independent player inputs."""
    JUMP = "jump"
    RESTART = "restart"
    TOGGLE_DEBUG = "toggle_debug"
    CLICK = "click"


@dataclass
class Ninja:
    """The player-controlled actor used by the runner engine."""
    y: float = GROUND_Y
    velocity: float = 0.0
    jumping: bool = False
    sprite_frame: float = 0.0

    @property
    def grounded(self) -> bool:
        return not self.jumping

    def reset(self):
        self.y = GROUND_Y
        self.velocity = 0.0
        self.jumping = False
        self.sprite_frame = 0.0


@dataclass
class Obstacle:
    """A scrolling hazard."""
    x: float
    label: str
    id: int


@dataclass(frozen=True)
class Hitbox:
    """Axis-aligned collision rectangle in screen coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


class JumpPhase(Enum):
    GROUNDED = "grounded"
    RISING = "rising"
    FALLING = "falling"


@dataclass
class ClassicNinja:
    """Classic-variant ninja: height above the ground, moved in fixed steps."""
    bottom: int = 0
    phase: JumpPhase = JumpPhase.GROUNDED

    @property
    def jumping(self) -> bool:
        return self.phase is not JumpPhase.GROUNDED
