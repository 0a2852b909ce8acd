"""
Ninja Runner: a small side-scrolling jump game built on pygame.
"""

from .data_models import Command, GameState
from .physics_core import PhysicsCore
from .runner_engine import RunnerEngine
from .classic_engine import ClassicEngine

__all__ = ["Command", "GameState", "PhysicsCore", "RunnerEngine", "ClassicEngine"]
