#!/usr/bin/env python3
"""
runner_client.py

pygame window, input mapping and rendering for both game engines.
The engines hold all game rules; this module only turns events into
Commands and draws whatever state the engine reports.
"""

import logging
from typing import Optional, Union

import pygame

from .constants import (
    RENDER_FPS, SCREEN_WIDTH, SCREEN_HEIGHT, HUD_HEIGHT, GROUND_Y, NINJA_X,
    NINJA_WIDTH, NINJA_HEIGHT, OBSTACLE_WIDTH, OBSTACLE_HEIGHT,
    CLASSIC_OBSTACLE_WIDTH, CLASSIC_OBSTACLE_HEIGHT
)
from .data_models import Command, GameState
from .classic_engine import ClassicEngine
from .runner_engine import RunnerEngine

logger = logging.getLogger(__name__)

Engine = Union[RunnerEngine, ClassicEngine]

BACKGROUND = (229, 231, 235)
HUD_BACKGROUND = (243, 244, 246)
GROUND_COLOR = (75, 85, 99)
TEXT_COLOR = (31, 41, 55)
MUTED_TEXT = (75, 85, 99)
NINJA_COLOR = (17, 24, 39)
NINJA_BAND = (220, 38, 38)
DEAD_COLOR = (107, 114, 128)
OBSTACLE_COLOR = (30, 64, 175)
NINJA_HITBOX_COLOR = (239, 68, 68)
OBSTACLE_HITBOX_COLOR = (34, 197, 94)
BUTTON_COLOR = (59, 130, 246)
WHITE = (255, 255, 255)

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)
RESTART_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def command_for_event(event) -> Optional[Command]:
    """Maps a pygame event to a game Command. Unrecognized input maps to None."""
    if event.type == pygame.KEYDOWN:
        if event.key in JUMP_KEYS:
            return Command.JUMP
        if event.key in RESTART_KEYS:
            return Command.RESTART
        if event.key == pygame.K_d:
            return Command.TOGGLE_DEBUG
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return Command.CLICK
    return None


def is_quit_event(event) -> bool:
    if event.type == pygame.QUIT:
        return True
    return event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE


class RunnerClient:
    def __init__(self, engine: Engine):
        pygame.init()
        self.engine = engine
        self.classic = isinstance(engine, ClassicEngine)
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT + HUD_HEIGHT))
        pygame.display.set_caption("Ninja Runner" + (" (classic)" if self.classic else ""))

        self.clock = pygame.time.Clock()
        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 20)
        # Default font lacks Greek glyphs on some builds.
        self.label_font = pygame.font.SysFont("dejavusans,freesans,arial", 36, bold=True)

        self.play_again_rect = pygame.Rect(0, 0, 160, 40)
        self.play_again_rect.center = (SCREEN_WIDTH // 2, HUD_HEIGHT + SCREEN_HEIGHT // 2 + 50)

    def run(self):
        """The main client loop."""
        logger.info("Client loop started (%s engine)", "classic" if self.classic else "runner")
        running = True
        try:
            while running:
                dt = self.clock.tick(RENDER_FPS) / 1000.0

                for event in pygame.event.get():
                    if is_quit_event(event):
                        running = False
                        break
                    self.engine.handle_command(command_for_event(event))

                self.engine.update(dt)
                self._draw()
        finally:
            self.engine.shutdown()
            pygame.quit()
            logger.info("Client closed. High score this session: %d", self.engine.high_score)

    # ---------- Drawing ----------

    def _draw(self):
        screen = self.screen
        screen.fill(BACKGROUND)
        self._draw_hud()

        engine = self.engine
        if engine.state is not GameState.NOT_STARTED:
            if self.classic:
                self._draw_classic()
            else:
                self._draw_runner()

        # Ground
        pygame.draw.rect(screen, GROUND_COLOR, (0, HUD_HEIGHT + GROUND_Y, SCREEN_WIDTH, 4))

        if engine.state is GameState.NOT_STARTED:
            self._draw_overlay(["Click or press Space to start"])
        elif engine.state is GameState.GAME_OVER:
            self._draw_overlay(["Game Over", f"Your score: {engine.score}"])
            self._draw_play_again()

        instr = self.small_font.render(
            "Space / Up / Click = Jump | Enter = Restart | D = Debug | Esc = Quit", True, MUTED_TEXT)
        screen.blit(instr, (10, HUD_HEIGHT + SCREEN_HEIGHT - 24))

        pygame.display.flip()

    def _draw_hud(self):
        pygame.draw.rect(self.screen, HUD_BACKGROUND, (0, 0, SCREEN_WIDTH, HUD_HEIGHT))
        score = self.font.render(f"Score: {self.engine.score}", True, TEXT_COLOR)
        self.screen.blit(score, (10, HUD_HEIGHT // 2 - score.get_height() // 2))
        high = self.font.render(f"High Score: {self.engine.high_score}", True, TEXT_COLOR)
        self.screen.blit(high, (SCREEN_WIDTH - high.get_width() - 10, HUD_HEIGHT // 2 - high.get_height() // 2))

    def _draw_ninja(self, left: float, top: float, pose: str, frame: int):
        """Block ninja; the pose only changes the legs and colour."""
        screen = self.screen
        color = DEAD_COLOR if pose == "dead" else NINJA_COLOR
        body = pygame.Rect(int(left), int(top), NINJA_WIDTH, NINJA_HEIGHT - 12)
        pygame.draw.rect(screen, color, body, border_radius=6)
        pygame.draw.rect(screen, NINJA_BAND, (body.x, body.y + 8, NINJA_WIDTH, 5))

        leg_top = body.bottom
        if pose == "run":
            stride = 6 if frame % 2 else -6
            pygame.draw.line(screen, color, (body.centerx - 6, leg_top), (body.centerx - 6 + stride, leg_top + 12), 5)
            pygame.draw.line(screen, color, (body.centerx + 6, leg_top), (body.centerx + 6 - stride, leg_top + 12), 5)
        elif pose == "jump":
            pygame.draw.line(screen, color, (body.centerx - 6, leg_top), (body.centerx - 12, leg_top + 6), 5)
            pygame.draw.line(screen, color, (body.centerx + 6, leg_top), (body.centerx + 12, leg_top + 6), 5)
        else:
            pygame.draw.line(screen, color, (body.left, leg_top + 10), (body.right, leg_top + 10), 5)

    def _draw_runner(self):
        engine: RunnerEngine = self.engine
        screen = self.screen
        ninja = engine.ninja
        pose, frame = engine.pose()

        self._draw_ninja(NINJA_X, HUD_HEIGHT + ninja.y - NINJA_HEIGHT, pose, frame)

        # Obstacles (Greek letters)
        obstacle_top = HUD_HEIGHT + GROUND_Y - OBSTACLE_HEIGHT
        for obstacle in engine.obstacles:
            letter = self.label_font.render(obstacle.label, True, OBSTACLE_COLOR)
            cell = pygame.Rect(int(obstacle.x), obstacle_top, OBSTACLE_WIDTH, OBSTACLE_HEIGHT)
            screen.blit(letter, letter.get_rect(center=cell.center))

        if engine.debug and engine.state is GameState.RUNNING:
            self._draw_hitboxes()

    def _draw_hitboxes(self):
        engine: RunnerEngine = self.engine
        core = engine.core

        box = core.ninja_hitbox(engine.ninja)
        pygame.draw.rect(self.screen, NINJA_HITBOX_COLOR,
                         (box.x, HUD_HEIGHT + box.y, box.width, box.height), 2)
        for obstacle in engine.obstacles:
            box = core.obstacle_hitbox(obstacle)
            pygame.draw.rect(self.screen, OBSTACLE_HITBOX_COLOR,
                             (box.x, HUD_HEIGHT + box.y, box.width, box.height), 2)

        info = self.small_font.render(
            f"DEBUG MODE: Ninja Y: {round(engine.ninja.y)} | Press D to toggle debug", True, NINJA_HITBOX_COLOR)
        self.screen.blit(info, (10, HUD_HEIGHT + 8))

    def _draw_classic(self):
        engine: ClassicEngine = self.engine
        pose = "dead" if engine.state is GameState.GAME_OVER else ("jump" if engine.ninja.jumping else "run")
        frame = (engine.tick_count // 5) % 2
        top = HUD_HEIGHT + GROUND_Y - engine.ninja.bottom - NINJA_HEIGHT
        self._draw_ninja(NINJA_X, top, pose, frame)

        x = SCREEN_WIDTH - engine.obstacle_right - CLASSIC_OBSTACLE_WIDTH
        pygame.draw.rect(self.screen, OBSTACLE_COLOR,
                         (x, HUD_HEIGHT + GROUND_Y - CLASSIC_OBSTACLE_HEIGHT,
                          CLASSIC_OBSTACLE_WIDTH, CLASSIC_OBSTACLE_HEIGHT))

    def _draw_overlay(self, lines):
        shade = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 50))
        self.screen.blit(shade, (0, HUD_HEIGHT))

        y = HUD_HEIGHT + SCREEN_HEIGHT // 2 - 40
        for i, line in enumerate(lines):
            font = self.large_font if i == 0 else self.font
            text = font.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (SCREEN_WIDTH // 2 - text.get_width() // 2, y))
            y += text.get_height() + 10

    def _draw_play_again(self):
        pygame.draw.rect(self.screen, BUTTON_COLOR, self.play_again_rect, border_radius=6)
        label = self.font.render("Play Again", True, WHITE)
        self.screen.blit(label, label.get_rect(center=self.play_again_rect.center))
