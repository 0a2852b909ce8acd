"""Tests for the runner engine: spawning, timers, collision and the game state machine."""

from __future__ import annotations

import random

import pytest

from ninja_runner.constants import GROUND_Y, OBSTACLE_LABELS, OBSTACLE_START_X
from ninja_runner.data_models import Command, GameState
from ninja_runner.runner_engine import RunnerEngine

FIRST_SPAWN_TICK = 120      # 2000 ms at 60 ticks per second
FIRST_HIT_TICK = 120 + 147  # first obstacle reaches x=65, inside the ninja hitbox


@pytest.fixture
def engine():
    engine = RunnerEngine(rng=random.Random(1234))
    engine.start()
    return engine


def run_ticks(engine: RunnerEngine, ticks: int):
    for _ in range(ticks):
        engine.step()


def test_start_resets_state(engine):
    assert engine.state is GameState.RUNNING
    assert engine.score == 0
    assert engine.obstacles == []
    assert engine.ninja.y == GROUND_Y
    assert not engine.ninja.jumping
    assert engine.scheduler.active == 2


def test_nothing_moves_before_start():
    engine = RunnerEngine(rng=random.Random(0))
    assert engine.state is GameState.NOT_STARTED
    engine.step()
    assert engine.update(1.0) == 0
    assert engine.tick_count == 0
    assert engine.score == 0


def test_score_increments_every_100ms(engine):
    run_ticks(engine, 60)
    assert engine.score == 10


def test_first_obstacle_spawns_after_two_seconds(engine):
    run_ticks(engine, FIRST_SPAWN_TICK - 1)
    assert engine.obstacles == []
    engine.step()
    assert len(engine.obstacles) == 1

    obstacle = engine.obstacles[0]
    assert obstacle.x == OBSTACLE_START_X
    assert obstacle.label in OBSTACLE_LABELS
    assert obstacle.id == 1


def test_next_spawn_is_within_interval_range(engine):
    run_ticks(engine, FIRST_SPAWN_TICK)
    pending = engine._spawn_timer
    assert pending is not None
    assert 1500 <= pending.due - engine.scheduler.now <= 3000


def test_spawn_ids_follow_creation_order(engine):
    # Drive the timers alone so obstacles pile up at the spawn point.
    engine.scheduler.advance(20000)
    ids = [o.id for o in engine.obstacles]
    assert len(ids) >= 6
    assert ids == list(range(1, len(ids) + 1))
    assert all(o.x == OBSTACLE_START_X for o in engine.obstacles)


def test_same_seed_gives_same_obstacles():
    runs = []
    for _ in range(2):
        engine = RunnerEngine(rng=random.Random(99))
        engine.start()
        engine.scheduler.advance(20000)
        runs.append([(o.id, o.label) for o in engine.obstacles])
    assert runs[0] == runs[1]
    assert runs[0]


def test_grounded_ninja_collides_with_first_obstacle(engine):
    run_ticks(engine, FIRST_HIT_TICK - 1)
    assert engine.state is GameState.RUNNING

    engine.step()
    assert engine.state is GameState.GAME_OVER
    assert engine.tick_count == FIRST_HIT_TICK
    assert engine.high_score == engine.score > 0


def test_game_over_freezes_everything(engine):
    run_ticks(engine, FIRST_HIT_TICK)
    assert engine.state is GameState.GAME_OVER
    assert engine.scheduler.active == 0

    score = engine.score
    positions = [o.x for o in engine.obstacles]
    run_ticks(engine, 100)
    assert engine.update(2.0) == 0
    assert engine.score == score
    assert [o.x for o in engine.obstacles] == positions


def test_timed_jump_clears_obstacle(engine):
    run_ticks(engine, 250)
    assert engine.jump()
    run_ticks(engine, 50)
    assert engine.state is GameState.RUNNING
    assert engine.ninja.y == GROUND_Y


def test_restart_resets_but_keeps_high_score(engine):
    run_ticks(engine, FIRST_HIT_TICK)
    best = engine.high_score

    engine.handle_command(Command.RESTART)
    assert engine.state is GameState.RUNNING
    assert engine.score == 0
    assert engine.obstacles == []
    assert engine.ninja.y == GROUND_Y
    assert engine.high_score == best


def test_lower_score_does_not_replace_high_score(engine):
    run_ticks(engine, FIRST_HIT_TICK)
    best = engine.high_score

    engine.start()
    run_ticks(engine, 10)
    engine.game_over()
    assert engine.score < best
    assert engine.high_score == best


class TestCommands:
    """Input handling in each state."""

    def test_jump_key_starts_game(self):
        engine = RunnerEngine(rng=random.Random(0))
        engine.handle_command(Command.JUMP)
        assert engine.state is GameState.RUNNING
        assert not engine.ninja.jumping

    def test_click_starts_then_jumps_then_restarts(self):
        engine = RunnerEngine(rng=random.Random(0))
        engine.handle_command(Command.CLICK)
        assert engine.state is GameState.RUNNING

        engine.handle_command(Command.CLICK)
        assert engine.ninja.jumping

        engine.game_over()
        engine.handle_command(Command.CLICK)
        assert engine.state is GameState.RUNNING
        assert not engine.ninja.jumping

    def test_restart_ignored_while_running(self, engine):
        run_ticks(engine, 30)
        engine.handle_command(Command.RESTART)
        assert engine.tick_count == 30
        assert engine.score == 5

    def test_jump_ignored_after_game_over(self, engine):
        engine.game_over()
        engine.handle_command(Command.JUMP)
        assert engine.state is GameState.GAME_OVER
        assert not engine.ninja.jumping

    def test_toggle_debug(self, engine):
        engine.handle_command(Command.TOGGLE_DEBUG)
        assert engine.debug
        engine.handle_command(Command.TOGGLE_DEBUG)
        assert not engine.debug

    def test_unknown_input_ignored(self, engine):
        engine.handle_command(None)
        assert engine.state is GameState.RUNNING


def test_update_runs_fixed_ticks(engine):
    assert engine.update(0.1) == 6
    assert engine.tick_count == 6
    assert engine.score == 1
    assert engine.update(0.005) == 0


def test_pose_tracks_state(engine):
    assert engine.pose() == ("run", 0)
    engine.jump()
    engine.step()
    assert engine.pose() == ("jump", 0)
    engine.game_over()
    assert engine.pose() == ("dead", 0)


def test_shutdown_cancels_timers(engine):
    engine.shutdown()
    assert engine.scheduler.active == 0
    run_ticks(engine, 200)
    assert engine.score == 0
    assert engine.obstacles == []
