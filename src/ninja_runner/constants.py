"""
constants.py: Centralized configuration for game, physics and timer settings.
"""

# -------- Window / Timing Config --------
RENDER_FPS = 60                     # Display refresh rate the client targets
FRAME_TIME_MS = 1000.0 / RENDER_FPS # One runner tick (ms)
HUD_HEIGHT = 40                     # Score strip above the playfield

# -------- Game World Config --------
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 320
GROUND_Y = 250                      # Floor line; y grows downwards

# -------- Ninja Config --------
NINJA_X = 50                        # Fixed left edge of the ninja hitbox
NINJA_WIDTH = 40
NINJA_HEIGHT = 50
NINJA_HITBOX_SHRINK = 20            # Hitbox is this much narrower than the sprite
SPRITE_FRAMES = 8                   # Run animation frames
SPRITE_FRAME_STEP = 0.2             # Animation advance per tick

# -------- Physics Config (pixels / tick) --------
JUMP_VELOCITY = -12.0
GRAVITY = 0.6

# -------- Obstacle Config --------
OBSTACLE_WIDTH = 40
OBSTACLE_HEIGHT = 60
OBSTACLE_HITBOX_SHRINK = 10
OBSTACLE_START_X = 800.0            # Spawn point, just past the right edge
OBSTACLE_LABELS = ("Κ", "Θ", "Π")  # Kappa, Theta, Pi
GAME_SPEED = 5.0                    # Leftward scroll per tick
COLLISION_MARGIN = 5                # Feet must sink this far past the obstacle top

# -------- Timer Config (ms) --------
SCORE_INTERVAL_MS = 100
FIRST_SPAWN_DELAY_MS = 2000
SPAWN_INTERVAL_MIN_MS = 1500
SPAWN_INTERVAL_MAX_MS = 3000

# -------- Classic Variant Config --------
CLASSIC_TICK_MS = 20
CLASSIC_JUMP_HEIGHT = 100           # Apex of the linear jump (px above ground)
CLASSIC_JUMP_STEP = 5
CLASSIC_OBSTACLE_WIDTH = 50
CLASSIC_OBSTACLE_HEIGHT = 50
CLASSIC_OBSTACLE_RESET = -50        # Offset from the right edge on wrap
CLASSIC_OBSTACLE_END = 850
CLASSIC_OBSTACLE_STEP = 5
CLASSIC_HIT_WINDOW = (650, 700)     # Exclusive range of right offsets that can hit
CLASSIC_SAFE_HEIGHT = 50            # Ninja bottom at or above this clears the obstacle
