"""
Settings & constants for Neon Blaster.

Everything tunable lives here as module-level constants; `GameConfig` bundles
them so a simulation can be built with different values (tests, CLI flags).
Speeds are expressed in units per frame, not per second: the game targets a
fixed 60 Hz refresh and slows down or speeds up with the display.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional, Tuple

# ============================
# SCREEN
# ============================
WIDTH, HEIGHT = 800, 600
FPS = 60
TITLE = "Neon Galaxy Blaster"
HIGHSCORE_PATH = os.path.join(os.path.expanduser("~"), ".neon_blaster", "highscores.json")
HIGHSCORE_KEY = "neon_blaster.highscores"

# Feature flags
ENABLE_SOUND = True

# Colors
COLOR_BG = (10, 10, 15)          # #0a0a0f
COLOR_NEON_CYAN = (0, 255, 255)
COLOR_NEON_MAGENTA = (255, 0, 255)
COLOR_NEON_GREEN = (57, 255, 20)
COLOR_NEON_PINK = (255, 20, 147)
COLOR_NEON_YELLOW = (255, 255, 0)
COLOR_UI = (230, 235, 255)
COLOR_DIM = (80, 90, 120)

# ============================
# GAMEPLAY
# ============================
MAX_LEVELS = 10
PLAYER_LIVES = 3
PLAYER_SPEED = 6                 # units per frame
PLAYER_SIZE = (40, 50)
PLAYER_BOTTOM_OFFSET = 80
PLAYER_INVINCIBLE_FRAMES = 120   # ~2s at 60fps

LASER_SPEED = 12
LASER_SIZE = (4, 20)
LASER_OFFSET = 15
LASER_COOLDOWN_MS = 150

ENEMY_SIZE_RANGE = (60, 90)
BASE_ENEMY_SPEED = 1.5
ENEMY_SPEED_INCREMENT = 0.3      # per level, capped at level 5
ENEMY_SPEED_LEVEL_CAP = 5
ENEMY_SPEED_JITTER = 0.25
ENEMY_ROTATION_SPEED_MAX = 0.025

SPAWN_INTERVAL_BASE_MS = 1500
SPAWN_INTERVAL_STEP_MS = 100     # per level
SPAWN_INTERVAL_MIN_MS = 500

BASE_POINTS_PER_KILL = 100
KILLS_TO_ADVANCE = 10
COLLISION_ALLOWANCE = 10
LEVEL_BANNER_MS = 2000

EXPLOSION_PARTICLES = 30
EXPLOSION_SPEED = 4
SMALL_EXPLOSION_PARTICLES = 15
SMALL_EXPLOSION_SPEED = 2
PARTICLE_SHRINK = 0.95
PARTICLE_MIN_SIZE = 0.5

STAR_COUNT = 100

LEADERBOARD_SIZE = 5
LEADERBOARD_PLACEHOLDER = "---"
LEADERBOARD_UNKNOWN = "UNK"
INITIALS_MAX = 3


@dataclass
class GameConfig:
    width: int = WIDTH
    height: int = HEIGHT
    max_levels: Optional[int] = MAX_LEVELS
    lives: int = PLAYER_LIVES
    player_speed: float = PLAYER_SPEED
    player_size: Tuple[int, int] = PLAYER_SIZE
    invincible_frames: int = PLAYER_INVINCIBLE_FRAMES
    laser_speed: float = LASER_SPEED
    laser_cooldown_ms: int = LASER_COOLDOWN_MS
    base_enemy_speed: float = BASE_ENEMY_SPEED
    enemy_speed_increment: float = ENEMY_SPEED_INCREMENT
    spawn_interval_base_ms: int = SPAWN_INTERVAL_BASE_MS
    spawn_interval_min_ms: int = SPAWN_INTERVAL_MIN_MS
    base_points: int = BASE_POINTS_PER_KILL
    kills_to_advance: int = KILLS_TO_ADVANCE
    level_banner_ms: int = LEVEL_BANNER_MS

    def kills_quota(self, level: int) -> int:
        """Kills needed to leave `level`. Fixed per level, whatever the level."""
        return self.kills_to_advance

    def player_start(self) -> Tuple[float, float]:
        return self.width / 2, self.height - PLAYER_BOTTOM_OFFSET


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x
