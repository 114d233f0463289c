"""Time-gated enemy creation. Intervals shrink and speeds grow with the level."""
from __future__ import annotations
import math
import random

from .entities import Enemy
from .log import get_logger
from .settings import (
    ENEMY_ROTATION_SPEED_MAX,
    ENEMY_SIZE_RANGE,
    ENEMY_SPEED_JITTER,
    ENEMY_SPEED_LEVEL_CAP,
    SPAWN_INTERVAL_STEP_MS,
    GameConfig,
)
from .session import GameSession

logger = get_logger(__name__)


def spawn_interval(config: GameConfig, level: int) -> int:
    """Milliseconds between spawns; never below the configured floor."""
    return max(config.spawn_interval_min_ms,
               config.spawn_interval_base_ms - level * SPAWN_INTERVAL_STEP_MS)


def enemy_speed(config: GameConfig, level: int) -> float:
    # Base speed stops growing after level 5; jitter is added per enemy
    return config.base_enemy_speed + (min(level, ENEMY_SPEED_LEVEL_CAP) - 1) * config.enemy_speed_increment


def spawn_enemy(config: GameConfig, level: int, rng: random.Random) -> Enemy:
    size = rng.uniform(*ENEMY_SIZE_RANGE)
    x = size / 2 + rng.random() * (config.width - size)
    speed = enemy_speed(config, level) + rng.uniform(-ENEMY_SPEED_JITTER, ENEMY_SPEED_JITTER)
    enemy = Enemy(
        x=x,
        y=-size,
        width=size,
        height=size,
        speed=speed,
        rotation=rng.random() * math.tau,
        rotation_speed=rng.uniform(-ENEMY_ROTATION_SPEED_MAX, ENEMY_ROTATION_SPEED_MAX),
    )
    logger.debug("Spawned enemy at x=%.1f size=%.1f speed=%.2f", enemy.x, size, speed)
    return enemy


def try_spawn(session: GameSession, config: GameConfig, now_ms: float, rng: random.Random) -> bool:
    """Add one enemy if the spawn interval has elapsed. Returns True on spawn."""
    if now_ms - session.last_spawn_ms <= spawn_interval(config, session.level):
        return False
    session.enemies.append(spawn_enemy(config, session.level, rng))
    session.last_spawn_ms = now_ms
    return True
