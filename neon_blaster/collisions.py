"""
Collision & scoring.

Two passes per frame: lasers against enemies, then enemies against the player.
Hits are marked first and the lists rebuilt from the survivors afterwards, so
no entity is skipped or counted twice.
"""
from __future__ import annotations
import math
import random
from typing import Optional

from .entities import Enemy, Laser, Particle, Player
from .leaderboard import Leaderboard
from .lifecycle import game_over, level_up
from .session import EVENT_ENEMY_DESTROYED, EVENT_PLAYER_HIT, GameSession
from .settings import (
    COLLISION_ALLOWANCE,
    COLOR_NEON_CYAN,
    COLOR_NEON_GREEN,
    COLOR_NEON_MAGENTA,
    EXPLOSION_PARTICLES,
    EXPLOSION_SPEED,
    SMALL_EXPLOSION_PARTICLES,
    SMALL_EXPLOSION_SPEED,
    GameConfig,
)


def create_explosion(session: GameSession, x: float, y: float, rng: random.Random, small: bool = False):
    count = SMALL_EXPLOSION_PARTICLES if small else EXPLOSION_PARTICLES
    base_speed = SMALL_EXPLOSION_SPEED if small else EXPLOSION_SPEED
    for i in range(count):
        angle = math.tau * i / count + rng.random() * 0.5
        speed = base_speed + rng.random() * 2
        if rng.random() > 0.5:
            color = COLOR_NEON_CYAN
        elif rng.random() > 0.5:
            color = COLOR_NEON_MAGENTA
        else:
            color = COLOR_NEON_GREEN
        session.particles.append(Particle(
            x=x,
            y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            size=3 + rng.random() * 4,
            decay=0.02 + rng.random() * 0.02,
            color=color,
        ))


def laser_hits(laser: Laser, enemy: Enemy) -> bool:
    """Laser tip strictly inside the enemy's centered bounding box."""
    return (enemy.x - enemy.width / 2 < laser.x < enemy.x + enemy.width / 2
            and enemy.y - enemy.height / 2 < laser.y < enemy.y + enemy.height / 2)


def player_hits(player: Player, enemy: Enemy) -> bool:
    distance = math.hypot(player.x - enemy.x, player.y - enemy.y)
    return distance < (player.width + enemy.width) / 2 - COLLISION_ALLOWANCE


def lasers_vs_enemies(session: GameSession, config: GameConfig, now_ms: float, rng: random.Random,
                      leaderboard: Optional[Leaderboard] = None) -> int:
    """Resolve laser hits. Returns the number of enemies destroyed."""
    spent = set()
    destroyed = set()
    leveled = False
    for li, laser in enumerate(session.lasers):
        for ei, enemy in enumerate(session.enemies):
            if ei in destroyed or not laser_hits(laser, enemy):
                continue
            spent.add(li)
            destroyed.add(ei)
            create_explosion(session, enemy.x, enemy.y, rng)
            session.score += config.base_points * session.level
            session.kills += 1
            session.level_kills += 1
            session.emit(EVENT_ENEMY_DESTROYED)
            if session.level_kills >= config.kills_quota(session.level):
                leveled = True
            break
        if leveled:
            break

    session.lasers = [l for i, l in enumerate(session.lasers) if i not in spent]
    session.enemies = [e for i, e in enumerate(session.enemies) if i not in destroyed]
    if leveled:
        # Clears the remaining enemies, or ends the game at the level cap
        level_up(session, config, now_ms, leaderboard)
    return len(destroyed)


def enemies_vs_player(session: GameSession, config: GameConfig, rng: random.Random,
                      leaderboard: Optional[Leaderboard] = None) -> bool:
    """Resolve ship collisions. Returns True if the player lost a life."""
    player = session.player
    if player is None or player.invincible or not session.running:
        return False
    for ei, enemy in enumerate(session.enemies):
        if not player_hits(player, enemy):
            continue
        session.enemies = session.enemies[:ei] + session.enemies[ei + 1:]
        session.lives -= 1
        create_explosion(session, player.x, player.y, rng, small=True)
        session.emit(EVENT_PLAYER_HIT)
        if session.lives <= 0:
            session.lives = 0
            game_over(session, leaderboard)
        else:
            player.invincible = True
            player.invincible_frames = config.invincible_frames
        # Either dead or invincible now: the rest of this frame cannot hurt
        return True
    return False


def check_collisions(session: GameSession, config: GameConfig, now_ms: float, rng: random.Random,
                     leaderboard: Optional[Leaderboard] = None):
    lasers_vs_enemies(session, config, now_ms, rng, leaderboard)
    if session.running:
        enemies_vs_player(session, config, rng, leaderboard)
