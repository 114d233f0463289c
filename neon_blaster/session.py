"""
Game session state: one play-through from start to game over (or win).

The session is owned by `Simulation` and only mutated by the lifecycle and
collision code. Renderers and the audio layer read it, nothing more.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .entities import Enemy, Laser, Particle, Player

# Scenes
SCENE_MENU = "MENU"
SCENE_RUNNING = "RUNNING"
SCENE_PAUSED = "PAUSED"
SCENE_LEVEL_UP = "LEVEL_UP"
SCENE_GAME_OVER = "GAME_OVER"
SCENE_WIN = "WIN"

# Audio events
EVENT_FIRE = "fire"
EVENT_ENEMY_DESTROYED = "enemy_destroyed"
EVENT_PLAYER_HIT = "player_hit"
EVENT_LEVEL_UP = "level_up"
EVENT_GAME_OVER = "game_over"
EVENT_WIN = "win"

NEVER = float("-inf")


@dataclass
class GameSession:
    running: bool = False
    paused: bool = False
    level: int = 1
    score: int = 0
    lives: int = 0
    kills: int = 0
    level_kills: int = 0
    last_fire_ms: float = NEVER
    last_spawn_ms: float = NEVER
    player: Optional[Player] = None
    lasers: List[Laser] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    banner_until_ms: Optional[float] = None
    game_over: bool = False
    won: bool = False
    new_high_score: bool = False
    events: List[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        """True while gameplay mutation is allowed this frame."""
        return self.running and not self.paused

    @property
    def scene(self) -> str:
        if self.won:
            return SCENE_WIN
        if self.game_over:
            return SCENE_GAME_OVER
        if not self.running:
            return SCENE_MENU
        if self.paused:
            return SCENE_PAUSED
        if self.banner_until_ms is not None:
            return SCENE_LEVEL_UP
        return SCENE_RUNNING

    def emit(self, event: str):
        self.events.append(event)


# ============================
# HUD
# ============================
def format_score(score: int) -> str:
    return f"{score:,}"


def kills_progress(session: GameSession, quota: int) -> str:
    return f"{session.level_kills}/{quota}"
