"""
Neon Galaxy Blaster — a single-screen arcade shooter.

The simulation (`Simulation`) runs headless; `neon_blaster.game` wraps it in a
pygame window with procedural graphics and sound.
"""
from .leaderboard import JsonFileStorage, Leaderboard, LeaderboardEntry, MemoryStorage
from .settings import GameConfig
from .simulation import Simulation

__version__ = "1.0.0"

__all__ = [
    "GameConfig",
    "JsonFileStorage",
    "Leaderboard",
    "LeaderboardEntry",
    "MemoryStorage",
    "Simulation",
]
