"""Plain data records for everything on screen. Behaviour lives in the simulation."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .settings import LASER_SIZE, LASER_SPEED, PLAYER_SIZE

Color = Tuple[int, int, int]


# ============================
# ENTITIES
# ============================
@dataclass
class Player:
    x: float
    y: float
    width: float = PLAYER_SIZE[0]
    height: float = PLAYER_SIZE[1]
    invincible: bool = False
    invincible_frames: int = 0


@dataclass
class Laser:
    x: float
    y: float
    width: float = LASER_SIZE[0]
    height: float = LASER_SIZE[1]
    speed: float = LASER_SPEED


@dataclass
class Enemy:
    x: float
    y: float
    width: float
    height: float
    speed: float
    rotation: float = 0.0
    rotation_speed: float = 0.0


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    decay: float
    color: Color
    life: float = 1.0


@dataclass
class Star:
    # Background decoration only; never collides
    x: float
    y: float
    size: float
    speed: float
    brightness: float
