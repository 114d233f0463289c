"""
Simulation clock: one `tick` per rendered frame.

The starfield moves every frame, paused or not. Gameplay only advances while a
session is running and unpaused, in a fixed order:

    player -> fire -> spawn -> lasers -> enemies -> particles -> collisions -> invincibility

Positions move a fixed amount per frame (not scaled by elapsed time), so the
game runs faster on displays above 60 Hz. Cooldowns and spawns are gated on
the millisecond timestamp passed to `tick`, which keeps tests deterministic.
"""
from __future__ import annotations
import random
from typing import List, Optional

from .collisions import check_collisions
from .entities import Laser, Star
from .inputs import Action, InputState
from .leaderboard import Leaderboard
from .lifecycle import expire_banner, start_game, toggle_pause
from .log import get_logger
from .session import EVENT_FIRE, GameSession
from .settings import (
    LASER_OFFSET,
    PARTICLE_MIN_SIZE,
    PARTICLE_SHRINK,
    STAR_COUNT,
    GameConfig,
    clamp,
)
from .spawner import try_spawn

logger = get_logger(__name__)


# ============================
# STARFIELD
# ============================
class Starfield:
    """Decorative background; uses its own RNG so it never disturbs gameplay randomness."""
    def __init__(self, width: int, height: int, count: int = STAR_COUNT, seed: Optional[int] = None):
        self.width, self.height = width, height
        self.rng = random.Random(seed)
        self.stars: List[Star] = [
            Star(
                x=self.rng.random() * width,
                y=self.rng.random() * height,
                size=self.rng.random() * 2 + 0.5,
                speed=self.rng.random() + 0.5,
                brightness=self.rng.random(),
            )
            for _ in range(count)
        ]

    def update(self):
        for star in self.stars:
            star.y += star.speed
            if star.y > self.height:
                star.y = 0
                star.x = self.rng.random() * self.width


# ============================
# PER-FRAME STEPS
# ============================
def move_player(session: GameSession, config: GameConfig, inputs: InputState):
    player = session.player
    if inputs.is_held(Action.MOVE_LEFT):
        player.x -= config.player_speed
    if inputs.is_held(Action.MOVE_RIGHT):
        player.x += config.player_speed
    player.x = clamp(player.x, player.width / 2, config.width - player.width / 2)


def try_fire(session: GameSession, config: GameConfig, inputs: InputState, now_ms: float) -> bool:
    if not inputs.is_held(Action.FIRE) or now_ms - session.last_fire_ms <= config.laser_cooldown_ms:
        return False
    player = session.player
    y = player.y - player.height / 2
    session.lasers.append(Laser(player.x - LASER_OFFSET, y, speed=config.laser_speed))
    session.lasers.append(Laser(player.x + LASER_OFFSET, y, speed=config.laser_speed))
    session.last_fire_ms = now_ms
    session.emit(EVENT_FIRE)
    return True


def update_lasers(session: GameSession):
    for laser in session.lasers:
        laser.y -= laser.speed
    session.lasers = [l for l in session.lasers if l.y > -l.height]


def update_enemies(session: GameSession, config: GameConfig):
    for enemy in session.enemies:
        enemy.y += enemy.speed
        enemy.rotation += enemy.rotation_speed
    session.enemies = [e for e in session.enemies if e.y <= config.height + e.height]


def update_particles(session: GameSession):
    for p in session.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= p.decay
        p.size *= PARTICLE_SHRINK
    session.particles = [p for p in session.particles if p.life > 0 and p.size > PARTICLE_MIN_SIZE]


def update_invincibility(session: GameSession):
    player = session.player
    if player.invincible:
        player.invincible_frames -= 1
        if player.invincible_frames <= 0:
            player.invincible_frames = 0
            player.invincible = False


# ============================
# SIMULATION
# ============================
class Simulation:
    def __init__(self, config: Optional[GameConfig] = None, leaderboard: Optional[Leaderboard] = None,
                 rng: Optional[random.Random] = None, star_seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.leaderboard = leaderboard
        self.rng = rng or random.Random()
        self.starfield = Starfield(self.config.width, self.config.height, seed=star_seed)
        self.session = GameSession()

    @property
    def stars(self) -> List[Star]:
        return self.starfield.stars

    @property
    def scene(self) -> str:
        return self.session.scene

    @property
    def kills_quota(self) -> int:
        return self.config.kills_quota(self.session.level)

    def start(self) -> GameSession:
        """Start (or restart) a session, discarding whatever came before."""
        self.session = start_game(self.config)
        return self.session

    def return_to_menu(self):
        self.session = GameSession()

    def toggle_pause(self) -> bool:
        return toggle_pause(self.session)

    def drain_events(self) -> List[str]:
        events, self.session.events = self.session.events, []
        return events

    def submit_score(self, initials: Optional[str]) -> Optional[int]:
        """Record the finished session's score if it earned a leaderboard place."""
        session = self.session
        if self.leaderboard is None or not session.new_high_score or session.running:
            return None
        session.new_high_score = False
        return self.leaderboard.submit(initials, session.score)

    def decline_score(self):
        self.session.new_high_score = False

    def tick(self, now_ms: float, inputs: Optional[InputState] = None) -> GameSession:
        inputs = inputs or InputState()
        session = self.session

        self.starfield.update()
        expire_banner(session, now_ms)
        if inputs.consume(Action.PAUSE):
            self.toggle_pause()
        if not session.active:
            return session

        move_player(session, self.config, inputs)
        try_fire(session, self.config, inputs, now_ms)
        try_spawn(session, self.config, now_ms, self.rng)
        update_lasers(session)
        update_enemies(session, self.config)
        update_particles(session)
        check_collisions(session, self.config, now_ms, self.rng, self.leaderboard)
        if session.running:
            update_invincibility(session)
        return session
