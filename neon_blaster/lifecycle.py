"""
Level/lifecycle transitions.

    MENU -> RUNNING <-> PAUSED
    RUNNING -> LEVEL_UP -> RUNNING
    RUNNING -> GAME_OVER -> (restart) RUNNING
    RUNNING -> WIN            (only when a level cap is configured)

LEVEL_UP is a running session with the level banner still showing; gameplay
keeps going underneath it.
"""
from __future__ import annotations
from typing import Optional

from .entities import Player
from .leaderboard import Leaderboard
from .log import get_logger
from .session import EVENT_GAME_OVER, EVENT_LEVEL_UP, EVENT_WIN, GameSession
from .settings import GameConfig

logger = get_logger(__name__)


def start_game(config: GameConfig) -> GameSession:
    """Fresh session: full lives, level 1, player bottom-center, no entities."""
    x, y = config.player_start()
    session = GameSession(
        running=True,
        lives=config.lives,
        player=Player(x, y, *config.player_size),
    )
    logger.info("Game started (lives=%d, max_levels=%s)", config.lives, config.max_levels)
    return session


def toggle_pause(session: GameSession) -> bool:
    if not session.running:
        return session.paused
    session.paused = not session.paused
    logger.info("Paused" if session.paused else "Resumed")
    return session.paused


def expire_banner(session: GameSession, now_ms: float):
    if session.banner_until_ms is not None and now_ms >= session.banner_until_ms:
        session.banner_until_ms = None


def level_up(session: GameSession, config: GameConfig, now_ms: float,
             leaderboard: Optional[Leaderboard] = None):
    next_level = session.level + 1
    if config.max_levels is not None and next_level > config.max_levels:
        win_game(session, leaderboard)
        return
    session.level = next_level
    session.level_kills = 0
    # Lasers and particles carry over; the sky is cleared of enemies
    session.enemies = []
    session.banner_until_ms = now_ms + config.level_banner_ms
    session.emit(EVENT_LEVEL_UP)
    logger.info("Level up -> %d (score %d)", session.level, session.score)


def _check_high_score(session: GameSession, leaderboard: Optional[Leaderboard]):
    session.new_high_score = leaderboard is not None and leaderboard.is_high_score(session.score)


def game_over(session: GameSession, leaderboard: Optional[Leaderboard] = None):
    if not session.running:
        return
    session.running = False
    session.paused = False
    session.game_over = True
    _check_high_score(session, leaderboard)
    session.emit(EVENT_GAME_OVER)
    logger.info("Game over at level %d with score %d (high score: %s)",
                session.level, session.score, session.new_high_score)


def win_game(session: GameSession, leaderboard: Optional[Leaderboard] = None):
    if not session.running:
        return
    session.running = False
    session.paused = False
    session.won = True
    session.banner_until_ms = None
    _check_high_score(session, leaderboard)
    session.emit(EVENT_WIN)
    logger.info("Won with score %d", session.score)
