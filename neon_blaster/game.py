"""
Pygame front end: window, event pump, drawing and sound.

The `Simulation` owns all game state; this module feeds it input once per frame,
plays whatever events it reports and draws the result.
"""
from __future__ import annotations
import math
import random
from typing import Dict, Optional

import pygame

from .entities import Enemy, Player
from .inputs import Action, InputState
from .leaderboard import JsonFileStorage, Leaderboard
from .log import get_logger
from .session import (
    SCENE_GAME_OVER,
    SCENE_LEVEL_UP,
    SCENE_MENU,
    SCENE_PAUSED,
    SCENE_WIN,
    format_score,
    kills_progress,
)
from .settings import (
    COLOR_BG,
    COLOR_DIM,
    COLOR_NEON_CYAN,
    COLOR_NEON_GREEN,
    COLOR_NEON_MAGENTA,
    COLOR_NEON_PINK,
    COLOR_NEON_YELLOW,
    COLOR_UI,
    ENABLE_SOUND,
    FPS,
    HIGHSCORE_PATH,
    INITIALS_MAX,
    TITLE,
    GameConfig,
)
from .simulation import Simulation
from .sound import SoundManager

logger = get_logger(__name__)


class Game:
    def __init__(self, config: Optional[GameConfig] = None, highscore_path: str = HIGHSCORE_PATH,
                 sound: bool = ENABLE_SOUND, seed: Optional[int] = None):
        self.config = config or GameConfig()
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 26)
        self.bigfont = pygame.font.SysFont(None, 64)
        self.sound = SoundManager(sound)

        self.leaderboard = Leaderboard(JsonFileStorage(highscore_path))
        self.leaderboard.load()
        self.sim = Simulation(self.config, self.leaderboard, rng=random.Random(seed), star_seed=seed)
        self.inputs = InputState()
        self.initials: Optional[str] = None  # not None while typing initials
        self._alien_cache: Dict[int, pygame.Surface] = {}

    # ============================
    # MAIN LOOP
    # ============================
    def run(self):
        running = True
        while running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and not self.handle_keydown(event):
                    running = False
                elif event.type == pygame.KEYUP:
                    self.inputs.handle_event(event)

            if self.inputs.consume(Action.TOGGLE_MUTE):
                self.sound.toggle_mute()
            self.sim.tick(pygame.time.get_ticks(), self.inputs)
            self.sound.play_all(self.sim.drain_events())
            if self.sim.scene in (SCENE_GAME_OVER, SCENE_WIN) and self.sim.session.new_high_score \
                    and self.initials is None:
                self.initials = ""
            self.draw()
        pygame.quit()

    def handle_keydown(self, event: pygame.event.Event) -> bool:
        """Scene-level keys. Returns False to quit."""
        scene = self.sim.scene
        if self.initials is not None:
            self._type_initials(event)
        elif scene == SCENE_MENU:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_RETURN:
                self.new_game()
            elif event.key == pygame.K_m:
                self.sound.toggle_mute()
        elif scene in (SCENE_GAME_OVER, SCENE_WIN):
            if event.key in (pygame.K_RETURN, pygame.K_r):
                self.new_game()
            elif event.key == pygame.K_ESCAPE:
                self.sim.return_to_menu()
            elif event.key == pygame.K_m:
                self.sound.toggle_mute()
        else:
            self.inputs.handle_event(event)
        return True

    def _type_initials(self, event: pygame.event.Event):
        if event.key == pygame.K_RETURN:
            self.sim.submit_score(self.initials)
            self.initials = None
        elif event.key == pygame.K_ESCAPE:
            self.sim.decline_score()
            self.initials = None
        elif event.key == pygame.K_BACKSPACE:
            self.initials = self.initials[:-1]
        elif event.unicode and event.unicode.isalnum() and len(self.initials) < INITIALS_MAX:
            self.initials += event.unicode.upper()

    def new_game(self):
        self.inputs.clear()
        self.initials = None
        self.sim.start()

    # ============================
    # RENDERING
    # ============================
    def draw(self):
        self.screen.fill(COLOR_BG)
        self.draw_stars()
        scene = self.sim.scene
        if scene != SCENE_MENU:
            self.draw_game()
        if scene == SCENE_MENU:
            self.draw_menu()
        elif scene == SCENE_PAUSED:
            self.draw_banner("PAUSED", "Press P to continue")
        elif scene == SCENE_LEVEL_UP:
            self.draw_banner(f"LEVEL {self.sim.session.level}", "Get ready!")
        elif scene == SCENE_GAME_OVER:
            self.draw_game_over("GAME OVER")
        elif scene == SCENE_WIN:
            self.draw_game_over("YOU WIN!")
        pygame.display.flip()

    def draw_stars(self):
        t = pygame.time.get_ticks() / 500.0
        for star in self.sim.stars:
            b = 0.5 + math.sin(t + star.x) * 0.3
            c = int(255 * max(0.0, min(1.0, b)))
            pygame.draw.circle(self.screen, (c, c, c), (int(star.x), int(star.y)), max(1, int(star.size)))

    def draw_game(self):
        session = self.sim.session
        for laser in session.lasers:
            rect = pygame.Rect(0, 0, int(laser.width), int(laser.height))
            rect.center = (int(laser.x), int(laser.y))
            pygame.draw.rect(self.screen, COLOR_NEON_GREEN, rect)
        for enemy in session.enemies:
            self.draw_enemy(enemy)
        if session.player is not None:
            self.draw_player(session.player)
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        for p in session.particles:
            s = max(1, int(p.size))
            alpha = int(255 * max(0.0, min(1.0, p.life)))
            pygame.draw.rect(overlay, (*p.color, alpha), (int(p.x - s / 2), int(p.y - s / 2), s, s))
        self.screen.blit(overlay, (0, 0))
        self.draw_hud()

    def draw_player(self, player: Player):
        # Blink while invincible
        if player.invincible and (pygame.time.get_ticks() // 100) % 2 == 0:
            return
        x, y = player.x, player.y

        def pts(points):
            return [(x + px, y + py) for px, py in points]

        pygame.draw.polygon(self.screen, COLOR_NEON_CYAN, pts([(0, -25), (10, -10), (10, 20), (-10, 20), (-10, -10)]))
        pygame.draw.polygon(self.screen, COLOR_NEON_MAGENTA, pts([(-10, 0), (-25, 20), (-15, 20), (-10, 10)]))
        pygame.draw.polygon(self.screen, COLOR_NEON_MAGENTA, pts([(10, 0), (25, 20), (15, 20), (10, 10)]))
        pygame.draw.circle(self.screen, (255, 255, 255), (int(x), int(y - 10)), 5)
        flame = math.sin(pygame.time.get_ticks() / 50) * 3
        pygame.draw.polygon(self.screen, COLOR_NEON_GREEN, pts([(-8, 20), (-5, 30 + flame), (-2, 20)]))
        pygame.draw.polygon(self.screen, COLOR_NEON_GREEN, pts([(2, 20), (5, 30 + flame), (8, 20)]))

    def _alien_sprite(self, size: int) -> pygame.Surface:
        sprite = self._alien_cache.get(size)
        if sprite is None:
            sprite = pygame.Surface((size, size), pygame.SRCALPHA)
            h = size / 2
            dome = pygame.Rect(0, 0, int(size * 0.8), int(size * 0.8))
            dome.center = (int(h), int(h - size * 0.1))
            pygame.draw.ellipse(sprite, COLOR_NEON_MAGENTA, dome)
            pygame.draw.rect(sprite, (0, 0, 0, 0), (0, int(h + size * 0.2), size, size))
            pygame.draw.circle(sprite, (255, 85, 255), (int(h), int(h - size * 0.1)), int(size * 0.2))
            for ex in (-0.2, 0.2):
                eye = pygame.Rect(0, 0, int(size * 0.24), int(size * 0.16))
                eye.center = (int(h + size * ex), int(h))
                pygame.draw.ellipse(sprite, COLOR_NEON_CYAN, eye)
            for i in range(4):
                lx = h + (i - 1.5) * size * 0.25
                pygame.draw.line(sprite, COLOR_NEON_MAGENTA, (lx, h + size * 0.2), (h + (lx - h) * 1.5, size - 2), 3)
            self._alien_cache[size] = sprite
        return sprite

    def draw_enemy(self, enemy: Enemy):
        sprite = pygame.transform.rotate(self._alien_sprite(int(enemy.width)), -math.degrees(enemy.rotation))
        self.screen.blit(sprite, sprite.get_rect(center=(int(enemy.x), int(enemy.y))))

    def draw_hud(self):
        session = self.sim.session
        pad = 8
        self.screen.blit(self.font.render(f"Score: {format_score(session.score)}", True, COLOR_UI), (pad, pad))
        self.screen.blit(self.font.render(f"Level: {session.level}", True, COLOR_UI),
                         (self.config.width // 2 - 40, pad))
        kills = kills_progress(session, self.sim.kills_quota)
        self.screen.blit(self.font.render(f"Kills: {kills}", True, COLOR_UI),
                         (self.config.width // 2 - 40, pad + 22))
        for i in range(session.lives):
            cx = self.config.width - 20 - i * 24
            cy = pad + 12
            pygame.draw.polygon(self.screen, COLOR_NEON_PINK, [(cx, cy - 6), (cx - 8, cy + 6), (cx + 8, cy + 6)])
        if self.sound.muted:
            self.screen.blit(self.font.render("MUTED", True, COLOR_DIM), (self.config.width - 80, pad + 22))

    def _center(self, surf: pygame.Surface, y: int):
        self.screen.blit(surf, (self.config.width // 2 - surf.get_width() // 2, y))

    def draw_leaderboard(self, top: int):
        self._center(self.font.render("HIGH SCORES", True, COLOR_NEON_YELLOW), top)
        for i, entry in enumerate(self.leaderboard.entries):
            line = self.font.render(f"{i + 1}. {entry.name:<3}  {format_score(entry.score):>9}", True, COLOR_UI)
            self._center(line, top + 26 + i * 22)

    def draw_menu(self):
        self._center(self.bigfont.render(TITLE, True, COLOR_NEON_CYAN), 100)
        self._center(self.font.render("Press Enter to Start", True, COLOR_NEON_MAGENTA), 180)
        tips = [
            "Left/Right or A/D - Move",
            "Space - Fire",
            "P or Esc - Pause",
            "M - Toggle Sound",
            "Esc in Menu - Quit",
        ]
        for i, t in enumerate(tips):
            self._center(self.font.render(t, True, COLOR_DIM), 220 + i * 22)
        self.draw_leaderboard(360)

    def draw_banner(self, title: str, hint: str):
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 120))
        self.screen.blit(overlay, (0, 0))
        h = self.config.height // 2
        self._center(self.bigfont.render(title, True, COLOR_NEON_CYAN), h - 40)
        self._center(self.font.render(hint, True, COLOR_NEON_MAGENTA), h + 20)

    def draw_game_over(self, title: str):
        session = self.sim.session
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        self.screen.blit(overlay, (0, 0))
        self._center(self.bigfont.render(title, True, COLOR_NEON_MAGENTA), 80)
        self._center(self.font.render(f"Final score: {format_score(session.score)}   Level: {session.level}",
                                      True, COLOR_UI), 150)
        if self.initials is not None:
            self._center(self.font.render("NEW HIGH SCORE! Enter your initials:", True, COLOR_NEON_YELLOW), 200)
            shown = self.initials + "_" * (INITIALS_MAX - len(self.initials))
            self._center(self.bigfont.render(shown, True, COLOR_NEON_CYAN), 230)
            self._center(self.font.render("Press Enter to save", True, COLOR_DIM), 290)
        else:
            self.draw_leaderboard(200)
            self._center(self.font.render("Enter/R - Play again   Esc - Menu", True, COLOR_DIM), 360)
