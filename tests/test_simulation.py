import random

from conftest import holding, make_enemy
from neon_blaster.entities import Laser, Particle
from neon_blaster.inputs import Action, InputState
from neon_blaster.session import EVENT_FIRE, SCENE_MENU, SCENE_PAUSED, SCENE_RUNNING
from neon_blaster.settings import GameConfig
from neon_blaster.simulation import (
    Simulation,
    move_player,
    update_enemies,
    update_lasers,
    update_particles,
)


def test_player_stays_in_bounds(sim, config):
    player = sim.session.player
    left = holding(Action.MOVE_LEFT)
    for frame in range(200):
        sim.tick(frame * 16, left)
        assert player.width / 2 <= player.x <= config.width - player.width / 2
    assert player.x == player.width / 2

    right = holding(Action.MOVE_RIGHT)
    for frame in range(200, 400):
        sim.tick(frame * 16, right)
        assert player.width / 2 <= player.x <= config.width - player.width / 2
    assert player.x == config.width - player.width / 2


def test_movement_is_fixed_per_frame(sim, config):
    player = sim.session.player
    start = player.x
    move_player(sim.session, config, holding(Action.MOVE_RIGHT))
    assert player.x == start + config.player_speed


def test_fire_emits_symmetric_pair(sim, fire_input):
    sim.tick(1000, fire_input)
    lasers = sim.session.lasers
    player = sim.session.player
    assert len(lasers) == 2
    assert (lasers[0].x + lasers[1].x) / 2 == player.x
    assert lasers[1].x - lasers[0].x == 30
    assert EVENT_FIRE in sim.drain_events()


def test_fire_respects_cooldown(sim, fire_input):
    sim.tick(1000, fire_input)
    sim.tick(1100, fire_input)
    sim.tick(1150, fire_input)
    assert len(sim.session.lasers) == 2
    sim.tick(1151, fire_input)
    assert len(sim.session.lasers) == 4


def test_no_fire_without_input(sim):
    sim.tick(1000, InputState())
    assert sim.session.lasers == []


def test_lasers_culled_off_top():
    from neon_blaster.session import GameSession
    session = GameSession(lasers=[Laser(100, -5)])
    update_lasers(session)
    assert len(session.lasers) == 1
    update_lasers(session)
    assert session.lasers == []


def test_enemies_move_rotate_and_cull(config):
    from neon_blaster.session import GameSession
    enemy = make_enemy(100, config.height + 58, speed=1.5)
    enemy.rotation_speed = 0.02
    session = GameSession(enemies=[enemy])
    update_enemies(session, config)
    assert enemy.y == config.height + 59.5
    assert enemy.rotation == 0.02
    assert session.enemies == [enemy]
    update_enemies(session, config)
    assert session.enemies == []


def test_particles_decay_and_cull():
    from neon_blaster.session import GameSession
    alive = Particle(0, 0, 1, 2, size=4, decay=0.1, color=(0, 255, 255))
    dying = Particle(0, 0, 0, 0, size=4, decay=0.02, color=(0, 255, 255), life=0.01)
    shrunk = Particle(0, 0, 0, 0, size=0.52, decay=0.02, color=(0, 255, 255))
    session = GameSession(particles=[alive, dying, shrunk])
    update_particles(session)
    assert session.particles == [alive]
    assert (alive.x, alive.y) == (1, 2)
    assert abs(alive.life - 0.9) < 1e-9
    assert abs(alive.size - 3.8) < 1e-9


def test_spawns_on_interval(sim):
    sim.tick(1000)
    assert len(sim.session.enemies) == 1
    sim.tick(2000)
    assert len(sim.session.enemies) == 1
    sim.tick(2401)
    assert len(sim.session.enemies) == 2


def test_invincibility_counts_down(sim):
    player = sim.session.player
    player.invincible = True
    player.invincible_frames = 2
    sim.tick(1000)
    assert player.invincible and player.invincible_frames == 1
    sim.tick(1016)
    assert not player.invincible and player.invincible_frames == 0


def test_pause_twice_is_identity(sim):
    assert sim.toggle_pause() is True
    assert sim.scene == SCENE_PAUSED
    assert sim.toggle_pause() is False
    assert sim.scene == SCENE_RUNNING


def test_pause_freezes_gameplay_but_not_stars(sim):
    sim.tick(1000)
    enemy = sim.session.enemies[0]
    y = enemy.y
    star_y = [s.y for s in sim.stars]
    sim.toggle_pause()
    sim.tick(5000, holding(Action.FIRE))
    assert enemy.y == y
    assert len(sim.session.enemies) == 1
    assert sim.session.lasers == []
    assert [s.y for s in sim.stars] != star_y


def test_pause_press_consumed_once(sim):
    inputs = InputState()
    inputs.press(Action.PAUSE)
    sim.tick(1000, inputs)
    assert sim.session.paused
    sim.tick(1016, inputs)
    assert sim.session.paused


def test_menu_tick_does_nothing():
    sim = Simulation(GameConfig(), rng=random.Random(1))
    assert sim.scene == SCENE_MENU
    sim.tick(5000, holding(Action.FIRE))
    assert sim.session.enemies == []
    assert sim.session.lasers == []


def test_restart_resets_everything(sim, fire_input):
    for frame in range(60):
        sim.tick(1000 + frame * 200, fire_input)
    session = sim.session
    session.score, session.level, session.lives, session.kills = 900, 4, 1, 9
    sim.toggle_pause()

    fresh = sim.start()
    assert fresh is not session
    assert (fresh.score, fresh.level, fresh.lives, fresh.kills, fresh.level_kills) == (0, 1, 3, 0, 0)
    assert fresh.lasers == [] and fresh.enemies == [] and fresh.particles == []
    assert fresh.running and not fresh.paused
    assert (fresh.player.x, fresh.player.y) == (400, 520)


def test_same_seed_same_game(config):
    a = Simulation(config, rng=random.Random(99))
    b = Simulation(config, rng=random.Random(99))
    a.start()
    b.start()
    inputs = holding(Action.FIRE, Action.MOVE_LEFT)
    for frame in range(300):
        a.tick(frame * 16, inputs)
        b.tick(frame * 16, inputs)
    assert a.session.enemies == b.session.enemies
    assert a.session.score == b.session.score


def test_submit_score_after_game_over(sim, leaderboard):
    from neon_blaster.leaderboard import LeaderboardEntry
    from neon_blaster.lifecycle import game_over
    sim.session.score = 700
    assert sim.submit_score("abc") is None
    game_over(sim.session, leaderboard)
    assert sim.submit_score("abc") == 0
    assert leaderboard.entries[0] == LeaderboardEntry("ABC", 700)
    assert sim.submit_score("abc") is None


def test_declined_score_is_not_recorded(sim, leaderboard):
    from neon_blaster.lifecycle import game_over
    sim.session.score = 700
    game_over(sim.session, leaderboard)
    sim.decline_score()
    assert sim.submit_score("abc") is None
    assert leaderboard.entries[0].score == 0
