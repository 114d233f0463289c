from conftest import laser_at, make_enemy
from neon_blaster.collisions import (
    check_collisions,
    create_explosion,
    enemies_vs_player,
    laser_hits,
    lasers_vs_enemies,
    player_hits,
)
from neon_blaster.entities import Laser
from neon_blaster.lifecycle import start_game
from neon_blaster.session import (
    EVENT_ENEMY_DESTROYED,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_PLAYER_HIT,
    SCENE_GAME_OVER,
    SCENE_LEVEL_UP,
    SCENE_WIN,
)
from neon_blaster.settings import GameConfig


# ============================
# LASERS VS ENEMIES
# ============================
def test_single_hit_scores(config, rng):
    session = start_game(config)
    enemy = make_enemy(200, 200)
    session.enemies = [enemy]
    session.lasers = [laser_at(enemy)]

    assert lasers_vs_enemies(session, config, 0, rng) == 1
    assert (session.score, session.kills, session.level_kills) == (100, 1, 1)
    assert session.lasers == [] and session.enemies == []
    assert len(session.particles) == 30
    assert session.events == [EVENT_ENEMY_DESTROYED]


def test_points_scale_with_level(config, rng):
    session = start_game(config)
    session.level = 3
    enemy = make_enemy(200, 200)
    session.enemies = [enemy]
    session.lasers = [laser_at(enemy)]
    lasers_vs_enemies(session, config, 0, rng)
    assert session.score == 300


def test_box_edge_is_not_a_hit():
    enemy = make_enemy(100, 100, size=60)
    assert laser_hits(Laser(129.9, 100), enemy)
    assert not laser_hits(Laser(130, 100), enemy)
    assert not laser_hits(Laser(100, 70), enemy)


def test_one_laser_kills_one_enemy(config, rng):
    session = start_game(config)
    a, b = make_enemy(200, 200), make_enemy(210, 205)
    session.enemies = [a, b]
    session.lasers = [Laser(205, 202)]
    lasers_vs_enemies(session, config, 0, rng)
    assert session.enemies == [b]
    assert session.kills == 1


def test_one_enemy_absorbs_one_laser(config, rng):
    session = start_game(config)
    enemy = make_enemy(200, 200)
    other = Laser(205, 205)
    session.enemies = [enemy]
    session.lasers = [laser_at(enemy), other]
    lasers_vs_enemies(session, config, 0, rng)
    assert session.lasers == [other]
    assert session.kills == 1 and session.score == 100


def test_misses_change_nothing(config, rng):
    session = start_game(config)
    session.enemies = [make_enemy(200, 200)]
    session.lasers = [Laser(600, 200)]
    assert lasers_vs_enemies(session, config, 0, rng) == 0
    assert len(session.enemies) == 1 and len(session.lasers) == 1
    assert session.score == 0 and session.particles == []


def test_quota_triggers_level_up(config, rng):
    session = start_game(config)
    session.level_kills = config.kills_quota(1) - 1
    target = make_enemy(200, 200)
    bystander = make_enemy(500, 100)
    spare = Laser(700, 300)
    session.enemies = [target, bystander]
    session.lasers = [laser_at(target), spare]

    lasers_vs_enemies(session, config, 5000, rng)
    assert session.level == 2
    assert session.level_kills == 0
    assert session.enemies == []
    assert session.lasers == [spare]
    assert session.banner_until_ms == 5000 + config.level_banner_ms
    assert session.scene == SCENE_LEVEL_UP
    assert EVENT_LEVEL_UP in session.events


def test_kills_to_level_two_scenario(config, rng):
    session = start_game(config)
    for n in range(1, config.kills_quota(1) + 1):
        enemy = make_enemy(100 + n * 10, 200)
        session.enemies.append(enemy)
        session.lasers = [laser_at(enemy)]
        lasers_vs_enemies(session, config, n * 100, rng)
        if n < config.kills_quota(1):
            assert session.level == 1 and session.level_kills == n
    assert session.level == 2
    assert session.level_kills == 0
    assert session.kills == 10
    assert session.score == 1000
    assert session.enemies == []


def test_level_cap_wins(rng, leaderboard):
    config = GameConfig(max_levels=1)
    session = start_game(config)
    session.level_kills = config.kills_quota(1) - 1
    enemy = make_enemy(200, 200)
    session.enemies = [enemy, make_enemy(600, 100)]
    session.lasers = [laser_at(enemy)]
    lasers_vs_enemies(session, config, 0, rng, leaderboard)
    assert session.scene == SCENE_WIN
    assert not session.running
    assert session.level == 1
    assert session.new_high_score


# ============================
# ENEMIES VS PLAYER
# ============================
def test_collision_threshold():
    from neon_blaster.entities import Player
    player = Player(400, 520)
    # (40 + 60) / 2 - 10 = 40
    assert player_hits(player, make_enemy(439, 520))
    assert not player_hits(player, make_enemy(440, 520))


def test_player_hit_costs_a_life(config, rng):
    session = start_game(config)
    player = session.player
    session.enemies = [make_enemy(player.x, player.y), make_enemy(100, 100)]
    assert enemies_vs_player(session, config, rng)
    assert session.lives == 2
    assert len(session.enemies) == 1
    assert player.invincible and player.invincible_frames == 120
    assert len(session.particles) == 15
    assert session.events == [EVENT_PLAYER_HIT]


def test_only_one_life_lost_per_frame(config, rng):
    session = start_game(config)
    player = session.player
    session.enemies = [make_enemy(player.x, player.y), make_enemy(player.x + 5, player.y)]
    enemies_vs_player(session, config, rng)
    assert session.lives == 2
    assert len(session.enemies) == 1


def test_invincible_player_is_skipped(config, rng):
    session = start_game(config)
    player = session.player
    player.invincible = True
    player.invincible_frames = 50
    session.enemies = [make_enemy(player.x, player.y)]
    assert not enemies_vs_player(session, config, rng)
    assert session.lives == 3 and len(session.enemies) == 1


def test_last_life_ends_game_once(config, rng, leaderboard):
    session = start_game(config)
    session.lives = 1
    session.score = 500
    player = session.player
    session.enemies = [make_enemy(player.x, player.y), make_enemy(player.x, player.y)]
    check_collisions(session, config, 0, rng, leaderboard)
    assert session.lives == 0
    assert session.scene == SCENE_GAME_OVER
    assert session.new_high_score
    check_collisions(session, config, 16, rng, leaderboard)
    assert session.events.count(EVENT_GAME_OVER) == 1
    assert session.lives == 0


def test_explosion_particles(config, rng):
    session = start_game(config)
    create_explosion(session, 10, 20, rng)
    create_explosion(session, 10, 20, rng, small=True)
    assert len(session.particles) == 45
    for p in session.particles:
        assert (p.x, p.y) == (10, 20)
        assert p.life == 1.0
        assert 3 <= p.size <= 7
        assert 0.02 <= p.decay <= 0.04
