"""Scenario tests for the DefenderGame tick loop and collision passes."""

import pytest

from game.defender import DefenderGame, GameState, Intent
from game.defender.entities import Bullet, Enemy, EnemyBullet, Obstacle, Particle, PowerUp

from conftest import ScriptedRandom

FRAME = 16


def test_rejects_bad_canvas():
    with pytest.raises(ValueError):
        DefenderGame(width=0, height=600)
    with pytest.raises(ValueError):
        DefenderGame(width=800, height=-1)


def test_rejects_negative_delta(game):
    with pytest.raises(ValueError):
        game.tick(-1)


class TestLifecycle:

    def test_not_simulating_before_start(self, rng):
        g = DefenderGame(rng=rng)
        assert g.state is GameState.START
        g.tick(5000)
        assert g.enemies == []

    def test_start_resets_everything(self, game):
        game.session.add_score(300)
        game.session.wave = 3
        game.bullets.append(Bullet(x=10, y=10))
        game.enemies.append(Enemy.spawn(10, 10, "basic", 1))
        game.spawner.enemies_per_wave = 11
        game.player.x = 0

        game.start()

        assert game.hud() == {"score": 0, "wave": 1, "lives": 3, "state": "playing"}
        assert game.bullets == [] and game.enemies == []
        assert game.spawner.enemies_per_wave == 5
        assert (game.player.x, game.player.y) == (400, 540)
        assert len(game.obstacles) == 3

    def test_pause_freezes_simulation(self, game):
        game.enemies.append(Enemy.spawn(100, 100, "basic", 1))
        game.toggle_pause()
        game.tick(5000, Intent(move_left=True, fire=True))

        assert game.enemies[0].y == 100
        assert game.bullets == []
        assert game.spawner.spawn_timer == 0
        assert game.player.x == 400

        game.toggle_pause()
        game.tick(FRAME)
        assert game.enemies[0].y == 101


class TestInput:

    def test_movement_clamped(self, game):
        for _ in range(200):
            game.tick(FRAME, Intent(move_right=True))
            assert 0 <= game.player.x <= 800 - game.player.width
        assert game.player.x == 760

    def test_fire_respects_cooldown(self, game):
        game.tick(FRAME, Intent(fire=True))
        assert len(game.bullets) == 1
        game.tick(FRAME, Intent(fire=True))
        assert len(game.bullets) == 1
        game.tick(200, Intent(fire=True))
        assert len(game.bullets) == 2
        assert game.events["shots"] == 1

    def test_shot_between_ticks_counted_next_tick(self, game):
        assert game.shoot()
        assert game.events["shots"] == 0

        game.tick(FRAME)

        assert len(game.bullets) == 1
        assert game.events["shots"] == 1

        game.tick(FRAME)
        assert game.events["shots"] == 0


class TestSpawning:

    def test_one_enemy_per_delay(self, game):
        game.tick(2000)
        assert len(game.enemies) == 1
        assert game.enemies[0].y == -40

        game.tick(0)
        assert len(game.enemies) == 1

    def test_new_enemy_collides_in_spawn_tick(self, game):
        # ScriptedRandom 0.5 spawns a basic enemy at (380, -40)
        game.obstacles = []
        game.player.x = 380
        game.player.y = -40

        game.tick(2000)

        assert game.spawner.enemies_spawned == 1
        assert game.enemies == []
        assert game.session.lives == 2
        assert game.events["lives_lost"] == 1


class TestCollisions:

    @pytest.fixture(autouse=True)
    def clear_field(self, game):
        game.obstacles = []

    def test_bullet_destroys_enemy(self, game):
        game.bullets = [Bullet(x=100, y=100)]
        game.enemies = [Enemy.spawn(95, 105, "basic", 1)]

        game.resolve_collisions()

        assert game.bullets == []
        assert game.enemies == []
        assert game.session.score == 10
        assert len(game.particles) == 15
        assert game.events["kills"] == 1

    def test_kill_can_drop_power_up(self):
        # 0.05 on every roll: drop happens, kind index 0
        g = DefenderGame(rng=ScriptedRandom([0.05]))
        g.start()
        g.obstacles = []
        g.bullets = [Bullet(x=100, y=100)]
        g.enemies = [Enemy.spawn(95, 105, "basic", 1)]

        g.resolve_collisions()

        assert len(g.power_ups) == 1
        assert g.power_ups[0].kind == "health"
        assert (g.power_ups[0].x, g.power_ups[0].y) == (95, 105)

    def test_one_bullet_one_kill(self, game):
        game.bullets = [Bullet(x=100, y=100)]
        game.enemies = [Enemy.spawn(95, 105, "basic", 1), Enemy.spawn(90, 100, "basic", 1)]

        game.resolve_collisions()

        assert len(game.enemies) == 1
        assert game.session.score == 10

    def test_spent_bullet_skips_obstacles(self, game):
        obstacle = Obstacle(x=90, y=95)
        game.obstacles = [obstacle]
        game.bullets = [Bullet(x=100, y=100)]
        game.enemies = [Enemy.spawn(95, 105, "basic", 1)]

        game.resolve_collisions()

        assert obstacle.health == 3

    def test_bullet_damages_obstacle(self, game):
        obstacle = Obstacle(x=90, y=95)
        game.obstacles = [obstacle]
        game.bullets = [Bullet(x=100, y=100)]

        game.resolve_collisions()

        assert obstacle.health == 2
        assert game.bullets == []
        assert len(game.particles) == 8

    def test_destroyed_obstacle_lets_bullets_through(self, game):
        obstacle = Obstacle(x=90, y=95, health=0)
        game.obstacles = [obstacle]
        game.bullets = [Bullet(x=100, y=100)]

        game.resolve_collisions()

        assert len(game.bullets) == 1
        assert obstacle.health == 0
        assert game.obstacles == [obstacle]

    def test_enemy_bullet_hits_player_through_shield(self, game):
        game.player.grant_shield(game.clock_ms)
        game.enemy_bullets = [EnemyBullet(x=410, y=545)]

        game.resolve_collisions()

        assert game.session.lives == 2
        assert game.enemy_bullets == []
        assert len(game.particles) == 15

    def test_enemy_bullet_damages_obstacle(self, game):
        obstacle = Obstacle(x=200, y=200)
        game.obstacles = [obstacle]
        game.enemy_bullets = [EnemyBullet(x=210, y=210)]

        game.resolve_collisions()

        assert obstacle.health == 2
        assert game.enemy_bullets == []
        assert game.session.lives == 3

    def test_ramming_costs_a_life(self, game):
        game.enemies = [Enemy.spawn(410, 530, "fast", 1)]

        game.resolve_collisions()

        assert game.enemies == []
        assert game.session.lives == 2
        assert game.session.score == 0

    def test_game_over_same_tick(self, game):
        game.session.lives = 1
        game.enemies = [Enemy.spawn(400, 535, "basic", 1)]

        game.tick(FRAME)

        assert game.session.lives == 0
        assert game.state is GameState.GAME_OVER
        assert game.final_summary() == {"final_score": 0, "final_wave": 0}

    def test_lives_never_observed_negative(self, game):
        game.session.lives = 1
        game.enemies = [Enemy.spawn(400, 535, "basic", 1), Enemy.spawn(405, 535, "basic", 1)]
        game.enemy_bullets = [EnemyBullet(x=410, y=545)]

        game.tick(FRAME)

        assert game.session.lives == 0
        assert game.state is GameState.GAME_OVER

    def test_pickup_does_not_undo_same_tick_hits(self, game):
        game.session.lives = 1
        game.enemies = [Enemy.spawn(400, 535, "basic", 1), Enemy.spawn(405, 535, "basic", 1)]
        game.power_ups = [PowerUp(x=410, y=540, kind="health")]

        game.tick(FRAME)

        assert game.events["lives_lost"] == 2
        assert game.events["power_ups"] == 1
        assert game.session.lives == 0
        assert game.state is GameState.GAME_OVER


class TestPowerUps:

    def test_health_pickup_capped(self, game):
        game.session.lives = 5
        for _ in range(3):
            game.power_ups = [PowerUp(x=410, y=540, kind="health")]
            game.tick(FRAME)
        assert game.session.lives == 5

    def test_health_pickup(self, game):
        game.power_ups = [PowerUp(x=410, y=540, kind="health")]
        game.tick(FRAME)
        assert game.session.lives == 4
        assert game.power_ups == []
        assert game.events["power_ups"] == 1

    def test_rapid_fire_expires_while_paused(self, game):
        game.apply_power_up("rapid_fire")
        assert game.player.rapid_fire

        game.toggle_pause()
        game.tick(4999)
        assert game.player.rapid_fire
        game.tick(1)
        assert not game.player.rapid_fire

    def test_shield_duration(self, game):
        game.apply_power_up("shield")
        game.tick(7999)
        assert game.player.shield
        game.tick(1)
        assert not game.player.shield

    def test_unknown_kind(self, game):
        with pytest.raises(ValueError):
            game.apply_power_up("nuke")


class TestRemoval:

    def test_offscreen_entities_removed(self, game):
        game.obstacles = []
        game.bullets = [Bullet(x=10, y=5)]
        game.enemy_bullets = [EnemyBullet(x=10, y=598)]
        game.power_ups = [PowerUp(x=10, y=599, kind="shield")]
        game.enemies = [Enemy.spawn(10, 649, "basic", 1)]

        game.tick(FRAME)

        assert game.bullets == []
        assert game.enemy_bullets == []
        assert game.power_ups == []
        assert game.enemies == []

    def test_particles_removed_when_faded(self, game):
        game.particles = [Particle.create("spark", 100, 100, game.rng) for _ in range(8)]
        for _ in range(150):
            game.tick(FRAME)
        assert game.particles == []


class TestWaves:

    def test_wave_completes_exactly_once(self, game):
        game.spawner.enemies_spawned = 5

        game.tick(FRAME)
        assert game.session.wave == 2
        assert game.session.score == 200
        assert game.spawner.enemies_spawned == 0
        assert len(game.obstacles) == 4
        assert game.events["waves_cleared"] == 1

        game.tick(FRAME)
        assert game.session.wave == 2
        assert game.session.score == 200

    def test_wave_waits_for_live_enemies(self, game):
        game.spawner.enemies_spawned = 5
        game.enemies = [Enemy.spawn(100, 100, "basic", 1)]
        game.tick(FRAME)
        assert game.session.wave == 1

    def test_obstacles_regenerated_wholesale(self, game):
        old_ids = {id(o) for o in game.obstacles}
        game.spawner.enemies_spawned = 5
        game.tick(FRAME)
        assert all(id(o) not in old_ids for o in game.obstacles)
        assert all(o.health == 3 for o in game.obstacles)


class TestViews:

    def test_resize_moves_only_player(self, game):
        game.enemies = [Enemy.spawn(700, 100, "basic", 1)]
        game.resize(400, 500)
        assert (game.player.x, game.player.y) == (200, 440)
        assert game.enemies[0].x == 700

    def test_resize_rejects_bad_size(self, game):
        with pytest.raises(ValueError):
            game.resize(0, 500)

    def test_snapshot(self, game):
        game.obstacles[0].health = 0
        game.obstacles[1].take_damage()
        game.power_ups = [PowerUp(x=0, y=0, kind="shield")]

        views = game.snapshot()
        kinds = [v.kind for v in views]

        assert kinds.count("player") == 1
        assert kinds.count("obstacle") == 2
        assert kinds.count("power_up") == 1
        ratios = sorted(v.detail["health_ratio"] for v in views if v.kind == "obstacle")
        assert ratios == [pytest.approx(2 / 3), 1.0]
        power_up = next(v for v in views if v.kind == "power_up")
        assert power_up.detail["kind"] == "shield"

    def test_final_summary_only_after_game_over(self, game):
        assert game.final_summary() is None
