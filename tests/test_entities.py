"""Tests for per-entity update rules."""

import pytest

from game.defender import config as cfg
from game.defender.entities import (
    Bullet, Enemy, EnemyBullet, Obstacle, Particle, Player, PowerUp,
)

from conftest import ScriptedRandom


class TestPlayer:

    def test_spawn_position(self):
        p = Player.at_spawn(800, 600)
        assert (p.x, p.y) == (400, 540)
        assert (p.width, p.height) == (40, 30)

    @pytest.mark.parametrize("moves", [
        ["left"] * 200,
        ["right"] * 200,
        ["left", "right", "right"] * 100,
        ["right"] * 90 + ["left"] * 3,
    ])
    def test_x_stays_clamped(self, moves):
        p = Player.at_spawn(800, 600)
        for move in moves:
            if move == "left":
                p.move_left()
            else:
                p.move_right()
            p.update(800)
            assert 0 <= p.x <= 800 - p.width

    def test_shot_rate_limited(self):
        p = Player(x=100, y=500)
        first = p.shoot(now=1000)
        assert first is not None
        assert p.shoot(now=1200) is None  # exactly the delay is not enough
        assert p.shoot(now=1201) is not None

    def test_bullet_leaves_nose(self):
        p = Player(x=100, y=500)
        b = p.shoot(now=0)
        assert (b.x, b.y) == (100 + 20 - 2, 500)
        assert b.speed == cfg.BULLET_SPEED

    def test_rapid_fire_halves_delay(self):
        p = Player(x=100, y=500)
        p.grant_rapid_fire(now=0)
        assert p.shoot(now=1000) is not None
        assert p.shoot(now=1101) is not None

    def test_effects_expire(self):
        p = Player(x=0, y=0)
        p.grant_rapid_fire(now=1000)
        p.grant_shield(now=1000)
        p.expire_effects(5999)
        assert p.rapid_fire and p.shield
        p.expire_effects(6000)
        assert not p.rapid_fire and p.shield
        p.expire_effects(9000)
        assert not p.shield

    def test_regrant_extends_expiry(self):
        p = Player(x=0, y=0)
        p.grant_shield(now=0)
        p.grant_shield(now=7000)
        p.expire_effects(9000)
        assert p.shield


class TestEnemy:

    def test_variants(self):
        basic = Enemy.spawn(0, 0, "basic", 1)
        fast = Enemy.spawn(0, 0, "fast", 1)
        assert (basic.width, basic.height, basic.speed, basic.points) == (40, 30, 1.0, 10)
        assert (fast.width, fast.height, fast.speed, fast.points) == (30, 25, 2.0, 20)

    def test_descends_and_drifts(self):
        e = Enemy.spawn(100, 0, "fast", -1)
        e.update()
        assert (e.x, e.y) == (99.5, 2.0)

    def test_bounces_off_world_edges(self):
        e = Enemy.spawn(0.25, 0, "basic", -1)
        e.update()
        assert e.direction == 1

        e = Enemy.spawn(800 - 40 - 0.25, 0, "basic", 1)
        e.update()
        assert e.direction == -1

    def test_bounds_use_fixed_world_width(self):
        # Far outside a narrow canvas, still inside the 800px world
        e = Enemy.spawn(500, 0, "basic", 1)
        e.update()
        assert e.direction == 1


class TestProjectiles:

    def test_bullet_moves_up(self):
        b = Bullet(x=10, y=100)
        b.update()
        assert (b.x, b.y) == (10, 92)

    def test_enemy_bullet_moves_down(self):
        b = EnemyBullet(x=10, y=100)
        b.update()
        assert b.y == 103
        assert (b.width, b.height) == (4, 8)

    def test_power_up_falls(self):
        p = PowerUp(x=0, y=0, kind="shield")
        p.update()
        assert p.y == 2
        assert p.color == (0, 255, 255)


class TestObstacle:

    def test_health_floors_at_zero(self):
        o = Obstacle(x=0, y=0)
        for _ in range(5):
            o.take_damage()
        assert o.health == 0
        assert o.destroyed
        assert o.health_ratio == 0

    def test_health_ratio(self):
        o = Obstacle(x=0, y=0)
        o.take_damage()
        assert o.health_ratio == pytest.approx(2 / 3)
        assert not o.destroyed


class TestParticle:

    def test_explosion_ranges(self):
        p = Particle.create("explosion", 10, 20, ScriptedRandom([0.0]))
        assert (p.vx, p.vy) == (-3.0, -3.0)
        assert p.size == 2
        assert p.decay == pytest.approx(0.01)
        assert p.life == 1.0

    def test_spark_is_white(self):
        p = Particle.create("spark", 10, 20, ScriptedRandom([1.0]))
        assert p.color == (255, 255, 255)
        assert (p.vx, p.vy) == (2.0, 2.0)
        assert p.size == 3

    def test_update_fades_and_shrinks(self):
        p = Particle(x=0, y=0, vx=1, vy=-1, kind="spark", size=2.0, decay=0.02)
        p.update()
        assert (p.x, p.y) == (1, -1)
        assert p.life == pytest.approx(0.98)
        assert p.size == pytest.approx(1.96)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            Particle.create("smoke", 0, 0, ScriptedRandom())
