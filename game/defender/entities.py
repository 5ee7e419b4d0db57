"""
Game entity dataclasses

Every entity is an axis-aligned rectangle in screen coordinates (y grows
downward) plus its own per-frame update rule. Entities never touch each
other; cross-entity effects are applied by the game loop.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from . import config as cfg
from .utils import hsl_to_rgb


@dataclass
class Bullet:
    """Player projectile, travels upward"""
    x: float
    y: float
    width: float = cfg.BULLET_WIDTH
    height: float = cfg.BULLET_HEIGHT
    speed: float = cfg.BULLET_SPEED
    alive: bool = True

    def update(self):
        self.y += self.speed


@dataclass
class EnemyBullet(Bullet):
    """Enemy projectile, travels downward"""
    width: float = cfg.ENEMY_BULLET_WIDTH
    height: float = cfg.ENEMY_BULLET_HEIGHT
    speed: float = cfg.ENEMY_BULLET_SPEED


@dataclass
class Player:
    """The player's ship"""
    x: float
    y: float
    width: float = cfg.PLAYER_WIDTH
    height: float = cfg.PLAYER_HEIGHT
    speed: float = cfg.PLAYER_SPEED
    rapid_fire: bool = False
    shield: bool = False
    last_shot_time: float = float("-inf")
    rapid_fire_until: float = 0.0  # session clock, ms
    shield_until: float = 0.0

    @classmethod
    def at_spawn(cls, canvas_width: float, canvas_height: float) -> "Player":
        return cls(x=canvas_width / 2, y=canvas_height - cfg.PLAYER_Y_OFFSET)

    def move_left(self):
        self.x -= self.speed

    def move_right(self):
        self.x += self.speed

    def update(self, canvas_width: float):
        # Keep in bounds
        self.x = max(0.0, min(canvas_width - self.width, self.x))

    @property
    def shoot_delay(self) -> float:
        return cfg.RAPID_SHOOT_DELAY_MS if self.rapid_fire else cfg.SHOOT_DELAY_MS

    def shoot(self, now: float) -> Optional[Bullet]:
        """Emit a bullet from the nose of the ship unless still cooling down"""
        if now - self.last_shot_time <= self.shoot_delay:
            return None
        self.last_shot_time = now
        return Bullet(x=self.x + self.width / 2 - cfg.BULLET_WIDTH / 2, y=self.y)

    def grant_rapid_fire(self, now: float, duration: float = cfg.RAPID_FIRE_DURATION_MS):
        self.rapid_fire = True
        self.rapid_fire_until = now + duration

    def grant_shield(self, now: float, duration: float = cfg.SHIELD_DURATION_MS):
        self.shield = True
        self.shield_until = now + duration

    def expire_effects(self, now: float):
        """Clear timed power-ups whose duration has elapsed"""
        if self.rapid_fire and now >= self.rapid_fire_until:
            self.rapid_fire = False
        if self.shield and now >= self.shield_until:
            self.shield = False


@dataclass
class Enemy:
    """Descending enemy that drifts sideways and bounces off the world edges"""
    x: float
    y: float
    variant: str = "basic"
    direction: int = 1
    width: float = 40
    height: float = 30
    speed: float = 1.0
    points: int = 10
    color: Tuple[int, int, int] = (255, 136, 0)
    alive: bool = True

    @classmethod
    def spawn(cls, x: float, y: float, variant: str, direction: int) -> "Enemy":
        stats = cfg.ENEMY_VARIANTS[variant]
        return cls(x=x, y=y, variant=variant, direction=direction, **stats)

    def update(self, world_width: float = cfg.WORLD_WIDTH):
        self.y += self.speed
        self.x += self.direction * cfg.ENEMY_DRIFT

        if self.x <= 0 or self.x >= world_width - self.width:
            self.direction *= -1


@dataclass
class Obstacle:
    """Static barrier that absorbs a few hits from either side"""
    x: float
    y: float
    width: float = cfg.OBSTACLE_WIDTH
    height: float = cfg.OBSTACLE_HEIGHT
    max_health: int = cfg.OBSTACLE_MAX_HEALTH
    health: int = cfg.OBSTACLE_MAX_HEALTH

    @property
    def destroyed(self) -> bool:
        return self.health <= 0

    @property
    def health_ratio(self) -> float:
        return max(0, self.health) / self.max_health

    def take_damage(self):
        self.health = max(0, self.health - 1)


@dataclass
class PowerUp:
    """Falling pickup dropped by destroyed enemies"""
    x: float
    y: float
    kind: str = "health"
    width: float = cfg.POWER_UP_SIZE
    height: float = cfg.POWER_UP_SIZE
    speed: float = cfg.POWER_UP_SPEED
    alive: bool = True

    @property
    def color(self) -> Tuple[int, int, int]:
        return cfg.POWER_UP_COLORS[self.kind]

    def update(self):
        self.y += self.speed


@dataclass
class Particle:
    """Short-lived visual debris; fades out and shrinks every frame"""
    x: float
    y: float
    vx: float
    vy: float
    kind: str
    size: float
    decay: float
    color: Tuple[int, int, int] = (255, 255, 255)
    life: float = 1.0
    alive: bool = True

    @classmethod
    def create(cls, kind: str, x: float, y: float, rng: random.Random) -> "Particle":
        decay = rng.uniform(*cfg.PARTICLE_DECAY_RANGE)
        if kind == "explosion":
            vx = (rng.random() - 0.5) * 6
            vy = (rng.random() - 0.5) * 6
            color = hsl_to_rgb(rng.random() * 60)
            size = rng.random() * 4 + 2
        elif kind == "spark":
            vx = (rng.random() - 0.5) * 4
            vy = (rng.random() - 0.5) * 4
            color = (255, 255, 255)
            size = rng.random() * 2 + 1
        else:
            raise ValueError(f"Unknown particle kind: {kind}")
        return cls(x=x, y=y, vx=vx, vy=vy, kind=kind, size=size, decay=decay, color=color)

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay
        self.size *= cfg.PARTICLE_SHRINK
