"""
Spawner - timer and probability driven entity creation
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from . import config as cfg
from .entities import Enemy, EnemyBullet, Obstacle, PowerUp

logger = logging.getLogger(__name__)


class Spawner:
    """Creates enemies, enemy bullets, power-up drops and obstacle fields.

    Enemy spawning is paced per wave: ``enemies_per_wave`` enemies are
    released one at a time, each after ``spawn_delay`` ms of simulated time.
    Once the quota is reached the timer stops until the wave is cleared.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self):
        self.enemies_per_wave = cfg.ENEMIES_PER_WAVE
        self.enemies_spawned = 0
        self.spawn_timer = 0.0
        self.spawn_delay = cfg.SPAWN_DELAY_MS

    @property
    def wave_exhausted(self) -> bool:
        """True once every enemy of the current wave has been released"""
        return self.enemies_spawned >= self.enemies_per_wave

    def next_wave(self):
        self.enemies_per_wave += cfg.ENEMIES_PER_WAVE_STEP
        self.enemies_spawned = 0

    def update(self, delta_ms: float, wave: int, canvas_width: float) -> Optional[Enemy]:
        """Advance the spawn timer; returns the enemy released this tick, if any"""
        if self.wave_exhausted:
            return None

        self.spawn_timer += delta_ms
        if self.spawn_timer < self.spawn_delay:
            return None

        enemy = self.spawn_enemy(canvas_width)
        self.enemies_spawned += 1
        self.spawn_timer = 0.0
        # Later waves release enemies faster
        self.spawn_delay = max(
            cfg.MIN_SPAWN_DELAY_MS,
            cfg.SPAWN_DELAY_MS - wave * cfg.SPAWN_DELAY_STEP_MS,
        )
        logger.debug(
            "Spawned %s enemy %d/%d at x=%.1f",
            enemy.variant, self.enemies_spawned, self.enemies_per_wave, enemy.x,
        )
        return enemy

    def spawn_enemy(self, canvas_width: float) -> Enemy:
        x = self.rng.random() * (canvas_width - cfg.ENEMY_SPAWN_MARGIN)
        variant = "basic" if self.rng.random() < cfg.BASIC_ENEMY_CHANCE else "fast"
        direction = -1 if self.rng.random() < 0.5 else 1
        return Enemy.spawn(x, cfg.ENEMY_SPAWN_Y, variant, direction)

    def enemy_fire(self, enemy: Enemy, wave: int) -> Optional[EnemyBullet]:
        """Roll the per-tick chance that ``enemy`` fires"""
        chance = cfg.ENEMY_FIRE_CHANCE * (1 + wave * cfg.ENEMY_FIRE_WAVE_SCALE)
        if self.rng.random() < chance:
            return EnemyBullet(x=enemy.x, y=enemy.y + enemy.height)
        return None

    def drop_power_up(self, x: float, y: float) -> Optional[PowerUp]:
        """Roll the power-up drop for an enemy destroyed at (x, y)"""
        if self.rng.random() >= cfg.POWER_UP_DROP_CHANCE:
            return None
        kinds = cfg.POWER_UP_KINDS
        kind = kinds[min(int(self.rng.random() * len(kinds)), len(kinds) - 1)]
        logger.debug("Power-up %s dropped at (%.1f, %.1f)", kind, x, y)
        return PowerUp(x=x, y=y, kind=kind)

    def generate_obstacles(self, wave: int, canvas_width: float, canvas_height: float) -> List[Obstacle]:
        """Fresh obstacle field for ``wave``, scattered over the upper half"""
        count = cfg.OBSTACLE_BASE_COUNT + wave // 2
        obstacles = []
        for _ in range(count):
            x = self.rng.random() * (canvas_width - 2 * cfg.OBSTACLE_X_MARGIN) + cfg.OBSTACLE_X_MARGIN
            y = self.rng.random() * (canvas_height / 2) + cfg.OBSTACLE_TOP
            obstacles.append(Obstacle(x=x, y=y))
        return obstacles
