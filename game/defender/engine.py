"""
DefenderGame - the simulation core
----------------------------------
- Owns every entity collection and the session counters
- Advanced once per frame by an external scheduler via tick(delta_ms, intent)
- Tick order: input -> entity updates -> spawner -> collisions -> wave/session checks
- Dead entities are marked (alive=False) during the tick and swept once at the end

Rendering and input devices live elsewhere (see render.py and defender_env.py);
they only read snapshot()/hud() and hand in an Intent.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from . import config as cfg
from .entities import Bullet, Enemy, EnemyBullet, Obstacle, Particle, Player, PowerUp
from .session import GameState, Session
from .spawner import Spawner
from .utils import rect_center, rects_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Intent:
    """Boolean input state for one tick; fire is edge-triggered"""
    move_left: bool = False
    move_right: bool = False
    fire: bool = False


@dataclass(frozen=True)
class EntityView:
    """Read-only view of one entity for the renderer"""
    kind: str
    x: float
    y: float
    width: float
    height: float
    detail: Dict[str, Any] = field(default_factory=dict)


def _empty_events() -> Dict[str, float]:
    return {
        "kills": 0.0,
        "score_gained": 0.0,
        "lives_lost": 0.0,
        "power_ups": 0.0,
        "shots": 0.0,
        "waves_cleared": 0.0,
        "obstacle_hits": 0.0,
    }


class DefenderGame:
    """Wave-based arcade shooter simulation"""

    def __init__(
        self,
        width: int = cfg.DEFAULT_WIDTH,
        height: int = cfg.DEFAULT_HEIGHT,
        rng: Optional[random.Random] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()

        self.session = Session()
        self.spawner = Spawner(self.rng)

        # Session clock in ms; keeps running while paused so timed
        # power-ups expire on wall-clock terms
        self.clock_ms = 0.0

        # World state
        self.player = Player.at_spawn(width, height)
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.enemy_bullets: List[EnemyBullet] = []
        self.obstacles: List[Obstacle] = []
        self.power_ups: List[PowerUp] = []
        self.particles: List[Particle] = []

        # Event counters for the last simulated tick
        self.events: Dict[str, float] = _empty_events()
        self._shots_fired = 0

        self.obstacles = self.spawner.generate_obstacles(self.session.wave, width, height)

    # ----------------------------
    # Session control
    # ----------------------------

    @property
    def state(self) -> GameState:
        return self.session.state

    def start(self):
        """Start a new game, or restart from any state. Full reset."""
        self.session.start()
        self.spawner.reset()
        self.player = Player.at_spawn(self.width, self.height)
        self.bullets = []
        self.enemies = []
        self.enemy_bullets = []
        self.power_ups = []
        self.particles = []
        self.events = _empty_events()
        self._shots_fired = 0
        self.obstacles = self.spawner.generate_obstacles(self.session.wave, self.width, self.height)

    def toggle_pause(self):
        self.session.toggle_pause()

    def resize(self, width: int, height: int):
        """Adopt a new canvas size; only the player is repositioned"""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.player.x = width / 2
        self.player.y = height - cfg.PLAYER_Y_OFFSET

    # ----------------------------
    # Frame update
    # ----------------------------

    def tick(self, delta_ms: float, intent: Optional[Intent] = None) -> Dict[str, Any]:
        """Advance the game by one frame and return the HUD state"""
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be non-negative, got {delta_ms}")

        self.clock_ms += delta_ms
        self.player.expire_effects(self.clock_ms)
        self.events = _empty_events()

        if self.session.playing:
            self._apply_input(intent or Intent())
            self._update_entities()
            self._spawn(delta_ms)
            self.resolve_collisions()
            self._check_session()

        self.events["shots"] = float(self._shots_fired)
        self._shots_fired = 0
        return self.hud()

    def shoot(self) -> bool:
        """Fire a player bullet if the cooldown allows; returns True on a shot.

        Shots fired between ticks are counted in the next tick's events.
        """
        if not self.session.playing:
            return False
        bullet = self.player.shoot(self.clock_ms)
        if bullet is None:
            return False
        self.bullets.append(bullet)
        self._shots_fired += 1
        return True

    def _apply_input(self, intent: Intent):
        if intent.move_left:
            self.player.move_left()
        if intent.move_right:
            self.player.move_right()
        self.player.update(self.width)

        if intent.fire:
            self.shoot()

    def _update_entities(self):
        for b in self.bullets:
            b.update()
            if b.y <= 0:
                b.alive = False

        wave = self.session.wave
        for e in self.enemies:
            e.update()
            shot = self.spawner.enemy_fire(e, wave)
            if shot is not None:
                self.enemy_bullets.append(shot)
            if e.y >= self.height + cfg.ENEMY_DESPAWN_MARGIN:
                e.alive = False

        for b in self.enemy_bullets:
            b.update()
            if b.y >= self.height:
                b.alive = False

        for p in self.power_ups:
            p.update()
            if p.y >= self.height:
                p.alive = False

        for p in self.particles:
            p.update()
            if p.life <= 0:
                p.alive = False

    def _spawn(self, delta_ms: float):
        enemy = self.spawner.update(delta_ms, self.session.wave, self.width)
        if enemy is not None:
            self.enemies.append(enemy)

    # ----------------------------
    # Collisions
    # ----------------------------

    def resolve_collisions(self):
        """Run the six collision passes in order, then sweep dead entities.

        An entity killed in one pass is skipped by every later pass.
        """
        player = self.player

        # Player bullets vs enemies
        for b in self.bullets:
            if not b.alive:
                continue
            for e in self.enemies:
                if not e.alive:
                    continue
                if rects_overlap(b, e):
                    b.alive = False
                    e.alive = False
                    self._explode(*rect_center(e))
                    self.session.add_score(e.points)
                    self.events["kills"] += 1.0
                    self.events["score_gained"] += e.points
                    drop = self.spawner.drop_power_up(e.x, e.y)
                    if drop is not None:
                        self.power_ups.append(drop)
                    break

        # Player bullets vs obstacles
        for b in self.bullets:
            if b.alive:
                self._hit_obstacles(b)

        # Enemy bullets vs player. The shield is not consulted here.
        for b in self.enemy_bullets:
            if not b.alive:
                continue
            if rects_overlap(b, player):
                b.alive = False
                self._lose_life()
                self._explode(*rect_center(player))

        # Enemy bullets vs obstacles
        for b in self.enemy_bullets:
            if b.alive:
                self._hit_obstacles(b)

        # Player vs enemies
        for e in self.enemies:
            if not e.alive:
                continue
            if rects_overlap(player, e):
                e.alive = False
                self._lose_life()
                self._explode(*rect_center(e))

        # Player vs power-ups
        for p in self.power_ups:
            if not p.alive:
                continue
            if rects_overlap(player, p):
                p.alive = False
                self.apply_power_up(p.kind)

        self._sweep()

    def _hit_obstacles(self, bullet: Bullet):
        for o in self.obstacles:
            if o.destroyed:
                continue
            if rects_overlap(bullet, o):
                bullet.alive = False
                o.take_damage()
                self._sparks(bullet.x, bullet.y)
                self.events["obstacle_hits"] += 1.0
                return

    def _lose_life(self):
        self.session.lose_life()
        self.events["lives_lost"] += 1.0

    def apply_power_up(self, kind: str):
        if kind == "health":
            self.session.gain_life()
        elif kind == "rapid_fire":
            self.player.grant_rapid_fire(self.clock_ms)
        elif kind == "shield":
            self.player.grant_shield(self.clock_ms)
        else:
            raise ValueError(f"Unknown power-up kind: {kind}")
        self.events["power_ups"] += 1.0
        logger.debug("Picked up %s", kind)

    def _explode(self, x: float, y: float):
        for _ in range(cfg.EXPLOSION_PARTICLES):
            self.particles.append(Particle.create("explosion", x, y, self.rng))

    def _sparks(self, x: float, y: float):
        for _ in range(cfg.SPARK_PARTICLES):
            self.particles.append(Particle.create("spark", x, y, self.rng))

    def _sweep(self):
        self.bullets = [b for b in self.bullets if b.alive]
        self.enemies = [e for e in self.enemies if e.alive]
        self.enemy_bullets = [b for b in self.enemy_bullets if b.alive]
        self.power_ups = [p for p in self.power_ups if p.alive]
        self.particles = [p for p in self.particles if p.alive]

    def _check_session(self):
        if self.session.check_wave_completion(self.spawner, len(self.enemies)):
            self.obstacles = self.spawner.generate_obstacles(self.session.wave, self.width, self.height)
            self.events["waves_cleared"] += 1.0
            self.events["score_gained"] += self.session.wave * cfg.WAVE_BONUS_PER_WAVE

        self.session.check_game_over()

    # ----------------------------
    # Read-only views
    # ----------------------------

    def hud(self) -> Dict[str, Any]:
        return self.session.hud()

    def final_summary(self) -> Optional[Dict[str, int]]:
        return self.session.final_summary()

    def snapshot(self) -> List[EntityView]:
        """Every live entity, in back-to-front draw order"""
        views: List[EntityView] = []

        for o in self.obstacles:
            if not o.destroyed:
                views.append(EntityView("obstacle", o.x, o.y, o.width, o.height,
                                        {"health_ratio": o.health_ratio}))

        p = self.player
        views.append(EntityView("player", p.x, p.y, p.width, p.height,
                                {"shield": p.shield, "rapid_fire": p.rapid_fire}))

        for b in self.bullets:
            views.append(EntityView("bullet", b.x, b.y, b.width, b.height))
        for e in self.enemies:
            views.append(EntityView("enemy", e.x, e.y, e.width, e.height,
                                    {"variant": e.variant, "color": e.color}))
        for b in self.enemy_bullets:
            views.append(EntityView("enemy_bullet", b.x, b.y, b.width, b.height))
        for pu in self.power_ups:
            views.append(EntityView("power_up", pu.x, pu.y, pu.width, pu.height,
                                    {"kind": pu.kind, "color": pu.color}))
        for pt in self.particles:
            views.append(EntityView("particle", pt.x, pt.y, pt.size, pt.size,
                                    {"kind": pt.kind, "life": pt.life, "color": pt.color}))
        return views

    def counts(self) -> Tuple[int, int, int, int]:
        """(enemies, enemy bullets, power-ups, live obstacles)"""
        live_obstacles = sum(1 for o in self.obstacles if not o.destroyed)
        return len(self.enemies), len(self.enemy_bullets), len(self.power_ups), live_obstacles
