"""
DefenderEnv - Gymnasium wrapper around the Wave Defender simulation
-------------------------------------------------------------------
- One step == one frame of DefenderGame (frame_ms of simulated time)
- Discrete MultiDiscrete action space: [move(3), fire(2)]
- Vector observation: player state + K nearest enemies + M nearest enemy
  bullets + nearest power-up
- Reward from per-tick game events (kills, score, lives lost, pickups)
- Episode terminates on game over, truncates after max_steps

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.defender.defender_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from . import config as cfg
from .engine import DefenderGame, Intent
from .session import GameState
from .utils import clamp, rect_center, seed_everything


DEFAULT_REWARD_CONFIG = {
    "R_SCORE": 0.01,     # per score point (kills and wave bonuses)
    "R_KILL": 0.5,
    "R_LIFE_LOST": 2.0,
    "R_POWER_UP": 0.5,
    "R_WAVE": 1.0,
    "R_SHOT": 0.005,
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


class DefenderEnv(gym.Env):
    """Wave Defender as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = cfg.DEFAULT_WIDTH,
        height: int = cfg.DEFAULT_HEIGHT,
        frame_ms: float = 1000 / 60,
        max_steps: int = 10_800,  # 3 minutes at 60 FPS
        k_enemies: int = 5,
        m_enemy_bullets: int = 5,
        reward_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        if obs_mode != "vector":
            raise ValueError(f"Unknown obs_mode: {obs_mode}")
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render_mode: {render_mode}")

        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.width = width
        self.height = height
        self.frame_ms = frame_ms
        self.max_steps = max_steps

        self.k_enemies = k_enemies
        self.m_enemy_bullets = m_enemy_bullets

        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(
                {k: v for k, v in reward_config.items() if k.startswith("R_")}
            )

        # move: 0 stay, 1 left, 2 right
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) rapid_fire(1) shield(1) lives(1)
        # Each enemy / enemy bullet: rel pos(2)
        # Nearest power-up: rel pos(2) present(1)
        obs_dim = 4 + (self.k_enemies * 2) + (self.m_enemy_bullets * 2) + 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.game: DefenderGame = DefenderGame(width=width, height=height)
        self._step_count = 0

        # Episode totals reported in info
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._totals = {"kills": 0.0, "lives_lost": 0.0, "power_ups": 0.0, "shots": 0.0}

        rng = random.Random(seed) if seed is not None else random.Random()
        self.game = DefenderGame(width=self.width, height=self.height, rng=rng)
        self.game.start()

        if self._window is not None:
            self._window.game = self.game

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), f"Invalid action {action!r}"

        move, fire = int(action[0]), int(action[1])
        intent = Intent(move_left=move == 1, move_right=move == 2, fire=fire == 1)

        self.game.tick(self.frame_ms, intent)

        for key in self._totals:
            self._totals[key] += self.game.events[key]

        reward = self._compute_reward()

        terminated = self.game.state is GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _relative(self, items: List[Any], n: int) -> List[float]:
        """Relative offsets of the n items nearest the player, zero padded"""
        px, py = rect_center(self.game.player)
        centers: List[Tuple[float, float]] = [rect_center(it) for it in items]
        centers.sort(key=lambda c: (c[0] - px) ** 2 + (c[1] - py) ** 2)

        parts: List[float] = []
        for i in range(n):
            if i < len(centers):
                cx, cy = centers[i]
                parts += [
                    clamp((cx - px) / self.width, -1, 1),
                    clamp((cy - py) / self.height, -1, 1),
                ]
            else:
                parts += [0.0, 0.0]
        return parts

    def _get_obs(self) -> np.ndarray:
        player = self.game.player
        lives = self.game.session.lives

        span = max(1e-6, self.width - player.width)
        obs_parts = [
            clamp(player.x / span * 2 - 1, -1, 1),
            1.0 if player.rapid_fire else -1.0,
            1.0 if player.shield else -1.0,
            lives / cfg.MAX_LIVES * 2 - 1,
        ]

        obs_parts += self._relative(self.game.enemies, self.k_enemies)
        obs_parts += self._relative(self.game.enemy_bullets, self.m_enemy_bullets)

        if self.game.power_ups:
            obs_parts += self._relative(self.game.power_ups, 1) + [1.0]
        else:
            obs_parts += [0.0, 0.0, -1.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        events = self.game.events

        reward = 0.0
        reward += rc["R_SCORE"] * events["score_gained"]
        reward += rc["R_KILL"] * events["kills"]
        reward += rc["R_POWER_UP"] * events["power_ups"]
        reward += rc["R_WAVE"] * events["waves_cleared"]

        reward -= rc["R_LIFE_LOST"] * events["lives_lost"]
        reward -= rc["R_SHOT"] * events["shots"]
        reward -= rc["R_TIME"]

        if self.game.state is GameState.GAME_OVER:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        n_enemies, n_enemy_bullets, n_power_ups, n_obstacles = self.game.counts()
        hud = self.game.hud()
        return {
            "score": hud["score"],
            "wave": hud["wave"],
            "lives": hud["lives"],
            "enemies_killed": self._totals.get("kills", 0.0),
            "lives_lost": self._totals.get("lives_lost", 0.0),
            "power_ups_collected": self._totals.get("power_ups", 0.0),
            "num_enemies": n_enemies,
            "num_enemy_bullets": n_enemy_bullets,
            "num_power_ups": n_power_ups,
            "num_obstacles": n_obstacles,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import DefenderWindow
            self._window = DefenderWindow(self.game, self.width, self.height)

        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random-policy episode for testing"""
    env = DefenderEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  "
          f"score={info['score']} wave={info['wave']} steps={info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
