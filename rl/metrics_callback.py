"""
Callbacks that record Wave Defender episode metrics during training.
Records: score, waves reached, enemies killed, lives lost.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Logs one CSV row per finished episode for plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[float] = []
        self.episode_waves: List[float] = []
        self.episode_kills: List[float] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "wave", "kills", "lives_lost", "game_over",
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def record_episode(self, info: Dict[str, Any]) -> List[Any]:
        """Store the stats of a finished episode; returns the CSV row"""
        ep_info = info["episode"]
        score = info.get("score", 0)
        wave = info.get("wave", 1)
        kills = info.get("enemies_killed", 0)
        lives_lost = info.get("lives_lost", 0)
        game_over = 1 if info.get("lives", 0) <= 0 else 0

        self.episode_rewards.append(ep_info["r"])
        self.episode_lengths.append(ep_info["l"])
        self.episode_scores.append(score)
        self.episode_waves.append(wave)
        self.episode_kills.append(kills)

        return [
            self.num_timesteps,
            len(self.episode_rewards),
            ep_info["r"],
            ep_info["l"],
            score,
            wave,
            kills,
            lives_lost,
            game_over,
        ]

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds "episode" to the info of the final step
            if not (done and "episode" in info):
                continue

            row = self.record_episode(info)
            if self.csv_writer:
                self.csv_writer.writerow(row)
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                avg_score = sum(self.episode_scores[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}, Avg Score: {avg_score:.0f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "max_wave": int(np.max(self.episode_waves)),
            "mean_kills": np.mean(self.episode_kills),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs game-level episode metrics to TensorBoard.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/episode_length", info["episode"]["l"])
                for key in ("score", "wave", "enemies_killed"):
                    if key in info:
                        self.logger.record(f"custom/{key}", info[key])

        return True
