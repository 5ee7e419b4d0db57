"""
Session state: score, lives, wave progression and the game state machine
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from . import config as cfg
from .spawner import Spawner

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class Session:
    """Counters for one play-through.

    Transitions:
        START -> PLAYING            start()
        PLAYING <-> PAUSED          toggle_pause()
        PLAYING -> GAME_OVER        check_game_over() once lives run out
        any -> PLAYING              start() again (full reset)
    """
    score: int = 0
    wave: int = 1
    lives: int = cfg.STARTING_LIVES
    state: GameState = GameState.START
    final_score: Optional[int] = None
    final_wave: Optional[int] = None

    def reset(self):
        self.score = 0
        self.wave = 1
        self.lives = cfg.STARTING_LIVES
        self.final_score = None
        self.final_wave = None

    def start(self):
        self.reset()
        self.state = GameState.PLAYING
        logger.info("Session started")

    def toggle_pause(self):
        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
            logger.info("Paused at wave %d", self.wave)
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
            logger.info("Resumed")

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAYING

    def add_score(self, points: int):
        if points > 0:
            self.score += points

    def lose_life(self):
        # May dip below zero mid-tick; check_game_over clamps it
        self.lives -= 1

    def gain_life(self):
        self.lives = min(self.lives + 1, cfg.MAX_LIVES)

    def check_wave_completion(self, spawner: Spawner, active_enemies: int) -> bool:
        """Advance to the next wave once the current one is spawned and cleared.

        Returns True when a wave was completed; the caller regenerates the
        obstacle field. Resetting the spawned count makes the check a no-op
        until the next wave has been released.
        """
        if not spawner.wave_exhausted or active_enemies > 0:
            return False

        self.wave += 1
        spawner.next_wave()
        self.add_score(self.wave * cfg.WAVE_BONUS_PER_WAVE)
        logger.info("Wave cleared, now on wave %d (score %d)", self.wave, self.score)
        return True

    def check_game_over(self) -> bool:
        """End the session once lives run out; lives are clamped to 0 here"""
        if self.lives > 0:
            return False
        self.lives = 0
        if self.state is GameState.GAME_OVER:
            return False

        self.state = GameState.GAME_OVER
        self.final_score = self.score
        self.final_wave = self.wave - 1
        logger.info("Game over: score %d after %d waves", self.final_score, self.final_wave)
        return True

    def hud(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "wave": self.wave,
            "lives": self.lives,
            "state": self.state.value,
        }

    def final_summary(self) -> Optional[Dict[str, int]]:
        if self.state is not GameState.GAME_OVER:
            return None
        return {"final_score": self.final_score, "final_wave": self.final_wave}
