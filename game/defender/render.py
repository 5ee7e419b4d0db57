"""
Arcade front end: draws DefenderGame snapshots and turns keyboard/mouse
input into Intents.

Controls: A/Left and D/Right move, Space or click fires, P pauses,
Enter starts or restarts, Esc quits.
"""

from __future__ import annotations

import math
import random
from typing import Optional

import arcade

from .engine import DefenderGame, EntityView, Intent
from .session import GameState


def _stars(width: int, height: int):
    """Fixed star field, same pattern every frame"""
    stars = []
    for i in range(100):
        x = (i * 37) % width
        y = (i * 73) % height
        alpha = int((math.sin(i) * 0.5 + 0.5) * 255)
        stars.append((x, y, alpha))
    return stars


class DefenderWindow(arcade.Window):
    """Arcade window rendering a DefenderGame.

    With ``interactive=True`` the window also drives the game: every
    ``on_update`` ticks it with the frame delta and the current key state.
    """

    def __init__(self, game: DefenderGame, width: int, height: int, interactive: bool = False):
        super().__init__(width, height, "Wave Defender")
        self.game = game
        self.interactive = interactive

        # Colors
        self.BG = (0, 0, 17)
        self.PLAYER_C = (0, 255, 255)
        self.DETAIL_C = (255, 255, 255)
        self.ENGINE_C = (255, 68, 68)
        self.BULLET_C = (0, 255, 255)
        self.ENEMY_BULLET_C = (255, 68, 68)
        self.EYE_C = (255, 0, 0)
        self.HUD_C = (220, 220, 220)

        self._left = False
        self._right = False
        self._fire_pressed = False
        self._stars = _stars(width, height)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.A, arcade.key.LEFT):
            self._left = True
        elif symbol in (arcade.key.D, arcade.key.RIGHT):
            self._right = True
        elif symbol == arcade.key.SPACE:
            self._fire_pressed = True
        elif symbol == arcade.key.P:
            self.game.toggle_pause()
        elif symbol == arcade.key.ENTER:
            if self.game.state in (GameState.START, GameState.GAME_OVER, GameState.PAUSED):
                self.game.start()
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.A, arcade.key.LEFT):
            self._left = False
        elif symbol in (arcade.key.D, arcade.key.RIGHT):
            self._right = False

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self._fire_pressed = True

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        intent = Intent(move_left=self._left, move_right=self._right, fire=self._fire_pressed)
        self._fire_pressed = False
        self.game.tick(delta_time * 1000.0, intent)

    # ----------------------------
    # Drawing
    # ----------------------------

    def _rect(self, left: float, top: float, w: float, h: float, color):
        # Game space has y pointing down, arcade has y pointing up
        bottom = self.height - (top + h)
        arcade.draw_lrbt_rectangle_filled(left, left + w, bottom, bottom + h, color)

    def _draw_view(self, v: EntityView):
        if v.kind == "obstacle":
            ratio = v.detail["health_ratio"]
            color = (int(255 * (1 - ratio)), int(255 * ratio), 100)
            self._rect(v.x, v.y, v.width, v.height, color)
            bottom = self.height - (v.y + v.height)
            arcade.draw_lrbt_rectangle_outline(
                v.x, v.x + v.width, bottom, bottom + v.height, self.DETAIL_C, 2
            )
        elif v.kind == "player":
            if v.detail.get("shield"):
                arcade.draw_circle_outline(
                    v.x + v.width / 2, self.height - (v.y + v.height / 2),
                    v.width / 2 + 10, self.PLAYER_C, 3,
                )
            self._rect(v.x, v.y, v.width, v.height, self.PLAYER_C)
            self._rect(v.x + 5, v.y + 5, v.width - 10, v.height - 10, self.DETAIL_C)
            self._rect(v.x + 5, v.y + v.height, 8, 10, self.ENGINE_C)
            self._rect(v.x + v.width - 13, v.y + v.height, 8, 10, self.ENGINE_C)
        elif v.kind == "enemy":
            self._rect(v.x, v.y, v.width, v.height, v.detail["color"])
            self._rect(v.x + 5, v.y + 5, v.width - 10, v.height - 10, self.DETAIL_C)
            self._rect(v.x + 8, v.y + 8, 6, 6, self.EYE_C)
            self._rect(v.x + v.width - 14, v.y + 8, 6, 6, self.EYE_C)
        elif v.kind == "bullet":
            self._rect(v.x, v.y, v.width, v.height, self.BULLET_C)
        elif v.kind == "enemy_bullet":
            self._rect(v.x, v.y, v.width, v.height, self.ENEMY_BULLET_C)
        elif v.kind == "power_up":
            self._rect(v.x, v.y, v.width, v.height, v.detail["color"])
            symbol = {"health": "+", "rapid_fire": "R", "shield": "S"}[v.detail["kind"]]
            arcade.draw_text(
                symbol, v.x + v.width / 2, self.height - (v.y + v.height / 2),
                (0, 0, 0), 12, anchor_x="center", anchor_y="center",
            )
        elif v.kind == "particle":
            alpha = int(max(0.0, min(1.0, v.detail["life"])) * 255)
            self._rect(v.x, v.y, v.width, v.height, (*v.detail["color"], alpha))

    def _draw_banner(self, title: str, subtitle: Optional[str] = None):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy + 20, self.HUD_C, 32, anchor_x="center")
        if subtitle:
            arcade.draw_text(subtitle, cx, cy - 20, self.HUD_C, 16, anchor_x="center")

    def on_draw(self):
        """Draw the current game state"""
        self.clear(color=self.BG)

        for x, y, alpha in self._stars:
            arcade.draw_point(x, self.height - y, (255, 255, 255, alpha), 1)

        state = self.game.state
        if state in (GameState.PLAYING, GameState.PAUSED):
            for view in self.game.snapshot():
                self._draw_view(view)

        hud = self.game.hud()
        txt = f"Score: {hud['score']}  Wave: {hud['wave']}  Lives: {hud['lives']}"
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)

        if state is GameState.START:
            self._draw_banner("WAVE DEFENDER", "Press Enter to start")
        elif state is GameState.PAUSED:
            self._draw_banner("PAUSED", "P to resume, Enter to restart")
        elif state is GameState.GAME_OVER:
            summary = self.game.final_summary()
            self._draw_banner(
                "GAME OVER",
                f"Score {summary['final_score']}  Waves {summary['final_wave']}  (Enter to restart)",
            )


def run_human_game(width: int = 800, height: int = 600, seed: Optional[int] = None):
    """Open a window and play with the keyboard"""
    rng = random.Random(seed) if seed is not None else None
    game = DefenderGame(width=width, height=height, rng=rng)
    DefenderWindow(game, width, height, interactive=True)
    print("Enter: start  A/D or arrows: move  Space/click: fire  P: pause  Esc: quit")
    arcade.run()
    summary = game.final_summary()
    if summary:
        print(f"Final score: {summary['final_score']}  Waves cleared: {summary['final_wave']}")
