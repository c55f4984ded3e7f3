"""Game state and rules: prey movement, shooting, lives, levels and the key bindings."""

from __future__ import annotations

import math
import random
from enum import IntEnum
from typing import List, Optional, Tuple

from thehunter.scene import (
    Canvas,
    draw_bush,
    draw_floor,
    draw_heart,
    draw_prey,
    draw_tree,
)

TIMER_INTERVAL = 24
NUM_TREES = 12
NUM_BUSHES = 20
MAX_PREY = 15
START_LIVES = 3
IMMUNE_COOLDOWN = 50
LIFE_UP_START = 50
START_SPEED = 5.0

ESCAPE = "\x1b"


def sgn(num: float) -> int:
    """Return the sign of ``num`` as -1, 0 or 1."""
    if num > 0:
        return 1
    if num < 0:
        return -1
    return 0


class Quadrant(IntEnum):
    """Part of the field a shot covers."""

    LOWER_LEFT = 0
    LOWER_RIGHT = 1
    UPPER_LEFT = 2
    UPPER_RIGHT = 3
    ALL = 4

    def contains(self, x: float, y: float) -> bool:
        """Whether a prey at horizontal ``x`` and height ``y`` is hit."""
        if self is Quadrant.LOWER_LEFT:
            return 1 < y <= 4 and x <= 0
        if self is Quadrant.LOWER_RIGHT:
            return 1 < y <= 4 and x >= 0
        if self is Quadrant.UPPER_LEFT:
            return y >= 3 and x <= 0
        if self is Quadrant.UPPER_RIGHT:
            return y >= 3 and x >= 0
        return True


_SHOTS = {
    "a": Quadrant.LOWER_LEFT,
    "s": Quadrant.LOWER_RIGHT,
    "q": Quadrant.UPPER_LEFT,
    "w": Quadrant.UPPER_RIGHT,
}


class HunterGame:
    """The whole game state, advanced by :meth:`tick` and driven by :meth:`press`."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.animation_ongoing = False
        self.live_cd = 0
        self.move = 0.0
        self.trees: List[Tuple[float, float, float]] = []
        self.bushes: List[Tuple[float, float, float, float]] = []
        self.prey_positions: List[List[float]] = [[0.0, 0.0, 0.0] for _ in range(MAX_PREY)]
        self.prey_movement: List[List[float]] = [[0.0, 0.0, 0.0] for _ in range(MAX_PREY)]
        self._reset_counters()
        self.generate_terrain()
        self.initiate_prey()

    def _reset_counters(self) -> None:
        self.lives = START_LIVES
        self.level = 1
        self.life_up_condition = LIFE_UP_START
        self.prey_speed = START_SPEED
        self.animation_set = False
        self.prey_killed = 0
        self.cooldown_timer = 0
        self.cooldown_timer_space = 0

    @property
    def score_line(self) -> str:
        return f"Score: {self.prey_killed} | Level: {self.level}"

    def reset(self) -> None:
        """Start over with fresh prey and terrain."""
        self._reset_counters()
        self.initiate_prey()
        self.generate_terrain()

    def _offset(self, top: float, span: int) -> float:
        return top - self.rng.randrange(span * 100) / 100

    def generate_terrain(self) -> None:
        """Place bushes and trees at random."""
        max_x, max_z, min_z = 6, 7, -5
        self.bushes = [
            (
                self._offset(max_x, 2 * max_x),
                1.2,
                self._offset(max_z + 1, max_z - min_z),
                float(self.rng.randrange(360)),
            )
            for _ in range(NUM_BUSHES)
        ]
        self.trees = [
            (
                self._offset(max_x, 2 * max_x),
                2 + self.rng.randrange(300) / 100,
                self._offset(max_z, max_z - min_z),
            )
            for _ in range(NUM_TREES)
        ]

    def initiate_prey(self) -> None:
        """Give every prey a start position and movement, once per round."""
        if not self.animation_set:
            for i, movement in enumerate(self.prey_movement):
                self.respawn(i)
                step = self.rng.randrange(100) / 30000
                movement[0] = step if self.prey_positions[i][0] < 0 else -step
                movement[1] = self.rng.randrange(100) / 30000
                movement[2] = self.rng.randrange(100) / 80000
        self.animation_set = True

    def respawn(self, i: int) -> None:
        """Move prey ``i`` back to a random spot on the ground."""
        max_x, max_z, min_z = 6, 6, -3
        position = self.prey_positions[i]
        position[0] = self._offset(max_x, 2 * max_x)
        position[1] = 1.0
        position[2] = self._offset(max_z, max_z - min_z)

    def bob(self, i: int) -> None:
        """Hop prey ``i`` up and down, never below the ground."""
        position = self.prey_positions[i]
        position[1] += math.sin(self.move) * 0.075
        if position[1] <= 1.1:
            position[1] = 1.1

    @staticmethod
    def _escaped(position: List[float]) -> bool:
        x, y, z = position
        return x < -8.5 or x > 8.5 or y < -1 or y > 7 or z < -7 or z > 11

    def update_prey_positions(self) -> None:
        """Move every prey; one that leaves the field costs a life."""
        if not self.animation_ongoing:
            return
        for i, (position, movement) in enumerate(zip(self.prey_positions, self.prey_movement)):
            position[0] += movement[0] * self.prey_speed
            position[1] += movement[1] * self.prey_speed
            self.bob(i)
            position[2] += movement[2] * self.prey_speed / 0.5
            if self._escaped(position) and not self.live_cd:
                self.respawn(i)
                self.lives -= 1
                self.live_cd = IMMUNE_COOLDOWN
                if self.lives <= 0:
                    self.animation_set = False
                    self.prey_killed = 0
                    self.initiate_prey()
                    self.animation_ongoing = False

    def kill(self, quadrant: Quadrant) -> int:
        """Shoot into ``quadrant``; return how many prey were hit."""
        if not self.animation_ongoing:
            return 0
        quadrant = Quadrant(quadrant)
        hits = 0
        for i, (position, movement) in enumerate(zip(self.prey_positions, self.prey_movement)):
            if not quadrant.contains(position[0], position[1]):
                continue
            hits += 1
            self.prey_killed += 1
            self.respawn(i)
            step = self.rng.randrange(100) / 100000
            movement[0] = step if position[0] < 0 else -step
            movement[1] = self.rng.randrange(100) / 100000
        return hits

    def tick(self) -> None:
        """Advance the game by one timer step."""
        self.update_prey_positions()

        if self.prey_killed > self.level * 10:
            self.prey_speed += 1
            self.level += 1

        if self.prey_killed > self.life_up_condition:
            self.lives += 1
            self.life_up_condition *= 2

        if self.cooldown_timer:
            self.cooldown_timer += 1
        if self.cooldown_timer_space:
            self.cooldown_timer_space += 1
        if self.cooldown_timer > TIMER_INTERVAL:
            self.cooldown_timer = 0
        if self.cooldown_timer_space > 10 * TIMER_INTERVAL:
            self.cooldown_timer_space = 0

        if self.live_cd > 0:
            self.live_cd -= 1

        self.move += 0.25

    def press(self, key: str) -> bool:
        """Handle one key; return False when the game should quit."""
        k = key.lower()
        if k == "r":
            print(self.score_line)
            self.reset()
        elif k == "t":
            self.animation_ongoing = False
        elif k == "g":
            self.animation_ongoing = True
        elif k == ESCAPE:
            print(self.score_line)
            return False
        elif k in _SHOTS:
            if not self.cooldown_timer:
                self.kill(_SHOTS[k])
                self.cooldown_timer = 1
        elif k == " ":
            if not self.cooldown_timer_space:
                self.kill(Quadrant.ALL)
                self.cooldown_timer_space = 1
        elif k == "n":
            self.prey_speed *= 0.9
        elif k == "m":
            self.prey_speed *= 1.1
        return True

    def build_scene(self, canvas: Canvas, bark, grass) -> Canvas:
        """Draw hearts, terrain and prey onto ``canvas``."""
        with canvas.saved():
            canvas.translate(-2.2, 3.5, 10)
            canvas.scale(0.15, 0.15, 0.15)
            for _ in range(self.lives):
                canvas.translate(1.2, 0, 0)
                with canvas.saved():
                    draw_heart(canvas)

        with canvas.saved():
            with canvas.saved():
                draw_floor(canvas, grass)
            for bush in self.bushes:
                with canvas.saved():
                    draw_bush(canvas, *bush)
            for x, h, z in self.trees:
                with canvas.saved():
                    draw_tree(canvas, x, h, z, bark)

        with canvas.saved():
            for x, y, z in self.prey_positions:
                with canvas.saved():
                    draw_prey(canvas, x, y, z)
        return canvas