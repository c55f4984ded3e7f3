"""Window, camera projection and software rendering of the game scene."""

from __future__ import annotations

import argparse
import math
import random
from itertools import product
from os import PathLike
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import pygame

from thehunter.game import TIMER_INTERVAL, HunterGame
from thehunter.image import Image, read_image
from thehunter.scene import Canvas, Face, Solid

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
FIELD_OF_VIEW = 30.0
NEAR = 1.0
FAR = 20.0
BARK = "bark"
GRASS = "grass"
TEXTURE_FILES = {BARK: "bark.bmp", GRASS: "grass.bmp"}

Vec3 = Tuple[float, float, float]
Color = Tuple[int, int, int]


def _rgb(color: Sequence[float]) -> Color:
    return tuple(max(0, min(255, int(c * 255 + 0.5))) for c in color[:3])


SKY_COLOR = _rgb((0.3, 0.4, 0.8))

_EYE: Vec3 = (0.0, 2.0, 15.0)
_CENTER: Vec3 = (0.0, 3.0, 0.0)
_UP: Vec3 = (0.0, 1.0, 0.0)


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v: Sequence[float]) -> Vec3:
    length = math.sqrt(_dot(v, v))
    return (v[0] / length, v[1] / length, v[2] / length)


_FORWARD = _normalize(_sub(_CENTER, _EYE))
_SIDE = _normalize(_cross(_FORWARD, _UP))
_UPWARD = _cross(_SIDE, _FORWARD)
_FOCAL = 1 / math.tan(math.radians(FIELD_OF_VIEW / 2))


def _to_view(point: Sequence[float]) -> Vec3:
    """Camera-space coordinates: right, up and depth along the view direction."""
    d = _sub(point, _EYE)
    return (_dot(_SIDE, d), _dot(_UPWARD, d), _dot(_FORWARD, d))


def _to_screen(view: Vec3, width: float, height: float) -> Tuple[float, float]:
    x, y, depth = view
    aspect = width / height
    nx = _FOCAL / aspect * x / depth
    ny = _FOCAL * y / depth
    return ((nx + 1) / 2 * width, (1 - ny) / 2 * height)


def _check_size(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("viewport dimensions must be positive")


def project(point: Sequence[float], width: float, height: float) -> Optional[Tuple[float, float, float]]:
    """Map a world point to (screen x, screen y, depth), or None if it is clipped."""
    _check_size(width, height)
    view = _to_view(point)
    if not NEAR <= view[2] <= FAR:
        return None
    sx, sy = _to_screen(view, width, height)
    return (sx, sy, view[2])


def _clip(points: List[Vec3], limit: float, keep_greater: bool) -> List[Vec3]:
    """Clip a polygon in view space against the plane depth == limit."""
    def inside(p: Vec3) -> bool:
        return p[2] >= limit if keep_greater else p[2] <= limit

    result: List[Vec3] = []
    for current, following in zip(points, points[1:] + points[:1]):
        current_in, following_in = inside(current), inside(following)
        if current_in:
            result.append(current)
        if current_in != following_in:
            t = (limit - current[2]) / (following[2] - current[2])
            result.append(tuple(c + (f - c) * t for c, f in zip(current, following)))
    return result


def _mean_color(image: Image) -> Optional[Tuple[float, float, float]]:
    count = image.width * image.height
    if count == 0:
        return None
    step = image.channels
    return tuple(sum(image.pixels[i::step]) / (count * 255) for i in range(3))


def load_textures(directory: Union[str, PathLike]) -> Dict[str, Image]:
    """Read the bark and grass bitmaps from ``directory``."""
    base = Path(directory)
    return {name: read_image(base / filename) for name, filename in TEXTURE_FILES.items()}


def _column_length(matrix, column: int) -> float:
    return math.sqrt(sum(matrix[row][column] ** 2 for row in range(3)))


class Renderer:
    """Draws a game scene onto a pygame surface, far objects first."""

    def __init__(self, width: int, height: int, textures: Optional[Dict[str, Image]] = None) -> None:
        _check_size(width, height)
        self.width = width
        self.height = height
        self.texture_colors: Dict[str, Color] = {}
        for name, image in (textures or {}).items():
            mean = _mean_color(image)
            if mean is not None:
                self.texture_colors[name] = _rgb(mean)

    def _face_item(self, face: Face) -> Optional[Tuple[float, Callable]]:
        view = _clip(_clip([_to_view(v) for v in face.vertices], NEAR, True), FAR, False)
        if len(view) < 3:
            return None
        points = [_to_screen(v, self.width, self.height) for v in view]
        depth = sum(v[2] for v in view) / len(view)
        color = self.texture_colors.get(face.texture, _rgb(face.color)) if face.texture is not None else _rgb(face.color)

        def draw(surface: pygame.Surface) -> None:
            pygame.draw.polygon(surface, color, points)

        return depth, draw

    def _sphere_item(self, solid: Solid) -> Optional[Tuple[float, Callable]]:
        view = _to_view(solid.center)
        if not NEAR <= view[2] <= FAR:
            return None
        sx, sy = _to_screen(view, self.width, self.height)
        pixels = _FOCAL * self.height / 2 / view[2]
        rx = max(solid.size * _column_length(solid.matrix, 0) * pixels, 0.5)
        ry = max(solid.size * _column_length(solid.matrix, 1) * pixels, 0.5)
        rect = pygame.Rect(int(sx - rx), int(sy - ry), max(1, int(2 * rx)), max(1, int(2 * ry)))
        color = _rgb(solid.color)

        def draw(surface: pygame.Surface) -> None:
            pygame.draw.ellipse(surface, color, rect)

        return view[2], draw

    def _cube_item(self, solid: Solid) -> Optional[Tuple[float, Callable]]:
        half = solid.size / 2
        views = [
            _to_view(solid.transform((a * half, b * half, c * half)))
            for a, b, c in product((-1, 1), repeat=3)
        ]
        if any(not NEAR <= v[2] <= FAR for v in views):
            return None
        points = [_to_screen(v, self.width, self.height) for v in views]
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        rect = pygame.Rect(
            int(min(xs)), int(min(ys)),
            max(1, int(max(xs) - min(xs))), max(1, int(max(ys) - min(ys))),
        )
        depth = sum(v[2] for v in views) / len(views)
        color = _rgb(solid.color)

        def draw(surface: pygame.Surface) -> None:
            pygame.draw.rect(surface, color, rect)

        return depth, draw

    def render(self, surface: pygame.Surface, game) -> int:
        """Draw ``game`` onto ``surface``; return the number of primitives drawn."""
        canvas = game.build_scene(Canvas(), BARK, GRASS)
        items = [self._face_item(face) for face in canvas.faces]
        items += [
            self._sphere_item(solid) if solid.kind == "sphere" else self._cube_item(solid)
            for solid in canvas.solids
        ]
        visible = sorted((item for item in items if item is not None), key=lambda item: item[0], reverse=True)
        surface.fill(SKY_COLOR)
        for _, draw in visible:
            draw(surface)
        return len(visible)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="thehunter", description="Hunt the prey before it escapes.")
    parser.add_argument("--textures", default="bmp", help="directory holding bark.bmp and grass.bmp")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random world")
    args = parser.parse_args(argv)

    textures = load_textures(args.textures)
    game = HunterGame(random.Random(args.seed))

    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption("theHunter")
        renderer = Renderer(*screen.get_size(), textures)
        clock = pygame.time.Clock()
        elapsed = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.get_surface()
                    if event.w > 0 and event.h > 0:
                        renderer.width, renderer.height = event.w, event.h
                elif event.type == pygame.KEYDOWN:
                    key = "\x1b" if event.key == pygame.K_ESCAPE else event.unicode
                    if key and not game.press(key):
                        running = False
            if not running:
                break
            dt = clock.tick(60)
            if game.animation_ongoing:
                elapsed += dt
                while elapsed >= TIMER_INTERVAL and game.animation_ongoing:
                    game.tick()
                    elapsed -= TIMER_INTERVAL
            else:
                elapsed = 0
            renderer.render(screen, game)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0