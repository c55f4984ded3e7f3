"""Scene description: a recording canvas with a matrix stack and the game's props."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]
Matrix = Tuple[Tuple[float, float, float, float], ...]

_IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


def _multiply(a: Matrix, b: Matrix) -> Matrix:
    columns = list(zip(*b))
    return tuple(tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a)


def _apply(matrix: Matrix, point: Sequence[float]) -> Vec3:
    x, y, z = point
    return tuple(row[0] * x + row[1] * y + row[2] * z + row[3] for row in matrix[:3])


@dataclass(frozen=True)
class Face:
    """A flat polygon with world-space vertices."""

    vertices: Tuple[Vec3, ...]
    color: Vec3
    tex_coords: Optional[Tuple[Tuple[float, float], ...]] = None
    normal: Optional[Vec3] = None
    texture: Optional[object] = None


@dataclass(frozen=True)
class Solid:
    """A unit sphere or cube placed by a model matrix."""

    kind: str
    size: float
    matrix: Matrix
    color: Vec3

    def transform(self, point: Sequence[float]) -> Vec3:
        """Map a point from the solid's local space to world space."""
        return _apply(self.matrix, point)

    @property
    def center(self) -> Vec3:
        return self.transform((0.0, 0.0, 0.0))


@dataclass
class Canvas:
    """Records faces and solids drawn under a transform stack."""

    faces: list = field(default_factory=list)
    solids: list = field(default_factory=list)
    current_color: Vec3 = (1.0, 1.0, 1.0)
    texture: Optional[object] = None
    _stack: list = field(default_factory=lambda: [_IDENTITY], repr=False)

    @property
    def matrix(self) -> Matrix:
        return self._stack[-1]

    @contextmanager
    def saved(self) -> Iterator["Canvas"]:
        """Keep the current transform and restore it on exit."""
        self._stack.append(self._stack[-1])
        try:
            yield self
        finally:
            self._stack.pop()

    def _concat(self, matrix: Matrix) -> None:
        self._stack[-1] = _multiply(self._stack[-1], matrix)

    def translate(self, x: float, y: float, z: float) -> None:
        self._concat(((1, 0, 0, x), (0, 1, 0, y), (0, 0, 1, z), (0, 0, 0, 1)))

    def scale(self, x: float, y: float, z: float) -> None:
        self._concat(((x, 0, 0, 0), (0, y, 0, 0), (0, 0, z, 0), (0, 0, 0, 1)))

    def rotate(self, angle: float, x: float, y: float, z: float) -> None:
        """Rotate by ``angle`` degrees about the axis (x, y, z)."""
        length = math.sqrt(x * x + y * y + z * z)
        if length == 0:
            raise ValueError("rotation axis must not be zero")
        x, y, z = x / length, y / length, z / length
        c = math.cos(math.radians(angle))
        s = math.sin(math.radians(angle))
        t = 1 - c
        self._concat((
            (x * x * t + c, x * y * t - z * s, x * z * t + y * s, 0),
            (y * x * t + z * s, y * y * t + c, y * z * t - x * s, 0),
            (x * z * t - y * s, y * z * t + x * s, z * z * t + c, 0),
            (0, 0, 0, 1),
        ))

    def color(self, r: float, g: float, b: float) -> None:
        self.current_color = (r, g, b)

    def bind_texture(self, texture: Optional[object]) -> None:
        self.texture = texture

    def polygon(self, vertices, tex_coords=None, normal=None) -> Face:
        """Record a polygon; texture coordinates, if given, pair with vertices."""
        if tex_coords is not None and len(tex_coords) != len(vertices):
            raise ValueError("each vertex needs one texture coordinate")
        face = Face(
            vertices=tuple(_apply(self.matrix, v) for v in vertices),
            color=self.current_color,
            tex_coords=None if tex_coords is None else tuple(tuple(t) for t in tex_coords),
            normal=None if normal is None else tuple(normal),
            texture=self.texture,
        )
        self.faces.append(face)
        return face

    def _solid(self, kind: str, size: float) -> Solid:
        solid = Solid(kind, size, self.matrix, self.current_color)
        self.solids.append(solid)
        return solid

    def sphere(self, radius: float) -> Solid:
        return self._solid("sphere", radius)

    def cube(self, size: float) -> Solid:
        return self._solid("cube", size)


def draw_cube_with_texture(canvas: Canvas, x: float, h: float, z: float, tex) -> None:
    """Draw the unit cube spanning z in [-1, 0] with repeated texture coordinates."""
    normal = (0, 0, 1)
    sides = (
        (((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)), (h, x)),
        (((0, 0, -1), (1, 0, -1), (1, 1, -1), (0, 1, -1)), (h, x)),
        (((0, 0, 0), (0, 0, -1), (0, 1, -1), (0, 1, 0)), (h, z)),
        (((1, 0, 0), (1, 0, -1), (1, 1, -1), (1, 1, 0)), (h, z)),
        (((0, 1, 0), (1, 1, 0), (1, 1, -1), (0, 1, -1)), (x, z)),
        (((0, 0, 0), (1, 0, 0), (1, 0, -1), (0, 0, -1)), (x, z)),
    )
    canvas.bind_texture(tex)
    for vertices, (s, t) in sides:
        canvas.polygon(vertices, ((0, 0), (s, 0), (s, t), (0, t)), normal)
    canvas.bind_texture(None)


_BUSH_PARTS = (
    ((0.3, 0.6, 0.3), (0, 0, 0), (0.6, 0.4, 0.6)),
    ((0.3, 0.7, 0.3), (0, 0, 0.6), (0.3, 0.3, 0.3)),
    ((0.3, 0.7, 0.3), (0.1, 0, -0.55), (0.3, 0.3, 0.3)),
    ((0.1, 0.3, 0.2), (0.3, 0, -0.55), (0.3, 0.3, 0.3)),
    ((0.3, 0.7, 0.3), (-0.6, 0, 0), (0.2, 0.2, 0.2)),
    ((0.3, 0.7, 0.3), (0.6, 0, 0), (0.3, 0.3, 0.2)),
)


def draw_bush(canvas: Canvas, x: float, y: float, z: float, rot: float) -> None:
    """Draw a bush of six spheres, rotated by ``rot`` degrees about the y axis."""
    with canvas.saved():
        canvas.rotate(rot, 0, 1, 0)
        canvas.translate(x, y, z)
        for color, offset, scale in _BUSH_PARTS:
            with canvas.saved():
                canvas.color(*color)
                canvas.translate(*offset)
                canvas.scale(*scale)
                canvas.sphere(1)


_PREY_LEGS = ((0.05, 0.05), (-0.05, 0.05), (-0.05, -0.05), (0.05, -0.05))


def draw_prey(canvas: Canvas, x: float, y: float, z: float) -> None:
    """Draw a prey animal: body, head, two ears and four legs."""
    with canvas.saved():
        canvas.translate(x, y, z)
        with canvas.saved():
            canvas.scale(0.9, 0.8, 1.1)
            canvas.color(0.8, 0.8, 0.8)
            canvas.sphere(0.1)
        with canvas.saved():
            canvas.translate(0, 0.02, 0.15)
            canvas.scale(0.5, 0.5, 0.5)
            canvas.color(0.25, 0.25, 0.25)
            canvas.sphere(0.1)
        for side in (1, -1):
            with canvas.saved():
                canvas.translate(0.05 * side, 0.02, 0.15)
                canvas.rotate(20 * side, 0, 0, 1)
                canvas.scale(0.2, 0.4, 0.1)
                canvas.color(0.6, 0.6, 0.6)
                canvas.sphere(0.1)
        for lx, lz in _PREY_LEGS:
            with canvas.saved():
                canvas.translate(lx, -0.1, lz)
                canvas.scale(0.02, 0.1, 0.02)
                canvas.color(0.25, 0.25, 0.25)
                canvas.cube(1)


def draw_heart(canvas: Canvas) -> None:
    """Draw a red heart in the unit square of the xy plane."""
    with canvas.saved():
        canvas.color(1, 0, 0)
        canvas.polygon(((0, 0.5, 0), (0.5, 0, 0), (1, 0.5, 0)))
        canvas.polygon(((0, 0.5, 0), (1, 0.5, 0), (1, 0.75, 0), (0, 0.75, 0)))
        canvas.polygon(((0, 0.75, 0), (0.5, 0.75, 0), (0.25, 1, 0)))
        canvas.polygon(((0.5, 0.75, 0), (1, 0.75, 0), (0.75, 1, 0)))


def draw_floor(canvas: Canvas, tex) -> None:
    """Draw the 30 by 30 textured ground slab."""
    with canvas.saved():
        canvas.translate(-15, 1, 15)
        canvas.scale(30, 0.1, 30)
        draw_cube_with_texture(canvas, 30, 1, 30, tex)


def draw_tree(canvas: Canvas, x: float, h: float, z: float, tex) -> None:
    """Draw a tree of height ``h``: a textured trunk and a spherical crown."""
    base = math.floor(h)
    with canvas.saved():
        canvas.translate(x, 0, z)
        with canvas.saved():
            width = base * 0.03
            canvas.scale(width, h, width)
            draw_cube_with_texture(canvas, 1, h, 1, tex)
        with canvas.saved():
            canvas.translate(0, h + 0.5, 0)
            canvas.color(0.2, 0.8, 0.3)
            canvas.scale(base * 0.3, base * 0.3, base * 0.3)
            canvas.sphere(1)