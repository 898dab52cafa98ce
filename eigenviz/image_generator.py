"""
Synthetic 100×100 RGB test image for the SVD color space demo.

A fixed pool of up to MAX_SHAPES shapes (position, size, rotation) is
drawn once per session; colors are reassigned cyclically from the first
`color_complexity` palette entries every time the image is regenerated,
so changing the palette never moves the shapes.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from eigenviz.config import COLORS, IMAGE_SIZE, MAX_SHAPES, SHAPE_TYPES

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
WHITE: RGB = (255, 255, 255)


@dataclass(frozen=True)
class Shape:
    shape_type: str
    x: int
    y: int
    size: int
    rotation: float              # radians, only used by polygons
    color: Optional[RGB] = None  # assigned at draw time


def _random_shape(index: int, rng: np.random.Generator, image_size: int = IMAGE_SIZE) -> Shape:
    return Shape(
        shape_type=SHAPE_TYPES[index % len(SHAPE_TYPES)],
        x=int(rng.integers(0, image_size - 40)) + 20,
        y=int(rng.integers(0, image_size - 40)) + 20,
        size=int(rng.integers(0, 20)) + 15,
        rotation=float(rng.uniform(0.0, 2 * math.pi)),
    )


def generate_shapes(rng: np.random.Generator, image_size: int = IMAGE_SIZE) -> List[Shape]:
    """Always MAX_SHAPES uncolored shapes with random placement."""
    return [_random_shape(i, rng, image_size) for i in range(MAX_SHAPES)]


def add_shapes_to_pattern(shapes: List[Shape], count: int, rng: np.random.Generator,
                          image_size: int = IMAGE_SIZE) -> List[Shape]:
    """Append up to `count` new shapes without growing the pool past MAX_SHAPES."""
    shapes = list(shapes)
    added = 0
    while added < count and len(shapes) < MAX_SHAPES:
        shapes.append(_random_shape(len(shapes), rng, image_size))
        added += 1
    if added:
        logger.debug("Added %d shapes to the pattern (now %d)", added, len(shapes))
    return shapes


def get_color_palette(complexity: int) -> List[RGB]:
    return list(COLORS[:min(complexity, len(COLORS))])


def assign_colors_to_fixed_shapes(shapes: Sequence[Shape], colors: Sequence[RGB],
                                  shape_complexity: int) -> List[Shape]:
    active = shapes[:min(shape_complexity, len(shapes))]
    return [
        replace(shape, color=tuple(colors[i % len(colors)]) if colors else WHITE)
        for i, shape in enumerate(active)
    ]


# -----------------------------
# Rasterization
# -----------------------------
def _fill_rect(mask: np.ndarray, x: float, y: float, width: float, height: float) -> None:
    n_rows, n_cols = mask.shape
    r0 = max(0, math.floor(y))
    r1 = min(n_rows, math.ceil(y + height))
    c0 = max(0, math.floor(x))
    c1 = min(n_cols, math.ceil(x + width))
    if r1 > r0 and c1 > c0:
        mask[r0:r1, c0:c1] = True


def shape_mask(shape: Shape, image_size: int = IMAGE_SIZE) -> np.ndarray:
    """Boolean (image_size, image_size) mask of the pixels a shape covers."""
    ii, jj = np.mgrid[0:image_size, 0:image_size].astype(float)
    cx, cy, size = float(shape.x), float(shape.y), float(shape.size)
    dx = jj - cx
    dy = ii - cy
    dist = np.sqrt(dx ** 2 + dy ** 2)
    kind = shape.shape_type

    if kind == "circle":
        return dist <= size

    if kind == "triangle":
        # right triangle with the right angle at (cx, cy)
        return (dx >= 0) & (dy >= 0) & (dx < size - dy) & (dy < size)

    if kind == "diamond":
        return np.abs(dx) + np.abs(dy) <= size

    if kind in ("pentagon", "hexagon"):
        sides = 5 if kind == "pentagon" else 6
        angle = np.arctan2(dy, dx) + shape.rotation
        sector = 2 * math.pi / sides
        # fmod keeps the sign of the angle (truncated remainder)
        # a zero cosine gives an infinite radius, which the mask treats as inside
        with np.errstate(divide="ignore"):
            radius = (size * math.cos(math.pi / sides)
                      / np.cos(np.fmod(angle, sector) - math.pi / sides))
        return (dist <= np.abs(radius)) & (dist <= size)

    if kind == "star":
        angle = np.arctan2(dy, dx)
        star_angle = np.mod(angle + math.pi, 2 * math.pi / 5) - math.pi / 5
        radius = size * (0.5 + 0.5 * np.cos(5 * star_angle))
        return dist <= radius

    if kind == "ellipse":
        return (dx / size) ** 2 + (dy / (size * 0.7)) ** 2 <= 1

    if kind == "heart":
        hx = dx / size
        hy = dy / size
        r2 = hx * hx + hy * hy
        return ((r2 - 1) ** 3 - hx * hx * hy ** 3 <= 0) & (r2 <= 2)

    mask = np.zeros((image_size, image_size), dtype=bool)
    if kind == "rectangle":
        _fill_rect(mask, shape.x, shape.y, shape.size, shape.size)
    elif kind == "cross":
        thickness = max(3, math.floor(size / 4))
        _fill_rect(mask, math.floor(cx - size), math.floor(cy - thickness / 2),
                   math.floor(size * 2), math.floor(thickness))
        _fill_rect(mask, math.floor(cx - thickness / 2), math.floor(cy - size),
                   math.floor(thickness), math.floor(size * 2))
    else:
        raise ValueError(f"Unknown shape type: {kind!r}")
    return mask


def draw_shapes(img: np.ndarray, shapes: Sequence[Shape]) -> np.ndarray:
    """Paint shapes in order; later shapes cover earlier ones."""
    image_size = img.shape[0]
    for shape in shapes:
        color = shape.color if shape.color is not None else WHITE
        img[shape_mask(shape, image_size)] = color
    return img


def generate_complex_image(color_complexity: int, shape_complexity: int,
                           fixed_shapes: Sequence[Shape],
                           image_size: int = IMAGE_SIZE) -> np.ndarray:
    """
    Black background plus the first `shape_complexity` fixed shapes,
    colored from a palette of `color_complexity` colors.

    Returns:
        uint8 array (image_size, image_size, 3)
    """
    img = np.zeros((image_size, image_size, 3), dtype=np.uint8)
    colors = get_color_palette(color_complexity)
    shapes = assign_colors_to_fixed_shapes(fixed_shapes, colors, shape_complexity)
    draw_shapes(img, shapes)
    logger.debug("Generated image: %d shapes, %d colors", len(shapes), len(colors))
    return img
