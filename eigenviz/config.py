"""
Configuration constants
=======================
Fixed options for both demos. Nothing here is read from disk; the pages
import these values directly.
"""
from typing import Tuple

# -----------------------------
# Linear transform demo
# -----------------------------
SVG_WIDTH: int = 400
SVG_HEIGHT: int = 400
CENTER_X: int = 200
CENTER_Y: int = 200

GRID_BASE_SPACING: int = 20
GRID_SCALE: int = 20  # pixels per unit

ARROWHEAD_LENGTH: int = 3
MIN_VECTOR_LENGTH: int = 5

MATRIX_MIN: float = -3.0
MATRIX_MAX: float = 3.0
MATRIX_STEP: float = 0.1

SCALE_MIN: float = 0.1
SCALE_MAX: float = 3.0

# Half the drawing area, in plane units
VIEW_EXTENT: float = SVG_WIDTH / 2 / GRID_SCALE
VECTOR_MIN: float = -VIEW_EXTENT
VECTOR_MAX: float = VIEW_EXTENT

DEFAULT_MATRIX: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0)
DEFAULT_VECTOR: Tuple[float, float] = (3.0, -3.0)

TRAJECTORY_POINTS: int = 100  # samples are 0..TRAJECTORY_POINTS inclusive
LINEAR_DEPENDENCE_TOL: float = 1e-10

# -----------------------------
# SVD color space demo
# -----------------------------
IMAGE_SIZE: int = 100
CANVAS_SIZE: int = 200
U_CANVAS_SIZE: int = 120

MAX_COLORS: int = 10
MAX_SHAPES: int = 10
MAX_RANK: int = 3

DEFAULT_COLOR_COMPLEXITY: int = 3
DEFAULT_SHAPE_COMPLEXITY: int = 3
DEFAULT_RANK: int = 3

# Minimum channel value that counts as "contributing" at a hovered pixel
HOVER_THRESHOLD: int = 0

COLORS: Tuple[Tuple[int, int, int], ...] = (
    (255, 0, 0),      # Red
    (0, 255, 0),      # Green
    (0, 0, 255),      # Blue
    (255, 255, 0),    # Yellow
    (255, 0, 255),    # Magenta
    (0, 255, 255),    # Cyan
    (255, 128, 0),    # Orange
    (128, 0, 255),    # Purple
    (255, 192, 203),  # Pink
    (128, 255, 0),    # Lime
)

SHAPE_TYPES: Tuple[str, ...] = (
    "circle",
    "rectangle",
    "triangle",
    "diamond",
    "pentagon",
    "hexagon",
    "star",
    "ellipse",
    "cross",
    "heart",
)

CHANNEL_NAMES: Tuple[str, str, str] = ("R", "G", "B")
