"""
Conversions between the three ways a 2×2 matrix is edited in the
linear transform demo: raw entries, basis vectors (the matrix columns),
and per-axis rotation angles plus scale factors.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np

from eigenviz.config import SCALE_MAX, SCALE_MIN


class Vector2(NamedTuple):
    x: float
    y: float


class Matrix2x2(NamedTuple):
    """Row-major 2×2 matrix [[a11, a12], [a21, a22]]."""
    a11: float
    a12: float
    a21: float
    a22: float

    @property
    def determinant(self) -> float:
        return self.a11 * self.a22 - self.a12 * self.a21

    @property
    def trace(self) -> float:
        return self.a11 + self.a22

    def apply(self, v: Vector2) -> Vector2:
        return transform_vector(self, v)

    def as_array(self) -> np.ndarray:
        return np.array([[self.a11, self.a12],
                         [self.a21, self.a22]], dtype=float)

    @classmethod
    def from_array(cls, A: np.ndarray) -> "Matrix2x2":
        A = np.asarray(A, dtype=float)
        return cls(float(A[0, 0]), float(A[0, 1]), float(A[1, 0]), float(A[1, 1]))


@dataclass(frozen=True)
class TransformInfo:
    basis_x: Vector2
    basis_y: Vector2
    rotation_x: float     # degrees, [0, 360)
    rotation_y: float     # degrees, [0, 360)
    determinant: float


def extract_basis_vectors(a11: float, a12: float, a21: float, a22: float) -> Tuple[Vector2, Vector2]:
    """
    Return (basis_x, basis_y): the images of the x and y unit vectors,
    i.e. the first and second matrix columns.
    """
    basis_x = Vector2(a11, a21)
    basis_y = Vector2(a12, a22)
    return basis_x, basis_y


def _normalize_degrees(angle: float) -> float:
    if angle < 0:
        angle += 360
    return angle


def calculate_transformation(a11: float, a12: float, a21: float, a22: float) -> TransformInfo:
    """
    Rotation angles and determinant of a 2×2 matrix, for the slider display.

    rotation_x is measured clockwise from +x to the first column,
    rotation_y clockwise from +y to the second column. A zero-length
    column yields 0 (atan2(0, 0) == 0).
    """
    det = a11 * a22 - a12 * a21
    basis_x, basis_y = extract_basis_vectors(a11, a12, a21, a22)

    rotation_x = -math.degrees(math.atan2(basis_x.y, basis_x.x))
    rotation_y = math.degrees(math.atan2(basis_y.x, basis_y.y))

    return TransformInfo(
        basis_x=basis_x,
        basis_y=basis_y,
        rotation_x=_normalize_degrees(rotation_x),
        rotation_y=_normalize_degrees(rotation_y),
        determinant=det,
    )


def calculate_from_transforms(x_rotation: float, y_rotation: float,
                              x_scale: float, y_scale: float) -> Matrix2x2:
    """
    Matrix entries from per-axis rotation angles (degrees) and scales.

    The scale sliders are non-negative, so the sign of a11 (a22) flips
    while the x (y) rotation lies in [90, 270). tan() is not clamped:
    angles near 90/270 give very large or infinite off-diagonal entries.
    """
    theta_x = math.radians(x_rotation)
    theta_y = math.radians(y_rotation)

    a11_sign = -1 if 90 <= x_rotation < 270 else 1
    a22_sign = -1 if 90 <= y_rotation < 270 else 1

    a11 = a11_sign * x_scale
    a21 = -math.tan(theta_x) * a11
    a22 = a22_sign * y_scale
    a12 = math.tan(theta_y) * a22

    return Matrix2x2(a11, a12, a21, a22)


def scales_from_matrix(matrix: Matrix2x2) -> Tuple[float, float]:
    """Scale slider positions for a directly edited matrix, clamped to the slider range."""
    scale_x = min(SCALE_MAX, max(SCALE_MIN, abs(matrix.a11)))
    scale_y = min(SCALE_MAX, max(SCALE_MIN, abs(matrix.a22)))
    return scale_x, scale_y


def transform_vector(matrix: Matrix2x2, v: Vector2) -> Vector2:
    """Av = [a11*v1 + a12*v2, a21*v1 + a22*v2]."""
    return Vector2(matrix.a11 * v.x + matrix.a12 * v.y,
                   matrix.a21 * v.x + matrix.a22 * v.y)
