"""
Sampled state trajectories for a matrix with complex eigenvalues
λ = a ± ib and eigenvector u ± iw.

Continuous time:  x(t) = e^{at} (cos(bt) u - sin(bt) w),  t in [0, 1]
Discrete time:    x(t) = A^t x0 via the polar form r e^{iθ} of λ,
                  t in [0, 2π/θ] (one full turn of the spiral).
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np

from eigenviz.config import LINEAR_DEPENDENCE_TOL, TRAJECTORY_POINTS
from eigenviz.eigen import ComplexPair, EigenResult
from eigenviz.errors import LinearlyDependentBasisError
from eigenviz.matrix_math import Vector2


def _sample_times(time_range: float, num_points: int = TRAJECTORY_POINTS) -> np.ndarray:
    return np.arange(num_points + 1) / num_points * time_range


def continuous_time_trajectory(real_value: float,
                               imag_value: float,
                               real_vector: Vector2,
                               imag_vector: Vector2) -> np.ndarray:
    """
    Real part of e^{λt}(u + iw) for t in [0, 1].

    Returns:
        (TRAJECTORY_POINTS + 1, 2) array of points.
    """
    t = _sample_times(1.0)

    exp_part = np.exp(real_value * t)
    cos_part = np.cos(imag_value * t)
    sin_part = np.sin(imag_value * t)

    x = exp_part * (cos_part * real_vector.x - sin_part * imag_vector.x)
    y = exp_part * (cos_part * real_vector.y - sin_part * imag_vector.y)
    return np.column_stack([x, y])


def discrete_trajectory(real_value: float,
                        imag_value: float,
                        real_vector: Vector2,
                        imag_vector: Vector2,
                        initial_vector: Vector2 = Vector2(1.0, 0.0)) -> np.ndarray:
    """
    Smooth trajectory of x_{k+1} = A x_k, interpolated with fractional powers A^t.

    The initial vector is written as alpha·u - beta·w; each step rotates
    the (alpha, beta) coefficients by θ and scales by |λ|.

    Raises:
        LinearlyDependentBasisError: u and w are (numerically) parallel,
            so the initial vector cannot be expressed in their basis.
    """
    magnitude = math.hypot(real_value, imag_value)
    theta = math.atan2(imag_value, real_value)

    det = -real_vector.x * imag_vector.y + real_vector.y * imag_vector.x
    if abs(det) < LINEAR_DEPENDENCE_TOL:
        raise LinearlyDependentBasisError(
            "Real and imaginary eigenvectors are linearly dependent."
        )
    alpha = (-initial_vector.x * imag_vector.y + initial_vector.y * imag_vector.x) / det
    beta = (-initial_vector.x * real_vector.y + initial_vector.y * real_vector.x) / det

    # theta == 0 (real eigenvalue passed in) gives inf/nan samples, not an exception
    t = _sample_times(np.divide(2 * np.pi, theta))

    exp_r = np.power(magnitude, t)
    cos_term = np.cos(theta * t)
    sin_term = np.sin(theta * t)

    coeff_u = alpha * cos_term - beta * sin_term
    coeff_w = -(alpha * sin_term + beta * cos_term)

    x = exp_r * (coeff_u * real_vector.x + coeff_w * imag_vector.x)
    y = exp_r * (coeff_u * real_vector.y + coeff_w * imag_vector.y)
    return np.column_stack([x, y])


def trajectory_for(result: EigenResult,
                   initial_vector: Vector2 = Vector2(1.0, 0.0)) -> Optional[np.ndarray]:
    """Discrete spiral for complex results, None otherwise."""
    if not isinstance(result, ComplexPair):
        return None
    return discrete_trajectory(result.real_value, result.imag_value,
                               result.real_vector, result.imag_vector,
                               initial_vector=initial_vector)
