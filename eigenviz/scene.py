"""
Everything the linear transform page draws, derived from (matrix, vector).

The page calls `compute_frame` once per rerun and never patches a frame
in place: any edit to the matrix or vector rebuilds grid, vectors,
eigenvectors and spiral together.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from eigenviz.eigen import EigenResult, calculate_eigenvectors
from eigenviz.errors import EigenvizError
from eigenviz.matrix_math import (
    Matrix2x2,
    TransformInfo,
    Vector2,
    calculate_transformation,
    transform_vector,
)
from eigenviz.trajectory import trajectory_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformFrame:
    matrix: Matrix2x2
    vector: Vector2
    transformed: Vector2
    transform: TransformInfo
    eigen: Optional[EigenResult]
    trajectory: Optional[np.ndarray]
    error: Optional[str] = None


def compute_frame(matrix: Matrix2x2, vector: Vector2) -> TransformFrame:
    transform = calculate_transformation(*matrix)
    transformed = transform_vector(matrix, vector)

    eigen: Optional[EigenResult] = None
    trajectory = None
    error = None
    try:
        eigen = calculate_eigenvectors(*matrix)
        # The spiral starts at the current vector v
        trajectory = trajectory_for(eigen, initial_vector=vector)
    except EigenvizError as e:
        logger.warning("Eigen data unavailable for %s: %s", matrix, e)
        error = str(e)

    return TransformFrame(
        matrix=matrix,
        vector=vector,
        transformed=transformed,
        transform=transform,
        eigen=eigen,
        trajectory=trajectory,
        error=error,
    )
