"""
Closed-form eigendecomposition of a 2×2 matrix.

Three cases come out of the characteristic polynomial
λ² - trace·λ + det = 0:

- two real eigenvalues (RealDistinct; also used for every diagonal matrix),
- a repeated eigenvalue with a single eigenvector direction (Defective),
- a complex-conjugate pair (ComplexPair), reported through the real and
  imaginary parts of one eigenvalue/eigenvector.

Real eigenvectors are returned pre-scaled by their eigenvalue
(λ · v/‖v‖) because that is the arrow the demo draws.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import List, Tuple, Union

from eigenviz.errors import DegenerateBasisError
from eigenviz.matrix_math import Vector2

logger = logging.getLogger(__name__)


class EigenKind(enum.Enum):
    REAL_DISTINCT = "real_distinct"
    DEFECTIVE = "defective"
    COMPLEX = "complex"


@dataclass(frozen=True)
class RealDistinct:
    eigenvalue1: float
    eigenvalue2: float
    eigenvector1: Vector2
    eigenvector2: Vector2

    kind = EigenKind.REAL_DISTINCT

    @property
    def complex(self) -> bool:
        return False

    @property
    def defective(self) -> bool:
        return False


@dataclass(frozen=True)
class Defective:
    eigenvalue: float
    eigenvector: Vector2

    kind = EigenKind.DEFECTIVE

    @property
    def complex(self) -> bool:
        return False

    @property
    def defective(self) -> bool:
        return True


@dataclass(frozen=True)
class ComplexPair:
    real_value: float
    imag_value: float
    real_vector: Vector2
    imag_vector: Vector2

    kind = EigenKind.COMPLEX

    @property
    def complex(self) -> bool:
        return True

    @property
    def defective(self) -> bool:
        return False


EigenResult = Union[RealDistinct, Defective, ComplexPair]


def _scale_by_eigenvalue(v: Vector2, eigenvalue: float) -> Vector2:
    norm = math.hypot(v.x, v.y)
    return Vector2(eigenvalue * v.x / norm, eigenvalue * v.y / norm)


def calculate_eigenvectors(a11: float, a12: float, a21: float, a22: float) -> EigenResult:
    """
    Eigenvalues and eigenvectors of [[a11, a12], [a21, a22]].

    Raises:
        DegenerateBasisError: the discriminant is negative but both
            off-diagonal entries are zero. Exact arithmetic never gets
            here; float rounding does for near-equal diagonals.
    """
    trace = a11 + a22
    determinant = a11 * a22 - a12 * a21
    discriminant = trace * trace - 4 * determinant
    real_value = trace / 2

    # near-equal diagonal entries can land here through rounding (trace² - 4det ~ -1e-15)
    if discriminant < 0:
        imag_value = math.sqrt(abs(discriminant)) / 2

        # Solve (A - λI)v = 0 with λ = real_value + i·imag_value
        a11_real = a11 - real_value
        a22_real = a22 - real_value
        if a12 != 0:
            real_vector = Vector2(1.0, -a11_real / a12)
            imag_vector = Vector2(0.0, imag_value / a12)
        elif a21 != 0:
            real_vector = Vector2(-a22_real / a21, 1.0)
            imag_vector = Vector2(imag_value / a21, 0.0)
        else:
            raise DegenerateBasisError(
                "Cannot compute eigenvectors for this matrix. "
                "Expected non-zero off-diagonal element."
            )

        result: EigenResult = ComplexPair(real_value, imag_value, real_vector, imag_vector)
        logger.debug("Complex eigenpair: %s", result)
        return result

    root = math.sqrt(discriminant) / 2
    eigenvalue1 = real_value + root
    eigenvalue2 = real_value - root

    if a12 != 0:
        eigenvector1 = Vector2(1.0, (eigenvalue1 - a11) / a12)
        eigenvector2 = Vector2(1.0, (eigenvalue2 - a11) / a12)
        defective = discriminant == 0
    elif a21 != 0:
        eigenvector1 = Vector2((eigenvalue1 - a22) / a21, 1.0)
        eigenvector2 = Vector2((eigenvalue2 - a22) / a21, 1.0)
        defective = discriminant == 0
    else:
        # Diagonal: keep each eigenvalue on its own axis
        eigenvalue1, eigenvalue2 = a11, a22
        eigenvector1 = Vector2(1.0, 0.0)
        eigenvector2 = Vector2(0.0, 1.0)
        defective = False

    eigenvector1 = _scale_by_eigenvalue(eigenvector1, eigenvalue1)
    eigenvector2 = _scale_by_eigenvalue(eigenvector2, eigenvalue2)

    if defective:
        result = Defective(eigenvalue1, eigenvector1)
    else:
        result = RealDistinct(eigenvalue1, eigenvalue2, eigenvector1, eigenvector2)
    logger.debug("Real eigen result: %s", result)
    return result


def eigenvector_segments(result: EigenResult) -> List[Tuple[str, Vector2]]:
    """Labelled arrows to draw from the origin for a given result."""
    if isinstance(result, RealDistinct):
        return [
            (f"λ₁ = {result.eigenvalue1:.2f}", result.eigenvector1),
            (f"λ₂ = {result.eigenvalue2:.2f}", result.eigenvector2),
        ]
    if isinstance(result, Defective):
        return [(f"λ = {result.eigenvalue:.2f} (repeated)", result.eigenvector)]
    return []
