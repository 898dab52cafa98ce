"""
Closed-form 2×2 eigendecomposition, checked against numpy.linalg.

Known values:
- Diagonal matrix: eigenvalues are the diagonal, eigenvectors the axes
- Jordan block [[2, 1], [0, 2]]: one eigenvector direction (defective)
- Rotation by 90°: eigenvalues ±i
"""
import math

import numpy as np
import pytest

from eigenviz.eigen import (
    ComplexPair,
    Defective,
    EigenKind,
    RealDistinct,
    calculate_eigenvectors,
    eigenvector_segments,
)
from eigenviz.errors import DegenerateBasisError, EigenvizError
from eigenviz.matrix_math import Vector2

REAL_MATRICES = [
    (2.0, 1.0, 1.0, 2.0),
    (4.0, 1.0, 2.0, 3.0),
    (1.0, 2.0, 0.0, 3.0),
    (1.0, 0.0, 2.0, 3.0),
    (-1.5, 0.5, 2.0, 0.3),
]

COMPLEX_MATRICES = [
    (0.0, -1.0, 1.0, 0.0),
    (1.0, -2.0, 3.0, 1.0),
    (0.5, -1.5, 1.0, 0.2),
    (-0.3, 2.0, -1.0, 0.1),
]


class TestKnownCases:

    def test_diagonal(self):
        result = calculate_eigenvectors(2.0, 0.0, 0.0, 1.0)
        assert isinstance(result, RealDistinct)
        assert result.kind is EigenKind.REAL_DISTINCT
        assert result.eigenvalue1 == pytest.approx(2.0)
        assert result.eigenvalue2 == pytest.approx(1.0)
        np.testing.assert_allclose(result.eigenvector1, (2.0, 0.0))
        np.testing.assert_allclose(result.eigenvector2, (0.0, 1.0))

    def test_identity_is_not_defective(self):
        result = calculate_eigenvectors(1.0, 0.0, 0.0, 1.0)
        assert isinstance(result, RealDistinct)
        assert not result.defective

    def test_jordan_block_is_defective(self):
        result = calculate_eigenvectors(2.0, 1.0, 0.0, 2.0)
        assert isinstance(result, Defective)
        assert result.defective and not result.complex
        assert result.eigenvalue == pytest.approx(2.0)
        np.testing.assert_allclose(result.eigenvector, (2.0, 0.0))

    def test_quarter_turn(self):
        result = calculate_eigenvectors(0.0, -1.0, 1.0, 0.0)
        assert isinstance(result, ComplexPair)
        assert result.complex
        assert result.kind is EigenKind.COMPLEX
        assert result.real_value == pytest.approx(0.0)
        assert result.imag_value == pytest.approx(1.0)
        np.testing.assert_allclose(result.real_vector, (1.0, 0.0), atol=1e-12)
        np.testing.assert_allclose(result.imag_vector, (0.0, -1.0), atol=1e-12)


class TestRealVsNumpy:

    @pytest.mark.parametrize("m", REAL_MATRICES)
    def test_eigenvalues_match_numpy(self, m):
        result = calculate_eigenvectors(*m)
        theirs = sorted(np.linalg.eigvals(np.array(m).reshape(2, 2)).real)
        ours = sorted([result.eigenvalue1, result.eigenvalue2])
        np.testing.assert_allclose(ours, theirs, atol=1e-10)

    @pytest.mark.parametrize("m", REAL_MATRICES)
    def test_eigenvector_equation(self, m):
        A = np.array(m).reshape(2, 2)
        result = calculate_eigenvectors(*m)
        for lam, vec in ((result.eigenvalue1, result.eigenvector1),
                         (result.eigenvalue2, result.eigenvector2)):
            v = np.array(vec)
            np.testing.assert_allclose(A @ v, lam * v, atol=1e-10)

    @pytest.mark.parametrize("m", REAL_MATRICES)
    def test_eigenvectors_scaled_by_eigenvalue(self, m):
        result = calculate_eigenvectors(*m)
        assert math.hypot(*result.eigenvector1) == pytest.approx(abs(result.eigenvalue1))
        assert math.hypot(*result.eigenvector2) == pytest.approx(abs(result.eigenvalue2))


class TestComplexVsNumpy:

    @pytest.mark.parametrize("m", COMPLEX_MATRICES)
    def test_eigenvalue_matches_numpy(self, m):
        result = calculate_eigenvectors(*m)
        assert isinstance(result, ComplexPair)
        theirs = np.linalg.eigvals(np.array(m).reshape(2, 2))
        assert result.real_value == pytest.approx(theirs[0].real)
        assert result.imag_value == pytest.approx(abs(theirs[0].imag))

    @pytest.mark.parametrize("m", COMPLEX_MATRICES)
    def test_complex_eigenvector_equation(self, m):
        A = np.array(m).reshape(2, 2)
        result = calculate_eigenvectors(*m)
        lam = result.real_value + 1j * result.imag_value
        v = np.array(result.real_vector) + 1j * np.array(result.imag_vector)
        np.testing.assert_allclose(A @ v, lam * v, atol=1e-10)


class TestSegments:

    def test_real_has_two(self):
        assert len(eigenvector_segments(calculate_eigenvectors(2.0, 0.0, 0.0, 1.0))) == 2

    def test_defective_has_one(self):
        segments = eigenvector_segments(calculate_eigenvectors(2.0, 1.0, 0.0, 2.0))
        assert len(segments) == 1
        assert "repeated" in segments[0][0]

    def test_complex_has_none(self):
        assert eigenvector_segments(calculate_eigenvectors(0.0, -1.0, 1.0, 0.0)) == []

    def test_segments_are_vectors(self):
        for _, vec in eigenvector_segments(calculate_eigenvectors(4.0, 1.0, 2.0, 3.0)):
            assert isinstance(vec, Vector2)


# Diagonals that differ only in the last bits: trace² - 4·det rounds to a tiny negative number
NEAR_EQUAL_DIAGONALS = [
    (2.634894976671063, 0.0, 0.0, 2.6348949760450346),
    (-2.5999999999999996, 0.0, 0.0, -2.6),
]


class TestDegenerateBasis:

    @pytest.mark.parametrize("m", NEAR_EQUAL_DIAGONALS)
    def test_rounded_diagonal_raises(self, m):
        with pytest.raises(DegenerateBasisError, match="non-zero off-diagonal"):
            calculate_eigenvectors(*m)

    def test_caught_as_value_error(self):
        with pytest.raises(ValueError):
            calculate_eigenvectors(*NEAR_EQUAL_DIAGONALS[0])


def test_errors_are_value_errors():
    assert issubclass(DegenerateBasisError, EigenvizError)
    assert issubclass(DegenerateBasisError, ValueError)
