import numpy as np

from eigenviz import scene
from eigenviz.eigen import ComplexPair, RealDistinct
from eigenviz.errors import DegenerateBasisError
from eigenviz.matrix_math import Matrix2x2, Vector2
from eigenviz.scene import compute_frame


class TestComputeFrame:

    def test_identity(self):
        frame = compute_frame(Matrix2x2(1.0, 0.0, 0.0, 1.0), Vector2(3.0, -3.0))
        assert frame.transformed == Vector2(3.0, -3.0)
        assert isinstance(frame.eigen, RealDistinct)
        assert frame.trajectory is None
        assert frame.error is None
        assert frame.transform.determinant == 1.0

    def test_rotation_spiral_starts_at_vector(self):
        frame = compute_frame(Matrix2x2(0.0, -1.0, 1.0, 0.0), Vector2(2.0, 1.0))
        assert isinstance(frame.eigen, ComplexPair)
        assert frame.transformed == Vector2(-1.0, 2.0)
        assert frame.trajectory.shape == (101, 2)
        np.testing.assert_allclose(frame.trajectory[0], (2.0, 1.0), atol=1e-9)

    def test_basis_vectors_follow_matrix(self):
        frame = compute_frame(Matrix2x2(1.0, 2.0, 3.0, 4.0), Vector2(0.0, 0.0))
        assert frame.transform.basis_x == Vector2(1.0, 3.0)
        assert frame.transform.basis_y == Vector2(2.0, 4.0)

    def test_eigen_error_is_recorded(self, monkeypatch):
        def broken(*args):
            raise DegenerateBasisError("no basis")

        monkeypatch.setattr(scene, "calculate_eigenvectors", broken)
        frame = compute_frame(Matrix2x2(1.0, 0.0, 0.0, 1.0), Vector2(1.0, 1.0))
        assert frame.eigen is None
        assert frame.trajectory is None
        assert frame.error == "no basis"
        # the rest of the frame is still usable
        assert frame.transformed == Vector2(1.0, 1.0)

    def test_rounded_diagonal_records_error(self):
        # trace² - 4·det comes out slightly negative for this diagonal
        matrix = Matrix2x2(2.634894976671063, 0.0, 0.0, 2.6348949760450346)
        frame = compute_frame(matrix, Vector2(1.0, -1.0))
        assert frame.eigen is None
        assert frame.trajectory is None
        assert "Expected non-zero off-diagonal element" in frame.error
        np.testing.assert_allclose(frame.transformed, (2.634894976671063, -2.6348949760450346))
        assert frame.transform.determinant > 0
