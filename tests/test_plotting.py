import matplotlib.pyplot as plt
import numpy as np
import pytest

from eigenviz.config import VIEW_EXTENT
from eigenviz.matrix_math import Matrix2x2, Vector2
from eigenviz.plotting import (
    create_trajectory_gif,
    describe_eigen,
    draw_frame,
    grid_segments,
    plot_frame,
)
from eigenviz.scene import compute_frame


@pytest.fixture
def rotation_frame():
    return compute_frame(Matrix2x2(0.0, -1.0, 1.0, 0.0), Vector2(2.0, 1.0))


@pytest.fixture
def identity_frame():
    return compute_frame(Matrix2x2(1.0, 0.0, 0.0, 1.0), Vector2(3.0, -3.0))


class TestGridSegments:

    def test_identity_lattice(self):
        x_lines, y_lines = grid_segments(Vector2(1.0, 0.0), Vector2(0.0, 1.0), extent=10)
        assert x_lines.shape == (21, 2, 2)
        assert y_lines.shape == (21, 2, 2)
        # middle x-line runs along the x axis
        np.testing.assert_allclose(x_lines[10], [[-40.0, 0.0], [40.0, 0.0]])
        # last y-line is offset by 10 along x
        np.testing.assert_allclose(y_lines[-1], [[10.0, -40.0], [10.0, 40.0]])

    def test_lines_follow_basis(self):
        bx, by = Vector2(1.0, 1.0), Vector2(-1.0, 2.0)
        x_lines, _ = grid_segments(bx, by, extent=3)
        direction = x_lines[0][1] - x_lines[0][0]
        assert direction[0] * bx.y - direction[1] * bx.x == pytest.approx(0.0)


class TestPlotFrame:

    def test_identity(self, identity_frame):
        fig = plot_frame(identity_frame)
        ax = fig.axes[0]
        assert ax.get_xlim() == (-VIEW_EXTENT, VIEW_EXTENT)
        assert ax.get_ylim() == (-VIEW_EXTENT, VIEW_EXTENT)
        plt.close(fig)

    def test_spiral_is_drawn(self, rotation_frame):
        fig = plot_frame(rotation_frame)
        labels = [line.get_label() for line in fig.axes[0].get_lines()]
        assert any("A^t v" in label for label in labels)
        plt.close(fig)

    def test_toggles(self, rotation_frame):
        fig = plot_frame(rotation_frame, show_grid=False, show_eigs=False, show_spiral=False)
        labels = [line.get_label() for line in fig.axes[0].get_lines()]
        assert not any("A^t v" in label for label in labels)
        plt.close(fig)

    def test_frame_with_error(self):
        frame = compute_frame(Matrix2x2(2.634894976671063, 0.0, 0.0, 2.6348949760450346),
                              Vector2(1.0, 1.0))
        fig, ax = plt.subplots()
        draw_frame(ax, frame)
        assert describe_eigen(frame) == frame.error
        assert "Cannot compute eigenvectors" in frame.error
        plt.close(fig)

    def test_short_vector(self):
        frame = compute_frame(Matrix2x2(0.01, 0.0, 0.0, 0.01), Vector2(0.1, 0.0))
        fig = plot_frame(frame)
        plt.close(fig)


class TestDescribeEigen:

    def test_cases(self, identity_frame, rotation_frame):
        assert describe_eigen(identity_frame).startswith("Real eigenvalues")
        assert describe_eigen(rotation_frame).startswith("Complex eigenvalues")
        defective = compute_frame(Matrix2x2(2.0, 1.0, 0.0, 2.0), Vector2(1.0, 0.0))
        assert describe_eigen(defective).startswith("Repeated eigenvalue")


class TestTrajectoryGif:

    def test_requires_trajectory(self, identity_frame, tmp_path):
        with pytest.raises(ValueError):
            create_trajectory_gif(str(tmp_path / "none.gif"), identity_frame)

    def test_writes_gif(self, rotation_frame, tmp_path):
        path = tmp_path / "spiral.gif"
        create_trajectory_gif(str(path), rotation_frame, fps=20)
        assert path.read_bytes()[:3] == b"GIF"
