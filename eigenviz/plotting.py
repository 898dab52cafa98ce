"""
Matplotlib rendering for the linear transform page: transformed grid,
v and Av, eigenvectors, and the complex-eigenvalue spiral.
"""
from __future__ import annotations

import math

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter

from eigenviz.config import GRID_SCALE, MIN_VECTOR_LENGTH, VIEW_EXTENT
from eigenviz.eigen import ComplexPair, Defective, eigenvector_segments
from eigenviz.matrix_math import Vector2
from eigenviz.scene import TransformFrame

X_GRID_COLOR = "red"
Y_GRID_COLOR = "blue"
V_COLOR = "black"
AV_COLOR = "darkorange"
EIGEN_COLOR = "green"
SPIRAL_COLOR = "purple"


def grid_segments(basis_x: Vector2, basis_y: Vector2, extent: float = VIEW_EXTENT):
    """
    Endpoints of the transformed integer lattice lines.

    Returns:
        (x_lines, y_lines), each an array (n_lines, 2, 2) of segment endpoints.
        x_lines run along basis_x and are offset by k*basis_y; y_lines the other way.
    """
    n = int(math.ceil(extent))
    span = 4 * extent
    bx = np.array(basis_x, dtype=float)
    by = np.array(basis_y, dtype=float)
    ks = np.arange(-n, n + 1, dtype=float)

    x_lines = np.stack([
        np.stack([k * by - span * bx, k * by + span * bx]) for k in ks
    ])
    y_lines = np.stack([
        np.stack([k * bx - span * by, k * bx + span * by]) for k in ks
    ])
    return x_lines, y_lines


def _draw_vector(ax, v: Vector2, color, label, linewidth=2.0):
    length_px = math.hypot(v.x, v.y) * GRID_SCALE
    if not np.isfinite(length_px):
        return
    if length_px > MIN_VECTOR_LENGTH:
        ax.arrow(0, 0, v.x, v.y,
                 head_width=0.25,
                 length_includes_head=True,
                 linewidth=linewidth,
                 color=color,
                 label=label)
    else:
        # too short for an arrowhead
        ax.plot([0, v.x], [0, v.y], color=color, linewidth=linewidth, label=label)


def draw_frame(ax,
               frame: TransformFrame,
               show_grid=True,
               show_eigs=True,
               show_spiral=True,
               spiral_upto=None,
               extent: float = VIEW_EXTENT,
               title_suffix=""):
    """
    Draw a single frame on an existing Matplotlib Axes.
    Used both for the Streamlit figure and for the GIF animation.
    """
    ax.clear()

    if show_grid:
        x_lines, y_lines = grid_segments(frame.transform.basis_x, frame.transform.basis_y, extent)
        for seg in x_lines:
            ax.plot(seg[:, 0], seg[:, 1], color=X_GRID_COLOR, linewidth=0.6, alpha=0.35)
        for seg in y_lines:
            ax.plot(seg[:, 0], seg[:, 1], color=Y_GRID_COLOR, linewidth=0.6, alpha=0.35)

    # Axes through origin
    ax.axhline(0, color="black", linewidth=1, alpha=0.5)
    ax.axvline(0, color="black", linewidth=1, alpha=0.5)

    _draw_vector(ax, frame.vector, V_COLOR, f"v = ({frame.vector.x:.1f}, {frame.vector.y:.1f})")
    _draw_vector(ax, frame.transformed, AV_COLOR,
                 f"Av = ({frame.transformed.x:.2f}, {frame.transformed.y:.2f})")

    if show_eigs and frame.eigen is not None:
        for label, vec in eigenvector_segments(frame.eigen):
            _draw_vector(ax, vec, EIGEN_COLOR, f"eigenvector ({label})", linewidth=2.5)

    if show_spiral and frame.trajectory is not None:
        pts = frame.trajectory if spiral_upto is None else frame.trajectory[:spiral_upto + 1]
        ax.plot(pts[:, 0], pts[:, 1], color=SPIRAL_COLOR, linewidth=1.8,
                label="A^t v (one full turn)")
        ax.scatter(pts[-1:, 0], pts[-1:, 1], s=30, color=SPIRAL_COLOR)

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    base_title = "Linear transformation: grid, v, Av, eigenvectors"
    if title_suffix:
        ax.set_title(f"{base_title} {title_suffix}")
    else:
        ax.set_title(base_title)

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(loc="upper left", fontsize="small")


def plot_frame(frame: TransformFrame, **kwargs):
    fig, ax = plt.subplots(figsize=(7, 7))
    draw_frame(ax, frame, **kwargs)
    plt.tight_layout()
    return fig


def describe_eigen(frame: TransformFrame) -> str:
    """Short text summary for the page caption."""
    eig = frame.eigen
    if eig is None:
        return frame.error or "No eigen data."
    if isinstance(eig, ComplexPair):
        return (f"Complex eigenvalues λ = {eig.real_value:.3f} ± {eig.imag_value:.3f}i: "
                "no real eigenvector, the plane spirals.")
    if isinstance(eig, Defective):
        return (f"Repeated eigenvalue λ = {eig.eigenvalue:.3f} with a single "
                "eigenvector direction (defective).")
    return f"Real eigenvalues λ₁ = {eig.eigenvalue1:.3f}, λ₂ = {eig.eigenvalue2:.3f}."


# ---------- Animation generator (GIF) ----------

def create_trajectory_gif(filename,
                          frame: TransformFrame,
                          fps=20,
                          extent: float = VIEW_EXTENT):
    """
    Animate the discrete spiral A^t v being traced over one full turn.
    Saves to 'filename', using PillowWriter (no ffmpeg needed).
    """
    if frame.trajectory is None:
        raise ValueError("Frame has no trajectory (eigenvalues are not complex).")

    fig, ax = plt.subplots(figsize=(7, 7))
    writer = PillowWriter(fps=fps)
    n_points = frame.trajectory.shape[0]

    with writer.saving(fig, filename, dpi=100):
        for i in range(n_points):
            draw_frame(
                ax,
                frame,
                spiral_upto=i,
                extent=extent,
                title_suffix=f"(t step {i}/{n_points - 1})",
            )
            writer.grab_frame()

    plt.close(fig)
