"""
Linear transformation explorer.

In the web UI:
Edit A by entries or by rotation + scale sliders, move v.
Complex eigenvalues draw the spiral A^t v over one full turn.
Scroll to the bottom and click Generate GIF animation.
"""

import logging
import os

import matplotlib.pyplot as plt
import streamlit as st

from eigenviz.config import (
    MATRIX_STEP,
    SCALE_MAX,
    SCALE_MIN,
    VECTOR_MAX,
    VECTOR_MIN,
)
from eigenviz.eigen import ComplexPair, Defective, RealDistinct
from eigenviz.logging_config import setup_logging
from eigenviz.matrix_math import (
    Matrix2x2,
    Vector2,
    calculate_from_transforms,
    calculate_transformation,
    scales_from_matrix,
)
from eigenviz.plotting import create_trajectory_gif, describe_eigen, plot_frame
from eigenviz.query_params import format_query_params, read_query_params
from eigenviz.scene import compute_frame

logger = logging.getLogger("eigenviz.pages.linear_transform")

GIF_FILENAME = "trajectory_animation.gif"
MATRIX_KEYS = ("a11", "a12", "a21", "a22")


# ---------- Session state sync ----------

def _sync_transform_sliders(matrix: Matrix2x2):
    """Move the rotation/scale sliders to match a directly edited matrix."""
    info = calculate_transformation(*matrix)
    st.session_state.rot_x = min(360.0, info.rotation_x)
    st.session_state.rot_y = min(360.0, info.rotation_y)
    st.session_state.scale_x, st.session_state.scale_y = scales_from_matrix(matrix)


def _set_matrix_inputs(matrix: Matrix2x2):
    for key, value in zip(MATRIX_KEYS, matrix):
        st.session_state[key] = float(value)


def _on_matrix_change():
    matrix = Matrix2x2(*(st.session_state[k] for k in MATRIX_KEYS))
    st.session_state.matrix = matrix
    _sync_transform_sliders(matrix)


def _on_transform_change():
    matrix = calculate_from_transforms(
        st.session_state.rot_x,
        st.session_state.rot_y,
        st.session_state.scale_x,
        st.session_state.scale_y,
    )
    st.session_state.matrix = matrix
    _set_matrix_inputs(matrix)


def _on_vector_change():
    st.session_state.vector = Vector2(st.session_state.v1, st.session_state.v2)


def _init_state():
    if "matrix" not in st.session_state:
        matrix, vector = read_query_params(st.query_params)
        # the vector inputs only cover the visible area
        vector = Vector2(min(VECTOR_MAX, max(VECTOR_MIN, vector.x)),
                         min(VECTOR_MAX, max(VECTOR_MIN, vector.y)))
        st.session_state.matrix = matrix
        st.session_state.vector = vector
        logger.info("Initial state: matrix=%s vector=%s", matrix, vector)

    # widget keys are dropped while another page is shown
    if "a11" not in st.session_state:
        _set_matrix_inputs(st.session_state.matrix)
        _sync_transform_sliders(st.session_state.matrix)
        st.session_state.v1, st.session_state.v2 = st.session_state.vector


# ---------- Streamlit app ----------

def main():
    setup_logging(logging.INFO)
    st.set_page_config(page_title="Linear Transformation & Eigenvectors",
                       layout="wide")

    st.title("2×2 Linear Transformation & Eigenvectors")

    st.write(
        """
        The **red** grid lines are images of horizontal lines and run along the first
        column of $A$; the **blue** ones run along the second column.
        Eigenvectors are drawn as $\\lambda\\,\\hat v$: their length is the eigenvalue.
        """
    )

    _init_state()

    st.sidebar.header("Transformation matrix A")
    st.sidebar.write("Enter the entries of the 2×2 matrix A:")
    c1, c2 = st.sidebar.columns(2)
    with c1:
        st.number_input("a11", step=MATRIX_STEP, key="a11", on_change=_on_matrix_change)
        st.number_input("a21", step=MATRIX_STEP, key="a21", on_change=_on_matrix_change)
    with c2:
        st.number_input("a12", step=MATRIX_STEP, key="a12", on_change=_on_matrix_change)
        st.number_input("a22", step=MATRIX_STEP, key="a22", on_change=_on_matrix_change)

    st.sidebar.markdown("---")
    st.sidebar.header("Rotation + Scaling")
    st.sidebar.slider("x-axis rotation (degrees)", 0.0, 360.0, step=1.0,
                      key="rot_x", on_change=_on_transform_change)
    st.sidebar.slider("y-axis rotation (degrees)", 0.0, 360.0, step=1.0,
                      key="rot_y", on_change=_on_transform_change)
    st.sidebar.slider("x scale", SCALE_MIN, SCALE_MAX, step=0.1,
                      key="scale_x", on_change=_on_transform_change)
    st.sidebar.slider("y scale", SCALE_MIN, SCALE_MAX, step=0.1,
                      key="scale_y", on_change=_on_transform_change)
    st.sidebar.caption(
        "Rotation sliders are a display convenience: angles between 90° and 270° "
        "flip the sign of the diagonal entry, and angles near 90°/270° blow up tan()."
    )

    st.sidebar.markdown("---")
    st.sidebar.header("Vector v")
    v1c, v2c = st.sidebar.columns(2)
    with v1c:
        st.number_input("v1", VECTOR_MIN, VECTOR_MAX, step=0.1, key="v1", on_change=_on_vector_change)
    with v2c:
        st.number_input("v2", VECTOR_MIN, VECTOR_MAX, step=0.1, key="v2", on_change=_on_vector_change)

    st.sidebar.markdown("---")
    show_grid = st.sidebar.checkbox("Show transformed grid", value=True)
    show_eigs = st.sidebar.checkbox("Show eigenvectors", value=True)
    show_spiral = st.sidebar.checkbox("Show Aᵗv spiral (complex case)", value=True)

    matrix = st.session_state.matrix
    vector = st.session_state.vector

    # Full recompute on every rerun
    frame = compute_frame(matrix, vector)
    st.query_params.from_dict(format_query_params(matrix, vector))

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("Visualization")
        fig = plot_frame(frame,
                         show_grid=show_grid,
                         show_eigs=show_eigs,
                         show_spiral=show_spiral)
        st.pyplot(fig, width="stretch")
        plt.close(fig)

    with col2:
        st.subheader("Matrix A")
        st.latex(
            r"""
            A =
            \begin{bmatrix}
            %.3f & %.3f \\
            %.3f & %.3f
            \end{bmatrix},\quad
            \det A = %.3f
            """ % (matrix.a11, matrix.a12, matrix.a21, matrix.a22,
                   frame.transform.determinant)
        )

        st.latex(
            r"""
            A\mathbf{v} =
            \begin{bmatrix} %.3f \\ %.3f \end{bmatrix}
            """ % (frame.transformed.x, frame.transformed.y)
        )

        st.latex(
            r"""
            \theta_x \approx %.1f^\circ,\quad
            \theta_y \approx %.1f^\circ
            """ % (frame.transform.rotation_x, frame.transform.rotation_y)
        )

        st.subheader("Eigen analysis")
        if frame.error:
            st.error(frame.error)
        st.write(describe_eigen(frame))

        eig = frame.eigen
        if isinstance(eig, RealDistinct):
            st.latex(
                r"""
                \lambda_1 \hat v_1 = (%.3f,\ %.3f),\quad
                \lambda_2 \hat v_2 = (%.3f,\ %.3f)
                """ % (eig.eigenvector1.x, eig.eigenvector1.y,
                       eig.eigenvector2.x, eig.eigenvector2.y)
            )
        elif isinstance(eig, Defective):
            st.latex(
                r"""
                \lambda \hat v = (%.3f,\ %.3f)
                """ % (eig.eigenvector.x, eig.eigenvector.y)
            )
        elif isinstance(eig, ComplexPair):
            st.latex(
                r"""
                \mathbf{u} = (%.3f,\ %.3f),\quad
                \mathbf{w} = (%.3f,\ %.3f)
                """ % (eig.real_vector.x, eig.real_vector.y,
                       eig.imag_vector.x, eig.imag_vector.y)
            )
            st.markdown(
                r"""
With $\lambda = a + ib = r e^{i\theta}$ and eigenvector $\mathbf{u} + i\mathbf{w}$,
write $\mathbf{v} = \alpha\mathbf{u} - \beta\mathbf{w}$. Then

$$
A^t \mathbf{v} = r^t\big[(\alpha\cos\theta t - \beta\sin\theta t)\,\mathbf{u}
 - (\alpha\sin\theta t + \beta\cos\theta t)\,\mathbf{w}\big],
$$

and $t \in [0, 2\pi/\theta]$ traces one full turn of the spiral.
"""
            )

    st.markdown("---")
    st.caption(
        "Share this view: the URL holds the current matrix and vector "
        "(?matrix=a11,a12,a21,a22&vector=v1,v2)."
    )

    # ---------- GIF generation section ----------
    st.markdown("## GIF animation of the spiral")

    if frame.trajectory is None:
        st.info("The spiral only exists when the eigenvalues are complex.")
    elif st.button(f"Generate GIF animation ({GIF_FILENAME})"):
        with st.spinner("Generating GIF animation (this may take a bit)..."):
            try:
                create_trajectory_gif(GIF_FILENAME, frame, fps=20)
                st.success(f"Animation saved as {GIF_FILENAME}")
            except Exception as e:
                logger.exception("GIF generation failed")
                st.error(f"Failed to create animation. Error: {e}")

    if frame.trajectory is not None and os.path.exists(GIF_FILENAME):
        c1, c2, c3 = st.columns([1, 2, 1])
        with c2:
            st.image(GIF_FILENAME)


if __name__ == "__main__":
    main()
