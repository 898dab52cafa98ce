# pages/2_SVD_Color_Space.py
# SVD of an image in color space:
#
#   - A synthetic 100×100 image of colored shapes is flattened to a (10000 × 3) matrix A
#     (pixels are rows, R/G/B are columns, values in [0, 1]).
#   - A = U Σ Vᵀ with at most 3 components. Rows of Vᵀ are color axes, columns of U say
#     where in the image each axis is used, Σ says how much.
#   - The rank slider rebuilds A from the first k components.
#   - "Raw RGB channels" mode keeps the k channels with the largest standard deviation
#     instead, for comparison.
#
# Dependencies: streamlit, numpy, plotly, pillow, imageio

from __future__ import annotations

import dataclasses
import logging
import os

import numpy as np
import streamlit as st

from eigenviz.colors import component_color, dominant_color_name, label_color, rgb_to_hex
from eigenviz.config import (
    CANVAS_SIZE,
    DEFAULT_COLOR_COMPLEXITY,
    DEFAULT_RANK,
    DEFAULT_SHAPE_COMPLEXITY,
    IMAGE_SIZE,
    MAX_COLORS,
    MAX_RANK,
    MAX_SHAPES,
    U_CANVAS_SIZE,
)
from eigenviz.logging_config import setup_logging
from eigenviz.state import (
    SVDAppState,
    clamp_rank,
    displayed_image,
    image_title,
    is_component_active,
    max_rank,
    reconcile_complexity,
    regenerate,
)
from eigenviz.svd_engine import (
    active_channels,
    channel_std_devs,
    component_image,
    energy_kept,
    rank_channels_by_std,
    rank_k_rgb_at,
    top_k_channel_rgb_at,
    u_column_heatmap,
)
from eigenviz.svd_plots import (
    create_rank_gif,
    fig_channel_std,
    fig_sigma,
    fig_vt,
    png_bytes,
    upscale,
)

setup_logging(logging.INFO)
logger = logging.getLogger("eigenviz.pages.svd_color_space")

GIF_FILENAME = "svd_rank_animation.gif"
MODE_SVD = "SVD rank-k"
MODE_RGB = "Raw RGB channels (top-k by std dev)"


# -----------------------------
# Cached generation
# -----------------------------
@st.cache_data(show_spinner=False)
def build_state(color_complexity: int, shape_complexity: int, rank: int, seed: int) -> SVDAppState:
    """Full recompute for one set of inputs; the shape layout depends only on the seed."""
    state = SVDAppState(
        color_complexity=color_complexity,
        shape_complexity=shape_complexity,
        current_rank=rank,
    )
    return regenerate(state, np.random.default_rng(seed))


# -----------------------------
# Widget callbacks
# -----------------------------
def _on_complexity_change():
    color, shape, message = reconcile_complexity(
        st.session_state.prev_color,
        st.session_state.prev_shape,
        st.session_state.color_complexity,
        st.session_state.shape_complexity,
    )
    st.session_state.color_complexity = color
    st.session_state.shape_complexity = shape
    st.session_state.prev_color = color
    st.session_state.prev_shape = shape
    if message:
        st.session_state.pending_toast = message


def _init_state():
    # widget keys are dropped while another page is shown; restore them from the last values
    defaults = {
        "color_complexity": st.session_state.get("prev_color", DEFAULT_COLOR_COMPLEXITY),
        "shape_complexity": st.session_state.get("prev_shape", DEFAULT_SHAPE_COMPLEXITY),
        "prev_color": DEFAULT_COLOR_COMPLEXITY,
        "prev_shape": DEFAULT_SHAPE_COMPLEXITY,
        "rank": DEFAULT_RANK,
        "seed": 0,
        "pending_toast": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


# -----------------------------
# Streamlit UI
# -----------------------------
st.set_page_config(page_title="SVD Color Space", layout="wide")
st.title("SVD Color Space: A = U Σ Vᵀ on pixels × RGB")

st.caption(
    "Each pixel is a row (r, g, b). Vᵀ holds the color axes, U says where each axis is "
    "used, Σ says how much. Rebuilding from k components gives the rank-k image."
)

_init_state()

if st.session_state.pending_toast:
    st.toast(st.session_state.pending_toast)
    st.session_state.pending_toast = None

with st.sidebar:
    st.header("Image")
    st.slider("Color complexity", 1, MAX_COLORS, key="color_complexity",
              on_change=_on_complexity_change)
    st.slider("Shape complexity", 1, MAX_SHAPES, key="shape_complexity",
              on_change=_on_complexity_change)
    st.number_input("Shape layout seed", min_value=0, step=1, key="seed",
                    help="A new seed draws a new set of shape positions, sizes and rotations.")

    st.header("Reconstruction")
    rank_limit = max_rank(st.session_state.color_complexity)
    st.session_state.rank = clamp_rank(st.session_state.rank, st.session_state.color_complexity)
    st.slider("Rank k", 0, rank_limit, key="rank")
    mode = st.radio("Reconstruction mode", [MODE_SVD, MODE_RGB], index=0)

    st.header("Highlight")
    highlight_choice = st.selectbox(
        "Highlight one component",
        ["None"] + [str(i + 1) for i in range(MAX_RANK)],
        index=0,
    )
    rank_highlight = st.checkbox("Highlight components inside the rank", value=False)
    full_highlight = st.checkbox("Highlight all components", value=False)

base_state = build_state(
    st.session_state.color_complexity,
    st.session_state.shape_complexity,
    st.session_state.rank,
    int(st.session_state.seed),
)
state = dataclasses.replace(
    base_state,
    hovered_vt_row=-1 if highlight_choice == "None" else int(highlight_choice) - 1,
    hovered_original_image=(mode == MODE_RGB),
    is_rank_slider_active=rank_highlight,
    show_full_rank_highlight=full_highlight,
)
svd = state.svd_result
n_comp = svd.n_components
active = [is_component_active(state, i) for i in range(n_comp)]

# ---- Row 1: original + reconstruction ----
c_orig, c_rec, c_info = st.columns([1, 1, 1])

with c_orig:
    st.subheader(f"Original [{IMAGE_SIZE}×{IMAGE_SIZE}×3]")
    st.image(upscale(state.image, CANVAS_SIZE))

with c_rec:
    shown = displayed_image(state)
    if mode == MODE_RGB:
        st.subheader(f"Top-{state.current_rank} RGB channels")
    else:
        st.subheader(image_title(state))
    st.image(upscale(shown, CANVAS_SIZE))
    st.download_button(
        "Download PNG",
        data=png_bytes(shown),
        file_name=f"svd_rank{state.current_rank}.png",
        mime="image/png",
    )

with c_info:
    st.subheader("How much is kept")
    if mode == MODE_RGB:
        ranked = rank_channels_by_std(state.image)
        st.write("Channels by standard deviation:")
        st.table({"channel": [name for name, _ in ranked],
                  "std dev": [round(std, 2) for _, std in ranked]})
    else:
        st.metric(f"Energy kept (k={state.current_rank})",
                  f"{100 * energy_kept(svd.sigma, state.current_rank):.1f}%")
        st.write(f"Image rank ≤ min(colors, 3) = {rank_limit}")

st.markdown("---")

# ---- Row 2: U columns ----
st.subheader("U columns: where each color axis is used")
u_cols = st.columns(n_comp)
for i in range(n_comp):
    with u_cols[i]:
        color_hex = rgb_to_hex(label_color(component_color(svd.VT[i])))
        st.markdown(
            f"<span style='color:{color_hex}; font-weight:bold'>u{i + 1}</span> "
            f"({dominant_color_name(svd.VT[i])})",
            unsafe_allow_html=True,
        )
        if active[i]:
            st.image(upscale(component_image(svd, i), U_CANVAS_SIZE),
                     caption=f"σ{i + 1} u{i + 1} v{i + 1}ᵀ")
        else:
            st.image(upscale(u_column_heatmap(svd, i), U_CANVAS_SIZE),
                     caption=f"u{i + 1} (grayscale)")

# ---- Row 3: Σ and Vᵀ ----
c_sigma, c_vt = st.columns(2)
with c_sigma:
    if mode == MODE_RGB:
        st.subheader("Channel standard deviations")
        st.plotly_chart(fig_channel_std(channel_std_devs(state.image)), use_container_width=True)
    else:
        st.subheader("Σ (singular values)")
        st.plotly_chart(fig_sigma(svd, active), use_container_width=True)

with c_vt:
    st.subheader("Vᵀ (color axes)")
    st.plotly_chart(fig_vt(svd.VT, active), use_container_width=True)

st.markdown("---")

# ---- Pixel inspector ----
st.subheader("Pixel inspector")
px_col, py_col, out_col = st.columns([1, 1, 2])
with px_col:
    px = st.slider("x (column)", 0, IMAGE_SIZE - 1, IMAGE_SIZE // 2)
with py_col:
    py = st.slider("y (row)", 0, IMAGE_SIZE - 1, IMAGE_SIZE // 2)
with out_col:
    if mode == MODE_RGB:
        rgb = top_k_channel_rgb_at(state.image, state.current_rank, px, py)
    else:
        rgb = rank_k_rgb_at(svd, state.current_rank, px, py)
    channels = active_channels(rgb)
    original = tuple(int(v) for v in state.image[py, px])
    st.markdown(
        f"Original: `{original}`  \n"
        f"Reconstruction: `{rgb}` "
        f"<span style='display:inline-block;width:14px;height:14px;"
        f"background:{rgb_to_hex(rgb)};border:1px solid #999'></span>  \n"
        f"Active channels: **{', '.join(channels) if channels else 'none'}**",
        unsafe_allow_html=True,
    )

st.markdown("---")

# ---- Rank animation ----
st.markdown("## GIF animation of rank 0 → full")
if st.button(f"Generate GIF animation ({GIF_FILENAME})"):
    with st.spinner("Generating GIF animation..."):
        try:
            create_rank_gif(GIF_FILENAME, svd, rank_limit)
            st.success(f"Animation saved as {GIF_FILENAME}")
        except Exception as e:
            logger.exception("Rank GIF generation failed")
            st.error(f"Failed to create animation. Error: {e}")

if os.path.exists(GIF_FILENAME):
    st.image(GIF_FILENAME)
