"""
Plotly figures and raster helpers for the SVD color space page.
"""
from __future__ import annotations

import io
from typing import Sequence

import imageio.v2 as imageio
import numpy as np
import plotly.graph_objects as go
from PIL import Image

from eigenviz.colors import component_color, dominant_color_name, rgb_css
from eigenviz.config import CANVAS_SIZE, CHANNEL_NAMES, IMAGE_SIZE
from eigenviz.svd_engine import SVDResult, reconstruct_rank_k

INACTIVE_BAR = "#999999"
CHANNEL_COLORS = ("#e74c3c", "#27ae60", "#3498db")


def upscale(image: np.ndarray, size: int = CANVAS_SIZE) -> Image.Image:
    """Nearest-neighbour resize so single pixels stay crisp."""
    arr = np.asarray(image, dtype=np.uint8)
    return Image.fromarray(arr).resize((size, size), Image.Resampling.NEAREST)


def png_bytes(image: np.ndarray) -> bytes:
    buf = io.BytesIO()
    upscale(image, size=np.asarray(image).shape[0]).save(buf, format="PNG")
    return buf.getvalue()


def fig_sigma(svd: SVDResult, active: Sequence[bool], height: int = 300) -> go.Figure:
    """Singular values as bars; active components take the color of their VT row."""
    xs = [f"σ{i + 1}" for i in range(svd.n_components)]
    colors = [
        rgb_css(component_color(svd.VT[i])) if active[i] else INACTIVE_BAR
        for i in range(svd.n_components)
    ]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=xs, y=svd.sigma,
        marker_color=colors,
        text=[f"{s:.1f}" for s in svd.sigma],
        textposition="outside",
        name="σ",
    ))
    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=10, b=10),
        yaxis_title="singular value",
        showlegend=False,
    )
    return fig


def fig_channel_std(stds: Sequence[float], height: int = 300) -> go.Figure:
    """Per-channel standard deviation, the raw-RGB counterpart of the σ chart."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[f"σ{name}" for name in CHANNEL_NAMES],
        y=list(stds),
        marker_color=list(CHANNEL_COLORS),
        text=[f"{s:.1f}" for s in stds],
        textposition="outside",
    ))
    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=10, b=10),
        yaxis_title="standard deviation [0-255]",
        showlegend=False,
    )
    return fig


def fig_vt(VT: np.ndarray, active: Sequence[bool], height: int = 300) -> go.Figure:
    """VT as an annotated heatmap, rows labelled with their dominant color."""
    row_labels = [
        f"v{i + 1}ᵀ ({dominant_color_name(VT[i])})" + (" ●" if active[i] else "")
        for i in range(VT.shape[0])
    ]
    fig = go.Figure(data=go.Heatmap(
        z=VT,
        x=list(CHANNEL_NAMES),
        y=row_labels,
        colorscale="RdBu",
        zmid=0,
        text=np.round(VT, 3),
        texttemplate="%{text}",
        showscale=False,
    ))
    fig.update_yaxes(autorange="reversed")
    fig.update_layout(height=height, margin=dict(l=10, r=10, t=10, b=10))
    return fig


def create_rank_gif(filename, svd: SVDResult, max_rank: int,
                    size: int = IMAGE_SIZE, display_size: int = CANVAS_SIZE,
                    fps=1.0):
    """Animated GIF stepping through the rank-0 .. rank-max reconstructions."""
    frames = [
        np.asarray(upscale(reconstruct_rank_k(svd, k, size=size), display_size))
        for k in range(max_rank + 1)
    ]
    imageio.mimsave(filename, frames, duration=1000.0 / fps, loop=0)
