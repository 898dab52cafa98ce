"""
State of the SVD color space page.

One `SVDAppState` lives in st.session_state. Widgets write the raw
inputs (complexities, rank, highlight flags) and then call `regenerate`,
which rebuilds image and SVD from scratch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from eigenviz.config import (
    DEFAULT_COLOR_COMPLEXITY,
    DEFAULT_RANK,
    DEFAULT_SHAPE_COMPLEXITY,
    IMAGE_SIZE,
    MAX_RANK,
)
from eigenviz.image_generator import (
    Shape,
    add_shapes_to_pattern,
    generate_complex_image,
    generate_shapes,
)
from eigenviz.svd_engine import (
    SVDResult,
    compute_image_svd,
    reconstruct_rank_k,
    reconstruct_top_k_channels,
)

logger = logging.getLogger(__name__)


@dataclass
class SVDAppState:
    color_complexity: int = DEFAULT_COLOR_COMPLEXITY
    shape_complexity: int = DEFAULT_SHAPE_COMPLEXITY
    current_rank: int = DEFAULT_RANK
    fixed_shapes: List[Shape] = field(default_factory=list)
    image: Optional[np.ndarray] = None
    svd_result: Optional[SVDResult] = None

    # highlight / hover flags
    hovered_vt_row: int = -1
    hovered_original_image: bool = False
    is_rank_slider_active: bool = False
    show_full_rank_highlight: bool = False


def max_rank(color_complexity: int) -> int:
    """Rank of the generated image: one per palette color, at most 3 channels."""
    return min(color_complexity, MAX_RANK)


def clamp_rank(rank: int, color_complexity: int) -> int:
    return max(0, min(rank, max_rank(color_complexity)))


def reconcile_complexity(old_color: int, old_shape: int,
                         new_color: int, new_shape: int) -> Tuple[int, int, Optional[str]]:
    """
    Keep at least as many shapes as colors.

    Raising the color count above the shape count raises the shapes;
    lowering the shapes below the color count lowers the colors.

    Returns:
        (color_complexity, shape_complexity, notification or None)
    """
    color, shape = new_color, new_shape
    message = None

    if new_color > old_shape and new_color != old_color:
        shape = max(new_shape, new_color)
        message = f"Shape complexity automatically increased to {shape} to support {new_color} colors"

    if new_shape < old_color and new_shape != old_shape:
        color = min(new_color, new_shape)
        message = f"Color complexity automatically decreased to {color} to match {new_shape} shapes"

    if message:
        logger.info(message)
    return color, shape, message


def regenerate(state: SVDAppState, rng: np.random.Generator) -> SVDAppState:
    """Full recompute: shape pool, image, SVD, rank limit."""
    if not state.fixed_shapes:
        state.fixed_shapes = generate_shapes(rng)
    elif len(state.fixed_shapes) < state.shape_complexity:
        state.fixed_shapes = add_shapes_to_pattern(
            state.fixed_shapes, state.shape_complexity - len(state.fixed_shapes), rng
        )

    state.image = generate_complex_image(
        state.color_complexity, state.shape_complexity, state.fixed_shapes
    )
    state.svd_result = compute_image_svd(state.image)
    state.current_rank = clamp_rank(state.current_rank, state.color_complexity)
    logger.debug("Regenerated: colors=%d shapes=%d rank=%d",
                 state.color_complexity, state.shape_complexity, state.current_rank)
    return state


def is_component_active(state: SVDAppState, i: int) -> bool:
    """Whether component i is drawn in color (hovered, inside the active rank, or full highlight)."""
    return (
        state.hovered_vt_row == i
        or (state.is_rank_slider_active and i < state.current_rank)
        or (state.show_full_rank_highlight and i < MAX_RANK)
    )


def displayed_image(state: SVDAppState) -> np.ndarray:
    """
    Image shown in the A panel: the raw top-k channels while the original
    is hovered, otherwise the rank-k SVD reconstruction.
    """
    if state.image is None or state.svd_result is None:
        raise ValueError("State has not been generated yet; call regenerate() first.")
    if state.hovered_original_image:
        return reconstruct_top_k_channels(state.image, state.current_rank)
    return reconstruct_rank_k(state.svd_result, state.current_rank, size=state.image.shape[0])


def image_title(state: SVDAppState) -> str:
    if state.current_rank == max_rank(state.color_complexity):
        return f"Original [{IMAGE_SIZE}×{IMAGE_SIZE}×3]"
    if state.current_rank == 0:
        return f"Zero [{IMAGE_SIZE}×{IMAGE_SIZE}×3]"
    return f"Rank-{state.current_rank} Approximation [{IMAGE_SIZE}×{IMAGE_SIZE}×3]"
