"""
SVD of an image treated as a (pixels × 3) color matrix.

Each pixel is a row [r, g, b] scaled to [0, 1]. The rows of VT are the
principal color axes, the columns of U the per-pixel activations of
those axes, and sigma their weights. Reconstruction with the first k
components gives the rank-k color approximation shown in the demo.

A second, non-SVD path (`reconstruct_top_k_channels`) keeps the k raw
RGB channels with the largest spread. It is shown side by side with the
SVD path for comparison and shares no data with it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from eigenviz.config import CHANNEL_NAMES, HOVER_THRESHOLD, IMAGE_SIZE

logger = logging.getLogger(__name__)


@dataclass
class SVDResult:
    U: np.ndarray        # (n_pixels, 3)
    sigma: np.ndarray    # (3,)
    VT: np.ndarray       # (3, 3)

    @property
    def n_components(self) -> int:
        return int(self.sigma.shape[0])


def safe_uint8(arr: np.ndarray) -> np.ndarray:
    """Clip to [0, 255] and convert to uint8 for display/export (callers round first)."""
    x = np.clip(arr, 0, 255)
    return x.astype(np.uint8)


def image_to_matrix(image: np.ndarray) -> np.ndarray:
    """(H, W, 3) uint8 image -> (H*W, 3) float matrix in [0, 1]."""
    image = np.asarray(image)
    return image.reshape(-1, 3).astype(float) / 255.0


def fix_sign_ambiguity(U: np.ndarray, VT: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Make the largest-magnitude entry of every VT row positive, flipping
    the matching U column with it. Returns new arrays.

    The result no longer depends on which sign the solver picked, and
    applying it twice changes nothing.
    """
    U = np.array(U, dtype=float, copy=True)
    VT = np.array(VT, dtype=float, copy=True)
    for i in range(VT.shape[0]):
        max_abs_idx = int(np.argmax(np.abs(VT[i])))  # first index on ties
        if VT[i, max_abs_idx] < 0:
            VT[i, :] = -VT[i, :]
            U[:, i] = -U[:, i]
    return U, VT


def compute_svd(A: np.ndarray) -> SVDResult:
    """
    Economy SVD of a (n_pixels, 3) matrix with the sign convention applied.

    numpy returns singular values sorted in descending order, so the
    "first k components" are also the k largest.
    """
    U, s, Vt = np.linalg.svd(np.asarray(A, dtype=float), full_matrices=False)
    U, Vt = fix_sign_ambiguity(U, Vt)
    logger.debug("SVD recomputed: sigma=%s", np.round(s, 4))
    return SVDResult(U=U, sigma=s, VT=Vt)


def compute_image_svd(image: np.ndarray) -> SVDResult:
    return compute_svd(image_to_matrix(image))


def reconstruct(svd: SVDResult, k: int) -> np.ndarray:
    """Truncated reconstruction in matrix form, values in [0, 1] scale."""
    k = int(np.clip(k, 0, svd.n_components))
    Uk = svd.U[:, :k]
    sk = svd.sigma[:k]
    Vtk = svd.VT[:k, :]
    return (Uk * sk) @ Vtk


def reconstruct_rank_k(svd: SVDResult, k: int, size: int = IMAGE_SIZE) -> np.ndarray:
    """
    Rank-k color approximation as a (size, size, 3) uint8 image.

    Pixel value = clamp(255 * sum_{c<k} U[p, c] sigma[c] VT[c, channel], 0, 255).
    k = 0 gives a black image.
    """
    Ak = reconstruct(svd, k)
    return safe_uint8(np.rint(Ak.reshape(size, size, 3) * 255.0))


def component_image(svd: SVDResult, c: int, size: int = IMAGE_SIZE) -> np.ndarray:
    """The single rank-1 term sigma_c u_c v_c^T as an image."""
    term = np.outer(svd.U[:, c] * svd.sigma[c], svd.VT[c, :])
    return safe_uint8(np.rint(term.reshape(size, size, 3) * 255.0))


def u_column_heatmap(svd: SVDResult, c: int, size: int = IMAGE_SIZE) -> np.ndarray:
    """Column c of U, min-max scaled to grayscale uint8 (size, size)."""
    col = svd.U[:, c]
    vmin = float(col.min())
    vmax = float(col.max())
    if vmax - vmin <= 0:
        return np.zeros((size, size), dtype=np.uint8)
    normalized = (col - vmin) / (vmax - vmin)
    return np.floor(normalized * 255).astype(np.uint8).reshape(size, size)


def energy_kept(s: np.ndarray, k: int) -> float:
    denom = float(np.sum(s ** 2))
    if denom == 0:
        return 0.0
    return float(np.sum(s[:k] ** 2) / denom)


# -----------------------------
# Raw RGB channel path (no SVD)
# -----------------------------
def channel_std_devs(image: np.ndarray) -> np.ndarray:
    """Population standard deviation of R, G, B over all pixels (0-255 scale)."""
    pixels = np.asarray(image, dtype=float).reshape(-1, 3)
    mean = pixels.mean(axis=0)
    variance = (pixels ** 2).mean(axis=0) - mean ** 2
    # E[X²] - E[X]² can dip a hair below zero for constant channels
    return np.sqrt(np.maximum(variance, 0.0))


def rank_channels_by_std(image: np.ndarray) -> List[Tuple[str, float]]:
    """[(channel_name, std), ...] sorted by std, largest first; ties keep R, G, B order."""
    stds = channel_std_devs(image)
    channels = [(name, float(std)) for name, std in zip(CHANNEL_NAMES, stds)]
    return sorted(channels, key=lambda item: -item[1])


def _top_k_channel_indices(image: np.ndarray, k: int) -> List[int]:
    ranked = rank_channels_by_std(image)[:max(0, k)]
    return [CHANNEL_NAMES.index(name) for name, _ in ranked]


def reconstruct_top_k_channels(image: np.ndarray, k: int) -> np.ndarray:
    """Keep the k highest-spread channels of the original verbatim, zero the rest."""
    image = np.asarray(image, dtype=np.uint8)
    out = np.zeros_like(image)
    for idx in _top_k_channel_indices(image, k):
        out[:, :, idx] = image[:, :, idx]
    return out


def top_k_channel_rgb_at(image: np.ndarray, k: int, x: int, y: int) -> Tuple[int, int, int]:
    """RGB of the top-k channel reconstruction at column x, row y."""
    if k <= 0:
        return (0, 0, 0)
    rgb = [0, 0, 0]
    for idx in _top_k_channel_indices(image, k):
        rgb[idx] = int(image[y, x, idx])
    return rgb[0], rgb[1], rgb[2]


def rank_k_rgb_at(svd: SVDResult, k: int, x: int, y: int, size: int = IMAGE_SIZE) -> Tuple[int, int, int]:
    """RGB of the rank-k SVD reconstruction at column x, row y."""
    k = int(np.clip(k, 0, svd.n_components))
    row = svd.U[y * size + x, :k] * svd.sigma[:k]
    value = safe_uint8(np.rint((row @ svd.VT[:k, :]) * 255.0))
    return int(value[0]), int(value[1]), int(value[2])


def active_channels(rgb: Tuple[int, int, int], threshold: int = HOVER_THRESHOLD) -> List[str]:
    """Names of channels whose value at a pixel exceeds the threshold."""
    return [name for name, value in zip(CHANNEL_NAMES, rgb) if value > threshold]
