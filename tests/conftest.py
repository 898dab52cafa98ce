import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from eigenviz.image_generator import generate_complex_image, generate_shapes
from eigenviz.svd_engine import compute_image_svd


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def shapes(rng):
    return generate_shapes(rng)


@pytest.fixture
def sample_image(shapes):
    """Three colors (red, green, blue) on three shapes."""
    return generate_complex_image(3, 3, shapes)


@pytest.fixture
def sample_svd(sample_image):
    return compute_image_svd(sample_image)
