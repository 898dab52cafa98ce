"""
URL query parameters for the linear transform page.

    ?matrix=a11,a12,a21,a22&vector=v1,v2

Bad input never fails the page: it is logged and replaced by defaults.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Tuple

from eigenviz.config import DEFAULT_MATRIX, DEFAULT_VECTOR
from eigenviz.matrix_math import Matrix2x2, Vector2

logger = logging.getLogger(__name__)


def _parse_floats(raw: Optional[str], arity: int) -> Optional[List[float]]:
    if raw is None:
        return None
    parts = raw.split(",")
    if len(parts) != arity:
        return None
    try:
        values = [float(p.strip()) for p in parts]
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in values):
        return None
    return values


def parse_matrix_param(raw: Optional[str]) -> Matrix2x2:
    values = _parse_floats(raw, 4)
    if values is None:
        if raw is not None:
            logger.warning("Invalid matrix parameter %r, using default %s", raw, DEFAULT_MATRIX)
        return Matrix2x2(*DEFAULT_MATRIX)
    return Matrix2x2(*values)


def parse_vector_param(raw: Optional[str]) -> Vector2:
    values = _parse_floats(raw, 2)
    if values is None:
        if raw is not None:
            logger.warning("Invalid vector parameter %r, using default %s", raw, DEFAULT_VECTOR)
        return Vector2(*DEFAULT_VECTOR)
    return Vector2(*values)


def read_query_params(params: Mapping[str, str]) -> Tuple[Matrix2x2, Vector2]:
    """Initial (matrix, vector) from a query-parameter mapping such as st.query_params."""
    return parse_matrix_param(params.get("matrix")), parse_vector_param(params.get("vector"))


def _fmt(value: float) -> str:
    return f"{value:g}"


def format_query_params(matrix: Matrix2x2, vector: Vector2) -> Dict[str, str]:
    return {
        "matrix": ",".join(_fmt(v) for v in matrix),
        "vector": ",".join(_fmt(v) for v in vector),
    }
