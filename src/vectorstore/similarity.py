"""Exact cosine similarity scoring."""

import numpy as np


def cosine_similarity(a, b) -> float:
    """Return dot(a, b) / (|a| * |b|).

    Returns 0.0 instead of failing when either vector is empty, has zero
    norm, or the two differ in dimension, so such chunks simply rank last.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if a.size == 0 or a.shape != b.shape:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))
