# MIT License (see LICENSE)
"""
Small helpers shared by the particle types and the config validation.

Vectors are numpy arrays of shape (2,).
"""
from __future__ import annotations
import math

import numpy as np

from .errors import ConfigurationError


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array (always a copy)."""
    return np.array(x, dtype=np.float64)


def require_finite(name: str, value: float) -> float:
    """
    Coerce value to float and check it is finite.

    Raises:
        ConfigurationError: if the value is NaN or infinite.
    """
    value = float(value)
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return value
