"""
Heightmap normalization and range helpers.

Generated heightmaps carry arbitrary elevation units. Consumers want a
``[0, 1]`` grid plus the vertical span to scale it back into the world.
"""

import math
from typing import Optional, Tuple, Union

import numpy as np
import structlog

from .exceptions import DegenerateNormalizationError, InvalidParameterError

logger = structlog.get_logger()

ArrayLike = Union[float, np.ndarray]


def normalize_heightmap(
    heightmap: np.ndarray,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> Tuple[np.ndarray, float]:
    """
    Rescale a heightmap to [0, 1].

    Without bounds the grid is scanned for its actual minimum and maximum.
    With bounds, ``(value - min_value) / (max_value - min_value)`` is used
    as is; cells outside the bounds map outside [0, 1].

    Args:
        heightmap: Raw elevation grid (not modified)
        min_value: Optional lower bound of the source range
        max_value: Optional upper bound of the source range

    Returns:
        Tuple of (normalized heightmap, height range)

    Raises:
        DegenerateNormalizationError: If the range is zero or not finite
    """
    heightmap = np.asarray(heightmap, dtype=np.float64)

    if (min_value is None) != (max_value is None):
        raise InvalidParameterError("min_value and max_value must be given together")

    if min_value is None:
        min_value = float(heightmap.min())
        max_value = float(heightmap.max())
    elif min_value > max_value:
        raise InvalidParameterError(
            f"min_value ({min_value}) exceeds max_value ({max_value})"
        )

    height_range = float(max_value - min_value)
    if height_range == 0 or not math.isfinite(height_range):
        raise DegenerateNormalizationError(
            f"Cannot normalize heightmap with range {height_range} "
            f"(min={min_value}, max={max_value})"
        )

    normalized = (heightmap - min_value) / height_range
    logger.debug(
        "Heightmap normalized", min=min_value, max=max_value, height_range=height_range
    )
    return normalized, height_range


def denormalize_heightmap(
    normalized: np.ndarray, height_range: float, min_value: float = 0.0
) -> np.ndarray:
    """World elevations from a normalized grid: ``value * range + min_value``."""
    return np.asarray(normalized, dtype=np.float64) * height_range + min_value


def update_global_min_max(
    heightmap: np.ndarray, current_min: float, current_max: float
) -> Tuple[float, float]:
    """
    Extend a running (min, max) pair with the values of another heightmap.

    Used to size several tiles with one shared vertical scale.
    """
    return (
        min(current_min, float(np.min(heightmap))),
        max(current_max, float(np.max(heightmap))),
    )


def remap(value: ArrayLike, min1: float, max1: float, min2: float, max2: float) -> ArrayLike:
    """Linearly map value from [min1, max1] onto [min2, max2]."""
    if max1 == min1:
        raise DegenerateNormalizationError(
            f"Cannot remap from an empty source range [{min1}, {max1}]"
        )
    return min2 + (value - min1) * (max2 - min2) / (max1 - min1)
