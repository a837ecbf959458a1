"""
Grid initialisation for heightmap generation.

Seeds the four corners of a fresh grid (randomly, or from the shared edges
of already generated neighbour tiles) together with the visited mask that
the displacement algorithms use to avoid overwriting fixed cells.
"""

from typing import List, Optional, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .parameters import BOTTOM, LEFT, RIGHT, TOP, GenerationParameters

logger = structlog.get_logger()


def _random_corner(parameters: GenerationParameters, prng: AleaPRNG) -> float:
    value = (
        prng.sample(parameters.min_random_range, parameters.max_random_range)
        * parameters.initial_altitudes
        * parameters.size
    )
    return min(max(value, parameters.min_height), parameters.max_height)


def _apply_preset_sides(
    heightmap: np.ndarray, visited: np.ndarray, parameters: GenerationParameters
) -> None:
    last = parameters.size - 1
    for side in parameters.sides:
        values = np.asarray(parameters.preset_sides[side], dtype=np.float64)
        if side == TOP:
            heightmap[0, :] = values
            visited[0, :] = True
        elif side == LEFT:
            heightmap[:, 0] = values
            visited[:, 0] = True
        elif side == BOTTOM:
            heightmap[last, :] = values
            visited[last, :] = True
        elif side == RIGHT:
            heightmap[:, last] = values
            visited[:, last] = True


def initialize_corners(
    parameters: GenerationParameters, prng: AleaPRNG
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Create the heightmap and visited mask for a displacement algorithm.

    Preset edges are copied first and marked visited. Every corner not
    covered by a preset edge is then drawn at random, scaled by
    ``initial_altitudes * size`` and clamped to the height bounds. Preset
    values are copied unchanged.

    Args:
        parameters: Generation parameters
        prng: Random stream for the corner draws

    Returns:
        Tuple of (heightmap, visited)
    """
    size = parameters.size
    last = size - 1
    heightmap = np.zeros((size, size), dtype=np.float64)
    visited = np.zeros((size, size), dtype=bool)

    if parameters.has_preset_sides:
        _apply_preset_sides(heightmap, visited, parameters)
        logger.debug("Preset sides applied", sides=list(parameters.sides))

    # Draw order is fixed so seeds stay reproducible
    for corner in ((0, 0), (0, last), (last, 0), (last, last)):
        if not visited[corner]:
            heightmap[corner] = _random_corner(parameters, prng)
            visited[corner] = True

    return heightmap, visited


def initialize_white_noise(size: int, variance: float, prng: AleaPRNG) -> np.ndarray:
    """Fill a size x size grid with uniform [0, 1) noise scaled by variance."""
    noise = np.empty((size, size), dtype=np.float64)
    for x in range(size):
        for z in range(size):
            noise[x, z] = prng.sample(0.0, 1.0) * variance
    return noise


def extract_shared_edges(
    top: Optional[np.ndarray] = None,
    left: Optional[np.ndarray] = None,
    bottom: Optional[np.ndarray] = None,
    right: Optional[np.ndarray] = None,
) -> Tuple[Optional[List[Optional[List[float]]]], Optional[List[int]]]:
    """
    Collect the boundary a new tile must share with its neighbours.

    Each argument is an already generated neighbour heightmap. The shared
    edge is the neighbour's row/column facing the new tile: the top
    neighbour's last row, the left neighbour's last column, the bottom
    neighbour's first row and the right neighbour's first column.

    Returns:
        Tuple of (preset_sides, sides) ready for
        ``GenerationParameters.with_preset_sides``, or (None, None) when
        there are no neighbours
    """
    preset_sides: List[Optional[List[float]]] = [None, None, None, None]
    sides: List[int] = []

    if top is not None:
        preset_sides[TOP] = np.asarray(top)[-1, :].tolist()
        sides.append(TOP)
    if left is not None:
        preset_sides[LEFT] = np.asarray(left)[:, -1].tolist()
        sides.append(LEFT)
    if bottom is not None:
        preset_sides[BOTTOM] = np.asarray(bottom)[0, :].tolist()
        sides.append(BOTTOM)
    if right is not None:
        preset_sides[RIGHT] = np.asarray(right)[:, 0].tolist()
        sides.append(RIGHT)

    if not sides:
        return None, None
    return preset_sides, sides
