"""
Heightmap generation module.

This module implements the three terrain synthesis algorithms:

- Midpoint displacement: recursive subdivision of grid quadrants
- Diamond-square: level-by-level diamond and square averaging steps
- Spectral synthesis: white noise filtered with a radial power law in the
  frequency domain

Displacement algorithms work on ``2**n + 1`` grids and respect preset
boundary edges so new tiles stitch seamlessly against existing neighbours.
"""

from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np
import structlog

from .alea_prng import RANDOM_SEED, AleaPRNG, create_prng
from .boundary import initialize_corners, initialize_white_noise
from .exceptions import InvalidParameterError
from .fft import FFT2D
from .parameters import Algorithm, GenerationParameters

logger = structlog.get_logger()


def square_step_average(heightmap: np.ndarray, x: int, z: int, mid: int) -> Tuple[float, int]:
    """
    Average the in-bounds neighbours of a square-step cell.

    Neighbours are the cells ``mid`` away to the left, up, right and down.
    Cells on the grid boundary have fewer than four of them; the divisor is
    the number actually summed.

    Returns:
        Tuple of (average, neighbour count)
    """
    last = heightmap.shape[0] - 1
    total = 0.0
    count = 0

    if x - mid >= 0:
        total += heightmap[x - mid, z]
        count += 1
    if z - mid >= 0:
        total += heightmap[x, z - mid]
        count += 1
    # The last row and column are valid neighbours too
    if x + mid <= last:
        total += heightmap[x + mid, z]
        count += 1
    if z + mid <= last:
        total += heightmap[x, z + mid]
        count += 1

    return total / count, count


class HeightmapGenerator:
    """
    Generates heightmaps with the displacement and spectral algorithms.

    One generator owns one random stream. Build a new generator (or pass a
    fresh ``prng``) per generation call so concurrent calls never share
    random state.
    """

    def __init__(
        self,
        parameters: GenerationParameters,
        seed: Optional[int] = RANDOM_SEED,
        prng: Optional[AleaPRNG] = None,
    ):
        """
        Initialize the heightmap generator.

        Args:
            parameters: Generation parameters
            seed: Seed for the random stream, 0 picks a random one
            prng: Explicit random stream, overrides seed
        """
        self.parameters = parameters
        self._prng = prng if prng is not None else create_prng(seed)

    @property
    def seed(self) -> int:
        """Seed the random stream was built from."""
        return self._prng.seed

    def _random(self) -> float:
        """Draw from the configured random range."""
        return self._prng.sample(
            self.parameters.min_random_range, self.parameters.max_random_range
        )

    def _lim(self, value: float) -> float:
        """Clamp to the configured height bounds."""
        return min(max(value, self.parameters.min_height), self.parameters.max_height)

    def _displaced(self, average: float, scale: float) -> float:
        """Average plus a random perturbation, clamped."""
        return self._lim(average + self._random() * self.parameters.amplitude * scale)

    def midpoint_displacement(self) -> np.ndarray:
        """
        Generate a heightmap with recursive midpoint displacement.

        Returns:
            ``size x size`` float64 heightmap
        """
        heightmap, visited = initialize_corners(self.parameters, self._prng)
        last = self.parameters.size - 1
        scale = self.parameters.size * self.parameters.roughness

        self._displace(heightmap, visited, 0, 0, last, last, scale)
        return heightmap

    def _displace(
        self,
        heightmap: np.ndarray,
        visited: np.ndarray,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        scale: float,
    ) -> None:
        """Displace the edge midpoints and centre of one quadrant, then recurse."""
        if x2 - x1 <= 1 or y2 - y1 <= 1:
            return

        mx = (x1 + x2) // 2
        my = (y1 + y2) // 2

        left_avg = (heightmap[x1, y1] + heightmap[x1, y2]) / 2
        top_avg = (heightmap[x1, y1] + heightmap[x2, y1]) / 2
        right_avg = (heightmap[x2, y1] + heightmap[x2, y2]) / 2
        bottom_avg = (heightmap[x2, y2] + heightmap[x1, y2]) / 2

        for point, average in (
            ((x1, my), left_avg),
            ((mx, y1), top_avg),
            ((x2, my), right_avg),
            ((mx, y2), bottom_avg),
        ):
            if not visited[point]:
                visited[point] = True
                heightmap[point] = self._displaced(average, scale)

        if not visited[mx, my]:
            center_avg = (
                heightmap[x1, my] + heightmap[x2, my] + heightmap[mx, y1] + heightmap[mx, y2]
                + heightmap[x1, y1] + heightmap[x1, y2] + heightmap[x2, y1] + heightmap[x2, y2]
            ) / 8
            heightmap[mx, my] = self._displaced(center_avg, scale)
            visited[mx, my] = True

        scale *= self.parameters.roughness
        self._displace(heightmap, visited, x1, y1, mx, my, scale)
        self._displace(heightmap, visited, mx, y1, x2, my, scale)
        self._displace(heightmap, visited, x1, my, mx, y2, scale)
        self._displace(heightmap, visited, mx, my, x2, y2, scale)

    def diamond_square(self) -> np.ndarray:
        """
        Generate a heightmap with the diamond-square algorithm.

        Returns:
            ``size x size`` float64 heightmap
        """
        heightmap, visited = initialize_corners(self.parameters, self._prng)
        size = self.parameters.size
        scale = self.parameters.roughness * size

        square_size = size - 1
        while square_size > 1:
            mid = square_size // 2
            self._diamond_step(heightmap, visited, square_size, mid, scale)
            self._square_step(heightmap, visited, square_size, mid, scale)
            scale *= self.parameters.roughness
            square_size //= 2

        return heightmap

    def _diamond_step(
        self,
        heightmap: np.ndarray,
        visited: np.ndarray,
        square_size: int,
        mid: int,
        scale: float,
    ) -> None:
        """Set each square's centre to its corner average plus noise."""
        size = self.parameters.size
        for x in range(0, size - 1, square_size):
            for z in range(0, size - 1, square_size):
                if visited[x + mid, z + mid]:
                    continue

                average = (
                    heightmap[x, z]
                    + heightmap[x + square_size, z]
                    + heightmap[x + square_size, z + square_size]
                    + heightmap[x, z + square_size]
                ) / 4
                heightmap[x + mid, z + mid] = self._displaced(average, scale)
                visited[x + mid, z + mid] = True

    def _square_step(
        self,
        heightmap: np.ndarray,
        visited: np.ndarray,
        square_size: int,
        mid: int,
        scale: float,
    ) -> None:
        """Set each diamond's centre to its neighbour average plus noise."""
        size = self.parameters.size
        for x in range(0, size, mid):
            z_start = mid if (x // mid) % 2 == 0 else 0
            for z in range(z_start, size, square_size):
                if visited[x, z]:
                    continue

                average, _ = square_step_average(heightmap, x, z, mid)
                heightmap[x, z] = self._displaced(average, scale)
                visited[x, z] = True

    def spectral_synthesis(
        self,
        size: Optional[int] = None,
        amplitude: Optional[float] = None,
        roughness: Optional[float] = None,
        roughness_factor: Optional[float] = None,
    ) -> np.ndarray:
        """
        Generate a heightmap by filtering white noise in the frequency domain.

        Every frequency cell is divided by
        ``frequency ** (roughness_factor * (1 - roughness))`` where
        ``frequency = sqrt(x**2 + z**2)`` (0 treated as 1). No height
        clamping is applied; normalize the result to control its range.

        Args:
            size: Grid side, power of two (defaults to ``2**n``)
            amplitude: Noise amplitude (defaults to the parameter set)
            roughness: Roughness in [0, 1] (defaults to the parameter set)
            roughness_factor: Filter steepness (defaults to the parameter set)

        Returns:
            ``size x size`` float64 heightmap
        """
        size = self.parameters.spectral_size if size is None else size
        amplitude = self.parameters.amplitude if amplitude is None else amplitude
        roughness = self.parameters.roughness if roughness is None else roughness
        roughness_factor = (
            self.parameters.roughness_factor if roughness_factor is None else roughness_factor
        )
        if not 0.0 <= roughness <= 1.0:
            raise InvalidParameterError(f"roughness must be within [0, 1], got {roughness}")

        # Validates size before any noise is drawn
        fft = FFT2D(size)

        noise = initialize_white_noise(size, amplitude * size, self._prng)
        spectrum = fft.forward_2d(noise)

        x, z = np.meshgrid(np.arange(size), np.arange(size), indexing="ij")
        frequency = np.sqrt(x * x + z * z)
        frequency[frequency == 0] = 1.0
        spectrum /= np.power(frequency, roughness_factor * (1 - roughness))

        return fft.inverse_2d(spectrum)

    def generate(self, algorithm: Union[Algorithm, str]) -> np.ndarray:
        """
        Run one algorithm and return its raw heightmap.

        Args:
            algorithm: Algorithm to run

        Returns:
            Unnormalized heightmap
        """
        try:
            algorithm = Algorithm(algorithm)
        except ValueError as e:
            raise InvalidParameterError(f"Unknown algorithm '{algorithm}'") from e

        dispatch: Dict[Algorithm, Callable[[], np.ndarray]] = {
            Algorithm.MIDPOINT_DISPLACEMENT: self.midpoint_displacement,
            Algorithm.DIAMOND_SQUARES: self.diamond_square,
            Algorithm.FAST_FOURIER_TRANSFORM: self.spectral_synthesis,
        }

        logger.info(
            "Generating heightmap",
            algorithm=algorithm.value,
            n=self.parameters.n,
            seed=self.seed,
            preset_sides=list(self.parameters.sides or ()),
        )
        heightmap = dispatch[algorithm]()
        logger.info(
            "Heightmap generated",
            algorithm=algorithm.value,
            size=heightmap.shape[0],
            min=float(heightmap.min()),
            max=float(heightmap.max()),
            random_draws=self._prng.call_count,
        )
        return heightmap


def generate_heightmap(
    algorithm: Union[Algorithm, str],
    parameters: GenerationParameters,
    seed: Optional[int] = RANDOM_SEED,
) -> np.ndarray:
    """
    Generate a raw heightmap.

    Args:
        algorithm: Algorithm to run
        parameters: Generation parameters
        seed: Seed for reproducible output, 0 picks a random one

    Returns:
        ``2**n + 1`` square grid for displacement algorithms, ``2**n`` for
        spectral synthesis
    """
    return HeightmapGenerator(parameters, seed=seed).generate(algorithm)
