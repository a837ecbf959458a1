"""
Square-matrix 2D Fast Fourier Transform.

The 2D transform is built from a radix-2 1D transform applied to every row,
a transpose, and the same 1D transform applied to every row again. The
butterflies are vectorised with NumPy across all rows of the matrix, so one
pass transforms the whole matrix.

Layout note: because the second pass runs on the transposed matrix and the
result is not transposed back, ``forward_2d`` returns the conventional 2D
spectrum transposed (``forward_2d(g) == numpy.fft.fft2(g).T``). ``inverse_2d``
expects exactly that layout, so a forward/inverse pair reconstructs the input.
"""

import numpy as np

from .exceptions import UnsupportedTransformSizeError


def is_power_of_two(value: int) -> bool:
    """Check whether value is a positive power of two."""
    return value > 0 and (value & (value - 1)) == 0


class FFT2D:
    """
    Forward and inverse 2D FFT for ``size x size`` matrices.

    Args:
        size: Matrix side length, must be a positive power of two
    """

    def __init__(self, size: int):
        if not isinstance(size, (int, np.integer)) or not is_power_of_two(int(size)):
            raise UnsupportedTransformSizeError(
                f"FFT size must be a positive power of two, got {size}"
            )
        self.size = int(size)
        self._bit_reversed = self._bit_reversal_permutation(self.size)

    @staticmethod
    def _bit_reversal_permutation(size: int) -> np.ndarray:
        """Index permutation that puts samples in radix-2 butterfly order."""
        bits = size.bit_length() - 1
        indices = np.arange(size)
        reversed_indices = np.zeros(size, dtype=np.int64)
        for bit in range(bits):
            reversed_indices |= ((indices >> bit) & 1) << (bits - 1 - bit)
        return reversed_indices

    def _transform_rows(self, rows: np.ndarray, sign: int) -> np.ndarray:
        """
        Run the unscaled 1D transform along the last axis.

        Args:
            rows: Complex array whose last axis has length ``size``
            sign: -1 for the forward transform, +1 for the inverse

        Returns:
            New complex array with every row transformed
        """
        data = np.array(rows[..., self._bit_reversed], dtype=np.complex128)
        n = self.size
        half = 1
        while half < n:
            step = half * 2
            twiddle = np.exp(sign * 2j * np.pi * np.arange(half) / step)
            blocks = data.reshape(data.shape[:-1] + (n // step, step))
            even = blocks[..., :half].copy()
            odd = blocks[..., half:] * twiddle
            blocks[..., :half] = even + odd
            blocks[..., half:] = even - odd
            half = step
        return data

    def _check_vector(self, vector: np.ndarray) -> np.ndarray:
        vector = np.asarray(vector)
        if vector.shape != (self.size,):
            raise UnsupportedTransformSizeError(
                f"Expected a vector of length {self.size}, got shape {vector.shape}"
            )
        return vector

    def _check_matrix(self, matrix: np.ndarray) -> np.ndarray:
        matrix = np.asarray(matrix)
        if matrix.shape != (self.size, self.size):
            raise UnsupportedTransformSizeError(
                f"Expected a {self.size}x{self.size} matrix, got shape {matrix.shape}"
            )
        return matrix

    def forward(self, vector: np.ndarray) -> np.ndarray:
        """1D forward transform of a single vector (no scaling)."""
        return self._transform_rows(self._check_vector(vector), -1)

    def inverse(self, vector: np.ndarray) -> np.ndarray:
        """1D inverse transform of a single vector (no scaling)."""
        return self._transform_rows(self._check_vector(vector), 1)

    def to_complex(self, grid: np.ndarray) -> np.ndarray:
        """Convert a real grid to a complex matrix with zero imaginary parts."""
        grid = self._check_matrix(grid)
        return grid.astype(np.complex128)

    def forward_2d(self, grid: np.ndarray) -> np.ndarray:
        """
        Compute the 2D DFT of a real grid.

        Rows are transformed, the intermediate is transposed and its rows
        are transformed again. No scaling is applied.

        Args:
            grid: Real ``size x size`` array

        Returns:
            Complex spectrum in the transposed layout described above
        """
        p = self._transform_rows(self.to_complex(grid), -1)
        t = p.T
        return self._transform_rows(t, -1)

    def inverse_2d(self, matrix: np.ndarray) -> np.ndarray:
        """
        Compute the inverse 2D DFT and return real elevations.

        The intermediate is divided once by ``size * size`` between the two
        row passes, which equals applying ``1/size`` to each pass.

        Args:
            matrix: Complex ``size x size`` spectrum as produced by ``forward_2d``

        Returns:
            Real array holding ``abs(real)`` of the reconstruction
        """
        matrix = self._check_matrix(matrix)
        p = self._transform_rows(matrix, 1)
        t = p.T / (self.size * self.size)
        return self.to_float(self._transform_rows(t, 1))

    @staticmethod
    def to_float(matrix: np.ndarray) -> np.ndarray:
        """Drop imaginary rounding noise, keeping ``abs(real)`` per cell."""
        return np.abs(np.real(matrix)).astype(np.float64)
