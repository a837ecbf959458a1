"""Tests for the 2D FFT engine."""

import numpy as np
import pytest

from py_landgen.core.exceptions import UnsupportedTransformSizeError
from py_landgen.core.fft import FFT2D, is_power_of_two


class TestPowerOfTwo:
    """Test size validation helper."""

    @pytest.mark.parametrize("value", [1, 2, 4, 64, 1024])
    def test_powers_of_two(self, value):
        assert is_power_of_two(value)

    @pytest.mark.parametrize("value", [0, -4, 3, 33, 100])
    def test_non_powers_of_two(self, value):
        assert not is_power_of_two(value)


class TestFFT2D:
    """Test forward and inverse transforms."""

    @pytest.fixture
    def grid(self):
        """Random real 16x16 grid."""
        rng = np.random.default_rng(1234)
        return rng.uniform(0.0, 100.0, size=(16, 16))

    @pytest.mark.parametrize("size", [0, 3, 33, 100])
    def test_rejects_non_power_of_two(self, size):
        with pytest.raises(UnsupportedTransformSizeError):
            FFT2D(size)

    def test_rejects_mismatched_matrix(self):
        fft = FFT2D(8)
        with pytest.raises(UnsupportedTransformSizeError):
            fft.forward_2d(np.zeros((16, 16)))

    def test_rejects_mismatched_vector(self):
        fft = FFT2D(8)
        with pytest.raises(UnsupportedTransformSizeError):
            fft.forward(np.zeros(4))

    def test_forward_1d_matches_numpy(self):
        rng = np.random.default_rng(0)
        vector = rng.normal(size=32) + 1j * rng.normal(size=32)
        fft = FFT2D(32)
        np.testing.assert_allclose(fft.forward(vector), np.fft.fft(vector), atol=1e-9)

    def test_inverse_1d_is_unscaled(self):
        """The 1D inverse leaves scaling to the 2D pass."""
        rng = np.random.default_rng(1)
        vector = rng.normal(size=16) + 1j * rng.normal(size=16)
        fft = FFT2D(16)
        np.testing.assert_allclose(fft.inverse(vector), np.fft.ifft(vector) * 16, atol=1e-9)

    def test_to_complex(self, grid):
        fft = FFT2D(16)
        complex_grid = fft.to_complex(grid)
        assert complex_grid.dtype == np.complex128
        np.testing.assert_array_equal(complex_grid.real, grid)
        np.testing.assert_array_equal(complex_grid.imag, 0)

    def test_forward_2d_is_transposed_spectrum(self, grid):
        """Row, transpose, row leaves the spectrum in transposed layout."""
        fft = FFT2D(16)
        np.testing.assert_allclose(fft.forward_2d(grid), np.fft.fft2(grid).T, atol=1e-7)

    def test_forward_2d_dc_term(self, grid):
        fft = FFT2D(16)
        spectrum = fft.forward_2d(grid)
        assert spectrum[0, 0].real == pytest.approx(grid.sum())
        assert spectrum[0, 0].imag == pytest.approx(0.0, abs=1e-8)

    def test_round_trip(self, grid):
        """inverse_2d(forward_2d(grid)) reconstructs a non-negative grid."""
        fft = FFT2D(16)
        restored = fft.inverse_2d(fft.forward_2d(grid))
        np.testing.assert_allclose(restored, grid, rtol=1e-3)

    def test_round_trip_returns_absolute_values(self):
        """The inverse keeps abs(real), so negative input comes back positive."""
        rng = np.random.default_rng(5)
        grid = rng.uniform(-10.0, 10.0, size=(8, 8))
        fft = FFT2D(8)
        restored = fft.inverse_2d(fft.forward_2d(grid))
        np.testing.assert_allclose(restored, np.abs(grid), rtol=1e-3, atol=1e-9)
        assert np.all(restored >= 0)

    def test_size_one(self):
        fft = FFT2D(1)
        grid = np.array([[3.5]])
        np.testing.assert_allclose(fft.inverse_2d(fft.forward_2d(grid)), grid)

    def test_to_float_drops_imaginary(self):
        matrix = np.array([[-2.0 + 1e-12j, 3.0 - 4j]])
        np.testing.assert_array_equal(FFT2D.to_float(matrix), np.array([[2.0, 3.0]]))
