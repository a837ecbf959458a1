"""Tests for heightmap normalization."""

import numpy as np
import pytest

from py_landgen.core.exceptions import DegenerateNormalizationError, InvalidParameterError
from py_landgen.core.normalization import (
    denormalize_heightmap,
    normalize_heightmap,
    remap,
    update_global_min_max,
)


class TestNormalizeHeightmap:
    """Test scan and explicit-bounds normalization."""

    @pytest.fixture
    def heightmap(self):
        return np.array([[-50.0, 0.0], [25.0, 150.0]])

    def test_scan_mode(self, heightmap):
        normalized, height_range = normalize_heightmap(heightmap)
        assert height_range == 200.0
        assert normalized.min() == 0.0
        assert normalized.max() == 1.0
        assert normalized[0, 1] == pytest.approx(0.25)

    def test_scan_mode_does_not_mutate_input(self, heightmap):
        original = heightmap.copy()
        normalize_heightmap(heightmap)
        np.testing.assert_array_equal(heightmap, original)

    def test_explicit_bounds(self, heightmap):
        normalized, height_range = normalize_heightmap(heightmap, -100.0, 300.0)
        assert height_range == 400.0
        assert normalized[0, 0] == pytest.approx(0.125)
        assert normalized[1, 1] == pytest.approx(0.625)

    def test_explicit_bounds_idempotent_on_unit_grid(self):
        """A grid already in [0, 1] is unchanged by (0, 1) bounds."""
        rng = np.random.default_rng(3)
        grid = rng.uniform(0.0, 1.0, size=(9, 9))
        normalized, height_range = normalize_heightmap(grid, 0.0, 1.0)
        assert height_range == 1.0
        np.testing.assert_array_equal(normalized, grid)

    def test_scan_mode_random_grid(self):
        rng = np.random.default_rng(4)
        grid = rng.normal(10.0, 40.0, size=(17, 17))
        normalized, _ = normalize_heightmap(grid)
        assert normalized.min() == 0.0
        assert normalized.max() == pytest.approx(1.0)

    def test_flat_grid_rejected(self):
        with pytest.raises(DegenerateNormalizationError):
            normalize_heightmap(np.full((5, 5), 3.0))

    def test_equal_bounds_rejected(self):
        with pytest.raises(DegenerateNormalizationError):
            normalize_heightmap(np.zeros((3, 3)), 1.0, 1.0)

    def test_non_finite_range_rejected(self):
        grid = np.array([[0.0, np.inf]])
        with pytest.raises(DegenerateNormalizationError):
            normalize_heightmap(grid)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(InvalidParameterError):
            normalize_heightmap(np.zeros((3, 3)), 5.0, 1.0)

    def test_single_bound_rejected(self):
        with pytest.raises(InvalidParameterError):
            normalize_heightmap(np.zeros((3, 3)), min_value=0.0)


class TestRangeHelpers:
    """Test world-scale helpers."""

    def test_denormalize_round_trip(self):
        grid = np.array([[-20.0, 10.0], [40.0, 80.0]])
        normalized, height_range = normalize_heightmap(grid)
        restored = denormalize_heightmap(normalized, height_range, grid.min())
        np.testing.assert_allclose(restored, grid)

    def test_update_global_min_max(self):
        current = update_global_min_max(np.array([[1.0, 5.0]]), np.inf, -np.inf)
        assert current == (1.0, 5.0)
        current = update_global_min_max(np.array([[-2.0, 3.0]]), *current)
        assert current == (-2.0, 5.0)

    def test_remap_scalar(self):
        assert remap(5.0, 0.0, 10.0, 100.0, 200.0) == 150.0

    def test_remap_array(self):
        values = np.array([0.0, 0.5, 1.0])
        np.testing.assert_allclose(remap(values, 0.0, 1.0, -1.0, 1.0), [-1.0, 0.0, 1.0])

    def test_remap_empty_source(self):
        with pytest.raises(DegenerateNormalizationError):
            remap(1.0, 2.0, 2.0, 0.0, 1.0)
