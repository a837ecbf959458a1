"""Tests for generation parameters."""

import dataclasses

import pytest

from py_landgen.core.exceptions import InvalidParameterError
from py_landgen.core.parameters import Algorithm, GenerationParameters


class TestGenerationParameters:
    """Test parameter derivation and validation."""

    def test_defaults(self):
        parameters = GenerationParameters()
        assert parameters.n == 5
        assert parameters.size == 33
        assert parameters.spectral_size == 32
        assert parameters.min_height == -100.0
        assert parameters.max_height == 300.0
        assert parameters.min_random_range == -1.0
        assert parameters.max_random_range == 1.0
        assert not parameters.has_preset_sides

    @pytest.mark.parametrize("n,size", [(1, 3), (5, 33), (9, 513)])
    def test_size_is_power_of_two_plus_one(self, n, size):
        assert GenerationParameters(n=n).size == size

    def test_frozen(self):
        parameters = GenerationParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            parameters.amplitude = 3.0

    def test_rejects_zero_n(self):
        with pytest.raises(InvalidParameterError):
            GenerationParameters(n=0)

    def test_rejects_inverted_heights(self):
        with pytest.raises(InvalidParameterError, match="min_height"):
            GenerationParameters(min_height=10, max_height=5)

    def test_rejects_inverted_random_range(self):
        with pytest.raises(InvalidParameterError, match="min_random_range"):
            GenerationParameters(min_random_range=1, max_random_range=-1)

    @pytest.mark.parametrize("roughness", [-0.1, 1.5])
    def test_rejects_roughness_outside_unit_interval(self, roughness):
        with pytest.raises(InvalidParameterError):
            GenerationParameters(roughness=roughness)


class TestPresetSides:
    """Test preset edge validation."""

    def _edge(self, size, value=1.0):
        return [value] * size

    def test_valid_preset_sides(self):
        parameters = GenerationParameters(
            n=2,
            preset_sides=[self._edge(5), None, None, self._edge(5, 2.0)],
            sides=[0, 3],
        )
        assert parameters.has_preset_sides
        assert parameters.sides == (0, 3)
        assert parameters.preset_sides[3] == (2.0,) * 5

    def test_length_mismatch(self):
        with pytest.raises(InvalidParameterError, match="expected 5"):
            GenerationParameters(n=2, preset_sides=[self._edge(4), None, None, None], sides=[0])

    def test_marked_side_without_values(self):
        with pytest.raises(InvalidParameterError, match="no values"):
            GenerationParameters(n=2, preset_sides=[None, None, None, None], sides=[1])

    def test_sides_without_preset(self):
        with pytest.raises(InvalidParameterError, match="together"):
            GenerationParameters(n=2, sides=[0])

    def test_preset_without_sides(self):
        with pytest.raises(InvalidParameterError, match="together"):
            GenerationParameters(n=2, preset_sides=[self._edge(5), None, None, None])

    def test_wrong_number_of_entries(self):
        with pytest.raises(InvalidParameterError, match="4 entries"):
            GenerationParameters(n=2, preset_sides=[self._edge(5)], sides=[0])

    def test_invalid_edge_index(self):
        with pytest.raises(InvalidParameterError, match="0-3"):
            GenerationParameters(n=2, preset_sides=[self._edge(5)] * 4, sides=[4])

    def test_duplicate_edge_index(self):
        with pytest.raises(InvalidParameterError, match="Duplicate"):
            GenerationParameters(n=2, preset_sides=[self._edge(5)] * 4, sides=[0, 0])

    def test_non_finite_values(self):
        edge = self._edge(5)
        edge[2] = float("nan")
        with pytest.raises(InvalidParameterError, match="non-finite"):
            GenerationParameters(n=2, preset_sides=[edge, None, None, None], sides=[0])

    @pytest.mark.parametrize("field", [
        "initial_altitudes", "amplitude", "max_height", "min_height",
        "roughness", "min_random_range", "max_random_range", "roughness_factor",
    ])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_scalars(self, field, value):
        with pytest.raises(InvalidParameterError, match=f"{field} must be finite"):
            GenerationParameters(n=3, **{field: value})

    def test_nan_lower_bound_rejected_before_generation(self):
        with pytest.raises(InvalidParameterError, match="min_height"):
            GenerationParameters(
                n=3, initial_altitudes=50, amplitude=50,
                min_height=float("nan"), max_height=1,
            )

    def test_with_preset_sides_copies(self):
        base = GenerationParameters(n=2, amplitude=3.0)
        stitched = base.with_preset_sides([None, self._edge(5), None, None], [1])
        assert not base.has_preset_sides
        assert stitched.has_preset_sides
        assert stitched.amplitude == 3.0

    def test_with_preset_sides_validates(self):
        base = GenerationParameters(n=2)
        with pytest.raises(InvalidParameterError):
            base.with_preset_sides([None, self._edge(3), None, None], [1])


class TestAlgorithm:
    """Test the algorithm selector."""

    def test_from_string(self):
        assert Algorithm("diamond_squares") is Algorithm.DIAMOND_SQUARES

    def test_values(self):
        assert {a.value for a in Algorithm} == {
            "midpoint_displacement",
            "diamond_squares",
            "fast_fourier_transform",
        }
