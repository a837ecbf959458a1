"""
Terrain profiles: named parameter ranges for displacement-family generation.

A profile does not pick anything about ecology or placement; it only
supplies the range each generation parameter is drawn from, so neighbouring
tiles of the same kind of land share a consistent character.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field, field_validator

from ..core.alea_prng import AleaPRNG
from ..core.parameters import GenerationParameters


class TerrainProfile(BaseModel):
    """Ranges (low, high) sampled to build a GenerationParameters set."""

    name: str
    initial_altitudes: Tuple[float, float] = Field(default=(0.0, 0.0))
    amplitude: Tuple[float, float] = Field(default=(0.0, 0.0))
    roughness: Tuple[float, float] = Field(default=(0.0, 0.0))
    min_random_range: Tuple[float, float] = Field(default=(-1.0, 0.0))
    max_random_range: Tuple[float, float] = Field(default=(0.0, 1.0))

    @field_validator(
        "initial_altitudes", "amplitude", "roughness", "min_random_range", "max_random_range"
    )
    @classmethod
    def _ordered_range(cls, value: Tuple[float, float]) -> Tuple[float, float]:
        low, high = value
        if low > high:
            raise ValueError(f"Range lower bound {low} exceeds upper bound {high}")
        return value

    @field_validator("roughness")
    @classmethod
    def _unit_roughness(cls, value: Tuple[float, float]) -> Tuple[float, float]:
        if value[0] < 0.0 or value[1] > 1.0:
            raise ValueError("Roughness range must lie within [0, 1]")
        return value

    def sample_parameters(
        self,
        n: int,
        min_height: float,
        max_height: float,
        prng: AleaPRNG,
        roughness_factor: float = 2.0,
    ) -> GenerationParameters:
        """
        Draw one parameter set from the profile ranges.

        Args:
            n: Grid exponent (grid side is 2**n + 1)
            min_height: Lower clamp bound for the terrain
            max_height: Upper clamp bound for the terrain
            prng: Random stream to draw from
            roughness_factor: Spectral filter steepness, passed through unsampled

        Returns:
            Validated GenerationParameters
        """
        initial_altitudes = prng.sample(*self.initial_altitudes)
        amplitude = prng.sample(*self.amplitude)
        roughness = prng.sample(*self.roughness)
        min_random_range = prng.sample(*self.min_random_range)
        max_random_range = prng.sample(*self.max_random_range)
        return GenerationParameters(
            n=n,
            initial_altitudes=initial_altitudes,
            amplitude=amplitude,
            roughness=roughness,
            min_random_range=min_random_range,
            max_random_range=max_random_range,
            min_height=min_height,
            max_height=max_height,
            roughness_factor=roughness_factor,
        )


PROFILES: Dict[str, TerrainProfile] = {
    "plain": TerrainProfile(
        name="plain",
        amplitude=(0.1, 0.5),
        roughness=(0.05, 0.2),
        initial_altitudes=(0.0, 0.25),
    ),
    "hill": TerrainProfile(
        name="hill",
        amplitude=(1.0, 1.5),
        roughness=(0.05, 0.25),
        initial_altitudes=(0.0, 1.0),
        min_random_range=(-0.5, 0.0),
    ),
    "mountain": TerrainProfile(
        name="mountain",
        amplitude=(1.0, 2.0),
        roughness=(0.25, 0.4),
        initial_altitudes=(0.0, 1.0),
    ),
    "coast": TerrainProfile(
        name="coast",
        amplitude=(0.1, 0.5),
        roughness=(0.05, 0.2),
        initial_altitudes=(0.0, 0.1),
    ),
}


def get_profile(name: str) -> TerrainProfile:
    """
    Get a terrain profile by name.

    Raises:
        KeyError: If the profile is unknown
    """
    if name not in PROFILES:
        raise KeyError(
            f"Unknown terrain profile '{name}'. Available: {', '.join(list_profiles())}"
        )
    return PROFILES[name]


def list_profiles() -> List[str]:
    """List available profile names."""
    return sorted(PROFILES)
