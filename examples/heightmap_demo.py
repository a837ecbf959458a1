#!/usr/bin/env python3
"""
Simple demo script showing heightmap generation capabilities.
"""

import numpy as np
from py_landgen.core import (
    Algorithm,
    GenerationParameters,
    HeightmapGenerator,
    extract_shared_edges,
    normalize_heightmap,
    update_global_min_max,
)
from py_landgen.config import get_profile, list_profiles
from py_landgen.core.alea_prng import create_prng


def print_statistics(heightmap, height_range):
    """Print basic statistics and a histogram of a normalized heightmap."""
    print(f"  Grid size: {heightmap.shape[0]}x{heightmap.shape[1]}")
    print(f"  World height range: {height_range:.2f}")
    print(f"  Average normalized height: {np.mean(heightmap):.3f}")

    bins = [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
    hist, _ = np.histogram(heightmap, bins=bins)
    print("  Height distribution:")
    for i in range(len(bins) - 1):
        bar = '#' * int(hist[i] / max(hist) * 20)
        print(f"    {bins[i]:.1f}-{bins[i+1]:.1f}: {bar} ({hist[i]})")


def main():
    """Demonstrate heightmap generation."""
    print("Landscape Heightmap Generation Demo")
    print("=" * 40)

    seed = 42
    parameters = GenerationParameters(
        n=6,
        initial_altitudes=1.0,
        amplitude=1.0,
        roughness=0.5,
        min_height=-100.0,
        max_height=300.0,
    )

    for algorithm in Algorithm:
        print(f"\n{algorithm.value.upper()}:")
        print("-" * 30)

        generator = HeightmapGenerator(parameters, seed=seed)
        heightmap = generator.generate(algorithm)

        if algorithm == Algorithm.FAST_FOURIER_TRANSFORM:
            normalized, height_range = normalize_heightmap(heightmap)
        else:
            normalized, height_range = normalize_heightmap(
                heightmap, parameters.min_height, parameters.max_height
            )
        print_statistics(normalized, height_range)

    # Stitched tiles example
    print("\n\nStitched Tiles Example:")
    print("-" * 30)
    west = HeightmapGenerator(parameters, seed=1).midpoint_displacement()
    preset_sides, sides = extract_shared_edges(left=west)
    east = HeightmapGenerator(
        parameters.with_preset_sides(preset_sides, sides), seed=2
    ).midpoint_displacement()
    seam_error = np.max(np.abs(east[:, 0] - west[:, -1]))
    print(f"  Maximum seam difference: {seam_error}")

    # One vertical scale for both tiles keeps the seam flush after normalizing
    low, high = update_global_min_max(west, np.inf, -np.inf)
    low, high = update_global_min_max(east, low, high)
    west_normalized, _ = normalize_heightmap(west, low, high)
    east_normalized, height_range = normalize_heightmap(east, low, high)
    normalized_seam = np.max(np.abs(east_normalized[:, 0] - west_normalized[:, -1]))
    print(f"  Shared height range: {height_range:.2f} ({low:.1f} to {high:.1f})")
    print(f"  Normalized seam difference: {normalized_seam}")

    # Terrain profiles
    print("\n\nTerrain profiles:")
    print("-" * 30)
    for name in list_profiles():
        profile_parameters = get_profile(name).sample_parameters(
            6, -100.0, 300.0, create_prng(seed)
        )
        heightmap = HeightmapGenerator(profile_parameters, seed=seed).diamond_square()
        print(
            f"  - {name}: amplitude={profile_parameters.amplitude:.2f}, "
            f"roughness={profile_parameters.roughness:.2f}, "
            f"heights {heightmap.min():.1f} to {heightmap.max():.1f}"
        )


if __name__ == "__main__":
    main()
