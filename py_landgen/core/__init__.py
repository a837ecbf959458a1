"""
Core heightmap generation functionality.
"""

from .alea_prng import AleaPRNG, create_prng, resolve_seed
from .boundary import extract_shared_edges, initialize_corners, initialize_white_noise
from .exceptions import (
    DegenerateNormalizationError,
    InvalidParameterError,
    TerrainGenerationError,
    UnsupportedTransformSizeError,
)
from .fft import FFT2D
from .heightmap_generator import HeightmapGenerator, generate_heightmap
from .normalization import normalize_heightmap, denormalize_heightmap
from .parameters import Algorithm, GenerationParameters

__all__ = ['AleaPRNG', 'create_prng', 'resolve_seed',
           'extract_shared_edges', 'initialize_corners', 'initialize_white_noise',
           'TerrainGenerationError', 'InvalidParameterError',
           'DegenerateNormalizationError', 'UnsupportedTransformSizeError',
           'FFT2D', 'HeightmapGenerator', 'generate_heightmap',
           'normalize_heightmap', 'denormalize_heightmap',
           'Algorithm', 'GenerationParameters']
