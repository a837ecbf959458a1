"""Errors raised by heightmap generation."""


class TerrainGenerationError(ValueError):
    """Base class for all generation errors."""


class InvalidParameterError(TerrainGenerationError):
    """Raised when a generation parameter set is inconsistent."""


class DegenerateNormalizationError(TerrainGenerationError):
    """Raised when a heightmap cannot be rescaled because its range is zero."""


class UnsupportedTransformSizeError(TerrainGenerationError):
    """Raised when the FFT engine is given a size that is not a power of two."""
