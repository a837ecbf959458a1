"""FastAPI main application."""

from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings, get_profile, list_profiles, PROFILES
from ..core.alea_prng import AleaPRNG, create_prng
from ..core.exceptions import TerrainGenerationError
from ..core.heightmap_generator import HeightmapGenerator
from ..core.normalization import normalize_heightmap
from ..core.parameters import Algorithm, GenerationParameters
from ..utils.logging import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Landscape Heightmap Generator API",
    description="Procedural terrain heightmaps via midpoint displacement, "
    "diamond-square and spectral synthesis",
    version=__version__,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class HeightmapGenerationRequest(BaseModel):
    """Request to generate a heightmap."""

    algorithm: Algorithm = Field(
        Algorithm(settings.default_algorithm), description="Synthesis algorithm"
    )
    seed: int = Field(0, ge=0, description="Random seed, 0 picks a random one")
    n: int = Field(settings.default_n, ge=1, le=settings.max_n, description="Grid exponent")
    profile: Optional[str] = Field(
        None, description="Terrain profile to draw parameters from"
    )
    initial_altitudes: float = Field(0.0, ge=0, description="Corner altitude jitter")
    amplitude: float = Field(1.0, ge=0, description="Displacement amplitude")
    roughness: float = Field(0.5, ge=0, le=1, description="Perturbation decay per level")
    min_height: float = Field(-100.0, description="Lower clamp bound")
    max_height: float = Field(300.0, description="Upper clamp bound")
    min_random_range: float = Field(-1.0, description="Lower random sample bound")
    max_random_range: float = Field(1.0, description="Upper random sample bound")
    roughness_factor: float = Field(2.0, ge=0, description="Spectral filter steepness")
    preset_sides: Optional[List[Optional[List[float]]]] = Field(
        None, description="Four optional edges (top, left, bottom, right) to stitch against"
    )
    sides: Optional[List[int]] = Field(None, description="Indices of the preset edges")
    normalize: bool = Field(True, description="Rescale heights to [0, 1]")


class HeightmapResponse(BaseModel):
    """Generated heightmap."""

    algorithm: Algorithm
    seed: int
    size: int
    normalized: bool
    min_value: float
    max_value: float
    height_range: Optional[float] = None
    heights: List[List[float]]


class ProfileSummary(BaseModel):
    """Parameter ranges of a terrain profile."""

    name: str
    initial_altitudes: List[float]
    amplitude: List[float]
    roughness: List[float]
    min_random_range: List[float]
    max_random_range: List[float]


def _build_parameters(request: HeightmapGenerationRequest, prng: AleaPRNG) -> GenerationParameters:
    """Turn a request into a validated parameter set."""
    if request.profile is not None:
        try:
            profile = get_profile(request.profile)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=str(e.args[0]))
        parameters = profile.sample_parameters(
            request.n,
            request.min_height,
            request.max_height,
            prng,
            roughness_factor=request.roughness_factor,
        )
        return parameters.with_preset_sides(request.preset_sides, request.sides)

    return GenerationParameters(
        n=request.n,
        initial_altitudes=request.initial_altitudes,
        amplitude=request.amplitude,
        roughness=request.roughness,
        min_height=request.min_height,
        max_height=request.max_height,
        min_random_range=request.min_random_range,
        max_random_range=request.max_random_range,
        roughness_factor=request.roughness_factor,
        preset_sides=request.preset_sides,
        sides=request.sides,
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Landscape Heightmap Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/profiles", response_model=List[ProfileSummary])
async def get_profiles():
    """List terrain profiles and their parameter ranges."""
    return [
        ProfileSummary(**PROFILES[name].model_dump())
        for name in list_profiles()
    ]


@app.post("/heightmaps/generate", response_model=HeightmapResponse)
def generate(request: HeightmapGenerationRequest):
    """
    Generate a heightmap synchronously.

    Displacement results are normalized against the requested height
    bounds, spectral results against their own observed range.
    """
    logger.info("Heightmap generation requested", request=request.model_dump(exclude={"preset_sides"}))

    if (
        request.algorithm == Algorithm.FAST_FOURIER_TRANSFORM
        and 2**request.n > settings.max_spectral_size
    ):
        raise HTTPException(
            status_code=422,
            detail=f"Spectral grid side {2**request.n} exceeds {settings.max_spectral_size}",
        )

    try:
        prng = create_prng(request.seed)
        seed = prng.seed
        parameters = _build_parameters(request, prng)
        generator = HeightmapGenerator(parameters, prng=prng)
        heightmap = generator.generate(request.algorithm)

        height_range = None
        if request.normalize:
            if request.algorithm == Algorithm.FAST_FOURIER_TRANSFORM:
                heightmap, height_range = normalize_heightmap(heightmap)
            else:
                heightmap, height_range = normalize_heightmap(
                    heightmap, parameters.min_height, parameters.max_height
                )
    except TerrainGenerationError as e:
        logger.warning("Heightmap generation rejected", error=str(e))
        raise HTTPException(status_code=422, detail=str(e))

    return HeightmapResponse(
        algorithm=request.algorithm,
        seed=seed,
        size=heightmap.shape[0],
        normalized=request.normalize,
        min_value=float(heightmap.min()),
        max_value=float(heightmap.max()),
        height_range=height_range,
        heights=heightmap.tolist(),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
