"""
Generation parameters shared by the terrain algorithms.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from .exceptions import InvalidParameterError

# Edge indices used for tile stitching
TOP, LEFT, BOTTOM, RIGHT = 0, 1, 2, 3
EDGE_NAMES = {TOP: "top", LEFT: "left", BOTTOM: "bottom", RIGHT: "right"}

_FINITE_FIELDS = (
    "initial_altitudes",
    "amplitude",
    "max_height",
    "min_height",
    "roughness",
    "min_random_range",
    "max_random_range",
    "roughness_factor",
)


class Algorithm(str, Enum):
    """Available heightmap synthesis algorithms."""

    MIDPOINT_DISPLACEMENT = "midpoint_displacement"
    DIAMOND_SQUARES = "diamond_squares"
    FAST_FOURIER_TRANSFORM = "fast_fourier_transform"


@dataclass(frozen=True)
class GenerationParameters:
    """
    Immutable configuration for one heightmap generation call.

    ``n`` is the power-of-two exponent: displacement algorithms work on a
    ``2**n + 1`` grid and spectral synthesis on a ``2**n`` grid.

    ``preset_sides`` holds four optional boundary sequences indexed by edge
    (0=top row, 1=left column, 2=bottom row, 3=right column) and ``sides``
    lists which of them are set.
    """

    n: int = 5
    initial_altitudes: float = 0.0
    amplitude: float = 100.0
    max_height: float = 300.0
    min_height: float = -100.0
    roughness: float = 0.5
    min_random_range: float = -1.0
    max_random_range: float = 1.0
    preset_sides: Optional[Tuple[Optional[Tuple[float, ...]], ...]] = None
    sides: Optional[Tuple[int, ...]] = None
    roughness_factor: float = 2.0

    def __post_init__(self):
        # Freeze caller sequences so the parameter set stays immutable
        if self.preset_sides is not None:
            frozen_sides = tuple(
                None if side is None else tuple(float(v) for v in side)
                for side in self.preset_sides
            )
            object.__setattr__(self, "preset_sides", frozen_sides)
        if self.sides is not None:
            object.__setattr__(self, "sides", tuple(int(s) for s in self.sides))
        self.validate()

    @property
    def size(self) -> int:
        """Side length of displacement grids."""
        return 2**self.n + 1

    @property
    def spectral_size(self) -> int:
        """Side length of spectral synthesis grids."""
        return 2**self.n

    @property
    def has_preset_sides(self) -> bool:
        return self.preset_sides is not None

    def validate(self) -> None:
        """Raise InvalidParameterError if the parameter set is inconsistent."""
        if not isinstance(self.n, int) or self.n < 1:
            raise InvalidParameterError(f"n must be a positive integer, got {self.n}")
        for name in _FINITE_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameterError(
                    f"{name} must be finite, got {getattr(self, name)}"
                )
        if self.min_height > self.max_height:
            raise InvalidParameterError(
                f"min_height ({self.min_height}) exceeds max_height ({self.max_height})"
            )
        if self.min_random_range > self.max_random_range:
            raise InvalidParameterError(
                f"min_random_range ({self.min_random_range}) exceeds "
                f"max_random_range ({self.max_random_range})"
            )
        if not 0.0 <= self.roughness <= 1.0:
            raise InvalidParameterError(
                f"roughness must be within [0, 1], got {self.roughness}"
            )
        self._validate_preset_sides()

    def _validate_preset_sides(self) -> None:
        if self.preset_sides is None and self.sides is None:
            return
        if self.preset_sides is None or self.sides is None:
            raise InvalidParameterError(
                "preset_sides and sides must be supplied together"
            )
        if len(self.preset_sides) != 4:
            raise InvalidParameterError(
                f"preset_sides must hold 4 entries, got {len(self.preset_sides)}"
            )
        if len(set(self.sides)) != len(self.sides):
            raise InvalidParameterError(f"Duplicate edge index in sides {self.sides}")

        for side in self.sides:
            if side not in EDGE_NAMES:
                raise InvalidParameterError(
                    f"Edge index must be one of 0-3, got {side}"
                )
            values = self.preset_sides[side]
            if values is None:
                raise InvalidParameterError(
                    f"Edge {side} ({EDGE_NAMES[side]}) is marked but has no values"
                )
            if len(values) != self.size:
                raise InvalidParameterError(
                    f"Edge {side} ({EDGE_NAMES[side]}) has {len(values)} values, "
                    f"expected {self.size}"
                )
            if not all(math.isfinite(v) for v in values):
                raise InvalidParameterError(
                    f"Edge {side} ({EDGE_NAMES[side]}) contains non-finite values"
                )

    def with_preset_sides(
        self,
        preset_sides: Optional[Sequence[Optional[Sequence[float]]]],
        sides: Optional[Sequence[int]],
    ) -> "GenerationParameters":
        """Return a validated copy that stitches against the given edges."""
        return replace(
            self,
            preset_sides=None if preset_sides is None else tuple(preset_sides),
            sides=None if sides is None else tuple(sides),
        )
