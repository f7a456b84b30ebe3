"""
Distance fields.

Scalar field measuring how far each cell is from a reference point under
one of several metrics, optionally on a torus (edges identified).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np

Vec2D = Tuple[float, float]


class DistanceType(Enum):
    MANHATTAN = "manhattan"
    # Squared distance, no square root. Kept under this name on purpose.
    EUCLIDEAN = "euclidean"
    EUCLIDEAN2 = "euclidean2"
    CHEBYSHEV = "chebyshev"
    MIN_XY = "min_xy"


def metric(distance_type: DistanceType, dx, dy):
    """Reduce an absolute (dx, dy) delta to a scalar distance."""
    dx = np.abs(dx)
    dy = np.abs(dy)
    if distance_type is DistanceType.MANHATTAN:
        return dx + dy
    if distance_type is DistanceType.EUCLIDEAN:
        return dx ** 2 + dy ** 2
    if distance_type is DistanceType.EUCLIDEAN2:
        return np.sqrt(dx ** 2 + dy ** 2)
    if distance_type is DistanceType.CHEBYSHEV:
        return np.maximum(dx, dy)
    if distance_type is DistanceType.MIN_XY:
        return np.minimum(dx, dy)
    raise ValueError(f"Unknown distance type: {distance_type!r}")


@dataclass(frozen=True)
class DistanceField:
    """
    Distance from ``center`` over a domain of extent ``size``.

    With ``wrap`` each axis wraps independently (closest tiled image of
    the center wins). With ``reverse_distance`` the output is
    ``max_distance - dist``, where ``max_distance`` is the metric applied
    to ``size / 2`` when wrapping, else to the per-axis farthest edge
    ``max(center, size - center)``.
    """

    distance_type: DistanceType
    size: Vec2D
    center: Vec2D
    wrap: bool = False
    reverse_distance: bool = False
    max_distance: float = field(init=False, repr=False)

    def __post_init__(self):
        sx, sy = self.size
        cx, cy = self.center
        if self.wrap:
            far_x, far_y = sx / 2.0, sy / 2.0
        else:
            far_x, far_y = max(cx, sx - cx), max(cy, sy - cy)
        object.__setattr__(
            self, "max_distance", float(metric(self.distance_type, far_x, far_y))
        )

    def distance(self, point):
        x, y = point
        sx, sy = self.size
        cx, cy = self.center

        dx = np.abs(x - cx)
        dy = np.abs(y - cy)
        if self.wrap:
            dx = np.minimum(dx, np.minimum(np.abs(x - sx - cx), np.abs(x + sx - cx)))
            dy = np.minimum(dy, np.minimum(np.abs(y - sy - cy), np.abs(y + sy - cy)))

        dist = metric(self.distance_type, dx, dy)
        if self.reverse_distance:
            return self.max_distance - dist
        return dist

    def sample(self, x, y):
        return self.distance((x, y))


def sample_distance_field(rng: np.random.Generator, width: int, height: int) -> DistanceField:
    """Draw a random distance field covering a width x height grid."""
    types = list(DistanceType)
    distance_type = types[int(rng.integers(0, len(types)))]
    center = (
        float(rng.uniform(0.0, width)),
        float(rng.uniform(0.0, height)),
    )
    wrap = bool(rng.integers(0, 2))
    reverse_distance = bool(rng.integers(0, 2))
    return DistanceField(
        distance_type=distance_type,
        size=(float(width), float(height)),
        center=center,
        wrap=wrap,
        reverse_distance=reverse_distance,
    )
