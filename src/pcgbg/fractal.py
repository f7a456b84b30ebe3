"""
Fixed-iteration fractal classifier.

Vectorized with numpy, no per-pixel Python loops. Each grid point is
mapped onto the complex plane, pushed through a real-coefficient
polynomial a fixed number of times, then labelled by its nearest
attractor point. Outputs are class ids rescaled to [0, 1].
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class FractalClassifier:
    """Polynomial-iteration field classified by nearest attractor."""

    width: float
    height: float
    coefficients: tuple
    iterations: int
    points: tuple

    def __post_init__(self):
        if len(self.coefficients) < 1:
            raise ValueError("FractalClassifier needs at least one coefficient")
        if len(self.points) < 2:
            raise ValueError(
                f"FractalClassifier needs at least 2 attractor points, got {len(self.points)}"
            )
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        object.__setattr__(self, "coefficients", tuple(float(c) for c in self.coefficients))
        object.__setattr__(self, "points", tuple(complex(p) for p in self.points))

    def map_to_plane(self, x, y):
        """Map grid coordinates onto the complex plane.

        The domain midpoint lands on the origin and the shorter side
        spans [-1, 1].
        """
        shortest = min(self.width, self.height)
        re = (np.asarray(x, dtype=np.float64) - self.width / 2.0) / shortest * 2.0
        im = (np.asarray(y, dtype=np.float64) - self.height / 2.0) / shortest * 2.0
        z = re + 1j * im
        return complex(z) if z.ndim == 0 else z

    def iterate(self, z):
        """Apply z <- sum(coefficients[i] * z**i) ``iterations`` times."""
        z = np.asarray(z, dtype=np.complex128)
        with np.errstate(over="ignore", invalid="ignore"):
            for _ in range(self.iterations):
                next_z = np.zeros_like(z)
                for power, coefficient in enumerate(self.coefficients):
                    next_z = next_z + coefficient * z ** power
                z = next_z
        return complex(z) if z.ndim == 0 else z

    def classify(self, z):
        """Index of the nearest attractor point, lowest index on ties."""
        z = np.asarray(z, dtype=np.complex128)
        points = np.asarray(self.points, dtype=np.complex128)
        with np.errstate(over="ignore", invalid="ignore"):
            dists = np.abs(z[..., np.newaxis] - points)
        # Diverged iterates compare as infinitely far from everything
        dists = np.where(np.isnan(dists), np.inf, dists)
        index = np.argmin(dists, axis=-1)
        return int(index) if index.ndim == 0 else index

    def sample(self, x, y):
        index = self.classify(self.iterate(self.map_to_plane(x, y)))
        return np.asarray(index, dtype=np.float64) / (len(self.points) - 1)


def sample_fractal_classifier(
    rng: np.random.Generator,
    width: int,
    height: int,
    num_coefficients: int = 3,
    num_points: int = 5,
    iterations: int = 4,
) -> FractalClassifier:
    """
    Draw a random fractal classifier.

    Coefficients are uniform in [0.1, 3.0). Attractor points are drawn in
    polar form, radius uniform in [0.1, 1.5) and angle in [0, 2*pi).
    """
    coefficients = [float(rng.uniform(0.1, 3.0)) for _ in range(num_coefficients)]
    points = []
    for _ in range(num_points):
        radius = float(rng.uniform(0.1, 1.5))
        angle = float(rng.uniform(0.0, 2.0 * math.pi))
        points.append(complex(radius * math.cos(angle), radius * math.sin(angle)))
    return FractalClassifier(
        width=float(width),
        height=float(height),
        coefficients=tuple(coefficients),
        iterations=iterations,
        points=tuple(points),
    )

