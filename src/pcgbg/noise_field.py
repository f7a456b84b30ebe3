"""
Coherent noise fields.

fBm Perlin noise from the ``noise`` package, scaled spatially. The
integer seed picks a fixed offset into the noise domain so that a
(seed, scale) pair always reproduces the same field.
"""

from dataclasses import dataclass, field

import noise
import numpy as np

# pnoise2 tiles with this period by default; offsets stay inside one tile.
NOISE_PERIOD = 1024.0


@dataclass(frozen=True)
class NoiseField:
    """fBm noise sampled at (x * scale, y * scale)."""

    seed: int
    scale: float
    octaves: int = 6
    persistence: float = 0.5
    lacunarity: float = 2.0
    offset: tuple = field(init=False, repr=False)

    def __post_init__(self):
        rng = np.random.default_rng(self.seed)
        off_x, off_y = rng.uniform(0.0, NOISE_PERIOD, size=2)
        object.__setattr__(self, "offset", (float(off_x), float(off_y)))

    def _point(self, x: float, y: float) -> float:
        off_x, off_y = self.offset
        return noise.pnoise2(
            x * self.scale + off_x,
            y * self.scale + off_y,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
        )

    def sample(self, x, y):
        # pnoise2 is not vectorized
        xs, ys = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
        )
        out = np.empty(xs.shape, dtype=np.float64)
        for idx in np.ndindex(xs.shape):
            out[idx] = self._point(float(xs[idx]), float(ys[idx]))
        return float(out) if out.ndim == 0 else out


def sample_noise_field(rng: np.random.Generator, scale: float, **kwargs) -> NoiseField:
    """Draw a fresh seed from ``rng`` and build a noise field at ``scale``."""
    seed = int(rng.integers(0, 2 ** 32))
    return NoiseField(seed=seed, scale=scale, **kwargs)
