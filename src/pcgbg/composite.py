"""
Layer compositor.

Samples configured value planes from one seeded generator, blends each
into an accumulation buffer with its channel weights, and normalizes
the result once.
"""

import time
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from pcgbg.buffer import NUM_CHANNELS, AccumulationBuffer
from pcgbg.distance import sample_distance_field
from pcgbg.encoder import quantize
from pcgbg.fractal import sample_fractal_classifier
from pcgbg.noise_field import NoiseField, sample_noise_field

LAYER_KINDS = ("noise", "distance", "fractal")


@dataclass(frozen=True)
class LayerSpec:
    """One value plane and the weights it contributes to (r, g, b)."""

    kind: str
    weights: Tuple[float, float, float]

    def __post_init__(self):
        if self.kind not in LAYER_KINDS:
            raise ValueError(f"Unknown layer kind {self.kind!r}, expected one of {LAYER_KINDS}")
        if len(self.weights) != NUM_CHANNELS:
            raise ValueError(
                f"Layer {self.kind!r} needs {NUM_CHANNELS} weights, got {len(self.weights)}"
            )
        object.__setattr__(self, "weights", tuple(float(w) for w in self.weights))


DEFAULT_LAYERS = (
    LayerSpec("noise", (1.4, 0.1, 0.0)),
    LayerSpec("distance", (0.0, 0.1, 0.5)),
    LayerSpec("fractal", (0.2, 0.3, 0.4)),
)


@dataclass
class CompositeConfig:
    """Configuration for a composite render."""

    width: int = 500
    height: int = 500
    scale: float = 0.005  # noise spatial frequency
    seed: int | None = None
    layers: Tuple[LayerSpec, ...] = field(default_factory=lambda: DEFAULT_LAYERS)
    degenerate: str = "zero"  # "zero" or "raise"


def parse_layer(text: str) -> LayerSpec:
    """Parse ``kind:r,g,b`` into a LayerSpec."""
    kind, sep, weights = text.partition(":")
    if not sep:
        raise ValueError(f"Layer {text!r} must look like kind:r,g,b")
    try:
        values = tuple(float(w) for w in weights.split(","))
    except ValueError:
        raise ValueError(f"Layer {text!r} has non-numeric weights") from None
    return LayerSpec(kind.strip().lower(), values)


def resolve_seed(seed: int | None = None) -> int:
    """Return ``seed`` if given, otherwise a 32-bit seed from the wall clock."""
    if seed is not None:
        return int(seed)
    now = time.time_ns()
    return ((now // 1_000_000_000) ^ (now % 1_000_000_000)) & 0xFFFFFFFF


def sample_layer(rng: np.random.Generator, kind: str, width: int, height: int, scale: float):
    """Draw a randomly configured scalar field of the given kind."""
    if kind == "noise":
        return sample_noise_field(rng, scale)
    if kind == "distance":
        return sample_distance_field(rng, width, height)
    if kind == "fractal":
        return sample_fractal_classifier(rng, width, height)
    raise ValueError(f"Unknown layer kind {kind!r}, expected one of {LAYER_KINDS}")


def compose(config: CompositeConfig, rng: np.random.Generator) -> AccumulationBuffer:
    """
    Build and normalize a composite buffer.

    Layers are sampled in order from ``rng``, so a seeded generator
    reproduces the same buffer bit for bit.
    """
    buf = AccumulationBuffer(config.width, config.height, degenerate=config.degenerate)
    for layer in config.layers:
        plane = sample_layer(rng, layer.kind, config.width, config.height, config.scale)
        buf.blend(plane, layer.weights)
    buf.normalize()
    return buf


def render(config: CompositeConfig) -> tuple[AccumulationBuffer, int]:
    """Resolve the seed and compose. Returns (buffer, seed used)."""
    seed = resolve_seed(config.seed)
    rng = np.random.default_rng(seed)
    return compose(config, rng), seed


def render_noise_channels(
    width: int,
    height: int,
    scale: float,
    seed: int,
    persistence: float = 0.25,
) -> np.ndarray:
    """
    Plain noise image, one independent fBm field per channel.

    Channel c uses seed ``seed ^ c``. Raw noise values map straight to
    bytes, so negative noise clamps to black.

    Returns:
        (H, W, 3) uint8 RGB array.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    rgb = np.zeros((height, width, NUM_CHANNELS), dtype=np.uint8)
    for c in range(NUM_CHANNELS):
        field_c = NoiseField(seed=seed ^ c, scale=scale, persistence=persistence)
        rgb[:, :, c] = quantize(field_c.sample(xs, ys))
    return rgb
