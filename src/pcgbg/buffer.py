"""
Accumulation buffer for value-plane compositing.

Holds a (width, height, 3) float64 grid. Scalar fields are blended in
one at a time, each rescaled against its own observed range, and the
finished grid is normalized per channel before it is handed to the
encoder.
"""

import logging
from typing import Protocol, Sequence

import numpy as np

logger = logging.getLogger(__name__)

NUM_CHANNELS = 3

DEGENERATE_POLICIES = ("zero", "raise")


class DegenerateFieldError(ValueError):
    """Raised when a field or channel has no dynamic range to normalize."""


class ScalarField(Protocol):
    """Anything that can report a raw value at continuous (x, y).

    ``sample`` must accept numpy arrays and broadcast over them.
    """

    def sample(self, x, y): ...


def normalized(val, lo, hi):
    """Rescale ``val`` from [lo, hi] to [0, 1]."""
    return (val - lo) / (hi - lo)


class AccumulationBuffer:
    """
    Three-channel compositing grid.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.
        degenerate: What to do with a zero-range field or channel.
            "zero" treats it as contributing nothing, "raise" raises
            DegenerateFieldError.
    """

    def __init__(self, width: int, height: int, degenerate: str = "zero"):
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")
        if degenerate not in DEGENERATE_POLICIES:
            raise ValueError(
                f"Unknown degenerate policy {degenerate!r}, expected one of {DEGENERATE_POLICIES}"
            )
        self.width = int(width)
        self.height = int(height)
        self.degenerate = degenerate
        self.vals = np.zeros((self.width, self.height, NUM_CHANNELS), dtype=np.float64)

    def _grid(self) -> tuple[np.ndarray, np.ndarray]:
        xs = np.arange(self.width, dtype=np.float64)
        ys = np.arange(self.height, dtype=np.float64)
        return np.meshgrid(xs, ys, indexing="ij")

    def _check_range(self, lo: float, hi: float, what: str) -> bool:
        """Returns True when [lo, hi] can be normalized."""
        if hi > lo:
            return True
        if self.degenerate == "raise":
            raise DegenerateFieldError(f"{what} has zero dynamic range (min=max={lo})")
        logger.warning("%s has zero dynamic range (min=max=%s), flattening to 0", what, lo)
        return False

    def blend(self, field: ScalarField, channel_weights: Sequence[float]):
        """
        Add a scalar field to the buffer.

        The field is sampled over the whole grid, rescaled to [0, 1] by
        its own min and max, then added to each channel times that
        channel's weight.

        Args:
            field: Object with a vectorized ``sample(x, y)``.
            channel_weights: Exactly three per-channel multipliers.
        """
        weights = np.asarray(channel_weights, dtype=np.float64)
        if weights.shape != (NUM_CHANNELS,):
            raise ValueError(
                f"Expected {NUM_CHANNELS} channel weights, got {len(channel_weights)}"
            )

        # Pass 1: raw values and their range
        xs, ys = self._grid()
        raw = np.broadcast_to(
            np.asarray(field.sample(xs, ys), dtype=np.float64), xs.shape
        )
        lo, hi = float(raw.min()), float(raw.max())
        logger.debug("blend %s: range [%s, %s], weights %s", type(field).__name__, lo, hi, weights)

        if not self._check_range(lo, hi, type(field).__name__):
            return

        # Pass 2: rescale against the field's own range
        plane = normalized(raw, lo, hi)
        self.vals += plane[:, :, np.newaxis] * weights

    def normalize(self):
        """Rescale every channel independently to exactly [0, 1]."""
        for c in range(NUM_CHANNELS):
            channel = self.vals[:, :, c]
            lo, hi = float(channel.min()), float(channel.max())
            if self._check_range(lo, hi, f"channel {c}"):
                self.vals[:, :, c] = normalized(channel, lo, hi)
            else:
                self.vals[:, :, c] = 0.0

    def get(self, x: int, y: int, channel: int) -> float:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} buffer")
        if not 0 <= channel < NUM_CHANNELS:
            raise IndexError(f"Channel {channel} outside 0..{NUM_CHANNELS - 1}")
        return float(self.vals[x, y, channel])
