"""
PNG encoder.

Turns a normalized accumulation buffer into 8-bit RGB rows and writes
them with Pillow. No intermediate files.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from pcgbg.buffer import AccumulationBuffer


def quantize(values: np.ndarray) -> np.ndarray:
    """Map [0, 1] floats to uint8 via round(v * 255), clamped."""
    return np.clip(np.rint(np.asarray(values) * 255.0), 0, 255).astype(np.uint8)


def buffer_to_rgb(buffer: AccumulationBuffer) -> np.ndarray:
    """
    Materialize a normalized buffer as an image array.

    Args:
        buffer: Buffer whose channels are already in [0, 1].

    Returns:
        (H, W, 3) uint8 RGB array, row-major, origin top-left.
    """
    # Buffer is indexed [x, y, c]; images are [row, col, c]
    return quantize(buffer.vals.transpose(1, 0, 2))


def save_png(rgb: np.ndarray, output_path: Path) -> Path:
    """
    Write an RGB array to a PNG file.

    Args:
        rgb: (H, W, 3) uint8 array.
        output_path: Destination path. Parent directories are created.

    Returns:
        Path to the written file.
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) array, got shape {rgb.shape}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(output_path, format="PNG")
    return output_path
