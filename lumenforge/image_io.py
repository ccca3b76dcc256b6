"""
Image output.

Rendered buffers are row-major with the top row first; every writer here
keeps that order. Float buffers are tone mapped with ``to_ldr`` before
encoding.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import TextIO, Union

import numpy as np
from PIL import Image as PILImage

from .renderer import to_ldr

logger = logging.getLogger(__name__)

MAX_COLOR_CHANNEL = 255


def _as_ldr(image: np.ndarray) -> np.ndarray:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {image.shape}")
    if image.dtype == np.uint8:
        return image
    return to_ldr(image)


def format_ppm(image: np.ndarray) -> str:
    """Serialize an image as plain-text (P3) PPM.

    Args:
        image: Linear float or uint8 image of shape (height, width, 3)

    Returns:
        The PPM document, one pixel triple per line
    """
    ldr = _as_ldr(image)
    height, width = ldr.shape[:2]
    lines = [f"P3\n{width} {height}\n{MAX_COLOR_CHANNEL}"]
    lines.extend(f"{r} {g} {b}" for r, g, b in ldr.reshape(-1, 3))
    return "\n".join(lines) + "\n"


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write an image as plain-text PPM to an open text stream."""
    stream.write(format_ppm(image))


def write_image(image: np.ndarray, filename: Union[str, Path]) -> None:
    """Save image to file.

    Args:
        image: Image array (linear float or uint8)
        filename: Output filename (extension determines format)
    """
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    pil_image = PILImage.fromarray(np.ascontiguousarray(_as_ldr(image)))
    pil_image.save(path)
    logger.info("Wrote %dx%d image to %s", pil_image.width, pil_image.height, path)
