from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


def to_image(pixels: np.ndarray) -> Image.Image:
    """
    Convert a rendered frame to a PIL image.

    `pixels` is indexed [x, y, channel] (pygame surfarray order), PIL wants
    rows first, so the first two axes are swapped.
    """
    rows = np.ascontiguousarray(np.transpose(pixels, (1, 0, 2)), dtype=np.uint8)
    return Image.fromarray(rows)


def save_frame(pixels: np.ndarray, path: Union[str, Path]) -> Path:
    """Write a rendered frame to disk; the format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_image(pixels).save(path)
    return path
