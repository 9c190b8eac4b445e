import numpy as np
from PIL import Image

from softraster.image import save_frame, to_image


def _frame() -> np.ndarray:
    pixels = np.zeros((4, 3, 3), dtype=np.uint8)
    pixels[3, 1] = (10, 20, 30)
    return pixels


def test_to_image_swaps_to_row_major() -> None:
    img = to_image(_frame())
    assert img.size == (4, 3)
    assert img.mode == "RGB"
    assert img.getpixel((3, 1)) == (10, 20, 30)
    assert img.getpixel((1, 3 - 1)) == (0, 0, 0)


def test_save_frame_creates_missing_directories(tmp_path) -> None:
    path = save_frame(_frame(), tmp_path / "shots" / "frame.png")
    assert path.exists()
    with Image.open(path) as img:
        assert img.size == (4, 3)
        assert img.convert("RGB").getpixel((3, 1)) == (10, 20, 30)
