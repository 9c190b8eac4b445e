import numpy as np

SUPERSAMPLE = 2


class Framebuffer:
    """
    Supersampled depth + color buffer for a single frame.

    Storage:
      - depth: float64, shape (W, H), seeded with `clear_depth`
      - color: float64, shape (W, H, 3), 0..255 per channel, seeded black
      - indexed [x, y] like pygame.surfarray, W = 2 * canvas_width

    Both arrays are allocated once per frame and dropped after downsample().
    """
    def __init__(self, width: int, height: int, clear_depth: float):
        self.width = width
        self.height = height
        self.depth = np.full((width, height), clear_depth, dtype=np.float64)
        self.color = np.zeros((width, height, 3), dtype=np.float64)

    @classmethod
    def for_canvas(cls, canvas_width: int, canvas_height: int, clear_depth: float) -> "Framebuffer":
        return cls(SUPERSAMPLE * canvas_width, SUPERSAMPLE * canvas_height, clear_depth)

    def downsample(self) -> np.ndarray:
        """
        Box filter every 2x2 block into one output pixel.

        Cells (2x,2y), (2x+1,2y), (2x+1,2y+1), (2x,2y+1) are averaged per
        channel, truncated toward zero and returned as uint8 of shape
        (canvas_width, canvas_height, 3).
        """
        c = self.color
        avg = 0.25 * (c[0::2, 0::2] + c[1::2, 0::2] + c[1::2, 1::2] + c[0::2, 1::2])
        return np.clip(np.trunc(avg), 0, 255).astype(np.uint8)
