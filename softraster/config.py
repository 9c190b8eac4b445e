from dataclasses import dataclass


# ============================================================
#  Render options (runtime toggles)
# ============================================================

SHADING_AMBIENT = "ambient"
SHADING_LAMBERT = "lambert"
SHADING_MODES = (SHADING_AMBIENT, SHADING_LAMBERT)


@dataclass
class RenderConfig:
    """
    Per-frame render options.

      shading        - "ambient": every triangle painted with its ambient color
                       "lambert": flat diffuse shading from the scene lights
      cull_backfaces - drop cullable triangles facing away from the camera
      ambient_factor - weight of the ambient color in lambert mode
    """
    shading: str = SHADING_AMBIENT
    cull_backfaces: bool = False
    ambient_factor: float = 0.25

    def __post_init__(self):
        if self.shading not in SHADING_MODES:
            raise ValueError(
                f"unknown shading mode {self.shading!r}, expected one of {SHADING_MODES}"
            )
        if not 0.0 <= self.ambient_factor <= 1.0:
            raise ValueError(f"ambient_factor must be in [0, 1], got {self.ambient_factor}")
