import argparse
import logging
import math
import time
from typing import Mapping, Optional, Sequence

import pygame

from .camera import Camera
from .config import SHADING_AMBIENT, SHADING_LAMBERT, SHADING_MODES, RenderConfig
from .image import save_frame
from .raster import warmup
from .scene import Scene, SceneLight, SceneObject
from .vector import Vec3

logger = logging.getLogger(__name__)

MOVE_SPEED = 5.0    # world units per second
TURN_SPEED = 2.0    # radians per second


# ============================================================
#  Demo scene
# ============================================================

def demo_scene() -> Scene:
    """Three colored cubes in front of the camera, plus one white light."""
    scene = Scene()

    cube1 = SceneObject.colored_unit_cube(Vec3(0, 0, 5))
    cube1.transform.set_rot_x(-0.2 * math.pi)
    scene.objects.append(cube1)

    cube2 = SceneObject.colored_unit_cube(Vec3(1, 1, 6))
    cube2.transform.set_rot_x(0.2 * math.pi)
    scene.objects.append(cube2)

    cube3 = SceneObject.colored_unit_cube(Vec3(0, 2, 6))
    cube3.transform.set_rot_y(1.2 * math.pi)
    scene.objects.append(cube3)

    scene.lights.append(SceneLight(Vec3(-3, 4, 0), Vec3(255, 255, 255), 1.0))
    return scene


def animate(scene: Scene, dt: float):
    """Spin the demo cubes; dt in seconds."""
    scene.objects[0].transform.change_rot_y(0.1 * dt * math.pi)
    scene.objects[1].transform.change_rot_y(-0.05 * dt * math.pi)
    scene.objects[2].transform.change_rot_x(0.05 * dt * math.pi)


# ============================================================
#  Input handling
# ============================================================

def apply_controls(camera: Camera, keys: Mapping[int, bool], dt: float):
    """
    Continuous key controls (held keys, scaled by frame time).

      arrows - move forward/backward/left/right
      Q / E  - move down/up
      A / D  - yaw,  W / S - pitch
    """
    move = MOVE_SPEED * dt
    turn = TURN_SPEED * dt

    if keys[pygame.K_UP]:
        camera.move_forward(move)
    if keys[pygame.K_DOWN]:
        camera.move_backward(move)
    if keys[pygame.K_LEFT]:
        camera.move_left(move)
    if keys[pygame.K_RIGHT]:
        camera.move_right(move)
    if keys[pygame.K_e]:
        camera.move_up(move)
    if keys[pygame.K_q]:
        camera.move_down(move)

    if keys[pygame.K_a]:
        camera.turn(yaw=turn)
    if keys[pygame.K_d]:
        camera.turn(yaw=-turn)
    if keys[pygame.K_w]:
        camera.turn(pitch=turn)
    if keys[pygame.K_s]:
        camera.turn(pitch=-turn)


# ============================================================
#  Main loop
# ============================================================

def run_window(width: int, height: int, camera: Camera, scene: Scene, config: RenderConfig):
    """
    Interactive loop:
      - handle input
      - animate the scene
      - render and present the frame
    """
    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Software Rasterizer: arrows/QE move, WASD look, C cull, L light, P shot")

    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 14)

    running = True
    while running:
        dt = clock.tick() / 1000.0
        logger.debug("%.2f ms", 1000.0 * dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                # Backface culling
                elif event.key == pygame.K_c:
                    config.cull_backfaces = not config.cull_backfaces

                # Shading toggle
                elif event.key == pygame.K_l:
                    config.shading = (SHADING_LAMBERT if config.shading == SHADING_AMBIENT
                                      else SHADING_AMBIENT)

                elif event.key == pygame.K_p:
                    path = save_frame(camera.render(width, height, scene, config),
                                      f"frame_{int(time.time())}.png")
                    logger.info("saved %s", path)

        apply_controls(camera, pygame.key.get_pressed(), dt)
        animate(scene, dt)

        pixels = camera.render(width, height, scene, config)

        # ====================================================
        #  Present frame
        # ====================================================
        pygame.surfarray.blit_array(screen, pixels)

        hud = (f"{config.shading.upper()} | Cull(C): {config.cull_backfaces} | "
               f"Tris: {scene.primitive_count()} | FPS: {clock.get_fps():.1f}")
        screen.blit(font.render(hud, True, (235, 235, 235)), (6, 6))

        pygame.display.flip()

    pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CPU scanline rasterizer demo")
    parser.add_argument("--width", type=int, default=400)
    parser.add_argument("--height", type=int, default=300)
    parser.add_argument("--shading", choices=SHADING_MODES, default=SHADING_AMBIENT)
    parser.add_argument("--cull", action="store_true", help="enable backface culling")
    parser.add_argument("--log-stages", action="store_true",
                        help="log render pipeline stage boundaries")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging (frame times)")
    parser.add_argument("--snapshot", metavar="PATH",
                        help="render a single frame to PATH without opening a window")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    if args.width <= 0 or args.height <= 0:
        logger.error("canvas size must be positive, got %dx%d", args.width, args.height)
        return 2

    config = RenderConfig(shading=args.shading, cull_backfaces=args.cull)
    scene = demo_scene()
    camera = Camera()
    camera.render_process_logs = args.log_stages

    warmup()

    if args.snapshot:
        path = save_frame(camera.render(args.width, args.height, scene, config), args.snapshot)
        logger.info("saved %s", path)
        return 0

    run_window(args.width, args.height, camera, scene, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
