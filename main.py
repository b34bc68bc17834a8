"""Wireframe scene viewer: interactive pygame window or one-shot PNG render."""
import argparse
import logging
import sys
from dataclasses import replace

import pygame

from wireview.camera import apply_key
from wireview.config import RenderConfig
from wireview.errors import InvalidViewConfiguration, WireviewError
from wireview.pipeline import render_scene
from wireview.raster import Canvas
from wireview.scene import Scene, default_scene, load_scene
from wireview.view import ProjectionKind


LOGGER = logging.getLogger("wireview")

NAV_KEYS = ("a", "d", "w", "s", "left", "right")


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wireframe scene viewer (parallel / perspective)")
    parser.add_argument("--scene", type=str, default=None,
                        help="Scene JSON file (default: built-in house scene)")
    parser.add_argument("--width", type=int, default=800, help="Framebuffer width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Framebuffer height (default: 600)")
    parser.add_argument("--fps", type=float, default=60.0, help="Target frames per second (default: 60)")
    parser.add_argument("--output", type=str, default=None,
                        help="Render a single frame to this PNG file and exit")
    parser.add_argument("--time", type=float, default=0.0,
                        help="Animation time in seconds for --output (default: 0)")
    parser.add_argument("--no-endpoints", action="store_true",
                        help="Do not mark segment endpoints")
    parser.add_argument("--move-step", type=float, default=1.0,
                        help="World units per W/A/S/D press (default: 1)")
    parser.add_argument("--turn-step", type=float, default=2.0,
                        help="Degrees per arrow-key press (default: 2)")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: WARNING)")
    return parser.parse_args(argv)


def draw_frame(canvas: Canvas, scene: Scene, view, config: RenderConfig, time_s: float) -> int:
    """Clear the canvas and draw one frame; returns the segment count."""
    canvas.clear()
    endpoint_color = config.endpoint_color if config.show_endpoints else None
    segments = render_scene(view, scene.models, config.width, config.height, time_s)
    for seg in segments:
        canvas.draw_segment(seg, config.line_color, endpoint_color)
    return len(segments)


def render_to_file(scene: Scene, config: RenderConfig, path: str, time_s: float) -> None:
    canvas = Canvas(config.width, config.height, config.background)
    count = draw_frame(canvas, scene, scene.view, config, time_s)
    LOGGER.info("%d segments drawn", count)
    canvas.save(path)


def run_window(scene: Scene, config: RenderConfig) -> None:
    """
    Main interactive loop:
      - handle input (camera moves produce a new view snapshot)
      - render the scene with the current snapshot and animation time
      - present frame + HUD
    """
    pygame.init()
    screen = pygame.display.set_mode((config.width, config.height))
    pygame.display.set_caption("Wireframe viewer: WASD move, arrows turn, P/O projections")

    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 16)
    canvas = Canvas(config.width, config.height, config.background)

    view = scene.view
    start_ms = pygame.time.get_ticks()

    running = True
    while running:
        clock.tick(config.fps)

        # ====================================================
        #  Input handling
        # ====================================================
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                key = pygame.key.name(event.key)
                if event.key == pygame.K_ESCAPE:
                    running = False

                # Projection toggles
                elif event.key in (pygame.K_p, pygame.K_o):
                    kind = ProjectionKind.PERSPECTIVE if event.key == pygame.K_p else ProjectionKind.PARALLEL
                    try:
                        view = replace(view, kind=kind).validate()
                    except InvalidViewConfiguration as exc:
                        LOGGER.warning("cannot switch to %s: %s", kind.value, exc)

                elif key in NAV_KEYS:
                    view = apply_key(view, key, config)

        # ====================================================
        #  Draw
        # ====================================================
        time_s = (pygame.time.get_ticks() - start_ms) / 1000.0
        count = draw_frame(canvas, scene, view, config, time_s)
        pygame.surfarray.blit_array(screen, canvas.pixels)

        hud = [
            f"{view.kind.value.upper()} | Segments: {count} | FPS: {clock.get_fps():.1f}",
            "P/O proj | WASD move | LEFT/RIGHT turn | ESC exit",
        ]
        y = 10
        for line in hud:
            screen.blit(font.render(line, True, (40, 40, 40)), (10, y))
            y += 18

        pygame.display.flip()

    pygame.quit()


def main(argv=None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = RenderConfig.from_args(args)
        scene = load_scene(args.scene) if args.scene else default_scene()
    except (WireviewError, OSError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.output:
        render_to_file(scene, config, args.output, args.time)
    else:
        run_window(scene, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
