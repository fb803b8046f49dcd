#!/usr/bin/env python3
"""
raytrace - A Python Ray Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
from pathlib import Path

from raytrace.vec3 import Color, Point3
from raytrace.camera import Camera
from raytrace.shapes import Sphere
from raytrace.scene import Scene
from raytrace.materials import Lambertian, Metal, Dielectric
from raytrace.renderer import Renderer, RenderSettings, ConfigurationError
from raytrace.ppm import ImageWriteError
from raytrace.scene_parser import SceneParseError, load_scene

logger = logging.getLogger("raytrace")


def create_diffuse_scene() -> Scene:
    """A single diffuse sphere resting on a diffuse ground sphere."""
    world = Scene()
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.7, 0.3, 0.3))))
    world.add(Sphere(Point3(0, -100.5, -1), 100, Lambertian(Color(0.8, 0.8, 0.0))))
    return world


def create_metal_scene() -> Scene:
    """Diffuse center sphere flanked by two fuzzy metal spheres."""
    world = create_diffuse_scene()
    world.add(Sphere(Point3(1, 0, -1), 0.5, Metal(Color(0.8, 0.6, 0.2), 1.0)))
    world.add(Sphere(Point3(-1, 0, -1), 0.5, Metal(Color(0.8, 0.8, 0.8), 0.3)))
    return world


def create_glass_scene() -> Scene:
    """Metal scene with the left sphere replaced by a hollow glass bubble."""
    world = create_diffuse_scene()
    glass = Dielectric(1.5)
    world.add(Sphere(Point3(1, 0, -1), 0.5, Metal(Color(0.8, 0.6, 0.2), 0.0)))
    world.add(Sphere(Point3(-1, 0, -1), 0.5, glass))
    # Negative radius flips the normals inward, hollowing out the shared glass
    world.add(Sphere(Point3(-1, 0, -1), -0.45, glass))
    return world


SCENES = {
    'diffuse': create_diffuse_scene,
    'metal': create_metal_scene,
    'glass': create_glass_scene,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='raytrace - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene metal --output out.ppm
  python main.py --width 800 --height 400 --samples 200 --output render.png
  python main.py --scene-file scenes/example.json --seed 7
        '''
    )

    parser.add_argument('--width', type=int, default=384, help='Image width (default: 384)')
    parser.add_argument('--height', type=int, default=256, help='Image height (default: 256)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50,
                        help='Ray bounce limit before termination (default: 50)')
    parser.add_argument('--output', type=str, default='out.ppm', help='Output filename (default: out.ppm)')
    parser.add_argument('--scene', type=str, default='metal', choices=sorted(SCENES),
                        help='Built-in scene to render (default: metal)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='JSON scene description; overrides --scene and the render options')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.scene_file:
            world, camera, settings = load_scene(args.scene_file)
            if args.seed is not None:
                settings.seed = args.seed
        else:
            settings = RenderSettings(
                width=args.width,
                height=args.height,
                samples_per_pixel=args.samples,
                max_depth=args.depth,
                seed=args.seed,
            )
            world = SCENES[args.scene]()
            camera = Camera(aspect_ratio=settings.aspect_ratio)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    except SceneParseError as exc:
        logger.error("Invalid scene file: %s", exc)
        return 2

    logger.info("Objects in scene: %d", len(world))

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)
            if pct == 100:
                print()

    if sys.stdout.isatty():
        renderer.set_progress_callback(progress_callback)

    image = renderer.render(world, camera)

    output_path = Path(args.output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        renderer.save_image(image, output_path)
    except (ImageWriteError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
