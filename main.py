#!/usr/bin/env python3
"""
LumenForge - A Python Ray Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time

import numpy as np

from lumenforge.vec3 import Vec3, Point3
from lumenforge.camera import Camera
from lumenforge.scene import single_sphere_scene, demo_scene, random_scene
from lumenforge.renderer import Renderer, RenderSettings
from lumenforge.image_io import write_image, write_ppm
from lumenforge.scene_parser import load_scene
from lumenforge.errors import LumenForgeError

logger = logging.getLogger("lumenforge")


def build_builtin_scene(name: str, settings: RenderSettings):
    """Return (scene, camera) for one of the built-in scenes."""
    if name == 'random':
        world = random_scene(np.random.default_rng(settings.seed))
        camera = Camera(
            look_from=Point3(13, 2, 3),
            look_at=Point3(0, 0, 0),
            vup=Vec3(0, 1, 0),
            vfov=20,
            aspect_ratio=settings.aspect_ratio,
            focus_dist=10.0,
            defocus_angle=0.6
        )
    elif name == 'demo':
        world = demo_scene()
        camera = Camera(
            look_from=Point3(-2, 2, 1),
            look_at=Point3(0, 0, -1),
            vup=Vec3(0, 1, 0),
            vfov=20,
            aspect_ratio=settings.aspect_ratio,
            aperture=0.2,
            focus_dist=3.4
        )
    else:
        world = single_sphere_scene()
        camera = Camera(
            look_from=Point3(0, 0, 0),
            look_at=Point3(0, 0, -1),
            vup=Vec3(0, 1, 0),
            vfov=90,
            aspect_ratio=settings.aspect_ratio
        )
    return world, camera


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='LumenForge - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --scene random --width 1200 --samples 500 --seed 7 --output final.png
  python main.py --scene-file scenes/spheres.yaml --output - > image.ppm
        '''
    )

    parser.add_argument('--width', type=int, default=400, help='Image width (default: 400)')
    parser.add_argument('--aspect-ratio', type=float, default=16 / 9,
                        help='Width / height; height is derived (default: 16/9)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png',
                        help="Output filename, or '-' for plain PPM on stdout")
    scene_group = parser.add_mutually_exclusive_group()
    scene_group.add_argument('--scene', type=str, default='demo', choices=['single', 'demo', 'random'],
                             help='Built-in scene to render (default: demo)')
    scene_group.add_argument('--scene-file', type=str, default=None,
                             help='YAML/JSON scene description; overrides the render flags')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
        stream=sys.stderr
    )

    try:
        if args.scene_file:
            world, camera, settings = load_scene(args.scene_file)
        else:
            settings = RenderSettings(
                width=args.width,
                aspect_ratio=args.aspect_ratio,
                samples_per_pixel=args.samples,
                max_depth=args.depth,
                num_threads=args.threads,
                seed=args.seed
            )
            world, camera = build_builtin_scene(args.scene, settings)
    except LumenForgeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Resolution: %dx%d, samples: %d, max depth: %d, threads: %d",
                settings.width, settings.height, settings.samples_per_pixel,
                settings.max_depth, settings.num_threads)
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
            print(f'\rRendering: [{bar}] {pct}%', end='', file=sys.stderr, flush=True)

    renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    image = renderer.render(world, camera)
    elapsed = time.time() - start_time
    print(file=sys.stderr)

    logger.info("Render completed in %.2f seconds (%.0f samples/s)", elapsed,
                settings.width * settings.height * settings.samples_per_pixel / max(elapsed, 1e-9))

    if args.output == '-':
        write_ppm(image, sys.stdout)
    else:
        write_image(image, args.output)

    return 0


if __name__ == '__main__':
    sys.exit(main())
