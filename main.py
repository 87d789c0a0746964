#!/usr/bin/env python3
"""
spherecast - A Whitted-style ray tracer for spheres

Main entry point for rendering scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from spherecast.vec3 import Color, Point3
from spherecast.shapes import Sphere
from spherecast.lights import PointLight
from spherecast.scene import Scene
from spherecast.renderer import Renderer, RenderSettings
from spherecast.output import SinkError
from spherecast.scene_parser import load_scene, SceneParseError


def create_default_scene() -> Scene:
    """Create the four-sphere, two-light reference scene."""
    scene = Scene()

    scene.add(PointLight(Point3(1.0, 2.0, 3.0), 1.4))
    scene.add(PointLight(Point3(3.0, -2.0, -3.0), 1.0))

    scene.add(Sphere(Point3(2.1, 0, -3), 0.8, Color(0.4, 0.4, 0.3), albedo=0.25, specular_exponent=50))
    scene.add(Sphere(Point3(4, 4, -10), 1.5, Color(0.7, 0.3, 0.5), albedo=0.5, specular_exponent=50))
    scene.add(Sphere(Point3(2, -2.5, -5), 1.2, Color(0.3, 0.6, 0.7), albedo=0.5, specular_exponent=50))
    scene.add(Sphere(Point3(-2, 0, -10), 4.2, Color(0.3, 0.1, 0.9), albedo=0.5, specular_exponent=50))

    return scene


def create_single_sphere_scene() -> Scene:
    """One sphere straight ahead of the camera, lit from above and behind."""
    scene = Scene()
    scene.add(Sphere(Point3(0, 0, -5), 1.0, Color(0.4, 0.4, 0.3), albedo=0.5, specular_exponent=50))
    scene.add(PointLight(Point3(-5, 5, 0), 1.5))
    return scene


SCENES = {
    'default': create_default_scene,
    'single': create_single_sphere_scene,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='spherecast - A Whitted-style ray tracer for spheres',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene default --output render.png
  python main.py --width 320 --height 240 --depth 8 --output small.png
  python main.py --scene-file scenes/reference.yaml --threads 0
        '''
    )

    # None means "not given": scene file or RenderSettings default applies
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 1024)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 768)')
    parser.add_argument('--fov', type=float, default=None, help='Field of view in degrees (default: 60)')
    parser.add_argument('--depth', type=int, default=None, help='Max reflection depth (default: 4)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto, default: 1)')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='default', choices=sorted(SCENES),
                        help='Built-in scene to render (default: default)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Apply command line flags that were given on top of settings."""
    if args.width is not None:
        settings.width = args.width
    if args.height is not None:
        settings.height = args.height
    if args.fov is not None:
        settings.fov = math.radians(args.fov)
    if args.depth is not None:
        settings.max_depth = args.depth
    if args.threads is not None:
        # Re-run auto-detection for --threads 0
        settings = RenderSettings(
            width=settings.width,
            height=settings.height,
            fov=settings.fov,
            max_depth=settings.max_depth,
            tile_size=settings.tile_size,
            num_threads=args.threads,
            background_color=settings.background_color
        )
    return settings


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    # Print header
    print("=" * 60)
    print("spherecast Ray Tracer")
    print("=" * 60)

    # Create scene
    if args.scene_file:
        print(f"\nLoading scene: {args.scene_file}")
        try:
            scene, settings = load_scene(args.scene_file)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        print(f"\nCreating scene: {args.scene}")
        scene = SCENES[args.scene]()
        settings = RenderSettings()

    print(f"  Spheres in scene: {len(scene.spheres)}")
    print(f"  Lights in scene: {len(scene.lights)}")

    settings = apply_overrides(settings, args)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Field of view: {math.degrees(settings.fov):.1f} degrees")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

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

    renderer.set_progress_callback(progress_callback)

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print("\nRendering...")
    start_time = time.time()

    try:
        renderer.save_image(scene, output_path)
    except SinkError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Primary rays per second: {(settings.width * settings.height) / max(elapsed, 1e-9):.0f}")

    print(f"\nSaved to: {output_path}")
    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
