#!/usr/bin/env python3
"""
raylume - A Python Monte-Carlo Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from raylume.image import save_image
from raylume.renderer import Renderer, RenderSettings
from raylume.scenes import SCENES, build_scene


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='raylume - A Python Monte-Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene ground --output render.png
  python main.py --scene random --width 1200 --samples 500 --output cover.png
  python main.py --scene materials --seed 7 --workers 8 --processes
        '''
    )

    parser.add_argument('--width', type=int, default=400, help='Image width (default: 400)')
    parser.add_argument('--samples', type=int, default=10, help='Samples per pixel (default: 10)')
    parser.add_argument('--depth', type=int, default=10, help='Max bounce depth (default: 10)')
    parser.add_argument('--workers', type=int, default=0, help='Number of workers (0=auto)')
    parser.add_argument('--processes', action='store_true',
                        help='Render on a process pool instead of threads')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='ground', choices=sorted(SCENES),
                        help='Scene to render (default: ground)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        settings = RenderSettings(
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            num_workers=args.workers,
            use_processes=args.processes,
            seed=args.seed,
        )
        world, camera = build_scene(args.scene, args.width, args.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Scene: {args.scene} ({len(world)} objects)")
    print(f"  Resolution: {camera.image_width}x{camera.image_height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Workers: {settings.num_workers}")

    renderer = Renderer(settings)

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

    start_time = time.time()
    image = renderer.render(world, camera)
    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Samples per second: "
          f"{(camera.image_width * camera.image_height * settings.samples_per_pixel) / max(elapsed, 1e-9):.0f}")

    output_path = Path(args.output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_image(image, output_path)
    except (OSError, ValueError) as e:
        print(f"Error: could not save {output_path}: {e}", file=sys.stderr)
        return 1

    print(f"Saved to: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
