#!/usr/bin/env python3
"""Render the sphere-on-ground scene.

This script renders a small sphere resting on a large ground sphere under a
sky gradient, writes the result as a plain-text PPM image and converts it to
PNG.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH          Image width in pixels (default: 400)
    --aspect-ratio RATIO   Width / height (default: 16/9)
    --samples SAMPLES      Samples per pixel (default: 100)
    --max-depth DEPTH      Maximum ray bounces (default: 50)
    --sampling METHOD      rejection, inverse_cdf or gaussian (default: inverse_cdf)
    --shading MODE         diffuse, normals, flat or gradient (default: diffuse)
    --scene NAME           ground or single (default: ground)
    --seed SEED            Random seed for reproducible renders
    --output OUTPUT        Output PPM path (default: spheres.ppm)
    --no-png               Keep only the PPM, skip PNG conversion
    --keep-ppm             Keep the PPM after PNG conversion
    --preview              Show the result in a Matplotlib window
    --quiet                Suppress progress output
    --verbose              Enable debug logging

Example:
    python examples/render_spheres.py --width 200 --samples 20 --seed 42
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from weekend_tracer.core.integrator import MAX_DEPTH, SHADING_MODES
from weekend_tracer.core.sampling import DEFAULT_SAMPLING_METHOD, SAMPLING_METHODS

if TYPE_CHECKING:
    from weekend_tracer.core.renderer import Renderer


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sphere-on-ground scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Image aspect ratio, width / height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum ray bounces (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--sampling",
        choices=SAMPLING_METHODS,
        default=DEFAULT_SAMPLING_METHOD,
        help=f"Scatter direction sampler (default: {DEFAULT_SAMPLING_METHOD})",
    )
    parser.add_argument(
        "--shading",
        choices=SHADING_MODES,
        default="diffuse",
        help="Shading mode (default: diffuse)",
    )
    parser.add_argument(
        "--scene",
        choices=("ground", "single"),
        default="ground",
        help="Preset scene (default: ground)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible renders",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.ppm",
        help="Output PPM path (default: spheres.ppm)",
    )
    parser.add_argument(
        "--no-png",
        action="store_true",
        help="Skip PNG conversion",
    )
    parser.add_argument(
        "--keep-ppm",
        action="store_true",
        help="Keep the PPM after PNG conversion",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 400,
    aspect_ratio: float = 16.0 / 9.0,
    num_samples: int = 100,
    max_depth: int = MAX_DEPTH,
    sampling_method: str = DEFAULT_SAMPLING_METHOD,
    shading: str = "diffuse",
    scene_name: str = "ground",
    seed: int | None = None,
    output_path: str = "spheres.ppm",
    quiet: bool = False,
) -> tuple[Path, Renderer]:
    """Render a preset scene and write it as PPM.

    Args:
        width: Image width in pixels.
        aspect_ratio: Width divided by height.
        num_samples: Number of samples per pixel.
        max_depth: Maximum ray bounces.
        sampling_method: Unit-sphere sampler name.
        shading: Shading mode.
        scene_name: "ground" or "single".
        seed: Random seed, or None for a nondeterministic render.
        output_path: Output PPM path.
        quiet: If True, suppress progress output.

    Returns:
        Tuple of (path to the PPM file, Renderer).
    """
    from weekend_tracer.core.renderer import Renderer, RenderSettings
    from weekend_tracer.preview.export import write_ppm
    from weekend_tracer.scene.presets import (
        GroundSceneParams,
        create_ground_scene,
        create_single_sphere_scene,
    )

    if scene_name == "single":
        scene, camera = create_single_sphere_scene(aspect_ratio)
    else:
        scene, camera = create_ground_scene(GroundSceneParams(aspect_ratio=aspect_ratio))

    settings = RenderSettings.from_aspect_ratio(
        width,
        aspect_ratio,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        sampling_method=sampling_method,
        shading=shading,
        seed=seed,
    )
    renderer = Renderer(scene, camera, settings)

    if not quiet:
        print(
            f"Rendering {settings.width}x{settings.height} "
            f"with {num_samples} samples per pixel..."
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Scanlines: {current}/{target} ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = write_ppm(output_path, renderer.get_image_uint8())

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file, renderer


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        ppm_file, renderer = render_spheres(
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            num_samples=args.samples,
            max_depth=args.max_depth,
            sampling_method=args.sampling,
            shading=args.shading,
            scene_name=args.scene,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.no_png:
        from weekend_tracer.preview.export import convert_to_png

        # The PPM stays on disk if conversion fails
        try:
            png_file = convert_to_png(ppm_file, remove_source=not args.keep_ppm)
        except RuntimeError as e:
            print(f"Error: {e}", file=sys.stderr)
        else:
            if not args.quiet:
                print(f"Converted to: {png_file.absolute()}")

    if args.preview:
        from weekend_tracer.preview.display import show_preview

        show_preview(renderer.get_image_numpy())

    return 0


if __name__ == "__main__":
    sys.exit(main())
