#!/usr/bin/env python3
"""Render the demo scene.

This script demonstrates end-to-end rendering of the showcase scene with the
Whitted ray tracer. It builds the scene and camera, renders either in a single
pass or progressively, and reports timing and image statistics.

Usage:
    python -m examples.render_demo [options]

Options:
    --width WIDTH           Image width in pixels (default: 160)
    --height HEIGHT         Image height in pixels (default: 120)
    --samples SAMPLES       Traces per pixel for a single-pass render (default: 1)
    --passes PASSES         Render progressively with this many passes (needs taichi)
    --soft-shadows          Average shading over the whole area light
    --max-recursion DEPTH   Reflection/refraction depth (default: 3)
    --seed SEED             Random seed (default: 0)
    --verbose               Enable debug logging
    --quiet                 Suppress progress output

Example:
    python -m examples.render_demo --width 80 --height 60 --soft-shadows
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

import numpy as np


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=160, help="Image width in pixels (default: 160)")
    parser.add_argument("--height", type=int, default=120, help="Image height in pixels (default: 120)")
    parser.add_argument(
        "--samples",
        type=int,
        default=1,
        help="Traces per pixel for a single-pass render (default: 1)",
    )
    parser.add_argument(
        "--passes",
        type=int,
        default=0,
        help="Render progressively with this many passes (needs taichi)",
    )
    parser.add_argument(
        "--soft-shadows",
        action="store_true",
        help="Average shading over the whole area light",
    )
    parser.add_argument(
        "--max-recursion",
        type=int,
        default=3,
        help="Reflection/refraction depth (default: 3)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_demo(
    width: int = 160,
    height: int = 120,
    samples: int = 1,
    passes: int = 0,
    soft_shadows: bool = False,
    max_recursion: int = 3,
    seed: int = 0,
    quiet: bool = False,
) -> np.ndarray:
    """Render the demo scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Traces per pixel for a single-pass render.
        passes: If positive, render progressively with this many passes.
        soft_shadows: Enable area-light soft shadows.
        max_recursion: Reflection/refraction depth.
        seed: Seed for the random generator.
        quiet: If True, suppress progress output.

    Returns:
        The rendered image, shape (height, width, 3), values in [0, 1].
    """
    from whitted.camera import render_image
    from whitted.core.options import RenderOptions
    from whitted.scene.demo import create_demo_scene

    if not quiet:
        print(f"Creating demo scene ({width}x{height})...")

    scene, camera = create_demo_scene(aspect_ratio=width / height)
    options = RenderOptions(soft_shadows_on=soft_shadows, max_recursion=max_recursion)
    rng = np.random.default_rng(seed)
    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    if passes > 0:
        import taichi as ti

        from whitted.core.progressive import ProgressiveRenderer

        ti.init(arch=ti.cpu)
        renderer = ProgressiveRenderer(camera, scene, width, height, options=options, rng=rng)
        if not quiet:
            print(f"Rendering {passes} progressive passes...")
        renderer.render(passes, callback=progress_callback)
        image = renderer.get_image_numpy()
    else:
        if not quiet:
            print(f"Rendering {samples} sample(s) per pixel...")
        image = render_image(
            camera,
            scene,
            width,
            height,
            samples=samples,
            options=options,
            rng=rng,
            callback=progress_callback,
        )

    if not quiet:
        print()  # Newline after progress
        total_time = time.time() - start_time
        mean = image.reshape(-1, 3).mean(axis=0)
        print(f"Mean color: ({mean[0]:.3f}, {mean[1]:.3f}, {mean[2]:.3f})")
        print(f"Total time: {total_time:.2f}s")

    return image


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        render_demo(
            width=args.width,
            height=args.height,
            samples=args.samples,
            passes=args.passes,
            soft_shadows=args.soft_shadows,
            max_recursion=args.max_recursion,
            seed=args.seed,
            quiet=args.quiet,
        )
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
