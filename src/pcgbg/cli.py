"""
CLI entry point for the background generator.

Usage:
    pcgbg [options]
    python -m pcgbg [options]
"""

import argparse
import sys
import time
from pathlib import Path

from pcgbg.buffer import DEGENERATE_POLICIES
from pcgbg.composite import (
    DEFAULT_LAYERS,
    CompositeConfig,
    parse_layer,
    render,
    render_noise_channels,
    resolve_seed,
)
from pcgbg.encoder import buffer_to_rgb, save_png


def _layer_arg(text: str):
    try:
        return parse_layer(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcgbg",
        description="Procedural background generator: noise, distance and fractal planes blended into RGB",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("out.png"),
        help="Output PNG path (default: out.png)",
    )

    # Resolution
    parser.add_argument("--width", type=int, default=500, help="Image width (default: 500)")
    parser.add_argument("--height", type=int, default=500, help="Image height (default: 500)")

    # Generation
    parser.add_argument(
        "-s", "--scale", type=float, default=0.005,
        help="Spatial scale of noise (default: 0.005)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed (default: derived from the clock)",
    )
    parser.add_argument(
        "--mode", type=str, default="composite",
        choices=["composite", "noise"],
        help="composite: blended value planes; noise: one noise field per channel",
    )
    parser.add_argument(
        "--layer", dest="layers", type=_layer_arg, action="append", default=None,
        metavar="KIND:R,G,B",
        help="Layer to blend, repeatable; KIND is noise, distance or fractal "
             "(default: noise:1.4,0.1,0 distance:0,0.1,0.5 fractal:0.2,0.3,0.4)",
    )
    parser.add_argument(
        "--degenerate", type=str, default="zero",
        choices=list(DEGENERATE_POLICIES),
        help="Handling of constant planes: contribute zero, or fail (default: zero)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        print(f"Error: image size must be positive, got {args.width}x{args.height}", file=sys.stderr)
        return 1

    t0 = time.time()
    try:
        if args.mode == "noise":
            seed = resolve_seed(args.seed)
            print(f"Rendering noise channels at {args.width}x{args.height} (seed {seed})")
            rgb = render_noise_channels(args.width, args.height, args.scale, seed)
        else:
            config = CompositeConfig(
                width=args.width,
                height=args.height,
                scale=args.scale,
                seed=args.seed,
                layers=tuple(args.layers) if args.layers else DEFAULT_LAYERS,
                degenerate=args.degenerate,
            )
            print(f"Compositing {len(config.layers)} layers at {config.width}x{config.height}")
            for layer in config.layers:
                print(f"  {layer.kind:<8} weights {layer.weights}")
            buf, seed = render(config)
            print(f"  Seed: {seed}")
            rgb = buffer_to_rgb(buf)

        output = save_png(rgb, args.output)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Done in {time.time() - t0:.1f}s -> {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
