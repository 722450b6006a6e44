"""Entry point kept minimal by delegating to Engine.

Parses a handful of overrides (window size, assets directory, random seed,
log level) and hands them to the engine.
"""

import argparse
import logging

from config import FULLSCREEN, HEIGHT, RANDOM_SEED, WIDTH
from textures.resourcepath import ASSETS_PATH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play the walkabout vignette.")
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    parser.add_argument("--fullscreen", action="store_true", default=FULLSCREEN)
    parser.add_argument("--assets", default=ASSETS_PATH, help="assets directory")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv=None):  # small wrapper for clarity / debuggers
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Imported late so --help works without opening a window
    from core.engine import Engine

    Engine(
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
        assets_root=args.assets,
        seed=args.seed,
    ).run()


if __name__ == "__main__":
    main()
