"""Entry point: ``python -m ninja_runner``."""

import argparse
import logging
import random
from typing import Optional, Sequence

from .classic_engine import ClassicEngine
from .runner_engine import RunnerEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ninja_runner", description="Jump over the Greek letters.")
    parser.add_argument("--classic", action="store_true",
                        help="play the fixed-interval variant with a single looping obstacle")
    parser.add_argument("--debug", action="store_true", help="start with hitboxes visible")
    parser.add_argument("--seed", type=int, default=None, help="seed for obstacle spawning")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def configure_logging(level_name: str) -> logging.Logger:
    logger = logging.getLogger("ninja_runner")
    if logger.handlers:
        return logger

    level = getattr(logging, level_name.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def main(argv: Optional[Sequence[str]] = None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.classic:
        engine = ClassicEngine()
    else:
        engine = RunnerEngine(rng=random.Random(args.seed), debug=args.debug)

    # Imported late so --help works without a display.
    from .runner_client import RunnerClient
    RunnerClient(engine).run()


if __name__ == "__main__":
    main()
