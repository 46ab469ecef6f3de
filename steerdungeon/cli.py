"""Command line dungeon generator that prints maps as text."""

from __future__ import annotations

import argparse
import random
import sys
from functools import partial

from .dungeon import (
    Dungeon,
    gen_cellular_dungeon,
    gen_drunk_dungeon,
    gen_inv_dungeon,
    gen_inv_room_dungeon,
    run_cellular,
)

_GENERATORS = {
    "drunk": partial(gen_drunk_dungeon, num_iter=1, max_excavations=5000),
    "inv": partial(gen_inv_dungeon, max_excavations=3000, init_sz=3, max_steps=20),
    "cellular": partial(gen_cellular_dungeon, fillrate=0.45, num_iter=10),
    "rooms": partial(gen_inv_room_dungeon, max_excavations=200, init_sz=3, max_steps=20),
}

KINDS = tuple(_GENERATORS)


def generate(
    kind: str,
    width: int = 130,
    height: int = 130,
    rng: random.Random | None = None,
) -> Dungeon:
    """Generate a dungeon of the named kind with its preset parameters."""
    try:
        generator = _GENERATORS[kind]
    except KeyError:
        raise ValueError(f"unknown dungeon kind {kind!r}; choose from {', '.join(KINDS)}") from None
    return generator(width, height, rng=rng)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a dungeon and print it.")
    parser.add_argument("kind", nargs="?", default="drunk", choices=KINDS)
    parser.add_argument("--width", type=int, default=130)
    parser.add_argument("--height", type=int, default=130)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--smooth",
        type=int,
        default=0,
        metavar="N",
        help="run N extra cellular smoothing iterations",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    rng = random.Random(args.seed)
    try:
        dungeon = generate(args.kind, args.width, args.height, rng)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if args.smooth > 0:
        dungeon = run_cellular(dungeon, args.smooth)
    sys.stdout.write(dungeon.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())