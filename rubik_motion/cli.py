"""CLI entrypoint for the cube animation core."""

from __future__ import annotations

import argparse

from .cube import Cube, CubeAnimationOptions
from .facelets import SOLVED_FACELETS


def _load_facelets(facelets: str | None, facelets_file: str | None) -> str:
    if facelets and facelets_file:
        raise ValueError("Use only one of --facelets or --facelets-file")
    if facelets:
        return facelets.strip()
    if facelets_file:
        with open(facelets_file, "r", encoding="utf-8") as f:
            return f.read().strip()
    return SOLVED_FACELETS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Animated Rubik 3x3 cube")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--facelets", type=str, default=None)
    common.add_argument("--facelets-file", type=str, default=None)
    common.add_argument("--moves", type=str, default="")
    common.add_argument("--move-time", type=float, default=1200.0)
    common.add_argument("--move-smoothing", type=float, default=2.0)
    common.add_argument("--trace", action="store_true")

    headless = sub.add_parser("headless", parents=[common], help="Animate moves without a window and print the result")
    headless.add_argument("--frame-ms", type=float, default=1000.0 / 60.0)

    gui = sub.add_parser("gui", parents=[common], help="Open the pygame viewer")
    gui.add_argument("--fps", type=int, default=60)

    return parser


def build_cube(args: argparse.Namespace) -> Cube:
    options = CubeAnimationOptions(move_time=args.move_time, move_smoothing=args.move_smoothing)
    cube = Cube.from_facelet_str(
        _load_facelets(args.facelets, args.facelets_file),
        options=options,
        trace=args.trace,
    )
    if args.moves:
        moves = cube.queue_sequence(args.moves)
        print(f"queued moves={len(moves)} sequence={args.moves!r}", flush=True)
    return cube


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.mode == "headless" and args.frame_ms <= 0:
        parser.error("--frame-ms must be positive")

    try:
        cube = build_cube(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.mode == "headless":
        end = cube.run_until_idle(frame_time=args.frame_ms)
        print(f"done time_ms={end:.1f} moves_applied={cube.moves_applied} solved={cube.is_solved()}", flush=True)
        print(cube.to_facelet_str(), flush=True)
        return 0

    if args.mode == "gui":
        from .gui import RubikViewer, ViewerConfig

        app = RubikViewer(cube, ViewerConfig(fps=args.fps))
        app.run()
        return 0

    parser.error(f"Unsupported mode: {args.mode}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
