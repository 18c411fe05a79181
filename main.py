"""
Entry point for the Tetris game.

Usage:
    python main.py
    python main.py --config config/settings.yaml
    python main.py --seed 42 --fps 30
"""

from __future__ import annotations

import argparse
import sys

from tetris_game.config import ConfigError, load_config, validate_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with config, seed and fps attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris: a falling-block puzzle game.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/settings.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for piece selection (overrides the config file).",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frames per second for the game window (overrides the config file).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Parse args, load config, and run manual play."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        if args.seed is not None:
            config["seed"] = args.seed
        if args.fps is not None:
            config["fps"] = args.fps
        validate_config(config)

        from tetris_game.play import play_manual
        snapshot = play_manual(config)
    except (FileNotFoundError, ConfigError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Final score: {snapshot.score} | Level: {snapshot.level}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
