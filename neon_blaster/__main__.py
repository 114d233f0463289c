"""
How to run:
  pip install .
  neon-blaster            (or: python -m neon_blaster)
"""
import argparse
import logging

from .log import setup_logger
from .settings import HIGHSCORE_PATH, MAX_LEVELS, PLAYER_LIVES, GameConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="neon-blaster", description="Neon Galaxy Blaster arcade shooter")
    parser.add_argument("--lives", type=int, default=PLAYER_LIVES, help="lives per game")
    parser.add_argument("--max-levels", type=int, default=MAX_LEVELS, help="level to clear for a win")
    parser.add_argument("--endless", action="store_true", help="no level cap; play until game over")
    parser.add_argument("--seed", type=int, default=None, help="seed enemy spawns for a repeatable game")
    parser.add_argument("--highscore-path", default=HIGHSCORE_PATH, help="where the top-5 table is stored")
    parser.add_argument("--mute", action="store_true", help="start without sound")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="console log level")
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        lives=max(1, args.lives),
        max_levels=None if args.endless else max(1, args.max_levels),
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logger(getattr(logging, args.log_level))
    # Imported late so --help works without opening a window
    from .game import Game
    Game(config_from_args(args), highscore_path=args.highscore_path,
         sound=not args.mute, seed=args.seed).run()


if __name__ == "__main__":
    main()
