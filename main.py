"""
main.py
=======
Entry point for 4D Pacman.

    python main.py                      # settings from config.txt
    python main.py 10 10 10 10          # override the maze dimensions
    python main.py --config other.txt --seed 42 --verbose

No src/ wrapper — run from the project root directly.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import config
from core.settings import Settings, SettingsError, load_settings

log = logging.getLogger(__name__)

CONTROLS_HELP = """\
WASD or Arrow Keys to move horizontally
SPACE to move up, Left Ctrl to move down
Q and E to move through left and right portals
R for a new maze once a run is over, ESC to quit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pacman4d",
        description=config.WINDOW_TITLE,
        epilog=CONTROLS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("dimensions", nargs="*", type=int, metavar="SIZE",
                        help="maze size along x y z w (overrides config)")
    parser.add_argument("--config", default=config.SETTINGS_PATH,
                        help="settings file (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the first maze")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="debug logging")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Load the settings file and apply command-line overrides.

    Raises
    ------
    SettingsError
        If the file is invalid or the overrides are.
    """
    settings = load_settings(args.config)
    if args.dimensions:
        settings = settings.with_dimensions(tuple(args.dimensions))
        log.info("Dimensions overridden from the command line: %s", args.dimensions)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level  = logging.DEBUG if args.verbose else logging.WARNING,
        format = "%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = resolve_settings(args)
    except SettingsError as exc:
        print(f"{config.WINDOW_TITLE}: {exc}", file=sys.stderr)
        return 2

    # pygame is only needed once the settings are known to be good
    from core.game import Game
    from gamestates.gameplay import GameplayState

    print(config.WINDOW_TITLE)
    print(CONTROLS_HELP)

    game = Game(settings)
    game.push_state(GameplayState(settings, game.render_surface.get_size(), seed=args.seed))
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
