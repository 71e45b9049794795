"""
Command line entry point.

Usage:
    snakeli [-w 50] [-h 23] [-l 5] [-m TRIM] [-vim]
    python -m snakeli --config configs/default.yaml
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import GameConfig, load_config, parse_mode, parse_u16
from .exceptions import ConfigurationError, TerminalIOError
from .game import Game
from .terminal import TerminalSurface

logger = logging.getLogger(__name__)

BANNER = "Snakeli - v1"

USAGE = """\
snakeli [-w 50] [-h 23] [-l 5] [-m TRIM] [-vim] [--config FILE] [--log-file FILE]

    --help  print this help
      -vim  allow only h(left) j(down) k(up) l(right) keys for movement
        -w  width of the board
        -h  height of the board
        -l  initial length. It has to be less than w-2 (48 by default)
        -m  game mode. REGULAR by default:
              - TRIM: Snake eats itself
              - REGULAR: Snake dies when it bites itself
  --config  YAML file with default settings (flags win)
--log-file  write debug logs to this file

Values go in their own argument: `-w 60`, not `-w60`.

Controls:
    - `<Control>c`: quit
    - `<Space>`: pause
    - `r`: restart
    - `n`: increase speed
    - `m`: decrease speed
    - `<Up> | k | w`: go up (only `k` will work in vim mode)
    - `<Down> | j | s`: go down (only `j` will work in vim mode)
    - `<Left> | h | a`: go left (only `h` will work in vim mode)
    - `<Right> | l | d`: go right (only `l` will work in vim mode)
"""


class ArgumentParser(argparse.ArgumentParser):
    """Raises ConfigurationError instead of exiting with status 2."""

    def error(self, message):
        raise ConfigurationError(message)


def _u16(name: str):
    def parse(value: str) -> int:
        try:
            return parse_u16(value, name)
        except ConfigurationError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    return parse


def _mode(value: str):
    try:
        return parse_mode(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


# Flags followed by a separate value token.
VALUE_FLAGS = ("-w", "-h", "-l", "-m", "--config", "--log-file")
SWITCH_FLAGS = ("-vim", "--help")


def check_flags(argv: List[str]) -> None:
    """
    Rejects anything that is not exactly a known flag.

    argparse would otherwise accept prefixes (`-v` for `-vim`, `--he` for
    `--help`) and attached values (`-w50`).
    """
    tokens = iter(argv)
    for token in tokens:
        if token in VALUE_FLAGS:
            next(tokens, None)
        elif token.startswith("-") and token not in SWITCH_FLAGS:
            raise ConfigurationError(f"Unrecognized arg: {token}")


def build_parser() -> ArgumentParser:
    # -h is the board height, so argparse's own help flag is off.
    parser = ArgumentParser(prog="snakeli", add_help=False, usage=USAGE,
                            allow_abbrev=False)
    parser.add_argument("--help", action="store_true", dest="show_help")
    parser.add_argument("-vim", action="store_true", dest="vim_mode", default=None)
    parser.add_argument("-w", type=_u16("width"), dest="width")
    parser.add_argument("-h", type=_u16("height"), dest="height")
    parser.add_argument("-l", type=_u16("length"), dest="length")
    parser.add_argument("-m", type=_mode, dest="mode")
    parser.add_argument("--config", dest="config")
    parser.add_argument("--log-file", dest="log_file")
    return parser


def parse_config(argv: Optional[List[str]] = None):
    """
    Builds the validated config from the command line.

    Returns:
        (config, namespace)

    Raises:
        ConfigurationError
    """
    if argv is None:
        argv = sys.argv[1:]
    check_flags(argv)
    args = build_parser().parse_args(argv)
    if args.show_help:
        return None, args

    config = load_config(args.config) if args.config else GameConfig()
    config = config.override(
        width=args.width,
        height=args.height,
        length=args.length,
        mode=args.mode,
        vim_mode=args.vim_mode,
    )
    return config.validate(), args


def setup_logging(log_file: Optional[str]) -> None:
    # The game owns stdout, so logs only go to a file when asked.
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def play(config: GameConfig, surface: Optional[TerminalSurface] = None) -> int:
    """
    Runs a session on the terminal.

    Returns:
        Final score
    """
    surface = surface or TerminalSurface()
    columns, rows = surface.size()
    fitted = config.clamp_to(columns, rows)
    if fitted != config:
        logger.info("board clamped to %dx%d", fitted.width, fitted.height)
    fitted.validate()

    with surface.session():
        game = Game(fitted, surface)
        game.run()
    return game.score


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config, args = parse_config(argv)
    except ConfigurationError as e:
        print(f"ERROR - {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if config is None:
        print(USAGE)
        return 0

    setup_logging(args.log_file)
    print(BANNER)
    print()

    try:
        score = play(config)
    except ConfigurationError as e:
        print(f"ERROR - {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    except TerminalIOError as e:
        logger.exception("terminal failure")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("unhandled error")
        print(f"ERROR: {e!r}", file=sys.stderr)
        return 1

    print(f"Final score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
