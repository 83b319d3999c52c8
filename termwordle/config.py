import argparse
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigError, InvalidWordError
from .word import Word
from .words import DEFAULT_SEED

ENV_PREFIX = "TERMWORDLE_"
MAX_DAY = 6
REASONING_EFFORTS = ("disable", "low", "medium", "high")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Mode(Enum):
    # plain state letters, meant to be diffed by scripts
    TEST = "test"
    # colored board printed after every guess
    INTERACTIVE = "interactive"
    # full-screen curses UI
    TUI = "tui"


@dataclass
class Options:
    word: Optional[str] = None
    random: bool = False
    seed: Optional[int] = None
    difficult: bool = False
    final_set: Optional[Path] = None
    acceptable_set: Optional[Path] = None
    day: Optional[int] = None
    state: Optional[Path] = None
    stats: bool = False
    mode: Mode = Mode.INTERACTIVE
    agent: Optional[str] = None
    reasoning_effort: Optional[str] = None
    tick_rate: float = 4.0
    frame_rate: float = 60.0
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @property
    def effective_seed(self) -> int:
        return DEFAULT_SEED if self.seed is None else self.seed

    @property
    def interactive_target(self) -> bool:
        """True when the secret word has to be typed in before every round."""
        return self.word is None and not self.random

    def validate(self) -> "Options":
        if self.word is not None:
            if self.random:
                raise ConfigError("--word and --random can't be used together.")
            try:
                Word.parse(self.word)
            except InvalidWordError as e:
                raise ConfigError(f"Invalid --word: {e}") from e
        if self.day is not None:
            if not 1 <= self.day <= MAX_DAY:
                raise ConfigError(f"day must be in 1..={MAX_DAY}, got {self.day}.")
            if not self.random:
                raise ConfigError("--day is only meaningful in random mode.")
        if self.tick_rate <= 0 or self.frame_rate <= 0:
            raise ConfigError("tick and frame rates must be positive.")
        if self.reasoning_effort is not None and self.reasoning_effort not in REASONING_EFFORTS:
            raise ConfigError(f"reasoning effort must be one of {', '.join(REASONING_EFFORTS)}, got {self.reasoning_effort!r}.")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}.")
        if self.agent:
            if self.mode is Mode.TUI:
                raise ConfigError("--agent only works in test or interactive mode.")
            if self.interactive_target:
                raise ConfigError("--agent needs --word or --random, it can't type the secret word.")
        return self


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_flag(name: str) -> bool:
    return (_env(name, "") or "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
    value = _env(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}.") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termwordle",
        description="Wordle game in the terminal.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('-w', '--word', default=_env("WORD"), help="A fixed secret word to guess.")
    parser.add_argument('-r', '--random', action=argparse.BooleanOptionalAction, default=_env_flag("RANDOM"),
                        help="Draw the secret word from the final word list.")
    parser.add_argument('-s', '--seed', type=int, default=_env_int("SEED"),
                        help=f"Seed for the random draw (defaults to {DEFAULT_SEED} in random mode).")
    parser.add_argument('-D', '--difficult', action=argparse.BooleanOptionalAction, default=_env_flag("DIFFICULT"),
                        help="Later guesses must reuse every revealed green and yellow letter.")
    parser.add_argument('-f', '--final-set', type=Path, default=_env("FINAL_SET"),
                        help="Final word list file, overrides the bundled one.")
    parser.add_argument('-a', '--acceptable-set', type=Path, default=_env("ACCEPTABLE_SET"),
                        help="Acceptable word list file, overrides the bundled one.")
    parser.add_argument('-d', '--day', type=int, default=_env_int("DAY"),
                        help="Random mode only: resume the first round at this attempt (1..6).")
    parser.add_argument('-S', '--state', type=Path, default=_env("STATE"),
                        help="Reserved for saving and loading game state, currently ignored.")
    parser.add_argument('-t', '--stats', action=argparse.BooleanOptionalAction, default=_env_flag("STATS"),
                        help="Print win/loss statistics after every round.")
    parser.add_argument('-m', '--mode', choices=[m.value for m in Mode], default=_env("MODE", Mode.INTERACTIVE.value),
                        help="How the game is played and printed.")
    parser.add_argument('--agent', default=_env("AGENT"),
                        help="Let a chat model (litellm model name) play instead of reading stdin.")
    parser.add_argument('--reasoning-effort', choices=REASONING_EFFORTS,
                        default=_env("REASONING_EFFORT"), help="Reasoning effort passed to the agent model.")
    parser.add_argument('--tick-rate', type=float, default=float(_env("TICK_RATE", "4.0")),
                        help="Ticks per second in tui mode.")
    parser.add_argument('--frame-rate', type=float, default=float(_env("FRAME_RATE", "60.0")),
                        help="Renders per second in tui mode.")
    parser.add_argument('--log-level', default=_env("LOG_LEVEL", "WARNING"),
                        type=str.upper, choices=LOG_LEVELS, help="Logging level.")
    parser.add_argument('--log-file', type=Path, default=_env("LOG_FILE"),
                        help="Write logs to this file instead of stderr.")
    return parser


def load_options(argv: Optional[List[str]] = None) -> Options:
    """
    Builds the options from `.env`, TERMWORDLE_* environment variables and the
    command line, in increasing order of precedence.

    Raises:
        ConfigError: if the resulting options are inconsistent.
    """
    load_dotenv()
    try:
        args = build_parser().parse_args(argv)
        mode = Mode(args.mode)
    except ConfigError:
        raise
    except ValueError as e:
        raise ConfigError(str(e)) from e

    options = Options(
        word=args.word,
        random=args.random,
        seed=args.seed,
        difficult=args.difficult,
        final_set=Path(args.final_set) if args.final_set else None,
        acceptable_set=Path(args.acceptable_set) if args.acceptable_set else None,
        day=args.day,
        state=Path(args.state) if args.state else None,
        stats=args.stats,
        mode=mode,
        agent=args.agent,
        reasoning_effort=args.reasoning_effort,
        tick_rate=args.tick_rate,
        frame_rate=args.frame_rate,
        log_level=args.log_level,
        log_file=Path(args.log_file) if args.log_file else None,
    )
    return options.validate()


def setup_logging(options: Options) -> None:
    """Console logging like the rest of the CLI tools, or a file in tui mode so curses stays clean."""
    level = getattr(logging, options.log_level.upper(), logging.WARNING)
    fmt = "[%(levelname)s] %(message)s"
    if options.log_file:
        logging.basicConfig(level=level, format="%(asctime)s " + fmt, filename=str(options.log_file))
    elif options.mode is Mode.TUI:
        logging.disable(logging.CRITICAL)
    else:
        logging.basicConfig(level=level, format=fmt)
