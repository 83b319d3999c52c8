import logging
import sys
from typing import List, Optional

from .config import Mode, load_options, setup_logging
from .env import StreamSource, WordleEnv
from .errors import WordleError
from .game import WordleGame
from .words import load_word_lists

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function: play Wordle from the command line."""
    try:
        options = load_options(argv)
    except WordleError as e:
        print(e, file=sys.stderr)
        return 1
    setup_logging(options)

    if options.state is not None:
        logger.warning("Saving/loading game state is not supported, ignoring %s", options.state)

    try:
        acceptable, final = load_word_lists(options.acceptable_set, options.final_set)
        game = WordleGame(options, acceptable, final)
    except WordleError as e:
        logger.error("Startup failed: %s", e)
        print(e, file=sys.stderr)
        return 1

    if options.mode is Mode.TUI:
        from .tui import play_live
        play_live(game, options.tick_rate, options.frame_rate)
        return 0

    env = WordleEnv(game, mode=options.mode)
    if options.agent:
        from .agent import AgentPlayer
        source = AgentPlayer(options.agent, options.reasoning_effort, ui=env.ui)
    else:
        source = StreamSource(sys.stdin, env.ui, show_prompts=options.mode is Mode.INTERACTIVE)

    try:
        env.run(source)
    except (KeyboardInterrupt, EOFError):
        print("\n\nExiting game.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
