import logging
from typing import Optional, TextIO, Tuple

from .config import Mode
from .game import CheckResult, Phase, SessionStats, WordleGame
from .render import TextUI

logger = logging.getLogger(__name__)


class StreamSource:
    """Reads guesses line by line from a blocking text stream (stdin by default)."""

    can_restart = True

    def __init__(self, stream: TextIO, ui: Optional[TextUI] = None, show_prompts: bool = True):
        self.stream = stream
        self.ui = ui
        self.show_prompts = show_prompts

    def read_line(self, prompt: str, game: WordleGame) -> Optional[str]:
        if self.show_prompts and self.ui is not None:
            self.ui.print_line(prompt)
        line = self.stream.readline()
        if not line:
            return None
        return line.strip()


class WordleEnv:
    """Synchronous driver: one thread, guesses read from a blocking source and applied in order."""

    def __init__(self, game: WordleGame, mode: Mode = Mode.INTERACTIVE, ui: Optional[TextUI] = None):
        if mode is Mode.TUI:
            raise ValueError("WordleEnv drives test and interactive modes only, use tui.run_live for tui.")
        self.game = game
        self.mode = mode
        self.ui = ui or TextUI()
        self.last_status: Optional[str] = None

    @property
    def test_mode(self) -> bool:
        return self.mode is Mode.TEST

    def enter_target(self, text: str) -> bool:
        accepted = self.game.set_target(text)
        if not accepted:
            self.ui.print_invalid(None if self.test_mode else self.game.message)
        return accepted

    def step(self, guess: str) -> Tuple[CheckResult, bool]:
        """
        Applies one guess and prints the outcome the way the current mode wants it.
        Difficult-mode rejections are acknowledged right away, there is no popup to dismiss here.

        Returns:
            (result, done): the check result and whether the round is over.
        """
        result = self.game.guess(guess)
        view = self.game.view()
        self.last_status = view.message if result in (CheckResult.INVALID, CheckResult.DIFFICULT) else None

        if result is CheckResult.INVALID:
            self.ui.print_invalid(None if self.test_mode else view.message)
        elif result is CheckResult.DIFFICULT:
            if self.test_mode:
                self.ui.print_invalid()
            else:
                self.ui.print_board(view)
            self.game.acknowledge_violation()
        elif self.test_mode:
            self.ui.print_line(self.ui.test_line(view))
        else:
            self.ui.print_board(view)

        if self.game.is_over:
            self.ui.print_game_over(view, test_mode=self.test_mode)
            if self.game.options.stats:
                self.ui.print_stats(self.game.stats)
        return result, self.game.is_over

    def play_round(self, source) -> bool:
        """Plays the current round to the end. Returns False when the source ran dry."""
        game = self.game
        while game.phase is Phase.AWAITING_TARGET:
            line = source.read_line(self.ui.prompt_target(), game)
            if line is None:
                return False
            self.enter_target(line)

        while not game.is_over:
            line = source.read_line(self.ui.prompt_guess(game.view()), game)
            if line is None:
                logger.info("Input closed mid-round, giving up")
                game.quit()
                self.ui.print_game_over(game.view(), test_mode=self.test_mode)
                return False
            if not line:
                continue
            self.step(line)
        return True

    def run(self, source) -> SessionStats:
        """
        Plays rounds until the source is exhausted or the player declines a new game.
        A fixed secret word means a single round.
        """
        if not self.test_mode:
            self.ui.print_welcome(self.game.options.difficult)

        while self.play_round(source):
            if self.game.options.word is not None or not getattr(source, "can_restart", False):
                break
            answer = source.read_line(self.ui.prompt_restart(), self.game)
            if answer is None or "y" not in answer.lower():
                break
            self.game.start_new_round()
        return self.game.stats


def run_batch(game: WordleGame, stream: TextIO, mode: Mode = Mode.INTERACTIVE, ui: Optional[TextUI] = None) -> SessionStats:
    env = WordleEnv(game, mode=mode, ui=ui)
    source = StreamSource(stream, env.ui, show_prompts=mode is not Mode.TEST)
    return env.run(source)
