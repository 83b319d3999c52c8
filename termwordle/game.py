import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .config import Options
from .errors import ConfigError, RoundStateError
from .rules import DifficultReport, KeyboardKnowledge, find_violations, score, update_keyboard
from .word import LetterState, Word, is_letter
from .words import draw_target, is_valid_word

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_TARGET = "awaiting_target"
    GUESSING = "guessing"
    DIFFICULT_VIOLATION = "difficult_violation"
    ROUND_OVER = "round_over"


class Outcome(Enum):
    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    QUIT = "quit"


class CheckResult(Enum):
    INVALID = "invalid"
    DIFFICULT = "difficult"
    SUCCESS = "success"
    WRONG = "wrong"


@dataclass(frozen=True)
class RoundView:
    """Read-only snapshot of a round, everything a renderer needs to draw it."""
    phase: Phase
    outcome: Optional[Outcome]
    current: Word
    history: Tuple[Word, ...]
    keyboard: Mapping[str, LetterState]
    last_result: Optional[CheckResult]
    violations: DifficultReport
    tries: int
    max_tries: int
    message: Optional[str]
    difficult: bool
    # only revealed once the round is over
    target: Optional[str]

    def letter_state(self, char: str) -> LetterState:
        return self.keyboard.get(char.upper(), LetterState.UNKNOWN)


@dataclass
class SessionStats:
    wins: int = 0
    fails: int = 0
    winning_tries: List[int] = field(default_factory=list)
    guesses: Counter = field(default_factory=Counter)

    def record(self, outcome: Outcome, tries: int, history: List[Word]) -> None:
        if outcome is Outcome.SUCCESS:
            self.wins += 1
            self.winning_tries.append(tries)
        else:
            self.fails += 1
        self.guesses.update(word.text for word in history)

    @property
    def average_tries(self) -> float:
        if not self.winning_tries:
            return 0.0
        return sum(self.winning_tries) / len(self.winning_tries)

    def top_guesses(self, n: int = 5) -> List[Tuple[str, int]]:
        # most used first, alphabetical among ties
        return sorted(self.guesses.items(), key=lambda item: (-item[1], item[0]))[:n]


class WordleGame:
    MAX_TURNS = 6
    MAX_WORD_LEN = Word.MAX_LENGTH

    def __init__(self, options: Options, acceptable_words: List[str], final_words: List[str]):
        if not acceptable_words or not final_words:
            raise ConfigError("Word lists cannot be empty.")

        self.options = options
        # both lists are sorted + upper-case, see words.normalize_words
        self.acceptable_words = acceptable_words
        self.final_words = final_words
        self.rng = random.Random(options.effective_seed)
        self.stats = SessionStats()

        # round state, (re)initialised by _begin_round
        self.target = Word.blank()
        self.current = Word.blank()
        self.tries = 0
        self.history: List[Word] = []
        self.keyboard: KeyboardKnowledge = {}
        self.violations = DifficultReport()
        self.last_result: Optional[CheckResult] = None
        self.message: Optional[str] = None
        self.phase = Phase.AWAITING_TARGET
        self.outcome: Optional[Outcome] = None
        self.rounds = 0

        self._begin_round()
        if options.random and options.day is not None:
            # resume a multi-day run: day 1 is a fresh round
            self.tries = options.day - 1

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.ROUND_OVER

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def is_valid(self, word: Word) -> bool:
        return word.is_full() and is_valid_word(word.text, self.acceptable_words, self.final_words)

    def _begin_round(self) -> None:
        self.current = Word.blank()
        self.tries = 0
        self.history = []
        self.keyboard = {}
        self.violations = DifficultReport()
        self.last_result = None
        self.message = None
        self.outcome = None
        self.rounds += 1

        if self.options.word is not None:
            target = Word.parse(self.options.word)
            if not self.is_valid(target):
                raise ConfigError(f"word `{target.text}` is not valid")
            self.target = target
        elif self.options.random:
            self.target = Word.parse(draw_target(self.rng, self.acceptable_words, self.final_words))
        else:
            self.target = Word.blank()
            self.phase = Phase.AWAITING_TARGET
            logger.info("Round %d: waiting for the secret word", self.rounds)
            return

        self.phase = Phase.GUESSING
        logger.info("Round %d started", self.rounds)

    def _require(self, *phases: Phase) -> None:
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise RoundStateError(f"Not allowed while {self.phase.value}, only in: {allowed}.")

    def _editing(self) -> Optional[Word]:
        if self.phase is Phase.AWAITING_TARGET:
            return self.target
        if self.phase is Phase.GUESSING:
            return self.current
        return None

    def input_char(self, char: str) -> None:
        word = self._editing()
        if word is not None:
            word.push(char)

    def remove_char(self) -> None:
        word = self._editing()
        if word is not None:
            word.pop()

    def confirm_target(self) -> bool:
        """Accepts the typed-in secret word and starts guessing, or clears the buffer if it's unusable."""
        self._require(Phase.AWAITING_TARGET)
        if self.is_valid(self.target):
            self.phase = Phase.GUESSING
            self.message = None
            self.last_result = None
            logger.info("Round %d started with an entered word", self.rounds)
            return True

        logger.debug("Rejected secret word %r", self.target.text)
        self.message = f"'{self.target.text}' can't be used as the secret word."
        self.target = Word.blank()
        self.last_result = CheckResult.INVALID
        return False

    def set_target(self, text: str) -> bool:
        """Replaces the secret-word buffer with `text` and confirms it, for line-based input."""
        self._require(Phase.AWAITING_TARGET)
        self.target = Word.blank()
        for char in text.strip():
            self.input_char(char)
        if len(text.strip()) != self.MAX_WORD_LEN:
            self.target = Word.blank()
            self.message = f"The secret word must be {self.MAX_WORD_LEN} letters long."
            self.last_result = CheckResult.INVALID
            return False
        return self.confirm_target()

    def _invalid(self, message: str) -> CheckResult:
        self.message = message
        self.last_result = CheckResult.INVALID
        return CheckResult.INVALID

    def submit_guess(self) -> CheckResult:
        """
        Checks the in-progress guess. Invalid and difficult-mode rejections don't
        consume an attempt and leave history alone.

        Returns:
            CheckResult: INVALID, DIFFICULT, SUCCESS or WRONG.
        """
        self._require(Phase.GUESSING)

        guess = self.current
        if not guess.is_full():
            return self._invalid(f"Guess must be {self.MAX_WORD_LEN} letters long.")
        if not self.is_valid(guess):
            logger.debug("Invalid guess %r", guess.text)
            return self._invalid(f"'{guess.text}' is not in word list.")

        if self.options.difficult:
            report = find_violations(guess, self.history)
            if not report.ok:
                logger.debug("Difficult mode rejected %r: %s", guess.text, report.messages())
                self.violations = report
                self.message = "; ".join(report.messages())
                self.last_result = CheckResult.DIFFICULT
                self.phase = Phase.DIFFICULT_VIOLATION
                return CheckResult.DIFFICULT

        scored = score(guess, self.target)
        self.history.append(scored)
        self.keyboard = update_keyboard(self.keyboard, scored)
        self.tries += 1
        self.violations = DifficultReport()
        self.message = None
        logger.info("Attempt %d/%d: %s %s", self.tries, self.MAX_TURNS, scored.text,
                    "".join(s.symbol for s in scored.states))

        if scored == self.target:
            self.last_result = CheckResult.SUCCESS
            self._end_round(Outcome.SUCCESS)
        elif self.tries >= self.MAX_TURNS:
            self.last_result = CheckResult.WRONG
            self._end_round(Outcome.EXHAUSTED)
        else:
            self.last_result = CheckResult.WRONG
            self.current = Word.blank()
        return self.last_result

    def guess(self, text: str) -> CheckResult:
        """Replaces the in-progress guess with `text` and submits it, for line-based input."""
        self._require(Phase.GUESSING)
        if len(text.strip()) != self.MAX_WORD_LEN or not all(is_letter(ch) for ch in text.strip()):
            return self._invalid(f"Guess must be {self.MAX_WORD_LEN} letters long.")
        self.current = Word.blank()
        for char in text.strip():
            self.current.push(char)
        return self.submit_guess()

    def acknowledge_violation(self) -> None:
        self._require(Phase.DIFFICULT_VIOLATION)
        self.phase = Phase.GUESSING

    def _end_round(self, outcome: Outcome) -> None:
        self.phase = Phase.ROUND_OVER
        self.outcome = outcome
        self.stats.record(outcome, self.tries, self.history)
        logger.info("Round %d over: %s after %d attempt(s), the word was %s",
                    self.rounds, outcome.value, self.tries, self.target.text)

    def start_new_round(self) -> None:
        self._require(Phase.ROUND_OVER)
        self._begin_round()

    def quit(self) -> None:
        """Ends the round right away as a non-success, from any phase."""
        if self.is_over:
            return
        self.tries = self.MAX_TURNS
        self._end_round(Outcome.QUIT)

    def view(self) -> RoundView:
        return RoundView(
            phase=self.phase,
            outcome=self.outcome,
            current=(self.target if self.phase is Phase.AWAITING_TARGET else self.current).copy(),
            history=tuple(word.copy() for word in self.history),
            keyboard=MappingProxyType(dict(self.keyboard)),
            last_result=self.last_result,
            violations=self.violations,
            tries=self.tries,
            max_tries=self.MAX_TURNS,
            message=self.message,
            difficult=self.options.difficult,
            target=self.target.text if self.is_over else None,
        )
