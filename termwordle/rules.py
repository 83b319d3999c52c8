from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .errors import InvalidWordError
from .word import Letter, LetterState, Word

KeyboardKnowledge = Dict[str, LetterState]


def score(guess: Word, target: Word) -> Word:
    """
    Returns a copy of `guess` with every letter marked green, yellow or red
    against `target`. The guess itself is left untouched.

    A target letter can only be matched once, so a guess with a doubled letter
    only gets as many green+yellow marks as the target holds of that letter.
    """
    if not guess.is_full() or not target.is_full():
        raise InvalidWordError(f"Both words must be {Word.MAX_LENGTH} letters long to be scored.")

    # remaining target letters, consumed (set to None) as they get matched
    remaining: List[Optional[str]] = [l.char for l in target]
    states = [LetterState.UNKNOWN] * Word.MAX_LENGTH

    # exact matches first, so they can't be stolen by an earlier misplaced letter
    for i, letter in enumerate(guess):
        if letter.char == remaining[i]:
            states[i] = LetterState.GREEN
            remaining[i] = None

    for i, letter in enumerate(guess):
        if states[i] == LetterState.GREEN:
            continue
        if letter.char in remaining:
            states[i] = LetterState.YELLOW
            remaining[remaining.index(letter.char)] = None
        else:
            states[i] = LetterState.RED

    return Word([letter.with_state(state) for letter, state in zip(guess, states)])


@dataclass(frozen=True)
class Violation:
    letter: str
    # None for yellow violations, the letter may go anywhere
    position: Optional[int] = None

    @property
    def kind(self) -> LetterState:
        return LetterState.YELLOW if self.position is None else LetterState.GREEN


@dataclass(frozen=True)
class DifficultReport:
    green: Tuple[Violation, ...] = ()
    yellow: Tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.green and not self.yellow

    def displayed(self) -> Tuple[Violation, ...]:
        """Green violations win; yellow ones are only shown when no green one exists."""
        return self.green or self.yellow

    def messages(self) -> List[str]:
        shown = self.displayed()
        if not shown:
            return []
        if shown[0].kind is LetterState.GREEN:
            return [f"letter {v.position + 1} must be {v.letter}" for v in shown]
        return ["the word must contain " + ", ".join(v.letter for v in shown)]


def collect_constraints(history: Iterable[Word]) -> Tuple[Set[Tuple[int, str]], Set[str]]:
    """Green (position, letter) pairs and yellow letters revealed by past guesses."""
    greens: Set[Tuple[int, str]] = set()
    yellows: Set[str] = set()
    for word in history:
        for i, letter in enumerate(word):
            if letter.state == LetterState.GREEN:
                greens.add((i, letter.char))
            elif letter.state == LetterState.YELLOW:
                yellows.add(letter.char)
    return greens, yellows


def find_violations(guess: Word, history: Iterable[Word]) -> DifficultReport:
    """
    Checks a full guess against difficult-mode rules: every green position must
    be reused as-is and every yellow letter must show up somewhere.

    Violations are reported, never fixed: the caller decides what to do with them.
    """
    if not guess.is_full():
        raise InvalidWordError(f"Guess must be {Word.MAX_LENGTH} letters long to be validated.")

    greens, yellows = collect_constraints(history)
    green = tuple(Violation(char, position) for position, char in sorted(greens) if guess[position].char != char)
    yellow = tuple(Violation(char) for char in sorted(yellows) if char not in guess)
    return DifficultReport(green, yellow)


def more_informative(candidate: LetterState, current: LetterState) -> bool:
    return candidate < current


def merge_letter(knowledge: KeyboardKnowledge, letter: Letter) -> None:
    current = knowledge.get(letter.char)
    if current is None or more_informative(letter.state, current):
        knowledge[letter.char] = letter.state


def update_keyboard(knowledge: KeyboardKnowledge, scored: Word) -> KeyboardKnowledge:
    """
    Returns a new mapping letter -> best known state after folding in `scored`.
    A letter already known green never drops back to yellow or red.
    """
    updated = dict(knowledge)
    for letter in scored:
        merge_letter(updated, letter)
    return updated


def keyboard_from_history(history: Iterable[Word]) -> KeyboardKnowledge:
    knowledge: KeyboardKnowledge = {}
    for word in history:
        knowledge = update_keyboard(knowledge, word)
    return knowledge
