from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidWordError


def is_letter(char: str) -> bool:
    """One of the 26 ASCII letters, either case."""
    return len(char) == 1 and char.isascii() and char.isalpha()


class LetterState(IntEnum):
    # lower is more informative: green < yellow < red < unknown
    GREEN = 0
    YELLOW = 1
    RED = 2
    UNKNOWN = 3

    @property
    def symbol(self) -> str:
        return "GYRX"[self.value]


class Letter:
    """A single upper-cased character plus what we know about it.

    Equality and hashing only look at the character, so a set of letters
    stays deduplicated no matter which states its members carry.
    """

    __slots__ = ("char", "state")

    def __init__(self, char: str, state: LetterState = LetterState.UNKNOWN):
        if not is_letter(char):
            raise InvalidWordError(f"A letter is a single character from A to Z, got {char!r}.")
        self.char = char.upper()
        self.state = state

    def with_state(self, state: LetterState) -> "Letter":
        return Letter(self.char, state)

    def __eq__(self, other) -> bool:
        if isinstance(other, Letter):
            return self.char == other.char
        if isinstance(other, str):
            return self.char == other.upper()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.char)

    def __repr__(self) -> str:
        return f"Letter({self.char!r}, {self.state.name})"


class Word:
    MAX_LENGTH = 5

    def __init__(self, letters: Optional[List[Letter]] = None):
        letters = list(letters or [])
        if len(letters) > self.MAX_LENGTH:
            raise InvalidWordError(f"Word must be at most {self.MAX_LENGTH} letters long.")
        self.letters: List[Letter] = letters

    @classmethod
    def parse(cls, text: str) -> "Word":
        """
        Turns user text into a full Word. Surrounding whitespace is ignored and
        the letters are upper-cased.

        Raises:
            InvalidWordError: if the text is not exactly MAX_LENGTH letters.
        """
        text = text.strip()
        if len(text) != cls.MAX_LENGTH:
            raise InvalidWordError(f"Word must be {cls.MAX_LENGTH} letters long, got {text!r}.")
        if not all(is_letter(ch) for ch in text):
            raise InvalidWordError(f"Word may only contain the letters A to Z, got {text!r}.")
        return cls([Letter(ch) for ch in text])

    @classmethod
    def blank(cls) -> "Word":
        return cls()

    def push(self, char: str) -> None:
        # silently ignored once full, same as a physical keyboard row
        if len(self.letters) < self.MAX_LENGTH and is_letter(char):
            self.letters.append(Letter(char))

    def pop(self) -> None:
        if self.letters:
            self.letters.pop()

    def clear(self) -> None:
        self.letters.clear()

    def is_full(self) -> bool:
        return len(self.letters) == self.MAX_LENGTH

    def is_empty(self) -> bool:
        return not self.letters

    def copy(self) -> "Word":
        return Word([Letter(l.char, l.state) for l in self.letters])

    @property
    def text(self) -> str:
        return "".join(l.char for l in self.letters)

    @property
    def states(self) -> Tuple[LetterState, ...]:
        return tuple(l.state for l in self.letters)

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self) -> Iterator[Letter]:
        return iter(self.letters)

    def __getitem__(self, index: int) -> Letter:
        return self.letters[index]

    def __contains__(self, item) -> bool:
        return any(l == item for l in self.letters)

    def __eq__(self, other) -> bool:
        # only the characters count, scored and unscored copies compare equal
        if isinstance(other, Word):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        states = "".join(l.state.symbol for l in self.letters)
        return f"Word({self.text!r}, {states!r})"
