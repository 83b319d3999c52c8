import bisect
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import ConfigError, WordListError
from .word import Word, is_letter

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / 'data'
DEFAULT_ACCEPTABLE_PATH = DATA_DIR / 'acceptable.txt'
DEFAULT_FINAL_PATH = DATA_DIR / 'final.txt'

DEFAULT_SEED = 2048


def normalize_words(lines: Iterable[str]) -> List[str]:
    """Strips, upper-cases, drops anything that isn't a 5-letter word and sorts for bisect lookups."""
    words = set()
    for line in lines:
        word = line.strip().upper()
        if len(word) == Word.MAX_LENGTH and all(is_letter(ch) for ch in word):
            words.add(word)
    return sorted(words)


def load_word_list(path: Path) -> List[str]:
    """
    Reads a plain-text word list, one word per line.

    Raises:
        WordListError: if the file can't be read or holds no valid 5-letter word.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            words = normalize_words(f)
    except OSError as e:
        raise WordListError(f"Error: word list could not be read at '{path}': {e}") from e

    if not words:
        raise WordListError(f"Error: word list '{path}' is empty or invalid.")
    logger.debug("Loaded %d words from %s", len(words), path)
    return words


def load_word_lists(acceptable_path: Optional[Path] = None, final_path: Optional[Path] = None):
    """Returns (acceptable, final), falling back to the bundled lists."""
    acceptable = load_word_list(acceptable_path or DEFAULT_ACCEPTABLE_PATH)
    final = load_word_list(final_path or DEFAULT_FINAL_PATH)
    return acceptable, final


def contains(sorted_words: List[str], word: str) -> bool:
    # lists are kept sorted and upper-case, so a binary search is enough
    word = word.upper()
    index = bisect.bisect_left(sorted_words, word)
    return index < len(sorted_words) and sorted_words[index] == word


def is_valid_word(word: str, acceptable: List[str], final: List[str]) -> bool:
    return contains(acceptable, word) and contains(final, word)


def draw_target(rng: random.Random, acceptable: List[str], final: List[str]) -> str:
    """
    Draws a random target from the final list, skipping words the acceptable list
    doesn't know about.
    """
    candidates = [word for word in final if contains(acceptable, word)]
    if not candidates:
        raise ConfigError("No final word is also an acceptable word, can't draw a target.")
    return candidates[rng.randrange(len(candidates))]
