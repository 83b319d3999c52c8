class WordleError(Exception):
    """Base class for every error raised by termwordle."""


class InvalidWordError(WordleError, ValueError):
    """A word has the wrong length, holds non-letters, or is not in the word lists.

    Local to the current edit: the round state is never mutated when this is raised.
    """


class WordListError(WordleError, OSError):
    """A word-list file could not be read or held no usable words. Fatal at startup."""


class ConfigError(WordleError, ValueError):
    """The options are inconsistent (e.g. `day` outside 1..6). Fatal at startup."""


class RoundStateError(WordleError, RuntimeError):
    """A round operation was called in a phase where it is not legal."""
