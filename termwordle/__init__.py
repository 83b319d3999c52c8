from .word import Letter, LetterState, Word
from .rules import DifficultReport, find_violations, score, update_keyboard
from .game import CheckResult, Outcome, Phase, RoundView, WordleGame
from .config import Mode, Options
from .env import WordleEnv

__all__ = [
    "Letter", "LetterState", "Word",
    "DifficultReport", "find_violations", "score", "update_keyboard",
    "CheckResult", "Outcome", "Phase", "RoundView", "WordleGame",
    "Mode", "Options", "WordleEnv",
]
