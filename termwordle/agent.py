import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from litellm import completion, get_supported_openai_params

from .game import WordleGame
from .render import TextUI

logger = logging.getLogger(__name__)

FALLBACK_GUESS = "RAISE"
GUESS_PATTERN = re.compile(r'\[([A-Z]{5})\]')

SYSTEM_PROMPT = (
    "You are an expert Wordle player. Your objective is to guess a 5-letter secret word in 6 tries. "
    "I will provide the current game state as text after each of your guesses. "
    "Your response MUST be a single, valid 5-letter English word enclosed in square brackets, like [WORD]."
)


class ReasoningEffort(Enum):
    DISABLE = "disable"
    LOW     = "low"
    MEDIUM  = "medium"
    HIGH    = "high"


def query(
    model: str,
    reasoning_effort: Optional[ReasoningEffort],
    messages: List[Dict[str, Any]],
) -> Tuple[str, Optional[str]]:
    if reasoning_effort is not None:
        response = completion(model=model, messages=messages, reasoning_effort=reasoning_effort.value)
    else:
        response = completion(model=model, messages=messages)
    answer = response.choices[0].message.content or ""
    cot = getattr(response.choices[0].message, "reasoning_content", None)
    return answer, cot


def extract_guess(answer: str) -> Optional[str]:
    match = GUESS_PATTERN.search(answer.upper())
    return match.group(1) if match else None


class AgentPlayer:
    """
    Guess source for batch mode backed by a chat model. Every call sends the text
    board (plus the last rejection, if any) and expects `[WORD]` back.
    """

    # a model never gets asked to type the secret word or whether to play again
    can_restart = False

    def __init__(self, model: str, reasoning_effort: Optional[str] = None, ui: Optional[TextUI] = None,
                 max_requests: int = 20):
        self.model = model
        # invalid answers don't use up attempts, so cap the number of calls
        self.max_requests = max_requests
        self.requests = 0
        self.reasoning_effort = ReasoningEffort(reasoning_effort) if reasoning_effort else None
        self.ui = ui or TextUI()
        self.messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_PROMPT}]
        self._supports_effort: Optional[bool] = None

    def _effort(self) -> Optional[ReasoningEffort]:
        if self.reasoning_effort is None:
            return None
        if self._supports_effort is None:
            supported = get_supported_openai_params(model=self.model) or []
            self._supports_effort = "reasoning_effort" in supported
        return self.reasoning_effort if self._supports_effort else None

    def read_line(self, prompt: str, game: WordleGame) -> Optional[str]:
        if game.is_over or game.target.is_empty():
            return None
        if self.requests >= self.max_requests:
            logger.warning("Model used %d requests without finishing the round, giving up", self.requests)
            return None
        self.requests += 1

        observation = self.ui.get_text_observation(game.view(), status=game.message)
        self.messages.append({"role": "user", "content": f"Here is the current state:\n{observation}\n\nWhat is your next guess?"})

        answer, thoughts = query(self.model, self._effort(), self.messages)
        if thoughts:
            logger.debug("[chain-of-thought] %s", thoughts)

        guess = extract_guess(answer)
        if guess is None:
            logger.warning("Model returned an invalid response: %r. Defaulting to %s.", answer, FALLBACK_GUESS)
            guess = FALLBACK_GUESS

        self.messages.append({"role": "assistant", "content": f"[{guess}]"})
        logger.info("Model guess (%d/%d): %s", game.tries + 1, game.MAX_TURNS, guess)
        return guess
