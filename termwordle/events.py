"""Translates input events into round actions.

The live loop in `tui.py` only ever talks to the game through `get_action`
and `apply_action`, one event at a time.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .game import Phase, WordleGame
from .word import is_letter

logger = logging.getLogger(__name__)


class EventKind(Enum):
    INIT = "init"
    TICK = "tick"
    RENDER = "render"
    KEY = "key"
    MOUSE = "mouse"
    ERROR = "error"
    QUIT = "quit"


class Key(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESC = "esc"
    OTHER = "other"


@dataclass(frozen=True)
class KeyPress:
    key: Key
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "KeyPress":
        return cls(Key.CHAR, char)


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: Optional[KeyPress] = None
    # mouse kind or error text, opaque to the game
    detail: Optional[str] = None

    @classmethod
    def key_press(cls, press: KeyPress) -> "Event":
        return cls(EventKind.KEY, key=press)


class ActionKind(Enum):
    INPUT_CHAR = "input_char"
    REMOVE_CHAR = "remove_char"
    SUBMIT = "submit"
    ACKNOWLEDGE_VIOLATION = "acknowledge_violation"
    START_NEW_ROUND = "start_new_round"
    QUIT = "quit"
    TICK = "tick"
    RENDER = "render"
    NONE = "none"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    char: Optional[str] = None


NO_ACTION = Action(ActionKind.NONE)

# what Enter means depends on where the round is
ENTER_ACTIONS = {
    Phase.AWAITING_TARGET: ActionKind.SUBMIT,
    Phase.GUESSING: ActionKind.SUBMIT,
    Phase.DIFFICULT_VIOLATION: ActionKind.ACKNOWLEDGE_VIOLATION,
    Phase.ROUND_OVER: ActionKind.START_NEW_ROUND,
}


def get_action(game: WordleGame, event: Event) -> Action:
    if event.kind is EventKind.QUIT:
        return Action(ActionKind.QUIT)
    if event.kind is EventKind.TICK:
        return Action(ActionKind.TICK)
    if event.kind in (EventKind.RENDER, EventKind.INIT):
        return Action(ActionKind.RENDER)
    if event.kind is EventKind.ERROR:
        logger.warning("Input error: %s", event.detail)
        return NO_ACTION
    if event.kind is not EventKind.KEY or event.key is None:
        return NO_ACTION

    press = event.key
    if press.key is Key.CHAR and press.char and is_letter(press.char):
        return Action(ActionKind.INPUT_CHAR, press.char.upper())
    if press.key is Key.BACKSPACE:
        return Action(ActionKind.REMOVE_CHAR)
    if press.key is Key.ENTER:
        return Action(ENTER_ACTIONS[game.phase])
    if press.key is Key.ESC:
        return Action(ActionKind.QUIT)
    return NO_ACTION


def apply_action(game: WordleGame, action: Action) -> None:
    """
    Applies one action to the game. Actions that don't fit the current phase
    are dropped, a stray key press must never bring the UI down.
    """
    kind = action.kind
    if kind is ActionKind.INPUT_CHAR and action.char:
        game.input_char(action.char)
    elif kind is ActionKind.REMOVE_CHAR:
        game.remove_char()
    elif kind is ActionKind.SUBMIT:
        if game.phase is Phase.AWAITING_TARGET:
            game.confirm_target()
        elif game.phase is Phase.GUESSING:
            game.submit_guess()
    elif kind is ActionKind.ACKNOWLEDGE_VIOLATION:
        if game.phase is Phase.DIFFICULT_VIOLATION:
            game.acknowledge_violation()
    elif kind is ActionKind.START_NEW_ROUND:
        if game.is_over:
            game.start_new_round()
    elif kind is ActionKind.QUIT:
        game.quit()
