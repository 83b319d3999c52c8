import pytest

from termwordle.events import (
    Action, ActionKind, Event, EventKind, Key, KeyPress, apply_action, get_action,
)
from termwordle.game import CheckResult, Outcome, Phase


def press(key, char=None):
    return Event.key_press(KeyPress(key, char))


def feed(game, *events):
    for event in events:
        apply_action(game, get_action(game, event))


def type_word(game, word):
    feed(game, *[press(Key.CHAR, ch) for ch in word])


@pytest.mark.parametrize("kind,expected", [
    (EventKind.QUIT, ActionKind.QUIT),
    (EventKind.TICK, ActionKind.TICK),
    (EventKind.RENDER, ActionKind.RENDER),
    (EventKind.INIT, ActionKind.RENDER),
    (EventKind.ERROR, ActionKind.NONE),
    (EventKind.MOUSE, ActionKind.NONE),
])
def test_non_key_events(make_game, kind, expected):
    assert get_action(make_game(word="CRANE"), Event(kind)).kind is expected


def test_key_mapping(make_game):
    game = make_game(word="CRANE")
    assert get_action(game, press(Key.CHAR, "c")) == Action(ActionKind.INPUT_CHAR, "C")
    assert get_action(game, press(Key.CHAR, "1")).kind is ActionKind.NONE
    assert get_action(game, press(Key.BACKSPACE)).kind is ActionKind.REMOVE_CHAR
    assert get_action(game, press(Key.ESC)).kind is ActionKind.QUIT
    assert get_action(game, press(Key.OTHER)).kind is ActionKind.NONE


def test_enter_depends_on_phase(make_game):
    game = make_game()
    assert get_action(game, press(Key.ENTER)).kind is ActionKind.SUBMIT

    type_word(game, "TRAIN")
    feed(game, press(Key.ENTER))
    assert game.phase is Phase.GUESSING
    assert get_action(game, press(Key.ENTER)).kind is ActionKind.SUBMIT

    game.options.difficult = True
    type_word(game, "SLATE")
    feed(game, press(Key.ENTER))
    type_word(game, "BRINE")
    feed(game, press(Key.ENTER))
    assert game.phase is Phase.DIFFICULT_VIOLATION
    assert get_action(game, press(Key.ENTER)).kind is ActionKind.ACKNOWLEDGE_VIOLATION

    feed(game, press(Key.ENTER))
    assert game.phase is Phase.GUESSING
    game.quit()
    assert get_action(game, press(Key.ENTER)).kind is ActionKind.START_NEW_ROUND


def test_full_round_through_key_events(make_game):
    game = make_game(word="CRANE")
    type_word(game, "SLATX")
    feed(game, press(Key.BACKSPACE), press(Key.CHAR, "e"), press(Key.ENTER))
    assert game.tries == 1
    assert game.last_result is CheckResult.WRONG

    type_word(game, "CRANE")
    feed(game, press(Key.ENTER))
    assert game.outcome is Outcome.SUCCESS

    feed(game, press(Key.ENTER))
    assert game.phase is Phase.GUESSING
    assert game.history == []


def test_stray_actions_are_ignored(make_game):
    game = make_game(word="CRANE")
    apply_action(game, Action(ActionKind.ACKNOWLEDGE_VIOLATION))
    apply_action(game, Action(ActionKind.START_NEW_ROUND))
    apply_action(game, Action(ActionKind.TICK))
    apply_action(game, Action(ActionKind.NONE))
    assert game.phase is Phase.GUESSING


def test_escape_quits_the_round(make_game):
    game = make_game(word="CRANE")
    feed(game, press(Key.ESC))
    assert game.outcome is Outcome.QUIT
